"""Tests for result classification."""

from __future__ import annotations

from codearena.classifier import NO_OUTPUT, classify
from codearena.models import FailureKind, RawExecutionResponse, TestCase, TestStatus, TransportFailure

CASE = TestCase(input="2 3", expected_output="5")


class TestPassed:
    def test_exact_match(self):
        result = classify(RawExecutionResponse(stdout="5", time="0.01", memory=3200), CASE, 0)
        assert result.status is TestStatus.PASSED
        assert result.failure is None
        assert result.test_number == 1
        assert result.message == "Test Case 1 Passed"
        assert result.actual == "5"
        assert result.expected == "5"
        assert result.input == "2 3"
        assert result.time == "0.01"
        assert result.memory == 3200

    def test_surrounding_whitespace_is_trimmed(self):
        result = classify(RawExecutionResponse(stdout=" 42\n"), TestCase(input="", expected_output="42"), 3)
        assert result.status is TestStatus.PASSED
        assert result.actual == "42"
        assert result.test_number == 4

    def test_internal_whitespace_is_significant(self):
        result = classify(RawExecutionResponse(stdout="42 "), TestCase(input="", expected_output="4 2"), 0)
        assert result.status is TestStatus.FAILED
        assert result.failure is FailureKind.WRONG_ANSWER
        assert result.actual == "42"

    def test_pass_wins_over_stderr(self):
        result = classify(RawExecutionResponse(stdout="5\n", stderr="DeprecationWarning"), CASE, 0)
        assert result.status is TestStatus.PASSED


class TestFailures:
    def test_transport_failure(self):
        result = classify(TransportFailure("Request failed with status code 429"), CASE, 1)
        assert result.status is TestStatus.FAILED
        assert result.failure is FailureKind.API_ERROR
        assert result.message == "Test Case 2 Failed - API Error"
        assert result.error == "Request failed with status code 429"
        assert result.input is None
        assert result.expected is None
        assert result.actual is None

    def test_runtime_error_beats_wrong_answer(self):
        result = classify(RawExecutionResponse(stdout="X", stderr="Traceback: boom"), CASE, 0)
        assert result.failure is FailureKind.RUNTIME_ERROR
        assert result.message == "Test Case 1 Failed - Runtime Error"
        assert result.error == "Traceback: boom"
        assert result.input is None
        assert result.actual is None

    def test_runtime_error_beats_compile_error(self):
        result = classify(RawExecutionResponse(stderr="err", compile_output="warning"), CASE, 0)
        assert result.failure is FailureKind.RUNTIME_ERROR

    def test_compile_error(self):
        result = classify(RawExecutionResponse(compile_output="main.cpp:1: error"), CASE, 0)
        assert result.failure is FailureKind.COMPILE_ERROR
        assert result.message == "Test Case 1 Failed - Compilation Error"
        assert result.error == "main.cpp:1: error"

    def test_wrong_answer(self):
        result = classify(RawExecutionResponse(stdout="6\n"), CASE, 0)
        assert result.failure is FailureKind.WRONG_ANSWER
        assert result.message == "Test Case 1 Failed - Wrong Answer"
        assert result.input == "2 3"
        assert result.expected == "5"
        assert result.actual == "6"
        assert result.error is None

    def test_wrong_answer_without_output(self):
        result = classify(RawExecutionResponse(), CASE, 0)
        assert result.failure is FailureKind.WRONG_ANSWER
        assert result.actual == NO_OUTPUT

    def test_empty_strings_fall_through_to_wrong_answer(self):
        result = classify(RawExecutionResponse(stdout="", stderr="", compile_output=""), CASE, 0)
        assert result.failure is FailureKind.WRONG_ANSWER
        assert result.actual == NO_OUTPUT


def test_classify_is_pure():
    response = RawExecutionResponse(stdout="7", stderr="oops")
    assert classify(response, CASE, 2) == classify(response, CASE, 2)
