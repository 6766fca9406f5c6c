"""Map raw Judge0 responses onto per-test results."""

from __future__ import annotations

from codearena.models import (
    FailureKind,
    RawExecutionResponse,
    TestCase,
    TestResult,
    TestStatus,
    TransportFailure,
)

NO_OUTPUT = "No output"


def classify(
    response: RawExecutionResponse | TransportFailure,
    test_case: TestCase,
    index: int,
) -> TestResult:
    """Classify one response for the test case at ``index`` (0-based).

    First match wins: transport failure, exact match on trimmed stdout,
    stderr, compile output, and finally wrong answer.
    """
    test_number = index + 1

    if isinstance(response, TransportFailure):
        return _failed(test_number, FailureKind.API_ERROR, "API Error", error=response.message)

    stdout = response.stdout or ""
    if stdout and stdout.strip() == test_case.expected_output:
        return TestResult(
            test_number=test_number,
            status=TestStatus.PASSED,
            message=f"Test Case {test_number} Passed",
            input=test_case.input,
            expected=test_case.expected_output,
            actual=stdout.strip(),
            time=response.time,
            memory=response.memory,
        )

    if response.stderr:
        return _failed(test_number, FailureKind.RUNTIME_ERROR, "Runtime Error", error=response.stderr)

    if response.compile_output:
        return _failed(
            test_number, FailureKind.COMPILE_ERROR, "Compilation Error", error=response.compile_output
        )

    return _failed(
        test_number,
        FailureKind.WRONG_ANSWER,
        "Wrong Answer",
        input=test_case.input,
        expected=test_case.expected_output,
        actual=stdout.strip() if stdout else NO_OUTPUT,
    )


def _failed(test_number: int, kind: FailureKind, label: str, **fields) -> TestResult:
    return TestResult(
        test_number=test_number,
        status=TestStatus.FAILED,
        message=f"Test Case {test_number} Failed - {label}",
        failure=kind,
        **fields,
    )
