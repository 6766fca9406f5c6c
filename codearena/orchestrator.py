"""Sequential test execution against the judging service."""

from __future__ import annotations

import sys
from collections.abc import AsyncIterator

from codearena.classifier import classify
from codearena.executor_base import SubmissionClient
from codearena.models import Problem, RunState, TestResult, TestSuite, TransportFailure
from codearena.problems import TestSuiteRegistry, default_registry
from codearena.sinks import ProgressSink


class NoTestSuiteError(Exception):
    """No test suite exists for the requested problem and language."""


class RunInProgressError(Exception):
    """The orchestrator is already driving a run."""


class ExecutionOrchestrator:
    """Runs a test suite one submission at a time and publishes ordered snapshots.

    One run may be in flight per instance; a second ``run`` call while the
    first is still awaiting the judging service raises ``RunInProgressError``.
    ``cancel`` stops a run before its next submission, leaving the remaining
    slots unresolved.
    """

    def __init__(self, client: SubmissionClient, registry: TestSuiteRegistry | None = None) -> None:
        self._client = client
        self.registry = registry or default_registry()
        self.state: RunState | None = None
        self._running = False
        self._cancelled = False

    @property
    def running(self) -> bool:
        return self._running

    async def run_problem(
        self,
        problem: Problem,
        language: str,
        user_code: str,
        sink: ProgressSink,
    ) -> RunState:
        suite = self.registry.get(problem.test_case_file, language)
        if suite is None:
            raise NoTestSuiteError(f"No tests found for {problem.title!r} in {language}")
        return await self.run(language, user_code, suite, sink)

    async def run(
        self,
        language: str,
        user_code: str,
        test_suite: TestSuite | None,
        sink: ProgressSink,
    ) -> RunState:
        if test_suite is None:
            raise NoTestSuiteError(f"No tests found for {language}")
        self._claim()
        try:
            state = RunState(len(test_suite.test_cases))
            self.state = state
            self._log(f"Running {len(state)} test case(s) in {language}")
            sink.publish(state.snapshot())

            async for result in self._drive(language, user_code, test_suite):
                state.resolve(result.test_number - 1, result)
                sink.publish(state.snapshot())

            if self._cancelled:
                summary = state.summary()
                self._log(f"Run cancelled after {summary.passed + summary.failed}/{summary.total} test case(s)")
            else:
                self._log(str(state.summary()))
            return state
        finally:
            self._running = False

    async def iter_results(
        self,
        language: str,
        user_code: str,
        test_suite: TestSuite,
    ) -> AsyncIterator[TestResult]:
        """Yield one classified result per test case, in order.

        Holds the same in-flight slot as ``run``: starting to iterate while a
        run is active raises ``RunInProgressError``.
        """
        self._claim()
        try:
            async for result in self._drive(language, user_code, test_suite):
                yield result
        finally:
            self._running = False

    def cancel(self) -> None:
        """Stop issuing submissions; the in-flight one still completes."""
        self._cancelled = True

    def _claim(self) -> None:
        if self._running:
            raise RunInProgressError("A run is already in progress")
        self._running = True
        self._cancelled = False

    async def _drive(
        self,
        language: str,
        user_code: str,
        test_suite: TestSuite,
    ) -> AsyncIterator[TestResult]:
        # A failure for one test case becomes an api-error result; the loop moves on
        program = test_suite.combine(user_code)
        total = len(test_suite.test_cases)
        for index, test_case in enumerate(test_suite.test_cases):
            if self._cancelled:
                return
            self._log(f"Submitting test case {index + 1}/{total}...")
            try:
                response = await self._client.submit(language, program, test_case.input)
                result = classify(response, test_case, index)
            except Exception as e:
                self._log(f"Submission {index + 1} failed: {type(e).__name__}: {e}")
                result = classify(TransportFailure(str(e) or type(e).__name__), test_case, index)
            yield result

    def _log(self, message: str) -> None:
        print(message, file=sys.stderr)
