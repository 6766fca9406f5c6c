"""Data models for CodeArena."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace


class TestStatus(enum.Enum):
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"


class FailureKind(enum.Enum):
    API_ERROR = "api-error"
    RUNTIME_ERROR = "runtime-error"
    COMPILE_ERROR = "compile-error"
    WRONG_ANSWER = "wrong-answer"


@dataclass(frozen=True)
class TestCase:
    input: str
    expected_output: str


@dataclass(frozen=True)
class TestSuite:
    harness_code: str
    test_cases: tuple[TestCase, ...]

    def combine(self, user_code: str) -> str:
        """Append the harness to the user's code."""
        return f"{user_code}\n{self.harness_code}"


@dataclass(frozen=True)
class Problem:
    id: str
    title: str
    difficulty: str
    description: str
    test_case_file: str
    starter_code: dict[str, str] = field(default_factory=dict)
    examples: list[dict[str, str]] = field(default_factory=list)


@dataclass(frozen=True)
class RawExecutionResponse:
    stdout: str | None = None
    stderr: str | None = None
    compile_output: str | None = None
    time: str | None = None
    memory: int | None = None
    status: str | None = None  # Judge0 status description, informational only
    token: str | None = None

    @classmethod
    def from_json(cls, data: dict) -> RawExecutionResponse:
        """Build a response from Judge0 JSON; raises ValueError on mistyped fields."""
        text: dict[str, str | None] = {}
        for key in ("stdout", "stderr", "compile_output", "time", "token"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{key} must be a string, got {type(value).__name__}")
            text[key] = value
        memory = data.get("memory")
        if isinstance(memory, bool):
            raise ValueError("memory must be an integer, got bool")
        status = data.get("status")
        return cls(
            memory=int(memory) if memory is not None else None,
            status=status.get("description") if isinstance(status, dict) else None,
            **text,
        )


@dataclass(frozen=True)
class TransportFailure:
    """The submission never produced a response."""

    message: str


@dataclass(frozen=True)
class TestResult:
    test_number: int
    status: TestStatus
    message: str
    failure: FailureKind | None = None
    input: str | None = None
    expected: str | None = None
    actual: str | None = None
    time: str | None = None
    memory: int | None = None
    error: str | None = None

    @classmethod
    def pending(cls, test_number: int, message: str = "Running...") -> TestResult:
        return cls(test_number=test_number, status=TestStatus.RUNNING, message=message)

    def to_dict(self) -> dict:
        data: dict = {
            "testNumber": self.test_number,
            "status": self.status.value,
            "message": self.message,
        }
        if self.failure is not None:
            data["failure"] = self.failure.value
        for key in ("input", "expected", "actual", "time", "memory", "error"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass(frozen=True)
class RunSummary:
    passed: int
    failed: int
    total: int

    def __str__(self) -> str:
        return f"✓ {self.passed} Passed  ✗ {self.failed} Failed  {self.passed + self.failed} / {self.total} Cases"


class RunState:
    """Ordered per-test-case results for one run, one slot per test case."""

    def __init__(self, size: int) -> None:
        self._slots: list[TestResult] = [TestResult.pending(i + 1) for i in range(size)]

    def __len__(self) -> int:
        return len(self._slots)

    def __getitem__(self, index: int) -> TestResult:
        return self._slots[index]

    def resolve(self, index: int, result: TestResult) -> None:
        if result.test_number != index + 1:
            raise ValueError(f"Result for test {result.test_number} cannot fill slot {index + 1}")
        self._slots[index] = result
        # Slots after the resolved one are now queued behind it
        for later in range(index + 1, len(self._slots)):
            if self._slots[later].status is TestStatus.RUNNING:
                self._slots[later] = replace(self._slots[later], message="Waiting...")

    def snapshot(self) -> tuple[TestResult, ...]:
        return tuple(self._slots)

    def summary(self) -> RunSummary:
        passed = sum(1 for r in self._slots if r.status is TestStatus.PASSED)
        failed = sum(1 for r in self._slots if r.status is TestStatus.FAILED)
        return RunSummary(passed=passed, failed=failed, total=len(self._slots))

    @property
    def finished(self) -> bool:
        return all(r.status is not TestStatus.RUNNING for r in self._slots)
