"""Problem catalog and the test suites that go with each problem."""

from __future__ import annotations

import json

from codearena.models import Problem, TestCase, TestSuite


class TestSuiteRegistry:
    """Maps a problem's test case file key and a language to a TestSuite."""

    def __init__(self, suites: dict[str, dict[str, TestSuite]] | None = None) -> None:
        self._suites = suites or {}

    def get(self, test_case_file: str, language: str) -> TestSuite | None:
        return self._suites.get(test_case_file, {}).get(language)

    def languages(self, test_case_file: str) -> list[str]:
        return sorted(self._suites.get(test_case_file, {}))

    def register(self, test_case_file: str, language: str, suite: TestSuite) -> None:
        self._suites.setdefault(test_case_file, {})[language] = suite


class ProblemCatalog:
    def __init__(self, problems: list[Problem]) -> None:
        self._problems = list(problems)

    def __iter__(self):
        return iter(self._problems)

    def __len__(self) -> int:
        return len(self._problems)

    def get(self, key: str) -> Problem | None:
        """Look a problem up by id, or by 1-based position."""
        for problem in self._problems:
            if problem.id == key:
                return problem
        if key.isdigit() and 1 <= int(key) <= len(self._problems):
            return self._problems[int(key) - 1]
        return None


# ---------------------------------------------------------------------------
# Built-in problems
# ---------------------------------------------------------------------------

_SUM_CASES = (
    TestCase(input="2 3", expected_output="5"),
    TestCase(input="-4 10", expected_output="6"),
    TestCase(input="0 0", expected_output="0"),
    TestCase(input="1000000 2500000", expected_output="3500000"),
)

_MULTIPLY_CASES = (
    TestCase(input="3 4", expected_output="12"),
    TestCase(input="-2 8", expected_output="-16"),
    TestCase(input="0 99", expected_output="0"),
    TestCase(input="12345 1000", expected_output="12345000"),
)

_PY_HARNESS = """
import sys

a, b = map(int, sys.stdin.read().split())
print({func}(a, b))
"""

_JS_HARNESS = """
const [a, b] = require('fs').readFileSync(0, 'utf8').trim().split(/\\s+/).map(Number);
console.log({func}(a, b));
"""

_CPP_HARNESS = """
int main() {{
    long long a, b;
    std::cin >> a >> b;
    std::cout << {func}(a, b) << std::endl;
    return 0;
}}
"""


def _suites(func: str, cases: tuple[TestCase, ...]) -> dict[str, TestSuite]:
    return {
        "python": TestSuite(harness_code=_PY_HARNESS.format(func=func), test_cases=cases),
        "javascript": TestSuite(harness_code=_JS_HARNESS.format(func=func), test_cases=cases),
        "cpp": TestSuite(harness_code=_CPP_HARNESS.format(func=func), test_cases=cases),
    }


def _starter(func: str) -> dict[str, str]:
    return {
        "python": f"def {func}(a, b):\n    # Write your code here\n    pass\n",
        "javascript": f"function {func}(a, b) {{\n  // Write your code here\n}}\n",
        "cpp": (
            "#include <iostream>\n\n"
            f"long long {func}(long long a, long long b) {{\n"
            "    // Write your code here\n"
            "    return 0;\n"
            "}\n"
        ),
    }


PROBLEMS: list[Problem] = [
    Problem(
        id="sum-of-two-numbers",
        title="Sum of Two Numbers",
        difficulty="Easy",
        description="Given two integers a and b, return their sum.",
        test_case_file="sumOfTwoNumbers",
        starter_code=_starter("sumOfTwoNumbers"),
        examples=[
            {"input": "a = 2, b = 3", "output": "5"},
            {"input": "a = -4, b = 10", "output": "6", "explanation": "-4 + 10 = 6"},
        ],
    ),
    Problem(
        id="multiply-numbers",
        title="Multiply Numbers",
        difficulty="Easy",
        description="Given two integers a and b, return their product.",
        test_case_file="multiplyNumbers",
        starter_code=_starter("multiplyNumbers"),
        examples=[
            {"input": "a = 3, b = 4", "output": "12"},
            {"input": "a = -2, b = 8", "output": "-16"},
        ],
    ),
]


def default_catalog() -> ProblemCatalog:
    return ProblemCatalog(PROBLEMS)


def default_registry() -> TestSuiteRegistry:
    return TestSuiteRegistry({
        "sumOfTwoNumbers": _suites("sumOfTwoNumbers", _SUM_CASES),
        "multiplyNumbers": _suites("multiplyNumbers", _MULTIPLY_CASES),
    })


# ---------------------------------------------------------------------------
# JSON catalogs
# ---------------------------------------------------------------------------


def load_catalog(path: str) -> tuple[ProblemCatalog, TestSuiteRegistry]:
    """Load problems and their test suites from a JSON file.

    Keys may be snake_case or camelCase (``expectedOutput``, ``testCode``,
    ``starterCode``, ``testCaseFile``).
    """
    with open(path) as f:
        data = json.load(f)

    problems = [
        Problem(
            id=str(p["id"]),
            title=p["title"],
            difficulty=p.get("difficulty", ""),
            description=p.get("description", ""),
            test_case_file=_pick(p, "test_case_file", "testCaseFile"),
            starter_code=_pick(p, "starter_code", "starterCode", default={}),
            examples=p.get("examples", []),
        )
        for p in data.get("problems", [])
    ]

    registry = TestSuiteRegistry()
    for key, by_language in _pick(data, "test_suites", "testSuites", default={}).items():
        for language, suite in by_language.items():
            cases = tuple(
                TestCase(input=tc["input"], expected_output=_pick(tc, "expected_output", "expectedOutput"))
                for tc in _pick(suite, "test_cases", "testCases", default=[])
            )
            harness = _pick(suite, "harness_code", "testCode", default="")
            registry.register(key, language, TestSuite(harness_code=harness, test_cases=cases))
    return ProblemCatalog(problems), registry


def _pick(data: dict, *keys: str, default=None):
    for key in keys:
        if key in data:
            return data[key]
    if default is None:
        raise KeyError(keys[0])
    return default
