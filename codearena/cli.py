"""CLI interface for CodeArena."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from codearena.config import LANGUAGE_IDS, Config
from codearena.executor_factory import create_client
from codearena.orchestrator import ExecutionOrchestrator, NoTestSuiteError
from codearena.problems import ProblemCatalog, TestSuiteRegistry, default_catalog, default_registry, load_catalog
from codearena.sinks import ConsoleSink


def load_sources(config: Config) -> tuple[ProblemCatalog, TestSuiteRegistry]:
    """Return the configured catalog, falling back to the built-in problems."""
    if config.catalog_path:
        return load_catalog(config.catalog_path)
    return default_catalog(), default_registry()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="codearena",
        description="CodeArena: run code against problem test cases on Judge0",
    )
    parser.add_argument("--catalog", type=str, default=None, help="Path to a problem catalog JSON file")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("problems", help="List available problems")

    run_parser = subparsers.add_parser("run", help="Run a solution against a problem's test cases")
    run_parser.add_argument("problem", help="Problem id or 1-based position")
    run_parser.add_argument("--code", required=True, help="Path to the solution source file ('-' for stdin)")
    run_parser.add_argument("--language", choices=sorted(LANGUAGE_IDS), default=None)
    run_parser.add_argument("--judge0-url", type=str, default=None, help="Judge0 API base URL")
    run_parser.add_argument("--judge0-api-key", type=str, default=None, help="Judge0 / RapidAPI key")
    run_parser.add_argument("--json", action="store_true", default=False, help="Print final results as JSON")

    args = parser.parse_args(argv)

    if args.command not in ("problems", "run"):
        parser.print_help()
        sys.exit(1)

    overrides = {"catalog_path": args.catalog}
    if args.command == "run":
        overrides.update(
            language=args.language,
            judge0_url=args.judge0_url,
            judge0_api_key=args.judge0_api_key,
        )

    try:
        config = Config.from_env(**overrides)
        catalog, registry = load_sources(config)
    except (ValueError, KeyError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.command == "problems":
        for i, problem in enumerate(catalog, start=1):
            languages = ", ".join(registry.languages(problem.test_case_file)) or "no tests"
            print(f"{i}. {problem.id}  {problem.title} ({problem.difficulty})  [{languages}]")
        return

    problem = catalog.get(args.problem)
    if problem is None:
        print(f"Error: unknown problem {args.problem!r}", file=sys.stderr)
        sys.exit(1)

    if args.code == "-":
        code = sys.stdin.read()
    else:
        with open(args.code) as f:
            code = f.read()

    orchestrator = ExecutionOrchestrator(create_client(config), registry)
    sink = ConsoleSink()
    try:
        state = asyncio.run(orchestrator.run_problem(problem, config.language, code, sink))
    except NoTestSuiteError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    summary = state.summary()
    if args.json:
        print(json.dumps([r.to_dict() for r in state.snapshot()], indent=2))
    if summary.failed:
        sys.exit(1)
