"""Flask web application for CodeArena."""

from __future__ import annotations

import asyncio
import json
import queue
import threading

from flask import Flask, Response, jsonify, request, stream_with_context

from codearena.cli import load_sources
from codearena.config import Config
from codearena.executor_factory import create_client
from codearena.orchestrator import ExecutionOrchestrator
from codearena.sinks import QueueSink

app = Flask(__name__)

# Seconds the stream waits for the next snapshot before giving up
STREAM_TIMEOUT = 300


class StreamingOrchestrator(ExecutionOrchestrator):
    """Orchestrator that also forwards its log lines to the event stream."""

    def __init__(self, client, registry, event_queue: queue.Queue):
        super().__init__(client, registry)
        self._queue = event_queue

    def _log(self, message):
        super()._log(message)
        self._queue.put({"type": "log", "message": message})


# Errors raised while reading configuration or the problem catalog
LOAD_ERRORS = (ValueError, KeyError, OSError)


def _load() -> tuple:
    config = Config.from_env()
    catalog, registry = load_sources(config)
    return config, catalog, registry


def _load_error(e: Exception):
    return jsonify({"error": f"Could not load problems: {type(e).__name__}: {e}"}), 500


# ---------------------------------------------------------------------------
# Problem routes
# ---------------------------------------------------------------------------


@app.route("/problems")
def list_problems():
    try:
        _, catalog, registry = _load()
    except LOAD_ERRORS as e:
        return _load_error(e)
    return jsonify([
        {
            "id": p.id,
            "title": p.title,
            "difficulty": p.difficulty,
            "languages": registry.languages(p.test_case_file),
        }
        for p in catalog
    ])


@app.route("/problems/<problem_id>")
def problem_detail(problem_id: str):
    try:
        _, catalog, _ = _load()
    except LOAD_ERRORS as e:
        return _load_error(e)
    problem = catalog.get(problem_id)
    if problem is None:
        return jsonify({"error": "Problem not found"}), 404
    return jsonify({
        "id": problem.id,
        "title": problem.title,
        "difficulty": problem.difficulty,
        "description": problem.description,
        "examples": problem.examples,
        "starterCode": problem.starter_code,
    })


@app.route("/problems/<problem_id>/run", methods=["POST"])
def run_problem(problem_id: str):
    try:
        config, catalog, registry = _load()
    except LOAD_ERRORS as e:
        return _load_error(e)

    problem = catalog.get(problem_id)
    if problem is None:
        return jsonify({"error": "Problem not found"}), 404

    data = request.get_json(silent=True) or {}
    code = data.get("code", "")
    language = data.get("language") or config.language
    if not code.strip():
        return jsonify({"error": "No code provided"}), 400

    suite = registry.get(problem.test_case_file, language)
    if suite is None:
        return jsonify({"error": f"No tests found for {problem.title!r} in {language}"}), 400

    event_queue: queue.Queue = queue.Queue()
    orchestrator = StreamingOrchestrator(create_client(config), registry, event_queue)

    def run_tests():
        try:
            state = asyncio.run(orchestrator.run(language, code, suite, QueueSink(event_queue)))
            summary = state.summary()
            event_queue.put({
                "type": "done",
                "summary": {"passed": summary.passed, "failed": summary.failed, "total": summary.total},
            })
        except Exception as e:
            event_queue.put({"type": "error", "message": f"{type(e).__name__}: {e}"})

    thread = threading.Thread(target=run_tests, daemon=True)
    thread.start()

    def generate():
        try:
            while True:
                try:
                    msg = event_queue.get(timeout=STREAM_TIMEOUT)
                except queue.Empty:
                    yield f"data: {json.dumps({'type': 'error', 'message': 'Run timed out'})}\n\n"
                    break
                yield f"data: {json.dumps(msg)}\n\n"
                if msg["type"] in ("done", "error"):
                    break
        finally:
            # Runs on disconnect too; no further submissions once nobody is listening
            orchestrator.cancel()

    return Response(
        stream_with_context(generate()),
        mimetype="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
