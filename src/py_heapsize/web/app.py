"""Flask application factory for the heap-size endpoint.

Read failures map onto HTTP status codes: a process that does not
exist is a 404, one we may not inspect is a 403, and any other read
error is a 500.

The probe log is a ring of the last ``LOG_CAPACITY`` entries, readable
at ``GET /api/log`` (optionally ``?level=ERROR``).
"""

from __future__ import annotations

from flask import Flask, Response, jsonify, request

from py_heapsize.cli import format_size
from py_heapsize.config import HeapSizeConfig
from py_heapsize.heap import read_heap_size
from py_heapsize.logging import Logger, LogLevel
from py_heapsize.procfs import ProcFilesystem

_HTTP_FORBIDDEN = 403
_HTTP_NOT_FOUND = 404
_HTTP_SERVER_ERROR = 500
_HTTP_BAD_REQUEST = 400

LOG_CAPACITY = 256


def _error_status(exc: OSError) -> int:
    if isinstance(exc, FileNotFoundError):
        return _HTTP_NOT_FOUND
    if isinstance(exc, PermissionError):
        return _HTTP_FORBIDDEN
    return _HTTP_SERVER_ERROR


def create_app(procfs: ProcFilesystem | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        procfs: Where to read maps listings from.  Defaults to the
            proc root named by the environment.

    Returns:
        A configured Flask application ready to serve.

    """
    reader = procfs if procfs is not None else ProcFilesystem.from_config(
        HeapSizeConfig.from_environ()
    )
    logger = Logger(max_entries=LOG_CAPACITY)

    app = Flask(__name__)
    app.config["HEAP_LOGGER"] = logger

    def _probe(pid: int | None) -> tuple[Response, int] | Response:
        try:
            total = read_heap_size(pid, procfs=reader, logger=logger)
        except OSError as exc:
            return jsonify({"error": str(exc)}), _error_status(exc)
        return jsonify({"pid": pid, "heap_bytes": total, "human": format_size(total)})

    @app.route("/api/heap")
    def heap_self() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Return the footprint of the serving process."""
        return _probe(None)

    @app.route("/api/heap/<int:pid>")
    def heap_pid(pid: int) -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Return the footprint of process *pid*."""
        return _probe(pid)

    @app.route("/api/log")
    def probe_log() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Return the retained probe log, oldest first."""
        level_name = request.args.get("level")
        min_level = None
        if level_name is not None:
            try:
                min_level = LogLevel[level_name.upper()]
            except KeyError:
                return jsonify({"error": f"Unknown level: {level_name}"}), _HTTP_BAD_REQUEST
        entries = [
            {"level": e.level.name, "source": e.source, "pid": e.pid, "message": e.message}
            for e in logger.filter(min_level=min_level)
        ]
        return jsonify({"entries": entries, "dropped": logger.dropped})

    return app


def main() -> None:
    """Run the development server.

    This is the ``py-heapsize-web`` console entry point.
    """
    app = create_app()
    app.run(port=8080)
