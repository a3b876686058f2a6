"""AdaptQuiz JSON-lines server entry point.

Usage: python -m adaptquiz.server

Reads JSON requests from stdin (one per line), writes JSON responses to stdout.
All logging goes to stderr to keep the protocol clean.
"""

from __future__ import annotations

import json
import logging
import sys

from adaptquiz.config.settings import Settings

from .handler import ServerHandler
from .protocol import Notification, Request, Response

logger = logging.getLogger("adaptquiz.server")


def write_line(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def handle_line(handler: ServerHandler, line: str) -> Response:
    try:
        msg = json.loads(line)
    except json.JSONDecodeError as e:
        return Response(id=0, error=f"Invalid JSON: {e}")

    try:
        req = Request.from_dict(msg)
    except ValueError as e:
        return Response(id=0, error=str(e))

    try:
        result = handler.dispatch({"method": req.method, "params": req.params})
        return Response(id=req.id, result=result)
    except Exception as e:
        logger.error("request %s (%s) failed: %s", req.id, req.method, e)
        return Response(id=req.id, error=str(e))


def create_handler(settings: Settings, write_notification) -> ServerHandler:
    """Build the handler and load the configured catalog if it can be loaded."""
    handler = ServerHandler(settings=settings, write_notification=write_notification)
    try:
        handler.dispatch({"method": "loadCatalog", "params": {}})
    except ValueError as e:
        logger.error("default catalog %r not loaded: %s", settings.catalog, e)
    return handler


def main() -> None:
    settings = Settings.load()
    logging.basicConfig(
        stream=sys.stderr,
        level=settings.log_level.upper(),
        format="adaptquiz-server: %(levelname)s %(name)s: %(message)s",
    )

    def write_notification(notification: Notification) -> None:
        write_line(notification.to_json_line())

    handler = create_handler(settings, write_notification)

    print("adaptquiz-server: ready", file=sys.stderr)

    for line in sys.stdin:
        line = line.strip()
        if not line:
            continue
        write_line(handle_line(handler, line).to_json_line())


if __name__ == "__main__":
    main()
