"""TeddyTutor JSON-lines server entry point.

Usage: python -m teddytutor.server

Reads JSON requests from stdin (one per line), writes JSON responses to stdout.
All logging goes to stderr to keep the protocol clean.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys

from teddytutor.config.settings import Settings

from .handler import ServerHandler
from .protocol import Response

logger = logging.getLogger("teddytutor.server")


async def handle_line(handler: ServerHandler, line_str: str) -> Response:
    try:
        msg = json.loads(line_str)
    except json.JSONDecodeError as e:
        return Response.failure(0, f"Invalid JSON: {e}")
    if not isinstance(msg, dict):
        return Response.failure(0, "Request must be a JSON object")

    req_id = msg.get("id", 0)
    try:
        result = await handler.dispatch(msg)
        return Response(id=req_id, result=result)
    except Exception as e:
        logger.error("error handling request %s: %s", req_id, e)
        return Response.failure(req_id, e)


async def main() -> None:
    settings = Settings.load()
    logging.basicConfig(
        stream=sys.stderr,
        level=settings.log_level.upper(),
        format="%(name)s: %(levelname)s: %(message)s",
    )

    loop = asyncio.get_event_loop()

    def write_line(text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    handler = ServerHandler(settings=settings)
    logger.info("ready")

    reader = asyncio.StreamReader()
    protocol = asyncio.StreamReaderProtocol(reader)
    await loop.connect_read_pipe(lambda: protocol, sys.stdin)

    while True:
        line = await reader.readline()
        if not line:
            break  # stdin closed

        line_str = line.decode("utf-8", errors="replace").strip()
        if not line_str:
            continue

        resp = await handle_line(handler, line_str)
        write_line(resp.to_json_line())


if __name__ == "__main__":
    asyncio.run(main())
