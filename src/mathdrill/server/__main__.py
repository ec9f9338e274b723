"""mathdrill JSON-lines server entry point.

Usage: python -m mathdrill.server

Reads JSON requests from stdin (one per line), writes JSON responses and
state notifications to stdout. All logging goes to stderr to keep the
protocol clean.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Optional

from mathdrill.config.settings import Settings

from .handler import ServerHandler
from .protocol import Notification, Request, Response

logger = logging.getLogger("mathdrill.server")


async def main(settings: Optional[Settings] = None) -> None:
    loop = asyncio.get_running_loop()

    def write_line(text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    def write_notification(notification: Notification) -> None:
        write_line(notification.to_json_line())

    handler = ServerHandler(settings=settings, write_notification=write_notification)
    logger.info("ready")

    reader = asyncio.StreamReader()
    protocol = asyncio.StreamReaderProtocol(reader)
    await loop.connect_read_pipe(lambda: protocol, sys.stdin)

    try:
        while True:
            line = await reader.readline()
            if not line:
                break  # stdin closed

            line_str = line.decode("utf-8", errors="replace").strip()
            if not line_str:
                continue

            try:
                request = Request.from_json_line(line_str)
            except ValueError as e:
                write_line(Response(id=0, error=f"Invalid request: {e}").to_json_line())
                continue

            try:
                result = await handler.dispatch(
                    {"method": request.method, "params": request.params}
                )
                resp = Response(id=request.id, result=result)
            except Exception as e:
                logger.error("error handling %s: %s", request.method, e)
                resp = Response(id=request.id, error=str(e))

            write_line(resp.to_json_line())
    finally:
        handler.close()


if __name__ == "__main__":
    logging.basicConfig(stream=sys.stderr, level=logging.INFO, format="mathdrill-server: %(message)s")
    asyncio.run(main())
