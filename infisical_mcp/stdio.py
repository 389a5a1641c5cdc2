"""stdio transport: newline-delimited JSON-RPC on stdin/stdout.

Messages are handled one at a time in arrival order. Logs go to stderr
so stdout carries protocol frames only.
"""

import asyncio
import io
import json
import logging
import sys
from typing import TextIO

from pydantic import ValidationError

from . import __version__
from .api.deps import build_dispatcher
from .config import get_settings
from .logging_setup import configure_logging, init_sentry
from .mcp import PARSE_ERROR, jsonrpc_error
from .mcp.dispatcher import McpDispatcher

logger = logging.getLogger(__name__)


def _write(writer: TextIO, payload: dict | list) -> None:
    writer.write(json.dumps(payload, separators=(",", ":")) + "\n")
    writer.flush()


async def run_stdio(
    dispatcher: McpDispatcher,
    reader: TextIO | None = None,
    writer: TextIO | None = None,
) -> int:
    """Serve requests until EOF on ``reader``.

    Returns:
        Number of lines processed
    """
    reader = reader or sys.stdin
    writer = writer or sys.stdout
    if isinstance(reader, io.TextIOWrapper):
        # Undecodable bytes become U+FFFD and fail as a JSON parse error
        reader.reconfigure(errors="replace")
    processed = 0

    while True:
        line = await asyncio.to_thread(reader.readline)
        if not line:
            break
        line = line.strip()
        if not line:
            continue
        processed += 1

        try:
            body = json.loads(line)
        except json.JSONDecodeError:
            logger.warning("Received a line that is not valid JSON")
            _write(writer, jsonrpc_error(None, PARSE_ERROR, "Parse error"))
            continue

        response = await dispatcher.handle_message(body)
        if response is not None:
            _write(writer, response)

    logger.info(f"stdin closed after {processed} message(s)")
    return processed


async def serve() -> None:
    settings = get_settings()
    dispatcher = build_dispatcher(settings)
    logger.info(f"Infisical MCP Server v{__version__} running on stdio")
    try:
        await run_stdio(dispatcher)
    finally:
        await dispatcher.client.aclose()


def main():
    """Run the stdio server."""
    try:
        settings = get_settings()
    except ValidationError as e:
        configure_logging()
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_logging(settings.log_level)
    init_sentry(settings.sentry_dsn, settings.environment)
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
