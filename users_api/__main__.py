"""Process Entry Point — load settings, connect the store, serve until signalled.

Invariants:
    - Exit 1 if settings are invalid (MONGO_URI missing) or the initial connect/ping fails
    - Exit 0 after graceful shutdown on SIGINT/SIGTERM
    - Store created here, exactly once, and handed to create_app()

Design Decisions:
    - uvicorn.Server over uvicorn.run(): the store must be connected on the same
      event loop that serves requests, and startup failures need exit code 1
    - SIGTERM routed to KeyboardInterrupt: uvicorn re-raises captured signals after
      its own graceful shutdown, and both signals should end in a clean exit 0
"""

import asyncio
import logging
import signal
import sys

import uvicorn

from users_api.config import Settings, get_settings
from users_api.core.errors import ConfigurationError, StoreConnectionError
from users_api.infrastructure.database import MongoUserStore
from users_api.infrastructure.observability import setup_logging
from users_api.main import create_app

logger = logging.getLogger("users_api")


async def serve(settings: Settings) -> int:
    """Connect, serve, and return the process exit code."""
    try:
        store = await MongoUserStore.connect(
            settings.mongo_uri,
            settings.mongo_database,
            settings.mongo_collection,
            connect_timeout=settings.connect_timeout_seconds,
            request_timeout=settings.request_timeout_seconds,
            close_timeout=settings.shutdown_timeout_seconds,
        )
    except StoreConnectionError as e:
        logger.critical(e.message)
        return 1

    server = uvicorn.Server(uvicorn.Config(
        create_app(store),
        host=settings.host,
        port=settings.port,
        log_config=None,
        timeout_graceful_shutdown=int(settings.shutdown_timeout_seconds),
    ))
    logger.info(f"Server running on http://localhost:{settings.port}")
    await server.serve()
    if not server.started:
        logger.critical("Server failed to start")
        return 1
    logger.info("Server stopped gracefully")
    return 0


def main() -> None:
    setup_logging()
    try:
        settings = get_settings()
    except ConfigurationError as e:
        logger.critical(e.message)
        sys.exit(1)
    setup_logging(settings.log_level, settings.log_format)

    signal.signal(signal.SIGTERM, signal.default_int_handler)
    try:
        code = asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Server stopped gracefully")
        code = 0
    sys.exit(code)


if __name__ == "__main__":
    main()
