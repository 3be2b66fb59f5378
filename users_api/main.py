"""Users API — FastAPI application factory.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UsersApiError → structured JSON responses
    - The user store is injected by the caller and lives on app.state, never a module global
    - Store closed on lifespan shutdown, after uvicorn has drained in-flight requests

Design Decisions:
    - Factory over module-level app: the store must exist (connected) before the app
      is built, and tests inject an in-memory store (ADR: explicit dependency injection)
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Close failures logged, never raised: shutdown must not hang or crash
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from users_api.api.error_handlers import register_error_handlers
from users_api.api.routes import health, users
from users_api.core.errors import StoreOperationError
from users_api.core.repository_protocols import UserStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    logger.info("Users API started")
    yield
    logger.info("Users API shutting down")
    store: UserStore | None = getattr(app.state, "user_store", None)
    if store is None:
        return
    try:
        await store.close()
    except StoreOperationError as e:
        logger.error(
            f"Store close failed: {e.cause}",
            extra={"operation": e.operation.value, "timeout": e.timed_out},
        )


def create_app(store: UserStore | None = None) -> FastAPI:
    """Build the FastAPI app around an already-constructed user store."""
    app = FastAPI(title="Users API", version="1.0.0", lifespan=lifespan)
    app.state.user_store = store

    # Routes — explicit registration
    app.include_router(health.router)
    app.include_router(users.router)

    register_error_handlers(app)
    return app
