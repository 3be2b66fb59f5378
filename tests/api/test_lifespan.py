"""Lifespan — store closed on shutdown, close failures logged not raised."""

import logging

from users_api.core.errors import StoreOperation
from users_api.main import create_app, lifespan


async def test_shutdown_closes_store(store):
    app = create_app(store)

    async with lifespan(app):
        assert not store.closed

    assert store.closed


async def test_close_failure_is_logged_and_shutdown_continues(store, caplog):
    store.fail_on(StoreOperation.CLOSE, timed_out=True)
    app = create_app(store)

    with caplog.at_level(logging.ERROR):
        async with lifespan(app):
            pass

    assert "Store close failed" in caplog.text


async def test_shutdown_without_store_is_noop():
    app = create_app(None)
    async with lifespan(app):
        pass
