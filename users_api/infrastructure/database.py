"""User Store — MongoDB adapter with per-call deadlines and error mapping.

Invariants:
    - Every request-time call runs inside pymongo.timeout(request_timeout)
    - All PyMongoError exceptions mapped to StoreOperationError (core/errors.py)
    - Documents decoded to User at this boundary; undecodable documents → DECODE error
    - Only name and age are ever written; _id is always store-assigned

Design Decisions:
    - Explicitly constructed store passed to create_app(): no module-level client global
      (ADR: lifecycle owned by the process entry point, see __main__.py)
    - pymongo's native AsyncMongoClient over motor: same driver, first-party asyncio support
    - update_one/delete_one keep "first match" semantics when names collide
      (ADR: tie-breaking intent unspecified, store-selected document preserved)
"""

import asyncio
import logging
from contextlib import contextmanager
from typing import Any, Iterator

import pymongo
from bson import ObjectId
from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from users_api.core.domain_types import User, UserId
from users_api.core.errors import (
    StoreConnectionError, StoreOperation, StoreOperationError,
)
from users_api.core.repository_protocols import UserStore

logger = logging.getLogger(__name__)


def decode_user(doc: dict[str, Any]) -> User:
    """Decode a stored document. Missing name/age fall back to zero values."""
    oid = doc.get("_id")
    if not isinstance(oid, ObjectId):
        raise ValueError(f"_id must be an ObjectId, got {type(oid).__name__}")
    name = doc.get("name", "")
    if not isinstance(name, str):
        raise ValueError(f"name must be a string, got {type(name).__name__}")
    age = doc.get("age", 0)
    if isinstance(age, bool) or not isinstance(age, int):
        raise ValueError(f"age must be an integer, got {type(age).__name__}")
    return User(name=name, age=age, id=UserId(str(oid)))


class MongoUserStore:
    """UserStore backed by a single MongoDB collection."""

    def __init__(
        self,
        client: AsyncMongoClient,
        collection: Any,
        request_timeout: float = 5.0,
        close_timeout: float = 5.0,
    ):
        self._client = client
        self._collection = collection
        self._request_timeout = request_timeout
        self._close_timeout = close_timeout

    @classmethod
    async def connect(
        cls,
        uri: str,
        database: str,
        collection: str,
        connect_timeout: float = 10.0,
        request_timeout: float = 5.0,
        close_timeout: float = 5.0,
    ) -> "MongoUserStore":
        """Create the client and ping it. Raises StoreConnectionError on failure."""
        logger.info("Connecting to MongoDB...")
        try:
            client = AsyncMongoClient(
                uri, serverSelectionTimeoutMS=int(connect_timeout * 1000),
            )
        except PyMongoError as e:
            raise StoreConnectionError(str(e)) from e
        try:
            with pymongo.timeout(connect_timeout):
                await client.admin.command("ping")
        except PyMongoError as e:
            await client.close()
            raise StoreConnectionError(f"ping failed: {e}") from e
        logger.info(
            f"MongoDB connected: {database}.{collection}",
        )
        return cls(
            client, client[database][collection],
            request_timeout=request_timeout, close_timeout=close_timeout,
        )

    @contextmanager
    def _operation(self, operation: StoreOperation) -> Iterator[None]:
        """Bound the enclosed call by the request deadline, map driver errors."""
        try:
            with pymongo.timeout(self._request_timeout):
                yield
        except PyMongoError as e:
            logger.error(
                f"Store {operation.value} failed: {e}",
                extra={"operation": operation.value, "timeout": e.timeout},
            )
            raise StoreOperationError(operation, cause=e, timed_out=e.timeout) from e

    async def list_users(self) -> list[User]:
        with self._operation(StoreOperation.FIND):
            docs = await self._collection.find({}).to_list()
        try:
            return [decode_user(doc) for doc in docs]
        except ValueError as e:
            logger.error(
                f"Store decode failed: {e}",
                extra={"operation": StoreOperation.DECODE.value},
            )
            raise StoreOperationError(StoreOperation.DECODE, cause=e) from e

    async def insert_user(self, user: User) -> UserId:
        with self._operation(StoreOperation.INSERT):
            result = await self._collection.insert_one(
                {"name": user.name, "age": user.age},
            )
        return UserId(str(result.inserted_id))

    async def update_user_by_name(self, name: str, user: User) -> bool:
        with self._operation(StoreOperation.UPDATE):
            result = await self._collection.update_one(
                {"name": name},
                {"$set": {"name": user.name, "age": user.age}},
            )
        return result.matched_count > 0

    async def delete_user_by_name(self, name: str) -> bool:
        with self._operation(StoreOperation.DELETE):
            result = await self._collection.delete_one({"name": name})
        return result.deleted_count > 0

    async def ping(self) -> bool:
        """Check store connectivity (for readiness probes)."""
        try:
            with pymongo.timeout(self._request_timeout):
                await self._client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(f"Store health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close the client within close_timeout. Raises StoreOperationError on failure."""
        try:
            await asyncio.wait_for(self._client.close(), self._close_timeout)
        except (PyMongoError, asyncio.TimeoutError) as e:
            raise StoreOperationError(
                StoreOperation.CLOSE, cause=e,
                timed_out=isinstance(e, asyncio.TimeoutError),
            ) from e
        logger.info("MongoDB disconnected")


def get_user_store(request: Request) -> UserStore:
    """FastAPI dependency for the shared user store."""
    store = getattr(request.app.state, "user_store", None)
    if store is None:
        raise RuntimeError("User store not initialized")
    return store
