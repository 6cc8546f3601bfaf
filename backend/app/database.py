"""
Catalog API — Document Store Management
=========================================

What:  Async MongoDB client wrapper, startup connectivity check, and the
       FastAPI dependencies that hand collections to route handlers.
Why:   Centralizes all store connection logic in one place.
How:   A single DocumentStore is created by the lifespan handler, kept on
       `app.state.store`, and injected per request via Depends(). Nothing
       in this module holds a client at import time.
When:  Client is created once at startup and closed once at shutdown;
       collections are looked up per request (cheap, no I/O).

Connection Strategy:
    timeoutMS:                 Bounds every operation issued by a handler
    serverSelectionTimeoutMS:  How long to wait for a reachable server
    tz_aware=True:             Datetimes decoded from BSON carry UTC tzinfo
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError
from tenacity import (
    RetryError,
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.config import Settings, settings
from app.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class DocumentStore:
    """
    Process-wide handle to the MongoDB database.

    Wraps an AsyncMongoClient. The driver maintains its own connection
    pool, so a single instance is shared by all concurrent requests.
    """

    def __init__(self, config: Settings, client: Optional[AsyncMongoClient] = None):
        self.config = config
        if client is None:
            client = AsyncMongoClient(
                config.mongodb_uri,
                timeoutMS=config.mongodb_timeout_ms,
                serverSelectionTimeoutMS=config.mongodb_server_selection_timeout_ms,
                tz_aware=True,
                appname="catalog-api",
            )
        self.client = client
        self.db = self.client[config.mongodb_database]

    def collection(self, name: str) -> AsyncCollection:
        return self.db[name]

    async def ping(self) -> None:
        """Round-trips a `ping` command; raises PyMongoError on failure."""
        await self.client.admin.command("ping")

    async def connect(self) -> None:
        """
        Verify connectivity before the app accepts traffic.

        The ping is attempted up to `startup_connect_attempts` times with
        exponential backoff. When every attempt fails, DatabaseError is
        raised and the lifespan aborts startup.
        """
        retrying_ping = retry(
            retry=retry_if_exception_type(PyMongoError),
            stop=stop_after_attempt(self.config.startup_connect_attempts),
            wait=wait_exponential(
                min=self.config.startup_retry_min_wait,
                max=self.config.startup_retry_max_wait,
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
        )(self.ping)

        try:
            await retrying_ping()
        except RetryError as e:
            cause = e.last_attempt.exception() if e.last_attempt else None
            logger.error(
                "Could not reach MongoDB after %d attempts: %s",
                self.config.startup_connect_attempts,
                cause,
            )
            raise DatabaseError(
                message="Could not connect to the document store",
                context={
                    "database": self.config.mongodb_database,
                    "attempts": self.config.startup_connect_attempts,
                    "error_type": type(cause).__name__,
                },
            ) from cause

        logger.info("Connected to MongoDB database '%s'", self.config.mongodb_database)

    async def close(self) -> None:
        """Closes all pooled connections."""
        await self.client.close()
        logger.info("MongoDB client closed")


# ── Request Dependencies ──────────────────────────────────────────────────
def get_store(request: Request) -> DocumentStore:
    """
    FastAPI dependency returning the DocumentStore created by the lifespan.

    Example usage in a route:
        @router.get("/api/items")
        async def list_items(collection=Depends(get_items_collection)):
            ...
    """
    return request.app.state.store


def get_items_collection(store: DocumentStore = Depends(get_store)) -> AsyncCollection:
    return store.collection(settings.items_collection)


def get_articles_collection(store: DocumentStore = Depends(get_store)) -> AsyncCollection:
    return store.collection(settings.articles_collection)
