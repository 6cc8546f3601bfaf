"""
Catalog API — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── mock_collection:      AsyncMock collection for service unit tests
    ├── items_collection:     In-memory collection backing /api/items
    ├── articles_collection:  In-memory collection backing /article(s)
    ├── mock_store:           DocumentStore stand-in for /health
    ├── sample_item_payload:  Valid item creation body
    └── test_client:          HTTPX AsyncClient wired to the FastAPI app
"""

import os
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run before app.config is imported anywhere
os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["MONGODB_DATABASE"] = "catalog_test"
os.environ["LOG_LEVEL"] = "WARNING"


# ══════════════════════════════════════════════════════════════════════════
# In-Memory Collection
# ══════════════════════════════════════════════════════════════════════════

class InMemoryCursor:
    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = documents

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        if length is None:
            return list(self._documents)
        return self._documents[:length]


class InMemoryCollection:
    """
    Test double for the subset of the async collection API the service uses:
    equality filters, single or compound sort, limit, and _id addressing.
    """

    def __init__(self):
        self.documents: Dict[ObjectId, Dict[str, Any]] = {}

    async def insert_one(self, document: Dict[str, Any]):
        oid = ObjectId()
        document["_id"] = oid
        self.documents[oid] = dict(document)
        return SimpleNamespace(inserted_id=oid, acknowledged=True)

    async def find_one(self, query: Dict[str, Any]):
        stored = self.documents.get(query["_id"])
        return dict(stored) if stored is not None else None

    async def update_one(self, query: Dict[str, Any], update: Dict[str, Any]):
        stored = self.documents.get(query["_id"])
        if stored is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        stored.update(update["$set"])
        return SimpleNamespace(matched_count=1, modified_count=1)

    async def delete_one(self, query: Dict[str, Any]):
        removed = self.documents.pop(query["_id"], None)
        return SimpleNamespace(deleted_count=0 if removed is None else 1)

    def find(
        self,
        query: Dict[str, Any],
        sort: Optional[List[Tuple[str, int]]] = None,
        limit: int = 0,
    ) -> InMemoryCursor:
        matches = [
            dict(document)
            for document in self.documents.values()
            if all(document.get(key) == value for key, value in query.items())
        ]
        # Stable sorts applied from the least significant key
        for key, direction in reversed(sort or []):
            matches.sort(key=lambda document: str(document.get(key, "")), reverse=direction < 0)
        if limit:
            matches = matches[:limit]
        return InMemoryCursor(matches)


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_collection():
    """
    AsyncMock collection for service unit tests.

    `find` is synchronous in the driver (it returns a cursor), so it is a
    MagicMock whose cursor exposes an async `to_list`.

    Usage:
        mock_collection.find_one.return_value = {"_id": oid, "title": "A"}
        result = await item_service.get_document(mock_collection, str(oid))
    """
    collection = AsyncMock()
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=cursor)
    return collection


@pytest.fixture
def items_collection():
    return InMemoryCollection()


@pytest.fixture
def articles_collection():
    return InMemoryCollection()


@pytest.fixture
def mock_store():
    store = MagicMock()
    store.ping = AsyncMock(return_value=None)
    return store


@pytest.fixture
def sample_item_payload():
    return {
        "title": "Desk Lamp",
        "description": "Adjustable LED lamp",
        "price": "24.99",
        "category": "lighting",
    }


@pytest_asyncio.fixture
async def test_client(items_collection, articles_collection, mock_store):
    """
    HTTPX AsyncClient talking to the FastAPI app over ASGITransport.

    ASGITransport does not run the lifespan, so no MongoDB client is
    created; the collection and store dependencies are overridden instead.
    """
    from app.database import get_articles_collection, get_items_collection, get_store
    from app.main import app

    app.dependency_overrides[get_items_collection] = lambda: items_collection
    app.dependency_overrides[get_articles_collection] = lambda: articles_collection
    app.dependency_overrides[get_store] = lambda: mock_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
