"""
Catalog API — Item Endpoint Tests
===================================

What:  HTTP-level tests for /api/items against an in-memory collection.
How:   HTTPX AsyncClient over ASGITransport; no server or MongoDB needed.
"""

from unittest.mock import MagicMock

import pytest
from bson import ObjectId


async def _create(client, **fields):
    body = {"title": "A", "description": "B", "price": "1", "category": "C"}
    body.update(fields)
    response = await client.post("/api/items", json=body)
    assert response.status_code == 201
    return response.json()


class TestItemLifecycle:

    @pytest.mark.asyncio
    async def test_create_get_patch_delete(self, test_client, items_collection):
        response = await test_client.post(
            "/api/items",
            json={"title": "A", "description": "B", "price": "1", "category": "C"},
        )
        assert response.status_code == 201
        created = response.json()
        assert created["title"] == "A"
        item_id = created["id"]
        assert ObjectId.is_valid(item_id)
        assert created["createdAt"]

        response = await test_client.get(f"/api/items/{item_id}")
        assert response.status_code == 200
        assert response.json() == created

        response = await test_client.patch(f"/api/items/{item_id}", json={"price": "2"})
        assert response.status_code == 200
        assert response.json() == {"message": "success"}

        fetched = (await test_client.get(f"/api/items/{item_id}")).json()
        assert fetched["price"] == "2"
        assert fetched["title"] == "A"
        assert fetched["createdAt"] == created["createdAt"]

        response = await test_client.delete(f"/api/items/{item_id}")
        assert response.status_code == 200
        assert response.json() == {"message": "success"}

        response = await test_client.get(f"/api/items/{item_id}")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"
        assert items_collection.documents == {}

    @pytest.mark.asyncio
    async def test_each_create_gets_new_id(self, test_client):
        first = await _create(test_client)
        second = await _create(test_client)
        assert first["id"] != second["id"]

    @pytest.mark.asyncio
    async def test_delete_twice_succeeds(self, test_client):
        item_id = (await _create(test_client))["id"]

        assert (await test_client.delete(f"/api/items/{item_id}")).status_code == 200
        assert (await test_client.delete(f"/api/items/{item_id}")).status_code == 200
        assert (await test_client.get(f"/api/items/{item_id}")).status_code == 404


class TestItemValidation:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["title", "description", "price", "category"])
    async def test_missing_required_field(self, test_client, items_collection, sample_item_payload, missing):
        body = dict(sample_item_payload)
        del body[missing]

        response = await test_client.post("/api/items", json=body)

        assert response.status_code == 400
        payload = response.json()
        assert payload["error"] == "validation_error"
        assert payload["details"]["field"] == missing
        assert items_collection.documents == {}

    @pytest.mark.asyncio
    async def test_numeric_price_rejected(self, test_client, sample_item_payload):
        response = await test_client.post("/api/items", json={**sample_item_payload, "price": 9.99})
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_malformed_json_rejected(self, test_client):
        response = await test_client.post(
            "/api/items",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_id", ["123", "not-an-id", "zzzzzzzzzzzzzzzzzzzzzzzz"])
    async def test_malformed_ids(self, test_client, items_collection, bad_id):
        existing = await _create(test_client)
        before = dict(items_collection.documents)

        assert (await test_client.get(f"/api/items/{bad_id}")).status_code == 400
        assert (await test_client.patch(f"/api/items/{bad_id}", json={"price": "5"})).status_code == 400
        assert (await test_client.delete(f"/api/items/{bad_id}")).status_code == 400

        assert items_collection.documents == before
        assert (await test_client.get(f"/api/items/{existing['id']}")).json()["price"] == "1"

    @pytest.mark.asyncio
    async def test_empty_update_rejected(self, test_client):
        item_id = (await _create(test_client))["id"]
        response = await test_client.patch(f"/api/items/{item_id}", json={})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_unknown_id(self, test_client):
        response = await test_client.patch(f"/api/items/{ObjectId()}", json={"price": "3"})
        assert response.status_code == 404


class TestItemListing:

    @pytest.mark.asyncio
    async def test_category_filter_and_ascending_sort(self, test_client):
        await _create(test_client, title="Gamma", category="X")
        await _create(test_client, title="Alpha", category="X")
        await _create(test_client, title="Beta", category="Y")

        response = await test_client.get(
            "/api/items", params={"category": "X", "sortBy": "title", "sortOrder": "asc"},
        )

        assert response.status_code == 200
        items = response.json()
        assert [item["title"] for item in items] == ["Alpha", "Gamma"]
        assert all(item["category"] == "X" for item in items)

    @pytest.mark.asyncio
    async def test_default_sort_is_newest_first(self, test_client):
        await _create(test_client, title="first")
        await _create(test_client, title="second")

        items = (await test_client.get("/api/items")).json()

        created = [item["createdAt"] for item in items]
        assert created == sorted(created, reverse=True)

    @pytest.mark.asyncio
    async def test_page_is_a_growing_prefix(self, test_client):
        for i in range(25):
            await _create(test_client, title=f"t{i:02d}")

        first = (await test_client.get("/api/items", params={"page": "1", "sortBy": "title", "sortOrder": "asc"})).json()
        second = (await test_client.get("/api/items", params={"page": "2", "sortBy": "title", "sortOrder": "asc"})).json()
        third = (await test_client.get("/api/items", params={"page": "3", "sortBy": "title", "sortOrder": "asc"})).json()

        assert len(first) == 10
        assert len(second) == 20
        assert len(third) == 25
        assert second[:10] == first

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page", ["0", "-1", "abc"])
    async def test_invalid_page(self, test_client, page):
        response = await test_client.get("/api/items", params={"page": page})
        assert response.status_code == 400
        assert response.json()["details"]["field"] == "page"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page", [str(10**18), "1_0", "+3"])
    async def test_unencodable_or_loose_page(self, test_client, page):
        response = await test_client.get("/api/items", params={"page": page})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]["field"] == "page"

    @pytest.mark.asyncio
    async def test_operator_sort_field_rejected(self, test_client, items_collection):
        items_collection.find = MagicMock(side_effect=AssertionError("store must not be queried"))

        response = await test_client.get("/api/items", params={"sortBy": "$where"})

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "sortBy"
