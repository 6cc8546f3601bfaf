"""
Catalog API — Item Route Handlers
===================================

What:  CRUD endpoints for the items collection under /api/items.
How:   Extracts path/query/body values, delegates to item_service with the
       items collection injected by Depends(), returns JSON.

Route Inventory:
    GET    /api/items        list (page, sortBy, sortOrder, category)
    POST   /api/items        create → 201
    GET    /api/items/{id}   get one
    PATCH  /api/items/{id}   partial update
    DELETE /api/items/{id}   delete
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from pymongo.asynchronous.collection import AsyncCollection

from app.database import get_items_collection
from app.schemas.document import AckResponse, ErrorResponse, ItemPayload, ItemResponse
from app.services.document_service import item_service

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────

router = APIRouter(prefix="/api/items", tags=["Items"])


@router.get(
    "",
    response_model=List[ItemResponse],
    responses={
        400: {"description": "Invalid page number or sort field", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List items",
    description=(
        "Returns items matching the optional category, ordered by sortBy "
        "(default createdAt) in sortOrder (default desc). Each page returns "
        "up to 10 × page items, starting from the first match."
    ),
)
async def list_items(
    page: str | None = Query(default=None, description="Positive integer, default 1"),
    sort_by: str | None = Query(default=None, alias="sortBy", description="Field to sort on"),
    sort_order: str | None = Query(default=None, alias="sortOrder", description="'asc' or 'desc'"),
    category: str | None = Query(default=None, description="Exact-match category filter"),
    collection: AsyncCollection = Depends(get_items_collection),
) -> List[ItemResponse]:
    # page arrives as a raw string so a bad value gets the shared 400 body
    # instead of FastAPI's 422; the service parses and bounds it
    return await item_service.list_documents(
        collection,
        page=page,
        sort_by=sort_by,
        sort_order=sort_order,
        category=category,
    )


@router.post(
    "",
    status_code=201,
    response_model=ItemResponse,
    responses={
        400: {"description": "Missing required field", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create an item",
)
async def create_item(
    payload: ItemPayload,
    collection: AsyncCollection = Depends(get_items_collection),
) -> ItemResponse:
    """
    title, description, price and category are required. The id is
    assigned by the store and createdAt is stamped by the server; any
    client-supplied id is ignored.
    """
    return await item_service.create_document(collection, payload)


@router.get(
    "/{item_id}",
    response_model=ItemResponse,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Item not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single item by ID",
)
async def get_item(
    item_id: str,
    collection: AsyncCollection = Depends(get_items_collection),
) -> ItemResponse:
    return await item_service.get_document(collection, item_id)


@router.patch(
    "/{item_id}",
    response_model=AckResponse,
    responses={
        400: {"description": "Malformed id or nothing to update", "model": ErrorResponse},
        404: {"description": "Item not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Partially update an item",
)
async def update_item(
    item_id: str,
    payload: ItemPayload,
    collection: AsyncCollection = Depends(get_items_collection),
) -> AckResponse:
    """Only non-empty fields in the body are written; the rest are left as stored."""
    return await item_service.update_document(collection, item_id, payload)


@router.delete(
    "/{item_id}",
    response_model=AckResponse,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete an item",
)
async def delete_item(
    item_id: str,
    collection: AsyncCollection = Depends(get_items_collection),
) -> AckResponse:
    """Succeeds whether or not the item existed."""
    return await item_service.delete_document(collection, item_id)
