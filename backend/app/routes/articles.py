"""
Catalog API — Article Route Handlers
======================================

What:  CRUD endpoints for the articles collection.
Why:   Articles use a plural collection path for listing and a singular
       path for everything else.

Route Inventory:
    GET    /articles        list (page, sortBy, sortOrder, category)
    POST   /article         create → 201
    GET    /article/{id}    get one
    PATCH  /article/{id}    partial update
    DELETE /article/{id}    delete

Articles carry no createdAt, so the default sort (createdAt) falls back
to the store's natural order; pass sortBy=title or sortBy=id for a
stable ordering.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from pymongo.asynchronous.collection import AsyncCollection

from app.database import get_articles_collection
from app.schemas.document import AckResponse, ArticlePayload, ArticleResponse, ErrorResponse
from app.services.document_service import article_service

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────

router = APIRouter(tags=["Articles"])


@router.get(
    "/articles",
    response_model=List[ArticleResponse],
    responses={
        400: {"description": "Invalid page number or sort field", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List articles",
)
async def list_articles(
    page: str | None = Query(default=None, description="Positive integer, default 1"),
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: str | None = Query(default=None, alias="sortOrder"),
    category: str | None = Query(default=None),
    collection: AsyncCollection = Depends(get_articles_collection),
) -> List[ArticleResponse]:
    # page arrives as a raw string so a bad value gets the shared 400 body
    # instead of FastAPI's 422; the service parses and bounds it
    return await article_service.list_documents(
        collection,
        page=page,
        sort_by=sort_by,
        sort_order=sort_order,
        category=category,
    )


@router.post(
    "/article",
    status_code=201,
    response_model=ArticleResponse,
    responses={
        400: {"description": "Missing required field", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create an article",
)
async def create_article(
    payload: ArticlePayload,
    collection: AsyncCollection = Depends(get_articles_collection),
) -> ArticleResponse:
    return await article_service.create_document(collection, payload)


@router.get(
    "/article/{article_id}",
    response_model=ArticleResponse,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Article not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single article by ID",
)
async def get_article(
    article_id: str,
    collection: AsyncCollection = Depends(get_articles_collection),
) -> ArticleResponse:
    return await article_service.get_document(collection, article_id)


@router.patch(
    "/article/{article_id}",
    response_model=AckResponse,
    responses={
        400: {"description": "Malformed id or nothing to update", "model": ErrorResponse},
        404: {"description": "Article not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Partially update an article",
)
async def update_article(
    article_id: str,
    payload: ArticlePayload,
    collection: AsyncCollection = Depends(get_articles_collection),
) -> AckResponse:
    return await article_service.update_document(collection, article_id, payload)


@router.delete(
    "/article/{article_id}",
    response_model=AckResponse,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete an article",
)
async def delete_article(
    article_id: str,
    collection: AsyncCollection = Depends(get_articles_collection),
) -> AckResponse:
    return await article_service.delete_document(collection, article_id)
