"""
Catalog API — Document Service (CRUD Business Logic)
======================================================

What:  Translates parsed request values into MongoDB queries and commands.
Why:   Keeps query construction, validation and merge rules out of the
       HTTP layer so they can be tested without a server or a database.
How:   One DocumentService per resource definition (items, articles).
       Every method receives the collection to act on; the service holds
       no connection state of its own.
Who:   Called by the item and article route handlers.

Operation → store call:
    list_documents   → find(filter, sort, limit)
    get_document     → find_one({_id})
    create_document  → insert_one(document)
    update_document  → find_one({_id}) then update_one({_id}, {$set: merged})
    delete_document  → delete_one({_id})

Pagination:
    The list limit is page_size * page, so page 2 returns the first
    2 * page_size documents rather than documents page_size+1..2*page_size.
    Clients use it as "load more": each page is a superset of the previous.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Type

from bson import ObjectId
from bson.errors import BSONError, InvalidId
from pydantic import BaseModel
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from app.config import settings
from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.resource import (
    ARTICLES,
    CREATED_AT_FIELD,
    ID_FIELD,
    ITEMS,
    DocumentResource,
)
from app.schemas.document import AckResponse, ArticleResponse, ItemResponse

logger = logging.getLogger(__name__)

ASCENDING = 1
DESCENDING = -1

DEFAULT_SORT_FIELD = CREATED_AT_FIELD
DEFAULT_SORT_ORDER = "desc"

# find() limits are encoded as BSON int64
MAX_LIMIT = 2**63 - 1


@dataclass(frozen=True)
class ListQuery:
    """A fully-resolved find() request."""

    filter: Dict[str, Any] = field(default_factory=dict)
    sort: List[Tuple[str, int]] = field(default_factory=list)
    limit: int = 0


def parse_object_id(raw: str) -> ObjectId:
    """
    Converts a path identifier into the store's native key.

    Raises:
        ValidationError: raw is not a 24-character hex string
    """
    try:
        return ObjectId(raw)
    except (InvalidId, TypeError):
        raise ValidationError(message=f"Invalid id '{raw}'", field="id")


def parse_page(raw: Optional[str]) -> int:
    """Absent or empty means page 1; anything else must be a positive integer."""
    if raw is None or raw == "":
        return 1

    # Plain ASCII digits only: int() would also accept "1_0", " 5 " and "+3".
    # Anything past 19 significant digits cannot fit the int64 limit anyway.
    digits = raw.lstrip("0")
    if not (raw.isascii() and raw.isdigit()) or not digits or len(digits) > 19:
        raise ValidationError(
            message=f"Invalid page '{raw}'. Must be a positive integer.",
            field="page",
        )
    return int(digits)


def parse_sort_field(raw: Optional[str]) -> str:
    """
    Resolves sortBy to a stored field path. "id" sorts on the store key.

    Raises:
        ValidationError: operator-like or malformed field path (→ 400)
    """
    if not raw:
        return DEFAULT_SORT_FIELD
    if raw == "id":
        return ID_FIELD

    # The server rejects these with an error that would otherwise surface as a 500
    parts = raw.split(".")
    if "\x00" in raw or any(not part or part.startswith("$") for part in parts):
        raise ValidationError(message=f"Invalid sortBy '{raw}'", field="sortBy")
    return raw


def build_list_query(
    page: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
    category: Optional[str] = None,
    page_size: int = 10,
) -> ListQuery:
    """
    Builds the filter, sort specification and limit for a list request.

    - filter is empty unless category is given (then exact match)
    - direction is -1 for "desc", +1 for anything else
    - "id" sorts on the store key
    - limit = page_size * page
    """
    page_number = parse_page(page)
    limit = page_size * page_number
    if limit > MAX_LIMIT:
        raise ValidationError(
            message=f"Invalid page '{page}'. Page number is too large.",
            field="page",
        )

    query_filter: Dict[str, Any] = {}
    if category:
        query_filter["category"] = category

    sort_field = parse_sort_field(sort_by)
    direction = DESCENDING if (sort_order or DEFAULT_SORT_ORDER) == "desc" else ASCENDING

    return ListQuery(
        filter=query_filter,
        sort=[(sort_field, direction)],
        limit=limit,
    )


class DocumentService:
    """
    CRUD operations for one document collection.

    Error Handling Strategy:
        Malformed input raises ValidationError before any store call.
        Missing documents raise NotFoundError. Driver and encoding failures
        are logged with full detail and re-raised as DatabaseError, which
        carries only a generic message to the client.
    """

    def __init__(self, resource: DocumentResource, response_model: Type[BaseModel]):
        self.resource = resource
        self.response_model = response_model

    async def list_documents(
        self,
        collection: AsyncCollection,
        page: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[BaseModel]:
        """
        Returns matching documents in sort order, at most page_size * page of them.

        Raises:
            ValidationError: bad page or sortBy value (→ 400)
            DatabaseError: query execution failed (→ 500)
        """
        query = build_list_query(
            page=page,
            sort_by=sort_by,
            sort_order=sort_order,
            category=category,
            page_size=settings.page_size,
        )
        logger.debug(
            "Listing %ss: filter=%s sort=%s limit=%d",
            self.resource.name, query.filter, query.sort, query.limit,
        )

        try:
            cursor = collection.find(query.filter, sort=query.sort, limit=query.limit)
            documents = await cursor.to_list(length=None)
        except (PyMongoError, BSONError) as e:
            logger.error("Database error listing %ss: %s", self.resource.name, str(e), exc_info=True)
            raise DatabaseError(
                message=f"Could not retrieve {self.resource.name}s. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [self._to_response(document) for document in documents]

    async def get_document(self, collection: AsyncCollection, document_id: str) -> BaseModel:
        """
        Raises:
            ValidationError: document_id is not a valid ObjectId (→ 400)
            NotFoundError: no document with that id (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        oid = parse_object_id(document_id)
        document = await self._find_existing(collection, oid)
        return self._to_response(document)

    async def create_document(self, collection: AsyncCollection, payload: BaseModel) -> BaseModel:
        """
        Validates required fields, stamps createdAt when the resource asks
        for it, inserts, and returns the document with its assigned id.

        Only the first missing required field is reported.
        """
        values = payload.model_dump()
        for name in self.resource.required_fields:
            if not values.get(name):
                raise ValidationError(message=f"{name} is required", field=name)

        document: Dict[str, Any] = {
            name: values[name]
            for name in self.resource.updatable_fields
            if values.get(name)
        }
        # Server clock, ISO 8601 UTC: sorts lexically in creation order
        if self.resource.stamp_created_at:
            document[CREATED_AT_FIELD] = datetime.now(timezone.utc).isoformat()

        try:
            result = await collection.insert_one(document)
        except (PyMongoError, BSONError) as e:
            logger.error("Database error creating %s: %s", self.resource.name, str(e), exc_info=True)
            raise DatabaseError(
                message=f"Could not create the {self.resource.name}. Please try again.",
                context={"error_type": type(e).__name__},
            )

        document[ID_FIELD] = result.inserted_id
        logger.info("Created %s %s", self.resource.name, result.inserted_id)
        return self._to_response(document)

    async def update_document(
        self,
        collection: AsyncCollection,
        document_id: str,
        payload: BaseModel,
    ) -> AckResponse:
        """
        Partial update: only fields present and non-empty in the payload
        overwrite stored values; everything else keeps its stored value.

        Raises:
            ValidationError: bad id, or no updatable field supplied (→ 400)
            NotFoundError: no document with that id (→ 404)
            DatabaseError: store failure (→ 500)
        """
        oid = parse_object_id(document_id)
        existing = await self._find_existing(collection, oid)

        values = payload.model_dump()
        updates = {
            name: values[name]
            for name in self.resource.updatable_fields
            if values.get(name)
        }
        if not updates:
            raise ValidationError(
                message=(
                    "Nothing to update. Provide at least one of: "
                    + ", ".join(self.resource.updatable_fields)
                ),
                context={"fields": list(self.resource.updatable_fields)},
            )

        # Write the whole merged record, not just the changed fields
        # Untouched fields (createdAt included) are written back as read;
        # _id is immutable and must not appear in $set
        merged = {key: value for key, value in existing.items() if key != ID_FIELD}
        merged.update(updates)

        try:
            result = await collection.update_one({ID_FIELD: oid}, {"$set": merged})
        except (PyMongoError, BSONError) as e:
            logger.error("Database error updating %s %s: %s", self.resource.name, oid, str(e))
            raise DatabaseError(
                message=f"Could not update the {self.resource.name}. Please try again.",
                context={"id": document_id, "error_type": type(e).__name__},
            )

        # Deleted between the read and the write
        if result.matched_count == 0:
            raise NotFoundError(resource=self.resource.name, resource_id=document_id)

        logger.info("Updated %s %s fields=%s", self.resource.name, oid, sorted(updates))
        return AckResponse()

    async def delete_document(self, collection: AsyncCollection, document_id: str) -> AckResponse:
        """
        Deletes by id without an existence check. Deleting an id that is
        not stored succeeds, so repeating a delete is harmless.
        """
        oid = parse_object_id(document_id)

        try:
            result = await collection.delete_one({ID_FIELD: oid})
        except (PyMongoError, BSONError) as e:
            logger.error("Database error deleting %s %s: %s", self.resource.name, oid, str(e))
            raise DatabaseError(
                message=f"Could not delete the {self.resource.name}. Please try again.",
                context={"id": document_id, "error_type": type(e).__name__},
            )

        logger.info("Deleted %s %s (removed=%d)", self.resource.name, oid, result.deleted_count)
        return AckResponse()

    async def _find_existing(self, collection: AsyncCollection, oid: ObjectId) -> Dict[str, Any]:
        try:
            document = await collection.find_one({ID_FIELD: oid})
        except (PyMongoError, BSONError) as e:
            logger.error("Database error fetching %s %s: %s", self.resource.name, oid, str(e))
            raise DatabaseError(
                message=f"Could not retrieve the {self.resource.name}. Please try again.",
                context={"id": str(oid), "error_type": type(e).__name__},
            )

        if document is None:
            raise NotFoundError(resource=self.resource.name, resource_id=str(oid))
        return document

    def _to_response(self, document: Dict[str, Any]) -> BaseModel:
        data = {key: value for key, value in document.items() if key != ID_FIELD}
        data["id"] = str(document[ID_FIELD])
        return self.response_model.model_validate(data)


item_service = DocumentService(ITEMS, ItemResponse)
article_service = DocumentService(ARTICLES, ArticleResponse)
