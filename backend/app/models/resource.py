"""
Catalog API — Document Resource Definitions
=============================================

What:  Describes each document collection the API exposes.
Why:   Items and articles follow the same CRUD contract and differ only in
       field names, which fields are mandatory, and whether a creation
       timestamp is stamped. One DocumentService instance is built per
       definition.
How:   A frozen dataclass per resource; field tuples are ordered, and
       create-time validation reports the first missing field in that order.

Stored document shape (MongoDB):
    {
        "_id": ObjectId("..."),        # assigned by the store, exposed as "id"
        "title": "...",
        "description": "...",
        "price": "...",                # items only ("content" for articles)
        "category": "...",
        "createdAt": "2024-01-15T12:00:00.000000+00:00"   # items only
    }
"""

from dataclasses import dataclass
from typing import Tuple

ID_FIELD = "_id"
CREATED_AT_FIELD = "createdAt"


@dataclass(frozen=True)
class DocumentResource:
    """
    Attributes:
        name:             Singular resource name used in error messages
        required_fields:  Must be non-empty on create (checked in order)
        updatable_fields: Accepted by partial update
        stamp_created_at: Whether create sets `createdAt` to the current instant
    """

    name: str
    required_fields: Tuple[str, ...]
    updatable_fields: Tuple[str, ...]
    stamp_created_at: bool = False


ITEMS = DocumentResource(
    name="item",
    required_fields=("title", "description", "price", "category"),
    updatable_fields=("title", "description", "price", "category"),
    stamp_created_at=True,
)

ARTICLES = DocumentResource(
    name="article",
    required_fields=("title", "description", "content", "category"),
    updatable_fields=("title", "description", "content", "category"),
)
