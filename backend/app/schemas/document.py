"""
Catalog API — Pydantic Request/Response Schemas
=================================================

What:  Pydantic models defining the API contract for items and articles.
Why:   Explicit schemas for untyped JSON bodies, automatic serialization,
       and OpenAPI doc generation.
How:   Request payloads declare every attribute optional; the service
       decides which ones are mandatory for the operation at hand.
       Unknown keys (including a client-sent "id") are ignored.

Field values are strings. A JSON number where a string is expected is a
request validation failure (400), not a silent coercion.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what clients send
# ══════════════════════════════════════════════════════════════════════════


class ItemPayload(BaseModel):
    """
    Body for POST /api/items and PATCH /api/items/{id}.

    On create every field is required (non-empty); on update any non-empty
    subset overwrites the stored values.
    """
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(default=None, description="Item title")
    description: Optional[str] = Field(default=None, description="Item description")
    price: Optional[str] = Field(default=None, description="Price as a string, e.g. \"9.99\"")
    category: Optional[str] = Field(default=None, description="Category used by list filtering")


class ArticlePayload(BaseModel):
    """Body for POST /article and PATCH /article/{id}."""
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(default=None, description="Article title")
    description: Optional[str] = Field(default=None, description="Short summary")
    content: Optional[str] = Field(default=None, description="Article body")
    category: Optional[str] = Field(default=None, description="Category used by list filtering")


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns
# ══════════════════════════════════════════════════════════════════════════


class ItemResponse(BaseModel):
    """
    Full representation of a stored item.

    `id` is the string form of the store-assigned ObjectId.
    `createdAt` is stamped by the server at creation (ISO 8601, UTC).
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(description="Unique item identifier (24 hex characters)")
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[str] = None
    category: Optional[str] = None
    created_at: Optional[str] = Field(
        default=None,
        alias="createdAt",
        description="When the item was created (UTC ISO 8601)",
    )


class ArticleResponse(BaseModel):
    """Full representation of a stored article."""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(description="Unique article identifier (24 hex characters)")
    title: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None


class AckResponse(BaseModel):
    """Returned by partial update and delete, which do not echo the document."""
    message: str = Field(default="success")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "Invalid id 'abc'",
            "details": {"field": "id"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Document store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
