"""
Slug Routes — Pydantic Response Schemas
=======================================

What:  API contracts for the reference routes.
Why:   Route handlers receive ORM records from bindings; these models control
       exactly which fields are serialized.
How:   `from_attributes` lets handlers call `ArticleResponse.model_validate(record)`.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ArticleResponse(BaseModel):
    """Full representation of an article."""
    id: int = Field(description="Primary key")
    slug: str = Field(description="URL-safe unique identifier")
    title: str = Field(description="Article title")
    body: str = Field(description="Article body")
    created_at: datetime = Field(description="Creation timestamp (UTC ISO 8601)")

    model_config = {"from_attributes": True}


class ArticleListResponse(BaseModel):
    articles: List[ArticleResponse] = Field(description="Articles ordered by id")
    total_count: int = Field(description="Number of articles returned")


class UserResponse(BaseModel):
    id: int = Field(description="Primary key")
    name: str = Field(description="Display name")
    email: str = Field(description="Email address")

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Article 'missing-slug' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Package version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
