"""
Pipeline Demo — Pydantic Request/Response Schemas
==================================================

What:  Pydantic models defining the JSON contract of every route.
Why:   Automatic serialization, OpenAPI docs, and one place that fixes the
       camelCase field names clients see (createdAt, maxRss, ...).
How:   Route handlers return these models; FastAPI serializes them by alias.
       User routes use response_model_exclude_none so optional fields
       (createdAt on seed users) are omitted rather than sent as null.

Envelope Invariant:
    Every /api route answers with {success, data?, error?, message?}.
    A success envelope carries data; an error envelope carries error and
    never data.
"""

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


def utc_timestamp() -> str:
    """
    What: Current UTC time as ISO 8601 with millisecond precision and a Z suffix.
    Example: "2024-01-15T12:00:00.123Z"
    """
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


# ══════════════════════════════════════════════════════════════════════════
# Domain Models
# ══════════════════════════════════════════════════════════════════════════


class User(BaseModel):
    """
    What:  A user record from the mock data.
    Who:   Listed by GET /api/users, returned by POST /api/users.

    Fields:
        - id: Seed users are 1 and 2; created users get a millisecond timestamp id
        - created_at: Only set on users created through the API
    """
    id: int = Field(description="User identifier")
    name: str = Field(description="Display name")
    email: str = Field(description="Contact email")
    created_at: Optional[str] = Field(
        default=None,
        alias="createdAt",
        description="Creation time (UTC ISO 8601); absent on seed records",
    )

    model_config = {"populate_by_name": True}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class WelcomeResponse(BaseModel):
    """Returned by GET /."""
    message: str = Field(description="Welcome message")
    version: str = Field(description="Application version")
    environment: str = Field(description="Configured environment label")
    timestamp: str = Field(description="Response time (UTC ISO 8601)")


class MemoryUsage(BaseModel):
    """
    What:  Process memory counters reported by GET /health.

    Counters:
        - max_rss: Peak resident set size in bytes
        - traced_current / traced_peak: Python heap bytes seen by tracemalloc
          (0 when tracing is not enabled)
        - gc_objects: Objects currently tracked by the garbage collector
    """
    max_rss: int = Field(alias="maxRss")
    traced_current: int = Field(alias="tracedCurrent")
    traced_peak: int = Field(alias="tracedPeak")
    gc_objects: int = Field(alias="gcObjects")

    model_config = {"populate_by_name": True}


class HealthResponse(BaseModel):
    """
    What:  Liveness snapshot computed fresh on every request.
    Who:   Returned by GET /health for monitors and the pipeline's smoke checks.
    """
    status: Literal["healthy"] = Field(default="healthy")
    uptime: float = Field(ge=0, description="Seconds since the process started")
    timestamp: str = Field(description="Response time (UTC ISO 8601)")
    memory: MemoryUsage


class UserListResponse(BaseModel):
    """Returned by GET /api/users."""
    success: Literal[True] = True
    data: List[User]
    count: int = Field(ge=0)


class UserCreatedResponse(BaseModel):
    """Returned by POST /api/users with HTTP 201."""
    success: Literal[True] = True
    data: User
    message: str = Field(default="User created successfully")


class ErrorResponse(BaseModel):
    """
    What:  Error envelope shared by every failure path.

    Fields:
        error: Fixed, human-readable error string ("Route not found", ...)
        message: Extra detail (500 responses only)
        path: Requested path echoed back (404 responses only)

    Example:
        {"success": false, "error": "Route not found", "path": "/nonexistent"}
    """
    success: Literal[False] = False
    error: str
    message: Optional[str] = None
    path: Optional[str] = None
