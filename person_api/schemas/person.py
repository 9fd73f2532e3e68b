"""
Person API — Pydantic Request/Response Schemas
===============================================

What:  Pydantic models defining the API contract and the OpenAPI components.
How:   FastAPI uses these to parse request bodies, serialize responses, and
       generate the documentation served at /api-docs.

Request bodies deliberately accept any JSON value for `name` and `age`:
the person store casts values itself and a failed cast surfaces as a 500
with the store's message. The declared schema types only document the
expected shapes.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PersonPayload(BaseModel):
    """Fields a client may send when creating or updating a person."""

    name: Any = Field(
        default=None,
        description="The name of the person",
        json_schema_extra={"type": "string"},
    )
    age: Any = Field(
        default=None,
        description="The age of the person",
        json_schema_extra={"type": "number"},
    )

    model_config = ConfigDict(
        json_schema_extra={"example": {"name": "Alexander K. Dewdney", "age": 23}},
    )

    def supplied_fields(self) -> dict:
        """Only the fields present in the request body."""
        return self.model_dump(include={"name", "age"}, exclude_unset=True)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PersonResponse(BaseModel):
    """A stored person."""

    id: str = Field(alias="_id", description="The auto-generated id of the person")
    name: Optional[str] = Field(default=None, description="The name of the person")
    age: Optional[Union[int, float]] = Field(default=None, description="The age of the person")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "_id": "507f1f77bcf86cd799439011",
                "name": "Alexander K. Dewdney",
                "age": 23,
            }
        },
    )


class MessageResponse(BaseModel):
    message: str = Field(description="A success message")

    model_config = ConfigDict(
        json_schema_extra={"example": {"message": "Person deleted successfully"}},
    )


class ErrorResponse(BaseModel):
    """Error body shared by every failing endpoint."""

    error: str = Field(description="The error message")

    model_config = ConfigDict(
        json_schema_extra={"example": {"error": "Person not found"}},
    )


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
