"""Presence metadata for connected participants (display only)."""

from pydantic import BaseModel, Field


class Cursor(BaseModel):
    """Pointer position of a participant."""

    x: float
    y: float


class Participant(BaseModel):
    """Another user connected to the same session."""

    id: str = Field(..., description="Connection or user id")
    name: str = Field(default="Anonymous")
    color: str = Field(default="#f783ac")
    cursor: Cursor | None = None
