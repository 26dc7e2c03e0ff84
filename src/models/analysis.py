"""Content analysis result."""

from pydantic import BaseModel, Field


class ContentAnalysis(BaseModel):
    """
    Structure extracted from free text. Transient, never persisted.

    `details` has one entry per distinct subtopic, keyed by the subtopic text.
    """

    main_topic: str = Field(..., description="Title of the whole text")
    subtopics: list[str] = Field(default_factory=list, description="At most 8, in document order")
    details: dict[str, list[str]] = Field(default_factory=dict, description="At most 5 each")
    keywords: list[str] = Field(default_factory=list, description="Top 10 by frequency")
