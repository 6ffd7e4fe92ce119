"""Long-term memory and conversation summary schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, ConfigDict


class MemoryTimeInfo(BaseModel):
    """Schedule attached to a routine/schedule memory."""

    type: Literal["daily", "weekly", "monthly", "once"] = Field(..., description="Recurrence")
    time: Optional[str] = Field(None, description="Time of day, HH:MM")


class MemoryBaseSchema(BaseModel):
    """Base memory schema."""

    memory_type: str = Field(
        ...,
        max_length=50,
        description="Open taxonomy (e.g., 'preference', 'episode', 'place', 'routine')",
    )
    title: str = Field(..., max_length=200, description="Short title")
    content: str = Field(..., min_length=1, description="What to remember")
    importance: int = Field(5, ge=1, le=10, description="Importance score (1-10)")
    time_info: Optional[MemoryTimeInfo] = Field(None, description="Schedule for routine memories")


class MemoryCandidate(MemoryBaseSchema):
    """A memory proposed by the extraction pass, not yet stored."""

    pass


class MemoryCreateSchema(MemoryBaseSchema):
    """Schema for appending a memory."""

    pet_id: str = Field(..., description="Pet ID")
    user_id: str = Field(..., description="Owner ID")


class MemorySchema(MemoryCreateSchema):
    """Stored memory. Never mutated after creation."""

    id: int = Field(..., description="Memory ID")
    created_at: datetime = Field(..., description="When the memory was stored")

    model_config = ConfigDict(from_attributes=True)


class ConversationSummaryCreateSchema(BaseModel):
    """Schema for appending a conversation summary."""

    pet_id: str = Field(..., description="Pet ID")
    user_id: str = Field(..., description="Owner ID")
    summary: str = Field(..., min_length=1, description="Compressed digest of recent turns")
    message_count: int = Field(0, ge=0, description="How many messages the summary covers")


class ConversationSummarySchema(ConversationSummaryCreateSchema):
    """Stored conversation summary. Summaries accumulate; the newest one is used."""

    id: int = Field(..., description="Summary ID")
    created_at: datetime = Field(..., description="When the summary was stored")

    model_config = ConfigDict(from_attributes=True)
