"""Conversation message schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from schemas.emotion import EmotionType


class Message(BaseModel):
    """One chat message. Ordered by creation time, append-only within a conversation."""

    role: Literal["user", "assistant"] = Field(..., description="Message role")
    content: str = Field(..., min_length=1, description="Message content")
    emotion: Optional[EmotionType] = Field(None, description="Emotion tag for user messages")
    emotion_score: Optional[float] = Field(None, ge=0.0, le=1.0, description="Emotion intensity")
    created_at: Optional[datetime] = Field(None, description="Message timestamp")

    def to_llm(self) -> dict:
        """Role/content dict for the generation service."""
        return {"role": self.role, "content": self.content}
