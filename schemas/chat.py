"""Chat turn request/response schemas."""

from typing import List, Optional

from pydantic import BaseModel, Field

from schemas.conversation import Message
from schemas.emotion import EmotionType, GriefStage
from schemas.pet import PetProfile
from schemas.records import PhotoMemory, Reminder, TimelineEntry
from schemas.token_usage import TokenUsageSchema


class ChatRequest(BaseModel):
    """One inbound chat turn with every record snapshot the caller already fetched."""

    message: Optional[str] = Field(None, description="The new user message")
    pet: Optional[PetProfile] = Field(None, description="The pet being talked to")
    recent_history: List[Message] = Field(
        default_factory=list, description="Conversation so far, oldest first"
    )
    pet_id: Optional[str] = Field(None, description="Durable pet ID; falls back to pet.id")
    user_id: Optional[str] = Field(None, description="Durable owner ID")
    timeline: List[TimelineEntry] = Field(default_factory=list)
    photo_memories: List[PhotoMemory] = Field(default_factory=list)
    reminders: List[Reminder] = Field(default_factory=list)
    enable_memory: bool = Field(True, description="Use and update long-term memory")
    turn_count: Optional[int] = Field(
        None, ge=0, description="Messages already in this conversation; defaults to len(recent_history)"
    )

    @property
    def resolved_pet_id(self) -> Optional[str]:
        if self.pet_id:
            return self.pet_id
        return self.pet.id if self.pet else None

    @property
    def resolved_turn_count(self) -> int:
        return self.turn_count if self.turn_count is not None else len(self.recent_history)


class ChatResponse(BaseModel):
    """Reply plus the classification metadata for the turn."""

    reply: str = Field(..., description="Reply text, suggestions stripped")
    emotion: EmotionType = Field(..., description="Classified emotion of the user message")
    emotion_score: float = Field(..., ge=0.0, le=1.0)
    grief_stage: Optional[GriefStage] = Field(None, description="Memorial mode only")
    usage: Optional[TokenUsageSchema] = Field(None, description="Token usage of the reply call")
    suggested_questions: List[str] = Field(
        default_factory=list, description="Up to three follow-ups the user could send next"
    )
