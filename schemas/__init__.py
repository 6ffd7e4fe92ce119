"""
Pydantic schemas for type-safe data transfer.
"""

from schemas.pet import PetProfile, LifeStatus, Mode
from schemas.emotion import EmotionType, GriefStage, EmotionClassification
from schemas.conversation import Message
from schemas.records import TimelineEntry, PhotoMemory, Reminder, ReminderSchedule
from schemas.memory import (
    MemoryTimeInfo,
    MemoryCandidate,
    MemoryCreateSchema,
    MemorySchema,
    ConversationSummaryCreateSchema,
    ConversationSummarySchema,
)
from schemas.token_usage import TokenUsageSchema
from schemas.chat import ChatRequest, ChatResponse

__all__ = [
    "PetProfile",
    "LifeStatus",
    "Mode",
    "EmotionType",
    "GriefStage",
    "EmotionClassification",
    "Message",
    "TimelineEntry",
    "PhotoMemory",
    "Reminder",
    "ReminderSchedule",
    "MemoryTimeInfo",
    "MemoryCandidate",
    "MemoryCreateSchema",
    "MemorySchema",
    "ConversationSummaryCreateSchema",
    "ConversationSummarySchema",
    "TokenUsageSchema",
    "ChatRequest",
    "ChatResponse",
]
