"""
SQLAlchemy models for the pet companion memory system.
Both tables are append-only: rows are inserted, never updated or deleted here.
"""

from datetime import datetime

from sqlalchemy import (
    Column,
    Index,
    Integer,
    String,
    Text,
    DateTime,
    JSON,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class PetMemory(Base):
    """Long-term memories about a pet, extracted from conversations."""

    __tablename__ = "pet_memories"
    __table_args__ = (
        Index("idx_pet_memories_pet_created", "pet_id", "created_at"),
        Index("idx_pet_memories_pet_type", "pet_id", "memory_type"),
    )

    id = Column(Integer, primary_key=True, index=True)
    pet_id = Column(String(64), nullable=False, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    memory_type = Column(String(50), nullable=False)  # e.g., "preference", "episode", "place", "routine"
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    importance = Column(Integer, nullable=False, default=5)  # 1-10 scale
    time_info = Column(JSON, nullable=True)  # {"type": "daily", "time": "08:00"}
    created_at = Column(DateTime, default=lambda: datetime.utcnow(), nullable=False, index=True)

    def __repr__(self):
        return f"<PetMemory(pet_id={self.pet_id}, type='{self.memory_type}', title='{self.title}')>"


class ConversationSummary(Base):
    """Periodic digests of a conversation between one owner and one pet."""

    __tablename__ = "conversation_summaries"
    __table_args__ = (
        Index("idx_conversation_summaries_pet_user_created", "pet_id", "user_id", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    pet_id = Column(String(64), nullable=False)
    user_id = Column(String(64), nullable=False)
    summary = Column(Text, nullable=False)
    message_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=lambda: datetime.utcnow(), nullable=False, index=True)

    def __repr__(self):
        return f"<ConversationSummary(pet_id={self.pet_id}, user_id={self.user_id}, created_at={self.created_at})>"
