"""
Async Memory Manager - the store adapter for long-term memories and summaries.

Every write is an append. Nothing here updates or deletes an existing memory
or summary, so concurrent conversations need no locking beyond the store's own
per-write atomicity.
"""

from typing import List, Optional

from config.settings import settings
from core import get_logger, MemoryException
from memory.store import RecordStore
from schemas import (
    MemoryCandidate,
    MemoryCreateSchema,
    MemorySchema,
    ConversationSummaryCreateSchema,
    ConversationSummarySchema,
)

logger = get_logger(__name__)


class AsyncMemoryManager:
    """
    Unified async memory interface for the pet companion.

    Features:
    - Type-safe operations with Pydantic schemas
    - Any RecordStore backend (PostgreSQL in production, in-memory in tests)
    - Store failures wrapped in MemoryException so callers can degrade softly
    """

    def __init__(self, store: Optional[RecordStore] = None):
        """Initialize memory manager.

        Args:
            store: Record store backend. Defaults to the PostgreSQL database,
                created on first use.
        """
        self._store = store

    @property
    def store(self) -> RecordStore:
        if self._store is None:
            from memory.database_async import db

            self._store = db
            logger.info("Memory manager using PostgreSQL store")
        return self._store

    # ==================== Memories ====================

    async def add_memory(
        self, pet_id: str, user_id: str, candidate: MemoryCandidate
    ) -> MemorySchema:
        """
        Append one long-term memory for a pet.

        Args:
            pet_id: Pet ID
            user_id: Owner ID
            candidate: Memory proposed by the extraction pass

        Returns:
            MemorySchema with the stored memory

        Raises:
            MemoryException: If storage fails
        """
        try:
            memory = await self.store.add_memory(
                MemoryCreateSchema(pet_id=pet_id, user_id=user_id, **candidate.model_dump())
            )
            logger.info(
                "Stored memory",
                pet_id=pet_id,
                memory_type=memory.memory_type,
                title=memory.title,
            )
            return memory
        except Exception as e:
            logger.error("Failed to store memory", pet_id=pet_id, error=str(e))
            raise MemoryException(f"Failed to store memory: {e}")

    async def get_recent_memories(
        self, pet_id: str, limit: Optional[int] = None, memory_type: Optional[str] = None
    ) -> List[MemorySchema]:
        """
        Get the most recent memories for a pet, newest first.

        Args:
            pet_id: Pet ID
            limit: Window size, defaults to MEMORY_RETRIEVAL_LIMIT
            memory_type: Restrict to one kind

        Raises:
            MemoryException: If retrieval fails
        """
        limit = limit or settings.MEMORY_RETRIEVAL_LIMIT
        try:
            memories = await self.store.get_recent_memories(pet_id, limit=limit, memory_type=memory_type)
            logger.debug("Retrieved memories", pet_id=pet_id, count=len(memories))
            return memories
        except Exception as e:
            logger.error("Failed to get memories", pet_id=pet_id, error=str(e))
            raise MemoryException(f"Failed to get memories: {e}")

    # ==================== Conversation Summaries ====================

    async def add_summary(
        self, pet_id: str, user_id: str, summary: str, message_count: int = 0
    ) -> ConversationSummarySchema:
        """
        Append a conversation summary.

        Raises:
            MemoryException: If storage fails
        """
        try:
            stored = await self.store.add_summary(
                ConversationSummaryCreateSchema(
                    pet_id=pet_id,
                    user_id=user_id,
                    summary=summary,
                    message_count=message_count,
                )
            )
            logger.info("Stored conversation summary", pet_id=pet_id, user_id=user_id, message_count=message_count)
            return stored
        except Exception as e:
            logger.error("Failed to store summary", pet_id=pet_id, user_id=user_id, error=str(e))
            raise MemoryException(f"Failed to store summary: {e}")

    async def get_latest_summary(self, pet_id: str, user_id: str) -> Optional[ConversationSummarySchema]:
        """
        Get the newest summary for an owner/pet pair, or None.

        Raises:
            MemoryException: If retrieval fails
        """
        try:
            return await self.store.get_latest_summary(pet_id, user_id)
        except Exception as e:
            logger.error("Failed to get summary", pet_id=pet_id, user_id=user_id, error=str(e))
            raise MemoryException(f"Failed to get summary: {e}")


# Singleton instance
memory_manager = AsyncMemoryManager()
