"""
Record store boundary.

The memory manager talks to any object with these four coroutines. The async
PostgreSQL database implements them for production; ``InMemoryRecordStore``
implements them for tests and local runs.
"""

import asyncio
import itertools
from datetime import datetime
from typing import Dict, List, Optional, Protocol, Tuple

from schemas import (
    MemoryCreateSchema,
    MemorySchema,
    ConversationSummaryCreateSchema,
    ConversationSummarySchema,
)


class RecordStore(Protocol):
    """Append-only store for memories and conversation summaries."""

    async def add_memory(self, memory: MemoryCreateSchema) -> MemorySchema: ...

    async def get_recent_memories(
        self, pet_id: str, limit: int = 5, memory_type: Optional[str] = None
    ) -> List[MemorySchema]: ...

    async def add_summary(self, summary: ConversationSummaryCreateSchema) -> ConversationSummarySchema: ...

    async def get_latest_summary(self, pet_id: str, user_id: str) -> Optional[ConversationSummarySchema]: ...


class InMemoryRecordStore:
    """Process-local RecordStore. Each write is atomic under a lock."""

    def __init__(self):
        self._memories: List[MemorySchema] = []
        self._summaries: Dict[Tuple[str, str], List[ConversationSummarySchema]] = {}
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()

    async def add_memory(self, memory: MemoryCreateSchema) -> MemorySchema:
        async with self._lock:
            stored = MemorySchema(
                id=next(self._ids),
                created_at=datetime.utcnow(),
                **memory.model_dump(),
            )
            self._memories.append(stored)
            return stored

    async def get_recent_memories(
        self, pet_id: str, limit: int = 5, memory_type: Optional[str] = None
    ) -> List[MemorySchema]:
        matches = [
            m for m in self._memories
            if m.pet_id == pet_id and (memory_type is None or m.memory_type == memory_type)
        ]
        # Newest first; id breaks ties between rows stored within the same tick
        matches.sort(key=lambda m: (m.created_at, m.id), reverse=True)
        return matches[:limit]

    async def add_summary(self, summary: ConversationSummaryCreateSchema) -> ConversationSummarySchema:
        async with self._lock:
            stored = ConversationSummarySchema(
                id=next(self._ids),
                created_at=datetime.utcnow(),
                **summary.model_dump(),
            )
            self._summaries.setdefault((summary.pet_id, summary.user_id), []).append(stored)
            return stored

    async def get_latest_summary(self, pet_id: str, user_id: str) -> Optional[ConversationSummarySchema]:
        summaries = self._summaries.get((pet_id, user_id))
        if not summaries:
            return None
        return max(summaries, key=lambda s: (s.created_at, s.id))

    async def count_memories(self, pet_id: str) -> int:
        return sum(1 for m in self._memories if m.pet_id == pet_id)

    async def count_summaries(self, pet_id: str, user_id: str) -> int:
        return len(self._summaries.get((pet_id, user_id), []))
