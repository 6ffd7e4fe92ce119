"""
Async database operations for the pet companion memory system.
Async SQLAlchemy on PostgreSQL with retry logic, error handling, and type safety.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional, AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
    AsyncEngine,
)
from sqlalchemy import select, desc
from sqlalchemy.exc import SQLAlchemyError
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from config.settings import settings
from core import get_logger, DatabaseException
from memory.models import Base, PetMemory, ConversationSummary
from schemas import (
    MemoryCreateSchema,
    MemorySchema,
    ConversationSummaryCreateSchema,
    ConversationSummarySchema,
)

logger = get_logger(__name__)


class AsyncDatabase:
    """
    Async PostgreSQL RecordStore:
    - Connection pooling and retry logic
    - Type-safe operations with Pydantic
    - Append-only writes, one transaction per write
    """

    def __init__(self, database_url: Optional[str] = None):
        """Initialize async database engine and session factory."""
        # Convert postgresql:// to postgresql+asyncpg://
        db_url = database_url or settings.DATABASE_URL
        if db_url.startswith("postgresql://"):
            db_url = db_url.replace("postgresql://", "postgresql+asyncpg://")

        self.engine: AsyncEngine = create_async_engine(
            db_url,
            echo=settings.LOG_LEVEL == "DEBUG",
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,  # Verify connections before use
            pool_recycle=3600,  # Recycle connections after 1 hour
        )

        self.async_session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        logger.info("Async database engine initialized", db_url=db_url.split("@")[-1])

    @asynccontextmanager
    async def get_session(self) -> AsyncIterator[AsyncSession]:
        """
        Context manager for database sessions with automatic cleanup.

        Yields:
            AsyncSession instance
        """
        async with self.async_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                await session.rollback()
                logger.error("Session rolled back", error=str(e))
                raise
            finally:
                await session.close()

    async def create_tables(self) -> None:
        """Create all database tables."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    async def close(self) -> None:
        """Dispose of the connection pool."""
        await self.engine.dispose()

    # ==================== Memories ====================

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type(SQLAlchemyError),
        reraise=True,
    )
    async def _insert_memory(self, memory: MemoryCreateSchema) -> MemorySchema:
        async with self.get_session() as session:
            row = PetMemory(
                pet_id=memory.pet_id,
                user_id=memory.user_id,
                memory_type=memory.memory_type,
                title=memory.title,
                content=memory.content,
                importance=memory.importance,
                time_info=memory.time_info.model_dump() if memory.time_info else None,
                created_at=datetime.utcnow(),
            )
            session.add(row)
            await session.flush()  # Get the ID
            return MemorySchema.model_validate(row)

    async def add_memory(self, memory: MemoryCreateSchema) -> MemorySchema:
        """
        Append a long-term memory.

        Raises:
            DatabaseException: If database operation fails
        """
        try:
            stored = await self._insert_memory(memory)
            logger.debug("Added memory", pet_id=memory.pet_id, memory_type=memory.memory_type)
            return stored
        except SQLAlchemyError as e:
            logger.error("Failed to add memory", pet_id=memory.pet_id, error=str(e))
            raise DatabaseException(f"Failed to add memory: {e}")

    async def get_recent_memories(
        self, pet_id: str, limit: int = 5, memory_type: Optional[str] = None
    ) -> List[MemorySchema]:
        """Get the most recent memories for a pet, newest first."""
        try:
            async with self.get_session() as session:
                query = select(PetMemory).where(PetMemory.pet_id == pet_id)
                if memory_type:
                    query = query.where(PetMemory.memory_type == memory_type)
                result = await session.execute(
                    query.order_by(desc(PetMemory.created_at), desc(PetMemory.id)).limit(limit)
                )
                return [MemorySchema.model_validate(m) for m in result.scalars().all()]

        except SQLAlchemyError as e:
            logger.error("Failed to get memories", pet_id=pet_id, error=str(e))
            raise DatabaseException(f"Failed to get memories: {e}")

    # ==================== Conversation Summaries ====================

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type(SQLAlchemyError),
        reraise=True,
    )
    async def _insert_summary(self, summary: ConversationSummaryCreateSchema) -> ConversationSummarySchema:
        async with self.get_session() as session:
            row = ConversationSummary(
                pet_id=summary.pet_id,
                user_id=summary.user_id,
                summary=summary.summary,
                message_count=summary.message_count,
                created_at=datetime.utcnow(),
            )
            session.add(row)
            await session.flush()
            return ConversationSummarySchema.model_validate(row)

    async def add_summary(self, summary: ConversationSummaryCreateSchema) -> ConversationSummarySchema:
        """
        Append a conversation summary.

        Raises:
            DatabaseException: If database operation fails
        """
        try:
            stored = await self._insert_summary(summary)
            logger.debug("Added conversation summary", pet_id=summary.pet_id, user_id=summary.user_id)
            return stored
        except SQLAlchemyError as e:
            logger.error("Failed to add summary", pet_id=summary.pet_id, error=str(e))
            raise DatabaseException(f"Failed to add summary: {e}")

    async def get_latest_summary(self, pet_id: str, user_id: str) -> Optional[ConversationSummarySchema]:
        """Get the newest summary for an owner/pet pair."""
        try:
            async with self.get_session() as session:
                result = await session.execute(
                    select(ConversationSummary)
                    .where(
                        ConversationSummary.pet_id == pet_id,
                        ConversationSummary.user_id == user_id,
                    )
                    .order_by(desc(ConversationSummary.created_at), desc(ConversationSummary.id))
                    .limit(1)
                )
                row = result.scalar_one_or_none()
                return ConversationSummarySchema.model_validate(row) if row else None

        except SQLAlchemyError as e:
            logger.error("Failed to get summary", pet_id=pet_id, user_id=user_id, error=str(e))
            raise DatabaseException(f"Failed to get summary: {e}")


# Singleton instance
db = AsyncDatabase()
