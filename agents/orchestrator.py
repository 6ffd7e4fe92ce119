"""
Chat Orchestrator - runs one chat turn end to end.

Synchronous path (the caller waits for it):
    validate → classify → fetch memories/summary → compose → generate

Detached path (scheduled after the reply, never awaited here):
    memory extraction, and every SUMMARY_INTERVAL-th turn a summary

Only the synchronous path can fail the turn. Classifier and store failures
degrade to safe defaults; detached failures are logged and dropped.
"""

from datetime import datetime
from typing import List, Optional

import pytz

from config.settings import settings
from core import (
    get_logger,
    BackgroundTaskRunner,
    ConfigurationError,
    InvalidInputError,
)
from agents.context_composer import ContextComposer, context_composer
from agents.emotion import EmotionClassifier, emotion_classifier
from agents.memory_agent import MemoryAgent, memory_agent, should_summarize
from agents.pet_agent import PetAgent, pet_agent
from memory.memory_manager_async import AsyncMemoryManager, memory_manager
from schemas import (
    ChatRequest,
    ChatResponse,
    ConversationSummarySchema,
    MemorySchema,
    Mode,
)
from utils.sanitize import sanitize_input

logger = get_logger(__name__)


class ChatOrchestrator:
    """
    Coordinates one chat turn.

    Flow:
    1. Validate the request and configuration
    2. Classify the message (soft)
    3. Fetch recent memories and the latest summary (soft)
    4. Compose the bounded context
    5. Generate the reply
    6. Schedule memory extraction and summarization in the background
    """

    def __init__(
        self,
        classifier: Optional[EmotionClassifier] = None,
        composer: Optional[ContextComposer] = None,
        agent: Optional[PetAgent] = None,
        memory_tasks: Optional[MemoryAgent] = None,
        memory: Optional[AsyncMemoryManager] = None,
        background: Optional[BackgroundTaskRunner] = None,
    ):
        """Initialize orchestrator.

        Every collaborator defaults to its singleton. An injected memory
        manager is shared with the default memory tasks so reads and detached
        writes hit the same store.
        """
        self.classifier = classifier or emotion_classifier
        self.composer = composer or context_composer
        self.agent = agent or pet_agent
        self.memory = memory or memory_manager
        if memory_tasks is None:
            memory_tasks = memory_agent if memory is None else MemoryAgent(memory=self.memory)
        self.memory_tasks = memory_tasks
        self.background = background or BackgroundTaskRunner()
        logger.info("Chat orchestrator initialized")

    async def process_chat(self, request: ChatRequest, now: Optional[datetime] = None) -> ChatResponse:
        """
        Process one chat turn.

        Args:
            request: Chat request with every record snapshot already fetched
            now: Current time in the owner's timezone. Defaults to the wall
                clock in TIMEZONE.

        Returns:
            ChatResponse with the reply and the classification of the message

        Raises:
            ConfigurationError: Generation credential is missing
            InvalidInputError: Message or pet is missing
            GenerationError: Reply generation failed (auth, rate limit, timeout, other)
        """
        if not settings.OPENAI_API_KEY:
            raise ConfigurationError("OPENAI_API_KEY", "generation credential is not set")

        if request.pet is None:
            raise InvalidInputError("pet", "pet profile is required")
        message = sanitize_input(request.message or "")
        if not message:
            raise InvalidInputError("message", "message is required")

        pet = request.pet
        mode = pet.mode
        now = now or datetime.now(pytz.timezone(settings.TIMEZONE))
        pet_id = request.resolved_pet_id
        user_id = request.user_id
        use_memory = request.enable_memory

        logger.info(
            "Processing chat",
            pet_id=pet_id,
            user_id=user_id,
            mode=mode.value,
            history=len(request.recent_history),
            message_preview=message[:50],
        )

        # 1. Classification feeds the emotion guidance block
        classification = await self.classifier.classify(message, mode)

        # 2. Long-term context
        memories: List[MemorySchema] = []
        summary: Optional[ConversationSummarySchema] = None
        if use_memory and pet_id:
            memories = await self._fetch_memories(pet_id)
            if user_id:
                summary = await self._fetch_summary(pet_id, user_id)

        # 3. Compose and generate
        composed = self.composer.compose(
            pet=pet,
            message=message,
            classification=classification,
            now=now,
            history=request.recent_history,
            summary=summary,
            memories=memories,
            timeline=request.timeline,
            photos=request.photo_memories,
            reminders=request.reminders,
        )
        result = await self.agent.generate(composed, mode)

        # 4. Detached bookkeeping, strictly after the reply exists
        if use_memory and pet_id and user_id:
            self._schedule_background(request, message, result.reply, mode)

        return ChatResponse(
            reply=result.reply,
            emotion=classification.emotion,
            emotion_score=classification.score,
            grief_stage=classification.grief_stage if mode.is_memorial else None,
            usage=result.usage,
            suggested_questions=result.suggested_questions,
        )

    async def _fetch_memories(self, pet_id: str) -> List[MemorySchema]:
        try:
            return await self.memory.get_recent_memories(pet_id, limit=settings.MEMORY_RETRIEVAL_LIMIT)
        except Exception as e:
            logger.warning("Memory retrieval failed, continuing without memories", pet_id=pet_id, error=str(e))
            return []

    async def _fetch_summary(self, pet_id: str, user_id: str) -> Optional[ConversationSummarySchema]:
        try:
            return await self.memory.get_latest_summary(pet_id, user_id)
        except Exception as e:
            logger.warning("Summary retrieval failed, continuing without summary", pet_id=pet_id, error=str(e))
            return None

    def _schedule_background(self, request: ChatRequest, message: str, reply: str, mode: Mode) -> None:
        pet_id = request.resolved_pet_id
        user_id = request.user_id
        pet_name = request.pet.name

        self.background.spawn(
            self.memory_tasks.extract_and_store_memories(pet_id, user_id, message, pet_name),
            name=f"extract_memories:{pet_id}",
        )

        turn_count = request.resolved_turn_count
        if should_summarize(turn_count):
            logger.info("Triggering conversation summary", pet_id=pet_id, user_id=user_id, turn_count=turn_count)
            self.background.spawn(
                self.memory_tasks.summarize_and_store(
                    pet_id,
                    user_id,
                    list(request.recent_history),
                    message,
                    reply,
                    pet_name,
                    mode,
                ),
                name=f"summarize:{pet_id}:{turn_count}",
            )

    async def drain(self) -> None:
        """Wait for all detached work. For tests and shutdown hooks."""
        await self.background.drain()

    def shutdown(self) -> None:
        """Abandon detached work on process shutdown."""
        self.background.cancel_all()


# Singleton instance
orchestrator = ChatOrchestrator()
