"""
Memory Agent - the detached bookkeeping that runs after each reply.

Two best-effort jobs:
- Memory extraction: propose long-term memories from the user message and
  append each one.
- Summarization: every SUMMARY_INTERVAL-th turn, compress the conversation into
  one appended summary.

Both only ever append. Running either twice on the same exchange can produce
duplicate rows but never touches existing ones. Neither raises: failures are
logged and the job ends.
"""

from typing import List, Optional

from pydantic import ValidationError

from config.settings import settings
from core import get_logger
from memory.memory_manager_async import AsyncMemoryManager, memory_manager
from prompts.compact import (
    CONVERSATION_SUMMARY_PROMPT,
    ACTIVE_SUMMARY_GUIDANCE,
    MEMORIAL_SUMMARY_GUIDANCE,
)
from prompts.memory import MEMORY_EXTRACTION_PROMPT
from schemas import MemoryCandidate, Message, Mode
from utils.llm_client import LLMClient, llm_client

logger = get_logger(__name__)

MAX_CANDIDATES = 3


def should_summarize(turn_count: int, interval: Optional[int] = None) -> bool:
    """True exactly on the turns that are a positive multiple of the interval."""
    interval = interval or settings.SUMMARY_INTERVAL
    return turn_count > 0 and turn_count % interval == 0


def format_conversation(messages: List[Message], pet_name: str) -> str:
    """Render messages as speaker-labelled lines for the summary prompt."""
    lines = []
    for m in messages:
        speaker = "보호자" if m.role == "user" else pet_name
        lines.append(f"{speaker}: {m.content}")
    return "\n".join(lines)


class MemoryAgent:
    """Extracts memories and writes conversation summaries."""

    def __init__(self, llm: Optional[LLMClient] = None, memory: Optional[AsyncMemoryManager] = None):
        self.llm = llm or llm_client
        self.memory = memory or memory_manager

    # ==================== Memory extraction ====================

    async def extract_memories(self, message: str, pet_name: str) -> List[MemoryCandidate]:
        """
        Propose long-term memories from one user message.

        Invalid items in the model output are skipped, not fatal.

        Raises:
            Exception: Whatever the LLM call raises
        """
        data = await self.llm.chat_json(
            model=settings.MODEL_MEMORY,
            messages=[
                {
                    "role": "user",
                    "content": MEMORY_EXTRACTION_PROMPT.format(pet_name=pet_name, message=message),
                }
            ],
            temperature=0.3,
            max_tokens=settings.MEMORY_MAX_TOKENS,
        )

        candidates = []
        for item in (data.get("memories") or [])[:MAX_CANDIDATES]:
            try:
                candidates.append(MemoryCandidate.model_validate(item))
            except ValidationError as e:
                logger.debug("Skipping invalid memory candidate", item=item, error=str(e))
        return candidates

    async def extract_and_store_memories(
        self,
        pet_id: Optional[str],
        user_id: Optional[str],
        message: str,
        pet_name: str,
    ) -> int:
        """
        Extract memories from the message and append each one.

        A no-op without both a pet id and a user id.

        Returns:
            Number of memories stored
        """
        if not pet_id or not user_id:
            logger.debug("Skipping memory extraction without durable ids", pet_id=pet_id, user_id=user_id)
            return 0

        try:
            candidates = await self.extract_memories(message, pet_name)
        except Exception as e:
            logger.error("Memory extraction failed", pet_id=pet_id, error=str(e))
            return 0

        stored = 0
        for candidate in candidates:
            try:
                await self.memory.add_memory(pet_id, user_id, candidate)
                stored += 1
            except Exception as e:
                logger.error("Failed to store extracted memory", pet_id=pet_id, title=candidate.title, error=str(e))

        logger.info("Memory extraction finished", pet_id=pet_id, candidates=len(candidates), stored=stored)
        return stored

    # ==================== Summarization ====================

    async def create_summary(self, messages: List[Message], pet_name: str, mode: Mode) -> Optional[str]:
        """
        Summarize a conversation into one paragraph.

        Returns:
            Summary text, or None if the model returned nothing

        Raises:
            Exception: Whatever the LLM call raises
        """
        guidance = MEMORIAL_SUMMARY_GUIDANCE if mode.is_memorial else ACTIVE_SUMMARY_GUIDANCE
        prompt = CONVERSATION_SUMMARY_PROMPT.format(
            pet_name=pet_name,
            mode_guidance=guidance.format(pet_name=pet_name),
            conversation=format_conversation(messages, pet_name),
        )
        summary = await self.llm.chat(
            model=settings.MODEL_SUMMARY,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.5,
            max_tokens=settings.SUMMARY_MAX_TOKENS,
        )
        summary = (summary or "").strip()
        return summary or None

    async def summarize_and_store(
        self,
        pet_id: Optional[str],
        user_id: Optional[str],
        history: List[Message],
        message: str,
        reply: str,
        pet_name: str,
        mode: Mode,
    ) -> bool:
        """
        Summarize history plus the current exchange and append the summary.

        Returns:
            True if a summary was stored
        """
        if not pet_id or not user_id:
            return False

        messages = [
            *history,
            Message(role="user", content=message),
            Message(role="assistant", content=reply),
        ]

        try:
            summary = await self.create_summary(messages, pet_name, mode)
            if not summary:
                logger.warning("Empty conversation summary generated", pet_id=pet_id, user_id=user_id)
                return False
            await self.memory.add_summary(pet_id, user_id, summary, message_count=len(messages))
            return True
        except Exception as e:
            logger.error("Failed to create conversation summary", pet_id=pet_id, user_id=user_id, error=str(e))
            return False


# Singleton instance
memory_agent = MemoryAgent()
