"""
Shared pytest fixtures for pet companion tests.
"""

from datetime import date, datetime
from typing import List, Optional
from unittest.mock import AsyncMock

import pytest
import pytz

from config.settings import settings
from memory.memory_manager_async import AsyncMemoryManager
from memory.store import InMemoryRecordStore
from schemas import (
    LifeStatus,
    MemoryCandidate,
    Message,
    PetProfile,
    Reminder,
    ReminderSchedule,
)
from utils.llm_client import LLMResponse


# --- Configuration ---

@pytest.fixture(autouse=True)
def api_key(monkeypatch):
    """Every test runs with a generation credential unless it removes it."""
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")
    return "sk-test"


# --- Time fixtures ---

@pytest.fixture
def fixed_now():
    """A fixed datetime for deterministic time tests."""
    tz = pytz.timezone("Asia/Seoul")
    return tz.localize(datetime(2026, 2, 5, 14, 30, 0))  # Thursday 2:30 PM


@pytest.fixture
def today(fixed_now):
    return fixed_now.date()


# --- Pet builders ---

def make_pet(**overrides) -> PetProfile:
    """Build a pet profile with sensible defaults."""
    fields = {
        "id": "pet-1",
        "name": "초코",
        "species": "dog",
        "breed": "말티즈",
        "gender": "male",
        "personality": "활발하고 애교 많은",
        "birth_date": date(2020, 6, 15),
        "status": LifeStatus.ACTIVE,
    }
    fields.update(overrides)
    return PetProfile(**fields)


@pytest.fixture
def active_pet():
    return make_pet()


@pytest.fixture
def memorial_pet():
    return make_pet(
        id="pet-2",
        name="보리",
        status=LifeStatus.MEMORIAL,
        memorial_date=date(2025, 3, 1),
    )


def make_reminder(
    title: str = "저녁 산책",
    type: str = "walk",
    schedule_type: str = "daily",
    time: str = "18:00",
    enabled: bool = True,
    **schedule,
) -> Reminder:
    """Build a reminder."""
    return Reminder(
        type=type,
        title=title,
        enabled=enabled,
        schedule=ReminderSchedule(type=schedule_type, time=time, **schedule),
    )


def make_history(turns: int) -> List[Message]:
    """Alternating user/assistant messages, oldest first."""
    return [
        Message(role="user" if i % 2 == 0 else "assistant", content=f"메시지 {i}")
        for i in range(turns)
    ]


# --- Mock LLM client ---

class LLMResponseBuilder:
    """Helper to build mock LLM payloads."""

    @staticmethod
    def emotion(emotion: str = "neutral", score: float = 0.5, grief_stage: Optional[str] = None) -> dict:
        payload = {"emotion": emotion, "score": score, "context": "테스트"}
        if grief_stage is not None:
            payload["griefStage"] = grief_stage
        return payload

    @staticmethod
    def memories(*items: dict) -> dict:
        return {"memories": list(items)}

    @staticmethod
    def reply(text: str, suggestions: Optional[List[str]] = None, model: str = "gpt-4o-mini") -> LLMResponse:
        content = text
        if suggestions is not None:
            content += "\n---SUGGESTIONS---\n" + "\n".join(suggestions)
        return LLMResponse(content=content, model=model, input_tokens=120, output_tokens=40, total_tokens=160)


@pytest.fixture
def response_builder():
    """Factory for mock LLM payloads."""
    return LLMResponseBuilder


@pytest.fixture
def mock_llm():
    """Mock LLM client for testing without API calls."""
    llm = AsyncMock()
    llm.chat = AsyncMock(return_value="우리는 오늘 산책 이야기를 했다.")
    llm.chat_json = AsyncMock(return_value=LLMResponseBuilder.emotion())
    llm.chat_with_usage = AsyncMock(return_value=LLMResponseBuilder.reply("멍! 반가워"))
    return llm


# --- Memory store ---

@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def memory(store):
    return AsyncMemoryManager(store=store)


@pytest.fixture
def seed_memory(memory):
    """Append a memory for a pet."""

    async def _seed(pet_id: str, content: str, title: str = "추억", user_id: str = "user-1", **fields):
        return await memory.add_memory(
            pet_id, user_id, MemoryCandidate(memory_type="episode", title=title, content=content, **fields)
        )

    return _seed


# --- Factory fixtures ---

@pytest.fixture
def pet_factory():
    return make_pet


@pytest.fixture
def reminder_factory():
    return make_reminder


@pytest.fixture
def history_factory():
    return make_history
