"""
Tests for reply generation: policy selection, error mapping, suggestion parsing.
"""

import asyncio
from unittest.mock import AsyncMock

import httpx
import litellm
import pytest

from agents.context_composer import ContextComposer
from agents.pet_agent import PetAgent, parse_suggestions, policy_for
from config.settings import settings
from core import (
    GenerationError,
    GenerationAuthError,
    GenerationRateLimitError,
    GenerationTimeoutError,
)
from schemas import EmotionClassification, Mode


@pytest.fixture
def agent(mock_llm):
    agent = PetAgent(model="test-model")
    agent.llm = mock_llm
    return agent


@pytest.fixture
def composed(active_pet, fixed_now):
    return ContextComposer().compose(
        pet=active_pet, message="안녕", classification=EmotionClassification.neutral(), now=fixed_now
    )


def _litellm_error(cls, status_code: int):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(status_code, request=request)
    return cls(message="upstream", llm_provider="openai", model="gpt-4o-mini", response=response)


class TestPolicy:

    def test_memorial_policy_is_shorter_and_warmer(self):
        memorial = policy_for(Mode.MEMORIAL)
        active = policy_for(Mode.ACTIVE)

        assert memorial.max_tokens < active.max_tokens
        assert memorial.temperature > active.temperature
        assert memorial.presence_penalty > active.presence_penalty
        assert memorial.frequency_penalty > active.frequency_penalty

    def test_policy_values_come_from_settings(self):
        policy = policy_for(Mode.MEMORIAL)

        assert policy.max_tokens == settings.MEMORIAL_MAX_TOKENS == 300
        assert policy.temperature == settings.MEMORIAL_TEMPERATURE == 0.95

    async def test_generate_passes_policy_and_seed(self, agent, mock_llm, composed):
        await agent.generate(composed, Mode.MEMORIAL)

        kwargs = mock_llm.chat_with_usage.call_args.kwargs
        assert kwargs["max_tokens"] == settings.MEMORIAL_MAX_TOKENS
        assert kwargs["temperature"] == settings.MEMORIAL_TEMPERATURE
        assert kwargs["presence_penalty"] == settings.MEMORIAL_PRESENCE_PENALTY
        assert kwargs["frequency_penalty"] == settings.MEMORIAL_FREQUENCY_PENALTY
        assert 0 <= kwargs["seed"] <= 999_999
        assert kwargs["messages"] == composed.to_messages()


class TestGenerate:

    async def test_reply_with_usage_and_suggestions(self, agent, mock_llm, composed, response_builder):
        mock_llm.chat_with_usage.return_value = response_builder.reply(
            "멍! 산책 가자!", ["오늘 산책 갈까?", "2. 간식 뭐 먹었어?", "- 요즘 기분이 어때?", "넷째 질문"]
        )

        result = await agent.generate(composed, Mode.ACTIVE)

        assert result.reply == "멍! 산책 가자!"
        assert result.suggested_questions == ["오늘 산책 갈까?", "간식 뭐 먹었어?", "요즘 기분이 어때?"]
        assert result.usage.tokens_in == 120
        assert result.usage.tokens_out == 40
        assert result.policy == policy_for(Mode.ACTIVE)

    async def test_single_call_no_retry(self, agent, mock_llm, composed):
        mock_llm.chat_with_usage = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(GenerationError):
            await agent.generate(composed, Mode.ACTIVE)

        assert mock_llm.chat_with_usage.await_count == 1

    async def test_empty_reply_is_an_error(self, agent, mock_llm, composed, response_builder):
        mock_llm.chat_with_usage.return_value = response_builder.reply("   ")

        with pytest.raises(GenerationError):
            await agent.generate(composed, Mode.ACTIVE)


class TestErrorMapping:

    async def test_auth_error(self, agent, mock_llm, composed):
        mock_llm.chat_with_usage = AsyncMock(side_effect=_litellm_error(litellm.AuthenticationError, 401))

        with pytest.raises(GenerationAuthError) as exc_info:
            await agent.generate(composed, Mode.ACTIVE)

        assert exc_info.value.status == 401

    async def test_rate_limit_error(self, agent, mock_llm, composed):
        mock_llm.chat_with_usage = AsyncMock(side_effect=_litellm_error(litellm.RateLimitError, 429))

        with pytest.raises(GenerationRateLimitError) as exc_info:
            await agent.generate(composed, Mode.ACTIVE)

        assert exc_info.value.status == 429

    async def test_generic_error(self, agent, mock_llm, composed):
        mock_llm.chat_with_usage = AsyncMock(side_effect=ValueError("bad payload"))

        with pytest.raises(GenerationError) as exc_info:
            await agent.generate(composed, Mode.ACTIVE)

        assert type(exc_info.value) is GenerationError
        assert exc_info.value.status == 502

    async def test_timeout(self, agent, mock_llm, composed):
        async def slow(**kwargs):
            await asyncio.sleep(5)

        mock_llm.chat_with_usage = AsyncMock(side_effect=slow)

        with pytest.raises(GenerationTimeoutError) as exc_info:
            await agent.generate(composed, Mode.ACTIVE, timeout=0.05)

        assert exc_info.value.status == 504
        assert exc_info.value.context["timeout_seconds"] == 0.05


class TestParseSuggestions:

    def test_no_marker(self):
        assert parse_suggestions("  그냥 답장  ") == ("그냥 답장", [])

    def test_drops_long_and_empty_lines(self):
        raw = "답장\n---SUGGESTIONS---\n\n1) 짧은 질문\n" + "아주 긴 질문 " * 10 + "\n3. 또 다른 질문"

        reply, suggestions = parse_suggestions(raw)

        assert reply == "답장"
        assert suggestions == ["짧은 질문", "또 다른 질문"]
