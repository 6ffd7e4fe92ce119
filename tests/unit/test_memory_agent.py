"""
Tests for the detached memory extraction and summarization jobs.
"""

from unittest.mock import AsyncMock

import pytest

from agents.memory_agent import MemoryAgent, format_conversation, should_summarize
from core import MemoryException
from schemas import Message, Mode


@pytest.fixture
def agent(mock_llm, memory):
    return MemoryAgent(llm=mock_llm, memory=memory)


HANGANG = {
    "memory_type": "place",
    "title": "한강 산책",
    "content": "주말마다 한강에서 산책했다",
    "importance": 7,
}


class TestMemoryExtraction:

    async def test_stores_each_candidate(self, agent, mock_llm, store, response_builder):
        mock_llm.chat_json.return_value = response_builder.memories(
            HANGANG,
            {"memory_type": "routine", "title": "아침 산책", "content": "매일 아침 7시 산책",
             "time_info": {"type": "daily", "time": "07:00"}},
        )

        stored = await agent.extract_and_store_memories("pet-1", "user-1", "주말마다 한강 갔었어", "초코")

        assert stored == 2
        assert await store.count_memories("pet-1") == 2
        memories = await store.get_recent_memories("pet-1")
        assert {m.title for m in memories} == {"한강 산책", "아침 산책"}
        routine = next(m for m in memories if m.title == "아침 산책")
        assert routine.time_info.time == "07:00"

    async def test_prompt_carries_message_and_pet_name(self, agent, mock_llm):
        await agent.extract_and_store_memories("pet-1", "user-1", "간식은 닭가슴살만 먹어", "초코")

        prompt = mock_llm.chat_json.call_args.kwargs["messages"][0]["content"]
        assert "간식은 닭가슴살만 먹어" in prompt
        assert '"초코"' in prompt

    async def test_running_twice_duplicates_without_losing_rows(self, agent, mock_llm, store, seed_memory, response_builder):
        await seed_memory("pet-1", "처음 만난 날 비가 왔다", title="첫 만남")
        mock_llm.chat_json.return_value = response_builder.memories(HANGANG)

        await agent.extract_and_store_memories("pet-1", "user-1", "주말마다 한강 갔었어", "초코")
        await agent.extract_and_store_memories("pet-1", "user-1", "주말마다 한강 갔었어", "초코")

        memories = await store.get_recent_memories("pet-1", limit=10)
        assert len(memories) == 3
        assert [m.title for m in memories].count("한강 산책") == 2
        assert any(m.title == "첫 만남" and m.content == "처음 만난 날 비가 왔다" for m in memories)
        assert len({m.id for m in memories}) == 3

    @pytest.mark.parametrize("pet_id,user_id", [(None, "user-1"), ("pet-1", None), (None, None)])
    async def test_noop_without_durable_ids(self, agent, mock_llm, store, pet_id, user_id):
        stored = await agent.extract_and_store_memories(pet_id, user_id, "한강 갔었어", "초코")

        assert stored == 0
        mock_llm.chat_json.assert_not_called()

    async def test_llm_failure_is_swallowed(self, agent, mock_llm, store):
        mock_llm.chat_json = AsyncMock(side_effect=RuntimeError("model down"))

        stored = await agent.extract_and_store_memories("pet-1", "user-1", "한강 갔었어", "초코")

        assert stored == 0
        assert await store.count_memories("pet-1") == 0

    async def test_store_failure_is_swallowed(self, agent, mock_llm, response_builder):
        mock_llm.chat_json.return_value = response_builder.memories(HANGANG)
        agent.memory = AsyncMock()
        agent.memory.add_memory = AsyncMock(side_effect=MemoryException("db down"))

        stored = await agent.extract_and_store_memories("pet-1", "user-1", "한강 갔었어", "초코")

        assert stored == 0

    async def test_invalid_candidates_are_skipped(self, agent, mock_llm, store, response_builder):
        mock_llm.chat_json.return_value = response_builder.memories(
            {"memory_type": "episode", "title": "빈 내용", "content": ""},
            {"title": "종류 없음", "content": "무언가"},
            HANGANG,
        )

        stored = await agent.extract_and_store_memories("pet-1", "user-1", "한강 갔었어", "초코")

        assert stored == 1

    async def test_nothing_worth_remembering(self, agent, mock_llm, store, response_builder):
        mock_llm.chat_json.return_value = response_builder.memories()

        assert await agent.extract_and_store_memories("pet-1", "user-1", "안녕", "초코") == 0


class TestSummarySchedule:
    """Summaries fire exactly on multiples of the interval."""

    def test_fires_only_on_boundaries(self):
        fired = [turn for turn in range(0, 35) if should_summarize(turn, interval=10)]

        assert fired == [10, 20, 30]

    def test_default_interval_from_settings(self):
        assert should_summarize(10)
        assert not should_summarize(9)
        assert not should_summarize(0)


class TestSummarization:

    async def test_summary_covers_history_and_current_exchange(self, agent, mock_llm, store, history_factory):
        mock_llm.chat.return_value = "  보호자는 초코와 한강 산책 이야기를 나눴다.  "

        stored = await agent.summarize_and_store(
            "pet-1", "user-1", history_factory(10), "주말에 한강 가자", "좋아! 멍!", "초코", Mode.ACTIVE
        )

        assert stored is True
        prompt = mock_llm.chat.call_args.kwargs["messages"][0]["content"]
        assert "보호자: 메시지 0" in prompt
        assert "보호자: 주말에 한강 가자" in prompt
        assert "초코: 좋아! 멍!" in prompt
        summary = await store.get_latest_summary("pet-1", "user-1")
        assert summary.summary == "보호자는 초코와 한강 산책 이야기를 나눴다."
        assert summary.message_count == 12

    async def test_memorial_guidance(self, agent, mock_llm, history_factory):
        await agent.summarize_and_store(
            "pet-2", "user-1", history_factory(2), "보고 싶어", "나도 보고 싶어", "보리", Mode.MEMORIAL
        )

        prompt = mock_llm.chat.call_args.kwargs["messages"][0]["content"]
        assert "무지개다리를 건넜고" in prompt

    async def test_summaries_accumulate(self, agent, mock_llm, store, history_factory):
        mock_llm.chat.side_effect = ["첫 번째 요약", "두 번째 요약"]

        await agent.summarize_and_store("pet-1", "user-1", history_factory(10), "a", "b", "초코", Mode.ACTIVE)
        await agent.summarize_and_store("pet-1", "user-1", history_factory(20), "c", "d", "초코", Mode.ACTIVE)

        assert await store.count_summaries("pet-1", "user-1") == 2
        assert (await store.get_latest_summary("pet-1", "user-1")).summary == "두 번째 요약"

    async def test_failure_is_swallowed(self, agent, mock_llm, store, history_factory):
        mock_llm.chat = AsyncMock(side_effect=RuntimeError("model down"))

        stored = await agent.summarize_and_store(
            "pet-1", "user-1", history_factory(10), "a", "b", "초코", Mode.ACTIVE
        )

        assert stored is False
        assert await store.count_summaries("pet-1", "user-1") == 0

    async def test_empty_summary_is_not_stored(self, agent, mock_llm, store, history_factory):
        mock_llm.chat.return_value = "   "

        assert await agent.summarize_and_store(
            "pet-1", "user-1", history_factory(10), "a", "b", "초코", Mode.ACTIVE
        ) is False
        assert await store.count_summaries("pet-1", "user-1") == 0

    def test_format_conversation(self):
        text = format_conversation(
            [Message(role="user", content="안녕"), Message(role="assistant", content="멍!")], "초코"
        )

        assert text == "보호자: 안녕\n초코: 멍!"
