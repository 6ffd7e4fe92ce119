"""
Context Composer - merges every context source into one bounded payload.

The system prompt is built from an ordered list of (priority, block_id, render)
entries:

    1  summary          latest conversation summary
    2  special_dates    birthdays and memorial anniversaries
    3  timeline         diary entries
    4  photos           captioned photos
    5  reminders        care schedule or shared routine
    6  memories         recent long-term memories
    7  instructions     mode persona (tone, forbidden phrasings, length policy)
    8  emotion          guidance for the classified emotion / grief stage
    9  history          recent raw messages (separate chat messages)
    10 message          the new user message

Blocks that render empty are omitted. When the payload is over budget the
optional blocks are dropped from priority 6 down to 1. Only then are blocks 8
and 7 cut from the tail. The live turn (9 and 10) is never altered.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Dict, List, Optional, Tuple

from config.settings import settings
from core import get_logger
from agents.emotion import build_emotion_guidance
from agents.narratives import (
    memories_to_context,
    personalization_to_context,
    photos_to_context,
    reminders_to_context,
    special_dates_to_context,
    summary_to_context,
    timeline_to_context,
)
from agents.special_dates import detect_special_dates
from prompts.narratives import MEMORIAL_BASIC_INFO
from prompts.personas import ACTIVE_PERSONA, MEMORIAL_PERSONA
from prompts.personas import active as active_persona
from prompts.personas import memorial as memorial_persona
from prompts.system_frame import (
    BLOCK_SEPARATOR,
    SUGGESTIONS_INSTRUCTIONS,
    SUGGESTION_EXAMPLES,
    TRUNCATION_MARK,
)
from schemas import (
    ConversationSummarySchema,
    EmotionClassification,
    MemorySchema,
    Message,
    Mode,
    PetProfile,
    PhotoMemory,
    Reminder,
    TimelineEntry,
)

logger = get_logger(__name__)

# Dropped in this order when over budget
OPTIONAL_DROP_ORDER = ["memories", "reminders", "photos", "timeline", "special_dates", "summary"]
# Cut from the tail, in this order, only after every optional block is gone
TRUNCATE_ORDER = ["emotion", "instructions"]

SPECIES_TEXT = {"dog": "강아지", "cat": "고양이", "other": "반려동물"}
GENDER_TEXT = {"male": "남자아이", "female": "여자아이"}


@dataclass
class ContextBlock:
    """One rendered section of the system prompt."""
    priority: int
    block_id: str
    text: str


@dataclass
class ComposedContext:
    """Everything the generation call needs for one turn."""
    blocks: List[ContextBlock]
    history: List[Dict[str, str]]
    message: str
    budget: int
    dropped: List[str] = field(default_factory=list)
    truncated: List[str] = field(default_factory=list)

    @property
    def system_prompt(self) -> str:
        return BLOCK_SEPARATOR.join(block.text for block in self.blocks)

    @property
    def block_ids(self) -> List[str]:
        return [block.block_id for block in self.blocks]

    def block(self, block_id: str) -> Optional[ContextBlock]:
        return next((b for b in self.blocks if b.block_id == block_id), None)

    @property
    def total_chars(self) -> int:
        return (
            len(self.system_prompt)
            + sum(len(m["content"]) for m in self.history)
            + len(self.message)
        )

    def to_messages(self) -> List[Dict[str, str]]:
        """System prompt, then history, then the new message."""
        return [
            {"role": "system", "content": self.system_prompt},
            *self.history,
            {"role": "user", "content": self.message},
        ]


# ==================== Behavioral instructions ====================


def describe_age(birth_date: date, today: date) -> str:
    """Age as "N개월" under a year, else "N살" or "N살 M개월". Empty for future dates."""
    months = (today.year - birth_date.year) * 12 + (today.month - birth_date.month)
    if today.day < birth_date.day:
        months -= 1
    if months < 0:
        return ""
    if months < 12:
        return f"{months}개월"
    years, rest = divmod(months, 12)
    return f"{years}살 {rest}개월" if rest else f"{years}살"


def time_greeting(now: datetime) -> str:
    if now.hour < 12:
        return "아침"
    if now.hour < 18:
        return "낮"
    return "저녁"


def _numbered(topics: List[str]) -> str:
    return "\n".join(f"   {i}. {topic}" for i, topic in enumerate(topics, start=1))


def _inline(block: str) -> str:
    """Wrap an optional persona section so an empty one leaves no blank lines."""
    return f"\n{block}\n" if block else ""


def talk_topics(pet: PetProfile) -> List[str]:
    """Rotating conversation topics for a living pet."""
    topics = []
    if pet.favorite_activity:
        topics.append(f"좋아하는 활동({pet.favorite_activity})에 대해 신나게 이야기")
    if pet.favorite_place:
        topics.append(f"좋아하는 장소({pet.favorite_place}) 가고 싶다고 이야기")
    if pet.special_habits:
        topics.append(f"특별한 버릇({pet.special_habits})을 보여주며 대화")
    if pet.favorite_food:
        topics.append(f"좋아하는 음식({pet.favorite_food}) 이야기")
    if pet.nicknames:
        topics.append(f"별명({pet.nicknames})에 얽힌 에피소드")
    if pet.how_we_met:
        topics.append(f"처음 만났던 이야기({pet.how_we_met})")
    return topics or list(active_persona.FALLBACK_TOPICS)


def memory_topics(pet: PetProfile) -> List[str]:
    """Rotating memory topics for a memorial pet."""
    topics = []
    if pet.favorite_place:
        topics.append(f"함께 갔던 {pet.favorite_place}에서의 추억")
    if pet.favorite_activity:
        topics.append(f"같이 {pet.favorite_activity} 했던 시간")
    if pet.special_habits:
        topics.append(f"{pet.special_habits} 하던 모습")
    if pet.favorite_food:
        topics.append(f"{pet.favorite_food} 맛있게 먹던 모습")
    if pet.how_we_met:
        topics.append(f"처음 만났던 날의 기억 ({pet.how_we_met})")
    if pet.memorable_memory:
        topics.append(f"특별했던 순간: {pet.memorable_memory}")
    if pet.nicknames:
        first = pet.nicknames.split(",")[0].strip()
        if first:
            topics.append(f'"{first}"라고 불러주던 기억')
    return topics or list(memorial_persona.FALLBACK_TOPICS)


def render_instructions(pet: PetProfile, mode: Mode, now: datetime, has_memories: bool) -> str:
    """
    Render the mode persona for this pet.

    Args:
        pet: Pet profile
        mode: Conversation mode
        now: Current time in the owner's timezone
        has_memories: Whether long-term memories were retrieved. A memorial
            pet without memories falls back to its basic facts.
    """
    species_text = SPECIES_TEXT[pet.species]
    gender_text = GENDER_TEXT[pet.gender]
    breed = pet.breed or species_text
    personalization = _inline(personalization_to_context(pet))
    suggestions = SUGGESTIONS_INSTRUCTIONS.format(
        examples="\n".join(SUGGESTION_EXAMPLES[mode.value])
    )

    if mode.is_memorial:
        personality = pet.personality or memorial_persona.DEFAULT_PERSONALITY
        sound = {"dog": "멍멍", "cat": "야옹"}.get(pet.species)
        basic_info = ""
        if not has_memories:
            basic_info = _inline(MEMORIAL_BASIC_INFO.format(
                pet_name=pet.name,
                breed=breed,
                species=species_text,
                gender=gender_text,
                personality=personality,
                birthday_line=f"\n- 생일: {pet.birth_date.isoformat()}" if pet.birth_date else "",
            ))
        return MEMORIAL_PERSONA.format(
            pet_name=pet.name,
            breed=breed,
            species_text=species_text,
            gender_text=gender_text,
            personality=personality,
            personalization=personalization,
            basic_info=basic_info,
            topics=_numbered(memory_topics(pet)),
            sound_line=f'- "{sound}~"은 가끔만\n' if sound else "",
            suggestions=suggestions,
        )

    personality = pet.personality or active_persona.DEFAULT_PERSONALITY
    age = describe_age(pet.birth_date, now.date()) if pet.birth_date else ""
    sound = {"dog": "멍멍!", "cat": "야옹~"}.get(pet.species)
    return ACTIVE_PERSONA.format(
        pet_name=pet.name,
        breed=breed,
        species_text=species_text,
        gender_text=gender_text,
        age_suffix=f", {age}" if age else "",
        personality=personality,
        exercise_line=active_persona.DOG_EXERCISE if pet.species == "dog" else active_persona.CAT_EXERCISE,
        personalization=personalization,
        topics=_numbered(talk_topics(pet)),
        time_greeting=time_greeting(now),
        sound_line=f'- "{sound}" 감탄사는 가끔만\n' if sound else "",
        suggestions=suggestions,
    )


# ==================== Composer ====================


def _truncate_tail(text: str, excess: int) -> str:
    keep = len(text) - excess - len(TRUNCATION_MARK)
    if keep <= 0:
        return ""
    return text[:keep].rstrip() + TRUNCATION_MARK


class ContextComposer:
    """Builds the bounded prompt payload for one turn."""

    def __init__(
        self,
        budget: Optional[int] = None,
        history_limit: Optional[int] = None,
        max_message_length: Optional[int] = None,
    ):
        self.budget = budget or settings.CONTEXT_CHAR_BUDGET
        self.history_limit = history_limit or settings.HISTORY_TURN_LIMIT
        self.max_message_length = max_message_length or settings.MAX_MESSAGE_LENGTH

    def compose(
        self,
        pet: PetProfile,
        message: str,
        classification: EmotionClassification,
        now: datetime,
        history: Optional[List[Message]] = None,
        summary: Optional[ConversationSummarySchema] = None,
        memories: Optional[List[MemorySchema]] = None,
        timeline: Optional[List[TimelineEntry]] = None,
        photos: Optional[List[PhotoMemory]] = None,
        reminders: Optional[List[Reminder]] = None,
    ) -> ComposedContext:
        """
        Compose the system prompt and live turn.

        Args:
            pet: Pet profile; its status decides the mode
            message: The new user message, already sanitized
            classification: Emotion classification of the message
            now: Current time in the owner's timezone
            history: Conversation so far, oldest first
            summary: Latest conversation summary, if any
            memories: Recent long-term memories, newest first
            timeline: Timeline entries
            photos: Captioned photos
            reminders: Reminders, enabled or not

        Returns:
            ComposedContext within budget, unless the live turn alone exceeds it
        """
        mode = pet.mode
        memories = memories or []

        entries: List[Tuple[int, str, Callable[[], str]]] = [
            (1, "summary", lambda: summary_to_context(summary)),
            (2, "special_dates", lambda: special_dates_to_context(detect_special_dates(pet, now.date()))),
            (3, "timeline", lambda: timeline_to_context(timeline or [])),
            (4, "photos", lambda: photos_to_context(photos or [])),
            (5, "reminders", lambda: reminders_to_context(reminders or [], pet.name, mode, now)),
            (6, "memories", lambda: memories_to_context(memories, mode)),
            (7, "instructions", lambda: render_instructions(pet, mode, now, has_memories=bool(memories))),
            (8, "emotion", lambda: build_emotion_guidance(classification, mode)),
        ]

        blocks = []
        for priority, block_id, render in sorted(entries, key=lambda e: e[0]):
            text = render()
            if text:
                blocks.append(ContextBlock(priority=priority, block_id=block_id, text=text))

        composed = ComposedContext(
            blocks=blocks,
            history=self._bound_history(history or []),
            message=message,
            budget=self.budget,
        )
        self._fit(composed)

        logger.debug(
            "Context composed",
            mode=mode.value,
            blocks=composed.block_ids,
            dropped=composed.dropped,
            truncated=composed.truncated,
            total_chars=composed.total_chars,
            budget=self.budget,
        )
        return composed

    def _bound_history(self, history: List[Message]) -> List[Dict[str, str]]:
        """Most recent turns only, each cut to the message length cap."""
        recent = history[-self.history_limit:] if self.history_limit else []
        return [
            {"role": m.role, "content": m.content[: self.max_message_length]}
            for m in recent
        ]

    def _fit(self, composed: ComposedContext) -> None:
        """Drop, then truncate, until the payload is within budget."""
        for block_id in OPTIONAL_DROP_ORDER:
            if composed.total_chars <= self.budget:
                return
            block = composed.block(block_id)
            if block is not None:
                composed.blocks.remove(block)
                composed.dropped.append(block_id)

        for block_id in TRUNCATE_ORDER:
            excess = composed.total_chars - self.budget
            if excess <= 0:
                return
            block = composed.block(block_id)
            if block is None:
                continue
            block.text = _truncate_tail(block.text, excess)
            if not block.text:
                composed.blocks.remove(block)
            composed.truncated.append(block_id)

        if composed.total_chars > self.budget:
            logger.warning(
                "Live turn exceeds context budget",
                total_chars=composed.total_chars,
                budget=self.budget,
            )
        elif composed.dropped or composed.truncated:
            logger.info(
                "Context trimmed to budget",
                dropped=composed.dropped,
                truncated=composed.truncated,
                total_chars=composed.total_chars,
            )


# Singleton instance
context_composer = ContextComposer()
