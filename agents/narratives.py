"""
Narrative converters - structured records into context blocks.

Every converter returns an empty string when it has nothing to say, so the
composer can omit the block entirely. Reminder phrasing depends on the mode:
upcoming care tasks for a living pet, shared routine for a memorial pet.
"""

from datetime import datetime
from typing import List, Optional

from prompts.narratives import (
    SUMMARY_BLOCK,
    SPECIAL_DAY_BLOCK,
    TIMELINE_BLOCK,
    TIMELINE_MOODS,
    PHOTO_BLOCK,
    ACTIVE_REMINDER_BLOCK,
    UPCOMING_TODAY,
    MEMORIAL_REMINDER_BLOCK,
    REMINDER_TYPE_LABELS,
    DAYS_OF_WEEK,
    ACTIVE_MEMORY_BLOCK,
    MEMORIAL_MEMORY_BLOCK,
    PERSONALIZATION_BLOCK,
)
from schemas import (
    ConversationSummarySchema,
    MemorySchema,
    MemoryTimeInfo,
    Mode,
    PetProfile,
    PhotoMemory,
    Reminder,
    ReminderSchedule,
    TimelineEntry,
)


def summary_to_context(summary: Optional[ConversationSummarySchema]) -> str:
    """Latest conversation summary as a block."""
    if summary is None or not summary.summary.strip():
        return ""
    return SUMMARY_BLOCK.format(summary=summary.summary.strip())


def special_dates_to_context(announcements: List[str]) -> str:
    """Special-date announcements as a block."""
    if not announcements:
        return ""
    return SPECIAL_DAY_BLOCK.format(announcements="\n".join(announcements))


def timeline_to_context(timeline: List[TimelineEntry]) -> str:
    """Timeline entries with date, title and mood."""
    if not timeline:
        return ""

    entries = []
    for entry in timeline:
        mood = TIMELINE_MOODS.get(entry.mood, "")
        line = f'- {entry.date.isoformat()}: "{entry.title}" {mood}'
        if entry.content:
            line += f"\n  {entry.content}"
        entries.append(line.strip())

    return TIMELINE_BLOCK.format(entries="\n\n".join(entries))


def photos_to_context(photos: List[PhotoMemory]) -> str:
    """Captioned photos."""
    if not photos:
        return ""
    entries = [f'- {photo.date.isoformat()}: "{photo.caption}"' for photo in photos]
    return PHOTO_BLOCK.format(entries="\n".join(entries))


def format_schedule_text(schedule: ReminderSchedule, mode: Mode) -> str:
    """
    Human readable schedule text.

    Weekly reminders read "매주 X요일" for a living pet and "X요일마다" for a
    memorial pet, where they describe a habit rather than an appointment.
    """
    time = schedule.time
    if schedule.type == "daily":
        return f"매일 {time}"
    if schedule.type == "weekly":
        day = DAYS_OF_WEEK[schedule.day_of_week]
        if mode.is_memorial:
            return f"{day}요일마다 {time}"
        return f"매주 {day}요일 {time}"
    if schedule.type == "monthly":
        if schedule.day_of_month:
            return f"매월 {schedule.day_of_month}일 {time}"
        return f"매월 {time}"
    if schedule.type == "once" and schedule.date:
        return f"{schedule.date.isoformat()} {time}"
    return time


def _fires_today(schedule: ReminderSchedule, now: datetime) -> bool:
    if schedule.type == "daily":
        return True
    if schedule.type == "weekly":
        # isoweekday: Monday=1 .. Sunday=7, stored days are Sunday=0
        return schedule.day_of_week == now.isoweekday() % 7
    if schedule.type == "monthly":
        return schedule.day_of_month == now.day
    if schedule.type == "once":
        return schedule.date == now.date()
    return False


def upcoming_today(reminders: List[Reminder], now: datetime) -> List[Reminder]:
    """
    Enabled reminders that still have to happen today, soonest first.

    A reminder at exactly the current minute counts as already due.
    """
    current = (now.hour, now.minute)
    upcoming = [
        r for r in reminders
        if r.enabled and _fires_today(r.schedule, now) and r.schedule.hour_minute > current
    ]
    return sorted(upcoming, key=lambda r: r.schedule.hour_minute)


def reminders_to_context(
    reminders: List[Reminder], pet_name: str, mode: Mode, now: datetime
) -> str:
    """
    Reminders as care schedule (active) or shared routine (memorial).

    Args:
        reminders: All reminders for the pet, enabled or not
        pet_name: Pet name for the block header
        mode: Conversation mode
        now: Current time in the owner's timezone

    Returns:
        Context block, or "" when nothing applies
    """
    if mode.is_memorial:
        # Past routine: the enabled flag no longer means anything
        if not reminders:
            return ""
        entries = [
            f"- [{_type_label(r)}] {r.title} ({format_schedule_text(r.schedule, mode)})"
            for r in reminders
        ]
        return MEMORIAL_REMINDER_BLOCK.format(pet_name=pet_name, entries="\n".join(entries))

    active = [r for r in reminders if r.enabled]
    if not active:
        return ""

    entries = [
        f"- [{_type_label(r)}] {r.title}: {format_schedule_text(r.schedule, mode)}"
        for r in active
    ]
    context = ACTIVE_REMINDER_BLOCK.format(pet_name=pet_name, entries="\n".join(entries))

    left_today = upcoming_today(active, now)
    if left_today:
        context += UPCOMING_TODAY.format(
            upcoming=", ".join(f"{r.title}({r.schedule.time})" for r in left_today),
            first_title=left_today[0].title,
        )
    return context


def _type_label(reminder: Reminder) -> str:
    return REMINDER_TYPE_LABELS.get(reminder.type, reminder.type)


def _time_info_text(time_info: MemoryTimeInfo) -> str:
    prefix = {"daily": "매일", "weekly": "매주", "monthly": "매월"}.get(time_info.type, "")
    return " ".join(part for part in (prefix, time_info.time or "") if part)


def memories_to_context(memories: List[MemorySchema], mode: Mode) -> str:
    """Retrieved long-term memories, newest first as given."""
    if not memories:
        return ""

    entries = []
    for memory in memories:
        line = f"- [{memory.title}] {memory.content}"
        if memory.time_info:
            schedule = _time_info_text(memory.time_info)
            if schedule:
                line += f" ({schedule})"
        entries.append(line)

    template = MEMORIAL_MEMORY_BLOCK if mode.is_memorial else ACTIVE_MEMORY_BLOCK
    return template.format(entries="\n".join(entries))


def personalization_to_context(pet: PetProfile) -> str:
    """The pet's unique details, used inside the behavioral instructions."""
    fields = [
        ("별명", pet.nicknames),
        ("특별한 버릇/습관", pet.special_habits),
        ("좋아하는 간식/음식", pet.favorite_food),
        ("좋아하는 놀이/활동", pet.favorite_activity),
        ("좋아하는 장소", pet.favorite_place),
        ("처음 만난 날", pet.adopted_date.isoformat() if pet.adopted_date else None),
        ("어떻게 만났는지", pet.how_we_met),
        ("함께한 기간", pet.together_period),
        ("기억하고 싶은 순간", pet.memorable_memory),
    ]
    items = [f"- {label}: {value}" for label, value in fields if value]
    if not items:
        return ""
    return PERSONALIZATION_BLOCK.format(
        pet_name=pet.name,
        breed=pet.breed or "반려동물",
        items="\n".join(items),
    )
