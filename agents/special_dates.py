"""
Special-date detection.

Pure functions over the pet profile and an injected ``today``. Nothing here
reads the clock; callers pass the date in their own timezone.
"""

import calendar
from datetime import date
from typing import List, Optional

from config.settings import settings
from schemas import PetProfile

# Days since the memorial date that get their own announcement
HUNDRED_DAYS = 100
YEAR_MILESTONES = {365: 1, 730: 2, 1095: 3}


def _anniversary_in(year: int, original: date) -> date:
    """The month/day of ``original`` in ``year``. Feb 29 falls on Feb 28 in common years."""
    if original.month == 2 and original.day == 29 and not calendar.isleap(year):
        return date(year, 2, 28)
    return date(year, original.month, original.day)


def days_until_birthday(birth_date: date, today: date) -> int:
    """Days until the next birthday, 0 when it is today."""
    this_year = _anniversary_in(today.year, birth_date)
    if this_year >= today:
        return (this_year - today).days
    return (_anniversary_in(today.year + 1, birth_date) - today).days


def detect_special_dates(
    pet: PetProfile, today: date, upcoming_days: Optional[int] = None
) -> List[str]:
    """
    Announcements for birthdays and memorial anniversaries.

    Args:
        pet: Pet profile
        today: Current date in the owner's timezone
        upcoming_days: Announce a birthday this many days ahead.
            Defaults to UPCOMING_BIRTHDAY_DAYS.

    Returns:
        Announcement strings, today's events first, then the upcoming birthday.
        Empty when nothing applies.
    """
    upcoming_days = upcoming_days if upcoming_days is not None else settings.UPCOMING_BIRTHDAY_DAYS
    today_events: List[str] = []
    upcoming: List[str] = []

    if pet.birth_date:
        days_left = days_until_birthday(pet.birth_date, today)
        if days_left == 0:
            age = max(today.year - pet.birth_date.year, 0)
            today_events.append(f"오늘은 {pet.name}의 생일입니다! ({age}살)")
        elif days_left <= upcoming_days:
            upcoming.append(f"{pet.name}의 생일이 {days_left}일 남았습니다!")

    if pet.mode.is_memorial and pet.memorial_date and pet.memorial_date <= today:
        days_since = (today - pet.memorial_date).days
        if _anniversary_in(today.year, pet.memorial_date) == today:
            today_events.append(f"오늘은 {pet.name}이(가) 무지개다리를 건넌 날입니다.")
        if days_since == HUNDRED_DAYS:
            today_events.append(f"{pet.name}이(가) 무지개다리를 건넌 지 100일이 되었습니다.")
        if days_since in YEAR_MILESTONES:
            today_events.append(
                f"{pet.name}이(가) 무지개다리를 건넌 지 {YEAR_MILESTONES[days_since]}년이 되었습니다."
            )

    return today_events + upcoming
