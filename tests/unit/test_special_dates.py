"""
Tests for special-date detection with an injected clock.
"""

from datetime import date, timedelta

import pytest

from agents.special_dates import days_until_birthday, detect_special_dates
from schemas import LifeStatus


class TestBirthday:
    """Birthday today and upcoming birthdays."""

    def test_birthday_today_is_announced_with_age(self, pet_factory):
        pet = pet_factory(birth_date=date(2020, 2, 5))

        announcements = detect_special_dates(pet, date(2026, 2, 5))

        assert announcements == ["오늘은 초코의 생일입니다! (6살)"]

    def test_birth_date_equal_to_today(self, pet_factory, today):
        pet = pet_factory(birth_date=today)

        announcements = detect_special_dates(pet, today)

        assert any("생일입니다" in a for a in announcements)

    def test_birthday_exactly_seven_days_away_is_upcoming(self, pet_factory, today):
        pet = pet_factory(birth_date=(today + timedelta(days=7)).replace(year=2019))

        announcements = detect_special_dates(pet, today)

        assert announcements == ["초코의 생일이 7일 남았습니다!"]

    @pytest.mark.parametrize("days_away", [8, 30, 200])
    def test_birthday_eight_or_more_days_away_is_silent(self, pet_factory, today, days_away):
        pet = pet_factory(birth_date=(today + timedelta(days=days_away)).replace(year=2019))

        assert detect_special_dates(pet, today) == []

    def test_upcoming_birthday_across_new_year(self, pet_factory):
        pet = pet_factory(birth_date=date(2021, 1, 2))

        announcements = detect_special_dates(pet, date(2026, 12, 29))

        assert announcements == ["초코의 생일이 4일 남았습니다!"]

    def test_no_birth_date(self, pet_factory, today):
        pet = pet_factory(birth_date=None)

        assert detect_special_dates(pet, today) == []

    def test_leap_day_birthday_in_common_year(self):
        assert days_until_birthday(date(2020, 2, 29), date(2026, 2, 28)) == 0
        assert days_until_birthday(date(2020, 2, 29), date(2028, 2, 28)) == 1

    def test_is_pure(self, pet_factory, today):
        pet = pet_factory(birth_date=today.replace(year=2018))

        assert detect_special_dates(pet, today) == detect_special_dates(pet, today)


class TestMemorialDates:
    """Memorial day and milestones."""

    @pytest.fixture
    def memorial(self, pet_factory):
        def _build(memorial_date, **overrides):
            return pet_factory(
                name="보리",
                status=LifeStatus.MEMORIAL,
                memorial_date=memorial_date,
                birth_date=overrides.pop("birth_date", None),
                **overrides,
            )
        return _build

    def test_memorial_day_anniversary(self, memorial):
        pet = memorial(date(2024, 5, 10))

        announcements = detect_special_dates(pet, date(2026, 5, 10))

        assert "오늘은 보리이(가) 무지개다리를 건넌 날입니다." in announcements

    def test_hundred_days(self, memorial):
        passed = date(2025, 11, 1)
        pet = memorial(passed)

        announcements = detect_special_dates(pet, passed + timedelta(days=100))

        assert announcements == ["보리이(가) 무지개다리를 건넌 지 100일이 되었습니다."]

    @pytest.mark.parametrize("days,years", [(365, 1), (730, 2), (1095, 3)])
    def test_year_milestones(self, memorial, days, years):
        passed = date(2021, 7, 1)
        pet = memorial(passed)

        announcements = detect_special_dates(pet, passed + timedelta(days=days))

        assert f"보리이(가) 무지개다리를 건넌 지 {years}년이 되었습니다." in announcements

    def test_ordinary_day_is_silent(self, memorial):
        pet = memorial(date(2025, 3, 1))

        assert detect_special_dates(pet, date(2025, 8, 17)) == []

    def test_events_co_occur_today_first(self, memorial):
        # Memorial anniversary today, birthday in 3 days
        pet = memorial(date(2025, 4, 20), birth_date=date(2015, 4, 23))

        announcements = detect_special_dates(pet, date(2026, 4, 20))

        assert announcements[0] == "오늘은 보리이(가) 무지개다리를 건넌 날입니다."
        assert announcements[-1] == "보리의 생일이 3일 남았습니다!"

    def test_active_pet_has_no_memorial_announcements(self, pet_factory, today):
        pet = pet_factory(birth_date=None)

        assert detect_special_dates(pet, today) == []
