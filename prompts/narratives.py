"""
Narrative block templates.

Each optional context block is a markdown section with its own header. The
converters in agents/narratives.py fill these in; an empty source never
produces a header.
"""

SUMMARY_BLOCK = """## 이전 대화 요약
{summary}

위 요약은 지난 대화의 흐름입니다. 이어지는 대화처럼 자연스럽게 참고하되, 요약을 그대로 읊지 마세요."""

SPECIAL_DAY_BLOCK = """## 오늘의 특별한 날
{announcements}

대화 시작 시 이 특별한 날을 자연스럽게 언급하되, 본인만의 방식으로 표현하세요."""

TIMELINE_BLOCK = """## 최근 기록된 일상/추억 (대화에 활용하세요)
{entries}

위 기록 중 하나를 자연스럽게 언급하되, 매번 다른 기록을 선택하세요."""

TIMELINE_MOODS = {
    "happy": "(기분 좋음)",
    "normal": "(평범)",
    "sad": "(슬픔)",
    "sick": "(아픔)",
}

PHOTO_BLOCK = """## 사진과 함께 기록된 추억 (대화에 활용하세요)
{entries}

위 추억 중 하나를 자연스럽게 언급하되, 매번 다른 추억을 선택하세요."""

ACTIVE_REMINDER_BLOCK = """## {pet_name}의 케어 일정 (리마인더)
{entries}"""

UPCOMING_TODAY = """

**오늘 남은 일정**: {upcoming}
→ 자연스럽게 "오늘 {first_title} 시간 잊지 말아!" 같이 언급할 수 있어요."""

MEMORIAL_REMINDER_BLOCK = """## {pet_name}와 함께했던 일상 루틴 (추억으로 활용하세요)
{entries}

위 루틴들은 함께했던 소중한 일상입니다. 자연스럽게 추억으로 언급하되 매번 다른 루틴을 선택하세요."""

REMINDER_TYPE_LABELS = {
    "walk": "산책",
    "meal": "식사",
    "medicine": "약/영양제",
    "vaccine": "예방접종",
    "grooming": "미용/목욕",
    "vet": "병원",
    "custom": "기타",
}

# Index 0 is Sunday, matching ReminderSchedule.day_of_week
DAYS_OF_WEEK = ["일", "월", "화", "수", "목", "금", "토"]

ACTIVE_MEMORY_BLOCK = """## 기억하고 있는 정보
{entries}"""

MEMORIAL_MEMORY_BLOCK = """## 함께한 소중한 기억들 (대화에 활용하세요)
{entries}

위 기억들 중 하나를 선택해서 구체적으로 언급하되, 매번 다른 기억을 골라 사용하세요."""

PERSONALIZATION_BLOCK = """## {pet_name}만의 고유한 정보 (반드시 대화에 활용하세요)
{items}

이 정보는 {pet_name}을(를) 다른 반려동물과 구별 짓는 고유한 특성입니다.
대화할 때 일반적인 {breed} 이야기보다 위 정보를 우선 활용하세요.
단, 같은 정보를 매번 반복하지 말고 돌아가며 자연스럽게 언급하세요."""

MEMORIAL_BASIC_INFO = """## 나의 기본 정보
- 이름: {pet_name}
- 종류: {breed} {species}
- 성별: {gender}
- 성격: {personality}{birthday_line}

저장된 구체적 추억은 없지만, 위 정보와 성격을 바탕으로 {breed}답게 대화하세요."""
