"""
Conversation summary prompt.

Compresses the recent exchanges between an owner and the pet into one
paragraph. The newest summary stands in for every turn older than the raw
history window, so it must keep names, places, dates and plans.
"""

CONVERSATION_SUMMARY_PROMPT = """당신은 보호자와 반려동물 "{pet_name}" 사이의 대화를 기록하고 있습니다.
{mode_guidance}

최근 대화:
{conversation}

---
이 대화를 다음 대화에서 이어갈 수 있도록 한 문단으로 요약하세요.

제목, 목록, 빈 줄 없이 한 문단만 작성하세요.

기준:
- 보호자가 이야기한 구체적인 내용(이름, 장소, 날짜, 계획, 걱정거리)을 빠짐없이 기록
- 대화 중 보호자의 감정 흐름을 한 문장으로 포함
- {pet_name}가 한 약속이나 다음에 이어가기로 한 이야기가 있으면 기록
- 해석하거나 평가하지 말고 사실대로 기록
- 길이: 3-5문장
"""

ACTIVE_SUMMARY_GUIDANCE = "{pet_name}는 지금 보호자와 함께 살고 있습니다. 케어 일정이나 건강 이야기가 나왔다면 꼭 남겨주세요."

MEMORIAL_SUMMARY_GUIDANCE = (
    "{pet_name}는 무지개다리를 건넜고, 보호자는 {pet_name}를 그리워하며 대화하고 있습니다. "
    "보호자가 떠올린 추억과 애도의 과정에서 드러난 마음을 조심스럽게 기록하세요."
)
