"""
System frame - the structural scaffolding for assembling a system prompt.

The system message is a stack of markdown sections. Optional narrative blocks
come first, then the mode persona (behavioral instructions), then the emotion
guidance for this turn. Recent history and the new message follow as separate
chat messages.

To change the pet's voice, edit the persona in prompts/personas/ for that mode.
"""

BLOCK_SEPARATOR = "\n\n"

SUGGESTIONS_MARKER = "---SUGGESTIONS---"

SUGGESTIONS_INSTRUCTIONS = """## 후속 질문 제안
응답 본문 작성 후, 반드시 "---SUGGESTIONS---" 마커를 추가하고 그 아래에 사용자가 이어서 할 수 있는 대화 3가지를 한 줄씩 작성하세요.
후속 질문은 현재 대화 맥락에 맞는 자연스러운 것이어야 합니다.
예시:
---SUGGESTIONS---
{examples}"""

SUGGESTION_EXAMPLES = {
    "active": ["오늘 산책 갈까?", "간식 뭐 먹었어?", "요즘 기분이 어때?"],
    "memorial": ["그때 우리 뭐하고 놀았어?", "요즘 어떻게 지내?", "네가 제일 좋아했던 거 알려줘"],
}

# Block 8 header differs by mode: the active pet reads the owner's mood,
# the memorial pet reads the family's heart.
EMOTION_GUIDE_FRAME = {
    "active": "## 감정 상태\n{guide}",
    "memorial": "## 가족의 마음\n{guide}",
}

GRIEF_GUIDE_FRAME = """## 현재 감지된 애도 단계별 대응 가이드
{guide}"""

TRUNCATION_MARK = "…"
