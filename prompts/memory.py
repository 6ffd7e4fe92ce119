"""
Memory extraction prompt.

Reads one owner message and proposes long-term memories about the pet.
The model answers with a JSON object so the result can be validated into
MemoryCandidate schemas.
"""

MEMORY_EXTRACTION_PROMPT = """당신은 반려동물 "{pet_name}"에 대한 대화에서 오래 기억할 만한 정보를 추출합니다.

보호자의 메시지:
"{message}"

---
이 메시지에서 나중 대화에 다시 활용할 가치가 있는 정보를 찾아 다음 JSON 형식으로만 응답하세요:
{{
    "memories": [
        {{
            "memory_type": "preference|episode|place|routine|health|relationship|event",
            "title": "짧은 제목 (15자 이내)",
            "content": "기억할 내용 (한두 문장, 보호자의 표현을 살려서)",
            "importance": 1-10,
            "time_info": {{"type": "daily|weekly|monthly|once", "time": "HH:MM"}}
        }}
    ]
}}

기준:
- {pet_name}와 함께한 구체적인 경험, 장소, 좋아하거나 싫어하는 것, 습관, 건강 정보, 반복되는 일과
- 인사, 감탄, 일반적인 감정 표현만 있는 메시지는 기억할 것이 없습니다. 이 경우 {{"memories": []}}
- 메시지에 없는 내용을 지어내지 마세요
- time_info는 정해진 시간에 반복되는 일과일 때만 넣고, 그 외에는 생략하세요
- importance는 앞으로의 대화에서 얼마나 자주, 깊이 쓰일지로 판단하세요 (일상적인 사실 3-5, 특별한 추억 7-10)
- 최대 3개까지만
"""
