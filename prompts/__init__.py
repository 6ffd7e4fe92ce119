"""
Prompts module - All LLM prompts organized by feature.

Import prompts directly:
    from prompts import EMOTION_ANALYSIS_PROMPT, MEMORY_EXTRACTION_PROMPT

Or import from specific modules:
    from prompts.narratives import TIMELINE_BLOCK
"""

from prompts.emotion import (
    EMOTION_ANALYSIS_PROMPT,
    EMOTION_RESPONSE_GUIDES,
    GRIEF_STAGE_GUIDES,
)
from prompts.memory import MEMORY_EXTRACTION_PROMPT
from prompts.compact import CONVERSATION_SUMMARY_PROMPT
from prompts.personas import ACTIVE_PERSONA, MEMORIAL_PERSONA

__all__ = [
    "EMOTION_ANALYSIS_PROMPT",
    "EMOTION_RESPONSE_GUIDES",
    "GRIEF_STAGE_GUIDES",
    "MEMORY_EXTRACTION_PROMPT",
    "CONVERSATION_SUMMARY_PROMPT",
    "ACTIVE_PERSONA",
    "MEMORIAL_PERSONA",
]
