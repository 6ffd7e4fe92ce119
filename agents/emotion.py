"""
Emotion Classifier - labels each inbound message before the reply is composed.

Classification is a soft dependency: any failure degrades to a neutral reading
and the turn carries on. Grief stages are only requested and only kept in
memorial mode.
"""

from typing import Any, Dict, Optional

from config.settings import settings
from core import get_logger, ClassifierUnavailableError
from prompts.emotion import (
    EMOTION_ANALYSIS_PROMPT,
    EMOTION_RESPONSE_GUIDES,
    GRIEF_STAGE_GUIDES,
    GRIEF_FIELD,
    GRIEF_SECTION,
)
from prompts.system_frame import EMOTION_GUIDE_FRAME, GRIEF_GUIDE_FRAME
from schemas import EmotionClassification, EmotionType, GriefStage, Mode
from utils.llm_client import LLMClient, llm_client

logger = get_logger(__name__)


class EmotionClassifier:
    """Emotion and grief-stage classifier backed by a small LLM."""

    def __init__(self, model: str = settings.MODEL_CLASSIFIER, llm: Optional[LLMClient] = None):
        self.model = model
        self.llm = llm or llm_client

    async def classify(self, message: str, mode: Mode) -> EmotionClassification:
        """
        Classify one message.

        Args:
            message: Sanitized user message
            mode: Conversation mode; grief stage is only considered in memorial mode

        Returns:
            EmotionClassification. Never raises.
        """
        try:
            raw = await self._analyze(message, mode)
            result = self._parse(raw, mode)
            logger.info(
                "Emotion classified",
                emotion=result.emotion.value,
                score=result.score,
                grief_stage=result.grief_stage.value,
                mode=mode.value,
            )
            return result
        except Exception as e:
            logger.warning("Emotion classification failed, using neutral", error=str(e), mode=mode.value)
            return EmotionClassification.neutral()

    async def _analyze(self, message: str, mode: Mode) -> Dict[str, Any]:
        memorial = mode.is_memorial
        system_prompt = EMOTION_ANALYSIS_PROMPT.format(
            grief_field=GRIEF_FIELD if memorial else "",
            grief_section=GRIEF_SECTION if memorial else "",
        )
        try:
            return await self.llm.chat_json(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": message},
                ],
                temperature=0.3,
                max_tokens=settings.CLASSIFIER_MAX_TOKENS,
                timeout=settings.GENERATION_TIMEOUT_SECONDS,
                retry=False,
            )
        except Exception as e:
            raise ClassifierUnavailableError(str(e)) from e

    @staticmethod
    def _parse(raw: Dict[str, Any], mode: Mode) -> EmotionClassification:
        """Coerce a classifier payload into the closed label sets."""
        try:
            emotion = EmotionType(str(raw.get("emotion", "neutral")).strip().lower())
        except ValueError:
            emotion = EmotionType.NEUTRAL

        try:
            score = float(raw.get("score", 0.5))
        except (TypeError, ValueError):
            score = 0.5
        score = min(max(score, 0.0), 1.0)

        grief_stage = GriefStage.UNKNOWN
        if mode.is_memorial:
            stage = raw.get("griefStage") or raw.get("grief_stage") or "unknown"
            try:
                grief_stage = GriefStage(str(stage).strip().lower())
            except ValueError:
                grief_stage = GriefStage.UNKNOWN

        return EmotionClassification(
            emotion=emotion,
            score=score,
            grief_stage=grief_stage,
            context=str(raw.get("context", ""))[:200],
        )


def get_emotion_response_guide(emotion: EmotionType, mode: Mode) -> str:
    """Response guidance for the classified emotion in this mode."""
    guides = EMOTION_RESPONSE_GUIDES[mode.value]
    return guides.get(emotion.value, guides["neutral"])


def get_grief_stage_response_guide(stage: GriefStage) -> str:
    """Response guidance for a grief stage. Empty for unknown."""
    return GRIEF_STAGE_GUIDES.get(stage.value, "")


def build_emotion_guidance(classification: EmotionClassification, mode: Mode) -> str:
    """
    Render the emotion guidance block for the system prompt.

    In memorial mode a detected grief stage adds its own guide below the
    emotion guide.
    """
    guidance = EMOTION_GUIDE_FRAME[mode.value].format(
        guide=get_emotion_response_guide(classification.emotion, mode)
    )
    if mode.is_memorial and classification.grief_stage != GriefStage.UNKNOWN:
        grief_guide = get_grief_stage_response_guide(classification.grief_stage)
        if grief_guide:
            guidance = f"{guidance}\n\n{GRIEF_GUIDE_FRAME.format(guide=grief_guide)}"
    return guidance


# Singleton instance
emotion_classifier = EmotionClassifier()
