"""Emotion and grief-stage classification schemas."""

from enum import Enum

from pydantic import BaseModel, Field, ConfigDict


class EmotionType(str, Enum):
    """Closed set of emotion labels."""

    HAPPY = "happy"
    SAD = "sad"
    ANXIOUS = "anxious"
    ANGRY = "angry"
    GRATEFUL = "grateful"
    LONELY = "lonely"
    PEACEFUL = "peaceful"
    EXCITED = "excited"
    NEUTRAL = "neutral"


class GriefStage(str, Enum):
    """Five-stage bereavement model plus unknown."""

    DENIAL = "denial"
    ANGER = "anger"
    BARGAINING = "bargaining"
    DEPRESSION = "depression"
    ACCEPTANCE = "acceptance"
    UNKNOWN = "unknown"


class EmotionClassification(BaseModel):
    """Result of classifying one inbound message. Not persisted."""

    model_config = ConfigDict(frozen=True)

    emotion: EmotionType = Field(EmotionType.NEUTRAL, description="Emotion label")
    score: float = Field(0.5, ge=0.0, le=1.0, description="Intensity in [0, 1]")
    grief_stage: GriefStage = Field(
        GriefStage.UNKNOWN, description="Grief stage, only meaningful in memorial mode"
    )
    context: str = Field("", description="One-sentence rationale from the classifier")

    @classmethod
    def neutral(cls) -> "EmotionClassification":
        """Safe default used whenever classification is unavailable."""
        return cls(emotion=EmotionType.NEUTRAL, score=0.5, grief_stage=GriefStage.UNKNOWN)
