"""Agent modules for the pet companion."""

from .orchestrator import ChatOrchestrator, orchestrator
from .emotion import EmotionClassifier, emotion_classifier
from .context_composer import ContextComposer, ComposedContext, context_composer
from .pet_agent import PetAgent, PetReply, GenerationPolicy, pet_agent, policy_for
from .memory_agent import MemoryAgent, memory_agent, should_summarize
from .special_dates import detect_special_dates

__all__ = [
    "ChatOrchestrator",
    "orchestrator",
    "EmotionClassifier",
    "emotion_classifier",
    "ContextComposer",
    "ComposedContext",
    "context_composer",
    "PetAgent",
    "PetReply",
    "GenerationPolicy",
    "pet_agent",
    "policy_for",
    "MemoryAgent",
    "memory_agent",
    "should_summarize",
    "detect_special_dates",
]
