"""
Pet Agent - generates the pet's reply from a composed context.

Picks the generation policy for the mode, bounds the call with a timeout and
maps provider failures onto the companion error kinds. There is no retry here:
whether a failed turn is worth repeating is the caller's decision.
"""

import asyncio
import random
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import litellm

from config.settings import settings
from core import (
    get_logger,
    GenerationError,
    GenerationAuthError,
    GenerationRateLimitError,
    GenerationTimeoutError,
)
from agents.context_composer import ComposedContext
from prompts.system_frame import SUGGESTIONS_MARKER
from schemas import Mode, TokenUsageSchema
from utils.llm_client import llm_client

logger = get_logger(__name__)

MAX_SUGGESTIONS = 3
MAX_SUGGESTION_LENGTH = 30
_SUGGESTION_PREFIX = re.compile(r"^[-\d.)\s]+")


@dataclass(frozen=True)
class GenerationPolicy:
    """Sampling settings for one mode."""
    max_tokens: int
    temperature: float
    presence_penalty: float
    frequency_penalty: float


def policy_for(mode: Mode) -> GenerationPolicy:
    """
    Generation policy for a mode.

    Memorial replies are shorter and warmer with heavier repetition penalties.
    Active replies get more room for concrete care information.
    """
    if mode.is_memorial:
        return GenerationPolicy(
            max_tokens=settings.MEMORIAL_MAX_TOKENS,
            temperature=settings.MEMORIAL_TEMPERATURE,
            presence_penalty=settings.MEMORIAL_PRESENCE_PENALTY,
            frequency_penalty=settings.MEMORIAL_FREQUENCY_PENALTY,
        )
    return GenerationPolicy(
        max_tokens=settings.ACTIVE_MAX_TOKENS,
        temperature=settings.ACTIVE_TEMPERATURE,
        presence_penalty=settings.ACTIVE_PRESENCE_PENALTY,
        frequency_penalty=settings.ACTIVE_FREQUENCY_PENALTY,
    )


@dataclass
class PetReply:
    """Reply from the pet agent."""
    reply: str  # Reply text, suggestions removed
    suggested_questions: List[str] = field(default_factory=list)
    usage: Optional[TokenUsageSchema] = None
    policy: Optional[GenerationPolicy] = None


def parse_suggestions(raw: str) -> Tuple[str, List[str]]:
    """
    Split the raw model output into reply text and follow-up suggestions.

    Suggestions follow the ---SUGGESTIONS--- marker, one per line. List
    prefixes are stripped, lines of 30+ characters are dropped, at most three
    are kept.
    """
    if SUGGESTIONS_MARKER not in raw:
        return raw.strip(), []

    reply, _, tail = raw.partition(SUGGESTIONS_MARKER)
    suggestions = []
    for line in tail.strip().split("\n"):
        text = _SUGGESTION_PREFIX.sub("", line).strip()
        if 0 < len(text) < MAX_SUGGESTION_LENGTH:
            suggestions.append(text)
    return reply.strip(), suggestions[:MAX_SUGGESTIONS]


class PetAgent:
    """The pet's voice. One generation call per turn."""

    def __init__(self, model: str = settings.MODEL_CONVERSATION):
        self.model = model
        self.llm = llm_client
        logger.info("Pet agent initialized", model=model)

    async def generate(
        self, composed: ComposedContext, mode: Mode, timeout: Optional[float] = None
    ) -> PetReply:
        """
        Generate the reply for a composed context.

        Args:
            composed: Bounded prompt payload
            mode: Conversation mode, selects the generation policy
            timeout: Upper bound in seconds, defaults to GENERATION_TIMEOUT_SECONDS

        Returns:
            PetReply with the reply text, suggestions and token usage

        Raises:
            GenerationAuthError: Credentials rejected
            GenerationRateLimitError: Provider throttled the request
            GenerationTimeoutError: The call exceeded the timeout
            GenerationError: Any other generation failure
        """
        policy = policy_for(mode)
        timeout = timeout or settings.GENERATION_TIMEOUT_SECONDS
        # Random seed so identical inputs still get varied replies
        seed = random.randint(0, 999_999)

        logger.info(
            "Generating reply",
            model=self.model,
            mode=mode.value,
            max_tokens=policy.max_tokens,
            temperature=policy.temperature,
            context_chars=composed.total_chars,
        )

        try:
            response = await asyncio.wait_for(
                self.llm.chat_with_usage(
                    model=self.model,
                    messages=composed.to_messages(),
                    temperature=policy.temperature,
                    max_tokens=policy.max_tokens,
                    presence_penalty=policy.presence_penalty,
                    frequency_penalty=policy.frequency_penalty,
                    seed=seed,
                    timeout=timeout,
                ),
                timeout=timeout,
            )
        except (asyncio.TimeoutError, litellm.Timeout):
            logger.warning("Reply generation timed out", model=self.model, timeout=timeout)
            raise GenerationTimeoutError(timeout)
        except litellm.AuthenticationError as e:
            logger.error("Generation service rejected credentials", model=self.model, error=str(e))
            raise GenerationAuthError(str(e)) from e
        except litellm.RateLimitError as e:
            logger.warning("Generation service rate limited", model=self.model, error=str(e))
            raise GenerationRateLimitError(str(e)) from e
        except Exception as e:
            logger.error("Reply generation failed", model=self.model, error=str(e), error_type=type(e).__name__)
            raise GenerationError(str(e), status_code=getattr(e, "status_code", None)) from e

        reply, suggestions = parse_suggestions(response.content or "")
        if not reply:
            logger.error("Empty reply generated", model=self.model)
            raise GenerationError("empty reply")

        usage = TokenUsageSchema(
            model=response.model or self.model,
            tokens_in=response.input_tokens,
            tokens_out=response.output_tokens,
            total_tokens=response.total_tokens,
        )
        logger.info(
            "Reply generated",
            mode=mode.value,
            reply_length=len(reply),
            suggestions=len(suggestions),
            total_tokens=usage.total_tokens,
        )
        return PetReply(reply=reply, suggested_questions=suggestions, usage=usage, policy=policy)


# Singleton instance
pet_agent = PetAgent()
