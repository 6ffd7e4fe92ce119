"""
LLM Client using LiteLLM for multi-provider support.

Supports: OpenAI, Anthropic, Cohere, and 100+ other providers.
Switch providers by changing the model string in settings.

Two call styles:
    - chat(): background calls. Retried on transient errors. complete() is
      the same call with a single attempt, used by the classifier.
    - chat_with_usage(): the user-facing reply. Never retried here; the caller
      decides whether a failed turn is worth another attempt.
"""

import json
from dataclasses import dataclass
from typing import List, Dict, Optional, Any

import litellm
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_not_exception_type,
)

from config.settings import settings
from core import get_logger

logger = get_logger(__name__)

# Configure LiteLLM
litellm.set_verbose = False  # Set True for debugging
litellm.suppress_debug_info = True

# Retrying these only repeats the failure
NON_RETRYABLE = (
    litellm.AuthenticationError,
    litellm.BadRequestError,
    json.JSONDecodeError,
)


@dataclass
class LLMResponse:
    """Response from an LLM call, including content and token usage."""
    content: str
    model: str = ""
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0


def _preview(content: str) -> str:
    if len(content) > 200:
        return f"{content[:100]}...{content[-100:]}"
    return content


class LLMClient:
    """
    Unified LLM client supporting multiple providers via LiteLLM.

    Usage:
        client = LLMClient()
        text = await client.chat("gpt-4o-mini", messages=[...])
        data = await client.chat_json("gpt-4o-mini", messages=[...])
    """

    def __init__(self, api_key: Optional[str] = None):
        """Initialize LLM client.

        Args:
            api_key: Explicit credential. When omitted the configured
                OPENAI_API_KEY is used at call time.
        """
        self.api_key = api_key
        logger.info("LLM client initialized")

    def _call_kwargs(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        # Keys set only in .env never reach os.environ, so pass them explicitly
        api_key = self.api_key or settings.OPENAI_API_KEY
        if api_key and "api_key" not in kwargs:
            kwargs["api_key"] = api_key
        return kwargs

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_not_exception_type(NON_RETRYABLE),
        reraise=True,
    )
    async def chat(
        self,
        model: str,
        messages: List[Dict[str, Any]],
        temperature: float = 0.7,
        max_tokens: int = 1000,
        **kwargs: Any,
    ) -> str:
        """Generate a chat completion, retried on transient errors."""
        return await self.complete(
            model=model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs,
        )

    async def complete(
        self,
        model: str,
        messages: List[Dict[str, Any]],
        temperature: float = 0.7,
        max_tokens: int = 1000,
        **kwargs: Any,
    ) -> str:
        """
        Generate a chat completion with a single attempt.

        Args:
            model: Model identifier
            messages: List of role/content message dicts
            temperature: Sampling temperature
            max_tokens: Maximum tokens in response
            **kwargs: Additional parameters (timeout, response_format, ...)

        Returns:
            Generated response text
        """
        logger.debug(
            "LLM request",
            model=model,
            message_count=len(messages),
            temperature=temperature,
        )

        try:
            response = await litellm.acompletion(
                model=model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                **self._call_kwargs(kwargs),
            )

            content = response.choices[0].message.content or ""
            finish_reason = response.choices[0].finish_reason

            logger.debug(
                "LLM response",
                model=model,
                tokens_used=response.usage.total_tokens if response.usage else None,
                response_length=len(content),
                finish_reason=finish_reason,
                response_preview=_preview(content),
            )

            return content

        except Exception as e:
            logger.error("LLM request failed", model=model, error=str(e))
            raise

    async def chat_json(
        self,
        model: str,
        messages: List[Dict[str, Any]],
        temperature: float = 0.3,
        max_tokens: int = 500,
        retry: bool = True,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        """
        Generate a chat completion in JSON mode and parse it.

        Args:
            retry: Retry transient errors. Calls on the reply path pass False
                so a dead backend fails fast.

        Raises:
            json.JSONDecodeError: If the model returned something that is not JSON
        """
        call = self.chat if retry else self.complete
        content = await call(
            model=model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
            response_format={"type": "json_object"},
            **kwargs,
        )
        return json.loads(content or "{}")

    async def chat_with_usage(
        self,
        model: str,
        messages: List[Dict[str, Any]],
        temperature: float = 0.7,
        max_tokens: int = 1000,
        **kwargs: Any,
    ) -> LLMResponse:
        """
        Generate a chat completion and return content + usage metadata.

        Not retried. Provider errors propagate unchanged so the caller can
        map them.
        """
        logger.debug(
            "LLM request (with usage)",
            model=model,
            message_count=len(messages),
            temperature=temperature,
        )

        try:
            response = await litellm.acompletion(
                model=model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                **self._call_kwargs(kwargs),
            )

            content = response.choices[0].message.content or ""
            finish_reason = response.choices[0].finish_reason
            usage = response.usage

            input_tokens = usage.prompt_tokens if usage else 0
            output_tokens = usage.completion_tokens if usage else 0
            total_tokens = usage.total_tokens if usage else 0

            logger.debug(
                "LLM response (with usage)",
                model=model,
                input_tokens=input_tokens,
                output_tokens=output_tokens,
                total_tokens=total_tokens,
                finish_reason=finish_reason,
                response_preview=_preview(content),
            )

            return LLMResponse(
                content=content,
                model=model,
                input_tokens=input_tokens,
                output_tokens=output_tokens,
                total_tokens=total_tokens,
            )

        except Exception as e:
            logger.error("LLM request failed", model=model, error=str(e), error_type=type(e).__name__)
            raise


# Singleton instance
llm_client = LLMClient()
