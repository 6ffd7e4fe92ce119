"""Token usage schemas."""

from pydantic import BaseModel, Field


class TokenUsageSchema(BaseModel):
    """Token usage of one generation call."""

    model: str = Field("", description="LLM model name")
    tokens_in: int = Field(0, ge=0, description="Input/prompt tokens")
    tokens_out: int = Field(0, ge=0, description="Output/completion tokens")
    total_tokens: int = Field(0, ge=0, description="Total tokens")
