from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List
from enum import Enum


class ProviderType(str, Enum):
    """Supported upstream LLM providers."""
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    GROQ = "groq"
    OPENAI = "openai"


class TokenUsage(BaseModel):
    """Normalized token accounting.

    Any field may be absent; a usage record with every field absent is
    treated as "no usage reported".
    """
    prompt_tokens: Optional[int] = Field(None, description="Tokens consumed by the prompt")
    completion_tokens: Optional[int] = Field(None, description="Tokens generated by the model")
    total_tokens: Optional[int] = Field(None, description="Prompt plus completion tokens")
    cached_content_token_count: Optional[int] = Field(
        None,
        description="Prompt tokens served from the provider's cache"
    )

    def is_empty(self) -> bool:
        """True when no token count is known."""
        return (
            self.prompt_tokens is None
            and self.completion_tokens is None
            and self.total_tokens is None
            and self.cached_content_token_count is None
        )


class FunctionCall(BaseModel):
    """Function name plus its JSON-encoded arguments."""
    name: str
    arguments: str = ""


class ToolCallRequest(BaseModel):
    """A tool invocation requested by the model."""
    id: str
    type: str = "function"
    function: FunctionCall


class Citation(BaseModel):
    """A grounding citation attached to the response."""
    source_id: str = Field(..., description="URI or document identifier of the cited source")
    start_index: Optional[int] = Field(None, description="Start offset of the cited span")
    end_index: Optional[int] = Field(None, description="End offset of the cited span")
    text: Optional[str] = Field(None, description="Cited text or source title")


class GenerateResult(BaseModel):
    """Final aggregate of a normalized stream."""
    content: Optional[str] = Field(None, description="Accumulated text, None when nothing was generated")
    tool_calls: Optional[List[ToolCallRequest]] = None
    finish_reason: str = "stop"
    usage: Optional[TokenUsage] = None
    citations: Optional[List[Citation]] = None
    thinking_steps: Optional[str] = None
    parsed_content: Optional[Any] = Field(None, description="Parsed JSON when the response was a JSON document")
    model: str = ""
    raw_response: Optional[Dict[str, Any]] = None
