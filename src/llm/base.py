"""Chat-completion wire types and client configuration."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, field_validator


class ChatRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """Single role-tagged message of a chat-completion prompt or reply."""

    role: ChatRole
    content: str = ""

    @field_validator("content", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return "" if v is None else v


class ChatChoice(BaseModel):
    index: int = 0
    finish_reason: Optional[str] = None
    message: ChatMessage


class ChatCompletionResponse(BaseModel):
    """Upstream reply. Only ``choices[0].message.content`` is consumed."""

    choices: List[ChatChoice] = []


class ChatClientConfig(BaseModel):
    """
    Everything the chat client needs, resolved once at start-up.

    Args:
        provider: Provider label used in logs and health output
        base_url: Provider root, without the ``/v1`` suffix
        api_key: Bearer token (surrounding whitespace is trimmed)
        model: Model identifier sent with every request
        timeout_seconds: Deadline for each individual HTTP call
        max_retries: Retries after the first attempt (transport errors and 5xx only)
    """

    provider: str
    base_url: str
    api_key: str
    model: str
    timeout_seconds: float = 30.0
    max_retries: int = 3

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")

    @field_validator("api_key")
    @classmethod
    def require_api_key(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("api_key must not be empty")
        return v

    @property
    def completions_url(self) -> str:
        return f"{self.base_url}/v1/chat/completions"
