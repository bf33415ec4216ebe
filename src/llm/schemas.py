"""
Pydantic models for validating LLM responses.

These models ensure type safety when parsing LLM outputs and provide
clear error messages when the LLM returns malformed data.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from src.api.models.responses import ClassificationLabel


class ClassificationLLMResponse(BaseModel):
    """
    Expected response structure from classification LLM calls.

    The LLM must return JSON of the shape
    ``{"labels": [{"label": str, "score": number}, ...]}``.
    A missing or null ``labels`` decodes to an empty list.
    """

    labels: List[ClassificationLabel] = Field(
        default_factory=list,
        description="Labels with confidence scores",
    )

    @field_validator("labels", mode="before")
    @classmethod
    def null_labels_as_empty(cls, v):
        return [] if v is None else v


class APIErrorBody(BaseModel):
    """
    Structured error body returned by the provider on non-200 responses.

    Accepts both the flat ``{"message", "code"}`` form and the OpenAI-style
    envelope ``{"error": {"message", "code"}}``.
    """

    message: str
    code: Optional[int] = None

    @model_validator(mode="before")
    @classmethod
    def unwrap_error_envelope(cls, data):
        if isinstance(data, dict) and "message" not in data and isinstance(data.get("error"), dict):
            return data["error"]
        return data

    @field_validator("code", mode="before")
    @classmethod
    def non_numeric_code_as_none(cls, v):
        # OpenAI sends string codes such as "invalid_api_key"
        if isinstance(v, str) and not v.isdigit():
            return None
        return v
