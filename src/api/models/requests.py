"""
Request models for the Cloud Inference API.

Only the batch classification endpoint takes JSON; summarize, draft and
single-email classify read the raw (optionally gzip) request body.
"""

from typing import List

from pydantic import BaseModel, Field, field_validator

MAX_BATCH_SIZE = 100


class EmailRequest(BaseModel):
    """Single email in a batch classification request."""

    id: str = Field(..., min_length=1, max_length=256)
    content: str = Field(..., min_length=1)

    @field_validator("id", "content")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class BatchClassifyRequest(BaseModel):
    """Request to classify up to 100 emails in one call."""

    emails: List[EmailRequest] = Field(..., min_length=1, max_length=MAX_BATCH_SIZE)
