from typing import List, Optional

from pydantic import BaseModel, Field


class ClassificationLabel(BaseModel):
    """Single label assigned by the model. Score is passed through unchecked."""
    label: str = ""
    # Numbers only; a quoted score is malformed output
    score: float = Field(default=0.0, strict=True)


class ClassifyResponse(BaseModel):
    """Labels for a single email."""
    labels: List[ClassificationLabel] = []


class ClassificationResult(BaseModel):
    """Labels for one email of a batch. Only the id crosses back, never the body."""
    id: str
    labels: List[ClassificationLabel] = []


class BatchClassifyResponse(BaseModel):
    """Batch classification results, index-aligned with the request."""
    results: List[ClassificationResult]


class SummaryResult(BaseModel):
    """Response from email summarization."""
    summary: str


class DraftResult(BaseModel):
    """Response from reply drafting."""
    draft: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    provider: str  # "deepseek", "openai"
    model: str
    uptime_seconds: Optional[float] = None
