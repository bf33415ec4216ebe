"""
Email summarization API endpoint.

POST /summarize - Summarize the email sent as the raw request body.
"""

from fastapi import APIRouter, Depends, Request

from src.api.dependencies import read_email_content
from src.api.errors import ErrorResponse
from src.api.models.responses import SummaryResult
from src.api.rate_limit import limiter
from src.config.settings import settings
from src.engine.summarizer import summarizer

router = APIRouter()


@router.post(
    "/summarize",
    response_model=SummaryResult,
    responses={
        400: {"model": ErrorResponse, "description": "Empty or unreadable body"},
        429: {"description": "Rate limit exceeded"},
        502: {"model": ErrorResponse, "description": "LLM returned an unusable response"},
        503: {"model": ErrorResponse, "description": "LLM provider unavailable"},
    },
)
@limiter.limit(settings.rate_limit_summarize)
async def summarize_email(
    request: Request, content: str = Depends(read_email_content)
) -> SummaryResult:
    """Summarize an email (HTML allowed) into concise plain text."""
    return await summarizer.summarize(content)
