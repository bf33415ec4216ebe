"""
Reply draft API endpoint.

POST /draft - Draft a reply to the email sent as the raw request body.
"""

import logging

from fastapi import APIRouter, Depends, Request

from src.api.dependencies import read_email_content
from src.api.errors import ErrorResponse
from src.api.models.responses import DraftResult
from src.api.rate_limit import limiter
from src.config.settings import settings
from src.engine.generator import generator

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/draft",
    response_model=DraftResult,
    responses={
        400: {"model": ErrorResponse, "description": "Empty or unreadable body"},
        429: {"description": "Rate limit exceeded"},
        502: {"model": ErrorResponse, "description": "LLM returned an unusable response"},
        503: {"model": ErrorResponse, "description": "LLM provider unavailable"},
    },
)
@limiter.limit(settings.rate_limit_draft)
async def draft_reply(request: Request, content: str = Depends(read_email_content)) -> DraftResult:
    """Draft a polite, concise reply to an email (HTML allowed)."""
    logger.info(f"Drafting reply for email ({len(content)} chars)")
    return await generator.generate(content)
