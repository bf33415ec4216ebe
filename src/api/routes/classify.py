"""
Email classification API endpoints.

POST /classify - Classify a batch of up to 100 emails.
POST /classify/email - Classify a single email sent as the raw request body.
"""

import logging

from fastapi import APIRouter, Depends, Request

from src.api.dependencies import read_batch_request, read_email_content
from src.api.errors import ErrorResponse
from src.api.models.requests import BatchClassifyRequest
from src.api.models.responses import BatchClassifyResponse, ClassifyResponse
from src.api.rate_limit import limiter
from src.config.settings import settings
from src.engine.classifier import classifier

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/classify",
    response_model=BatchClassifyResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Unreadable gzip body"},
        429: {"description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Internal error"},
    },
)
@limiter.limit(settings.rate_limit_classify)
async def classify_emails(
    request: Request, batch_request: BatchClassifyRequest = Depends(read_batch_request)
) -> BatchClassifyResponse:
    """
    Classify a batch of emails.

    Emails are classified one at a time. An email that cannot be classified
    comes back with an empty label list; the batch itself still succeeds.
    Only ids and labels are returned, never email content. The JSON body may
    be gzip-compressed.
    """
    logger.info(f"Batch classifying {len(batch_request.emails)} emails")
    results = await classifier.classify_batch(batch_request.emails)
    return BatchClassifyResponse(results=results)


@router.post(
    "/classify/email",
    response_model=ClassifyResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Empty or unreadable body"},
        429: {"description": "Rate limit exceeded"},
        502: {"model": ErrorResponse, "description": "LLM returned an unusable response"},
        503: {"model": ErrorResponse, "description": "LLM provider unavailable"},
    },
)
@limiter.limit(settings.rate_limit_classify)
async def classify_email(
    request: Request, content: str = Depends(read_email_content)
) -> ClassifyResponse:
    """Classify a single email sent as the request body."""
    return await classifier.classify(content)
