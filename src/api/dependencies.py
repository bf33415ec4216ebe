"""
Request body helpers.

/summarize, /draft and /classify/email take the email itself as the request
body (plain text or HTML). /classify takes a JSON batch. Every body may be
gzip-compressed with ``Content-Encoding: gzip``.
"""

import gzip
import zlib

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from src.api.errors import InvalidRequestError, ValidationError
from src.api.models.requests import BatchClassifyRequest


async def read_body(request: Request) -> bytes:
    """Read the request body, decompressing gzip if the client says so."""
    body = await request.body()
    if request.headers.get("content-encoding", "").lower() != "gzip":
        return body

    try:
        return gzip.decompress(body)
    except (OSError, EOFError, zlib.error) as e:
        raise InvalidRequestError(
            message=f"Failed to read request body: {e}",
            details={"content_encoding": "gzip"},
        ) from e


async def read_email_content(request: Request) -> str:
    """
    FastAPI dependency returning the email content from the raw body.

    Raises:
        InvalidRequestError: body is not valid gzip or not UTF-8
        ValidationError: body is empty or whitespace only
    """
    body = await read_body(request)
    try:
        content = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidRequestError(message="Request body must be UTF-8 text") from e

    if not content.strip():
        raise ValidationError("Email content is required")
    return content


async def read_batch_request(request: Request) -> BatchClassifyRequest:
    """FastAPI dependency decoding a (possibly gzipped) batch classify body."""
    body = await read_body(request)
    try:
        return BatchClassifyRequest.model_validate_json(body)
    except PydanticValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        for error in errors:
            error["loc"] = ("body", *error["loc"])
        raise RequestValidationError(errors, body=body) from e
