"""
Cloud Inference Service - FastAPI Application

Main entry point for the service providing:
- Email summarization
- Email classification (single and batch)
- Reply drafting
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.api.errors import ErrorCode, ErrorResponse, InferenceBaseError
from src.api.middleware import RequestIDMiddleware, get_request_id
from src.api.rate_limit import limiter
from src.api.routes import classify, draft, health, summarize
from src.config.settings import settings
from src.llm.factory import llm_client

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("=" * 60)
    logger.info("Starting Cloud Inference Service")
    logger.info("=" * 60)
    logger.info(f"Provider: {llm_client.provider_name}")
    logger.info(f"Model: {llm_client.model_name}")
    logger.info(f"Port: {settings.api_port}")
    logger.info(f"Debug: {settings.debug}")
    yield
    await llm_client.aclose()
    logger.info("Chat client closed")


# Create app
app = FastAPI(
    title="Cloud Inference Service",
    description="LLM-backed email summarization, classification and reply drafting",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Request ID middleware (must be added first to capture all requests)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=500)

# CORS middleware - configured via settings
cors_origins = settings.get_cors_origins()
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Content-Encoding", "Authorization", "X-Request-ID"],
        max_age=3600,
    )
    logger.info(f"CORS enabled for origins: {cors_origins}")
else:
    logger.warning("CORS disabled - no origins configured and not in debug mode")


# Global exception handler for structured error responses
@app.exception_handler(InferenceBaseError)
async def inference_error_handler(request: Request, exc: InferenceBaseError) -> JSONResponse:
    """Handle all service exceptions with structured response."""
    logger.error(
        f"{request.method} {request.url.path} failed: {exc.error_code.value}: {exc.message}",
        extra={"details": exc.details},
    )
    # Upstream bodies and raw model output are only returned in debug mode
    expose_details = settings.debug or exc.status_code == 400
    error_response = ErrorResponse(
        error=exc.message,
        error_code=exc.error_code,
        details=exc.details if expose_details else None,
        request_id=get_request_id(),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions with structured response."""
    logger.exception(f"Unhandled exception: {exc}")
    error_response = ErrorResponse(
        error="An unexpected error occurred",
        error_code=ErrorCode.INTERNAL_ERROR,
        details={"exception_type": type(exc).__name__} if settings.debug else None,
        request_id=get_request_id(),
    )
    return JSONResponse(
        status_code=500,
        content=error_response.model_dump(mode="json"),
    )


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(summarize.router, tags=["Summarization"])
app.include_router(classify.router, tags=["Classification"])
app.include_router(draft.router, tags=["Drafting"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app", host=settings.api_host, port=settings.api_port, reload=settings.debug
    )
