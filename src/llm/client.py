import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx
import openai
from openai import AsyncOpenAI
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.api.errors import (
    LLMClientError,
    LLMEmptyChoicesError,
    LLMProviderError,
    LLMRateLimitedError,
    LLMResponseInvalidError,
    LLMServerError,
    LLMTimeoutError,
    LLMTransportError,
    LLMUpstreamStatusError,
)
from src.api.models.responses import ClassifyResponse, DraftResult, SummaryResult
from src.llm.base import ChatClientConfig, ChatCompletionResponse
from src.llm.schemas import APIErrorBody
from src.llm.tasks import TASKS, ChatTask, TaskResult

logger = logging.getLogger(__name__)

# Transport failures and 5xx are worth another attempt; everything else is final
RETRYABLE_ERRORS = (LLMTransportError, LLMServerError)


class ChatClient:
    """
    Chat-completion client for OpenAI-shaped providers (DeepSeek, OpenAI).

    Calls go through the ``openai`` SDK with its own retries disabled; the
    retry policy lives here so it is identical for every task and provider:
    up to ``max_retries`` extra attempts on transport errors and 5xx, waiting
    1s, 2s, 4s, ... between attempts. 4xx responses fail immediately.
    """

    def __init__(
        self,
        config: ChatClientConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.config = config
        self._http_client = http_client or httpx.AsyncClient(timeout=config.timeout_seconds)
        self._sleep = sleep

        self.client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=f"{config.base_url}/v1",
            timeout=config.timeout_seconds,
            max_retries=0,
            http_client=self._http_client,
        )

        logger.info(
            "Initialized %s chat client: model=%s, url=%s, api_key_length=%d",
            config.provider,
            config.model,
            config.completions_url,
            len(config.api_key),
        )

    @property
    def provider_name(self) -> str:
        return self.config.provider

    @property
    def model_name(self) -> str:
        return self.config.model

    async def summarize(self, content: str) -> SummaryResult:
        return await self.complete_task(ChatTask.SUMMARIZE, content)

    async def classify(self, content: str) -> ClassifyResponse:
        return await self.complete_task(ChatTask.CLASSIFY, content)

    async def draft(self, content: str) -> DraftResult:
        return await self.complete_task(ChatTask.DRAFT, content)

    async def complete_task(self, task: ChatTask, content: str) -> TaskResult:
        """
        Run one chat task against the provider.

        Args:
            task: Which prompt and decoder to use
            content: Raw email content (plain text or HTML), embedded verbatim

        Returns:
            SummaryResult, ClassifyResponse or DraftResult depending on ``task``

        Raises:
            LLMTransportError: no response after all attempts
            LLMServerError: 5xx after all attempts
            LLMClientError: 4xx, not retried
            LLMEmptyChoicesError: 200 without choices
            LLMMalformedOutputError: classify output is not the labels JSON
        """
        task = ChatTask(task)
        spec = TASKS[task]
        # Serialized once; every retry resends the same payload
        messages = [m.model_dump(mode="json") for m in spec.build_messages(content)]

        response = await self._request_with_retry(messages)
        if not response.choices:
            raise LLMEmptyChoicesError(model=self.config.model)

        choice = response.choices[0]
        logger.debug(
            "%s response: task=%s, finish_reason=%s",
            self.config.provider,
            task.value,
            choice.finish_reason,
        )
        return spec.decode(choice.message.content)

    async def _request_with_retry(self, messages: List[Dict[str, Any]]) -> ChatCompletionResponse:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.config.max_retries + 1),
            wait=wait_exponential(multiplier=1, exp_base=2),
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            sleep=self._sleep,
            reraise=True,
        )
        return await retrying(self._request, messages)

    async def _request(self, messages: List[Dict[str, Any]]) -> ChatCompletionResponse:
        url = self.config.completions_url
        logger.debug("Making request to: POST %s (model=%s)", url, self.config.model)

        try:
            raw = await self.client.chat.completions.with_raw_response.create(
                model=self.config.model,
                messages=messages,
            )
        except openai.APITimeoutError as e:
            raise LLMTimeoutError(self.config.timeout_seconds, url=url) from e
        except openai.APIConnectionError as e:
            raise LLMTransportError(f"request to {url} failed: {e}", url=url) from e
        except openai.APIStatusError as e:
            raise self._status_error(e.response) from e
        except openai.OpenAIError as e:
            logger.error("%s provider error: %s", self.config.provider, e)
            raise LLMProviderError(str(e), provider=self.config.provider) from e

        http_response = raw.http_response
        if http_response.status_code != 200:
            raise self._status_error(http_response)

        try:
            return ChatCompletionResponse.model_validate_json(http_response.text)
        except ValidationError as e:
            raise LLMResponseInvalidError(
                message="failed to decode chat response",
                details={"error": str(e), "body": http_response.text},
            ) from e

    def _status_error(self, response: httpx.Response) -> LLMUpstreamStatusError:
        """Map a non-200 response to a typed error, decoding ``{message, code}`` when present."""
        body = response.text
        status = response.status_code

        api_message = api_code = None
        try:
            api_error = APIErrorBody.model_validate_json(body)
        except ValidationError:
            logger.debug("Error body from %s is not a structured API error", self.config.provider)
        else:
            api_message, api_code = api_error.message, api_error.code

        kwargs = {"api_message": api_message, "api_code": api_code}
        if status >= 500:
            logger.warning("Server error %d from %s", status, self.config.completions_url)
            return LLMServerError(status, body, **kwargs)
        if status == 429:
            return LLMRateLimitedError(status, body, **kwargs)
        if status >= 400:
            return LLMClientError(status, body, **kwargs)
        return LLMUpstreamStatusError(status, body, **kwargs)

    async def aclose(self) -> None:
        await self.client.close()
