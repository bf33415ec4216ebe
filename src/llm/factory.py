"""Chat client factory: resolves provider settings into a ChatClient."""

import logging
from typing import Optional

from src.config.settings import Settings, settings

from .base import ChatClientConfig
from .client import ChatClient
from .tasks import ChatTask, TaskResult

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("deepseek", "openai")


def build_client_config(config: Settings, provider: Optional[str] = None) -> ChatClientConfig:
    """
    Resolve the chat client configuration for a provider.

    Raises:
        ValueError: unknown provider, or no API key configured for it
    """
    provider = (provider or config.llm_provider).strip().lower()
    if provider == "deepseek":
        base_url, api_key, model = (
            config.deepseek_api_url,
            config.deepseek_api_key,
            config.deepseek_model,
        )
    elif provider == "openai":
        base_url, api_key, model = (
            config.openai_api_url,
            config.openai_api_key,
            config.openai_model,
        )
    else:
        raise ValueError(
            f"Unknown LLM provider: {provider} (expected one of {', '.join(SUPPORTED_PROVIDERS)})"
        )

    if not api_key or not api_key.strip():
        raise ValueError(
            f"{provider.upper()}_API_KEY not provided (set via environment or .env file)"
        )

    return ChatClientConfig(
        provider=provider,
        base_url=base_url,
        api_key=api_key,
        model=model.strip() or ("deepseek-chat" if provider == "deepseek" else "gpt-4o-mini"),
        timeout_seconds=config.llm_timeout_seconds,
        max_retries=config.llm_max_retries,
    )


class LLMClientFactory:
    """
    Lazily builds the configured ChatClient on first use.

    Engines depend on this singleton rather than on a client instance so the
    service can start (and report health) before the first upstream call.
    """

    def __init__(self, provider: Optional[str] = None, config: Optional[Settings] = None):
        self._settings = config or settings
        self.provider = (provider or self._settings.llm_provider).strip().lower()
        self._client: Optional[ChatClient] = None

    @property
    def client(self) -> ChatClient:
        if self._client is None:
            self._client = ChatClient(build_client_config(self._settings, self.provider))
        return self._client

    async def complete_task(self, task: ChatTask, content: str) -> TaskResult:
        return await self.client.complete_task(task, content)

    @property
    def provider_name(self) -> str:
        return self.provider

    @property
    def model_name(self) -> str:
        if self._client is not None:
            return self._client.model_name
        return self._settings.openai_model if self.provider == "openai" else self._settings.deepseek_model

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


# Singleton instance
llm_client = LLMClientFactory()
