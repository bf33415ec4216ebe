from typing import List, Optional

from pydantic import AliasChoices, ConfigDict, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # API
    api_host: str = "0.0.0.0"
    api_port: int = Field(default=8080, validation_alias=AliasChoices("api_port", "port"))
    debug: bool = False

    # CORS - Comma-separated list, empty = allow all in debug mode only
    cors_allowed_origins: str = ""

    def get_cors_origins(self) -> List[str]:
        """
        Get list of allowed CORS origins.

        Returns:
            List of allowed origins. If empty and debug=True, allows all origins.
            If empty and debug=False, returns empty list (no CORS allowed).
        """
        if not self.cors_allowed_origins:
            if self.debug:
                return ["*"]
            return []
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    # LLM Provider Selection
    llm_provider: str = "deepseek"  # "deepseek" or "openai"

    # DeepSeek Configuration (PRIMARY)
    deepseek_api_url: str = "https://api.deepseek.com"
    deepseek_api_key: Optional[str] = None
    deepseek_model: str = "deepseek-chat"

    # OpenAI Configuration (same chat-completion contract)
    openai_api_url: str = "https://api.openai.com"
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"

    # Timeouts apply per outbound call, not per retry sequence
    llm_timeout_seconds: int = 30
    llm_max_retries: int = 3

    # Logging
    log_level: str = "INFO"

    # Rate Limiting (per-IP)
    rate_limit_summarize: str = "100/minute"
    rate_limit_classify: str = "100/minute"
    rate_limit_draft: str = "100/minute"

    model_config = ConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
