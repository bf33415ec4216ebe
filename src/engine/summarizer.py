"""Email summarization engine."""

import logging

from src.api.models.responses import SummaryResult
from src.llm.factory import llm_client
from src.llm.tasks import ChatTask

logger = logging.getLogger(__name__)


class EmailSummarizer:
    """Summarizes emails into concise plain text."""

    async def summarize(self, content: str) -> SummaryResult:
        result = await llm_client.complete_task(ChatTask.SUMMARIZE, content)
        logger.info(f"Summarized email ({len(content)} chars -> {len(result.summary)} chars)")
        return result


# Singleton instance
summarizer = EmailSummarizer()
