"""
Reply draft generation engine.

Produces a polite, concise reply to an inbound email.
"""

import logging

from src.api.models.responses import DraftResult
from src.llm.factory import llm_client
from src.llm.tasks import ChatTask

logger = logging.getLogger(__name__)


class DraftGenerator:
    """Generates reply drafts."""

    async def generate(self, content: str) -> DraftResult:
        """
        Generate a reply draft for an email.

        Args:
            content: Email text (HTML allowed)

        Returns:
            The model's reply text, trimmed
        """
        result = await llm_client.complete_task(ChatTask.DRAFT, content)
        logger.info(f"Generated draft ({len(result.draft)} chars)")
        return result


# Singleton instance
generator = DraftGenerator()
