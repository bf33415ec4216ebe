"""
Email classification engine.

Single-email classification delegates to the chat client. Batch
classification runs the single-email path over each email in order.
"""

import logging
from typing import List

from src.api.errors import InferenceBaseError
from src.api.models.requests import EmailRequest
from src.api.models.responses import ClassificationResult, ClassifyResponse
from src.llm.factory import llm_client
from src.llm.tasks import ChatTask

logger = logging.getLogger(__name__)


class EmailClassifier:
    """Assigns labels with confidence scores to emails."""

    async def classify(self, content: str) -> ClassifyResponse:
        """
        Classify a single email.

        Errors from the chat client propagate unchanged.
        """
        result = await llm_client.complete_task(ChatTask.CLASSIFY, content)
        logger.info(f"Classified email: {len(result.labels)} label(s)")
        return result

    async def classify_batch(self, emails: List[EmailRequest]) -> List[ClassificationResult]:
        """
        Classify emails one at a time, in input order.

        Args:
            emails: 1-100 emails, already validated by the request model

        Returns:
            One result per input email at the same index. An email whose
            classification failed gets an empty label list; the batch
            itself never fails for per-email errors.
        """
        results: List[ClassificationResult] = []
        failed = 0

        for email in emails:
            try:
                classification = await self.classify(email.content)
            except InferenceBaseError as e:
                logger.error(f"Error classifying email {email.id}: {e.message}")
                failed += 1
                results.append(ClassificationResult(id=email.id, labels=[]))
                continue

            results.append(ClassificationResult(id=email.id, labels=classification.labels))

        logger.info(
            f"Batch classification complete: {len(results) - failed} classified, {failed} failed"
        )
        return results


# Singleton instance
classifier = EmailClassifier()
