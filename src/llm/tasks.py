"""
Chat task variants.

Each task fixes the system prompt, the user prompt template and the decoder
that turns ``choices[0].message.content`` into the task's result model.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Union

from pydantic import ValidationError

from src.api.errors import LLMMalformedOutputError
from src.api.models.responses import ClassifyResponse, DraftResult, SummaryResult
from src.llm.base import ChatMessage, ChatRole
from src.llm.schemas import ClassificationLLMResponse
from src.prompts import (
    CLASSIFY_EMAIL_SYSTEM,
    CLASSIFY_EMAIL_USER,
    GENERATE_DRAFT_SYSTEM,
    GENERATE_DRAFT_USER,
    SUMMARIZE_EMAIL_SYSTEM,
    SUMMARIZE_EMAIL_USER,
)
from src.utils import JSONExtractionError, extract_json

logger = logging.getLogger(__name__)

TaskResult = Union[SummaryResult, ClassifyResponse, DraftResult]


class ChatTask(str, Enum):
    SUMMARIZE = "summarize"
    CLASSIFY = "classify"
    DRAFT = "draft"


@dataclass(frozen=True)
class TaskSpec:
    system_prompt: str
    user_template: str
    decode: Callable[[str], TaskResult]

    def build_messages(self, content: str) -> List[ChatMessage]:
        return [
            ChatMessage(role=ChatRole.SYSTEM, content=self.system_prompt),
            ChatMessage(role=ChatRole.USER, content=self.user_template.format(content=content)),
        ]


def decode_summary(content: str) -> SummaryResult:
    return SummaryResult(summary=content.strip())


def decode_draft(content: str) -> DraftResult:
    return DraftResult(draft=content.strip())


def decode_labels(content: str) -> ClassifyResponse:
    """
    Decode classification labels from model output.

    Raises:
        LLMMalformedOutputError: content is not JSON of the labels shape
            (after removing an optional code fence)
    """
    content = content.strip()
    logger.debug("Classification response content: %s", content)

    try:
        raw_result = extract_json(content)
    except JSONExtractionError as e:
        logger.error("Failed to parse JSON from model response: %s, content: %s", e, content)
        raise LLMMalformedOutputError(
            message="model did not return valid JSON for classification",
            raw_content=content,
            error=str(e),
        ) from e

    try:
        result = ClassificationLLMResponse.model_validate(raw_result)
    except ValidationError as e:
        logger.error("Classification response validation failed: %s", e)
        raise LLMMalformedOutputError(
            message="model returned JSON that does not match the labels schema",
            raw_content=content,
            error=str(e),
        ) from e

    if not result.labels:
        logger.warning("Model returned empty labels, content: %s", content)

    return ClassifyResponse(labels=result.labels)


TASKS = {
    ChatTask.SUMMARIZE: TaskSpec(SUMMARIZE_EMAIL_SYSTEM, SUMMARIZE_EMAIL_USER, decode_summary),
    ChatTask.CLASSIFY: TaskSpec(CLASSIFY_EMAIL_SYSTEM, CLASSIFY_EMAIL_USER, decode_labels),
    ChatTask.DRAFT: TaskSpec(GENERATE_DRAFT_SYSTEM, GENERATE_DRAFT_USER, decode_draft),
}
