"""Keyword-based extraction of candidate tasks from free text."""

import logging
import re

from src.core.config import ScoringConfig, settings
from src.core.errors import InvalidInputError
from src.models.service_models import ExtractedTask


logger = logging.getLogger(__name__)

_SENTENCE_BOUNDARY = re.compile(r"[.!?]+")

EXTRACTED_ID_PREFIX = "extracted_"


def split_sentences(text: str) -> list[str]:
    """Split on runs of terminal punctuation and drop blank fragments."""
    return [sentence for sentence in _SENTENCE_BOUNDARY.split(text) if sentence.strip()]


def is_actionable(sentence: str, action_words: list[str]) -> bool:
    """Return True if the sentence mentions any action verb (case-insensitive substring)."""
    lowered = sentence.lower()
    return any(word.lower() in lowered for word in action_words)


def extract_tasks(text: str, *, config: ScoringConfig | None = None) -> list[ExtractedTask]:
    """Turn prose into candidate tasks, one per actionable sentence.

    Ids are only unique within one call. Order follows the text and repeated
    sentences are kept.

    Raises:
        InvalidInputError: If text is not a string
    """
    if not isinstance(text, str):
        raise InvalidInputError("text must be a string")

    config = config or settings.scoring
    sentences = [s for s in split_sentences(text) if is_actionable(s, config.action_words)]

    extracted = []
    for index, sentence in enumerate(sentences):
        title = sentence.strip()
        extracted.append(
            ExtractedTask(
                id=f"{EXTRACTED_ID_PREFIX}{index}",
                title=title,
                description=f'Auto-extracted from: "{title}"',
            )
        )

    logger.info("tasks_extracted", extra={"sentence_count": len(sentences), "text_length": len(text)})
    return extracted
