import math
import re
import logging
from typing import Iterable, List, Optional, Sequence

from ..analyzers.base import ValidationResult
from .formats import CODE_SWITCH_MARKERS, MAX_BULLETS, MIN_BULLETS, PAUSE_MARKER

logger = logging.getLogger(__name__)

DEFAULT_MAX_AVG_SENTENCE_LENGTH = 20

CODE_PATTERNS = [
    re.compile(r"function\s+\w+\s*\("),
    re.compile(r"\bdef\s+\w+\s*\("),
    re.compile(r"\b(?:const|let|var)\s+\w+\s*="),
    re.compile(r"\bclass\s+[A-Z]\w*\s*[(:{]"),
    re.compile(r"\bimport\s+.*\bfrom\s+['\"]"),
    re.compile(r"\bexport\s+(?:default|const|function)\b"),
    re.compile(r"<\w+>"),
    re.compile(r"\{\s*\w+:\s*\w+\s*\}"),
]

STRUCTURED_PATTERNS = [
    re.compile(r"\[\s*\{"),
    re.compile(r"\{\s*\"\w+\":"),
    re.compile(r"\|\s*\w+\s*\|"),
    re.compile(r"^\s*[-*]\s+\w+:\s*", re.MULTILINE),
]

PLACEHOLDER_PATTERN = re.compile(r"\[(?:object|function)\s*\w*\]", re.IGNORECASE)

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def average_sentence_length(text: str) -> int:
    """Mean words per sentence, rounded to the nearest whole word."""
    sentences = [s for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]
    if not sentences:
        return 0
    total_words = sum(len(s.split()) for s in sentences)
    return _round_half_up(total_words / len(sentences))


class OutputValidator:
    """
    Structural and readability checks over the five generated formats.

    validate() never raises; every violation is collected as a readable
    message so callers see all problems at once.
    """

    def __init__(
        self,
        max_avg_sentence_length: int = DEFAULT_MAX_AVG_SENTENCE_LENGTH,
        pause_marker: str = PAUSE_MARKER,
        markers: Optional[Iterable[str]] = None,
    ):
        self.max_avg_sentence_length = max_avg_sentence_length
        self.pause_marker = pause_marker
        vocabulary = CODE_SWITCH_MARKERS if markers is None else tuple(markers)
        self._marker_re = None
        if vocabulary:
            alternatives = "|".join(re.escape(m) for m in vocabulary)
            self._marker_re = re.compile(rf"\b(?:{alternatives})\b", re.IGNORECASE)

    def validate(
        self,
        grade5: str,
        bullets: Sequence[str],
        whatsapp: str,
        voice: str,
        regional: str,
    ) -> ValidationResult:
        errors: List[str] = []
        bullets = list(bullets or [])

        errors.extend(self.validate_text(grade5, "Grade 5"))

        if not MIN_BULLETS <= len(bullets) <= MAX_BULLETS:
            errors.append(
                f"Bullet summary must have {MIN_BULLETS}-{MAX_BULLETS} items "
                f"(got {len(bullets)})"
            )
        for i, bullet in enumerate(bullets, start=1):
            errors.extend(self.validate_text(bullet, f"Bullet {i}"))

        errors.extend(self.validate_text(whatsapp, "WhatsApp"))

        if self.pause_marker not in (voice or ""):
            errors.append("Voice script must include pause markers")

        if not self.contains_code_switching(regional):
            errors.append("Regional version must contain Hinglish words")

        if errors:
            logger.debug(f"Validation found {len(errors)} problem(s)")
        return ValidationResult(valid=not errors, errors=errors)

    def validate_text(self, text: str, label: str) -> List[str]:
        text = text or ""
        errors: List[str] = []

        if not text.strip():
            errors.append(f"{label} is empty")
            return errors
        if self.contains_code(text):
            errors.append(f"{label} contains code fragments")
        if self.contains_structured_data(text):
            errors.append(f"{label} contains structured data patterns")
        if self.contains_placeholder(text):
            errors.append(f"{label} contains bracketed objects")

        avg_length = average_sentence_length(text)
        if avg_length > self.max_avg_sentence_length:
            errors.append(f"{label} has too long sentences (avg: {avg_length} words)")

        return errors

    @staticmethod
    def contains_code(text: str) -> bool:
        return any(p.search(text) for p in CODE_PATTERNS)

    @staticmethod
    def contains_structured_data(text: str) -> bool:
        return any(p.search(text) for p in STRUCTURED_PATTERNS)

    @staticmethod
    def contains_placeholder(text: str) -> bool:
        return bool(PLACEHOLDER_PATTERN.search(text))

    def contains_code_switching(self, text: str) -> bool:
        if self._marker_re is None or not text:
            return False
        return bool(self._marker_re.search(text))
