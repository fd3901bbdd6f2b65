import logging
import re
from typing import FrozenSet, List, Optional

from ..utils.data import load_json

logger = logging.getLogger(__name__)

MIN_SENTENCE_CHARS = 15
MIN_SENTENCE_WORDS = 4
MAX_CAPITAL_RATIO = 0.3
MIN_CLEANED_CHARS = 30
DEFAULT_PASSES = 5

_INNER_BRACES_RE = re.compile(r"\{[^{}]*\}")
_BRACKETS_RE = re.compile(r"\[[^\]]*\]")
_QUOTED_PAIR_RE = re.compile(r"\w+\s*:\s*['\"][^'\"]*['\"]")
_BARE_PAIR_RE = re.compile(r"\w+\s*:\s*[^,}\s]+")
_COLON_RE = re.compile(r":\s*")
_QUOTES_RE = re.compile(r"['\"]+")
_LIST_COMMA_RE = re.compile(r",\s+")
_CANDIDATE_SPLIT_RE = re.compile(r"[.!?]+")
_CAPITAL_RE = re.compile(r"[A-Z]")
_WHITESPACE_RE = re.compile(r"\s+")

_QUOTED_PROSE_RE = re.compile(r"['\"]([^'\"]{30,})['\"]")
_MARKERS_RE = re.compile(r"[{}\[\]]")
_SNAKE_CASE_RE = re.compile(r"\w+_\w+")
_KEY_RE = re.compile(r"\w+:")


def _load_function_words() -> FrozenSet[str]:
    data = load_json("stopwords.json")
    return frozenset(w.lower() for w in data.get("function_words", []))


FUNCTION_WORDS: FrozenSet[str] = _load_function_words()


def strip_structured_fragments(text: str, passes: int = DEFAULT_PASSES) -> str:
    """
    Remove serialized-data syntax from text.

    Innermost brace groups are removed once per pass, so nesting up to
    `passes` levels deep disappears without a real parser.
    """
    cleaned = text
    for _ in range(passes):
        stripped = _INNER_BRACES_RE.sub(" ", cleaned)
        if stripped == cleaned:
            break
        cleaned = stripped

    cleaned = _BRACKETS_RE.sub(" ", cleaned)
    cleaned = _QUOTED_PAIR_RE.sub(" ", cleaned)
    cleaned = _BARE_PAIR_RE.sub(" ", cleaned)
    cleaned = _COLON_RE.sub(" ", cleaned)
    cleaned = _QUOTES_RE.sub("", cleaned)
    cleaned = _LIST_COMMA_RE.sub(" ", cleaned)
    cleaned = cleaned.replace("_", " ")
    return cleaned


def looks_like_prose(sentence: str, function_words: Optional[FrozenSet[str]] = None) -> bool:
    """Heuristic test separating real sentences from leftover keys and identifiers."""
    if len(sentence) < MIN_SENTENCE_CHARS:
        return False

    capitals = len(_CAPITAL_RE.findall(sentence))
    if capitals > len(sentence) * MAX_CAPITAL_RATIO:
        return False

    words = sentence.split()
    if len(words) < MIN_SENTENCE_WORDS:
        return False

    vocabulary = FUNCTION_WORDS if function_words is None else function_words
    return any(w.lower() in vocabulary for w in words)


def filter_prose(text: str) -> List[str]:
    candidates = [s.strip() for s in _CANDIDATE_SPLIT_RE.split(text)]
    return [s for s in candidates if s and looks_like_prose(s)]


def recover_text(original: str) -> str:
    """
    Last-chance recovery for input that was almost entirely structured data.

    Long quoted strings are usually the prose values of a JSON blob; when
    there are none, strip the obvious markers character by character.
    """
    quoted = _QUOTED_PROSE_RE.findall(original)
    if quoted:
        logger.debug(f"Recovered {len(quoted)} quoted fragment(s) from input")
        return " ".join(quoted)

    logger.debug("No quoted prose found, applying minimal strip")
    fallback = _MARKERS_RE.sub(" ", original)
    fallback = _SNAKE_CASE_RE.sub(" ", fallback)
    fallback = _KEY_RE.sub("", fallback)
    fallback = _QUOTES_RE.sub("", fallback)
    fallback = fallback.replace(",", " ")
    return _WHITESPACE_RE.sub(" ", fallback).strip()


def clean_structured_data(text: str, passes: int = DEFAULT_PASSES) -> str:
    """
    Reduce arbitrary input (possibly a pasted JSON blob) to plain prose.

    Returns the surviving prose sentences joined with ". ". Never raises;
    degenerate input yields whatever the recovery step can salvage, which
    may be an empty string.
    """
    if not text or not text.strip():
        return ""

    stripped = strip_structured_fragments(text, passes=passes)
    cleaned = ". ".join(filter_prose(stripped))
    cleaned = _WHITESPACE_RE.sub(" ", cleaned).strip()

    if len(cleaned) < MIN_CLEANED_CHARS:
        cleaned = recover_text(text)

    return cleaned
