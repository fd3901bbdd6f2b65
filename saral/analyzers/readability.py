import math
import re
import logging
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from ..utils.data import load_json

logger = logging.getLogger(__name__)

DEFAULT_SPLIT_THRESHOLD = 20
MIN_WORDS_BEFORE_SPLIT = 6
MIN_WORDS_AFTER_SPLIT = 5
MAX_CLAUSES = 3
KEPT_CLAUSES = 2

CONJUNCTIONS: Tuple[str, ...] = ("and", "but", "because", "although", "while")


def _load_vocabulary() -> Mapping[str, str]:
    """Flatten complex_to_simple.json ({part_of_speech: {complex: simple}})."""
    data = load_json("complex_to_simple.json")
    table = {}
    for entries in data.values():
        if isinstance(entries, dict):
            table.update({k.lower(): v for k, v in entries.items()})
    return MappingProxyType(table)


_COMPLEX_TO_SIMPLE: Mapping[str, str] = _load_vocabulary()

_GROUPING_COMMA_RE = re.compile(r"(?<=\d),(?=\d{3}\b)")
_LARGE_NUMBER_RE = re.compile(r"\b(\d{4,})\b")
_PERCENT_RE = re.compile(r"\b(\d+)%")
_DOLLAR_RE = re.compile(r"\$(\d+)((?:\s+(?:thousand|million))?)")
_PARENTHETICAL_RE = re.compile(r"\([^)]*\)")
_SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([,.!?;:])")
_WHITESPACE_RE = re.compile(r"\s+")

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_VOWEL_GROUP_RE = re.compile(r"[aeiouy]+")
_NON_LETTER_RE = re.compile(r"[^a-z]")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _compile_substitutions(vocabulary: Mapping[str, str]) -> List[Tuple[re.Pattern, str]]:
    return [
        (re.compile(rf"\b{re.escape(complex_word)}\b", re.IGNORECASE), simple)
        for complex_word, simple in vocabulary.items()
    ]


class ReadabilityTransformer:
    """
    Rewrites sentences toward a grade-5 reading level with fixed rules.

    Rules run in order, each on the output of the previous one:
      1. complex -> simple word substitution (fdata/complex_to_simple.json)
      2. split sentences over the word threshold at a conjunction
      3. spell out large numbers, percentages and dollar amounts
      4. drop parentheticals and trailing comma clauses
    """

    def __init__(
        self,
        vocabulary: Optional[Mapping[str, str]] = None,
        split_threshold: int = DEFAULT_SPLIT_THRESHOLD,
    ):
        self.vocabulary = _COMPLEX_TO_SIMPLE if vocabulary is None else vocabulary
        self.split_threshold = split_threshold
        self._substitutions = _compile_substitutions(self.vocabulary)

    def transform(self, sentences: List[str]) -> List[str]:
        return [self.simplify_sentence(s) for s in sentences]

    def simplify_sentence(self, sentence: str) -> str:
        simplified = self.replace_complex_words(sentence)
        simplified = self.split_long_sentence(simplified)
        simplified = self.simplify_numbers(simplified)
        simplified = self.reduce_clauses(simplified)
        return simplified.strip()

    def replace_complex_words(self, sentence: str) -> str:
        result = sentence
        for pattern, simple in self._substitutions:
            result = pattern.sub(simple, result)
        return result

    def split_long_sentence(self, sentence: str) -> str:
        """Split once at the first usable conjunction when the sentence is too long."""
        words = sentence.split()
        if len(words) <= self.split_threshold:
            return sentence

        lowered = [w.lower() for w in words]
        for conjunction in CONJUNCTIONS:
            if conjunction not in lowered:
                continue
            at = lowered.index(conjunction)
            if at >= MIN_WORDS_BEFORE_SPLIT and len(words) - at - 1 >= MIN_WORDS_AFTER_SPLIT:
                first = " ".join(words[:at]).rstrip(",;")
                second = " ".join(words[at + 1 :])
                return f"{first}. {second[0].upper()}{second[1:]}"

        return sentence

    @staticmethod
    def simplify_numbers(sentence: str) -> str:
        def spell_large(match: re.Match) -> str:
            number = int(match.group(1))
            if number >= 1_000_000:
                return f"{_round_half_up(number / 1_000_000)} million"
            if number >= 1_000:
                return f"{_round_half_up(number / 1_000)} thousand"
            return match.group(0)

        result = _GROUPING_COMMA_RE.sub("", sentence)
        result = _LARGE_NUMBER_RE.sub(spell_large, result)
        result = _PERCENT_RE.sub(r"\1 percent", result)
        return _DOLLAR_RE.sub(r"\1\2 dollars", result)

    @staticmethod
    def reduce_clauses(sentence: str) -> str:
        result = _PARENTHETICAL_RE.sub("", sentence)

        parts = result.split(",")
        if len(parts) > MAX_CLAUSES:
            result = ",".join(parts[:KEPT_CLAUSES])

        result = _WHITESPACE_RE.sub(" ", result)
        return _SPACE_BEFORE_PUNCT_RE.sub(r"\1", result).strip()

    @staticmethod
    def calculate_grade_level(text: str) -> float:
        return grade_level(text)


def count_syllables(word: str) -> int:
    """Vowel-group heuristic with a silent trailing 'e'. Always at least 1."""
    letters = _NON_LETTER_RE.sub("", word.lower())
    if len(letters) <= 3:
        return 1

    count = len(_VOWEL_GROUP_RE.findall(letters)) or 1
    if letters.endswith("e"):
        count -= 1
    return max(1, count)


def _text_stats(text: str) -> Optional[Tuple[float, float]]:
    sentences = [s for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]
    words = text.split()
    if not sentences or not words:
        return None
    syllables = sum(count_syllables(w) for w in words)
    return len(words) / len(sentences), syllables / len(words)


def grade_level(text: str) -> float:
    """Flesch-Kincaid grade estimate, floored at 0, one decimal place."""
    stats = _text_stats(text)
    if stats is None:
        return 0.0
    words_per_sentence, syllables_per_word = stats
    grade = 0.39 * words_per_sentence + 11.8 * syllables_per_word - 15.59
    return max(0.0, round(grade, 1))


def reading_ease(text: str) -> float:
    """Flesch Reading Ease (higher is easier), clamped to 0..100."""
    stats = _text_stats(text)
    if stats is None:
        return 0.0
    words_per_sentence, syllables_per_word = stats
    score = 206.835 - 1.015 * words_per_sentence - 84.6 * syllables_per_word
    return max(0.0, min(100.0, round(score, 1)))
