import re
import logging
from collections import Counter
from typing import Dict, FrozenSet, List, Optional, Set

from ..preprocessing.structured import DEFAULT_PASSES, clean_structured_data
from ..utils.data import load_json
from .base import AnalyzedText

logger = logging.getLogger(__name__)

DEFAULT_KEYWORD_COUNT = 10
MIN_KEYWORD_LENGTH = 3
MIN_ENTITY_LENGTH = 3


def _load_stopwords() -> FrozenSet[str]:
    data = load_json("stopwords.json")
    return frozenset(w.lower() for w in data.get("english", []))


_STOPWORDS: FrozenSet[str] = _load_stopwords()

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_NON_WORD_RE = re.compile(r"[^\w\s]")
# Capitalized word runs stand in for named entities
_ENTITY_RE = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*\b")


def segment_sentences(text: str) -> List[str]:
    """Split on sentence-terminal punctuation, dropping empty pieces."""
    pieces = (s.strip() for s in _SENTENCE_SPLIT_RE.split(text))
    return [s for s in pieces if s]


def tokenize(sentence: str) -> List[str]:
    return _NON_WORD_RE.sub(" ", sentence.lower()).split()


class TextAnalyzer:
    """
    First pipeline stage: turns raw input into an AnalyzedText.

    Input is first reduced to prose by the structured-data cleaner, then
    segmented, tokenized and counted. Keywords are the most frequent
    non-stopword tokens; entities are capitalized word runs.

    analyze() never raises. Empty or unusable input produces an
    AnalyzedText with no sentences.
    """

    def __init__(
        self,
        keyword_count: int = DEFAULT_KEYWORD_COUNT,
        extra_stopwords: Optional[Set[str]] = None,
        cleaning_passes: int = DEFAULT_PASSES,
    ):
        self.keyword_count = keyword_count
        self.cleaning_passes = cleaning_passes
        self.stopwords = set(_STOPWORDS)
        if extra_stopwords:
            self.stopwords.update(w.lower() for w in extra_stopwords)

    def analyze(self, text: str) -> AnalyzedText:
        cleaned = clean_structured_data(text or "", passes=self.cleaning_passes)
        sentences = segment_sentences(cleaned)
        tokens = [tokenize(s) for s in sentences]

        word_frequency = self.word_frequency(tokens)
        keywords = self.extract_keywords(word_frequency)
        entities = self.extract_entities(cleaned)

        logger.debug(
            f"Analyzed {len(sentences)} sentence(s), "
            f"{len(keywords)} keyword(s), {len(entities)} entity candidate(s)"
        )

        return AnalyzedText(
            sentences=sentences,
            tokens=tokens,
            keywords=keywords,
            entities=entities,
            word_frequency=word_frequency,
        )

    def word_frequency(self, tokens: List[List[str]]) -> Dict[str, int]:
        counts: Counter = Counter()
        for sentence_tokens in tokens:
            for word in sentence_tokens:
                if word not in self.stopwords and len(word) >= MIN_KEYWORD_LENGTH:
                    counts[word] += 1
        return dict(counts)

    def extract_keywords(self, word_frequency: Dict[str, int]) -> List[str]:
        """Top-N words by descending frequency; ties keep first-seen order."""
        ranked = sorted(word_frequency.items(), key=lambda item: -item[1])
        return [word for word, _ in ranked[: self.keyword_count]]

    @staticmethod
    def extract_entities(text: str) -> Set[str]:
        return {m for m in _ENTITY_RE.findall(text) if len(m) >= MIN_ENTITY_LENGTH}
