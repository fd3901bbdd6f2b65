import logging
from typing import List

from .base import AnalyzedText, RankedSentence

logger = logging.getLogger(__name__)

KEYWORD_WEIGHT = 0.4
ENTITY_WEIGHT = 0.2
POSITION_WEIGHT = 0.2
LENGTH_WEIGHT = 0.2

DEFAULT_TOP_N = 3
DEFAULT_SIMILARITY_THRESHOLD = 0.7
SHORT_SENTENCE_WORDS = 5
LONG_SENTENCE_WORDS = 30


def jaccard_similarity(s1: str, s2: str) -> float:
    """Case-insensitive Jaccard similarity of whitespace token sets."""
    words1 = set(s1.lower().split())
    words2 = set(s2.lower().split())
    union = words1 | words2
    if not union:
        return 0.0
    return len(words1 & words2) / len(union)


class SentenceRanker:
    """
    Scores sentences by importance and returns the best non-redundant ones.

    score = 0.4 * keyword relevance + 0.2 * entity presence
          + 0.2 * position weight  + 0.2 * length score

    Position favours the lead and closing sentences (inverted-pyramid
    writing). After sorting, a greedy pass drops any sentence whose Jaccard
    similarity to an already accepted one exceeds the threshold.
    """

    def __init__(self, similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD):
        self.similarity_threshold = similarity_threshold

    def rank(self, analyzed: AnalyzedText, top_n: int = DEFAULT_TOP_N) -> List[RankedSentence]:
        scored = [
            RankedSentence(text=sentence, score=self.score(sentence, index, analyzed), index=index)
            for index, sentence in enumerate(analyzed.sentences)
        ]
        scored.sort(key=lambda r: (-r.score, r.index))

        selected = self.remove_redundant(scored)[:top_n]
        logger.debug(
            f"Ranked {len(scored)} sentence(s), kept {len(selected)}: "
            f"{[r.index for r in selected]}"
        )
        return selected

    def score(self, sentence: str, index: int, analyzed: AnalyzedText) -> float:
        return (
            KEYWORD_WEIGHT * self.keyword_relevance(sentence, analyzed.keywords)
            + ENTITY_WEIGHT * self.entity_presence(sentence, analyzed.entities)
            + POSITION_WEIGHT * self.position_weight(index, len(analyzed.sentences))
            + LENGTH_WEIGHT * self.length_score(sentence)
        )

    @staticmethod
    def keyword_relevance(sentence: str, keywords) -> float:
        lowered = sentence.lower()
        matches = sum(1 for kw in keywords if kw in lowered)
        return min(matches / max(len(keywords) * 0.3, 1), 1.0)

    @staticmethod
    def entity_presence(sentence: str, entities) -> float:
        matches = sum(1 for entity in entities if entity in sentence)
        return min(matches / max(len(entities) * 0.5, 1), 1.0)

    @staticmethod
    def position_weight(index: int, total: int) -> float:
        if index == 0:
            return 1.0
        if index == total - 1:
            return 0.8
        if index == 1:
            return 0.7
        return 0.5

    @staticmethod
    def length_score(sentence: str) -> float:
        words = len(sentence.split())
        if words < SHORT_SENTENCE_WORDS:
            return 0.3
        if words > LONG_SENTENCE_WORDS:
            return 0.5
        return 1.0

    def remove_redundant(self, ranked: List[RankedSentence]) -> List[RankedSentence]:
        accepted: List[RankedSentence] = []
        for candidate in ranked:
            if any(
                jaccard_similarity(candidate.text, kept.text) > self.similarity_threshold
                for kept in accepted
            ):
                logger.debug(f"Dropping near-duplicate sentence {candidate.index}")
                continue
            accepted.append(candidate)
        return accepted
