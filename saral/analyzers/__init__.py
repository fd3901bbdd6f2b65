from .base import AnalyzedText, RankedSentence, FormattedOutputs, ValidationResult
from .text import TextAnalyzer
from .ranker import SentenceRanker, jaccard_similarity
from .readability import ReadabilityTransformer, grade_level, reading_ease, count_syllables

__all__ = [
    "AnalyzedText",
    "RankedSentence",
    "FormattedOutputs",
    "ValidationResult",
    "TextAnalyzer",
    "SentenceRanker",
    "ReadabilityTransformer",
    "jaccard_similarity",
    "grade_level",
    "reading_ease",
    "count_syllables",
]
