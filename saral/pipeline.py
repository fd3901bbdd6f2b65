import random
import re
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .analyzers.base import AnalyzedText, FormattedOutputs, ValidationResult
from .analyzers.text import TextAnalyzer
from .analyzers.ranker import SentenceRanker
from .analyzers.readability import ReadabilityTransformer, grade_level
from .generators.formats import FormatGenerator
from .generators.validator import OutputValidator
from .config import SimplifierConfig

logger = logging.getLogger(__name__)

_FALLBACK_SPLIT_RE = re.compile(r"[.!?]+")


class PipelineState(str, Enum):
    ANALYZING = "analyzing"
    RANKING = "ranking"
    TRANSFORMING = "transforming"
    GENERATING = "generating"
    VALIDATING = "validating"
    FALLBACK = "fallback"
    DONE = "done"


@dataclass
class PipelineResult:
    outputs: FormattedOutputs
    validation: ValidationResult
    fallback_used: bool = False
    fallback_validation: Optional[ValidationResult] = None
    states: List[PipelineState] = field(default_factory=list)
    source_grade: float = 0.0
    output_grade: float = 0.0

    def to_dict(self) -> Dict:
        return {
            **self.outputs.to_dict(),
            "diagnostics": {
                "fallback_used": self.fallback_used,
                "validation_errors": list(self.validation.errors),
                "fallback_errors": (
                    list(self.fallback_validation.errors)
                    if self.fallback_validation
                    else []
                ),
                "states": [s.value for s in self.states],
                "source_grade": self.source_grade,
                "output_grade": self.output_grade,
            },
        }


class SimplifierPipeline:
    """
    Saral end-to-end simplification pipeline.

    Stages:
      1. Analyze    - raw text to AnalyzedText via TextAnalyzer
      2. Rank       - top-N non-redundant sentences via SentenceRanker
      3. Transform  - grade-5 rewrite via ReadabilityTransformer
      4. Generate   - five formats via FormatGenerator
      5. Validate   - structural checks via OutputValidator

    If validation fails the pipeline falls back once: it regenerates the
    formats from a plain truncation of the raw input. The fallback output
    is returned even if it is not valid itself; there is no second
    fallback.

    Usage:
        p = SimplifierPipeline(config=SimplifierConfig(seed=7))
        outputs = p.process(text)

    Every call builds its own random.Random from config.seed, so a fixed
    seed reproduces outputs exactly and concurrent calls share no state.
    """

    def __init__(self, config: Optional[SimplifierConfig] = None):
        self.config = config or SimplifierConfig()

        self._analyzer = TextAnalyzer(
            keyword_count=self.config.keyword_count,
            cleaning_passes=self.config.max_cleaning_passes,
        )
        self._ranker = SentenceRanker(
            similarity_threshold=self.config.similarity_threshold
        )
        self._transformer = ReadabilityTransformer(
            split_threshold=self.config.split_threshold
        )
        self._generator = FormatGenerator()
        self._validator = OutputValidator(
            max_avg_sentence_length=self.config.max_avg_sentence_length,
            pause_marker=self._generator.pause_marker,
        )

    def process(self, text: str) -> FormattedOutputs:
        """Run the pipeline and return only the formatted outputs."""
        return self.run(text).outputs

    def run(self, text: str) -> PipelineResult:
        """Run the pipeline and return outputs together with diagnostics."""
        text = text or ""
        rng = random.Random(self.config.seed)
        states: List[PipelineState] = []

        self._enter(states, PipelineState.ANALYZING)
        analyzed = self._analyzer.analyze(text)

        self._enter(states, PipelineState.RANKING)
        ranked = self._ranker.rank(analyzed, self.config.top_n)
        core_sentences = [r.text for r in ranked]

        self._enter(states, PipelineState.TRANSFORMING)
        simplified = self._transformer.transform(core_sentences)

        self._enter(states, PipelineState.GENERATING)
        outputs = self._generator.generate(simplified, analyzed.keywords, rng=rng)

        self._enter(states, PipelineState.VALIDATING)
        validation = self._validate(outputs)

        result = PipelineResult(
            outputs=outputs,
            validation=validation,
            states=states,
            source_grade=grade_level(". ".join(analyzed.sentences)),
        )

        if not validation.valid:
            logger.warning(f"Validation failed: {validation.errors}")
            self._enter(states, PipelineState.FALLBACK)
            result.outputs = self._fallback(text, analyzed, rng)
            result.fallback_used = True
            result.fallback_validation = self._validate(result.outputs)
            if not result.fallback_validation.valid:
                logger.warning(
                    f"Fallback output also violates invariants: "
                    f"{result.fallback_validation.errors}"
                )

        result.output_grade = grade_level(result.outputs.grade5_explanation)
        self._enter(states, PipelineState.DONE)
        return result

    def _fallback(
        self, text: str, analyzed: AnalyzedText, rng: random.Random
    ) -> FormattedOutputs:
        """Regenerate formats from the first characters of the raw input."""
        safe_text = text[: self.config.fallback_chars].strip()
        sentences = [
            s.strip() for s in _FALLBACK_SPLIT_RE.split(safe_text) if s.strip()
        ]
        return self._generator.generate(
            sentences[: self.config.fallback_sentences], analyzed.keywords, rng=rng
        )

    def _validate(self, outputs: FormattedOutputs) -> ValidationResult:
        return self._validator.validate(
            outputs.grade5_explanation,
            outputs.bullet_summary,
            outputs.whatsapp_version,
            outputs.voice_script,
            outputs.regional_version,
        )

    @staticmethod
    def _enter(states: List[PipelineState], state: PipelineState) -> None:
        logger.debug(f"Pipeline state -> {state.value}")
        states.append(state)


def simplify(text: str, seed: Optional[int] = None) -> FormattedOutputs:
    """Convenience wrapper: run a default pipeline once."""
    return SimplifierPipeline(SimplifierConfig(seed=seed)).process(text)
