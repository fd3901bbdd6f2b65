__version__ = "0.1.0"

from .config import SimplifierConfig, load_config
from .pipeline import SimplifierPipeline, PipelineResult, PipelineState, simplify
from .analyzers.base import AnalyzedText, RankedSentence, FormattedOutputs, ValidationResult

__all__ = [
    "SimplifierConfig",
    "load_config",
    "SimplifierPipeline",
    "PipelineResult",
    "PipelineState",
    "simplify",
    "AnalyzedText",
    "RankedSentence",
    "FormattedOutputs",
    "ValidationResult",
]
