from .formats import FormatGenerator, PAUSE_MARKER, CODE_SWITCH_MARKERS
from .validator import OutputValidator

__all__ = ["FormatGenerator", "OutputValidator", "PAUSE_MARKER", "CODE_SWITCH_MARKERS"]
