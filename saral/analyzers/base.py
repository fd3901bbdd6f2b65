from dataclasses import dataclass, field
from typing import Dict, List, Set


@dataclass
class AnalyzedText:
    sentences: List[str]
    tokens: List[List[str]]
    keywords: List[str] = field(default_factory=list)
    entities: Set[str] = field(default_factory=set)
    word_frequency: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self):
        if len(self.tokens) != len(self.sentences):
            raise ValueError(
                f"tokens ({len(self.tokens)}) must parallel sentences "
                f"({len(self.sentences)})"
            )


@dataclass
class RankedSentence:
    text: str
    score: float
    index: int


@dataclass
class FormattedOutputs:
    grade5_explanation: str
    bullet_summary: List[str]
    whatsapp_version: str
    voice_script: str
    regional_version: str

    def to_dict(self) -> Dict:
        return {
            "grade5_explanation": self.grade5_explanation,
            "bullet_summary": list(self.bullet_summary),
            "whatsapp_version": self.whatsapp_version,
            "voice_script": self.voice_script,
            "regional_version": self.regional_version,
        }


@dataclass
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)
