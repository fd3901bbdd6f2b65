import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

CONFIG_SECTION = "simplifier"


@dataclass
class SimplifierConfig:
    """Tunable knobs for the simplification pipeline."""

    top_n: int = 5
    keyword_count: int = 10
    similarity_threshold: float = 0.7
    split_threshold: int = 20
    max_avg_sentence_length: int = 20

    fallback_chars: int = 300
    fallback_sentences: int = 3

    max_cleaning_passes: int = 5

    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]] = None) -> "SimplifierConfig":
        """
        Build a config from a mapping.

        Accepts either the full config document ({"simplifier": {...}}) or
        the section itself. Unknown keys are logged and ignored.
        """
        config = config or {}
        section = config.get(CONFIG_SECTION, config) or {}
        if not isinstance(section, dict):
            raise ValueError(f"'{CONFIG_SECTION}' config section must be a mapping")
        known = {f.name for f in fields(cls)}

        unknown = sorted(set(section) - known)
        if unknown:
            logger.warning(f"Ignoring unknown simplifier config keys: {unknown}")

        values = {}
        for f in fields(cls):
            if f.name in section:
                values[f.name] = _coerce(f.name, section[f.name], _FIELD_TYPES[f.name])
        return cls(**values)


_FIELD_TYPES = {
    "top_n": int,
    "keyword_count": int,
    "similarity_threshold": float,
    "split_threshold": int,
    "max_avg_sentence_length": int,
    "fallback_chars": int,
    "fallback_sentences": int,
    "max_cleaning_passes": int,
    "seed": Optional[int],
}


def _coerce(key: str, value: Any, expected: Any) -> Any:
    if expected == Optional[int]:
        if value is None:
            return None
        expected = int

    # bool is an int subclass but never a valid count or threshold
    if isinstance(value, bool):
        raise ValueError(f"Config key '{key}' must be {expected.__name__}, got {value!r}")
    if expected is float and isinstance(value, (int, float)):
        return float(value)
    if expected is int and isinstance(value, int):
        return value
    raise ValueError(f"Config key '{key}' must be {expected.__name__}, got {value!r}")


def load_config(path: Union[str, Path]) -> SimplifierConfig:
    """Load a SimplifierConfig from a YAML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    logger.debug(f"Loaded config from {path}")
    return SimplifierConfig.from_dict(data)
