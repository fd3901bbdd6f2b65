import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / "fdata"


def load_json(filename: str) -> dict:
    """Load a lookup table from saral/fdata. Returns {} when the file is unusable."""
    data_path = DATA_DIR / filename
    try:
        with open(data_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load {filename}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.error(f"{filename} must contain a JSON object")
        return {}
    return data
