import logging
from pathlib import Path
from typing import List, Union

import chardet

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = {".txt", ".md"}
MIN_DETECTION_CONFIDENCE = 0.5


def read_text(path: Union[str, Path]) -> str:
    """
    Read a text file, decoding as UTF-8 first.

    Files that are not valid UTF-8 go through chardet detection; if that is
    inconclusive the bytes are decoded with replacement characters so the
    caller always gets a string.
    """
    raw = Path(path).read_bytes()
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    detected = chardet.detect(raw)
    encoding = detected.get("encoding")
    confidence = detected.get("confidence") or 0.0
    if encoding and confidence >= MIN_DETECTION_CONFIDENCE:
        try:
            text = raw.decode(encoding)
            logger.info(f"Decoded {path} as {encoding} ({confidence:.0%})")
            return text
        except (LookupError, UnicodeDecodeError) as e:
            logger.warning(f"Detected encoding {encoding} failed for {path}: {e}")

    logger.warning(f"Could not determine encoding of {path}, replacing bad bytes")
    return raw.decode("utf-8", errors="replace")


def collect_text_files(path: Path) -> List[Path]:
    """Collect .txt/.md files from a file or directory path."""
    path = Path(path)
    if path.is_file():
        return [path] if path.suffix.lower() in TEXT_SUFFIXES else []
    return sorted(p for p in path.glob("*") if p.suffix.lower() in TEXT_SUFFIXES)
