from .data import load_json
from .io import read_text, collect_text_files

__all__ = ["load_json", "read_text", "collect_text_files"]
