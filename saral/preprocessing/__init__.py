from .structured import clean_structured_data, filter_prose, recover_text

__all__ = ["clean_structured_data", "filter_prose", "recover_text"]
