from .parsing import strip_markdown, locate_json_span, repair_truncated_json, parse_json_object
from .text import collapse_whitespace, truncate, preview, remove_phrases
from .url import extract_host, host_matches

__all__ = [
    "strip_markdown",
    "locate_json_span",
    "repair_truncated_json",
    "parse_json_object",
    "collapse_whitespace",
    "truncate",
    "preview",
    "remove_phrases",
    "extract_host",
    "host_matches",
]
