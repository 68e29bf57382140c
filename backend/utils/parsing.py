import json
import re
from typing import Any, Optional, Dict, List, Tuple

from config import logger

_FENCE_PATTERN = re.compile(r"```(?:json)?\s*", re.IGNORECASE)
_BOLD_PATTERN = re.compile(r"\*\*(.*?)\*\*", re.DOTALL)
_ITALIC_PATTERN = re.compile(r"\*(.*?)\*", re.DOTALL)
_WHITESPACE_PATTERN = re.compile(r"\s+")


def strip_markdown(text: str) -> str:
    """Remove code fences and bold/italic markup, then collapse whitespace."""
    if not text:
        return ""
    text = _FENCE_PATTERN.sub("", text)
    text = _BOLD_PATTERN.sub(r"\1", text)
    text = _ITALIC_PATTERN.sub(r"\1", text)
    text = _WHITESPACE_PATTERN.sub(" ", text)
    return text.strip()


def locate_json_span(text: str) -> Optional[str]:
    """Return the substring from the first '{' to the last '}', if both exist."""
    if not text:
        return None
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        return None
    return text[start:end + 1]


_DANGLING_KEY_PATTERN = re.compile(r'([{,])\s*"(?:[^"\\]|\\.)*"$')


def _scan_open_structures(candidate: str) -> Tuple[List[str], bool]:
    """Return the stack of unclosed '{'/'[' and whether a string literal is left open."""
    stack: List[str] = []
    in_string = False
    escaped = False
    for ch in candidate:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in "{[":
            stack.append(ch)
        elif ch in "}]" and stack:
            stack.pop()
    return stack, in_string


def _trim_dangling(text: str, innermost: Optional[str]) -> str:
    """Drop a trailing comma, colon or orphaned object key left by truncation."""
    text = text.rstrip()
    while True:
        if text.endswith(","):
            text = text[:-1].rstrip()
            continue
        if innermost == "{":
            if text.endswith(":"):
                text = text[:-1].rstrip()
            match = _DANGLING_KEY_PATTERN.search(text)
            if match:
                text = text[:match.start(1) + 1].rstrip()
                continue
        return text


def repair_truncated_json(candidate: str) -> str:
    """
    Close a JSON document that was cut off mid-stream.
    Appends a closing quote when a string is left open, drops a dangling
    separator or key, then closes every open '[' and '{' innermost first.
    """
    stack, in_string = _scan_open_structures(candidate)

    repaired = candidate
    if in_string:
        # A lone trailing backslash would escape the closing quote.
        if (len(repaired) - len(repaired.rstrip("\\"))) % 2:
            repaired = repaired[:-1]
        repaired += '"'
    repaired = _trim_dangling(repaired, stack[-1] if stack else None)
    repaired += "".join("}" if opener == "{" else "]" for opener in reversed(stack))
    return repaired


def _loads_object(candidate: str) -> Optional[Dict[str, Any]]:
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError:
        try:
            data = json.loads(re.sub(r"[\x00-\x1f]", "", candidate))
        except json.JSONDecodeError:
            return None
    return data if isinstance(data, dict) else None


def parse_json_object(candidate: str) -> Tuple[Optional[Dict[str, Any]], bool]:
    """
    Parse a JSON object, attempting one structural repair on failure.
    Returns:
        (parsed object or None, whether the repair step was needed)
    """
    if not candidate:
        return None, False
    data = _loads_object(candidate)
    if data is not None:
        return data, False

    logger.warning("JSON parsing failed, attempting repair.")
    data = _loads_object(repair_truncated_json(candidate))
    if data is not None:
        logger.info("JSON repair successful.")
    return data, True
