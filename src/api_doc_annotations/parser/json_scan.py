"""Locate JSON objects embedded in comment blocks.

The scan tracks brace depth and string literals, so a ``}`` inside a string
value does not end the object early. Comment decoration (the ``*`` prefixing
continuation lines of a block comment) is skipped during the scan and removed
before decoding.
"""

import json
import re

TAG_MARKER = "@LRD"
COMMENT_END = "*/"

_DECORATION_RE = re.compile(r"^[ \t]*\*[ \t]*", re.MULTILINE)


def scan_json_object(text: str, start: int) -> str | None:
    """Return the object text starting at ``text[start]`` through its closing brace.

    Returns None when a tag marker, a comment terminator or the end of input
    is reached before the braces balance, or when a string literal runs past
    the end of its line.
    """
    if start >= len(text) or text[start] != "{":
        return None

    depth = 0
    in_string = False
    escaped = False
    i = start
    while i < len(text):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            elif ch == "\n":
                return None
        elif ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
        elif text.startswith(TAG_MARKER, i) or text.startswith(COMMENT_END, i):
            return None
        i += 1
    return None


def strip_decoration(text: str) -> str:
    """Remove leading ``*`` comment decoration from every line."""
    return _DECORATION_RE.sub("", text).strip()


def load_json_object(text: str) -> dict | None:
    """Decode a captured JSON object, or None if it is not a valid object."""
    try:
        value = json.loads(strip_decoration(text), parse_constant=_reject_constant)
    except ValueError:
        return None
    if not isinstance(value, dict):
        return None
    return value


def _reject_constant(name: str):
    # NaN and Infinity are not JSON
    raise ValueError(f"invalid JSON constant: {name}")
