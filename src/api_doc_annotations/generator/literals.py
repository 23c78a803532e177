"""Render JSON-like trees as source literals of a target language."""

from dataclasses import dataclass
from typing import Any, Callable

INDENT = "    "


@dataclass(frozen=True)
class LiteralStyle:
    """Syntax of a language's map/list literals and keyword constants."""

    map_open: str
    map_close: str
    list_open: str
    list_close: str
    key_sep: str
    true: str
    false: str
    null: str
    quote: Callable[[str], str]


def _php_quote(text: str) -> str:
    # single-quoted PHP strings only interpret \\ and \'
    return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"


PHP_STYLE = LiteralStyle("[", "]", "[", "]", " => ", "true", "false", "null", _php_quote)
PYTHON_STYLE = LiteralStyle("{", "}", "[", "]", ": ", "True", "False", "None", repr)


def to_php_literal(value: Any) -> str:
    """Render a value as a PHP short-array literal."""
    return render_literal(value, PHP_STYLE)


def to_python_literal(value: Any) -> str:
    """Render a value as a Python literal."""
    return render_literal(value, PYTHON_STYLE)


def render_literal(value: Any, style: LiteralStyle, level: int = 0) -> str:
    if isinstance(value, dict):
        if not value:
            return style.map_open + style.map_close
        items = [
            f"{style.quote(str(k))}{style.key_sep}{render_literal(v, style, level + 1)}"
            for k, v in value.items()
        ]
        return _block(items, style.map_open, style.map_close, level)
    if isinstance(value, (list, tuple)):
        if not value:
            return style.list_open + style.list_close
        items = [render_literal(v, style, level + 1) for v in value]
        return _block(items, style.list_open, style.list_close, level)
    # bool before int: bool is an int subclass
    if value is True:
        return style.true
    if value is False:
        return style.false
    if value is None:
        return style.null
    if isinstance(value, (int, float)):
        return repr(value)
    return style.quote(str(value))


def _block(items: list[str], open_: str, close: str, level: int) -> str:
    inner = INDENT * (level + 1)
    body = ",\n".join(inner + item for item in items)
    return f"{open_}\n{body},\n{INDENT * level}{close}"
