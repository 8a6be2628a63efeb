"""String escaping and structured-literal rendering for target languages."""

import json
from dataclasses import dataclass
from typing import Callable

_BACKSLASH_ESCAPES = {"\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def escape(text: str, quote: str, extra: dict[str, str] | None = None) -> str:
    """Backslash-escape `text` for a C-family string literal delimited by `quote`."""
    table = dict(_BACKSLASH_ESCAPES)
    table[quote] = "\\" + quote
    if extra:
        table.update(extra)
    return "".join(table.get(ch, ch) for ch in text)


def js_string(text: str) -> str:
    return "'" + escape(text, "'") + "'"


def python_string(text: str) -> str:
    # JSON string escapes are a subset of Python's
    return json.dumps(text, ensure_ascii=False)


def shell_string(text: str) -> str:
    return "'" + text.replace("'", "'\\''") + "'"


def php_string(text: str) -> str:
    return '"' + escape(text, '"', {"$": "\\$"}) + '"'


def c_string(text: str) -> str:
    """Double-quoted literal for Java, C#, Go, Rust and Swift."""
    return '"' + escape(text, '"') + '"'


def kotlin_string(text: str) -> str:
    return '"' + escape(text, '"', {"$": "\\$"}) + '"'


def dart_string(text: str) -> str:
    return "'" + escape(text, "'", {"$": "\\$"}) + "'"


def ruby_string(text: str) -> str:
    # only \\ and \' are escapes inside Ruby single quotes
    return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"


def compact_json(value) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)


@dataclass(frozen=True)
class LiteralStyle:
    """How one target language spells maps, lists and scalars."""

    quote: Callable[[str], str]
    true: str = "true"
    false: str = "false"
    null: str = "null"
    map_open: str = "{"
    map_close: str = "}"
    empty_map: str = "{}"
    list_open: str = "["
    list_close: str = "]"
    empty_list: str = "[]"
    pair: str = ": "
    key: Callable[[str], str] | None = None
    indent: str = "  "


def render_value(value, style: LiteralStyle, level: int = 0) -> str:
    """Render a JSON value tree as a literal; nested lines are indented from `level`."""
    if isinstance(value, dict):
        if not value:
            return style.empty_map
        key = style.key or style.quote
        inner = style.indent * (level + 1)
        lines = [
            f"{inner}{key(str(k))}{style.pair}{render_value(v, style, level + 1)}"
            for k, v in value.items()
        ]
        return style.map_open + "\n" + ",\n".join(lines) + "\n" + style.indent * level + style.map_close
    if isinstance(value, list):
        if not value:
            return style.empty_list
        inner = style.indent * (level + 1)
        lines = [f"{inner}{render_value(v, style, level + 1)}" for v in value]
        return style.list_open + "\n" + ",\n".join(lines) + "\n" + style.indent * level + style.list_close
    if isinstance(value, str):
        return style.quote(value)
    if isinstance(value, bool):
        return style.true if value else style.false
    if value is None:
        return style.null
    if isinstance(value, (int, float)):
        return json.dumps(value)
    return style.quote(str(value))


def one_line(text: str) -> str:
    """Collapse whitespace so `text` fits in a single-line comment."""
    return " ".join(text.split())
