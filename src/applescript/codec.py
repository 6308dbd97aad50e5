"""Conversion between Python values and AppleScript literal syntax.

osascript is always run with ``-ss``, which prints results in AppleScript
source form: ``{"Song", "Artist", 2019, missing value}``. `decode_reply`
turns that text back into Python values; `to_applescript_literal` goes the
other way for named script parameters.
"""

import re
from typing import Any

from .errors import InvalidInputError

_NUMBER = re.compile(r"-?\d+(?:\.\d+)?(?:[Ee][+-]?\d+)?")
_RECORD_KEY = re.compile(r"(\|[^|]*\||«[^»]*»|[A-Za-z_][A-Za-z0-9_ ]*?)\s*:(?!=)")
_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_STRING_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", '"': '"', "\\": "\\"}
_KEYWORDS: dict[str, Any] = {"missing value": None, "true": True, "false": False}


class _ParseError(ValueError):
    pass


class _ReplyParser:
    """Recursive descent parser over a single osascript reply."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def parse(self) -> Any:
        value = self._value()
        self._skip_ws()
        if self.pos != len(self.text):
            raise _ParseError(f"Trailing data at {self.pos}")
        return value

    def _skip_ws(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _at_delimiter(self, pos: int) -> bool:
        rest = self.text[pos:].lstrip()
        return not rest or rest[0] in ",}"

    def _value(self) -> Any:
        self._skip_ws()
        ch = self._peek()
        if not ch:
            raise _ParseError("Unexpected end of reply")
        if ch == "{":
            return self._collection()
        if ch == '"':
            return self._string()

        match = _NUMBER.match(self.text, self.pos)
        if match and self._at_delimiter(match.end()):
            self.pos = match.end()
            token = match.group()
            if any(c in token for c in ".eE"):
                return float(token)
            return int(token)

        for keyword, value in _KEYWORDS.items():
            end = self.pos + len(keyword)
            if self.text.startswith(keyword, self.pos) and self._at_delimiter(end):
                self.pos = end
                return value

        return self._raw()

    def _string(self) -> str:
        self.pos += 1  # opening quote
        chars = []
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch == "\\" and self.pos + 1 < len(self.text):
                nxt = self.text[self.pos + 1]
                chars.append(_STRING_ESCAPES.get(nxt, "\\" + nxt))
                self.pos += 2
                continue
            if ch == '"':
                self.pos += 1
                return "".join(chars)
            chars.append(ch)
            self.pos += 1
        raise _ParseError("Unterminated string")

    def _raw(self) -> str:
        """Consume an unquoted term (constants, object specifiers, dates)."""
        start = self.pos
        depth = 0
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch == '"':
                self._string()
                continue
            if ch == "«":
                end = self.text.find("»", self.pos)
                if end == -1:
                    raise _ParseError("Unterminated chevron")
                self.pos = end + 1
                continue
            if ch == "{":
                depth += 1
            elif ch == "}":
                if depth == 0:
                    break
                depth -= 1
            elif ch == "," and depth == 0:
                break
            self.pos += 1
        return self.text[start:self.pos].strip()

    def _collection(self) -> list[Any] | dict[str, Any]:
        self.pos += 1  # opening brace
        self._skip_ws()
        if self._peek() == "}":
            self.pos += 1
            return []

        if _RECORD_KEY.match(self.text, self.pos):
            return self._record()

        items = []
        while True:
            items.append(self._value())
            self._skip_ws()
            ch = self._peek()
            self.pos += 1
            if ch == "}":
                return items
            if ch != ",":
                raise _ParseError(f"Expected ',' or '}}' at {self.pos - 1}")

    def _record(self) -> dict[str, Any]:
        record: dict[str, Any] = {}
        while True:
            self._skip_ws()
            match = _RECORD_KEY.match(self.text, self.pos)
            if not match:
                raise _ParseError(f"Expected record key at {self.pos}")
            key = match.group(1).strip()
            if key.startswith("|") and key.endswith("|"):
                key = key[1:-1]
            self.pos = match.end()
            record[key] = self._value()
            self._skip_ws()
            ch = self._peek()
            self.pos += 1
            if ch == "}":
                return record
            if ch != ",":
                raise _ParseError(f"Expected ',' or '}}' at {self.pos - 1}")


def decode_reply(output: str) -> Any:
    """Decode osascript ``-ss`` output.

    Empty output decodes to None. Output that doesn't parse as an
    AppleScript literal is returned as the stripped text.
    """
    text = output.strip()
    if not text:
        return None
    try:
        return _ReplyParser(text).parse()
    except _ParseError:
        return text


def escape_string(value: str) -> str:
    """Escape a string for embedding between double quotes in AppleScript."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


def to_applescript_literal(value: Any) -> str:
    """Render a Python value as an AppleScript literal."""
    if value is None:
        return "missing value"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return f'"{escape_string(value)}"'
    if isinstance(value, (list, tuple)):
        return "{" + ", ".join(to_applescript_literal(v) for v in value) + "}"
    if isinstance(value, dict):
        fields = []
        for key, item in value.items():
            label = key if _IDENTIFIER.match(key) else f"|{key}|"
            fields.append(f"{label}:{to_applescript_literal(item)}")
        return "{" + ", ".join(fields) + "}"
    raise InvalidInputError(f"Cannot pass {type(value).__name__} to AppleScript")


def parameter_preamble(params: dict[str, Any]) -> str:
    """Build ``set <name> to <value>`` lines that define script parameters."""
    lines = []
    for name, value in params.items():
        if not _IDENTIFIER.match(name):
            raise InvalidInputError(f"Invalid script parameter name: {name!r}")
        lines.append(f"set {name} to {to_applescript_literal(value)}")
    return "\n".join(lines)
