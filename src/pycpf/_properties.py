"""Reader and writer for ``.properties`` text.

The format is the one CPF plugins ship their settings in:

* ``key=value``, ``key: value`` or ``key value`` per logical line
* ``#`` and ``!`` start comment lines
* a line ending in an odd number of backslashes continues on the next line
* ``\\t``, ``\\n``, ``\\r``, ``\\f`` and ``\\uXXXX`` escapes; any other
  escaped character stands for itself

Byte input is decoded as ISO-8859-1; anything outside Latin-1 must be written
with ``\\uXXXX`` escapes.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from typing import IO, Any

from pycpf.exceptions import CpfPropertiesFormatError

ENCODING = "iso-8859-1"

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_LINE_SPLIT = re.compile(r"\r\n|\r|\n")

_ESCAPES: dict[str, str] = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_SAVE_ESCAPES: dict[str, str] = {"\t": "\\t", "\n": "\\n", "\r": "\\r", "\f": "\\f"}
_SAVE_SPECIALS = frozenset("=:#!")


def _continues(line: str) -> bool:
    """Return ``True`` when *line* ends with an odd run of backslashes."""
    count = len(line) - len(line.rstrip("\\"))
    return count % 2 == 1


def _logical_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, logical_line)`` pairs with comments removed."""
    pending: str | None = None
    start = 0
    for lineno, raw in enumerate(_LINE_SPLIT.split(text), start=1):
        stripped = raw.lstrip(_WHITESPACE)
        if pending is None:
            if not stripped or stripped[0] in "#!":
                continue
            pending = ""
            start = lineno
        if _continues(stripped):
            pending += stripped[:-1]
            continue
        pending += stripped
        yield start, pending
        pending = None
    if pending is not None:
        yield start, pending


def _split_key_value(line: str) -> tuple[str, str]:
    """Split a logical line at its first unescaped separator."""
    limit = len(line)
    key_end = limit
    value_start = limit
    has_sep = False
    backslash = False
    for index, char in enumerate(line):
        if not backslash and char in _SEPARATORS:
            key_end, value_start, has_sep = index, index + 1, True
            break
        if not backslash and char in _WHITESPACE:
            key_end, value_start = index, index + 1
            break
        backslash = char == "\\" and not backslash

    while value_start < limit:
        char = line[value_start]
        if char not in _WHITESPACE:
            if has_sep or char not in _SEPARATORS:
                break
            has_sep = True
        value_start += 1
    return line[:key_end], line[value_start:]


def _unescape(raw: str, lineno: int) -> str:
    out: list[str] = []
    index = 0
    limit = len(raw)
    while index < limit:
        char = raw[index]
        index += 1
        if char != "\\":
            out.append(char)
            continue
        if index >= limit:
            break
        char = raw[index]
        index += 1
        if char == "u":
            digits = raw[index : index + 4]
            if len(digits) != 4 or any(d not in "0123456789abcdefABCDEF" for d in digits):
                raise CpfPropertiesFormatError(
                    f"Malformed \\uxxxx encoding on line {lineno}",
                    line=lineno,
                )
            out.append(chr(int(digits, 16)))
            index += 4
        else:
            out.append(_ESCAPES.get(char, char))
    text = "".join(out)
    # Characters beyond the BMP arrive as surrogate pairs.
    return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")


def loads(text: str) -> dict[str, str]:
    """Parse properties *text* into a dict. Repeated keys keep the last value."""
    result: dict[str, str] = {}
    for lineno, line in _logical_lines(text):
        raw_key, raw_value = _split_key_value(line)
        result[_unescape(raw_key, lineno)] = _unescape(raw_value, lineno)
    return result


def load(stream: IO[Any]) -> dict[str, str]:
    """Parse a byte or text stream. Bytes are decoded as ISO-8859-1."""
    data = stream.read()
    if isinstance(data, bytes):
        data = data.decode(ENCODING)
    return loads(data)


def _escape(text: str, *, is_key: bool) -> str:
    out: list[str] = []
    for index, char in enumerate(text):
        if char == " ":
            out.append("\\ " if is_key or index == 0 else " ")
        elif char == "\\":
            out.append("\\\\")
        elif char in _SAVE_ESCAPES:
            out.append(_SAVE_ESCAPES[char])
        elif char in _SAVE_SPECIALS:
            out.append("\\" + char)
        elif " " < char <= "~":
            out.append(char)
        else:
            encoded = char.encode("utf-16-be", "surrogatepass")
            for offset in range(0, len(encoded), 2):
                out.append(f"\\u{int.from_bytes(encoded[offset : offset + 2], 'big'):04X}")
    return "".join(out)


def dumps(mapping: Mapping[str, str], *, comment: str | None = None) -> str:
    """Serialise *mapping* so that :func:`loads` reads the same pairs back."""
    lines: list[str] = []
    if comment:
        safe = comment.encode(ENCODING, "backslashreplace").decode(ENCODING)
        lines.extend(f"#{part}" for part in safe.splitlines())
    for key, value in mapping.items():
        lines.append(f"{_escape(key, is_key=True)}={_escape(value, is_key=False)}")
    return "".join(f"{line}\n" for line in lines)
