from __future__ import annotations

import re
from datetime import datetime
from typing import Union

from vaultgraph.schema import FieldValue

from .wikilinks import parse_exact

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2})?(Z|[+-]\d{2}:?\d{2})?$")
_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")

_DATE_FORMATS = ["%Y-%m-%d"]
_DATETIME_FORMATS = [
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M%z",
    "%Y-%m-%dT%H:%M:%S%z",
]


def _matches_format(value: str, formats: list[str]) -> bool:
    for fmt in formats:
        try:
            datetime.strptime(value, fmt)
        except ValueError:
            continue
        return True
    return False


def is_valid_date(value: str) -> bool:
    return bool(_DATE_RE.match(value)) and _matches_format(value, _DATE_FORMATS)


def is_valid_datetime(value: str) -> bool:
    return bool(_DATETIME_RE.match(value)) and _matches_format(value, _DATETIME_FORMATS)


def _parse_number(value: str) -> Union[int, float, None]:
    if not _NUMBER_RE.match(value):
        return None
    if re.fullmatch(r"[+-]?\d+", value):
        return int(value)
    return float(value)


def _split_top_level(s: str, sep: str = ",") -> list[str]:
    """Split on ``sep`` outside double quotes and square brackets."""
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    in_quotes = False
    for ch in s:
        if ch == '"' and depth == 0:
            in_quotes = not in_quotes
        elif ch == "[" and not in_quotes:
            depth += 1
        elif ch == "]" and not in_quotes:
            depth = max(depth - 1, 0)
        elif ch == sep and not in_quotes and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    parts.append("".join(current))
    return parts


def parse_field_value(s: str) -> FieldValue:
    """Parse a value written inside a ``::type(...)`` declaration.

    Recognized shapes, in order: empty (null), ``[[ref]]``, ``[a, b]`` arrays,
    double-quoted strings, ``true``/``false``, numbers, dates, datetimes.
    Anything else is a string.
    """
    s = s.strip()
    if not s:
        return FieldValue.null()

    if not s.startswith("[[["):
        link = parse_exact(s)
        if link is not None:
            return FieldValue.ref(link[0])

    if s.startswith("[") and s.endswith("]"):
        items = []
        inner = s[1:-1]
        if inner.strip():
            for part in _split_top_level(inner):
                item = parse_field_value(part)
                if not item.is_null():
                    items.append(item)
        return FieldValue.array(items)

    if len(s) >= 2 and s.startswith('"') and s.endswith('"'):
        return FieldValue.string(s[1:-1])

    if s == "true":
        return FieldValue.boolean(True)
    if s == "false":
        return FieldValue.boolean(False)

    number = _parse_number(s)
    if number is not None:
        return FieldValue.number(number)

    if is_valid_datetime(s):
        return FieldValue.datetime(s)
    if is_valid_date(s):
        return FieldValue.date(s)

    return FieldValue.string(s)


def parse_trait_value(s: str) -> FieldValue:
    """Parse the value of ``@trait(value)``.

    Trait values are kept as written except for refs, valid dates and valid
    datetimes; there is no number, boolean, array or quote handling.
    """
    s = s.strip()
    if not s:
        return FieldValue.null()
    if not s.startswith("[[["):
        link = parse_exact(s)
        if link is not None:
            return FieldValue.ref(link[0])
    if is_valid_datetime(s):
        return FieldValue.datetime(s)
    if is_valid_date(s):
        return FieldValue.date(s)
    return FieldValue.string(s)


def parse_arguments(args: str) -> dict[str, FieldValue]:
    """Parse ``key=value, key2=value2`` into a field map.

    Arguments without a key are dropped, a bare key maps to null, and a later
    duplicate key wins.
    """
    fields: dict[str, FieldValue] = {}
    if not args.strip():
        return fields
    for part in _split_top_level(args):
        key, _, value = part.partition("=")
        key = key.strip()
        if not key:
            continue
        fields[key] = parse_field_value(value)
    return fields
