"""Field values shared by the parser and its downstream consumers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class FieldKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    DATE = "date"
    DATETIME = "datetime"
    REF = "ref"
    ARRAY = "array"
    NULL = "null"


_STRING_LIKE = (FieldKind.STRING, FieldKind.DATE, FieldKind.DATETIME, FieldKind.REF)


@dataclass(frozen=True)
class FieldValue:
    """A parsed field value: a kind tag plus its payload.

    Dates, datetimes and refs carry their text; arrays carry a tuple of
    FieldValue; NULL carries None. Build values through the classmethod
    constructors so the payload always matches the kind.
    """

    kind: FieldKind
    value: Any = None

    @classmethod
    def string(cls, s: str) -> "FieldValue":
        return cls(FieldKind.STRING, s)

    @classmethod
    def number(cls, n: Union[int, float]) -> "FieldValue":
        return cls(FieldKind.NUMBER, n)

    @classmethod
    def boolean(cls, b: bool) -> "FieldValue":
        return cls(FieldKind.BOOL, bool(b))

    @classmethod
    def date(cls, s: str) -> "FieldValue":
        return cls(FieldKind.DATE, s)

    @classmethod
    def datetime(cls, s: str) -> "FieldValue":
        return cls(FieldKind.DATETIME, s)

    @classmethod
    def ref(cls, target: str) -> "FieldValue":
        return cls(FieldKind.REF, target)

    @classmethod
    def array(cls, items) -> "FieldValue":
        return cls(FieldKind.ARRAY, tuple(items))

    @classmethod
    def null(cls) -> "FieldValue":
        return cls(FieldKind.NULL, None)

    def is_null(self) -> bool:
        return self.kind is FieldKind.NULL

    def is_ref(self) -> bool:
        return self.kind is FieldKind.REF

    def is_date(self) -> bool:
        return self.kind is FieldKind.DATE

    def is_datetime(self) -> bool:
        return self.kind is FieldKind.DATETIME

    def as_string(self) -> Optional[str]:
        if self.kind in _STRING_LIKE:
            return self.value
        return None

    def as_number(self) -> Optional[Union[int, float]]:
        if self.kind is FieldKind.NUMBER:
            return self.value
        return None

    def as_bool(self) -> Optional[bool]:
        if self.kind is FieldKind.BOOL:
            return self.value
        return None

    def as_ref(self) -> Optional[str]:
        if self.kind is FieldKind.REF:
            return self.value
        return None

    def as_array(self) -> Optional[tuple["FieldValue", ...]]:
        if self.kind is FieldKind.ARRAY:
            return self.value
        return None

    def raw(self) -> Any:
        """Plain Python view of the value (used for JSON output)."""
        if self.kind is FieldKind.ARRAY:
            return [item.raw() for item in self.value]
        return self.value


def fields_to_raw(fields: dict[str, FieldValue]) -> dict[str, Any]:
    return {key: value.raw() for key, value in fields.items()}
