"""Embedded type declarations: ``::meeting(id=standup, time=09:00)``.

A declaration sits on the line right after a heading and turns that heading
into a typed object. The reserved ``id`` argument sets the object's short ID;
without it the ID is derived from the heading text.
"""

from __future__ import annotations

import re
from typing import Optional

from vaultgraph.schema import FieldKind, FieldValue

from .models import TypeDeclaration
from .values import parse_arguments

_DECL_WITH_ARGS_RE = re.compile(r"^::([\w-]+)\s*\(([^)]*)\)\s*$")
_DECL_NO_ARGS_RE = re.compile(r"^::([\w-]+)\s*$")

ID_KEY = "id"


def parse_type_declaration(text: str, line: int = 0) -> Optional[TypeDeclaration]:
    trimmed = text.strip()
    if not trimmed.startswith("::"):
        return None

    m = _DECL_WITH_ARGS_RE.match(trimmed)
    if m:
        fields = parse_arguments(m.group(2))
        explicit_id = None
        id_value = fields.get(ID_KEY)
        if id_value is not None:
            s = id_value.as_string()
            if s is None and id_value.kind is FieldKind.NUMBER:
                s = str(id_value.value)
            if s:
                explicit_id = s
        return TypeDeclaration(type_name=m.group(1), fields=fields, id=explicit_id, line=line)

    m = _DECL_NO_ARGS_RE.match(trimmed)
    if m:
        return TypeDeclaration(type_name=m.group(1), fields={}, id=None, line=line)

    return None


def _serialize_string(s: str) -> str:
    if any(ch in s for ch in ',()[]="'):
        return '"' + s.replace('"', '\\"') + '"'
    return s


def serialize_field_value(value: FieldValue) -> str:
    if value.kind is FieldKind.NULL:
        return ""
    if value.kind is FieldKind.REF:
        return f"[[{value.value}]]"
    if value.kind is FieldKind.ARRAY:
        return "[" + ", ".join(serialize_field_value(item) for item in value.value) + "]"
    if value.kind is FieldKind.BOOL:
        return "true" if value.value else "false"
    if value.kind is FieldKind.NUMBER:
        n = value.value
        if isinstance(n, float) and n.is_integer():
            return str(int(n))
        return str(n)
    return _serialize_string(value.value)


def serialize_type_declaration(type_name: str, fields: dict[str, FieldValue]) -> str:
    """Render a declaration in canonical form (sorted keys, nulls dropped)."""
    parts = [
        f"{key}={serialize_field_value(fields[key])}"
        for key in sorted(fields)
        if not fields[key].is_null()
    ]
    return f"::{type_name}(" + ", ".join(parts) + ")"
