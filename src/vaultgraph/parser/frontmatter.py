from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional

import yaml

from vaultgraph.schema import FieldValue

from .errors import UnterminatedFrontmatter
from .models import Frontmatter
from .wikilinks import parse_exact

logger = logging.getLogger(__name__)

_FRONTMATTER_DELIM = "---"


def _is_delimiter(line: str) -> bool:
    return line.strip() == _FRONTMATTER_DELIM


def _parse_tags(value: Any) -> list[str]:
    tags: list[str] = []
    if isinstance(value, str):
        parts = value.replace(",", " ").split()
    elif isinstance(value, list):
        parts = [item for item in value if isinstance(item, str)]
    else:
        parts = []
    for part in parts:
        tag = part.strip().lstrip("#").strip()
        if tag:
            tags.append(tag)
    return tags


def _is_bare_wikilink(value: list) -> bool:
    # YAML reads an unquoted [[target]] as a list holding a one-item list.
    return (
        len(value) == 1
        and isinstance(value[0], list)
        and len(value[0]) == 1
        and isinstance(value[0][0], str)
        and bool(value[0][0].strip())
    )


def yaml_to_field_value(value: Any, _active: Optional[set[int]] = None) -> FieldValue:
    """Convert a PyYAML value to a FieldValue.

    Aliases can make a list contain itself; a container met again while it
    is still being converted becomes Null.
    """
    if value is None:
        return FieldValue.null()
    if isinstance(value, bool):
        return FieldValue.boolean(value)
    if isinstance(value, (int, float)):
        return FieldValue.number(value)
    if isinstance(value, datetime):
        return FieldValue.datetime(value.isoformat())
    if isinstance(value, date):
        return FieldValue.date(value.strftime("%Y-%m-%d"))
    if isinstance(value, str):
        if value.startswith("[[") and value.endswith("]]"):
            link = parse_exact(value)
            if link is not None:
                return FieldValue.ref(link[0])
        return FieldValue.string(value)
    if isinstance(value, list):
        if _is_bare_wikilink(value):
            return FieldValue.ref(value[0][0].strip())
        active = _active if _active is not None else set()
        if id(value) in active:
            return FieldValue.null()
        active.add(id(value))
        try:
            return FieldValue.array([yaml_to_field_value(item, active) for item in value])
        finally:
            active.discard(id(value))
    if isinstance(value, dict):
        return FieldValue.null()
    return FieldValue.string(str(value))


def _load_yaml_mapping(raw: str) -> dict:
    try:
        data = yaml.safe_load(raw)
    except (yaml.YAMLError, RecursionError) as e:
        logger.warning(f"Ignoring malformed frontmatter YAML: {e}")
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring frontmatter that is not a mapping (got {type(data).__name__})")
        return {}
    return data


def parse_frontmatter(content: str) -> Optional[Frontmatter]:
    """Split the leading YAML block off a document.

    Returns None when the document does not open with ``---``.

    Raises:
        UnterminatedFrontmatter: The opening ``---`` has no closing line.
    """
    lines = content.split("\n")
    if not lines or not _is_delimiter(lines[0]):
        return None

    end_idx = None
    for i in range(1, len(lines)):
        if _is_delimiter(lines[i]):
            end_idx = i
            break
    if end_idx is None:
        raise UnterminatedFrontmatter(line=1)

    raw = "\n".join(lines[1:end_idx])
    data = _load_yaml_mapping(raw)

    object_type: Optional[str] = None
    fields: dict[str, FieldValue] = {}
    tags: list[str] = []
    for key, value in data.items():
        key = str(key)
        if key == "type":
            if isinstance(value, str) and value.strip():
                object_type = value.strip()
            continue
        if key == "tags":
            tags = _parse_tags(value)
        fields[key] = yaml_to_field_value(value)

    return Frontmatter(
        object_type=object_type,
        fields=fields,
        tags=tags,
        raw=raw,
        end_line=end_idx + 1,
    )
