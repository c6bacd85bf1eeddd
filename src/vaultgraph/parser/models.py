from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from vaultgraph.paths import normalize_dir_root
from vaultgraph.schema import FieldValue, fields_to_raw


class ParseOptions(BaseModel):
    """Directory roots stripped from file paths when computing object IDs."""

    objects_root: Optional[str] = Field(default=None, description="Root for typed objects, e.g. 'objects/'")
    pages_root: Optional[str] = Field(default=None, description="Root for untyped pages, e.g. 'pages/'")

    model_config = {"frozen": True}

    @field_validator("objects_root", "pages_root")
    @classmethod
    def _normalize_root(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return normalize_dir_root(value) or None


@dataclass(frozen=True)
class Frontmatter:
    object_type: Optional[str]
    fields: dict[str, FieldValue]
    tags: list[str]
    raw: str
    end_line: int  # line of the closing '---' (1-indexed)


@dataclass(frozen=True)
class Heading:
    level: int
    text: str
    line: int


@dataclass(frozen=True)
class TypeDeclaration:
    type_name: str
    fields: dict[str, FieldValue]
    id: Optional[str] = None
    line: int = 0


@dataclass(frozen=True)
class TraitAnnotation:
    trait_name: str
    value: Optional[FieldValue]
    content: str
    line: int
    start: int
    end: int


@dataclass(frozen=True)
class WikiLink:
    target: str
    display_text: Optional[str]
    start: int
    end: int
    literal: str


@dataclass(frozen=True)
class Reference:
    target_raw: str
    display_text: Optional[str]
    line: int
    start: int
    end: int


@dataclass(frozen=True)
class WalkResult:
    headings: list[Heading]
    type_decls: dict[int, TypeDeclaration]  # heading line -> declaration
    traits: list[TraitAnnotation]
    refs: list[Reference]


@dataclass
class ParsedObject:
    id: str
    object_type: str
    fields: dict[str, FieldValue] = field(default_factory=dict)
    heading: Optional[str] = None
    heading_level: Optional[int] = None
    parent_id: Optional[str] = None
    line_start: int = 1
    line_end: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.object_type,
            "fields": fields_to_raw(self.fields),
            "heading": self.heading,
            "heading_level": self.heading_level,
            "parent_id": self.parent_id,
            "line_start": self.line_start,
            "line_end": self.line_end,
        }


@dataclass(frozen=True)
class ParsedTrait:
    trait_name: str
    value: Optional[FieldValue]
    content: str
    parent_object_id: str
    line: int

    def has_value(self) -> bool:
        return self.value is not None and not self.value.is_null()

    def value_string(self) -> str:
        if self.value is None:
            return ""
        return self.value.as_string() or ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "trait": self.trait_name,
            "value": self.value.raw() if self.value is not None else None,
            "content": self.content,
            "parent_object_id": self.parent_object_id,
            "line": self.line,
        }


@dataclass(frozen=True)
class ParsedRef:
    source_id: str
    target_raw: str
    display_text: Optional[str]
    line: int
    start: int
    end: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_id": self.source_id,
            "target": self.target_raw,
            "display_text": self.display_text,
            "line": self.line,
            "start": self.start,
            "end": self.end,
        }


@dataclass(frozen=True)
class ParsedDocument:
    file_path: str
    raw_content: str
    objects: list[ParsedObject]
    traits: list[ParsedTrait]
    refs: list[ParsedRef]

    @property
    def root(self) -> ParsedObject:
        return self.objects[0]

    def get_object(self, object_id: str) -> Optional[ParsedObject]:
        for obj in self.objects:
            if obj.id == object_id:
                return obj
        return None

    def children_of(self, object_id: str) -> list[ParsedObject]:
        return [obj for obj in self.objects if obj.parent_id == object_id]

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_path": self.file_path,
            "objects": [o.to_dict() for o in self.objects],
            "traits": [t.to_dict() for t in self.traits],
            "refs": [r.to_dict() for r in self.refs],
        }
