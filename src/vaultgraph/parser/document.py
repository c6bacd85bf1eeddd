from __future__ import annotations

import bisect
import logging
from typing import Optional

from vaultgraph.paths import file_path_to_object_id, relative_vault_path
from vaultgraph.schema import FieldValue

from .frontmatter import parse_frontmatter
from .models import (
    Heading,
    ParsedDocument,
    ParsedObject,
    ParsedRef,
    ParsedTrait,
    ParseOptions,
    TypeDeclaration,
)
from .slugs import SlugAllocator, heading_slug
from .walker import walk_markdown
from .wikilinks import extract_refs

logger = logging.getLogger(__name__)

DEFAULT_FILE_TYPE = "page"
SECTION_TYPE = "section"

# Frontmatter YAML starts on the line after the opening '---'.
_FRONTMATTER_FIRST_LINE = 2


def _heading_object(
    file_id: str,
    heading: Heading,
    decl: Optional[TypeDeclaration],
    parent_id: str,
    slugs: SlugAllocator,
) -> ParsedObject:
    if decl is not None:
        if decl.id:
            slug = decl.id
        else:
            slug = slugs.allocate(heading_slug(heading.text) or decl.type_name)
        object_type = decl.type_name
        fields = dict(decl.fields)
    else:
        slug = slugs.allocate(heading_slug(heading.text) or SECTION_TYPE)
        object_type = SECTION_TYPE
        fields = {
            "title": FieldValue.string(heading.text),
            "level": FieldValue.number(heading.level),
        }

    return ParsedObject(
        id=f"{file_id}#{slug}",
        object_type=object_type,
        fields=fields,
        heading=heading.text,
        heading_level=heading.level,
        parent_id=parent_id,
        line_start=heading.line,
    )


def build_objects(
    root: ParsedObject,
    headings: list[Heading],
    type_decls: dict[int, TypeDeclaration],
) -> list[ParsedObject]:
    """Build the object tree: the file root plus one object per heading.

    A heading's parent is the nearest preceding heading with a strictly
    smaller level, or the file root.
    """
    objects = [root]
    slugs = SlugAllocator()
    # Explicit IDs are used verbatim; keep generated slugs off them.
    for decl in type_decls.values():
        if decl.id:
            slugs.reserve(decl.id)

    stack: list[tuple[str, int]] = [(root.id, 0)]
    for heading in headings:
        while len(stack) > 1 and stack[-1][1] >= heading.level:
            stack.pop()
        parent_id = stack[-1][0]

        obj = _heading_object(root.id, heading, type_decls.get(heading.line), parent_id, slugs)
        objects.append(obj)
        stack.append((obj.id, heading.level))
    return objects


def find_parent_for_line(
    objects: list[ParsedObject],
    line: int,
    starts: Optional[list[int]] = None,
) -> str:
    """ID of the object with the greatest ``line_start <= line``.

    ``objects`` must be in line order, as ``build_objects`` returns them.
    Pass ``starts`` (their start lines) when binding many lines against the
    same objects. Lines before every object fall back to the first object
    (the file root).
    """
    if not objects:
        return ""
    if starts is None:
        starts = [o.line_start for o in objects]
    idx = bisect.bisect_right(starts, line) - 1
    if idx < 0:
        return objects[0].id
    return objects[idx].id


def compute_line_ends(objects: list[ParsedObject]) -> None:
    """Set each object's ``line_end`` to the line before the next object starts.

    The last object (in line order) keeps ``line_end=None``: it runs to EOF.
    """
    ordered = sorted(objects, key=lambda o: o.line_start)
    for current, nxt in zip(ordered, ordered[1:]):
        current.line_end = nxt.line_start - 1
    if ordered:
        ordered[-1].line_end = None


def parse_document(
    content: str,
    file_path: str,
    vault_path: str = "",
    options: Optional[ParseOptions] = None,
) -> ParsedDocument:
    """Parse one markdown document into its object graph.

    Args:
        content: Full document text
        file_path: Vault-relative path, or an absolute path under ``vault_path``
        vault_path: Vault root, used only to relativize ``file_path``
        options: Directory roots stripped when computing the file's object ID

    Returns:
        ParsedDocument with objects, traits and refs in document order

    Raises:
        UnterminatedFrontmatter: The frontmatter block is never closed.
    """
    options = options or ParseOptions()
    relative_path = relative_vault_path(file_path, vault_path)
    file_id = file_path_to_object_id(relative_path, options.objects_root, options.pages_root)

    frontmatter = parse_frontmatter(content)

    body = content
    body_start_line = 1
    if frontmatter is not None:
        lines = content.split("\n")
        body = "\n".join(lines[frontmatter.end_line :])
        body_start_line = frontmatter.end_line + 1

    walked = walk_markdown(body, start_line=body_start_line)

    root_start = 1
    if walked.headings and walked.headings[0].line <= 1:
        # A heading on line 1 owns that line; the file starts just before it.
        root_start = 0
    root = ParsedObject(
        id=file_id,
        object_type=(frontmatter.object_type if frontmatter else None) or DEFAULT_FILE_TYPE,
        fields=dict(frontmatter.fields) if frontmatter else {},
        line_start=root_start,
    )
    objects = build_objects(root, walked.headings, walked.type_decls)
    starts = [o.line_start for o in objects]

    refs: list[ParsedRef] = []
    if frontmatter is not None and frontmatter.raw:
        for line_no, link in extract_refs(frontmatter.raw, _FRONTMATTER_FIRST_LINE):
            refs.append(
                ParsedRef(
                    source_id=file_id,
                    target_raw=link.target,
                    display_text=link.display_text,
                    line=line_no,
                    start=link.start,
                    end=link.end,
                )
            )

    traits = [
        ParsedTrait(
            trait_name=t.trait_name,
            value=t.value,
            content=t.content,
            parent_object_id=find_parent_for_line(objects, t.line, starts),
            line=t.line,
        )
        for t in walked.traits
    ]
    for r in walked.refs:
        refs.append(
            ParsedRef(
                source_id=find_parent_for_line(objects, r.line, starts),
                target_raw=r.target_raw,
                display_text=r.display_text,
                line=r.line,
                start=r.start,
                end=r.end,
            )
        )

    compute_line_ends(objects)

    logger.debug(
        f"Parsed {relative_path}: {len(objects)} objects, {len(traits)} traits, {len(refs)} refs"
    )
    return ParsedDocument(
        file_path=relative_path,
        raw_content=content,
        objects=objects,
        traits=traits,
        refs=refs,
    )
