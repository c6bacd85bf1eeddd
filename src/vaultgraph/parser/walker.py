"""Single-pass structural walk over a markdown body.

markdown-it-py does the block-level work (so fenced and indented code, and
headings inside them, are never treated as content). Inline syntax that
markdown does not know about (traits and wikilinks) is scanned on the
source lines of each paragraph and heading, with inline code masked out.
"""

from __future__ import annotations

from typing import Optional

from markdown_it import MarkdownIt
from markdown_it.token import Token

from .codespans import mask_inline_code
from .models import Heading, Reference, TraitAnnotation, TypeDeclaration, WalkResult
from .traits import parse_trait_annotations
from .typedecl import parse_type_declaration
from .wikilinks import find_wikilinks

_md = MarkdownIt("commonmark")


def _heading_text(inline: Token) -> str:
    parts: list[str] = []
    for child in inline.children or []:
        if child.type in ("text", "code_inline"):
            parts.append(child.content)
        elif child.type in ("softbreak", "hardbreak"):
            parts.append(" ")
    return "".join(parts).strip()


def _declaration_after(tokens: list[Token], close_idx: int, heading: Token, start_line: int) -> Optional[tuple[int, TypeDeclaration]]:
    """Return ``(inline_idx, decl)`` when the block right under a heading is a ``::type`` line."""
    open_idx = close_idx + 1
    if open_idx + 1 >= len(tokens):
        return None
    para = tokens[open_idx]
    inline = tokens[open_idx + 1]
    if para.type != "paragraph_open" or inline.type != "inline":
        return None
    if para.map is None or heading.map is None or para.map[0] != heading.map[1]:
        return None
    decl = parse_type_declaration(inline.content, line=start_line + para.map[0])
    if decl is None:
        return None
    return open_idx + 1, decl


def _scan_lines(
    inline: Token,
    lines: list[str],
    start_line: int,
    traits: list[TraitAnnotation],
    refs: list[Reference],
) -> None:
    if inline.map is None:
        return
    first = inline.map[0]
    content_lines = inline.content.split("\n")
    # Code spans may continue onto the next line.
    masked_content = mask_inline_code(inline.content).split("\n")
    masked_raw = mask_inline_code("\n".join(lines[first : first + len(content_lines)])).split("\n")
    for k, content_line in enumerate(content_lines):
        idx = first + k
        if idx >= len(lines):
            break
        line_no = start_line + idx
        traits.extend(parse_trait_annotations(content_line, line_no, masked=masked_content[k]))

        for link in find_wikilinks(masked_raw[k]):
            refs.append(
                Reference(
                    target_raw=link.target,
                    display_text=link.display_text,
                    line=line_no,
                    start=link.start,
                    end=link.end,
                )
            )


def walk_markdown(body: str, start_line: int = 1) -> WalkResult:
    """Extract headings, type declarations, traits and refs from ``body``.

    ``start_line`` is the document line number of the first body line, so
    every line reported here is a whole-document line. Never raises on
    malformed markup; anything unrecognized is plain text.
    """
    # Lone CRs would count as line breaks for markdown-it but not for us.
    lines = [line.replace("\r", " ") for line in body.split("\n")]
    tokens = _md.parse("\n".join(lines))

    headings: list[Heading] = []
    type_decls: dict[int, TypeDeclaration] = {}
    traits: list[TraitAnnotation] = []
    refs: list[Reference] = []
    consumed: set[int] = set()

    for i, token in enumerate(tokens):
        if token.type == "heading_open" and i + 2 < len(tokens):
            inline = tokens[i + 1]
            text = _heading_text(inline)
            if not text or token.map is None:
                continue
            line_no = start_line + token.map[0]
            headings.append(Heading(level=int(token.tag[1:]), text=text, line=line_no))

            found = _declaration_after(tokens, i + 2, token, start_line)
            if found is not None:
                inline_idx, decl = found
                type_decls[line_no] = decl
                consumed.add(inline_idx)
            continue

        if token.type == "inline" and i not in consumed:
            _scan_lines(token, lines, start_line, traits, refs)

    return WalkResult(headings=headings, type_decls=type_decls, traits=traits, refs=refs)
