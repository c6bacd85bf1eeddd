from __future__ import annotations

import re
from typing import Optional

from .codespans import mask_inline_code
from .models import TraitAnnotation
from .values import parse_trait_value

# @name or @name(value); '@' must open the line or follow whitespace, '(',
# '*' or '-' so e-mail addresses and handles inside words do not match.
_TRAIT_RE = re.compile(r"(?<![^\s(*-])@(\w(?:[\w-]*\w)?)(?:\(([^)]*)\))?")


def _join_seam(left: str, right: str) -> str:
    had_space = left != left.rstrip() or right != right.lstrip()
    left = left.rstrip()
    right = right.lstrip()
    if left and right and had_space:
        return left + " " + right
    return left + right


def _remove_spans(line: str, spans: list[tuple[int, int]]) -> str:
    result = ""
    prev = 0
    for i, (start, end) in enumerate(spans):
        piece = line[prev:start]
        result = piece if i == 0 else _join_seam(result, piece)
        prev = end
    if spans:
        result = _join_seam(result, line[prev:])
    else:
        result = line
    return result.strip()


def parse_trait_annotations(line: str, line_no: int, masked: Optional[str] = None) -> list[TraitAnnotation]:
    """Parse every trait annotation on one line of body text.

    Inline code is ignored when matching. ``masked`` is the line with code
    already blanked out, for spans that started on an earlier line. All
    traits on the line share the same ``content``: the line with every trait
    removed.
    """
    if masked is None:
        masked = mask_inline_code(line)
    matches = list(_TRAIT_RE.finditer(masked))
    if not matches:
        return []

    content = _remove_spans(line, [m.span() for m in matches])
    traits: list[TraitAnnotation] = []
    for m in matches:
        args = m.group(2)
        value = None
        if args is not None and args.strip():
            # Read the value from the unmasked line so code in values survives.
            value = parse_trait_value(line[m.start(2) : m.end(2)])
        traits.append(
            TraitAnnotation(
                trait_name=m.group(1),
                value=value,
                content=content,
                line=line_no,
                start=m.start(),
                end=m.end(),
            )
        )
    return traits


def strip_trait_annotations(line: str) -> str:
    masked = mask_inline_code(line)
    return _remove_spans(line, [m.span() for m in _TRAIT_RE.finditer(masked)])
