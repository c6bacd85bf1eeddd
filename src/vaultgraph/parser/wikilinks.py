"""Wikilink scanning: ``[[target]]`` and ``[[target|display]]``.

This module knows nothing about code blocks; callers decide which text is
eligible for scanning.
"""

from __future__ import annotations

import re
from typing import Optional

from .models import WikiLink

# The target cannot contain '[' or ']' so array syntax like [[[ref]]] is not
# mistaken for a link with a bracketed target.
_WIKILINK_RE = re.compile(r"\[\[([^\]\[|]+)(?:\|([^\]]+))?\]\]")


def parse_exact(s: str) -> Optional[tuple[str, Optional[str]]]:
    """Parse a string that is exactly one wikilink literal.

    Returns ``(target, display_text)`` or None.
    """
    s = s.strip()
    if not (s.startswith("[[") and s.endswith("]]")) or len(s) < 4:
        return None
    inner = s[2:-2]
    target, sep, display = inner.partition("|")
    target = target.strip()
    if not target or "[" in target or "]" in target:
        return None
    if sep:
        return target, display.strip()
    return target, None


def find_wikilinks(line: str, allow_triple: bool = False) -> list[WikiLink]:
    links: list[WikiLink] = []
    for m in _WIKILINK_RE.finditer(line):
        start, end = m.span()
        # [[[ref]]] is array-of-refs syntax, not a link
        if not allow_triple and start > 0 and line[start - 1] == "[":
            continue
        target = m.group(1).strip()
        if not target:
            continue
        display = m.group(2).strip() if m.group(2) is not None else None
        links.append(WikiLink(target=target, display_text=display, start=start, end=end, literal=line[start:end]))
    return links


def extract_refs(text: str, start_line: int):
    """Yield ``(line_no, WikiLink)`` for every link in a multi-line block."""
    for offset, line in enumerate(text.split("\n")):
        for link in find_wikilinks(line):
            yield start_line + offset, link
