from __future__ import annotations

import re
from collections import defaultdict

# Anything that is not a letter or digit separates words; '_' included.
_SEPARATOR_RUN_RE = re.compile(r"[\W_]+")


def heading_slug(text: str) -> str:
    """Slugify heading text: ``"Weekly Standup: Q1"`` -> ``"weekly-standup-q1"``."""
    return _SEPARATOR_RUN_RE.sub("-", text.lower()).strip("-")


class SlugAllocator:
    """Hands out unique slugs within one document.

    The first use of a base slug returns it unchanged; the Nth use returns
    ``base-N``. A candidate already taken (e.g. a heading literally titled
    "Notes 2" after two "Notes") keeps counting upward. Allocation order must
    follow document order.
    """

    def __init__(self) -> None:
        self._counts: dict[str, int] = defaultdict(int)
        self._used: set[str] = set()

    def reserve(self, slug: str) -> None:
        self._used.add(slug)

    def allocate(self, base: str) -> str:
        while True:
            self._counts[base] += 1
            count = self._counts[base]
            candidate = base if count == 1 else f"{base}-{count}"
            if candidate not in self._used:
                self._used.add(candidate)
                return candidate
