from __future__ import annotations


class ParseError(Exception):
    """Base class for errors that abort parsing a single document."""


class UnterminatedFrontmatter(ParseError):
    """The document opens a frontmatter block with ``---`` but never closes it."""

    def __init__(self, line: int = 1):
        self.line = line
        super().__init__(f"Unterminated frontmatter: opening '---' on line {line} has no closing '---'")
