"""Markdown document parsing into objects, traits and refs."""

from .batch import BatchResult, DocumentSource, ParseFailure, parse_documents
from .document import compute_line_ends, find_parent_for_line, parse_document
from .errors import ParseError, UnterminatedFrontmatter
from .models import ParsedDocument, ParsedObject, ParsedRef, ParsedTrait, ParseOptions

__all__ = [
    "BatchResult",
    "DocumentSource",
    "ParseError",
    "ParseFailure",
    "ParseOptions",
    "ParsedDocument",
    "ParsedObject",
    "ParsedRef",
    "ParsedTrait",
    "UnterminatedFrontmatter",
    "compute_line_ends",
    "find_parent_for_line",
    "parse_document",
    "parse_documents",
]
