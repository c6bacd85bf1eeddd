from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .document import parse_document
from .errors import ParseError
from .models import ParsedDocument, ParseOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentSource:
    file_path: str
    content: str


@dataclass(frozen=True)
class ParseFailure:
    file_path: str
    error: ParseError

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass
class BatchResult:
    documents: list[ParsedDocument] = field(default_factory=list)
    failures: list[ParseFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def _default_workers() -> int:
    return min(8, os.cpu_count() or 4)


def parse_documents(
    sources: Iterable[DocumentSource],
    options: Optional[ParseOptions] = None,
    vault_path: str = "",
    max_workers: Optional[int] = None,
) -> BatchResult:
    """Parse many documents concurrently, one task per document.

    A document that fails to parse is recorded as a ParseFailure and the rest
    of the batch continues. Results keep the input order.
    """
    sources = list(sources)
    workers = max_workers or _default_workers()

    def _parse_one(source: DocumentSource):
        try:
            return parse_document(source.content, source.file_path, vault_path, options)
        except ParseError as e:
            logger.error(f"Failed to parse {source.file_path}: {e}")
            return ParseFailure(file_path=source.file_path, error=e)

    result = BatchResult()
    if not sources:
        return result

    with ThreadPoolExecutor(max_workers=workers) as executor:
        for outcome in executor.map(_parse_one, sources):
            if isinstance(outcome, ParseFailure):
                result.failures.append(outcome)
            else:
                result.documents.append(outcome)

    logger.info(f"Parsed {len(result.documents)} documents ({len(result.failures)} failed)")
    return result
