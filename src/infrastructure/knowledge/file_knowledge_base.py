"""File-backed knowledge base - Infrastructure layer."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from src.shared import get_logger

logger = get_logger(__name__)

SUPPORTED_SUFFIXES = (".md", ".txt")


@dataclass(frozen=True, slots=True)
class KnowledgeDocument:
    name: str
    content: str


class FileKnowledgeBase:
    """Markdown and text documents loaded from a directory tree.

    Search is a keyword match: a document is relevant when it contains any
    whitespace separated term of the query, ignoring case. Documents are
    returned in file order.
    """

    def __init__(self, path: str, search_limit: int = 3):
        self.path = Path(path)
        self.search_limit = search_limit
        self._documents: Tuple[KnowledgeDocument, ...] = ()
        self._lock = threading.Lock()

    @property
    def document_count(self) -> int:
        return len(self._documents)

    def load(self) -> int:
        """(Re)load every supported file below ``path``.

        Unreadable files are skipped. Returns the number of loaded documents.
        """
        root = self.path.resolve()
        if not root.exists():
            logger.warning("knowledge.load.missing_path", path=str(root))
            with self._lock:
                self._documents = ()
            return 0

        documents: List[KnowledgeDocument] = []
        for file_path in sorted(root.rglob("*")):
            if not file_path.is_file() or file_path.suffix.lower() not in SUPPORTED_SUFFIXES:
                continue
            try:
                content = file_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.error(
                    "knowledge.load.file_failed", file=str(file_path), error=str(exc)
                )
                continue
            documents.append(
                KnowledgeDocument(
                    name=str(file_path.relative_to(root)), content=content
                )
            )
            logger.debug("knowledge.load.file", file=file_path.name)

        with self._lock:
            self._documents = tuple(documents)
        logger.info("knowledge.load.complete", path=str(root), documents=len(documents))
        return len(documents)

    def search(self, query: str, limit: Optional[int] = None) -> List[str]:
        terms = [term for term in query.lower().split() if term]
        if not terms:
            return []

        max_results = self.search_limit if limit is None else limit
        with self._lock:
            documents = self._documents

        matches: List[str] = []
        for document in documents:
            if len(matches) >= max_results:
                break
            content = document.content.lower()
            if any(term in content for term in terms):
                matches.append(document.content)

        logger.debug("knowledge.search", query=query, matches=len(matches))
        return matches
