"""Domain port for business knowledge lookup."""

from __future__ import annotations

from typing import List, Optional, Protocol


class IKnowledgeBase(Protocol):
    """Read-only store of business documents."""

    @property
    def document_count(self) -> int:
        ...

    def search(self, query: str, limit: Optional[int] = None) -> List[str]:
        """Return documents relevant to ``query``."""
        ...
