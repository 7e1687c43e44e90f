"""Knowledge base implementations."""

from .file_knowledge_base import FileKnowledgeBase, KnowledgeDocument

__all__ = ["FileKnowledgeBase", "KnowledgeDocument"]
