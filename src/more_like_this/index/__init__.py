"""
Index collaborators.

Usage:
    from more_like_this.index import InMemoryIndex
    
    index = InMemoryIndex()
    index.add_document({"id": 1, "body": "quick brown fox"})
"""

from .base import IndexReader, SearchHit, SearchIndex, TermVector
from .memory import InMemoryIndex, InMemoryIndexReader

__all__ = [
    'IndexReader',
    'SearchHit',
    'SearchIndex',
    'TermVector',
    'InMemoryIndex',
    'InMemoryIndexReader',
]
