"""
More-like-this: find documents similar to an indexed document.

Components:
- extractor: term → frequency map of the seed document (term vectors,
  stored text or the originating object, with a per-field token ceiling)
- noise: length bound and stop word filter
- scorer: tf × idf scoring with a representative field per term
- builder: disjunctive query with boosting, size limits and self-exclusion
- service: orchestration (MoreLikeThis)

Collaborators (interfaces + in-memory reference implementations):
- index: IndexReader / SearchIndex, InMemoryIndex
- analysis: Analyzer, StandardAnalyzer, SnowballAnalyzer
- similarity: Similarity, ClassicSimilarity, BM25Similarity
"""

from .builder import create_query
from .config import MoreLikeThisOptions
from .errors import (
    ConfigurationError,
    DocumentNotFoundError,
    IndexUnavailableError,
    MoreLikeThisError,
)
from .extractor import retrieve_terms
from .noise import is_noise_word
from .query import BooleanQuery, Occur, TermQuery
from .scorer import ScoredTerm, create_queue, iter_by_score
from .service import MoreLikeThis, interesting_terms, more_like_this

__version__ = "0.1.0"

__all__ = [
    "MoreLikeThis",
    "MoreLikeThisOptions",
    "more_like_this",
    "interesting_terms",
    "retrieve_terms",
    "create_queue",
    "create_query",
    "iter_by_score",
    "is_noise_word",
    "ScoredTerm",
    "BooleanQuery",
    "TermQuery",
    "Occur",
    "MoreLikeThisError",
    "ConfigurationError",
    "IndexUnavailableError",
    "DocumentNotFoundError",
]
