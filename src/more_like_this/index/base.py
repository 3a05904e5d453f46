"""
Abstract interfaces of the index collaborator.

The more-like-this pipeline only reads from an index:
- IndexReader: per-document term vectors and stored fields, corpus statistics
- SearchIndex: id resolution, reader access and query execution

All implementations must implement these interfaces to be swappable.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..query import DEFAULT_MAX_CLAUSE_COUNT, BooleanQuery


@dataclass(frozen=True)
class TermVector:
    """Precomputed term frequencies of one field of one document"""
    terms: Tuple[str, ...]
    freqs: Tuple[int, ...]
    
    def __iter__(self) -> Iterator[Tuple[str, int]]:
        return iter(zip(self.terms, self.freqs))
    
    def __len__(self):
        return len(self.terms)


@dataclass
class SearchHit:
    """Single search result"""
    doc_id: str                  # Identity field value of the document
    score: float                 # Relevance score (higher = more relevant)
    document: Dict[str, Any] = field(default_factory=dict)  # Stored fields


class IndexReader(ABC):
    """Read access to index statistics and per-document data"""
    
    @abstractmethod
    def get_term_vector(self, doc_number: int, field: str) -> Optional[TermVector]:
        """
        Get the stored term vector of a document field.
        
        Returns:
            TermVector, or None if no vector was stored for the field
        """
        pass
    
    @abstractmethod
    def get_document(self, doc_number: int) -> Dict[str, Any]:
        """Get the stored fields of a document (missing fields are absent)"""
        pass
    
    @abstractmethod
    def doc_freq(self, field: str, term: str) -> int:
        """Number of documents containing `term` in `field`"""
        pass
    
    @abstractmethod
    def num_docs(self) -> int:
        """Total number of live documents"""
        pass


class SearchIndex(ABC):
    """Index able to resolve ids and execute boolean queries"""
    
    max_clause_count: Optional[int] = DEFAULT_MAX_CLAUSE_COUNT
    
    @abstractmethod
    def reader(self) -> IndexReader:
        """
        Open a reader.
        
        Raises:
            IndexUnavailableError: if the index cannot be read
        """
        pass
    
    @abstractmethod
    def document_number(self, doc_id: Any) -> Optional[int]:
        """Resolve an identity field value to an internal document number"""
        pass
    
    @abstractmethod
    def search(self, query: BooleanQuery, **options) -> List[SearchHit]:
        """Execute a query, best hits first"""
        pass
    