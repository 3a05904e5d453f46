"""
Inverse document frequency strategies.

The term scorer treats idf as a black box; the only contract is that a
higher document frequency never yields a higher idf.

Formulas:
    classic: idf = ln(N / (df + 1)) + 1          (Lucene/Ferret default)
    bm25:    idf = ln(1 + (N - df + 0.5) / (df + 0.5))

Where:
    N  = total number of documents in the index
    df = number of documents containing the term
"""

import math
from abc import ABC, abstractmethod


class Similarity(ABC):
    """Pluggable idf strategy"""
    
    name = "abstract"
    
    @abstractmethod
    def idf(self, doc_freq: int, num_docs: int) -> float:
        """
        Compute inverse document frequency.
        
        Args:
            doc_freq: Number of documents containing the term
            num_docs: Total number of documents in the index
            
        Returns:
            idf weight (non-increasing in doc_freq)
        """
        pass
    
    def __repr__(self):
        return f"{type(self).__name__}()"


class ClassicSimilarity(Similarity):
    """
    Classic TF-IDF similarity.
    
    Example:
        >>> round(ClassicSimilarity().idf(1, 10), 4)
        2.6094
    """
    
    name = "classic"
    
    def idf(self, doc_freq: int, num_docs: int) -> float:
        # A stale reader can report df above the document count
        num_docs = max(num_docs, doc_freq)
        return math.log(num_docs / (doc_freq + 1)) + 1.0


class BM25Similarity(Similarity):
    """
    Okapi BM25 idf (always positive, even for very common terms).
    
    Example:
        >>> round(BM25Similarity().idf(1, 10), 4)
        1.9924
    """
    
    name = "bm25"
    
    def idf(self, doc_freq: int, num_docs: int) -> float:
        num_docs = max(num_docs, doc_freq)
        return math.log(1.0 + (num_docs - doc_freq + 0.5) / (doc_freq + 0.5))
