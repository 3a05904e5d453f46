"""
In-memory inverted index.

Reference implementation of the index collaborator, used by the HTTP
service and the tests. Structure:

    postings[field][term] = {doc_number: term_frequency}

Each document may additionally keep:
- stored fields (returned with hits and re-analyzed for term extraction)
- term vectors per field (term extraction then skips re-analysis)

The identity field is indexed as a single untokenized term so queries can
exclude a document by id.

Scoring of executed queries (classic TF-IDF flavour):
    score(doc) = Σ boost × √tf × idf(df, N)²   over matching SHOULD/MUST clauses
"""

import logging
import math
from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from ..analysis import Analyzer, StandardAnalyzer
from ..errors import IndexUnavailableError
from ..query import DEFAULT_MAX_CLAUSE_COUNT, BooleanQuery, Occur, TermQuery
from ..similarity import ClassicSimilarity, Similarity
from .base import IndexReader, SearchHit, SearchIndex, TermVector

logger = logging.getLogger(__name__)


@dataclass
class _IndexedDocument:
    doc_id: str
    stored: Dict[str, str]
    term_counts: Dict[str, Dict[str, int]]
    vectors: Dict[str, TermVector] = field(default_factory=dict)


class InMemoryIndexReader(IndexReader):
    """Reader over a live InMemoryIndex (no snapshot isolation)"""
    
    def __init__(self, index: "InMemoryIndex"):
        self._index = index
    
    def get_term_vector(self, doc_number: int, field: str) -> Optional[TermVector]:
        return self._index._document(doc_number).vectors.get(field)
    
    def get_document(self, doc_number: int) -> Dict[str, Any]:
        return dict(self._index._document(doc_number).stored)
    
    def doc_freq(self, field: str, term: str) -> int:
        return len(self._index._postings.get(field, {}).get(term, ()))
    
    def num_docs(self) -> int:
        return len(self._index)


class InMemoryIndex(SearchIndex):
    """
    Dictionary-backed inverted index.
    
    Example:
        >>> index = InMemoryIndex()
        >>> index.add_document({"id": 1, "body": "quick brown fox"})
        0
        >>> index.reader().doc_freq("body", "fox")
        1
    """
    
    def __init__(
        self,
        analyzer: Optional[Analyzer] = None,
        similarity: Optional[Similarity] = None,
        id_field: str = "id",
        max_clause_count: Optional[int] = DEFAULT_MAX_CLAUSE_COUNT
    ):
        self.analyzer = analyzer or StandardAnalyzer()
        self.similarity = similarity or ClassicSimilarity()
        self.id_field = id_field
        self.max_clause_count = max_clause_count
        self._documents: List[Optional[_IndexedDocument]] = []
        self._postings: Dict[str, Dict[str, Dict[int, int]]] = defaultdict(dict)
        self._id_map: Dict[str, int] = {}
        self._closed = False
    
    def __len__(self):
        return len(self._id_map)
    
    def __contains__(self, doc_id):
        return str(doc_id) in self._id_map
    
    def _document(self, doc_number: int) -> _IndexedDocument:
        document = None
        if 0 <= doc_number < len(self._documents):
            document = self._documents[doc_number]
        if document is None:
            raise KeyError(f"No live document at position {doc_number}")
        return document
    
    def add_document(self, document: Mapping, store: bool = True, term_vectors: bool = False) -> int:
        """
        Index a document, replacing any previous document with the same id.
        
        Args:
            document: Field name → value; must contain the identity field
            store: Keep field text so it can be returned and re-analyzed
            term_vectors: Keep per-field term frequencies
        
        Returns:
            Internal document number
        """
        if self._closed:
            raise IndexUnavailableError("Index is closed")
        if document.get(self.id_field) is None:
            raise ValueError(f"Document is missing identity field {self.id_field!r}")
        
        doc_id = str(document[self.id_field])
        stored = {self.id_field: doc_id}
        term_counts: Dict[str, Dict[str, int]] = {self.id_field: {doc_id: 1}}
        vectors: Dict[str, TermVector] = {}
        
        for name, value in document.items():
            if name == self.id_field or value is None:
                continue
            text = value if isinstance(value, str) else str(value)
            counts: Dict[str, int] = defaultdict(int)
            for token in self.analyzer.token_stream(name, text):
                counts[token.text] += 1
            term_counts[name] = dict(counts)
            if store:
                stored[name] = text
            if term_vectors:
                terms = tuple(sorted(counts))
                vectors[name] = TermVector(terms, tuple(counts[t] for t in terms))
        
        # Replace only once the new version analyzed cleanly
        if doc_id in self._id_map:
            self.delete_document(doc_id)
        doc_number = len(self._documents)
        
        for name, counts in term_counts.items():
            field_postings = self._postings[name]
            for term, tf in counts.items():
                field_postings.setdefault(term, {})[doc_number] = tf
        
        self._documents.append(_IndexedDocument(doc_id, stored, term_counts, vectors))
        self._id_map[doc_id] = doc_number
        logger.debug(f"Indexed document {doc_id} as #{doc_number} ({len(term_counts) - 1} fields)")
        return doc_number
    
    def delete_document(self, doc_id: Any) -> bool:
        """Remove a document by id; returns False if it was not indexed"""
        doc_number = self._id_map.pop(str(doc_id), None)
        if doc_number is None:
            return False
        document = self._documents[doc_number]
        for name, counts in document.term_counts.items():
            field_postings = self._postings[name]
            for term in counts:
                postings = field_postings.get(term)
                if postings is None:
                    continue
                postings.pop(doc_number, None)
                if not postings:
                    del field_postings[term]
        self._documents[doc_number] = None
        logger.debug(f"Deleted document {doc_id} (#{doc_number})")
        return True
    
    def close(self):
        self._closed = True
    
    def reader(self) -> InMemoryIndexReader:
        if self._closed:
            raise IndexUnavailableError("Index is closed")
        return InMemoryIndexReader(self)
    
    def document_number(self, doc_id: Any) -> Optional[int]:
        return self._id_map.get(str(doc_id))
    
    def _matches(self, term_query: TermQuery) -> Dict[int, int]:
        return self._postings.get(term_query.field, {}).get(term_query.text, {})
    
    def search(self, query: BooleanQuery, limit: Optional[int] = 10, offset: int = 0) -> List[SearchHit]:
        """
        Execute a boolean query.
        
        A query without SHOULD or MUST clauses matches nothing.
        
        Args:
            query: Query to run
            limit: Maximum number of hits (None = all)
            offset: Number of best hits to skip
        
        Returns:
            Hits sorted by score (descending), ties by indexing order
        """
        if self._closed:
            raise IndexUnavailableError("Index is closed")
        
        num_docs = len(self)
        scores: Dict[int, float] = defaultdict(float)
        required: Optional[Set[int]] = None
        excluded: Set[int] = set()
        
        for clause in query.clauses:
            postings = self._matches(clause.query)
            if clause.occur is Occur.MUST_NOT:
                excluded.update(postings)
                continue
            if clause.occur is Occur.MUST:
                required = set(postings) if required is None else required & set(postings)
            if not postings:
                continue
            idf = self.similarity.idf(len(postings), num_docs)
            for doc_number, tf in postings.items():
                scores[doc_number] += clause.query.boost * math.sqrt(tf) * idf * idf
        
        candidates = set(scores) if required is None else required
        ranked = sorted(
            (n for n in candidates if n not in excluded),
            key=lambda n: (-scores[n], n)
        )
        end = None if limit is None else offset + limit
        
        hits = []
        for doc_number in ranked[offset:end]:
            document = self._documents[doc_number]
            hits.append(SearchHit(document.doc_id, scores[doc_number], dict(document.stored)))
        
        logger.debug(f"Query {query} matched {len(ranked)} documents, returning {len(hits)}")
        return hits
