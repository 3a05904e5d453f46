"""
More-like-this orchestration.

Pipeline for one seed document:
    retrieve_terms → create_queue → create_query → append_to_query hook → search

Each step fully consumes the previous step's output. Nothing is shared
between calls except read access to the index.
"""

import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Union

from .builder import create_query
from .config import MoreLikeThisOptions
from .errors import ConfigurationError, DocumentNotFoundError, IndexUnavailableError
from .extractor import retrieve_terms
from .index.base import IndexReader, SearchIndex
from .query import BooleanQuery
from .scorer import ScoredTerm, create_queue, top_terms

logger = logging.getLogger(__name__)

OptionsLike = Union[MoreLikeThisOptions, Mapping]


def coerce_options(options: Optional[OptionsLike]) -> MoreLikeThisOptions:
    """Accept ready options or a plain dict of settings"""
    if isinstance(options, MoreLikeThisOptions):
        return options
    if options is None:
        raise ConfigurationError("field_names option is required")
    return MoreLikeThisOptions(**dict(options))


class MoreLikeThis:
    """
    Finds documents similar to an indexed seed document.
    
    Example:
        >>> mlt = MoreLikeThis(index)
        >>> hits = mlt.more_like_this("42", {"field_names": ["title", "body"]}, {"limit": 5})
    """
    
    def __init__(self, index: SearchIndex):
        self.index = index
    
    def _open_reader(self) -> IndexReader:
        try:
            return self.index.reader()
        except IndexUnavailableError:
            raise
        except Exception as e:
            raise IndexUnavailableError(f"Cannot open index reader: {e}") from e
    
    def _document_number(self, doc_id: Any) -> int:
        doc_number = self.index.document_number(doc_id)
        if doc_number is None:
            raise DocumentNotFoundError(doc_id)
        return doc_number
    
    def _scored_terms(self, doc_id: Any, options: MoreLikeThisOptions, source: Any) -> List[ScoredTerm]:
        reader = self._open_reader()
        doc_number = self._document_number(doc_id)
        term_freq_map = retrieve_terms(reader, doc_number, options, source)
        return create_queue(term_freq_map, reader, options)
    
    def build_query(self, doc_id: Any, options: OptionsLike, source: Any = None) -> BooleanQuery:
        """
        Build the similarity query for a document, including the
        append_to_query hook.
        
        Args:
            doc_id: Identity field value of the seed document
            options: MoreLikeThisOptions or a dict of settings
            source: Originating object, read when the index stored no text
        
        Returns:
            BooleanQuery ready to execute
        """
        options = coerce_options(options)
        queue = self._scored_terms(doc_id, options, source)
        query = create_query(queue, doc_id, options, max_clause_count=self.index.max_clause_count)
        if options.append_to_query is not None:
            options.append_to_query(query)
        return query
    
    def more_like_this(
        self,
        doc_id: Any,
        options: OptionsLike,
        find_options: Optional[Mapping] = None,
        source: Any = None
    ) -> List[Any]:
        """
        Find documents similar to `doc_id`.
        
        Args:
            doc_id: Identity field value of the seed document
            options: MoreLikeThisOptions or a dict of settings
            find_options: Passed verbatim to the search target's search()
            source: Originating object, read when the index stored no text
        
        Returns:
            Whatever the search target returns, unmodified
        """
        options = coerce_options(options)
        query = self.build_query(doc_id, options, source)
        target = options.search_target if options.search_target is not None else self.index
        logger.info(f"More like {doc_id}: {query}")
        return target.search(query, **dict(find_options or {}))
    
    def interesting_terms(self, doc_id: Any, options: OptionsLike, source: Any = None) -> List[ScoredTerm]:
        """
        The terms a similarity query would use, best first, without running it.
        
        Bounded by max_query_terms (0 = all scored terms).
        """
        options = coerce_options(options)
        queue = self._scored_terms(doc_id, options, source)
        return top_terms(queue, options.max_query_terms)


def more_like_this(
    index: SearchIndex,
    doc_id: Any,
    options: OptionsLike,
    find_options: Optional[Mapping] = None,
    source: Any = None
) -> List[Any]:
    """Convenience wrapper around MoreLikeThis(index).more_like_this()"""
    return MoreLikeThis(index).more_like_this(doc_id, options, find_options, source)


def interesting_terms(
    index: SearchIndex,
    doc_id: Any,
    options: OptionsLike,
    source: Any = None
) -> List[ScoredTerm]:
    """Convenience wrapper around MoreLikeThis(index).interesting_terms()"""
    return MoreLikeThis(index).interesting_terms(doc_id, options, source)
