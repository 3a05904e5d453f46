"""
Term scorer: turn a term frequency map into a list of scored terms.

Formula:
    score(term) = tf × idf(df, N)

Where:
    tf = frequency of the term in the seed document
    df = largest document frequency of the term over the configured fields
    N  = total number of documents in the index

The field holding that largest df becomes the term's representative field.
On equal df the field listed first wins.

Filtering (silent, never an error):
- tf < min_term_freq
- df < min_doc_freq
- df == 0 (term vanished from the index, e.g. a stale reader)
"""

import logging
from dataclasses import dataclass
from itertools import islice
from typing import Dict, Iterator, List, Tuple

from .config import MoreLikeThisOptions
from .index.base import IndexReader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredTerm:
    """A candidate query term with its representative field and score"""
    word: str
    field: str
    score: float
    
    def to_term(self) -> Tuple[str, str]:
        """Index lookup key (field, word)"""
        return (self.field, self.word)


def top_field(reader: IndexReader, word: str, field_names) -> Tuple[str, int]:
    """
    Find the field in which `word` has the largest document frequency.
    
    Returns:
        (field, doc_freq); the first field and 0 if the term is found nowhere
    """
    best_field = field_names[0]
    doc_freq = 0
    for field in field_names:
        freq = reader.doc_freq(field, word)
        if freq > doc_freq:
            best_field = field
            doc_freq = freq
    return best_field, doc_freq


def create_queue(
    term_freq_map: Dict[str, int],
    reader: IndexReader,
    options: MoreLikeThisOptions
) -> List[ScoredTerm]:
    """
    Score and filter candidate terms.
    
    Args:
        term_freq_map: Term frequencies of the seed document
        reader: Index reader for document frequencies
        options: Thresholds, field names and similarity
    
    Returns:
        Scored terms sorted ascending by score; consume from the end
        (or via iter_by_score) to get the best term first
    """
    similarity = options.similarity
    num_docs = reader.num_docs()
    queue: List[ScoredTerm] = []
    
    for word, tf in term_freq_map.items():
        if options.min_term_freq and tf < options.min_term_freq:
            continue
        
        field, doc_freq = top_field(reader, word, options.field_names)
        
        if options.min_doc_freq and doc_freq < options.min_doc_freq:
            continue
        if doc_freq == 0:
            logger.debug(f"Term {word!r} has no document frequency, skipped")
            continue
        
        idf = similarity.idf(doc_freq, num_docs)
        queue.append(ScoredTerm(word, field, tf * idf))
    
    queue.sort(key=lambda term: term.score)
    logger.debug(f"Scored {len(queue)} of {len(term_freq_map)} terms (num_docs={num_docs})")
    return queue


def iter_by_score(queue: List[ScoredTerm]) -> Iterator[ScoredTerm]:
    """Yield scored terms best first"""
    return reversed(queue)


def top_terms(queue: List[ScoredTerm], limit: int) -> List[ScoredTerm]:
    """
    Best `limit` terms, best first (all terms when limit is 0).
    
    Follows the order of iter_by_score, so on equal scores it picks the
    same terms the query builder does.
    
    Example:
        >>> q = [ScoredTerm("a", "body", 1.0), ScoredTerm("b", "body", 3.0)]
        >>> [t.word for t in top_terms(q, 1)]
        ['b']
    """
    if limit <= 0:
        return list(iter_by_score(queue))
    return list(islice(iter_by_score(queue), limit))
