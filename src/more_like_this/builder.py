"""
Query builder: turn scored terms into a "more like this" boolean query.

Every term becomes an optional (SHOULD) clause on its representative
field, best term first. With boosting enabled each clause is weighted by
score / best_score, so the top term gets 1.0. Boosting is skipped when the
best score is not positive (weights stay 1.0).

Construction stops when:
- the index refuses more clauses (clause limit), or
- max_query_terms clauses were added (when max_query_terms > 0)

A MUST_NOT clause on the seed document's identity is always added last,
even when no SHOULD clause was.
"""

import logging
from typing import Any, List, Optional

from .config import MoreLikeThisOptions
from .query import DEFAULT_MAX_CLAUSE_COUNT, BooleanQuery, Occur, TermQuery
from .scorer import ScoredTerm, iter_by_score

logger = logging.getLogger(__name__)


def create_query(
    queue: List[ScoredTerm],
    doc_id: Any,
    options: MoreLikeThisOptions,
    max_clause_count: Optional[int] = DEFAULT_MAX_CLAUSE_COUNT
) -> BooleanQuery:
    """
    Build the similarity query.
    
    Args:
        queue: Scored terms, ascending by score (as produced by create_queue)
        doc_id: Identity of the seed document, excluded from results
        options: max_query_terms, boost and id_field
        max_clause_count: Clause limit of the target index
    
    Returns:
        BooleanQuery with up to max_query_terms SHOULD clauses and one MUST_NOT clause
    """
    query = BooleanQuery(max_clause_count=max_clause_count)
    qterms = 0
    best_score = None
    
    for scored in iter_by_score(queue):
        term_query = TermQuery(scored.field, scored.word)
        
        if options.boost:
            if best_score is None:
                best_score = scored.score
            if best_score > 0:
                term_query.boost = scored.score / best_score
        
        if not query.add_query(term_query, Occur.SHOULD):
            logger.debug(f"Clause limit reached after {qterms} terms")
            break
        qterms += 1
        if options.max_query_terms > 0 and qterms >= options.max_query_terms:
            break
    
    # Never return the seed document itself
    query.add_clause(TermQuery(options.id_field, str(doc_id)), Occur.MUST_NOT)
    
    logger.debug(f"Built query with {qterms} terms: {query}")
    return query
