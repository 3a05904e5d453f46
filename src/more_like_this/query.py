"""
Boolean term queries.

A BooleanQuery is a flat list of clauses, each pairing a TermQuery with an
occurrence flag:
- SHOULD: optional, matching raises relevance
- MUST: required
- MUST_NOT: excluding

String form follows the classic query syntax:
    body:fox^0.5 title:quick -id:42
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_MAX_CLAUSE_COUNT = 1024


class Occur(Enum):
    """How a clause participates in matching"""
    SHOULD = "should"
    MUST = "must"
    MUST_NOT = "must_not"


@dataclass
class TermQuery:
    """Matches documents containing `text` in `field`"""
    field: str
    text: str
    boost: float = 1.0
    
    def to_term(self) -> Tuple[str, str]:
        return (self.field, self.text)
    
    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "text": self.text, "boost": self.boost}
    
    def __str__(self):
        if self.boost != 1.0:
            return f"{self.field}:{self.text}^{self.boost:g}"
        return f"{self.field}:{self.text}"


@dataclass
class BooleanClause:
    query: TermQuery
    occur: Occur


class BooleanQuery:
    """
    Disjunctive/conjunctive combination of term queries.
    
    Clause capacity is bounded by `max_clause_count`. Adding beyond it does
    not raise: `add_query` returns False and the query is left unchanged, so
    a builder can stop early and keep what it has.
    """
    
    def __init__(self, max_clause_count: Optional[int] = DEFAULT_MAX_CLAUSE_COUNT):
        self.max_clause_count = max_clause_count
        self.clauses: List[BooleanClause] = []
    
    def add_query(self, query: TermQuery, occur: Occur = Occur.SHOULD) -> bool:
        """
        Append a clause.
        
        Args:
            query: Term query to add
            occur: Occurrence flag
            
        Returns:
            True if added, False if the clause limit was already reached
        """
        if self.max_clause_count is not None and len(self.clauses) >= self.max_clause_count:
            logger.debug(f"Clause limit {self.max_clause_count} reached, rejected {query}")
            return False
        self.clauses.append(BooleanClause(query, occur))
        return True
    
    def add_clause(self, query: TermQuery, occur: Occur) -> None:
        """Append a clause regardless of the clause limit"""
        self.clauses.append(BooleanClause(query, occur))
    
    def clauses_for(self, occur: Occur) -> List[TermQuery]:
        return [clause.query for clause in self.clauses if clause.occur is occur]
    
    def should_clauses(self) -> List[TermQuery]:
        return self.clauses_for(Occur.SHOULD)
    
    def must_clauses(self) -> List[TermQuery]:
        return self.clauses_for(Occur.MUST)
    
    def must_not_clauses(self) -> List[TermQuery]:
        return self.clauses_for(Occur.MUST_NOT)
    
    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        """JSON-friendly representation grouped by occurrence"""
        return {
            occur.value: [query.to_dict() for query in self.clauses_for(occur)]
            for occur in Occur
        }
    
    def __len__(self):
        return len(self.clauses)
    
    def __str__(self):
        prefixes = {Occur.SHOULD: "", Occur.MUST: "+", Occur.MUST_NOT: "-"}
        return " ".join(f"{prefixes[clause.occur]}{clause.query}" for clause in self.clauses)
    
    def __repr__(self):
        return f"BooleanQuery({self})"
