"""
Factory to create similarity and analyzer strategies from configuration names.
"""

import logging
from typing import AbstractSet, Optional

from .analysis import Analyzer, SnowballAnalyzer, StandardAnalyzer, WhitespaceAnalyzer
from .errors import ConfigurationError
from .similarity import BM25Similarity, ClassicSimilarity, Similarity

logger = logging.getLogger(__name__)


class StrategyFactory:
    """Factory to create pluggable strategies by name."""
    
    SIMILARITIES = {
        "classic": ClassicSimilarity,
        "bm25": BM25Similarity,
    }
    
    ANALYZERS = {
        "standard": StandardAnalyzer,
        "snowball": SnowballAnalyzer,
        "whitespace": WhitespaceAnalyzer,
    }
    
    @classmethod
    def create_similarity(cls, name: Optional[str] = None) -> Similarity:
        """
        Create an idf strategy.
        
        Supported types:
            - classic: ln(N/(df+1)) + 1 (default)
            - bm25: Okapi BM25 idf
        
        Args:
            name: Strategy name (case-insensitive), None for the default
            
        Returns:
            Similarity instance
        """
        key = (name or "classic").strip().lower()
        similarity_cls = cls.SIMILARITIES.get(key)
        if similarity_cls is None:
            raise ConfigurationError(
                f"Unknown similarity type: {name}. "
                f"Valid options: {', '.join(cls.SIMILARITIES)}"
            )
        logger.debug(f"Creating similarity: {key}")
        return similarity_cls()
    
    @classmethod
    def create_analyzer(
        cls,
        name: Optional[str] = None,
        stop_words: Optional[AbstractSet[str]] = None
    ) -> Analyzer:
        """
        Create an analyzer.
        
        Supported types:
            - standard: lowercase words, numbers dropped (default)
            - snowball: standard + Snowball stemming (NLTK)
            - whitespace: split on whitespace, no normalization
        
        Args:
            name: Analyzer name (case-insensitive), None for the default
            stop_words: Stop words removed during tokenization
                Ignored by the whitespace analyzer
            
        Returns:
            Analyzer instance
        """
        key = (name or "standard").strip().lower()
        analyzer_cls = cls.ANALYZERS.get(key)
        if analyzer_cls is None:
            raise ConfigurationError(
                f"Unknown analyzer type: {name}. "
                f"Valid options: {', '.join(cls.ANALYZERS)}"
            )
        logger.debug(f"Creating analyzer: {key}")
        if analyzer_cls is WhitespaceAnalyzer:
            return analyzer_cls()
        return analyzer_cls(stop_words=stop_words)
