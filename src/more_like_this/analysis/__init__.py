"""
Text analysis for indexing and term extraction.

Usage:
    from more_like_this.analysis import StandardAnalyzer
    
    analyzer = StandardAnalyzer()
    for token in analyzer.token_stream("body", "The quick brown fox"):
        print(token.text)
"""

from .base import Analyzer, Token
from .stemmer import stem
from .tokenizer import (
    ENGLISH_STOP_WORDS,
    SnowballAnalyzer,
    StandardAnalyzer,
    WhitespaceAnalyzer,
    iter_words,
)

__all__ = [
    'Analyzer',
    'Token',
    'stem',
    'ENGLISH_STOP_WORDS',
    'StandardAnalyzer',
    'SnowballAnalyzer',
    'WhitespaceAnalyzer',
    'iter_words',
]
