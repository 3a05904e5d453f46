"""
Tokenizers used by the bundled analyzers.

Tokenization pipeline (StandardAnalyzer):
1. Lowercase conversion
2. Extract alphanumeric words (including inner hyphens)
3. Drop pure numbers
4. Drop stop words (only when a stop-word set is configured)
5. Optionally stem (SnowballAnalyzer)

Every stage is a generator so a consumer can stop after N tokens without
the rest of the text being processed.
"""

import re
from typing import AbstractSet, Iterator, Optional

from .base import Analyzer, Token
from .stemmer import stem

# English stopwords (based on Elasticsearch/Lucene standard list)
ENGLISH_STOP_WORDS = frozenset([
    'a', 'an', 'and', 'are', 'as', 'at', 'be', 'but', 'by',
    'for', 'if', 'in', 'into', 'is', 'it',
    'no', 'not', 'of', 'on', 'or', 'such',
    'that', 'the', 'their', 'then', 'there', 'these',
    'they', 'this', 'to', 'was', 'will', 'with'
])

WORD_PATTERN = re.compile(r'\b[a-z0-9]+(?:-[a-z0-9]+)*\b')
NUMBER_PATTERN = re.compile(r'^[0-9-]+$')
WHITESPACE_PATTERN = re.compile(r'\S+')


def iter_words(text: str) -> Iterator[Token]:
    """
    Lazily extract lowercase words from text.
    
    Examples:
        >>> [t.text for t in iter_words("Kubernetes-based deployment, 2025!")]
        ['kubernetes-based', 'deployment', '2025']
    """
    if not text:
        return
    lowered = text.lower()
    for position, match in enumerate(WORD_PATTERN.finditer(lowered)):
        yield Token(match.group(), match.start(), match.end(), position)


class StandardAnalyzer(Analyzer):
    """
    Lowercasing word analyzer.
    
    Stop words are not removed unless given explicitly; the noise filter of
    the more-like-this options is the usual place to drop them.
    """
    
    def __init__(self, stop_words: Optional[AbstractSet[str]] = None, keep_numbers: bool = False):
        self.stop_words = frozenset(stop_words) if stop_words else frozenset()
        self.keep_numbers = keep_numbers
    
    def token_stream(self, field: str, text: str) -> Iterator[Token]:
        for token in iter_words(text):
            if not self.keep_numbers and NUMBER_PATTERN.match(token.text):
                continue
            if token.text in self.stop_words:
                continue
            yield token
    
    def __repr__(self):
        return f"{type(self).__name__}(stop_words={len(self.stop_words)})"


class SnowballAnalyzer(StandardAnalyzer):
    """StandardAnalyzer followed by Snowball stemming"""
    
    def __init__(
        self,
        language: str = "english",
        stop_words: Optional[AbstractSet[str]] = None,
        keep_numbers: bool = False
    ):
        super().__init__(stop_words=stop_words, keep_numbers=keep_numbers)
        self.language = language
    
    def token_stream(self, field: str, text: str) -> Iterator[Token]:
        for token in super().token_stream(field, text):
            yield Token(stem(token.text, self.language), token.start, token.end, token.position)


class WhitespaceAnalyzer(Analyzer):
    """Splits on whitespace only, no normalization"""
    
    def token_stream(self, field: str, text: str) -> Iterator[Token]:
        if not text:
            return
        for position, match in enumerate(WHITESPACE_PATTERN.finditer(text)):
            yield Token(match.group(), match.start(), match.end(), position)
