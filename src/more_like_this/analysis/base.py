"""
Abstract base class for analyzers.

An analyzer turns the text of one field into a lazy stream of tokens.
Callers may stop consuming the stream at any point, so implementations
must not tokenize the whole text up front.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Token:
    """Single token produced by an analyzer"""
    text: str        # Normalized term text (what gets counted)
    start: int       # Character offset of the token in the source text
    end: int         # Character offset just past the token
    position: int    # Ordinal of the token within its stream


class Analyzer(ABC):
    """
    Abstract base class for analyzers.
    
    All analyzers must implement this interface to be swappable.
    """
    
    @abstractmethod
    def token_stream(self, field: str, text: str) -> Iterator[Token]:
        """
        Produce tokens for the text of a field.
        
        Args:
            field: Name of the field the text belongs to
            text: Raw field content
            
        Returns:
            Lazy iterator of Token objects
        """
        pass
    
    def tokenize(self, field: str, text: str) -> list:
        """Convenience: materialize the token texts of a field"""
        return [token.text for token in self.token_stream(field, text)]
