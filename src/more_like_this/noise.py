"""
Noise word filter.

A noise word is a term that carries no similarity signal: too short, too
long, or a stop word. A length bound of 0 disables that bound.
"""

from .config import MoreLikeThisOptions


def is_noise_word(text: str, options: MoreLikeThisOptions) -> bool:
    """
    Check whether a term should be ignored.
    
    Args:
        text: Term text
        options: Length bounds and stop words
        
    Returns:
        True if the term must be skipped
        
    Examples:
        >>> opts = MoreLikeThisOptions(field_names=["body"], min_word_length=3)
        >>> is_noise_word("ox", opts)
        True
        >>> is_noise_word("fox", opts)
        False
    """
    length = len(text)
    if options.min_word_length > 0 and length < options.min_word_length:
        return True
    if options.max_word_length > 0 and length > options.max_word_length:
        return True
    if options.stop_words and text in options.stop_words:
        return True
    return False
