"""
Snowball Stemmer for English (via NLTK).

Uses the Snowball stemming algorithm (improved Porter2 stemmer):
https://snowballstem.org/

Examples:
- "architectures" → "architectur"
- "strategies" → "strategi"
- "running" → "run"
"""

from nltk.stem.snowball import SnowballStemmer

_stemmers = {}


def get_stemmer(language: str = "english") -> SnowballStemmer:
    """Return a cached Snowball stemmer for the language"""
    stemmer = _stemmers.get(language)
    if stemmer is None:
        stemmer = SnowballStemmer(language)
        _stemmers[language] = stemmer
    return stemmer


def stem(word: str, language: str = "english") -> str:
    """
    Stem a single word using Snowball algorithm.
    
    Args:
        word: Lowercase word to stem
        language: Snowball language name
        
    Returns:
        Stemmed word
        
    Examples:
        >>> stem("searching")
        'search'
        >>> stem("foxes")
        'fox'
    """
    return get_stemmer(language).stem(word)
