"""
Term extraction: build the term → frequency map of a seed document.

Per field, in configured order:
1. Stored term vector, if the index kept one
2. Otherwise the stored field text, re-analyzed
3. Otherwise the field value of the originating object, analyzed

At most `max_num_tokens` tokens are read from a field's token stream; the
rest of the stream is never consumed. Noise words count toward that ceiling
but are not recorded.
"""

import logging
from collections import defaultdict
from collections.abc import Mapping
from itertools import islice
from typing import Any, Dict, Optional

from .config import MoreLikeThisOptions
from .index.base import IndexReader
from .noise import is_noise_word

logger = logging.getLogger(__name__)


def content_for_field(source: Any, field: str) -> Optional[str]:
    """
    Read a field value from the object a document was indexed from.
    
    Mappings are looked up by key, other objects by attribute; a callable
    attribute is called without arguments.
    
    Examples:
        >>> content_for_field({"body": "hello"}, "body")
        'hello'
        >>> content_for_field(None, "body") is None
        True
    """
    if source is None:
        return None
    if isinstance(source, Mapping):
        value = source.get(field)
    else:
        value = getattr(source, field, None)
        if callable(value):
            value = value()
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def retrieve_terms(
    reader: IndexReader,
    doc_number: int,
    options: MoreLikeThisOptions,
    source: Any = None
) -> Dict[str, int]:
    """
    Collect term frequencies over the configured fields of a document.
    
    Args:
        reader: Index reader
        doc_number: Internal number of the seed document
        options: Field names, token ceiling, noise settings, analyzer
        source: Originating object, used when the index stored no text
    
    Returns:
        Term frequency map {term: count}; empty when nothing was found
    """
    term_freq_map = defaultdict(int)
    document = None
    
    for field in options.field_names:
        vector = reader.get_term_vector(doc_number, field)
        if vector is not None:
            for term, freq in vector:
                if not is_noise_word(term, options):
                    term_freq_map[term] += freq
            logger.debug(f"Field {field!r}: {len(vector)} terms from term vector")
            continue
        
        # Stored document is loaded once, on the first field without a vector
        if document is None:
            document = reader.get_document(doc_number)
        content = document.get(field)
        if content is None:
            content = content_for_field(source, field)
        if not content:
            logger.debug(f"Field {field!r}: no term vector and no content")
            continue
        if not isinstance(content, str):
            content = str(content)
        
        add_token_counts(term_freq_map, field, content, options)
    
    result = dict(term_freq_map)
    logger.debug(f"Extracted {len(result)} distinct terms from document {doc_number}")
    return result


def add_token_counts(
    term_freq_map: Dict[str, int],
    field: str,
    content: str,
    options: MoreLikeThisOptions
) -> int:
    """
    Analyze `content` and add its token counts to the map.
    
    Returns:
        Number of tokens consumed from the stream (≤ max_num_tokens)
    """
    stream = options.analyzer.token_stream(field, content)
    consumed = 0
    for token in islice(stream, options.max_num_tokens):
        consumed += 1
        if is_noise_word(token.text, options):
            continue
        term_freq_map[token.text] = term_freq_map.get(token.text, 0) + 1
    
    if consumed >= options.max_num_tokens:
        logger.debug(f"Field {field!r}: stopped after max_num_tokens={options.max_num_tokens}")
    return consumed
