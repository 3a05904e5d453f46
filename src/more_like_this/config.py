"""
Options for a more-like-this invocation.

MoreLikeThisOptions is immutable: it is built once per call and never
changed while the pipeline runs. Defaults:

    min_term_freq=2      ignore terms occurring less often in the seed document
    min_doc_freq=5       ignore terms found in fewer documents
    min_word_length=0    0 = no lower bound
    max_word_length=0    0 = no upper bound
    max_query_terms=25   0 = unlimited
    max_num_tokens=5000  tokens analyzed per field at most
    boost=False          weight clauses by relative term score

Environment variables (see from_env):
    MLT_FIELD_NAMES      comma separated field names
    MLT_MIN_TERM_FREQ, MLT_MIN_DOC_FREQ, MLT_MIN_WORD_LENGTH,
    MLT_MAX_WORD_LENGTH, MLT_MAX_QUERY_TERMS, MLT_MAX_NUM_TOKENS
    MLT_BOOST            "true" to enable boosting
    MLT_STOP_WORDS       "english" or a comma separated list
    MLT_ID_FIELD         identity field of the seed document
    MLT_SIMILARITY       classic | bm25
    MLT_ANALYZER         standard | snowball | whitespace
"""

import os
from typing import Any, Callable, FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .analysis import ENGLISH_STOP_WORDS, Analyzer, StandardAnalyzer
from .errors import ConfigurationError
from .factory import StrategyFactory
from .query import BooleanQuery
from .similarity import ClassicSimilarity, Similarity

_INT_SETTINGS = {
    "min_term_freq": "MLT_MIN_TERM_FREQ",
    "min_doc_freq": "MLT_MIN_DOC_FREQ",
    "min_word_length": "MLT_MIN_WORD_LENGTH",
    "max_word_length": "MLT_MAX_WORD_LENGTH",
    "max_query_terms": "MLT_MAX_QUERY_TERMS",
    "max_num_tokens": "MLT_MAX_NUM_TOKENS",
}


def _split_names(value: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


def parse_stop_words(value: Optional[str]) -> Optional[FrozenSet[str]]:
    """
    Parse a stop-word setting.
    
    Examples:
        >>> parse_stop_words("english") == ENGLISH_STOP_WORDS
        True
        >>> sorted(parse_stop_words("foo, bar"))
        ['bar', 'foo']
    """
    if not value:
        return None
    if value.strip().lower() == "english":
        return ENGLISH_STOP_WORDS
    return frozenset(_split_names(value))


class MoreLikeThisOptions(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
    
    field_names: Tuple[str, ...] = Field(..., min_length=1, description="Fields to mine for terms")
    min_term_freq: int = Field(default=2, ge=0)
    min_doc_freq: int = Field(default=5, ge=0)
    min_word_length: int = Field(default=0, ge=0)
    max_word_length: int = Field(default=0, ge=0)
    max_query_terms: int = Field(default=25, ge=0)
    max_num_tokens: int = Field(default=5000, ge=0)
    boost: bool = False
    stop_words: Optional[FrozenSet[str]] = None
    similarity: Similarity = Field(default_factory=ClassicSimilarity)
    analyzer: Analyzer = Field(default_factory=StandardAnalyzer)
    append_to_query: Optional[Callable[[BooleanQuery], Any]] = Field(
        default=None,
        description="Called with the built query before it is executed"
    )
    search_target: Optional[Any] = Field(
        default=None,
        description="Object whose search(query, **find_options) runs the query (defaults to the index)"
    )
    id_field: str = Field(default="id", min_length=1)
    
    def __init__(self, **data):
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid more-like-this options: {e}") from e
    
    @field_validator("field_names", mode="before")
    @classmethod
    def _coerce_field_names(cls, value):
        if isinstance(value, str):
            return _split_names(value)
        return value
    
    @field_validator("field_names")
    @classmethod
    def _check_field_names(cls, value):
        if any(not name for name in value):
            raise ValueError("field names must be non-empty strings")
        return value
    
    def replace(self, **changes) -> "MoreLikeThisOptions":
        """Return a validated copy with some settings changed"""
        current = {name: getattr(self, name) for name in type(self).model_fields}
        current.update(changes)
        return type(self)(**current)
    
    @classmethod
    def from_env(cls, field_names=None, **overrides) -> "MoreLikeThisOptions":
        """
        Build options from MLT_* environment variables.
        
        Args:
            field_names: Field names; falls back to MLT_FIELD_NAMES
            **overrides: Explicit settings, taking precedence over the environment
            
        Returns:
            MoreLikeThisOptions
        """
        settings = {}
        names = field_names or os.getenv("MLT_FIELD_NAMES")
        if not names:
            raise ConfigurationError("field_names or MLT_FIELD_NAMES environment variable is required")
        settings["field_names"] = names
        
        for name, env_var in _INT_SETTINGS.items():
            raw = os.getenv(env_var)
            if raw is None or raw.strip() == "":
                continue
            try:
                settings[name] = int(raw)
            except ValueError as e:
                raise ConfigurationError(f"{env_var} must be an integer, got {raw!r}") from e
        
        boost = os.getenv("MLT_BOOST")
        if boost:
            settings["boost"] = boost.strip().lower() == "true"
        
        stop_words = parse_stop_words(os.getenv("MLT_STOP_WORDS"))
        if stop_words:
            settings["stop_words"] = stop_words
        
        id_field = os.getenv("MLT_ID_FIELD")
        if id_field:
            settings["id_field"] = id_field
        
        similarity = os.getenv("MLT_SIMILARITY")
        if similarity:
            settings["similarity"] = StrategyFactory.create_similarity(similarity)
        
        analyzer = os.getenv("MLT_ANALYZER")
        if analyzer:
            settings["analyzer"] = StrategyFactory.create_analyzer(analyzer)
        
        settings.update(overrides)
        return cls(**settings)
