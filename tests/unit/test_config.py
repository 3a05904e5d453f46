"""
Unit tests for MoreLikeThisOptions.
"""

import pytest
from pydantic import ValidationError

from more_like_this.analysis import ENGLISH_STOP_WORDS, SnowballAnalyzer, StandardAnalyzer
from more_like_this.config import MoreLikeThisOptions, parse_stop_words
from more_like_this.errors import ConfigurationError
from more_like_this.similarity import BM25Similarity, ClassicSimilarity

MLT_ENV_VARS = [
    "MLT_FIELD_NAMES", "MLT_MIN_TERM_FREQ", "MLT_MIN_DOC_FREQ", "MLT_MIN_WORD_LENGTH",
    "MLT_MAX_WORD_LENGTH", "MLT_MAX_QUERY_TERMS", "MLT_MAX_NUM_TOKENS", "MLT_BOOST",
    "MLT_STOP_WORDS", "MLT_ID_FIELD", "MLT_SIMILARITY", "MLT_ANALYZER",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in MLT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestOptions:
    """Defaults and validation"""
    
    def test_defaults(self):
        opts = MoreLikeThisOptions(field_names=["body"])
        
        assert opts.field_names == ("body",)
        assert opts.min_term_freq == 2
        assert opts.min_doc_freq == 5
        assert opts.min_word_length == 0
        assert opts.max_word_length == 0
        assert opts.max_query_terms == 25
        assert opts.max_num_tokens == 5000
        assert opts.boost is False
        assert opts.stop_words is None
        assert opts.append_to_query is None
        assert opts.search_target is None
        assert opts.id_field == "id"
        assert isinstance(opts.similarity, ClassicSimilarity)
        assert isinstance(opts.analyzer, StandardAnalyzer)
    
    def test_field_names_required(self):
        with pytest.raises(ConfigurationError):
            MoreLikeThisOptions()
        with pytest.raises(ConfigurationError):
            MoreLikeThisOptions(field_names=None)
        with pytest.raises(ConfigurationError):
            MoreLikeThisOptions(field_names=[])
    
    def test_empty_field_name_rejected(self):
        with pytest.raises(ConfigurationError):
            MoreLikeThisOptions(field_names=["body", ""])
    
    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            MoreLikeThisOptions(field_names=[])
    
    def test_negative_thresholds_rejected(self):
        with pytest.raises(ConfigurationError):
            MoreLikeThisOptions(field_names=["body"], min_doc_freq=-1)
    
    def test_comma_separated_field_names(self):
        assert MoreLikeThisOptions(field_names="title, body").field_names == ("title", "body")
    
    def test_similarity_must_be_strategy(self):
        with pytest.raises(ConfigurationError):
            MoreLikeThisOptions(field_names=["body"], similarity="classic")
    
    def test_immutable(self):
        opts = MoreLikeThisOptions(field_names=["body"])
        
        with pytest.raises(ValidationError):
            opts.boost = True
    
    def test_replace(self):
        opts = MoreLikeThisOptions(field_names=["body"], boost=True)
        
        changed = opts.replace(max_query_terms=3)
        
        assert changed.max_query_terms == 3
        assert changed.boost is True
        assert changed.similarity is opts.similarity
        assert opts.max_query_terms == 25
    
    def test_replace_validates(self):
        with pytest.raises(ConfigurationError):
            MoreLikeThisOptions(field_names=["body"]).replace(max_num_tokens=-5)


class TestFromEnv:
    """MLT_* environment variables"""
    
    def test_requires_field_names(self, clean_env):
        with pytest.raises(ConfigurationError):
            MoreLikeThisOptions.from_env()
    
    def test_reads_settings(self, clean_env):
        clean_env.setenv("MLT_FIELD_NAMES", "title,body")
        clean_env.setenv("MLT_MIN_TERM_FREQ", "1")
        clean_env.setenv("MLT_MAX_QUERY_TERMS", "10")
        clean_env.setenv("MLT_BOOST", "true")
        clean_env.setenv("MLT_STOP_WORDS", "english")
        clean_env.setenv("MLT_SIMILARITY", "bm25")
        clean_env.setenv("MLT_ANALYZER", "snowball")
        clean_env.setenv("MLT_ID_FIELD", "uuid")
        
        opts = MoreLikeThisOptions.from_env()
        
        assert opts.field_names == ("title", "body")
        assert opts.min_term_freq == 1
        assert opts.min_doc_freq == 5
        assert opts.max_query_terms == 10
        assert opts.boost is True
        assert opts.stop_words == ENGLISH_STOP_WORDS
        assert isinstance(opts.similarity, BM25Similarity)
        assert isinstance(opts.analyzer, SnowballAnalyzer)
        assert opts.id_field == "uuid"
    
    def test_overrides_win(self, clean_env):
        clean_env.setenv("MLT_MIN_DOC_FREQ", "9")
        
        opts = MoreLikeThisOptions.from_env(field_names=["body"], min_doc_freq=1)
        
        assert opts.min_doc_freq == 1
    
    def test_invalid_integer(self, clean_env):
        clean_env.setenv("MLT_MAX_NUM_TOKENS", "lots")
        
        with pytest.raises(ConfigurationError, match="MLT_MAX_NUM_TOKENS"):
            MoreLikeThisOptions.from_env(field_names=["body"])
    
    def test_unknown_similarity(self, clean_env):
        clean_env.setenv("MLT_SIMILARITY", "cosine")
        
        with pytest.raises(ConfigurationError, match="Unknown similarity"):
            MoreLikeThisOptions.from_env(field_names=["body"])


class TestParseStopWords:
    
    def test_empty(self):
        assert parse_stop_words(None) is None
        assert parse_stop_words("") is None
    
    def test_list(self):
        assert parse_stop_words("foo,bar ,") == frozenset({"foo", "bar"})
