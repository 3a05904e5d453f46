"""Unit test configuration - stub collaborators for isolated testing"""

from unittest.mock import Mock

import pytest

from more_like_this.config import MoreLikeThisOptions
from more_like_this.index.base import IndexReader
from more_like_this.similarity import Similarity


class InverseSimilarity(Similarity):
    """idf = 1/df, so expected scores are easy to compute by hand"""
    
    name = "inverse"
    
    def idf(self, doc_freq: int, num_docs: int) -> float:
        return 1.0 / doc_freq


def make_reader(documents=None, vectors=None, doc_freqs=None, num_docs=100):
    """
    Mock IndexReader.
    
    Args:
        documents: {doc_number: stored fields}
        vectors: {(doc_number, field): TermVector}
        doc_freqs: {(field, term): df}
        num_docs: Total document count
    """
    documents = documents or {}
    vectors = vectors or {}
    doc_freqs = doc_freqs or {}
    
    reader = Mock(spec=IndexReader)
    reader.get_document.side_effect = lambda n: dict(documents.get(n, {}))
    reader.get_term_vector.side_effect = lambda n, field: vectors.get((n, field))
    reader.doc_freq.side_effect = lambda field, term: doc_freqs.get((field, term), 0)
    reader.num_docs.return_value = num_docs
    return reader


@pytest.fixture
def inverse_similarity():
    return InverseSimilarity()


@pytest.fixture
def body_options():
    """Options over a single 'body' field with no thresholds"""
    return MoreLikeThisOptions(field_names=["body"], min_term_freq=0, min_doc_freq=0)


@pytest.fixture
def reader_factory():
    """Factory fixture building mock readers (see make_reader)"""
    return make_reader
