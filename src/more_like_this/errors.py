"""
Exceptions raised by the more-like-this pipeline.

Only true collaborator failures and malformed configuration surface as
exceptions. Sparse data (empty fields, zero document frequency, terms below
a threshold) is never an error: such terms are simply dropped.
"""


class MoreLikeThisError(Exception):
    """Base class for all more-like-this errors"""


class ConfigurationError(MoreLikeThisError, ValueError):
    """Options are missing or invalid (e.g. no field names given)"""


class IndexUnavailableError(MoreLikeThisError):
    """The index could not be opened for reading"""


class DocumentNotFoundError(MoreLikeThisError, LookupError):
    """The seed document id does not resolve to an indexed document"""

    def __init__(self, doc_id):
        super().__init__(f"Document {doc_id!r} not found in index")
        self.doc_id = doc_id
