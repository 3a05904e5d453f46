"""
More-like-this HTTP service.

FastAPI application over a single in-memory index:
- POST   /v1/documents                     index a document
- GET    /v1/documents/{doc_id}            stored fields of a document
- DELETE /v1/documents/{doc_id}            remove a document
- POST   /v1/documents/{doc_id}/similar    documents similar to this one
- POST   /v1/documents/{doc_id}/terms      terms that would drive the search

Configuration (environment, .env.local / .env honored):
    PORT            HTTP port (default 8080)
    LOG_LEVEL       console log level (default INFO)
    LOG_FILE        log file base path, empty to disable (default logs/more-like-this.log)
    MLT_ANALYZER    analyzer used for indexing and re-analysis
    MLT_SIMILARITY  idf strategy used for scoring terms and hits
    MLT_ID_FIELD    identity field name (default "id")
"""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from dotenv import load_dotenv

# .env.local first (highest priority), then .env as fallback
_project_root = Path(__file__).resolve().parents[2]
for _env_file in (_project_root / ".env.local", _project_root / ".env"):
    if _env_file.exists():
        load_dotenv(_env_file, override=True)
        break

from fastapi import Depends, FastAPI, HTTPException, status
from pydantic import BaseModel, Field

from . import __version__
from .config import MoreLikeThisOptions
from .errors import ConfigurationError, DocumentNotFoundError, IndexUnavailableError
from .factory import StrategyFactory
from .index import InMemoryIndex
from .logging_config import setup_logging
from .service import MoreLikeThis

logger = logging.getLogger(__name__)

PORT = int(os.getenv("PORT", "8080"))
APP_START_TIME = datetime.utcnow().isoformat() + "Z"

search_index = InMemoryIndex(
    analyzer=StrategyFactory.create_analyzer(os.getenv("MLT_ANALYZER")),
    similarity=StrategyFactory.create_similarity(os.getenv("MLT_SIMILARITY")),
    id_field=os.getenv("MLT_ID_FIELD") or "id",
)


def get_index() -> InMemoryIndex:
    """Index dependency (overridden in tests)"""
    return search_index


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup, close the index on shutdown"""
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    setup_logging(
        log_file=os.getenv("LOG_FILE", "logs/more-like-this.log") or None,
        console_level=getattr(logging, log_level, logging.INFO),
    )
    logger.info(f"More-like-this service {__version__} starting")
    yield
    logger.info("Shutting down...")
    search_index.close()


app = FastAPI(
    title="More Like This API",
    description="Find documents similar to an indexed document",
    version=__version__,
    lifespan=lifespan,
)


# Request/Response models
class HealthResponse(BaseModel):
    status: str
    version: str
    documents: int
    started_at: str
    uptime_seconds: float


class DocumentRequest(BaseModel):
    id: Union[int, str] = Field(..., description="Identity of the document")
    fields: Dict[str, str] = Field(..., description="Field name → text")
    store: bool = Field(default=True, description="Keep field text in the index")
    term_vectors: bool = Field(default=False, description="Keep per-field term frequencies")

    class Config:
        json_schema_extra = {
            "example": {
                "id": 42,
                "fields": {"title": "Quick foxes", "body": "the quick brown fox jumps"},
                "store": True,
                "term_vectors": False,
            }
        }


class DocumentResponse(BaseModel):
    doc_id: str
    doc_number: int
    message: str


class StoredDocumentResponse(BaseModel):
    doc_id: str
    fields: Dict[str, Any]


class SimilarRequest(BaseModel):
    field_names: List[str] = Field(..., min_length=1, description="Fields to mine for terms")
    min_term_freq: Optional[int] = Field(default=None, ge=0)
    min_doc_freq: Optional[int] = Field(default=None, ge=0)
    min_word_length: Optional[int] = Field(default=None, ge=0)
    max_word_length: Optional[int] = Field(default=None, ge=0)
    max_query_terms: Optional[int] = Field(default=None, ge=0)
    max_num_tokens: Optional[int] = Field(default=None, ge=0)
    boost: Optional[bool] = None
    stop_words: Optional[List[str]] = None
    limit: int = Field(default=10, ge=1, le=100, description="Number of results")
    offset: int = Field(default=0, ge=0)

    def to_options(self, index: InMemoryIndex) -> MoreLikeThisOptions:
        settings = self.model_dump(exclude_none=True, exclude={"limit", "offset"})
        return MoreLikeThisOptions(
            analyzer=index.analyzer,
            similarity=index.similarity,
            id_field=index.id_field,
            **settings,
        )


class TermItem(BaseModel):
    word: str
    field: str
    score: float


class SimilarResultItem(BaseModel):
    doc_id: str
    score: float
    document: Dict[str, Any]


class SimilarResponse(BaseModel):
    doc_id: str
    query: str
    clauses: Dict[str, List[Dict[str, Any]]] = Field(..., description="Query clauses grouped by occurrence")
    results: List[SimilarResultItem]
    total: int


class TermsResponse(BaseModel):
    doc_id: str
    terms: List[TermItem]


def _raise_for(e: Exception, doc_id: str):
    if isinstance(e, DocumentNotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, ConfigurationError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if isinstance(e, IndexUnavailableError):
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    logger.error(f"More-like-this failed for {doc_id}: {e}")
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"More-like-this failed: {str(e)}",
    )


# Routes
@app.get("/", response_model=dict)
def root():
    """Root endpoint"""
    return {
        "service": "More Like This API",
        "version": __version__,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health", response_model=HealthResponse)
def health(index: InMemoryIndex = Depends(get_index)):
    """Health check endpoint"""
    start_time = datetime.fromisoformat(APP_START_TIME.rstrip('Z'))
    uptime = (datetime.utcnow() - start_time).total_seconds()

    return HealthResponse(
        status="healthy",
        version=__version__,
        documents=len(index),
        started_at=APP_START_TIME,
        uptime_seconds=round(uptime, 2),
    )


@app.post("/v1/documents", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
def add_document(request: DocumentRequest, index: InMemoryIndex = Depends(get_index)):
    """
    Index a document (replaces an existing document with the same id)

    Example:
        POST /v1/documents {"id": 1, "fields": {"body": "the quick brown fox"}}
    """
    if index.id_field in request.fields:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Field {index.id_field!r} is reserved for the document id",
        )
    try:
        doc_number = index.add_document(
            {index.id_field: request.id, **request.fields},
            store=request.store,
            term_vectors=request.term_vectors,
        )
    except IndexUnavailableError as e:
        _raise_for(e, str(request.id))

    return DocumentResponse(
        doc_id=str(request.id),
        doc_number=doc_number,
        message=f"Indexed {len(request.fields)} fields",
    )


@app.get("/v1/documents/{doc_id}", response_model=StoredDocumentResponse)
def get_document(doc_id: str, index: InMemoryIndex = Depends(get_index)):
    """Stored fields of a document"""
    try:
        doc_number = index.document_number(doc_id)
        if doc_number is None:
            raise DocumentNotFoundError(doc_id)
        fields = index.reader().get_document(doc_number)
    except Exception as e:
        _raise_for(e, doc_id)

    return StoredDocumentResponse(doc_id=doc_id, fields=fields)


@app.delete("/v1/documents/{doc_id}", response_model=dict)
def delete_document(doc_id: str, index: InMemoryIndex = Depends(get_index)):
    """Remove a document from the index"""
    if not index.delete_document(doc_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Document {doc_id} not found",
        )
    return {"doc_id": doc_id, "message": "Document deleted"}


@app.post("/v1/documents/{doc_id}/similar", response_model=SimilarResponse)
def similar_documents(doc_id: str, request: SimilarRequest, index: InMemoryIndex = Depends(get_index)):
    """
    Documents similar to an indexed document (never including itself)

    Example:
        POST /v1/documents/42/similar {"field_names": ["body"], "min_doc_freq": 1}
    """
    try:
        options = request.to_options(index)
        mlt = MoreLikeThis(index)
        query = mlt.build_query(doc_id, options)
        hits = index.search(query, limit=request.limit, offset=request.offset)
    except Exception as e:
        _raise_for(e, doc_id)

    return SimilarResponse(
        doc_id=doc_id,
        query=str(query),
        clauses=query.to_dict(),
        results=[
            SimilarResultItem(doc_id=hit.doc_id, score=hit.score, document=hit.document)
            for hit in hits
        ],
        total=len(hits),
    )


@app.post("/v1/documents/{doc_id}/terms", response_model=TermsResponse)
def document_terms(doc_id: str, request: SimilarRequest, index: InMemoryIndex = Depends(get_index)):
    """Terms a similarity search for this document would use, best first"""
    try:
        options = request.to_options(index)
        terms = MoreLikeThis(index).interesting_terms(doc_id, options)
    except Exception as e:
        _raise_for(e, doc_id)

    return TermsResponse(
        doc_id=doc_id,
        terms=[TermItem(word=t.word, field=t.field, score=t.score) for t in terms],
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "more_like_this.api:app",
        host="0.0.0.0",
        port=PORT,
    )
