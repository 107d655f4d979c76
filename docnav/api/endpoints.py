from typing import Callable

from fastapi import APIRouter, HTTPException, Query
from loguru import logger
from pydantic import ValidationError

from docnav.api.schemas import DocumentDetail, SearchResponse, SearchResult
from docnav.config import settings
from docnav.corpus import Corpus, CorpusHolder
from docnav.errors import DocumentNotFoundError
from docnav.retrieval.scoring import SearchRequest


def _create_search_endpoint(holder: CorpusHolder):
    """Create the document search endpoint handler."""

    async def search_docs(
        query: str = Query(..., min_length=1),  # noqa: B008
        category: str | None = None,
        document_types: list[str] | None = Query(default=None),  # noqa: B008
        context: str | None = None,
        exclude_outdated: bool = False,
        limit: int = Query(default=settings.default_search_limit, ge=1),  # noqa: B008
        include_full_content: bool = False,
    ) -> SearchResponse:
        """Search documents by query, ranked by relevance."""
        try:
            request = SearchRequest(
                query=query,
                category=category,
                document_types=document_types,
                context=context,
                exclude_outdated=exclude_outdated,
                limit=limit,
            )
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=str(e)) from e

        corpus = holder.current()
        results = corpus.search(request)
        logger.debug(f"Search for '{query}' returned {len(results)} results")

        return SearchResponse(
            query=query,
            count=len(results),
            results=[
                SearchResult.from_document(
                    result.document,
                    score=result.score,
                    include_full_content=include_full_content,
                    excerpt_chars=settings.excerpt_chars,
                )
                for result in results
            ],
        )

    return search_docs


def _create_document_endpoint(holder: CorpusHolder):
    """Create the document detail endpoint handler."""

    async def get_document(identifier: str, include_related: bool = False):
        corpus = holder.current()
        try:
            document = corpus.get_document(identifier)
        except DocumentNotFoundError as e:
            logger.warning(str(e))
            raise HTTPException(status_code=404, detail=str(e)) from e

        related = None
        if include_related:
            related = corpus.related_documents(document, settings.related_per_type)

        return DocumentDetail(document=document, related_documents=related).to_response()

    return get_document


def _create_reload_endpoint(reload: Callable[[], Corpus]):
    """Create the corpus reload endpoint handler."""

    async def reload_corpus():
        try:
            corpus = reload()
        except Exception as e:
            logger.error(f"Error reloading documents: {str(e)}")
            raise HTTPException(status_code=500, detail="Reload failed") from e
        return corpus.stats.model_dump()

    return reload_corpus


def get_endpoints_router(
    *,
    holder: CorpusHolder,
    reload: Callable[[], Corpus] | None = None,
) -> APIRouter:
    router = APIRouter()

    @router.get("/health")
    async def health_check():
        return {"status": "healthy", "documents": len(holder.current())}

    @router.get("/api/categories")
    async def list_categories():
        return {"categories": holder.current().categories()}

    router.get("/api/docs/search")(_create_search_endpoint(holder))
    router.get("/api/docs/{identifier:path}")(_create_document_endpoint(holder))
    if reload is not None:
        router.post("/api/reload")(_create_reload_endpoint(reload))

    return router
