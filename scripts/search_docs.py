"""CLI for loading a docs tree and printing search results or a single document as JSON"""

import argparse
import json
import logging
import sys
from pathlib import Path

from loguru import logger

from docnav.api.schemas import DocumentDetail, SearchResult
from docnav.config import settings
from docnav.corpus import CorpusHolder
from docnav.errors import DocumentNotFoundError
from docnav.ingestion.docs_root import find_docs_root
from docnav.ingestion.document_loader import DocumentLoader
from docnav.ingestion.orchestrator import IngestionOrchestrator
from docnav.retrieval.scoring import SearchRequest


def main(
    docs_path: str | None,
    query: str | None,
    document: str | None,
    category: str | None,
    document_types: list[str] | None,
    context: str | None,
    exclude_outdated: bool,
    limit: int,
) -> int:
    folder = find_docs_root(
        Path(docs_path) if docs_path else settings.docs_path,
        folder_name=settings.docs_folder_name,
    )
    orchestrator = IngestionOrchestrator(
        holder=CorpusHolder(),
        loader=DocumentLoader(pattern=settings.docs_glob, ignore_dirs=settings.ignore_dirs),
        outdated_after_days=settings.outdated_after_days,
    )
    corpus = orchestrator.ingest(folder)

    if document:
        try:
            found = corpus.get_document(document)
        except DocumentNotFoundError as e:
            logger.error(str(e))
            return 1
        related = corpus.related_documents(found, settings.related_per_type)
        output = DocumentDetail(document=found, related_documents=related).to_response()
    else:
        request = SearchRequest(
            query=query,
            category=category,
            document_types=document_types,
            context=context,
            exclude_outdated=exclude_outdated,
            limit=limit,
        )
        results = corpus.search(request)
        output = {
            "query": query,
            "count": len(results),
            "results": [
                SearchResult.from_document(r.document, score=r.score).model_dump(mode="json")
                for r in results
            ],
        }

    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--docs-path", type=str, required=False, help="Docs root folder")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--query", type=str, help="Search query")
    target.add_argument("--document", type=str, help="Identifier of a document to show")
    parser.add_argument("--category", type=str, required=False, help="Category filter")
    parser.add_argument(
        "--document-type",
        dest="document_types",
        action="append",
        required=False,
        help="Allowed document type, repeatable",
    )
    parser.add_argument("--context", type=str, required=False, help="Search context")
    parser.add_argument(
        "--exclude-outdated", action="store_true", help="Exclude potentially outdated documents"
    )
    parser.add_argument(
        "--limit",
        type=int,
        required=False,
        help="Maximum number of results",
        default=settings.default_search_limit,
    )

    args = parser.parse_args()
    logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])
    logging.basicConfig(stream=sys.stderr, level=settings.log_level)

    sys.exit(
        main(
            docs_path=args.docs_path,
            query=args.query,
            document=args.document,
            category=args.category,
            document_types=args.document_types,
            context=args.context,
            exclude_outdated=args.exclude_outdated,
            limit=args.limit,
        )
    )
