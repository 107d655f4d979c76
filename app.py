import logging
import sys

from loguru import logger

from docnav.api import create_app
from docnav.config import settings
from docnav.corpus import CorpusHolder
from docnav.ingestion.docs_root import find_docs_root
from docnav.ingestion.document_loader import DocumentLoader
from docnav.ingestion.orchestrator import IngestionOrchestrator

logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])
logging.basicConfig(stream=sys.stderr, level=settings.log_level)

logger.info("Initializing docs navigator")
docs_root = find_docs_root(settings.docs_path, folder_name=settings.docs_folder_name)

holder = CorpusHolder()
orchestrator = IngestionOrchestrator(
    holder=holder,
    loader=DocumentLoader(pattern=settings.docs_glob, ignore_dirs=settings.ignore_dirs),
    outdated_after_days=settings.outdated_after_days,
)
orchestrator.ingest(docs_root)

app = create_app(
    holder=holder,
    reload=lambda: orchestrator.ingest(docs_root),
)
