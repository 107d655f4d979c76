import tempfile
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from docnav.api import create_app
from docnav.corpus import Corpus, CorpusHolder
from docnav.domain.document import Document
from docnav.ingestion.orchestrator import IngestionOrchestrator
from tests.factories import make_document


@pytest.fixture
def setup_documents() -> list[Document]:
    """A small setup category: a getting started page and a guide pointing back to it."""
    return [
        make_document(
            "setup/README.md",
            title="Getting Started",
            content="# Getting Started\n\nInstall the toolchain.\n",
            document_type="setup-guide",
            category="setup",
        ),
        make_document(
            "setup/guide.md",
            title="Guide",
            content="see also: - setup/README\n",
            document_type="guide",
            category="setup",
            metadata={"tags": ["getting started"]},
        ),
    ]


@pytest.fixture
def orchestrator() -> IngestionOrchestrator:
    return IngestionOrchestrator(holder=CorpusHolder())


@pytest.fixture
def setup_corpus(orchestrator: IngestionOrchestrator, setup_documents: list[Document]) -> Corpus:
    return orchestrator.build_corpus(setup_documents)


@pytest.fixture
def api_documents() -> list[Document]:
    return [
        make_document(
            "setup/README.md",
            title="Getting Started",
            content=(
                "# Getting Started\n\nRead this first.\n\n"
                "## Next Steps\n- [Deploying](../deploy/deploying.md)\n"
            ),
            document_type="setup-guide",
        ),
        make_document(
            "deploy/deploying.md",
            title="Deploying",
            content="# Deploying\n\nShip it. See [monitoring](./monitoring.md).\n",
            document_type="guide",
        ),
        make_document(
            "deploy/monitoring.md",
            title="Monitoring",
            content="# Monitoring\n\nDashboards and alerts.\n",
        ),
        make_document(
            "notes/loose.md",
            title="Loose Notes",
            content="Nothing links here and this links nowhere.\n",
        ),
    ]


@pytest.fixture
def holder(orchestrator: IngestionOrchestrator, api_documents: list[Document]) -> CorpusHolder:
    return CorpusHolder(orchestrator.build_corpus(api_documents))


@pytest.fixture
def test_client(holder: CorpusHolder, orchestrator: IngestionOrchestrator) -> TestClient:
    """Create test client over an in-memory corpus; reload publishes an empty corpus."""
    app = create_app(holder=holder, reload=lambda: _publish(holder, orchestrator.build_corpus([])))
    return TestClient(app)


def _publish(holder: CorpusHolder, corpus: Corpus) -> Corpus:
    holder.swap(corpus)
    return corpus


@pytest.fixture
def temp_docs_base() -> Generator[Path, None, None]:
    """Create a temporary directory for docs trees used in loading tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def docs_directory(temp_docs_base: Path) -> Path:
    """Create a docs tree with a setup category and a root level page."""
    docs_dir = temp_docs_base / "docs"
    (docs_dir / "setup").mkdir(parents=True)

    (docs_dir / "setup" / "README.md").write_text(
        "---\ntitle: Getting Started\ndescription: How to get going.\n---\n"
        "# Welcome\n\nInstall things.\n\n## Install\n\n## Next Steps\n- [Guide](./guide.md)\n",
        encoding="utf-8",
    )
    (docs_dir / "setup" / "guide.md").write_text(
        "# Daily Guide\n\nWork happens here.\n\nSee also: - setup/README\n",
        encoding="utf-8",
    )
    (docs_dir / "index.md").write_text(
        "# Home\n\nStart at [setup](setup/README.md).\n", encoding="utf-8"
    )
    return docs_dir
