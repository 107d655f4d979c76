from typing import Callable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docnav.api.endpoints import get_endpoints_router
from docnav.corpus import Corpus, CorpusHolder


def create_app(
    *,
    holder: CorpusHolder,
    reload: Callable[[], Corpus] | None = None,
) -> FastAPI:
    """Create FastAPI app."""
    app = FastAPI()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router=get_endpoints_router(holder=holder, reload=reload))

    return app
