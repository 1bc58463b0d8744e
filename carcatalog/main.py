"""
carcatalog — FastAPI app factory with background dataset loading.
"""
from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from carcatalog import __version__
from carcatalog.api.dependencies import set_store
from carcatalog.api.router_dataset import router as dataset_router
from carcatalog.api.router_meta import router as meta_router
from carcatalog.config import configure_logging
from carcatalog.data.store import DatasetStore

logger = logging.getLogger(__name__)


def _log_load_outcome(task: asyncio.Task) -> None:
    if task.cancelled():
        logger.warning("Dataset load cancelled")
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Failed to load car dataset: %s", exc)


def create_app(store: DatasetStore | None = None) -> FastAPI:
    """Build the API around ``store`` (a fresh DatasetStore by default)."""
    store = store or DatasetStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Start loading the dataset; requests wait on it as they arrive."""
        configure_logging()
        set_store(store)
        if not store.is_loaded:
            store.start().add_done_callback(_log_load_outcome)
        yield
        set_store(None)

    app = FastAPI(
        title="carcatalog API",
        description="Vehicle specification dataset — search, analytics, rankings",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(dataset_router)
    return app


app = create_app()
