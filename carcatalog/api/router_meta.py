"""
Meta endpoints: health and dataset load status.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from carcatalog.api.dependencies import get_store_or_empty
from carcatalog.api.response_models import HealthResponse, StatusData, StatusResponse
from carcatalog.data.store import DatasetStore

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: DatasetStore = Depends(get_store_or_empty)):
    return HealthResponse(status="ok", state=store.state.value, cars=store.record_count())


@router.get("/v1/dataset/status", response_model=StatusResponse)
def dataset_status(store: DatasetStore = Depends(get_store_or_empty)):
    """Load state, record count, and the last load report. Never waits for the load."""
    return StatusResponse(data=StatusData(
        loaded=store.is_loaded,
        state=store.state.value,
        total_cars=store.record_count(),
        dataset_path=str(store.path),
        error=str(store.error) if store.error else None,
        report=store.report.to_dict() if store.report else None,
    ))
