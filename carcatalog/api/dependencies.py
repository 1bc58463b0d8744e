"""
FastAPI dependencies — DatasetStore singleton, search filter parsing.
"""
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Query

from carcatalog.config import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT
from carcatalog.data.loader import DatasetLoadError
from carcatalog.data.normalize import clean_str, parse_int, parse_number
from carcatalog.data.schemas import SearchFilters, SortField, SortOrder
from carcatalog.data.store import DatasetStore

# ---------------------------------------------------------------------------
# Global store singleton (set by the app factory)
# ---------------------------------------------------------------------------
_store: DatasetStore | None = None


def set_store(store: DatasetStore | None) -> None:
    global _store
    _store = store


def get_store_or_empty() -> DatasetStore:
    """Return the store whatever its load state (for status endpoints)."""
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store


async def get_store() -> DatasetStore:
    """Return the store once its dataset is loaded; 503 if the load failed."""
    store = get_store_or_empty()
    try:
        await store.wait_ready()
    except DatasetLoadError as exc:
        raise HTTPException(503, f"Dataset not available: {exc}")
    return store


# ---------------------------------------------------------------------------
# Search filter parsing from query params
# ---------------------------------------------------------------------------

def _sort_field(raw: Optional[str]) -> SortField | None:
    try:
        return SortField(raw) if raw else None
    except ValueError:
        return None


def parse_filters(
    query: Optional[str] = Query(None, description="Free text: make, model, series, body type"),
    make: Optional[str] = Query(None),
    model: Optional[str] = Query(None),
    year_from: Optional[str] = Query(None, alias="yearFrom"),
    year_to: Optional[str] = Query(None, alias="yearTo"),
    body_type: Optional[str] = Query(None, alias="bodyType"),
    engine_type: Optional[str] = Query(None, alias="engineType"),
    min_horsepower: Optional[str] = Query(None, alias="minHorsepower"),
    max_horsepower: Optional[str] = Query(None, alias="maxHorsepower"),
    country: Optional[str] = Query(None),
    drive_wheels: Optional[str] = Query(None, alias="driveWheels"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="year|horsepower|speed|make"),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="asc|desc"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
) -> SearchFilters:
    """Parse search query parameters. Values that do not parse leave the filter off."""
    return SearchFilters(
        query=clean_str(query),
        make=clean_str(make),
        model=clean_str(model),
        year_from=parse_int(year_from),
        year_to=parse_int(year_to),
        body_type=clean_str(body_type),
        engine_type=clean_str(engine_type),
        min_horsepower=parse_number(min_horsepower),
        max_horsepower=parse_number(max_horsepower),
        country=clean_str(country),
        drive_wheels=clean_str(drive_wheels),
        sort_by=_sort_field(sort_by),
        sort_order=SortOrder.DESC if sort_order == "desc" else SortOrder.ASC,
        page=parse_int(page) or DEFAULT_PAGE,
        limit=parse_int(limit) or DEFAULT_PAGE_LIMIT,
    )
