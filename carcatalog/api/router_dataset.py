"""
Dataset endpoints: search, lookup, analytics, rankings, decades, makes, random, compare.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from carcatalog.analytics import cars_by_decade, compare_cars, get_analytics, make_statistics, top_cars
from carcatalog.analytics.common import sanitize_for_json
from carcatalog.api.dependencies import get_store, parse_filters
from carcatalog.api.response_models import CompareRequest
from carcatalog.config import DEFAULT_RANDOM_COUNT, DEFAULT_TOP_LIMIT, TOP_CRITERIA
from carcatalog.data.normalize import parse_int
from carcatalog.data.schemas import SearchFilters
from carcatalog.data.store import DatasetStore

router = APIRouter(prefix="/api/v1/dataset", tags=["dataset"])


def _safe_json(data: dict) -> JSONResponse:
    return JSONResponse(content=sanitize_for_json(data))


@router.get("/search")
def search_cars(
    store: DatasetStore = Depends(get_store),
    filters: SearchFilters = Depends(parse_filters),
):
    """Filtered, sorted, paginated search."""
    result = store.search(filters).to_dict()
    return _safe_json({
        "success": True,
        "count": len(result["data"]),
        "pagination": result["pagination"],
        "data": result["data"],
    })


@router.get("/cars/{car_id}")
def get_car(car_id: str, store: DatasetStore = Depends(get_store)):
    car = store.get_by_id(car_id)
    if car is None:
        raise HTTPException(404, f"Car not found with id {car_id}")
    return _safe_json({"success": True, "data": car.to_dict()})


@router.get("/analytics")
def analytics(store: DatasetStore = Depends(get_store)):
    """Dataset-wide totals and distinct value lists."""
    return _safe_json({"success": True, "data": get_analytics(store)})


@router.get("/top")
def top(
    criteria: str = Query("horsepower", description="horsepower|speed|acceleration|efficient"),
    limit: Optional[str] = Query(None),
    store: DatasetStore = Depends(get_store),
):
    if criteria not in TOP_CRITERIA:
        raise HTTPException(400, f"Invalid criteria. Must be one of: {', '.join(TOP_CRITERIA)}")
    parsed_limit = parse_int(limit)
    cars = top_cars(store, criteria, DEFAULT_TOP_LIMIT if parsed_limit is None else parsed_limit)
    return _safe_json({
        "success": True,
        "criteria": criteria,
        "count": len(cars),
        "data": [c.to_dict() for c in cars],
    })


@router.get("/decades")
def decades(store: DatasetStore = Depends(get_store)):
    data = cars_by_decade(store)
    return _safe_json({"success": True, "count": len(data), "data": data})


@router.get("/makes")
def list_makes(store: DatasetStore = Depends(get_store)):
    makes = store.makes()
    return {"success": True, "count": len(makes), "data": makes}


@router.get("/makes/{make}")
def make_stats(make: str, store: DatasetStore = Depends(get_store)):
    stats = make_statistics(store, make)
    if stats is None:
        raise HTTPException(404, f"No data found for make: {make}")
    return _safe_json({"success": True, "data": stats})


@router.get("/random")
def random_cars(
    count: Optional[str] = Query(None),
    store: DatasetStore = Depends(get_store),
):
    parsed_count = parse_int(count)
    cars = store.random_cars(DEFAULT_RANDOM_COUNT if parsed_count is None else parsed_count)
    return _safe_json({"success": True, "count": len(cars), "data": [c.to_dict() for c in cars]})


@router.post("/compare")
def compare(body: CompareRequest, store: DatasetStore = Depends(get_store)):
    """Side-by-side specs for two or more trim ids."""
    if not body.car_ids or len(body.car_ids) < 2:
        raise HTTPException(400, "Please provide at least 2 car IDs to compare")
    data = compare_cars(store, body.car_ids)
    if data is None:
        raise HTTPException(404, "Not enough valid cars found for comparison")
    return _safe_json({"success": True, "data": data})
