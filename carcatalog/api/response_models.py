"""
Pydantic request/response schemas for the API.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    status: str
    state: str
    cars: int


class StatusData(BaseModel):
    loaded: bool
    state: str
    total_cars: int
    dataset_path: str
    error: Optional[str] = None
    report: Optional[dict[str, Any]] = None


class StatusResponse(BaseModel):
    success: bool = True
    data: StatusData


class CompareRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    car_ids: Optional[list[str]] = Field(None, alias="carIds")
