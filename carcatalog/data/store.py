"""
DatasetStore — In-memory vehicle dataset backed by pandas.

Loaded once per process, queried on every request. Records are kept as a
list of immutable VehicleRecords; a flat DataFrame of the query columns,
positionally aligned with that list, drives filtering and sorting.
"""
from __future__ import annotations

import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import pandas as pd

from carcatalog.config import CHUNK_SIZE, DATASET_PATH, DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, DEFAULT_RANDOM_COUNT
from carcatalog.data.loader import DatasetLoadError, LoadReport, read_dataset
from carcatalog.data.schemas import (
    Pagination,
    SearchFilters,
    SearchResult,
    SortField,
    SortOrder,
    VehicleRecord,
)

logger = logging.getLogger(__name__)

# Text columns matched case-insensitively; each gets a pre-lowered "<name>_lc" twin
_TEXT_COLUMNS = ("make", "model", "series", "body_type", "engine_type", "country", "drive_wheels")

_SORT_COLUMNS = {
    SortField.YEAR: "year_from",
    SortField.HORSEPOWER: "horsepower",
    SortField.SPEED: "max_speed",
    SortField.MAKE: "make",
}


class LoadState(str, Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


def build_frame(records: list[VehicleRecord]) -> pd.DataFrame:
    """Flat query columns, one row per record, index = record position."""
    text = {
        "make": [r.make for r in records],
        "model": [r.model for r in records],
        "series": [r.series for r in records],
        "body_type": [r.body_type for r in records],
        "engine_type": [r.engine.type for r in records],
        "country": [r.country_of_origin for r in records],
        "drive_wheels": [r.transmission.drive_wheels for r in records],
    }
    numeric = {
        "year_from": [r.year_from for r in records],
        "year_to": [r.year_to for r in records],
        "horsepower": [r.engine.horsepower for r in records],
        "max_speed": [r.performance.max_speed for r in records],
        "acceleration": [r.performance.acceleration_0_100 for r in records],
        "mixed_fuel": [r.performance.mixed_fuel_consumption for r in records],
    }
    columns: dict[str, pd.Series] = {}
    for name in _TEXT_COLUMNS:
        values = text[name]
        columns[name] = pd.Series(values, dtype=object)
        columns[f"{name}_lc"] = pd.Series(
            [v.lower() if v is not None else None for v in values], dtype=object
        )
    for name, values in numeric.items():
        columns[name] = pd.Series(values, dtype="float64")
    return pd.DataFrame(columns, index=pd.RangeIndex(len(records)))


class DatasetStore:
    """Vehicle records with filter/sort/paginate and point accessors."""

    def __init__(self, path: Path = DATASET_PATH, chunk_size: int = CHUNK_SIZE) -> None:
        self.path = Path(path)
        self.chunk_size = chunk_size
        self.records: list[VehicleRecord] = []
        self.frame: pd.DataFrame = build_frame([])
        self._by_id: dict[str, VehicleRecord] = {}
        self._state = LoadState.UNLOADED
        self._task: Optional[asyncio.Task] = None
        self._report: Optional[LoadReport] = None
        self._error: Optional[DatasetLoadError] = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def start(self) -> asyncio.Task:
        """Schedule the load if it is not loaded or already in flight.

        Must be called from a running event loop. Returns the load task.
        """
        if self._task is not None and self._state in (LoadState.LOADING, LoadState.LOADED):
            return self._task
        self._state = LoadState.LOADING
        self._error = None
        self._task = asyncio.get_running_loop().create_task(self._load())
        return self._task

    async def load(self) -> LoadReport:
        """Load the dataset once. Concurrent callers share one read."""
        if self._state is LoadState.LOADED and self._report is not None:
            return self._report
        return await asyncio.shield(self.start())

    async def wait_ready(self) -> None:
        """Wait for an in-flight load; raise if none succeeded."""
        if self._state is LoadState.LOADED:
            return
        if self._state is LoadState.LOADING and self._task is not None:
            await asyncio.shield(self._task)
            return
        if self._state is LoadState.FAILED:
            raise DatasetLoadError(f"Dataset load failed: {self._error}")
        raise DatasetLoadError("Dataset load has not been started")

    async def _load(self) -> LoadReport:
        logger.info("Loading car dataset from %s", self.path)
        try:
            records, report = await asyncio.to_thread(read_dataset, self.path, self.chunk_size)
            self._install(records, report)
        except asyncio.CancelledError:
            self._fail(DatasetLoadError("Dataset load cancelled"))
            raise
        except DatasetLoadError as exc:
            self._fail(exc)
            raise
        except Exception as exc:
            # Wrapped so callers see one error type; the store still ends FAILED
            error = DatasetLoadError(f"Unexpected error loading dataset {self.path}: {exc!r}")
            self._fail(error)
            raise error from exc

        self._state = LoadState.LOADED
        logger.info("Loaded %s cars from dataset", f"{len(records):,}")
        if report.skipped_total:
            logger.warning("  Skipped %s rows: %s", f"{report.skipped_total:,}", dict(report.skipped))
        if report.duplicate_ids:
            logger.warning("  %s duplicate trim ids (first match wins)", f"{report.duplicate_ids:,}")
        if report.rows_with_replacements:
            logger.warning(
                "  %s rows had undecodable bytes (replaced with U+FFFD)", f"{report.rows_with_replacements:,}"
            )
        return report

    def _fail(self, error: DatasetLoadError) -> None:
        self._state = LoadState.FAILED
        self._error = error
        logger.error("Error loading dataset: %s", error)

    def _install(self, records: list[VehicleRecord], report: LoadReport) -> None:
        by_id: dict[str, VehicleRecord] = {}
        for record in records:
            if record.id is not None:
                by_id.setdefault(record.id, record)
        frame = build_frame(records)
        self.records = records
        self.frame = frame
        self._by_id = by_id
        self._report = report

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def is_loaded(self) -> bool:
        return self._state is LoadState.LOADED

    @property
    def report(self) -> Optional[LoadReport]:
        return self._report

    @property
    def error(self) -> Optional[DatasetLoadError]:
        return self._error

    def record_count(self) -> int:
        return len(self.records)

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def _text_mask(self, column: str, value: str, exact: bool) -> pd.Series:
        lowered = self.frame[f"{column}_lc"]
        needle = value.lower()
        if exact:
            return lowered == needle
        return lowered.str.contains(needle, regex=False, na=False)

    def _filter_mask(self, filters: SearchFilters) -> pd.Series:
        """Boolean mask for all supplied filters (AND). NaN/None never match."""
        df = self.frame
        mask = pd.Series(True, index=df.index)

        if filters.query:
            mask &= (
                self._text_mask("make", filters.query, exact=False)
                | self._text_mask("model", filters.query, exact=False)
                | self._text_mask("series", filters.query, exact=False)
                | self._text_mask("body_type", filters.query, exact=False)
            )
        if filters.make:
            mask &= self._text_mask("make", filters.make, exact=True)
        if filters.model:
            mask &= self._text_mask("model", filters.model, exact=False)
        if filters.year_from is not None:
            mask &= df["year_from"] >= filters.year_from
        if filters.year_to is not None:
            mask &= df["year_to"] <= filters.year_to
        if filters.body_type:
            mask &= self._text_mask("body_type", filters.body_type, exact=True)
        if filters.engine_type:
            mask &= self._text_mask("engine_type", filters.engine_type, exact=False)
        if filters.min_horsepower is not None:
            mask &= df["horsepower"] >= filters.min_horsepower
        if filters.max_horsepower is not None:
            mask &= df["horsepower"] <= filters.max_horsepower
        if filters.country:
            mask &= self._text_mask("country", filters.country, exact=True)
        if filters.drive_wheels:
            mask &= self._text_mask("drive_wheels", filters.drive_wheels, exact=False)
        return mask

    def _sorted_positions(self, positions: pd.Index, sort_by: SortField, order: SortOrder) -> pd.Index:
        """Stable sort; missing numbers rank as 0, missing strings as ''."""
        column = _SORT_COLUMNS[sort_by]
        fill = "" if sort_by is SortField.MAKE else 0
        keys = self.frame.loc[positions, column].fillna(fill)
        return keys.sort_values(ascending=order is SortOrder.ASC, kind="stable").index

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def search(self, filters: SearchFilters | None = None) -> SearchResult:
        """Filter, optionally sort, then paginate."""
        filters = filters or SearchFilters()
        positions = self.frame.index[self._filter_mask(filters).to_numpy()]

        if filters.sort_by is not None:
            positions = self._sorted_positions(
                positions, SortField(filters.sort_by), SortOrder(filters.sort_order)
            )

        page = filters.page if filters.page and filters.page > 0 else DEFAULT_PAGE
        limit = filters.limit if filters.limit and filters.limit > 0 else DEFAULT_PAGE_LIMIT
        start = (page - 1) * limit
        window = positions[start:start + limit]

        return SearchResult(
            data=[self.records[i] for i in window],
            pagination=Pagination.build(len(positions), page, limit),
        )

    def get_by_id(self, car_id: str) -> VehicleRecord | None:
        """First record with this trim id, in load order."""
        return self._by_id.get(car_id)

    def random_cars(self, count: int = DEFAULT_RANDOM_COUNT) -> list[VehicleRecord]:
        """Up to ``count`` distinct records, unseeded shuffle-then-slice."""
        k = min(count, len(self.records))
        if k <= 0:
            return []
        picked = self.frame.sample(n=k).index
        return [self.records[i] for i in picked]

    def makes(self) -> list[str]:
        """Distinct makes, sorted."""
        return sorted(self.frame["make"].dropna().unique().tolist())
