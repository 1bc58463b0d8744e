"""
Dataset CSV streaming, header resolution, and per-row normalization.
"""
from __future__ import annotations

import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from carcatalog.config import CHUNK_SIZE, COLUMN_MAP, DATASET_PATH, MODEL_COLUMNS
from carcatalog.data.normalize import RowSkipped, normalize_row
from carcatalog.data.schemas import VehicleRecord

logger = logging.getLogger(__name__)

# Undecodable bytes are read as U+FFFD instead of failing the load
REPLACEMENT_CHAR = "\ufffd"


class DatasetLoadError(Exception):
    """The dataset file is missing, unreadable, or not a usable CSV."""


@dataclass
class LoadReport:
    """Outcome of one dataset load: counts, skip reasons, timing."""
    source: str
    rows_read: int = 0
    records_loaded: int = 0
    skipped: Counter = field(default_factory=Counter)
    duplicate_ids: int = 0
    rows_with_replacements: int = 0
    elapsed_seconds: float = 0.0

    @property
    def skipped_total(self) -> int:
        return sum(self.skipped.values())

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "rows_read": self.rows_read,
            "records_loaded": self.records_loaded,
            "skipped": dict(self.skipped),
            "skipped_total": self.skipped_total,
            "duplicate_ids": self.duplicate_ids,
            "rows_with_replacements": self.rows_with_replacements,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
        }


# ---------------------------------------------------------------------------
# Header resolution
# ---------------------------------------------------------------------------

def resolve_columns(header: list[str]) -> dict[str, str]:
    """Rename map for the columns present in ``header``.

    The model column is matched against ``MODEL_COLUMNS`` in order.
    """
    if "Make" not in header:
        raise DatasetLoadError("Dataset header has no 'Make' column")
    model_col = next((c for c in MODEL_COLUMNS if c in header), None)
    if model_col is None:
        raise DatasetLoadError(
            f"Dataset header has no model column (expected one of {', '.join(MODEL_COLUMNS)})"
        )
    rename = {c: COLUMN_MAP[c] for c in header if c in COLUMN_MAP}
    rename[model_col] = "model"
    return rename


def read_header(path: Path, encoding: str = "utf-8") -> list[str]:
    """Column names of the CSV, without reading any data rows."""
    try:
        return list(pd.read_csv(
            path, nrows=0, dtype=str, encoding=encoding, encoding_errors="replace"
        ).columns)
    except pd.errors.EmptyDataError as exc:
        raise DatasetLoadError(f"Dataset is empty: {path}") from exc
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
        raise DatasetLoadError(f"Cannot read dataset header from {path}: {exc}") from exc


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def read_dataset(
    path: Path = DATASET_PATH,
    chunk_size: int = CHUNK_SIZE,
    encoding: str = "utf-8",
) -> tuple[list[VehicleRecord], LoadReport]:
    """Stream the dataset CSV in chunks and normalize every row.

    Bad rows are skipped and counted in the report; file-level failures
    raise ``DatasetLoadError``.
    """
    path = Path(path)
    if not path.is_file():
        raise DatasetLoadError(f"Dataset not found: {path}")

    started = time.perf_counter()
    report = LoadReport(source=str(path))
    rename = resolve_columns(read_header(path, encoding))

    def _skip_bad_line(fields: list[str]) -> None:
        report.skipped["malformed_line"] += 1
        logger.debug("Skipping malformed line with %d fields", len(fields))
        return None

    records: list[VehicleRecord] = []
    seen_ids: set[str] = set()
    try:
        reader = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            encoding=encoding,
            encoding_errors="replace",
            chunksize=chunk_size,
            engine="python",
            on_bad_lines=_skip_bad_line,
        )
        with reader:
            for chunk in reader:
                chunk = chunk.rename(columns=rename)
                for row in chunk.to_dict("records"):
                    report.rows_read += 1
                    if any(isinstance(v, str) and REPLACEMENT_CHAR in v for v in row.values()):
                        report.rows_with_replacements += 1
                    try:
                        record = normalize_row(row)
                    except RowSkipped as skip:
                        report.skipped[skip.reason] += 1
                        continue
                    except (TypeError, ValueError):
                        report.skipped["invalid_row"] += 1
                        continue
                    if record.id is not None:
                        if record.id in seen_ids:
                            report.duplicate_ids += 1
                        else:
                            seen_ids.add(record.id)
                    records.append(record)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
        raise DatasetLoadError(f"Failed reading dataset {path}: {exc}") from exc

    report.records_loaded = len(records)
    report.elapsed_seconds = time.perf_counter() - started
    return records, report
