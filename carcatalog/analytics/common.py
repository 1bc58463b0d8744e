"""
Safe math helpers used across all analytics modules.
"""
from __future__ import annotations

import math

import numpy as np
import pandas as pd


def round_half_up(value: float | None) -> int | None:
    """Round .5 away from zero for positives (2.5 → 3). ``None``/NaN → ``None``."""
    if value is None or pd.isna(value):
        return None
    return int(math.floor(float(value) + 0.5))


def mean_rounded(values: pd.Series) -> int | None:
    """Mean of the non-null values, rounded half-up; ``None`` when there are none."""
    present = values.dropna()
    if present.empty:
        return None
    return round_half_up(present.mean())


def value_range(low: pd.Series, high: pd.Series) -> dict:
    """{from: min(low), to: max(high)} over non-null values."""
    low, high = low.dropna(), high.dropna()
    return {
        "from": int(low.min()) if not low.empty else None,
        "to": int(high.max()) if not high.empty else None,
    }


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas types to native Python for JSON serialization.

    NaN and Inf become ``None``: a missing measurement is never reported as 0.
    """
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items() if k is not None}
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        obj = float(obj)
    if isinstance(obj, float):
        return None if (math.isnan(obj) or math.isinf(obj)) else obj
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())
    return obj
