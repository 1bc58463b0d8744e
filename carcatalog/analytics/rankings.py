"""
Top-N rankings by a single metric.
"""
from __future__ import annotations

from carcatalog.config import DEFAULT_TOP_LIMIT
from carcatalog.data.schemas import TopCriteria, VehicleRecord
from carcatalog.data.store import DatasetStore

# criteria → (frame column, ascending). Lower is better for acceleration and consumption.
RANKING_COLUMNS = {
    TopCriteria.HORSEPOWER: ("horsepower", False),
    TopCriteria.SPEED: ("max_speed", False),
    TopCriteria.ACCELERATION: ("acceleration", True),
    TopCriteria.EFFICIENT: ("mixed_fuel", True),
}


def top_cars(
    store: DatasetStore,
    criteria: TopCriteria | str = TopCriteria.HORSEPOWER,
    limit: int = DEFAULT_TOP_LIMIT,
) -> list[VehicleRecord]:
    """Best ``limit`` records by ``criteria``; records missing the metric are not ranked.

    Unrecognized criteria yield an empty list.
    """
    try:
        criteria = TopCriteria(criteria)
    except ValueError:
        return []
    if limit <= 0:
        return []

    column, ascending = RANKING_COLUMNS[criteria]
    ranked = store.frame[column].dropna().sort_values(ascending=ascending, kind="stable")
    return [store.records[i] for i in ranked.index[:limit]]
