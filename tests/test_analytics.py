"""Tests for dataset analytics, decade/make rollups, rankings, and comparison."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd

from carcatalog.analytics import cars_by_decade, compare_cars, get_analytics, make_statistics, top_cars
from carcatalog.analytics.common import mean_rounded, round_half_up, sanitize_for_json
from carcatalog.data.schemas import TopCriteria
from carcatalog.data.store import DatasetStore


def _models(cars) -> list[str]:
    return [c.model for c in cars]


# ── Helpers ────────────────────────────────────────────────────


class TestCommon:
    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(224.5) == 225
        assert round_half_up(231.25) == 231
        assert round_half_up(None) is None
        assert round_half_up(float("nan")) is None

    def test_mean_rounded_ignores_missing(self):
        assert mean_rounded(pd.Series([300.0, np.nan, 150.0])) == 225
        assert mean_rounded(pd.Series([np.nan], dtype="float64")) is None

    def test_sanitize_for_json(self):
        data = sanitize_for_json({"a": np.int64(3), "b": np.float64("nan"), "c": [np.float32(1.5)]})
        assert data == {"a": 3, "b": None, "c": [1.5]}


# ── Analytics ──────────────────────────────────────────────────


class TestAnalytics:
    def test_totals(self, store: DatasetStore):
        data = get_analytics(store)
        assert data["total_cars"] == 6
        assert data["total_makes"] == 4
        assert data["total_countries"] == 3
        assert data["total_body_types"] == 3

    def test_year_range_skips_missing(self, store: DatasetStore):
        assert get_analytics(store)["year_range"] == {"from": 1965, "to": 2002}

    def test_average_horsepower(self, store: DatasetStore):
        # (300 + 150 + 280 + 195) / 4 = 231.25
        assert get_analytics(store)["average_horsepower"] == 231

    def test_sorted_lists(self, store: DatasetStore):
        data = get_analytics(store)
        assert data["makes"] == ["BMW", "Ford", "Tesla", "Toyota"]
        assert data["countries"] == ["Germany", "Japan", "USA"]
        assert data["body_types"] == ["Coupe", "Liftback", "Sedan"]

    def test_empty_store(self, tmp_path: Path):
        data = get_analytics(DatasetStore(tmp_path / "none.csv"))
        assert data["total_cars"] == 0
        assert data["year_range"] == {"from": None, "to": None}
        assert data["average_horsepower"] is None


# ── Decades ────────────────────────────────────────────────────


class TestCarsByDecade:
    def test_decades_ascending(self, store: DatasetStore):
        assert [d["decade"] for d in cars_by_decade(store)] == [1960, 1970, 1980, 1990]

    def test_undated_records_excluded(self, store: DatasetStore):
        assert sum(d["count"] for d in cars_by_decade(store)) == 5

    def test_sixties_bucket(self, store: DatasetStore):
        sixties = cars_by_decade(store)[0]
        assert sixties["count"] == 2
        assert sixties["makes"] == 2
        assert sixties["avg_horsepower"] == 225
        assert sixties["avg_max_speed"] == 195
        assert sixties["body_types"] == ["Coupe", "Sedan"]

    def test_average_none_without_values(self, store: DatasetStore):
        seventies = cars_by_decade(store)[1]
        assert seventies["avg_horsepower"] is None
        assert seventies["avg_max_speed"] == 160

    def test_scenario(self, scenario_store: DatasetStore):
        decades = cars_by_decade(scenario_store)
        assert decades[0]["decade"] == 1960
        assert decades[0]["count"] == 2
        assert decades[0]["avg_horsepower"] == 225
        assert decades[1] == {
            "decade": 1970, "count": 1, "makes": 1,
            "avg_horsepower": None, "avg_max_speed": None, "body_types": [],
        }

    def test_empty_store(self, tmp_path: Path):
        assert cars_by_decade(DatasetStore(tmp_path / "none.csv")) == []


# ── Make statistics ────────────────────────────────────────────


class TestMakeStatistics:
    def test_scenario(self, scenario_store: DatasetStore):
        stats = make_statistics(scenario_store, "ford")
        assert stats["make"] == "ford"
        assert stats["total_models"] == 2
        assert stats["avg_horsepower"] == 300
        assert stats["year_range"]["from"] == 1965
        assert stats["most_powerful"]["id"] == "A"

    def test_case_insensitive(self, store: DatasetStore):
        stats = make_statistics(store, "TOYOTA")
        assert stats["models"] == ["Corolla", "Supra"]
        assert stats["body_types"] == ["Sedan", "Coupe"]
        assert stats["year_range"] == {"from": 1965, "to": 2002}
        assert stats["avg_max_speed"] == 215
        assert stats["most_powerful"]["model"] == "Supra"

    def test_no_horsepower_anywhere(self, store: DatasetStore):
        stats = make_statistics(store, "Tesla")
        assert stats["avg_horsepower"] is None
        assert stats["most_powerful"] is None
        assert stats["year_range"] == {"from": None, "to": None}

    def test_unknown_make(self, store: DatasetStore):
        assert make_statistics(store, "Trabant") is None


# ── Rankings ───────────────────────────────────────────────────


class TestTopCars:
    def test_horsepower_highest_first(self, store: DatasetStore):
        assert _models(top_cars(store, "horsepower", 2)) == ["Mustang", "Supra"]

    def test_acceleration_lowest_first(self, store: DatasetStore):
        cars = top_cars(store, TopCriteria.ACCELERATION, 5)
        assert _models(cars) == ["Model S", "Supra", "Mustang", "M3", "Corolla"]
        values = [c.performance.acceleration_0_100 for c in cars]
        assert values == sorted(values)

    def test_efficient_excludes_missing(self, store: DatasetStore):
        assert _models(top_cars(store, "efficient", 10)) == ["Corolla", "M3", "Supra", "Mustang"]

    def test_speed_ties_in_load_order(self, store: DatasetStore):
        assert _models(top_cars(store, "speed", 3)) == ["Supra", "Model S", "M3"]

    def test_missing_values_never_ranked(self, store: DatasetStore):
        models = _models(top_cars(store, "horsepower", 100))
        assert "Falcon" not in models
        assert "Model S" not in models

    def test_unknown_criteria_empty(self, store: DatasetStore):
        assert top_cars(store, "cheapest", 5) == []

    def test_nonpositive_limit(self, store: DatasetStore):
        assert top_cars(store, "horsepower", 0) == []


# ── Comparison ─────────────────────────────────────────────────


class TestCompareCars:
    def test_compares_found_cars(self, store: DatasetStore):
        data = compare_cars(store, ["1", "3", "missing"])
        assert [c["model"] for c in data["cars"]] == ["Mustang", "Corolla"]
        assert [e["horsepower"] for e in data["specs"]["engine"]] == [300.0, 150.0]
        assert data["specs"]["performance"][1]["fuel_consumption"] == 7.5

    def test_needs_two_found(self, store: DatasetStore):
        assert compare_cars(store, ["1", "missing"]) is None
