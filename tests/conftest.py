"""Shared test fixtures — sample dataset CSVs written to tmp_path, loaded stores."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pandas as pd
import pytest

from carcatalog.config import COLUMN_MAP
from carcatalog.data.store import DatasetStore

# Real dataset header order: id_trim, Make, Modle, ...
HEADER = ["id_trim", "Make", "Modle"] + [c for c in COLUMN_MAP if c not in ("id_trim", "Make")]

SAMPLE_ROWS = [
    {
        "id_trim": "1", "Make": "Ford", "Modle": "Mustang", "Series": "1 generation Coupe",
        "Year_from": "1965", "Year_to": "1973", "Body_type": "Coupe", "engine_type": "Gasoline",
        "engine_hp": "300", "max_speed_km_per_h": "210", "acceleration_0_100_km/h_s": "6.5",
        "mixed_fuel_consumption_per_100_km_l": "15.0", "country_of_origin": "USA",
        "drive_wheels": "Rear wheel drive", "number_of_seats": "4", "number_of_cylinders": "8",
    },
    {
        "id_trim": "2", "Make": "Ford", "Modle": "Falcon", "Year_from": "1975", "Year_to": "1979",
        "Body_type": "Sedan", "engine_type": "Gasoline", "engine_hp": "",
        "max_speed_km_per_h": "160", "country_of_origin": "USA", "drive_wheels": "Rear wheel drive",
    },
    {
        "id_trim": "3", "Make": "Toyota", "Modle": "Corolla", "Year_from": "1965", "Year_to": "1970",
        "Body_type": "Sedan", "engine_type": "Gasoline", "engine_hp": "150",
        "max_speed_km_per_h": "180", "acceleration_0_100_km/h_s": "9.8",
        "mixed_fuel_consumption_per_100_km_l": "7.5", "country_of_origin": "Japan",
        "drive_wheels": "Front wheel drive",
    },
    {
        "id_trim": "4", "Make": "Toyota", "Modle": "Supra", "Year_from": "1993", "Year_to": "2002",
        "Body_type": "Coupe", "engine_type": "Gasoline", "engine_hp": "280",
        "max_speed_km_per_h": "250", "acceleration_0_100_km/h_s": "5.1",
        "mixed_fuel_consumption_per_100_km_l": "11.0", "country_of_origin": "Japan",
        "drive_wheels": "Rear wheel drive",
    },
    {
        "id_trim": "5", "Make": "Tesla", "Modle": "Model S", "Year_from": "", "Year_to": "",
        "Body_type": "Liftback", "engine_type": "Electric", "engine_hp": "n/a",
        "max_speed_km_per_h": "250", "acceleration_0_100_km/h_s": "2.5",
        "country_of_origin": "USA", "drive_wheels": "All wheel drive (AWD)",
        "battery_capacity_KW_per_h": "100",
    },
    # Skipped: no make
    {"id_trim": "6", "Make": "", "Modle": "Phantom", "Year_from": "2003", "engine_hp": "453"},
    # Skipped: blank model
    {"id_trim": "7", "Make": "Lada", "Modle": "   ", "Year_from": "1980", "engine_hp": "70"},
    # Duplicate trim id: lookups keep the Mustang
    {
        "id_trim": "1", "Make": "BMW", "Modle": "M3", "Year_from": "1986", "Year_to": "1991",
        "Body_type": "Sedan", "engine_type": "Gasoline", "engine_hp": "195",
        "max_speed_km_per_h": "235", "acceleration_0_100_km/h_s": "6.7",
        "mixed_fuel_consumption_per_100_km_l": "9.0", "country_of_origin": "Germany",
        "drive_wheels": "Rear wheel drive",
    },
]

# Ford / Toyota scenario: A and C share the 1960s, B has no horsepower
SCENARIO_ROWS = [
    {"id_trim": "A", "Make": "Ford", "Modle": "Galaxie", "Year_from": "1965", "engine_hp": "300"},
    {"id_trim": "B", "Make": "Ford", "Modle": "Granada", "Year_from": "1975", "engine_hp": ""},
    {"id_trim": "C", "Make": "Toyota", "Modle": "Crown", "Year_from": "1965", "engine_hp": "150"},
]


def write_dataset(path: Path, rows: list[dict], header: list[str] = HEADER) -> Path:
    """Write rows as a dataset CSV; absent cells are blank."""
    pd.DataFrame(rows, columns=header).fillna("").to_csv(path, index=False)
    return path


def load_store(path: Path) -> DatasetStore:
    store = DatasetStore(path)
    asyncio.run(store.load())
    return store


@pytest.fixture()
def dataset_csv(tmp_path: Path) -> Path:
    return write_dataset(tmp_path / "cars.csv", SAMPLE_ROWS)


@pytest.fixture()
def scenario_csv(tmp_path: Path) -> Path:
    return write_dataset(tmp_path / "scenario.csv", SCENARIO_ROWS)


@pytest.fixture()
def store(dataset_csv: Path) -> DatasetStore:
    """A fresh store loaded from the sample dataset."""
    return load_store(dataset_csv)


@pytest.fixture()
def scenario_store(scenario_csv: Path) -> DatasetStore:
    return load_store(scenario_csv)
