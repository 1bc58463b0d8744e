"""
Side-by-side spec comparison of dataset cars.
"""
from __future__ import annotations

from carcatalog.data.store import DatasetStore


def compare_cars(store: DatasetStore, car_ids: list[str]) -> dict | None:
    """Engine, performance, and dimension specs for the given trim ids.

    Unknown ids are dropped. Returns ``None`` if fewer than two cars remain.
    """
    cars = [c for c in (store.get_by_id(i) for i in car_ids) if c is not None]
    if len(cars) < 2:
        return None

    return {
        "cars": [
            {"id": c.id, "make": c.make, "model": c.model, "year": c.year_from, "body_type": c.body_type}
            for c in cars
        ],
        "specs": {
            "engine": [
                {
                    "id": c.id,
                    "type": c.engine.type,
                    "capacity": c.engine.capacity,
                    "horsepower": c.engine.horsepower,
                    "torque": c.engine.max_torque,
                }
                for c in cars
            ],
            "performance": [
                {
                    "id": c.id,
                    "acceleration": c.performance.acceleration_0_100,
                    "max_speed": c.performance.max_speed,
                    "fuel_consumption": c.performance.mixed_fuel_consumption,
                }
                for c in cars
            ],
            "dimensions": [
                {
                    "id": c.id,
                    "length": c.dimensions.length,
                    "width": c.dimensions.width,
                    "height": c.dimensions.height,
                    "weight": c.weight.curb,
                }
                for c in cars
            ],
        },
    }
