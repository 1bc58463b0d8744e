"""
Cell coercion and row → VehicleRecord normalization.
"""
from __future__ import annotations

import math
from typing import Any, Mapping

from carcatalog.data.schemas import (
    Cargo,
    Chassis,
    Dimensions,
    Electric,
    Engine,
    Performance,
    Transmission,
    VehicleRecord,
    Weight,
)


class RowSkipped(ValueError):
    """A source row that cannot become a record. ``reason`` is a short tag."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


# ---------------------------------------------------------------------------
# Cell coercion
# ---------------------------------------------------------------------------

def clean_str(value: Any) -> str | None:
    """Trimmed string, or ``None`` for missing / blank cells."""
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    stripped = str(value).strip()
    return stripped or None


def parse_number(value: Any) -> float | None:
    """Finite float, or ``None``. Zero is kept as zero."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        num = float(value)
    else:
        text = clean_str(value)
        if text is None:
            return None
        try:
            num = float(text)
        except ValueError:
            return None
    if math.isnan(num) or math.isinf(num):
        return None
    return num


def parse_int(value: Any) -> int | None:
    """Floored integer, or ``None``."""
    num = parse_number(value)
    if num is None:
        return None
    return math.floor(num)


# ---------------------------------------------------------------------------
# Row normalization
# ---------------------------------------------------------------------------

def normalize_row(row: Mapping[str, Any]) -> VehicleRecord:
    """Build a record from a row keyed by internal field names.

    Raises ``RowSkipped`` when make or model is missing.
    """
    make = clean_str(row.get("make"))
    if make is None:
        raise RowSkipped("missing_make")
    model = clean_str(row.get("model"))
    if model is None:
        raise RowSkipped("missing_model")

    num = lambda key: parse_number(row.get(key))
    whole = lambda key: parse_int(row.get(key))
    text = lambda key: clean_str(row.get(key))

    engine_type = text("engine_type")
    raw_id = row.get("id")

    return VehicleRecord(
        # id is kept verbatim (untrimmed): it is the lookup key
        id=raw_id if isinstance(raw_id, str) and raw_id != "" else None,
        make=make,
        model=model,
        generation=text("generation"),
        series=text("series"),
        trim=text("trim"),
        body_type=text("body_type"),
        number_of_seats=whole("number_of_seats"),
        number_of_doors=whole("number_of_doors"),
        year_from=whole("year_from"),
        year_to=whole("year_to"),
        dimensions=Dimensions(
            length=num("length"),
            width=num("width"),
            height=num("height"),
            wheelbase=num("wheelbase"),
            front_track=num("front_track"),
            rear_track=num("rear_track"),
            ground_clearance=num("ground_clearance"),
        ),
        weight=Weight(
            curb=num("curb_weight"),
            full=num("full_weight"),
            payload=num("payload"),
        ),
        engine=Engine(
            type=engine_type,
            capacity=num("capacity"),
            horsepower=num("horsepower"),
            horsepower_rpm=num("horsepower_rpm"),
            max_power=num("max_power"),
            max_torque=num("max_torque"),
            torque_rpm=num("torque_rpm"),
            cylinders=whole("cylinders"),
            cylinder_layout=text("cylinder_layout"),
            valves_per_cylinder=whole("valves_per_cylinder"),
            compression_ratio=num("compression_ratio"),
            cylinder_bore=num("cylinder_bore"),
            stroke_cycle=num("stroke_cycle"),
            injection_type=text("injection_type"),
            boost_type=text("boost_type"),
            # The dataset has no separate fuel column; engine_type carries it
            fuel_type=engine_type,
        ),
        performance=Performance(
            acceleration_0_100=num("acceleration_0_100"),
            max_speed=num("max_speed"),
            mixed_fuel_consumption=num("mixed_fuel_consumption"),
            city_fuel_consumption=num("city_fuel_consumption"),
            highway_fuel_consumption=num("highway_fuel_consumption"),
            co2_emissions=num("co2_emissions"),
            fuel_grade=text("fuel_grade"),
            fuel_tank_capacity=num("fuel_tank_capacity"),
            range=num("range"),
        ),
        transmission=Transmission(
            type=text("transmission_type"),
            gears=whole("gears"),
            drive_wheels=text("drive_wheels"),
        ),
        chassis=Chassis(
            front_suspension=text("front_suspension"),
            rear_suspension=text("rear_suspension"),
            front_brakes=text("front_brakes"),
            rear_brakes=text("rear_brakes"),
            steering_type=text("steering_type"),
        ),
        cargo=Cargo(
            min_trunk_capacity=num("min_trunk_capacity"),
            max_trunk_capacity=num("max_trunk_capacity"),
            cargo_volume=num("cargo_volume"),
        ),
        car_class=text("car_class"),
        country_of_origin=text("country_of_origin"),
        safety_rating=text("safety_rating"),
        emission_standards=text("emission_standards"),
        turning_circle=num("turning_circle"),
        electric=Electric(
            battery_capacity=num("battery_capacity"),
            electric_range=num("electric_range"),
            charging_time=num("charging_time"),
        ),
    )
