"""
Record, filter, and result schemas for dataset queries.
"""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Optional

from carcatalog.config import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT


class SortField(str, Enum):
    YEAR = "year"
    HORSEPOWER = "horsepower"
    SPEED = "speed"
    MAKE = "make"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class TopCriteria(str, Enum):
    HORSEPOWER = "horsepower"
    SPEED = "speed"
    ACCELERATION = "acceleration"
    EFFICIENT = "efficient"


# ---------------------------------------------------------------------------
# Vehicle record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Dimensions:
    """Millimetres."""
    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    wheelbase: Optional[float] = None
    front_track: Optional[float] = None
    rear_track: Optional[float] = None
    ground_clearance: Optional[float] = None


@dataclass(frozen=True)
class Weight:
    """Kilograms."""
    curb: Optional[float] = None
    full: Optional[float] = None
    payload: Optional[float] = None


@dataclass(frozen=True)
class Engine:
    type: Optional[str] = None
    capacity: Optional[float] = None          # cm3
    horsepower: Optional[float] = None
    horsepower_rpm: Optional[float] = None
    max_power: Optional[float] = None         # kW
    max_torque: Optional[float] = None        # N·m
    torque_rpm: Optional[float] = None
    cylinders: Optional[int] = None
    cylinder_layout: Optional[str] = None
    valves_per_cylinder: Optional[int] = None
    compression_ratio: Optional[float] = None
    cylinder_bore: Optional[float] = None     # mm
    stroke_cycle: Optional[float] = None      # mm
    injection_type: Optional[str] = None
    boost_type: Optional[str] = None
    fuel_type: Optional[str] = None


@dataclass(frozen=True)
class Performance:
    acceleration_0_100: Optional[float] = None        # seconds
    max_speed: Optional[float] = None                 # km/h
    mixed_fuel_consumption: Optional[float] = None    # L/100km
    city_fuel_consumption: Optional[float] = None
    highway_fuel_consumption: Optional[float] = None
    co2_emissions: Optional[float] = None             # g/km
    fuel_grade: Optional[str] = None
    fuel_tank_capacity: Optional[float] = None        # L
    range: Optional[float] = None                     # km


@dataclass(frozen=True)
class Transmission:
    type: Optional[str] = None
    gears: Optional[int] = None
    drive_wheels: Optional[str] = None


@dataclass(frozen=True)
class Chassis:
    front_suspension: Optional[str] = None
    rear_suspension: Optional[str] = None
    front_brakes: Optional[str] = None
    rear_brakes: Optional[str] = None
    steering_type: Optional[str] = None


@dataclass(frozen=True)
class Cargo:
    min_trunk_capacity: Optional[float] = None   # L
    max_trunk_capacity: Optional[float] = None   # L
    cargo_volume: Optional[float] = None         # m3


@dataclass(frozen=True)
class Electric:
    battery_capacity: Optional[float] = None     # kWh
    electric_range: Optional[float] = None       # km
    charging_time: Optional[float] = None        # hours


@dataclass(frozen=True)
class VehicleRecord:
    """One normalized trim-level entry of the dataset."""
    id: Optional[str]
    make: str
    model: str
    generation: Optional[str] = None
    series: Optional[str] = None
    trim: Optional[str] = None
    body_type: Optional[str] = None
    number_of_seats: Optional[int] = None
    number_of_doors: Optional[int] = None
    year_from: Optional[int] = None
    year_to: Optional[int] = None
    dimensions: Dimensions = field(default_factory=Dimensions)
    weight: Weight = field(default_factory=Weight)
    engine: Engine = field(default_factory=Engine)
    performance: Performance = field(default_factory=Performance)
    transmission: Transmission = field(default_factory=Transmission)
    chassis: Chassis = field(default_factory=Chassis)
    cargo: Cargo = field(default_factory=Cargo)
    car_class: Optional[str] = None
    country_of_origin: Optional[str] = None
    safety_rating: Optional[str] = None
    emission_standards: Optional[str] = None
    turning_circle: Optional[float] = None       # m
    electric: Electric = field(default_factory=Electric)

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

@dataclass
class SearchFilters:
    """Optional, AND-combined search predicates. ``None`` means not applied."""
    query: Optional[str] = None
    make: Optional[str] = None
    model: Optional[str] = None
    year_from: Optional[int] = None
    year_to: Optional[int] = None
    body_type: Optional[str] = None
    engine_type: Optional[str] = None
    min_horsepower: Optional[float] = None
    max_horsepower: Optional[float] = None
    country: Optional[str] = None
    drive_wheels: Optional[str] = None
    sort_by: Optional[SortField] = None
    sort_order: SortOrder = SortOrder.ASC
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_LIMIT


@dataclass
class Pagination:
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "Pagination":
        return cls(total=total, page=page, limit=limit, pages=math.ceil(total / limit))


@dataclass
class SearchResult:
    data: list[VehicleRecord]
    pagination: Pagination

    def to_dict(self) -> dict:
        return {
            "data": [r.to_dict() for r in self.data],
            "pagination": asdict(self.pagination),
        }
