"""
carcatalog — Configuration: paths, column mapping, query defaults.
"""
import logging
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths — override with CARCATALOG_DATA_DIR / CARCATALOG_DATASET env vars
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("CARCATALOG_DATA_DIR", str(Path.cwd() / "datasets")))
DATA_FOLDER = _data_dir
DATASET_PATH = Path(os.environ.get("CARCATALOG_DATASET", str(_data_dir / "Car Dataset 1945-2020.csv")))

# Rows per pandas chunk while streaming the CSV
CHUNK_SIZE = int(os.environ.get("CARCATALOG_CHUNK_SIZE", "5000"))

LOG_LEVEL = os.environ.get("CARCATALOG_LOG_LEVEL", "INFO").upper()

# ---------------------------------------------------------------------------
# Column mapping from the raw dataset CSV → record fields
# ---------------------------------------------------------------------------
# The upstream file spells the model column "Modle"; "Model" is accepted
# for corrected exports. The loader picks whichever the header contains.
MODEL_COLUMNS = ("Modle", "Model")

COLUMN_MAP = {
    "id_trim": "id",
    "Make": "make",
    "Generation": "generation",
    "Year_from": "year_from",
    "Year_to": "year_to",
    "Series": "series",
    "Trim": "trim",
    "Body_type": "body_type",
    "number_of_seats": "number_of_seats",
    "number_of_doors": "number_of_doors",
    # Dimensions
    "length_mm": "length",
    "width_mm": "width",
    "height_mm": "height",
    "wheelbase_mm": "wheelbase",
    "front_track_mm": "front_track",
    "rear_track_mm": "rear_track",
    "ground_clearance_mm": "ground_clearance",
    # Weight
    "curb_weight_kg": "curb_weight",
    "full_weight_kg": "full_weight",
    "payload_kg": "payload",
    # Engine
    "engine_type": "engine_type",
    "capacity_cm3": "capacity",
    "engine_hp": "horsepower",
    "engine_hp_rpm": "horsepower_rpm",
    "max_power_kw": "max_power",
    "maximum_torque_n_m": "max_torque",
    "turnover_of_maximum_torque_rpm": "torque_rpm",
    "number_of_cylinders": "cylinders",
    "cylinder_layout": "cylinder_layout",
    "valves_per_cylinder": "valves_per_cylinder",
    "compression_ratio": "compression_ratio",
    "cylinder_bore_mm": "cylinder_bore",
    "stroke_cycle_mm": "stroke_cycle",
    "injection_type": "injection_type",
    "boost_type": "boost_type",
    # Performance
    "acceleration_0_100_km/h_s": "acceleration_0_100",
    "max_speed_km_per_h": "max_speed",
    "mixed_fuel_consumption_per_100_km_l": "mixed_fuel_consumption",
    "city_fuel_per_100km_l": "city_fuel_consumption",
    "highway_fuel_per_100km_l": "highway_fuel_consumption",
    "CO2_emissions_g_km": "co2_emissions",
    "fuel_grade": "fuel_grade",
    "fuel_tank_capacity_l": "fuel_tank_capacity",
    "range_km": "range",
    # Transmission
    "transmission": "transmission_type",
    "number_of_gears": "gears",
    "drive_wheels": "drive_wheels",
    # Chassis
    "front_suspension": "front_suspension",
    "back_suspension": "rear_suspension",
    "front_brakes": "front_brakes",
    "rear_brakes": "rear_brakes",
    "steering_type": "steering_type",
    # Cargo
    "minimum_trunk_capacity_l": "min_trunk_capacity",
    "max_trunk_capacity_l": "max_trunk_capacity",
    "cargo_volume_m3": "cargo_volume",
    # Additional
    "car_class": "car_class",
    "country_of_origin": "country_of_origin",
    "safety_assessment": "safety_rating",
    "emission_standards": "emission_standards",
    "turning_circle_m": "turning_circle",
    # Electric
    "battery_capacity_KW_per_h": "battery_capacity",
    "electric_range_km": "electric_range",
    "charging_time_h": "charging_time",
}

# ---------------------------------------------------------------------------
# Query defaults
# ---------------------------------------------------------------------------
DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 50
DEFAULT_TOP_LIMIT = 10
DEFAULT_RANDOM_COUNT = 5

SORT_FIELDS = ("year", "horsepower", "speed", "make")
TOP_CRITERIA = ("horsepower", "speed", "acceleration", "efficient")


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Single stream handler for CLI and server processes."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
