"""Aggregations over the loaded dataset."""
from .overview import cars_by_decade, get_analytics, make_statistics
from .rankings import top_cars
from .compare import compare_cars
