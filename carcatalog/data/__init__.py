"""Dataset loading, normalization, and in-memory query engine."""
from .loader import DatasetLoadError, LoadReport, read_dataset
from .store import DatasetStore, LoadState
from .schemas import SearchFilters, SearchResult, SortField, SortOrder, TopCriteria, VehicleRecord
from .normalize import RowSkipped, normalize_row, parse_int, parse_number
