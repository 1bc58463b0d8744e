"""carcatalog — in-memory vehicle specification dataset with a query API."""

__version__ = "1.0.0"
