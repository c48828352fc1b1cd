"""Shop management core: records, storage and the report engine."""

__version__ = "1.0.0"
