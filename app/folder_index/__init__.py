"""folder-index - Recursive directory indexing into a Parquet cache."""

__version__ = "0.1.0"
