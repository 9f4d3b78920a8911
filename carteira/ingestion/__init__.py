"""File adapters that load positions and operations."""

from pathlib import Path

from carteira.exceptions import ImportFileError
from carteira.ingestion.base import BaseAdapter, LoadResult
from carteira.ingestion.csv_file import CsvAdapter
from carteira.ingestion.json_file import JsonAdapter


def get_adapter(file_path: Path) -> BaseAdapter:
    """Pick an adapter from the file extension."""
    suffix = file_path.suffix.lower()
    if suffix == ".json":
        return JsonAdapter()
    if suffix == ".csv":
        return CsvAdapter()
    raise ImportFileError(file_path.name, f"unsupported file type '{suffix}' (use .json or .csv)")


__all__ = ["BaseAdapter", "CsvAdapter", "JsonAdapter", "LoadResult", "get_adapter"]
