"""JSON adapter for positions and operations."""

import json
from pathlib import Path

from pydantic import ValidationError

from carteira.exceptions import ImportFileError
from carteira.ingestion.base import (
    BaseAdapter,
    LoadResult,
    is_operation_record,
    operation_from_record,
    position_from_record,
)


class JsonAdapter(BaseAdapter):
    """Reads a list of records, or an object with ``positions``/``operations`` lists."""

    def parse(self, file_path: Path) -> LoadResult:
        if not file_path.exists():
            raise ImportFileError(str(file_path), "file not found")
        try:
            raw = json.loads(file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ImportFileError(file_path.name, f"invalid JSON: {e}") from e

        if isinstance(raw, dict):
            records = list(raw.get("positions") or []) + list(raw.get("operations") or [])
        elif isinstance(raw, list):
            records = raw
        else:
            raise ImportFileError(file_path.name, "expected a JSON list or object")

        result = LoadResult(source=file_path.name)
        for i, record in enumerate(records, start=1):
            if not isinstance(record, dict):
                result.errors.append(f"Linha {i}: not an object")
                continue
            try:
                if is_operation_record(record):
                    result.operations.append(operation_from_record(record))
                else:
                    result.positions.append(position_from_record(record))
            except (ValueError, ValidationError) as e:
                result.errors.append(f"Linha {i}: {e}")
        return result
