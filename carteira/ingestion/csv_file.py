"""CSV adapter for position and operation exports."""

import csv
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


class CsvAdapter(BaseAdapter):
    """Reads comma or semicolon separated files with a header row."""

    def parse(self, file_path: Path) -> LoadResult:
        if not file_path.exists():
            raise ImportFileError(str(file_path), "file not found")

        text = file_path.read_text(encoding="utf-8-sig")
        if not text.strip():
            raise ImportFileError(file_path.name, "file is empty")
        # Spreadsheets saved with a pt-BR locale use ';' because ',' is the decimal mark
        header = text.splitlines()[0]
        delimiter = ";" if header.count(";") > header.count(",") else ","

        result = LoadResult(source=file_path.name)
        reader = csv.DictReader(text.splitlines(), delimiter=delimiter)
        for i, row in enumerate(reader, start=1):
            try:
                if is_operation_record(row):
                    result.operations.append(operation_from_record(row))
                else:
                    result.positions.append(position_from_record(row))
            except (ValueError, ValidationError) as e:
                result.errors.append(f"Linha {i}: {e}")
        return result
