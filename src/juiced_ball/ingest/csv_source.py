import csv
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def strip_bom(text: str) -> str:
    """Strip UTF-8 BOM from the start of text (Baseball Savant CSVs include it)."""
    return text.removeprefix("\ufeff")


class CsvSource:
    """Reads one or more delimited Statcast exports as a single list of rows."""

    def __init__(self, paths: str | Path | Sequence[str | Path]) -> None:
        if isinstance(paths, str | Path):
            paths = [paths]
        self._paths = [Path(p) for p in paths]

    @property
    def source_type(self) -> str:
        return "csv"

    @property
    def source_detail(self) -> str:
        return ", ".join(str(p) for p in self._paths)

    def fetch(self, **params: Any) -> list[Mapping[str, Any]]:
        encoding = params.pop("encoding", "utf-8")
        delimiter = params.pop("sep", params.pop("delimiter", ","))
        rows: list[Mapping[str, Any]] = []
        for path in self._paths:
            logger.debug("Reading CSV %s", path)
            with open(path, encoding=encoding, newline="") as f:
                lines = (strip_bom(line) if i == 0 else line for i, line in enumerate(f))
                reader = csv.DictReader(lines, delimiter=delimiter)
                file_rows = list(reader)
            logger.debug("Read %d rows from %s", len(file_rows), path)
            rows.extend(file_rows)
        return rows
