"""
Dataset Loader (CSV)
Reads the tabular dataset into immutable Records, and runs the read off the
GUI thread.
"""
import csv
import logging
import math
import os
from typing import Optional

from PySide6.QtCore import QThread, Signal

from animatedscatter.config import COLUMNS
from animatedscatter.model.errors import DataIntegrityError, ScatterplotError
from animatedscatter.model.records import Record

logger = logging.getLogger(__name__)


class DatasetLoader:
    """
    Parses one CSV file into a list of Records.

    Malformed rows are reported and skipped unless `strict` is set, in which
    case the first one raises DataIntegrityError.
    """

    def __init__(self, columns: Optional[dict[str, str]] = None, strict: bool = False) -> None:
        self.columns = dict(columns or COLUMNS)
        self.strict = strict
        self.skipped_rows: list[int] = []

    def load(self, filepath: str) -> list[Record]:
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"Dataset not found: {filepath}")

        logger.info(f"Loading dataset from: {filepath}")
        self.skipped_rows = []
        records: list[Record] = []

        try:
            with open(filepath, mode='r', encoding='utf-8-sig', newline='') as f:
                line = f.readline()
                delimiter = ';' if ';' in line else ','
                f.seek(0)
                reader = csv.DictReader(f, delimiter=delimiter)

                missing = [c for c in self.columns.values() if c not in (reader.fieldnames or [])]
                if missing:
                    raise DataIntegrityError(f"Dataset is missing columns: {', '.join(missing)}")

                while True:
                    try:
                        row = next(reader)
                    except StopIteration:
                        break
                    except csv.Error as e:
                        self._reject(reader.line_num, e)
                        continue

                    try:
                        records.append(self.parse_row(row))
                    except (ValueError, TypeError) as e:
                        self._reject(reader.line_num, e)
        except UnicodeDecodeError as e:
            # Text is decoded in buffered chunks, so a bad byte cannot be pinned to one row
            raise DataIntegrityError(f"Dataset is not valid UTF-8: {e}") from e

        logger.info(f"Loaded {len(records)} records ({len(self.skipped_rows)} skipped).")
        return records

    def _reject(self, line_no: int, error: Exception) -> None:
        if self.strict:
            raise DataIntegrityError(f"Malformed row at line {line_no}: {error}") from error
        logger.warning(f"Skipping malformed row at line {line_no}: {error}")
        self.skipped_rows.append(line_no)

    def parse_row(self, row: dict[str, str]) -> Record:
        c = self.columns
        entity_id = (row.get(c["entity_id"]) or "").strip()
        if not entity_id:
            raise ValueError("empty entity identifier")

        values = {}
        for field_name in ("indicator_x", "indicator_y", "size"):
            value = float(row[c[field_name]])
            if not math.isfinite(value):
                raise ValueError(f"non-finite {c[field_name]}: {row[c[field_name]]}")
            values[field_name] = value

        return Record(
            entity_id=entity_id,
            year=int(row[c["year"]]),
            category=(row.get(c["category"]) or "").strip(),
            **values,
        )


class DatasetLoadWorker(QThread):
    # Signals to hand the parsed dataset back to the GUI thread
    records_loaded = Signal(list)
    error_occurred = Signal(str)

    def __init__(self, filepath: str, loader: Optional[DatasetLoader] = None) -> None:
        super().__init__()
        self.filepath = filepath
        self.loader = loader or DatasetLoader()

    def run(self) -> None:
        try:
            records = self.loader.load(self.filepath)
        except (OSError, ValueError, csv.Error, ScatterplotError) as e:
            logger.exception("Dataset load failed")
            self.error_occurred.emit(str(e))
            return
        self.records_loaded.emit(records)
