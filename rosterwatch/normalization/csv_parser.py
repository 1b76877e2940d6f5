import csv
import io
from typing import List

from loguru import logger

Row = List[str]


class ParseError(Exception):
    """Raised when a sheet export cannot be read as CSV."""

    pass


def parse_csv(raw_text: str) -> List[Row]:
    """Splits a CSV export into rows of trimmed string cells.

    Quoting is lenient and blank lines are kept (as empty rows) because the
    normalizer treats them as section breaks.
    """
    if not isinstance(raw_text, str):
        raise ParseError(f"Expected CSV text, got {type(raw_text).__name__}")

    # Strip a UTF-8 BOM so the first header cell compares cleanly
    raw_text = raw_text.lstrip("\ufeff")

    rows: List[Row] = []
    try:
        reader = csv.reader(io.StringIO(raw_text, newline=""), strict=False)
        for record in reader:
            rows.append([cell.strip() for cell in record])
    except csv.Error as e:
        raise ParseError(f"Malformed CSV near line {len(rows) + 1}: {e}") from e

    logger.debug(f"Parsed {len(rows)} CSV rows.")
    return rows
