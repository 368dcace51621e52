"""
Allow-list ingestion.

Reads delimited text with an ``address,index,amount`` header into Entry
objects. A row that is missing a field or fails validation is skipped and
counted; it never fails the whole batch.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, TextIO

from pydantic import ValidationError

from merkledrop.schemas.entries import Entry

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("address", "index", "amount")


@dataclass
class AllowListResult:
    """Parsed entries plus the line numbers of rows that were skipped."""
    entries: list[Entry] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def total_amount(self) -> int:
        return sum(e.amount for e in self.entries)


def parse_allowlist(source: TextIO | Iterable[str], delimiter: str = ",") -> AllowListResult:
    """
    Parse allow-list rows from an open file or an iterable of lines.

    The first line is the header. Column names are matched case-insensitively
    and extra columns are ignored.
    """
    reader = csv.DictReader(source, delimiter=delimiter)
    result = AllowListResult()

    if reader.fieldnames is None:
        return result

    columns = {name.strip().lower(): name for name in reader.fieldnames if name}
    missing = [c for c in REQUIRED_COLUMNS if c not in columns]
    if missing:
        raise ValueError(f"Allow-list header is missing columns: {', '.join(missing)}")

    for row in reader:
        line_no = reader.line_num
        values = {c: (row.get(columns[c]) or "").strip() for c in REQUIRED_COLUMNS}
        if not all(values.values()):
            logger.debug("Skipping row %d: missing field", line_no)
            result.skipped.append(line_no)
            continue
        try:
            entry = Entry(**values)
        except ValidationError as e:
            logger.debug("Skipping row %d: %s", line_no, e.errors()[0].get("msg"))
            result.skipped.append(line_no)
            continue
        result.entries.append(entry)

    logger.info(
        "Parsed allow-list: %d entries, %d rows skipped",
        len(result.entries), result.skipped_count,
    )
    return result


def load_allowlist(path: str | Path, delimiter: str = ",") -> AllowListResult:
    """Read an allow-list file from disk."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Allow-list not found: {path}")
    with open(path, "r", encoding="utf-8", newline="") as f:
        return parse_allowlist(f, delimiter=delimiter)


__all__ = [
    "REQUIRED_COLUMNS",
    "AllowListResult",
    "parse_allowlist",
    "load_allowlist",
]
