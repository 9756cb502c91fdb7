"""
Reader for the ZSeeker result CSV.

The file is read without type inference so every cell comes back exactly
as the tool wrote it. Row 0 is the header; the remaining rows are the
detected Z-DNA regions in file order.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path

import polars as pl

from zseeker_service.core.exceptions import (
    ResultMalformedError,
    ResultUnavailableError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResultTable:
    """Parsed result CSV.

    Attributes:
        header: Column names from the first row.
        rows: Remaining rows, each a tuple of cell strings.
    """

    header: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]

    @property
    def num_rows(self) -> int:
        return len(self.rows)


def _record_widths(text: str) -> list[int]:
    """
    Field count of every record in CSV text, 0 for a blank line.

    Separators inside double-quoted fields do not count, so a quoted
    field may hold commas or line breaks.

    Raises:
        ValueError: If a quoted field is never closed.

    Example:
        >>> _record_widths('a,b\\n\\n1,"x,y"\\n')
        [2, 0, 2]
    """
    if '"' not in text:
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        return [line.count(",") + 1 if line.strip("\r") else 0 for line in lines]

    widths: list[int] = []
    fields, chars, quoted = 1, 0, False
    for ch in text:
        if quoted:
            # a doubled quote closes and reopens, which nets out
            if ch == '"':
                quoted = False
            continue
        if ch == "\n":
            widths.append(fields if chars else 0)
            fields, chars = 1, 0
        elif ch == ",":
            fields += 1
            chars += 1
        elif ch == '"':
            quoted = True
            chars += 1
        elif ch != "\r":
            chars += 1
    if quoted:
        msg = "unterminated quoted field"
        raise ValueError(msg)
    if chars:
        widths.append(fields)
    return widths


def read_result_table(path: Path) -> ResultTable:
    """
    Read and parse a result CSV into header and data rows.

    Blank lines are skipped. Every other record must have as many fields
    as the header.

    Args:
        path: Result CSV written by the tool.

    Returns:
        ResultTable with the header and rows in file order.

    Raises:
        ResultUnavailableError: If the file is missing or cannot be read.
        ResultMalformedError: If the file is not valid CSV, has no
            records, or has a record whose width differs from the header.
    """
    if not path.is_file():
        raise ResultUnavailableError(str(path), "file does not exist")

    try:
        # leading and trailing blank lines never hold a record
        data = path.read_bytes().strip(b"\r\n")
    except OSError as e:
        raise ResultUnavailableError(str(path), str(e)) from e

    try:
        widths = _record_widths(data.decode("utf-8"))
    except ValueError as e:
        raise ResultMalformedError(str(path), str(e)) from e

    record_widths = [w for w in widths if w]
    if not record_widths:
        raise ResultMalformedError(str(path), "file has no records")

    width = record_widths[0]
    for line_no, w in enumerate(record_widths[1:], start=2):
        if w != width:
            raise ResultMalformedError(
                str(path),
                f"record {line_no} has {w} fields, header has {width}",
            )

    try:
        df = pl.read_csv(
            io.BytesIO(data),
            has_header=False,
            schema={f"column_{i + 1}": pl.String for i in range(width)},
        )
    except pl.exceptions.PolarsError as e:
        raise ResultMalformedError(str(path), str(e)) from e

    rows = list(df.iter_rows())
    if len(rows) == len(widths):
        # polars keeps blank lines as all-null rows
        rows = [row for row, w in zip(rows, widths) if w]
    elif len(rows) != len(record_widths):
        raise ResultMalformedError(
            str(path),
            f"parsed {len(rows)} records, expected {len(record_widths)}",
        )

    records = [tuple("" if cell is None else cell for cell in row) for row in rows]
    table = ResultTable(header=records[0], rows=tuple(records[1:]))

    logger.debug(
        "Read %d result rows with columns %s",
        table.num_rows,
        ", ".join(table.header),
    )
    return table
