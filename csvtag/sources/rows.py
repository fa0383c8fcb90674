from __future__ import annotations

import csv
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import IO

import pandas as pd

"""Row sources for RecordReader.

The reader only needs an iterable of already-split rows. csv_rows() wraps the
standard csv tokenizer over an open text stream; read_excel_rows() loads one
Excel sheet through pandas, keeping every cell as text.
"""

__all__ = [
    "csv_rows",
    "read_excel_rows",
    "SheetNotFoundError",
]


class SheetNotFoundError(Exception):
    """Raised when the requested sheet does not exist in the workbook."""


def csv_rows(stream: IO[str], *, delimiter: str = ",") -> Iterator[list[str]]:
    """Yield the rows of an open text stream split by the csv module.

    Malformed input raises csv.Error when the offending row is reached.
    """
    return csv.reader(stream, delimiter=delimiter)


def _na_values(keep_na_strings: Iterable[str] | None) -> tuple[list[str] | None, bool]:
    # pandas._libs.parsers.STR_NA_VALUES holds the default NA strings
    import pandas._libs.parsers as parsers

    if not keep_na_strings:
        return None, True
    custom_na = set(parsers.STR_NA_VALUES) - set(keep_na_strings)
    return sorted(custom_na), False


def read_excel_rows(
    path: Path, sheet: str | None = None, keep_na_strings: list[str] | None = None
) -> list[list[str]]:
    """Read one Excel sheet as a list of text rows (header row included).

    Parameters
    ----------
    path: Excel file path
    sheet: sheet name (None -> first sheet)
    keep_na_strings: strings pandas should not turn into NA (e.g. ['NA'])

    Empty and NA cells become "".
    """
    na_values, keep_default_na = _na_values(keep_na_strings)
    with pd.ExcelFile(path) as xls:
        names = [str(n) for n in xls.sheet_names]
        if sheet is None:
            if not names:
                return []
            sheet = names[0]
        elif sheet not in names:
            raise SheetNotFoundError(f"sheet '{sheet}' not found in {path.name}: {names}")
        df = xls.parse(sheet, header=None, dtype=str, keep_default_na=keep_default_na, na_values=na_values)

    rows: list[list[str]] = []
    for raw in df.itertuples(index=False, name=None):
        rows.append(["" if pd.isna(v) else str(v) for v in raw])
    return rows
