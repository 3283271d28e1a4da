from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

"""Upload file decoder.

Converts an uploaded file into RawRows (header text -> scalar):
- .csv: header row + data rows, every cell read as text
- .xlsx / .xls: first sheet (or the configured one), first row is the header

Cells are never NA-converted: "NA" / "null" stay strings, empty cells become "".
Rows whose cells are all empty are skipped. Any failure surfaces as DecodeError
before a single record is created.
"""

__all__ = [
    "DecodeError",
    "UploadData",
    "SUPPORTED_EXTENSIONS",
    "read_upload",
    "read_csv_rows",
    "read_excel_rows",
]

SUPPORTED_EXTENSIONS = (".csv", ".xlsx", ".xls")


class DecodeError(Exception):
    """Raised when an uploaded file cannot be turned into rows."""


@dataclass
class UploadData:
    source: str  # file name
    headers: list[str]
    rows: list[dict[str, Any]]  # RawRows
    sheet_name: str | None = None  # None for CSV

    @property
    def total_rows(self) -> int:
        return len(self.rows)


def read_upload(path: Path, *, sheet: str | int | None = None, delimiter: str = ",") -> UploadData:
    """Decode an uploaded file by extension.

    Parameters
    ----------
    path: uploaded file
    sheet: workbook sheet name or index (None -> first sheet); ignored for CSV
    delimiter: CSV field separator

    Raises
    ------
    DecodeError: unsupported type, unreadable bytes, parser error or no data rows
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise DecodeError("Unsupported file type. Please upload .xlsx, .xls, or .csv files.")
    if not path.is_file():
        raise DecodeError(f"file not found: {path}")

    if suffix == ".csv":
        data = read_csv_rows(path, delimiter=delimiter)
    else:
        data = read_excel_rows(path, sheet=sheet)

    if not data.rows:
        raise DecodeError("The file appears to be empty.")
    return data


def read_csv_rows(path: Path, *, delimiter: str = ",") -> UploadData:
    try:
        df = pd.read_csv(
            path,
            sep=delimiter,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError as e:
        raise DecodeError("The file appears to be empty.") from e
    except (pd.errors.ParserError, UnicodeDecodeError, ValueError) as e:
        raise DecodeError(f"Error parsing CSV: {e}") from e
    except OSError as e:
        raise DecodeError(f"Error reading CSV file: {e}") from e
    return _frame_to_upload(df, path.name, sheet_name=None)


def read_excel_rows(path: Path, *, sheet: str | int | None = None) -> UploadData:
    try:
        xls = pd.ExcelFile(path)
    except Exception as e:  # zip / xlrd / openpyxl errors all mean unreadable bytes
        raise DecodeError(f"Error parsing Excel file: {e}") from e

    with xls:
        if not xls.sheet_names:
            raise DecodeError("The Excel file has no sheets.")
        if sheet is None:
            sheet_name = str(xls.sheet_names[0])
        elif isinstance(sheet, int):
            if not 0 <= sheet < len(xls.sheet_names):
                raise DecodeError(f"sheet index {sheet} out of range ({len(xls.sheet_names)} sheets)")
            sheet_name = str(xls.sheet_names[sheet])
        else:
            if sheet not in xls.sheet_names:
                raise DecodeError(f"sheet '{sheet}' not found (sheets: {xls.sheet_names})")
            sheet_name = sheet
        try:
            df = xls.parse(sheet_name, header=0, dtype=object, keep_default_na=False)
        except Exception as e:
            raise DecodeError(f"Error parsing Excel file: {e}") from e
    return _frame_to_upload(df, path.name, sheet_name=sheet_name)


def _frame_to_upload(df: pd.DataFrame, source: str, sheet_name: str | None) -> UploadData:
    headers = [str(c).strip() for c in df.columns.tolist()]
    rows: list[dict[str, Any]] = []
    for raw in df.itertuples(index=False, name=None):
        values = [_to_native(v) for v in raw]
        if all(v == "" for v in values):
            continue
        rows.append(dict(zip(headers, values, strict=False)))
    return UploadData(source=source, headers=headers, rows=rows, sheet_name=sheet_name)


def _to_native(value: Any) -> Any:
    """Cell value -> plain str / int / float; missing cells -> ""."""
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    if isinstance(value, str):
        return value
    if hasattr(value, "isoformat"):  # Timestamp / datetime / time cells
        return value.isoformat()
    if hasattr(value, "item"):  # numpy scalar
        return value.item()
    return value
