# logspec/ingest.py
# -----------------------------------------------------------------------------
# Spreadsheet ingestion: first worksheet of an .xlsx/.xls (or a .csv) ->
# list of Record.
#
# Header row is located by name (case-insensitive, trimmed):
#   Delivery / Delivery Number   (required)
#   Ship Method                  (required)
#   Country                      (required)
#   Customer                     (optional, "" when missing)
#   Outbound Pending Lines / Outbound Pending   (optional, "0" when missing)
# Every column is also kept under its header name in Record.fields.
# -----------------------------------------------------------------------------

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Union

import pandas as pd

logger = logging.getLogger(__name__)

Source = Union[str, Path, Any]   # path or binary file-like (e.g. a Django upload)

DELIVERY_NAMES = ["Delivery", "Delivery Number"]
SHIP_METHOD_NAMES = ["Ship Method"]
COUNTRY_NAMES = ["Country"]
CUSTOMER_NAMES = ["Customer"]
OUTBOUND_PENDING_NAMES = ["Outbound Pending Lines", "Outbound Pending"]


class IngestError(ValueError):
    """The data file cannot be turned into records."""


@dataclass(frozen=True)
class Record:
    delivery: str
    ship_method: str
    country: str
    customer: str = ""
    outbound_pending_lines: str = "0"
    fields: Mapping[str, str] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, str]:
        if self.fields:
            return dict(self.fields)
        return {
            "Delivery": self.delivery,
            "Ship Method": self.ship_method,
            "Country": self.country,
            "Customer": self.customer,
            "Outbound Pending Lines": self.outbound_pending_lines,
        }


# ------------------------------- helpers ------------------------------------ #

def find_column_index(headers: Sequence[str], possible_names: Sequence[str]) -> int:
    """Index of the first header matching any of `possible_names`, else -1."""
    lowered = [(h or "").strip().lower() for h in headers]
    for name in possible_names:
        try:
            return lowered.index(name.strip().lower())
        except ValueError:
            continue
    return -1


def _cell(row: Sequence[str], idx: int) -> str:
    if idx < 0 or idx >= len(row):
        return ""
    value = row[idx]
    return str(value).strip() if value is not None else ""


def _source_name(source: Source) -> str:
    return str(getattr(source, "name", source) or "")


def _read_grid(source: Source) -> List[List[str]]:
    name = _source_name(source).lower()
    if hasattr(source, "read"):
        # uploads may not advertise binary mode; hand pandas a real buffer
        data = source.read()
        source = io.BytesIO(data.encode("utf-8") if isinstance(data, str) else data)
    try:
        if name.endswith(".csv"):
            df = pd.read_csv(source, header=None, dtype=str, keep_default_na=False)
        else:
            df = pd.read_excel(source, sheet_name=0, header=None, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        return []
    except Exception as e:
        # corrupt workbooks surface as zipfile, xlrd or pandas option errors
        raise IngestError(f"Failed to parse data file: {e}") from e
    return df.fillna("").astype(str).values.tolist()


# ------------------------------- public API --------------------------------- #

def records_from_rows(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> List[Record]:
    """Map a header row plus data rows to Records (empty rows dropped)."""
    headers = [str(h or "").strip() for h in headers]
    delivery_idx = find_column_index(headers, DELIVERY_NAMES)
    ship_idx = find_column_index(headers, SHIP_METHOD_NAMES)
    country_idx = find_column_index(headers, COUNTRY_NAMES)
    customer_idx = find_column_index(headers, CUSTOMER_NAMES)
    pending_idx = find_column_index(headers, OUTBOUND_PENDING_NAMES)

    if -1 in (delivery_idx, ship_idx, country_idx):
        raise IngestError("Required columns not found. Expected: Delivery, Ship Method, Country")

    out: List[Record] = []
    for row in rows:
        if not row or not any(str(v).strip() for v in row):
            continue
        extra = {h: _cell(row, i) for i, h in enumerate(headers) if h}
        out.append(Record(
            delivery=_cell(row, delivery_idx),
            ship_method=_cell(row, ship_idx),
            country=_cell(row, country_idx),
            customer=_cell(row, customer_idx),
            outbound_pending_lines=_cell(row, pending_idx) or "0",
            fields=extra,
        ))
    return out


def parse_excel_file(source: Source) -> List[Record]:
    """
    Read the first sheet of a workbook (or a CSV) into Records.
    Raises IngestError for an empty file, missing required columns, or an
    unreadable file.
    """
    grid = _read_grid(source)
    if not grid:
        raise IngestError("File is empty")
    records = records_from_rows(grid[0], grid[1:])
    logger.info("ingested %d rows from %s", len(records), _source_name(source) or "<upload>")
    return records
