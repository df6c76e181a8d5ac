# logspec/filter.py
# -----------------------------------------------------------------------------
# Membership filter: keep the rows whose ship method and country satisfy the
# active RuleLookup.
#
# A row is a logspec line if:
#   1. its ship method is a key of the lookup with a non-empty country set, and
#   2. its country is listed in that set, or the set holds OUTSIDE_EU and the
#      country is outside the EU bloc.
# "Within EU" needs no check here: the parser already listed every bloc code.
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from .countries import OUTSIDE_EU
from .ingest import Record
from .matrix import RuleLookup
from .regions import is_outside_reference_region


def matches(ship_method: Optional[str], country: Optional[str], lookup: RuleLookup) -> bool:
    ship_method = (ship_method or "").strip()
    country = (country or "").strip()
    if not ship_method or not country:
        return False

    allowed = lookup.get(ship_method)
    if not allowed:
        return False

    if country.upper() in allowed:
        return True
    return OUTSIDE_EU in allowed and is_outside_reference_region(country)


def is_logspec_line(record: Record, lookup: RuleLookup) -> bool:
    return matches(record.ship_method, record.country, lookup)


def filter_logspec_lines(records: Iterable[Record], lookup: RuleLookup) -> List[Record]:
    """Logspec rows in input order."""
    return [r for r in records if is_logspec_line(r, lookup)]


# ------------------------------- result view -------------------------------- #

@dataclass(frozen=True)
class FilterResult:
    rows: List[Record]
    total: int

    @property
    def count(self) -> int:
        return len(self.rows)

    def summary(self) -> str:
        plural = "" if self.count == 1 else "s"
        return f"Found {self.count} logspec line{plural} out of {self.total} total"

    def to_frame(self, columns: Optional[Sequence[str]] = None) -> pd.DataFrame:
        """
        Rows as a DataFrame of their source columns. With `columns`, keep only
        those (in that order); unknown names are ignored.
        """
        df = pd.DataFrame([r.as_dict() for r in self.rows])
        if columns:
            keep = [c for c in columns if c in df.columns]
            df = df[keep] if keep else pd.DataFrame(index=df.index)
        return df


def run_filter(records: Sequence[Record], lookup: RuleLookup) -> FilterResult:
    return FilterResult(rows=filter_logspec_lines(records, lookup), total=len(records))

