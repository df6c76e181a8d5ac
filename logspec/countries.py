# logspec/countries.py
# -----------------------------------------------------------------------------
# Country-token extraction for the "countries" cell of a matrix line.
#
# Cell text is free-form, e.g.:
#   "GB|CH|NO"        "|GB|CH|NO|"        "BA/MK/RS"
#   "Within EU"       "Outside of EU"     "GB, plus Outside of EU shipments"
#   "NC Import Only"  ""
#
# The result is a frozenset of uppercase codes. "Within EU" is materialized
# into every bloc code; "Outside of EU" becomes the OUTSIDE_EU sentinel and is
# resolved at match time (see filter.py).
# -----------------------------------------------------------------------------

from __future__ import annotations

import csv
import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import FrozenSet, Iterable, Optional, Set

from . import config
from .regions import EU_COUNTRIES

logger = logging.getLogger(__name__)

OUTSIDE_EU = "__OUTSIDE_EU__"

_CODE_RE = re.compile(r"(?<![A-Za-z])([A-Z]{2,3})(?![A-Za-z])")
_LIST_SPLIT_RE = re.compile(r"[|/]")
_LIST_ITEM_RE = re.compile(r"^[A-Z]{2,3}$")

# ------------------------------- deny-list ---------------------------------- #

@lru_cache(maxsize=None)
def load_denylist(path: Optional[Path] = None) -> FrozenSet[str]:
    """
    Built-in deny-list plus any tokens from a CSV with columns: token,notes.
    A missing CSV leaves the built-in set as is.
    """
    path = config.DENYLIST_CSV if path is None else Path(path)
    tokens: Set[str] = set(config.DEFAULT_DENYLIST)
    if not path.exists():
        return frozenset(tokens)
    with path.open("r", encoding="utf-8", newline="") as f:
        for row in csv.DictReader(f):
            token = (row.get("token") or "").strip().upper()
            if token:
                tokens.add(token)
    logger.debug("deny-list loaded from %s: %s", path, sorted(tokens))
    return frozenset(tokens)


# ------------------------------- extraction --------------------------------- #

def _candidate_codes(text: str) -> Iterable[str]:
    # maximal 2-3 uppercase runs bounded by non-letters
    for m in _CODE_RE.finditer(text):
        yield m.group(1)
    # explicit pipe / slash lists
    for piece in _LIST_SPLIT_RE.split(text):
        piece = piece.strip()
        if _LIST_ITEM_RE.match(piece):
            yield piece


def parse_countries(text: Optional[str], denylist: Optional[Iterable[str]] = None) -> FrozenSet[str]:
    """
    Parse a matrix countries cell into a set of codes (plus maybe OUTSIDE_EU).

    Region phrases and literal codes are not exclusive: "GB, Within EU" yields
    GB together with the whole bloc. Region phrases are removed before the code
    scan so the "EU" inside them is never taken for a code.

    Empty or whitespace-only text gives an empty set.
    """
    if not text or not text.strip():
        return frozenset()

    deny = load_denylist() if denylist is None else frozenset(denylist)
    out: Set[str] = set()

    rest = text
    if config.WITHIN_REGION_PHRASE in text:
        out.update(EU_COUNTRIES)
        rest = rest.replace(config.WITHIN_REGION_PHRASE, " ")
    if config.OUTSIDE_REGION_PHRASE in text:
        out.add(OUTSIDE_EU)
        rest = rest.replace(config.OUTSIDE_REGION_PHRASE, " ")

    out.update(code for code in _candidate_codes(rest) if code not in deny)
    return frozenset(out)
