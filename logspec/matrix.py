# logspec/matrix.py
# -----------------------------------------------------------------------------
# Logspec matrix: rule-table text -> RuleLookup (ship method -> country set).
#
# Format (tab-separated, one rule per line, extra fields ignored):
#   LogSpec<TAB>FEDEX_GROUND<TAB>FR|DE
#   LogSpec<TAB>CARRIER_AIR_STD<TAB>Within EU
#   LogSpec<TAB>CARRIER_AIR_UD_STD<TAB>
#
# - Lines whose tag is not "LogSpec" (any case), lines with fewer than three
#   fields and blank lines are skipped silently; the table is hand-maintained.
# - Repeated ship methods union their countries.
# - Ship methods left without countries are filled from similar ship methods
#   (see similarity.py). Keys that stay empty are kept and match nothing.
#
# Example usage:
#   lookup = build_lookup(text)
#   lookup.get("FEDEX_GROUND")   # -> frozenset({"FR", "DE"})
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterator, List, Mapping, Optional, Set, Tuple

from . import config
from .countries import OUTSIDE_EU, parse_countries
from .similarity import SimilarityStrategy, default_strategy, infer_missing

logger = logging.getLogger(__name__)

# ------------------------------- data classes -------------------------------- #

@dataclass(frozen=True)
class RuleEntry:
    ship_method: str
    countries_text: str


class RuleLookup(Mapping[str, FrozenSet[str]]):
    """
    Read-only mapping ShipMethodKey -> country set, built once per load.

    Besides the mapping itself:
      blank_keys : keys with at least one rule line whose countries cell was empty
      inferred   : key -> source keys its countries were borrowed from
    """

    def __init__(
        self,
        sets: Mapping[str, FrozenSet[str]],
        blank_keys: FrozenSet[str] = frozenset(),
        inferred: Optional[Mapping[str, Tuple[str, ...]]] = None,
    ):
        self._sets = MappingProxyType(dict(sets))
        self.blank_keys = frozenset(blank_keys)
        self.inferred = MappingProxyType(dict(inferred or {}))

    def __getitem__(self, key: str) -> FrozenSet[str]:
        return self._sets[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._sets)

    def __len__(self) -> int:
        return len(self._sets)

    def __repr__(self) -> str:
        return f"RuleLookup({len(self)} ship methods, {len(self.inferred)} inferred)"

    def describe(self) -> List[str]:
        """One human-readable line per ship method, sorted by key."""
        lines = []
        for key in sorted(self._sets):
            codes = sorted(c for c in self._sets[key] if c != OUTSIDE_EU)
            parts = list(codes)
            if OUTSIDE_EU in self._sets[key]:
                parts.append("Outside of EU")
            shown = "|".join(parts) if parts else "(none)"
            note = f"  [inferred from {', '.join(self.inferred[key])}]" if key in self.inferred else ""
            lines.append(f"{key}: {shown}{note}")
        return lines


# --------------------------------- parsing ---------------------------------- #

def parse_rule_line(line: str) -> Optional[RuleEntry]:
    """Return the RuleEntry for a matrix line, or None if the line is not a rule."""
    if not line.strip():
        return None
    # split before trimming: a trailing tab still marks an empty countries field
    parts = line.rstrip("\r\n").split(config.FIELD_DELIMITER)
    if len(parts) < config.MIN_FIELDS:
        return None
    if parts[0].strip().lower() != config.RULE_TAG.lower():
        return None
    ship_method = parts[1].strip()
    if not ship_method:
        return None
    return RuleEntry(ship_method=ship_method, countries_text=parts[2].strip())


def build_lookup(
    matrix_text: str,
    strategy: Optional[SimilarityStrategy] = None,
) -> RuleLookup:
    """
    Parse matrix text into a RuleLookup. Never raises on content: malformed
    lines are dropped and an empty or rule-less table gives an empty lookup.

    Parameters
    ----------
    matrix_text : str
        Whole rule table.
    strategy : Optional[SimilarityStrategy]
        Inference strategy for ship methods without countries; defaults to
        similarity.default_strategy(). Pass NoInference() to disable.
    """
    sets: Dict[str, Set[str]] = {}
    blank: Set[str] = set()
    skipped = 0

    for lineno, line in enumerate(matrix_text.split("\n"), start=1):
        entry = parse_rule_line(line)
        if entry is None:
            if line.strip():
                skipped += 1
                logger.debug("matrix line %d skipped: %r", lineno, line[:80])
            continue
        if not entry.countries_text:
            blank.add(entry.ship_method)
        sets.setdefault(entry.ship_method, set()).update(parse_countries(entry.countries_text))

    frozen = {k: frozenset(v) for k, v in sets.items()}
    resolved, inferred = infer_missing(frozen, strategy if strategy is not None else default_strategy())

    still_empty = [k for k, v in resolved.items() if not v]
    logger.info(
        "matrix parsed: %d ship methods, %d inferred, %d without countries, %d lines skipped",
        len(resolved), len(inferred), len(still_empty), skipped,
    )
    return RuleLookup(resolved, blank_keys=frozenset(blank), inferred=inferred)
