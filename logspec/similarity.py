# logspec/similarity.py
# -----------------------------------------------------------------------------
# Ship-method similarity used to fill in matrix rules that carry no countries.
#
# Matrix authors often list a variant of a ship method (license, "UD",
# hazard or default variants) with an empty countries cell, meaning "same as
# the base method". The strategies here guess which other keys count as
# "the same method". It is a heuristic: false positives and misses are
# expected and accepted.
#
# Strategies:
#   * NormalizedVariantMatch - equal after stripping variant markers
#   * SharedPrefixMatch      - shares all-but-last segment with a broad rule
#   * CompositeSimilarity    - any of several strategies
#   * NoInference            - never similar (disables the pass)
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import re
from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple

from . import config

logger = logging.getLogger(__name__)

CountrySets = Mapping[str, FrozenSet[str]]


class SimilarityStrategy:
    """Base class: decides whether `other` is similar to the empty-rule `target`."""

    name = "base"

    def is_similar(self, target: str, other: str, sets: CountrySets) -> bool:
        raise NotImplementedError


class NormalizedVariantMatch(SimilarityStrategy):
    name = "normalized-variant"

    def __init__(
        self,
        strip_patterns: Optional[Sequence[str]] = None,
        hazard_folds: Optional[Sequence[Tuple[str, str]]] = None,
    ):
        strip_patterns = config.VARIANT_STRIP_PATTERNS if strip_patterns is None else strip_patterns
        hazard_folds = config.HAZARD_FOLDS if hazard_folds is None else hazard_folds
        self._strip = [re.compile(p, re.IGNORECASE) for p in strip_patterns]
        self._folds = [(re.compile(p, re.IGNORECASE), repl) for p, repl in hazard_folds]
        self._cache: Dict[str, str] = {}

    def normalize(self, key: str) -> str:
        """
        Canonical form of a ship-method key.
        Example: "CARRIER_AIR_UD_STD" -> "carrier_air_std"
        """
        hit = self._cache.get(key)
        if hit is not None:
            return hit
        s = key
        for pat, repl in self._folds:
            s = pat.sub(repl, s)
        for pat in self._strip:
            s = pat.sub("", s)
        s = s.lower()
        self._cache[key] = s
        return s

    def is_similar(self, target: str, other: str, sets: CountrySets) -> bool:
        return self.normalize(target) == self.normalize(other)


class SharedPrefixMatch(SimilarityStrategy):
    name = "shared-prefix"

    def __init__(self, separator: str = config.KEY_SEPARATOR,
                 min_countries: int = config.PREFIX_MATCH_MIN_COUNTRIES):
        self.separator = separator
        self.min_countries = int(min_countries)

    def base_prefix(self, key: str) -> Optional[str]:
        parts = key.split(self.separator)
        if len(parts) <= 2:
            return None
        return self.separator.join(parts[:-1]) + self.separator

    def is_similar(self, target: str, other: str, sets: CountrySets) -> bool:
        prefix = self.base_prefix(target)
        if prefix is None or not other.startswith(prefix):
            return False
        # only borrow from a broad sibling, never a narrow one
        return len(sets.get(other, ())) >= self.min_countries


class CompositeSimilarity(SimilarityStrategy):
    name = "composite"

    def __init__(self, strategies: Sequence[SimilarityStrategy]):
        self.strategies = list(strategies)

    def is_similar(self, target: str, other: str, sets: CountrySets) -> bool:
        return any(s.is_similar(target, other, sets) for s in self.strategies)


class NoInference(SimilarityStrategy):
    name = "none"

    def is_similar(self, target: str, other: str, sets: CountrySets) -> bool:
        return False


def default_strategy() -> SimilarityStrategy:
    return CompositeSimilarity([NormalizedVariantMatch(), SharedPrefixMatch()])


# ------------------------------ inference pass ------------------------------ #

def infer_missing(
    sets: CountrySets,
    strategy: Optional[SimilarityStrategy] = None,
) -> Tuple[Dict[str, FrozenSet[str]], Dict[str, Tuple[str, ...]]]:
    """
    Fill empty country sets from similar keys. Single pass, non-transitive:
    sources are read from the input `sets`, so a key filled here never feeds
    another key in the same pass.

    Returns (resolved sets, {filled key: source keys}).
    """
    strategy = default_strategy() if strategy is None else strategy
    resolved: Dict[str, FrozenSet[str]] = dict(sets)
    inferred: Dict[str, Tuple[str, ...]] = {}

    for target, countries in sets.items():
        if countries:
            continue
        sources: List[str] = []
        merged = set()
        for other, other_countries in sets.items():
            if other == target or not other_countries:
                continue
            if strategy.is_similar(target, other, sets):
                sources.append(other)
                merged.update(other_countries)
        if sources:
            resolved[target] = frozenset(merged)
            inferred[target] = tuple(sources)
            logger.info("inferred countries for %s from %s (%s)", target, ", ".join(sources), strategy.name)
    return resolved, inferred
