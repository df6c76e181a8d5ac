# logspec/regions.py
# -----------------------------------------------------------------------------
# Reference region ("EU bloc") membership for country codes.
# The bloc is the EU members plus CH and NO, which the logistics matrix
# conventionally bundles with them.
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import FrozenSet

EU_COUNTRIES: FrozenSet[str] = frozenset({
    "AT",  # Austria
    "BE",  # Belgium
    "BG",  # Bulgaria
    "HR",  # Croatia
    "CY",  # Cyprus
    "CZ",  # Czech Republic
    "DK",  # Denmark
    "EE",  # Estonia
    "FI",  # Finland
    "FR",  # France
    "DE",  # Germany
    "GR",  # Greece
    "HU",  # Hungary
    "IE",  # Ireland
    "IT",  # Italy
    "LV",  # Latvia
    "LT",  # Lithuania
    "LU",  # Luxembourg
    "MT",  # Malta
    "NL",  # Netherlands
    "PL",  # Poland
    "PT",  # Portugal
    "RO",  # Romania
    "SK",  # Slovakia
    "SI",  # Slovenia
    "ES",  # Spain
    "SE",  # Sweden
    "CH",  # Switzerland (not EU but grouped with it)
    "NO",  # Norway (not EU but grouped with it)
})


def is_in_reference_region(code: str) -> bool:
    """True if `code` (any case, surrounding spaces ignored) is in the EU bloc."""
    return code.strip().upper() in EU_COUNTRIES


def is_outside_reference_region(code: str) -> bool:
    return not is_in_reference_region(code)
