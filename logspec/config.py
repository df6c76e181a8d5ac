# logspec/config.py
# -----------------------------------------------------------------------------
# Configuration for the logspec rule engine.
# - Rule-table format constants (tag literal, delimiter, region phrases)
# - Country-token deny-list (built-in + optional CSV extension in data/)
# - Ship-method similarity tables used by the inference pass
# - Data paths (a couple overridable via environment variables)
# -----------------------------------------------------------------------------

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Tuple

# ------------------------------- paths -------------------------------------- #

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"

DEFAULT_MATRIX_PATH = Path(os.getenv("LOGSPEC_DEFAULT_MATRIX", str(DATA_DIR / "default_matrix.txt")))
DENYLIST_CSV = Path(os.getenv("LOGSPEC_DENYLIST", str(DATA_DIR / "country_denylist.csv")))

# ----------------------------- rule table ----------------------------------- #

RULE_TAG = "LogSpec"            # first field, compared case-insensitively
FIELD_DELIMITER = "\t"
MIN_FIELDS = 3                  # tag, ship method, countries

WITHIN_REGION_PHRASE = "Within EU"
OUTSIDE_REGION_PHRASE = "Outside of EU"

# Tokens shaped like country codes that never are one in the matrix text.
DEFAULT_DENYLIST = frozenset({"EA", "XY", "NC"})

# ---------------------------- inference pass -------------------------------- #

KEY_SEPARATOR = "_"
PREFIX_MATCH_MIN_COUNTRIES = 5

# Optional ship-method segments removed before comparing two keys.
# Each pattern is anchored on the separator so "_UD" never eats "_UDP".
VARIANT_STRIP_PATTERNS: List[str] = [
    r"_LIC(?:ENSED?)?(?=_|$)",      # license markers
    r"_NOLIC(?=_|$)",
    r"_UD(?=_|$)",                  # unaccompanied description
    r"_HAZ(?:MAT)?(?=_|$)",         # hazard variants
    r"_NONHAZ(?=_|$)",
    r"_(?:DEFAULT|DFLT|DEF)(?=_|$)",  # default variants
]

# Hazard categories folded onto their base category before comparison.
HAZARD_FOLDS: List[Tuple[str, str]] = [
    (r"_DG(?:LQ|EQ|\d+)(?=_|$)", "_DG"),
    (r"_DG_(?:LQ|EQ|\d+)(?=_|$)", "_DG"),
]
