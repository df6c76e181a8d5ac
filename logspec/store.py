# logspec/store.py
# -----------------------------------------------------------------------------
# The one active RuleLookup of an application (CLI run, web process).
# - Lazily loads the bundled default matrix on first use
# - Every load builds a fresh lookup and swaps it in; old lookups are never
#   mutated, so a filter pass holding a reference always sees one table
# - A source that cannot be read raises MatrixLoadError and keeps the
#   previous lookup active
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from . import config
from .matrix import RuleLookup, build_lookup
from .similarity import SimilarityStrategy

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "default"


class MatrixLoadError(OSError):
    """The rule-table source could not be read or decoded."""


def decode_matrix(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise MatrixLoadError(f"Matrix file is not valid UTF-8 text: {e}") from e


def read_matrix_file(path: Union[str, Path]) -> str:
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise MatrixLoadError(f"Failed to read matrix file {path}: {e}") from e
    return decode_matrix(data)


class MatrixStore:
    """Holds the active lookup and where it came from."""

    def __init__(self, default_path: Optional[Path] = None,
                 strategy: Optional[SimilarityStrategy] = None):
        self.default_path = Path(default_path) if default_path else config.DEFAULT_MATRIX_PATH
        self.strategy = strategy
        self._lookup: Optional[RuleLookup] = None
        self._source: Optional[str] = None

    @property
    def current(self) -> RuleLookup:
        if self._lookup is None:
            self.reset_to_default()
        return self._lookup

    @property
    def source(self) -> str:
        if self._source is None:
            self.reset_to_default()
        return self._source

    @property
    def loaded(self) -> bool:
        return self._lookup is not None

    def load_text(self, text: str, source: str) -> RuleLookup:
        lookup = build_lookup(text, strategy=self.strategy)
        self._lookup, self._source = lookup, source
        logger.info("matrix '%s' active: %d ship methods", source, len(lookup))
        return lookup

    def load_bytes(self, data: bytes, source: str) -> RuleLookup:
        return self.load_text(decode_matrix(data), source)

    def load_file(self, path: Union[str, Path]) -> RuleLookup:
        return self.load_text(read_matrix_file(path), Path(path).name)

    def reset_to_default(self) -> RuleLookup:
        try:
            text = read_matrix_file(self.default_path)
        except MatrixLoadError as e:
            raise MatrixLoadError(f"Failed to load default matrix: {e}") from e
        return self.load_text(text, DEFAULT_SOURCE)

    def summary(self) -> str:
        n = len(self.current)
        return f"Matrix loaded: {n} ship method{'' if n == 1 else 's'} configured ({self.source})"
