"""
Pytest configuration and shared fixtures
"""
from pathlib import Path

import pytest

from logspec.countries import load_denylist
from logspec.ingest import Record

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@pytest.fixture(autouse=True)
def _fresh_denylist():
    """Deny-list is cached per path; start every test from a clean cache"""
    load_denylist.cache_clear()
    yield
    load_denylist.cache_clear()


@pytest.fixture
def default_matrix_path():
    return DATA_DIR / "default_matrix.txt"


@pytest.fixture
def matrix_text():
    """Small matrix covering literal lists, regions, and an empty rule"""
    return "\n".join([
        "LogSpec\tFEDEX_GROUND\tFR|DE",
        "LogSpec\tDHL_EXPRESS_WW\tOutside of EU",
        "LogSpec\tDHL_EXPRESS_EU\tWithin EU",
        "LogSpec\tCARRIER_AIR_STD\tGB|IE",
        "LogSpec\tCARRIER_AIR_UD_STD\t",
        "Exception\tFEDEX_GROUND\tUS",
        "",
    ])


@pytest.fixture
def make_record():
    def _create(ship_method, country, delivery="80001", **fields):
        return Record(delivery=delivery, ship_method=ship_method, country=country, fields=fields)
    return _create
