from datetime import date

import pytest

import flicker.date_utils as date_utils
import flicker.store as store_module

FIXED_TODAY = date(2024, 6, 15)

_ENV_KEYS = [
    "FLICKER_MODE",
    "FLICKER_VALUE",
    "FLICKER_START_DATE",
    "FLICKER_END_DATE",
    "FLICKER_FIRST_DAY_OF_WEEK",
    "FLICKER_VIEW_COUNT",
    "FLICKER_SCROLL_DIRECTION",
    "FLICKER_SELECTION_COUNT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def fixed_today(monkeypatch):
    monkeypatch.setattr(date_utils, "today", lambda: FIXED_TODAY)
    monkeypatch.setattr(store_module, "today", lambda: FIXED_TODAY)
    return FIXED_TODAY
