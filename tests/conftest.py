import pathlib
import sys

import pytest

p = str(pathlib.Path(__file__).resolve().parents[1])
sys.path.insert(0, p) if p not in sys.path else None

from taxcompare.config import get_settings  # noqa: E402

_SETTINGS_ENV = (
    "DEFAULT_EXPENSE_DRAW",
    "TAX_JURISDICTION",
    "BUILD_VERSION",
    "BUILD_SHA",
    "LOG_DIR",
    "TELEMETRY_LOG_ENABLED",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
