import pytest

from pi.table.config import STYLE_ENV, WIDTH_ENV


@pytest.fixture(autouse=True)
def clean_table_env(monkeypatch):
    """Keep the caller's PI_TABLE_* settings out of rendered output."""
    monkeypatch.delenv(WIDTH_ENV, raising=False)
    monkeypatch.delenv(STYLE_ENV, raising=False)
