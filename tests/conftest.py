import pytest

from hostargs.hostargs_config import CONFIG_ENV, DEBUG_ENV, reset_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    # Each test starts from the built-in defaults.
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    monkeypatch.delenv(DEBUG_ENV, raising=False)
    reset_settings()
    yield
    reset_settings()
