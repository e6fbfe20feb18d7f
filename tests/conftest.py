import pytest

from safe_path.config import SafePathConfig, default_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep SAFE_PATH_* settings from the host out of every test."""
    for key in ("SAFE_PATH_FLAVOR", "SAFE_PATH_EMIT_EVENTS", "SAFE_PATH_MAX_PATH_LENGTH"):
        monkeypatch.delenv(key, raising=False)
    default_config.cache_clear()
    yield
    default_config.cache_clear()


@pytest.fixture
def posix_config():
    return SafePathConfig(flavor="posix", emit_events=False)


@pytest.fixture
def windows_config():
    return SafePathConfig(flavor="windows", emit_events=False)
