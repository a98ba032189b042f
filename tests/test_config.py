import pytest

from jobclip.config import DEFAULT_FETCH_TIMEOUT, DEFAULT_STORE_PATH, Settings, get_env_presence

ENV_VARS = [
    "JOBCLIP_ENV",
    "JOBCLIP_LOG_LEVEL",
    "JOBCLIP_STORE_PATH",
    "JOBCLIP_FETCH_TIMEOUT",
    "JOBCLIP_USER_AGENT",
]


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    yield


def test_defaults():
    assert Settings.env() == "production"
    assert not Settings.is_dev()
    assert Settings.log_level() == "INFO"
    assert Settings.store_path() == DEFAULT_STORE_PATH
    assert Settings.fetch_timeout() == DEFAULT_FETCH_TIMEOUT


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("JOBCLIP_ENV", "DEV")
    monkeypatch.setenv("JOBCLIP_LOG_LEVEL", "debug")
    monkeypatch.setenv("JOBCLIP_FETCH_TIMEOUT", "5")
    assert Settings.is_dev()
    assert Settings.log_level() == "DEBUG"
    assert Settings.fetch_timeout() == 5.0


def test_fetch_timeout_invalid_or_too_small(monkeypatch):
    monkeypatch.setenv("JOBCLIP_FETCH_TIMEOUT", "soon")
    assert Settings.fetch_timeout() == DEFAULT_FETCH_TIMEOUT
    monkeypatch.setenv("JOBCLIP_FETCH_TIMEOUT", "0.1")
    assert Settings.fetch_timeout() == 1.0


def test_user_agent_override(monkeypatch):
    monkeypatch.setenv("JOBCLIP_USER_AGENT", "tester/1.0")
    assert Settings.user_agent() == "tester/1.0"
    assert Settings.user_agent("explicit/2.0") == "explicit/2.0"


def test_env_presence(monkeypatch):
    monkeypatch.setenv("JOBCLIP_STORE_PATH", "/tmp/store.json")
    presence = get_env_presence()
    assert presence["JOBCLIP_STORE_PATH"] is True
    assert presence["JOBCLIP_ENV"] is False
