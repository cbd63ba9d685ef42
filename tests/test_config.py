"""UnomiConfig.from_env: required variables are fatal, the rest default."""

import dataclasses

import pytest

from core.config import DEFAULT_BASE_URL, DEFAULT_SCOPE, DEFAULT_SOURCE_ID, UnomiConfig
from core.errors import ConfigurationError

REQUIRED = {
    "UNOMI_USERNAME": "karaf",
    "UNOMI_PASSWORD": "secret",
    "UNOMI_KEY": "peer-key",
    "UNOMI_PROFILE_ID": "fallback",
}


def test_defaults():
    config = UnomiConfig.from_env(REQUIRED)
    assert config.base_url == DEFAULT_BASE_URL
    assert config.source_id == DEFAULT_SOURCE_ID
    assert config.default_scope == DEFAULT_SCOPE
    assert config.email is None
    assert config.log_level == "INFO"
    assert config.auth == ("karaf", "secret")
    assert config.headers == {"X-Unomi-Peer": "peer-key"}


def test_overrides():
    env = dict(
        REQUIRED,
        UNOMI_BASE_URL="https://cdp.example.com/",
        UNOMI_SOURCE_ID="my-desktop",
        UNOMI_EMAIL="ada@example.com",
        UNOMI_LOG_LEVEL="debug",
    )
    config = UnomiConfig.from_env(env)
    assert config.base_url == "https://cdp.example.com"
    assert config.source_id == "my-desktop"
    assert config.email == "ada@example.com"
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("missing", sorted(REQUIRED))
def test_missing_required_is_fatal(missing):
    env = {k: v for k, v in REQUIRED.items() if k != missing}
    with pytest.raises(ConfigurationError):
        UnomiConfig.from_env(env)


def test_empty_string_counts_as_missing():
    with pytest.raises(ConfigurationError, match="UNOMI_KEY"):
        UnomiConfig.from_env(dict(REQUIRED, UNOMI_KEY=""))


def test_empty_email_disables_lookup():
    assert UnomiConfig.from_env(dict(REQUIRED, UNOMI_EMAIL="")).email is None


def test_reads_os_environ(monkeypatch):
    for name, value in REQUIRED.items():
        monkeypatch.setenv(name, value)
    monkeypatch.setenv("UNOMI_PROFILE_ID", "from-os-env")
    assert UnomiConfig.from_env().profile_id == "from-os-env"


def test_config_is_frozen():
    config = UnomiConfig.from_env(REQUIRED)
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.profile_id = "other"
