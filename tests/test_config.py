"""
Tests for configuration models and env resolution.
"""
import pytest

from artifactory_client import AuthConfig, ClientConfig, ConfigError, TimeoutConfig
from artifactory_client.config import normalize_timeout
from artifactory_client.env import resolve, resolve_bool, resolve_float


def test_base_url_gets_single_trailing_slash():
    assert ClientConfig(base_url="https://a.example.com/artifactory").base_url == "https://a.example.com/artifactory/"
    assert ClientConfig(base_url="https://a.example.com/artifactory//").base_url == "https://a.example.com/artifactory/"


def test_base_url_requires_http_scheme():
    with pytest.raises(ValueError):
        ClientConfig(base_url="ftp://a.example.com")


def test_config_is_immutable():
    config = ClientConfig(base_url="https://a.example.com")
    with pytest.raises(ValueError):
        config.base_url = "https://b.example.com/"


@pytest.mark.parametrize("kwargs", [
    {"type": "basic", "username": "admin"},
    {"type": "api_key"},
    {"type": "bearer"},
])
def test_auth_config_requires_fields(kwargs):
    with pytest.raises(ValueError):
        AuthConfig(**kwargs)


def test_auth_secret_not_in_repr():
    auth = AuthConfig(type="bearer", token="super-secret")
    assert "super-secret" not in repr(auth)


def test_normalize_timeout():
    assert normalize_timeout(None) == TimeoutConfig()
    t = normalize_timeout(3)
    assert (t.connect, t.read, t.write) == (3.0, 3.0, 3.0)


def test_resolve_precedence(monkeypatch):
    monkeypatch.setenv("TEST_ART_VAR", "env_val")
    assert resolve("arg", "TEST_ART_VAR", {"k": "cfg"}, "k", "default") == "arg"
    assert resolve(None, "TEST_ART_VAR", {"k": "cfg"}, "k", "default") == "env_val"
    monkeypatch.delenv("TEST_ART_VAR")
    assert resolve(None, "TEST_ART_VAR", {"k": "cfg"}, "k", "default") == "cfg"
    assert resolve(None, "TEST_ART_VAR", {}, "k", "default") == "default"


def test_resolve_bool_and_float():
    assert resolve_bool("off", [], {}, None, True) is False
    assert resolve_bool("yes", [], {}, None, False) is True
    assert resolve_float("2.5", [], {}, None, None) == 2.5
    assert resolve_float(None, [], {}, None, None) is None


def test_resolve_rejects_unparsable_values():
    with pytest.raises(ConfigError, match="number"):
        resolve_float("nope", [], {}, None, 1.0)
    with pytest.raises(ConfigError, match="boolean"):
        resolve_bool("maybe", [], {}, None, True)



@pytest.fixture
def clean_env(monkeypatch):
    for key in (
        "ARTIFACTORY_URL", "ARTIFACTORY_USER", "ARTIFACTORY_PASSWD", "ARTIFACTORY_PASSWORD",
        "ARTIFACTORY_API_KEY", "ARTIFACTORY_TOKEN", "ARTIFACTORY_ACCESS_TOKEN",
        "ARTIFACTORY_TIMEOUT", "ARTIFACTORY_VERIFY_SSL",
    ):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_from_env_basic(clean_env):
    clean_env.setenv("ARTIFACTORY_URL", "https://art.example.com/artifactory")
    clean_env.setenv("ARTIFACTORY_USER", "admin")
    clean_env.setenv("ARTIFACTORY_PASSWD", "password")
    clean_env.setenv("ARTIFACTORY_TIMEOUT", "12")
    clean_env.setenv("ARTIFACTORY_VERIFY_SSL", "false")

    config = ClientConfig.from_env()

    assert config.base_url == "https://art.example.com/artifactory/"
    assert config.auth.type == "basic"
    assert config.auth.username == "admin"
    assert config.timeout == 12.0
    assert config.verify_ssl is False


def test_from_env_prefers_api_key(clean_env):
    clean_env.setenv("ARTIFACTORY_URL", "https://art.example.com")
    clean_env.setenv("ARTIFACTORY_API_KEY", "key")
    clean_env.setenv("ARTIFACTORY_TOKEN", "token")
    assert ClientConfig.from_env().auth.type == "api_key"


def test_from_env_without_credentials(clean_env):
    config = ClientConfig.from_env(base_url="https://art.example.com")
    assert config.auth is None


def test_from_env_missing_url(clean_env):
    with pytest.raises(ConfigError):
        ClientConfig.from_env()


def test_from_env_incomplete_basic(clean_env):
    clean_env.setenv("ARTIFACTORY_USER", "admin")
    with pytest.raises(ConfigError):
        ClientConfig.from_env(base_url="https://art.example.com")


def test_from_env_invalid_timeout(clean_env):
    clean_env.setenv("ARTIFACTORY_TIMEOUT", "abc")
    with pytest.raises(ConfigError, match="ARTIFACTORY_TIMEOUT"):
        ClientConfig.from_env(base_url="https://art.example.com")
