"""
Configuration models and validation for artifactory_client.
"""
from typing import Any, Dict, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    ValidationError,
    field_validator,
    model_validator,
)

from . import env
from .exceptions import ConfigError
from .types import AuthType

# Constants
DEFAULT_TIMEOUT_CONNECT = 5.0
DEFAULT_TIMEOUT_READ = 60.0
DEFAULT_TIMEOUT_WRITE = 60.0
DEFAULT_CHUNK_SIZE = 64 * 1024
DEFAULT_USER_AGENT = "artifactory-client/0.1.0"


class TimeoutConfig(BaseModel):
    """Timeout configuration."""
    model_config = ConfigDict(frozen=True)

    connect: float = DEFAULT_TIMEOUT_CONNECT
    read: float = DEFAULT_TIMEOUT_READ
    write: float = DEFAULT_TIMEOUT_WRITE
    pool: Optional[float] = None


class AuthConfig(BaseModel):
    """Static credentials attached to every request.

    - ``basic``: ``username`` and ``password``
    - ``api_key``: ``api_key``, sent as ``X-JFrog-Art-Api``
    - ``bearer``: ``token`` (access token)
    """
    model_config = ConfigDict(frozen=True)

    type: AuthType
    username: Optional[str] = None
    password: Optional[SecretStr] = None
    api_key: Optional[SecretStr] = None
    token: Optional[SecretStr] = None

    @model_validator(mode="after")
    def validate_auth_config(self) -> "AuthConfig":
        """Validate that required fields are present for the selected auth type."""
        t = self.type

        if t == "basic" and not (self.username and self.password):
            raise ValueError("Basic auth requires 'username' and 'password'")

        if t == "api_key" and not self.api_key:
            raise ValueError("api_key auth requires 'api_key'")

        if t == "bearer" and not self.token:
            raise ValueError("bearer auth requires 'token'")

        return self


class ClientConfig(BaseModel):
    """Client configuration. Immutable once built."""
    model_config = ConfigDict(frozen=True)

    base_url: str
    auth: Optional[AuthConfig] = None
    timeout: Optional[Union[float, TimeoutConfig]] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    verify_ssl: bool = True
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)
    user_agent: str = DEFAULT_USER_AGENT

    @field_validator("base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        # Always exactly one trailing slash so relative paths resolve beneath it
        return v.rstrip("/") + "/"

    @classmethod
    def from_env(
        cls,
        base_url: Optional[str] = None,
        auth: Optional[AuthConfig] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> "ClientConfig":
        """Build a config from arguments, ``ARTIFACTORY_*`` variables and an override dict.

        Raises:
            ConfigError: when no base URL can be resolved or a value is invalid
        """
        overrides = overrides or {}
        url = env.resolve(base_url, env.ENV_URL, overrides, "base_url", None)
        if not url:
            raise ConfigError(f"base_url is required (argument or {env.ENV_URL})")

        if auth is None:
            auth = overrides.get("auth")
        try:
            if auth is None:
                auth = _auth_from_env(overrides)
            return cls(
                base_url=url,
                auth=auth,
                timeout=env.resolve_float(None, env.ENV_TIMEOUT, overrides, "timeout", None),
                headers=overrides.get("headers", {}),
                verify_ssl=env.resolve_bool(None, env.ENV_VERIFY_SSL, overrides, "verify_ssl", True),
            )
        except ValidationError as e:
            raise ConfigError(str(e)) from e


def _auth_from_env(overrides: Dict[str, Any]) -> Optional[AuthConfig]:
    """Pick a credential strategy from whatever is set: API key, then token, then basic."""
    api_key = env.resolve(None, env.ENV_API_KEY, overrides, "api_key", None)
    if api_key:
        return AuthConfig(type="api_key", api_key=api_key)

    token = env.resolve(None, env.ENV_TOKEN, overrides, "token", None)
    if token:
        return AuthConfig(type="bearer", token=token)

    username = env.resolve(None, env.ENV_USER, overrides, "username", None)
    password = env.resolve(None, env.ENV_PASSWORD, overrides, "password", None)
    if username or password:
        return AuthConfig(type="basic", username=username, password=password)

    return None


def normalize_timeout(timeout: Optional[Union[float, TimeoutConfig]]) -> TimeoutConfig:
    """Normalize timeout to TimeoutConfig object."""
    if timeout is None:
        return TimeoutConfig()
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=float(timeout), read=float(timeout), write=float(timeout))
    return timeout
