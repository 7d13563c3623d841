"""
ARTIFACTORY_* environment lookup.

A setting is taken from the first source that has it: explicit argument,
environment, override dict, default.
"""
import os
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from .exceptions import ConfigError

ENV_URL = "ARTIFACTORY_URL"
ENV_USER = "ARTIFACTORY_USER"
ENV_PASSWORD = ("ARTIFACTORY_PASSWD", "ARTIFACTORY_PASSWORD")
ENV_API_KEY = "ARTIFACTORY_API_KEY"
ENV_TOKEN = ("ARTIFACTORY_TOKEN", "ARTIFACTORY_ACCESS_TOKEN")
ENV_TIMEOUT = "ARTIFACTORY_TIMEOUT"
ENV_VERIFY_SSL = "ARTIFACTORY_VERIFY_SSL"

EnvNames = Union[str, Sequence[str]]

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off", ""})


def _first_env(names: EnvNames) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(name, value)`` of the first variable in ``names`` that is set."""
    for name in (names,) if isinstance(names, str) else names:
        value = os.environ.get(name)
        if value is not None:
            return name, value
    return None, None


def _lookup(
    arg: Any,
    names: EnvNames,
    overrides: Optional[Dict[str, Any]],
    key: Optional[str],
    default: Any,
) -> Tuple[str, Any]:
    if arg is not None:
        return "argument", arg
    name, value = _first_env(names)
    if name is not None:
        return name, value
    if overrides and key and key in overrides:
        return f"overrides[{key!r}]", overrides[key]
    return "default", default


def resolve(
    arg: Any,
    names: EnvNames,
    overrides: Optional[Dict[str, Any]] = None,
    key: Optional[str] = None,
    default: Any = None,
) -> Any:
    """Resolve a raw setting value."""
    return _lookup(arg, names, overrides, key, default)[1]


def resolve_bool(
    arg: Any,
    names: EnvNames,
    overrides: Optional[Dict[str, Any]] = None,
    key: Optional[str] = None,
    default: bool = False,
) -> bool:
    """Resolve a flag. Strings such as ``"yes"``/``"off"`` are accepted.

    Raises:
        ConfigError: for a string that is not a recognised flag value
    """
    source, value = _lookup(arg, names, overrides, key, default)
    if not isinstance(value, str):
        return bool(value)
    flag = value.strip().lower()
    if flag in _TRUTHY:
        return True
    if flag in _FALSY:
        return False
    raise ConfigError(f"{source}: expected a boolean, got {value!r}")


def resolve_float(
    arg: Any,
    names: EnvNames,
    overrides: Optional[Dict[str, Any]] = None,
    key: Optional[str] = None,
    default: Optional[float] = None,
) -> Optional[float]:
    """Resolve a number of seconds.

    Raises:
        ConfigError: when the value is set but is not a number
    """
    source, value = _lookup(arg, names, overrides, key, default)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{source}: expected a number, got {value!r}") from e
