"""
Layered settings shared by every registry of a `RegistrySet`.

Lookups fall through three layers: overrides written at runtime (item
assignment or the ``update_from_*`` helpers), the layers handed to the
constructor, then :data:`DEFAULTS`. Deleting an override exposes whatever sits
underneath it.

Keys listed in :data:`DEFAULTS` are checked on every write; unknown uppercase
keys are stored untouched so applications can keep their own knobs here.
"""


import importlib
import logging
import os
from collections import ChainMap
from typing import Any, Callable, Iterator, Mapping, MutableMapping

from domainkit.exceptions import SettingsError

from .defaults import DEFAULTS

logger = logging.getLogger(__name__)

CONFIG_MODULE_ENVVAR = "DOMAINKIT_CONFIG_MODULE"

TRACE_LEVELS = ("debug", "info", "minimal")


def _check_padding(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SettingsError(f"{key} must be a non-negative int, got {value!r}")
    return value


def _check_trace_level(key: str, value: Any) -> str:
    level = str(value or "").strip().lower()
    if level not in TRACE_LEVELS:
        raise SettingsError(f"{key} must be one of {', '.join(TRACE_LEVELS)}; got {value!r}")
    return level


def _check_flag(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise SettingsError(f"{key} must be a bool, got {value!r}")
    return value


_CHECKS: dict[str, Callable[[str, Any], Any]] = {
    "TEST_ID_PADDING": _check_padding,
    "EXPECTATION_ID_PADDING": _check_padding,
    "TRACE_LEVEL": _check_trace_level,
    "WARN_ON_DUPLICATES": _check_flag,
}


def _clean(mapping: Mapping[str, Any]) -> dict[str, Any]:
    return {key: _CHECKS[key](key, value) if key in _CHECKS else value for key, value in mapping.items()}


class Settings(MutableMapping[str, Any]):
    """Validated settings over ``DEFAULTS`` with optional overlays."""

    def __init__(self, *layers: Mapping[str, Any]) -> None:
        self._storage = ChainMap({}, *(_clean(layer) for layer in layers), dict(DEFAULTS))

    @classmethod
    def from_envvar(cls, envvar: str = CONFIG_MODULE_ENVVAR, *, namespace: str | None = None) -> "Settings":
        settings = cls()
        settings.update_from_envvar(envvar, namespace=namespace)
        return settings

    # Mapping protocol -------------------------------------------------
    def __getitem__(self, key: str) -> Any:
        return self._storage[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._storage.maps[0].update(_clean({key: value}))

    def __delitem__(self, key: str) -> None:
        del self._storage.maps[0][key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._storage)

    def __len__(self) -> int:
        return len(self._storage)

    # Typed accessors --------------------------------------------------
    @property
    def test_id_padding(self) -> int:
        return self["TEST_ID_PADDING"]

    @property
    def expectation_id_padding(self) -> int:
        return self["EXPECTATION_ID_PADDING"]

    @property
    def trace_level(self) -> str:
        return self["TRACE_LEVEL"]

    @property
    def warn_on_duplicates(self) -> bool:
        return self["WARN_ON_DUPLICATES"]

    # Loading ----------------------------------------------------------
    def update_from_object(self, obj: str, *, namespace: str | None = None) -> None:
        module = importlib.import_module(obj)
        self.update_from_mapping(vars(module), namespace=namespace)
        logger.debug("settings loaded from %s", obj)

    def update_from_envvar(self, envvar: str = CONFIG_MODULE_ENVVAR, *, namespace: str | None = None) -> None:
        module_name = os.environ.get(envvar)
        if not module_name:
            return
        self.update_from_object(module_name, namespace=namespace)

    def update_from_mapping(self, mapping: Mapping[str, Any], *, namespace: str | None = None) -> None:
        self._storage.maps[0].update(_clean(_select(mapping, namespace)))

    def overrides(self) -> dict[str, Any]:
        """Only the keys written at runtime."""
        return dict(self._storage.maps[0])

    def as_dict(self) -> dict[str, Any]:
        return dict(self._storage)


def _select(mapping: Mapping[str, Any], namespace: str | None) -> dict[str, Any]:
    """Uppercase keys, or ``{NAMESPACE}_KEY`` entries with the prefix removed."""
    if namespace is None:
        return {k: v for k, v in mapping.items() if k.isupper()}
    prefix = f"{namespace}_"
    return {k[len(prefix) :]: v for k, v in mapping.items() if k.startswith(prefix)}
