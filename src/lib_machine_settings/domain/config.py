"""Immutable view over the settings contributed by loaded machine files.

Purpose
-------
Carry the merged payload of every machine file loaded during a pass, together
with provenance explaining which tier and file supplied each key. Pure domain
code: no I/O.

Contents
--------
* :class:`SourceInfo` – typed provenance entry (tier, path, dotted key).
* :class:`Config` – read-only ``Mapping`` with dotted lookups and provenance.
* :data:`EMPTY_CONFIG` – shared empty instance.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, TypedDict


class SourceInfo(TypedDict):
    """Describe which machine file supplied a merged key.

    Attributes
    ----------
    tier:
        Facet kind of the tier that loaded the file (``"type"``, ``"name"``,
        ``"user"``).
    path:
        Concrete file path, extension included.
    key:
        Fully qualified dotted key, e.g. ``"fonts.size"``.
    """

    tier: str
    path: str
    key: str


@dataclass(frozen=True, slots=True)
class Config(Mapping[str, Any]):
    """Read-only mapping returned by :func:`lib_machine_settings.read_machine_settings`.

    Examples
    --------
    >>> cfg = Config(
    ...     {"fonts": {"size": 11}},
    ...     {"fonts.size": {"tier": "name", "path": "/m/bob-pc.toml", "key": "fonts.size"}},
    ... )
    >>> cfg.get("fonts.size")
    11
    >>> cfg.origin("fonts.size")["tier"]
    'name'
    >>> cfg.get("fonts.family", default="mono")
    'mono'
    """

    _data: Mapping[str, Any]
    _meta: Mapping[str, SourceInfo]

    def __post_init__(self) -> None:
        object.__setattr__(self, "_data", MappingProxyType(dict(self._data)))
        object.__setattr__(self, "_meta", MappingProxyType(dict(self._meta)))

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def get(self, key: str, default: Any = None) -> Any:  # type: ignore[override]
        """Resolve *key* as a dotted path, returning *default* when missing."""

        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, Mapping) or part not in current:
                return default
            current = current[part]
        return current

    def origin(self, key: str) -> SourceInfo | None:
        """Return provenance for the dotted *key* or ``None`` when unknown."""

        return self._meta.get(key)

    def provenance(self) -> dict[str, SourceInfo]:
        """Return a mutable copy of the full provenance table."""

        return {key: dict(info) for key, info in self._meta.items()}  # type: ignore[misc]

    def as_dict(self) -> dict[str, Any]:
        """Return a deep, mutable copy of the settings tree.

        Examples
        --------
        >>> cfg = Config({"hooks": {"after": ["a"]}}, {})
        >>> clone = cfg.as_dict()
        >>> clone["hooks"]["after"].append("b")
        >>> cfg.get("hooks.after")
        ['a']
        """

        return _clone(self._data)

    def to_json(self, *, indent: int | None = None) -> str:
        """Serialise the settings to JSON.

        Examples
        --------
        >>> Config({"theme": "dark"}, {}).to_json()
        '{"theme":"dark"}'
        """

        return json.dumps(self.as_dict(), indent=indent, separators=(",", ":"), ensure_ascii=False, default=str)


def _clone(value: Any) -> Any:
    """Recursively copy mappings and sequences so callers cannot mutate the source."""

    if isinstance(value, Mapping):
        return {key: _clone(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_clone(item) for item in value]
    if isinstance(value, (set, tuple)):
        return type(value)(_clone(item) for item in value)
    return value


EMPTY_CONFIG = Config({}, {})
"""Shared empty settings used when no machine file was loaded."""
