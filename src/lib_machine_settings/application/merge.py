"""Merge the payloads of loaded machine files.

Purpose
-------
Fold every loaded machine file into one settings tree so a later file can
override values set by an earlier one, and record which file won each key.

Contents
    - ``merge_files``: public entry point.
    - ``_fold``: recursive merge of one payload into the accumulated tree.
    - ``_forget``: drops provenance for a key and everything below it.

System Role
-----------
Receives :class:`lib_machine_settings.adapters.file_loaders.structured.LoadedFile`
records in load order from the composition root and returns the inputs of
:class:`lib_machine_settings.domain.config.Config`.
"""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from typing import Iterable, Protocol


class _Payload(Protocol):
    tier: str
    path: str
    data: Mapping[str, object]


def merge_files(files: Iterable[_Payload]) -> tuple[dict[str, object], dict[str, dict[str, str]]]:
    """Deep-merge *files* in load order.

    Nested mappings merge key by key; any other value (lists included)
    replaces what an earlier file set.

    Examples
    --------
    >>> from types import SimpleNamespace as File
    >>> data, meta = merge_files([
    ...     File(tier="type", path="/m/linux.toml", data={"fonts": {"size": 10, "family": "mono"}}),
    ...     File(tier="name", path="/m/bob-pc.toml", data={"fonts": {"size": 12}}),
    ... ])
    >>> data["fonts"]
    {'size': 12, 'family': 'mono'}
    >>> meta["fonts.size"]["tier"], meta["fonts.family"]["tier"]
    ('name', 'type')
    """

    merged: dict[str, object] = {}
    meta: dict[str, dict[str, str]] = {}
    for entry in files:
        _fold(merged, meta, entry.data, entry.tier, entry.path, ())
    return merged, meta


def _fold(
    target: dict[str, object],
    meta: dict[str, dict[str, str]],
    incoming: Mapping[str, object],
    tier: str,
    path: str,
    prefix: tuple[str, ...],
) -> None:
    for key, value in incoming.items():
        dotted = ".".join((*prefix, key))
        if isinstance(value, Mapping):
            existing = target.get(key)
            if not isinstance(existing, dict):
                _forget(meta, dotted)
                existing = {}
                target[key] = existing
            _fold(existing, meta, value, tier, path, (*prefix, key))
            continue
        _forget(meta, dotted)
        target[key] = deepcopy(value)
        meta[dotted] = {"tier": tier, "path": path, "key": dotted}


def _forget(meta: dict[str, dict[str, str]], dotted: str) -> None:
    for key in [key for key in meta if key == dotted or key.startswith(dotted + ".")]:
        del meta[key]
