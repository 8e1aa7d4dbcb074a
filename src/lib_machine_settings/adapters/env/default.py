"""Environment variable adapter for load-pass options.

Purpose
-------
Translate ``<PREFIX>_MACHINE__*`` environment variables into the option
mapping consumed by :class:`lib_machine_settings.application.options.MachineOptions`.

Key behaviours
--------------
* Namespaces variables with :func:`default_env_prefix` so unrelated keys never
  leak in.
* Uses ``__`` as a nesting delimiter (``DEMO_MACHINE__DIR`` →
  ``{"machine": {"dir": ...}}``).
* Coerces common scalars (bools, ints, floats, ``null``/``none``) in
  :meth:`DefaultEnvLoader.load`; :meth:`DefaultEnvLoader.machine_options`
  coerces only the flag options and keeps identity overrides verbatim.
"""

from __future__ import annotations

import os
from typing import Final, Mapping

from ...observability import log_debug

#: Machine options read as flags; every other option keeps its raw string.
FLAG_OPTIONS: Final[frozenset[str]] = frozenset({"verbose"})


def default_env_prefix(slug: str) -> str:
    """Return the canonical environment prefix for *slug*.

    Examples
    --------
    >>> default_env_prefix('lib-machine-settings')
    'LIB_MACHINE_SETTINGS'
    """

    return slug.replace("-", "_").upper()


class DefaultEnvLoader:
    """Load environment variables that belong to an application's namespace."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def load(self, prefix: str, *, coerce: bool = True) -> dict[str, object]:
        """Return a nested mapping of the variables starting with *prefix*.

        Keys are lower-cased; ``_`` is appended to *prefix* when missing.
        With ``coerce=False`` every value stays the raw string.

        Examples
        --------
        >>> loader = DefaultEnvLoader(environ={
        ...     'DEMO_MACHINE__ON_ERROR': 'silent',
        ...     'DEMO_MACHINE__VERBOSE': 'true',
        ...     'OTHER': 'ignored',
        ... })
        >>> loader.load('DEMO')
        {'machine': {'on_error': 'silent', 'verbose': True}}
        >>> loader.load('DEMO', coerce=False)
        {'machine': {'on_error': 'silent', 'verbose': 'true'}}
        """

        prefix = f"{prefix}_" if prefix and not prefix.endswith("_") else prefix
        collected: dict[str, object] = {}
        for key, value in self._environ.items():
            if prefix and not key.startswith(prefix):
                continue
            stripped = key[len(prefix) :] if prefix else key
            if not stripped:
                continue
            assign_nested(collected, stripped, _coerce(value) if coerce else value)
        log_debug("env_variables_loaded", tier=None, path=None, keys=sorted(collected.keys()))
        return collected

    def machine_options(self, prefix: str) -> dict[str, object]:
        """Return the ``MACHINE`` section with only the flag options coerced.

        Identity overrides, paths, and policy names are file-name material, so
        ``0451`` must stay ``"0451"`` and ``none`` must stay ``"none"``.

        Examples
        --------
        >>> DefaultEnvLoader(environ={
        ...     'DEMO_MACHINE__NAME': '0451',
        ...     'DEMO_MACHINE__VERBOSE': 'true',
        ... }).machine_options('DEMO')
        {'name': '0451', 'verbose': True}
        """

        section = self.load(prefix, coerce=False).get("machine")
        if not isinstance(section, dict):
            return {}
        return {
            key: _coerce(value) if key in FLAG_OPTIONS and isinstance(value, str) else value
            for key, value in section.items()
        }


def assign_nested(target: dict[str, object], key: str, value: object) -> None:
    """Assign *value* inside *target* using ``__`` as a nesting delimiter.

    Raises
    ------
    ValueError
        When a nested key would replace an existing scalar.

    Examples
    --------
    >>> data: dict[str, object] = {}
    >>> assign_nested(data, 'MACHINE__PRECEDENCE', 'type,name')
    >>> data
    {'machine': {'precedence': 'type,name'}}
    """

    *parents, leaf = key.lower().split("__")
    cursor = target
    for part in parents:
        child = cursor.setdefault(part, {})
        if not isinstance(child, dict):
            raise ValueError(f"Cannot override scalar with mapping for key {key}")
        cursor = child
    cursor[leaf] = value


def _coerce(value: str) -> object:
    """Coerce textual environment values to Python primitives where possible.

    Examples
    --------
    >>> _coerce('true'), _coerce('10'), _coerce('3.5'), _coerce('type,name')
    (True, 10, 3.5, 'type,name')
    """

    lowered = value.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"null", "none"}:
        return None
    if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
        return int(value)
    try:
        return float(value)
    except ValueError:
        return value
