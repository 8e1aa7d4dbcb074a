"""Options controlling a machine load pass.

Purpose
-------
Collapse explicit keyword arguments, environment overrides, and defaults into
one validated value object so the composition root deals with a single
source of truth.

Contents
    - ``MachineOptions``: frozen options value object.
    - ``MachineOptions.from_sources``: precedence-aware constructor.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping

from ..domain.identity import FacetKind, parse_precedence
from ..domain.policy import ErrorPolicy


@dataclass(frozen=True, slots=True)
class MachineOptions:
    """Validated options for one load pass.

    Attributes
    ----------
    directory:
        Directory holding the machine files.
    precedence:
        Tier order, most commonly ``(TYPE, NAME, USER)``.
    on_error:
        Severity applied when nothing could be loaded.
    verbose:
        Whether the file-loading primitive reports its own progress.
    name / type / user:
        Raw identity overrides; ``None`` lets the resolver read the
        environment.
    """

    directory: Path
    precedence: tuple[FacetKind, ...]
    on_error: ErrorPolicy
    verbose: bool = False
    name: str | None = None
    type: str | None = None
    user: str | None = None

    @classmethod
    def from_sources(
        cls,
        explicit: Mapping[str, Any],
        environment: Mapping[str, Any],
        *,
        default_directory: Path | Callable[[], Path],
    ) -> MachineOptions:
        """Build options where *explicit* beats *environment* beats defaults.

        ``None`` values in *explicit* count as "not given". A callable
        *default_directory* is only called when no directory was given.

        Examples
        --------
        >>> options = MachineOptions.from_sources(
        ...     {"on_error": None, "verbose": True},
        ...     {"on_error": "silent", "precedence": "user,name"},
        ...     default_directory=Path("/cfg/machine"),
        ... )
        >>> options.on_error.value, [kind.value for kind in options.precedence], options.verbose
        ('silent', ['user', 'name'], True)
        >>> str(options.directory)
        '/cfg/machine'
        """

        def pick(key: str) -> Any:
            value = explicit.get(key)
            if value is None:
                value = environment.get(key)
            return value

        directory = explicit.get("directory") or environment.get("dir")
        if directory:
            resolved = Path(directory).expanduser()
        elif callable(default_directory):
            resolved = default_directory()
        else:
            resolved = default_directory
        return cls(
            directory=resolved,
            precedence=parse_precedence(pick("precedence")),
            on_error=ErrorPolicy.parse(pick("on_error")),
            verbose=bool(pick("verbose")),
            name=_as_text(pick("name")),
            type=_as_text(pick("type")),
            user=_as_text(pick("user")),
        )


def _as_text(value: Any) -> str | None:
    """Return *value* as a string, leaving ``None`` untouched (keyword callers may pass non-strings)."""

    return None if value is None else str(value)
