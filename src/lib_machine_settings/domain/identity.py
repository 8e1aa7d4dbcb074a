"""Machine identity value objects.

Purpose
-------
Model the three identity facets of the current host (platform type, host
name, invoking user), the filesystem-safe normalisation applied to them, and
the candidate tiers derived from them. Pure domain code: no I/O.

Contents
--------
* :func:`safe` – normalise a volatile identity string into a stable token.
* :class:`FacetKind` – which aspect of identity a value represents.
* :class:`Facet` – a raw identity value paired with its normalised token.
* :class:`MachineIdentity` – exactly one facet per kind.
* :class:`CandidateTier` – the composite/bare file names tried for one facet.
* :func:`parse_precedence` – validate a precedence order.
* :data:`DEFAULT_PRECEDENCE` – ``(TYPE, NAME, USER)``.

System Role
-----------
The identity resolver adapter produces :class:`MachineIdentity` values; the
candidate builder turns them into :class:`CandidateTier` tuples consumed by the
loader.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Final

from .errors import InvalidPrecedence

#: Runs of these characters collapse into a single hyphen.
_UNSAFE: Final[re.Pattern[str]] = re.compile(r"[#%&{}$!'\"@<>*?/ \r\n\t+`|=:]+")


def safe(value: str | None) -> str:
    """Return *value* lower-cased with unsafe character runs collapsed to ``-``.

    Why
    ----
    Host names, platform identifiers, and user names may contain characters
    that are awkward or illegal in file names. The token must be stable across
    runs so the same host always finds the same files.

    What
    ----
    Lower-cases, replaces each run of unsafe characters with one hyphen, and
    trims leading/trailing hyphens. ``None`` is treated as the empty string.
    The function is idempotent.

    Examples
    --------
    >>> safe("Bob's PC!")
    'bob-s-pc'
    >>> safe("gnu/linux")
    'gnu-linux'
    >>> safe(safe("  Work: Laptop  "))
    'work-laptop'
    >>> safe(None)
    ''
    """

    if not value:
        return ""
    return _UNSAFE.sub("-", value.lower()).strip("-")


class FacetKind(str, Enum):
    """Identity dimension a facet value belongs to."""

    NAME = "name"
    TYPE = "type"
    USER = "user"

    @classmethod
    def parse(cls, value: str | FacetKind) -> FacetKind:
        """Return the kind named by *value* (case-insensitive).

        Examples
        --------
        >>> FacetKind.parse(" Type ")
        <FacetKind.TYPE: 'type'>
        >>> FacetKind.parse("host")
        Traceback (most recent call last):
        ...
        lib_machine_settings.domain.errors.InvalidPrecedence: Unknown facet kind: 'host' (expected one of name, type, user)
        """

        if isinstance(value, FacetKind):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            choices = ", ".join(kind.value for kind in cls)
            raise InvalidPrecedence(f"Unknown facet kind: {value!r} (expected one of {choices})") from exc


DEFAULT_PRECEDENCE: Final[tuple[FacetKind, ...]] = (FacetKind.TYPE, FacetKind.NAME, FacetKind.USER)
"""Host-class files first, then host-name files, then user files."""


def parse_precedence(values: str | Iterable[str | FacetKind] | None) -> tuple[FacetKind, ...]:
    """Validate a precedence order and return it as a tuple of kinds.

    Accepts a comma separated string or any iterable of names/kinds. ``None``
    yields :data:`DEFAULT_PRECEDENCE`; an empty sequence is allowed and yields
    an empty order.

    Raises
    ------
    InvalidPrecedence
        When a kind is unknown or appears more than once, or *values* is
        neither a string nor an iterable.

    Examples
    --------
    >>> [kind.value for kind in parse_precedence("user, name")]
    ['user', 'name']
    >>> parse_precedence(["name", "NAME"])
    Traceback (most recent call last):
    ...
    lib_machine_settings.domain.errors.InvalidPrecedence: Facet kind listed more than once: name
    >>> parse_precedence(1)
    Traceback (most recent call last):
    ...
    lib_machine_settings.domain.errors.InvalidPrecedence: Precedence must be a comma separated string or a sequence of facet kinds, not 1
    """

    if values is None:
        return DEFAULT_PRECEDENCE
    if isinstance(values, str):
        values = [part for part in values.split(",") if part.strip()]
    elif not isinstance(values, Iterable):
        raise InvalidPrecedence(f"Precedence must be a comma separated string or a sequence of facet kinds, not {values!r}")
    order: list[FacetKind] = []
    for value in values:
        kind = FacetKind.parse(value)
        if kind in order:
            raise InvalidPrecedence(f"Facet kind listed more than once: {kind.value}")
        order.append(kind)
    return tuple(order)


@dataclass(frozen=True, slots=True)
class Facet:
    """One identity value together with its normalised file-name token."""

    kind: FacetKind
    raw_value: str
    normalized_value: str

    @classmethod
    def from_raw(cls, kind: FacetKind, raw_value: str | None) -> Facet:
        """Build a facet, normalising *raw_value* with :func:`safe`.

        Examples
        --------
        >>> Facet.from_raw(FacetKind.NAME, "Bob-PC").normalized_value
        'bob-pc'
        """

        raw = raw_value or ""
        return cls(kind=kind, raw_value=raw, normalized_value=safe(raw))


@dataclass(frozen=True, slots=True)
class MachineIdentity:
    """The three facets describing the current host and user.

    Examples
    --------
    >>> identity = MachineIdentity.from_values(name="Bob-PC", type="gnu/linux", user="bob")
    >>> identity[FacetKind.TYPE].normalized_value
    'gnu-linux'
    """

    name: Facet
    type: Facet
    user: Facet

    @classmethod
    def from_values(cls, *, name: str | None, type: str | None, user: str | None) -> MachineIdentity:
        """Build an identity from raw strings, normalising each facet."""

        return cls(
            name=Facet.from_raw(FacetKind.NAME, name),
            type=Facet.from_raw(FacetKind.TYPE, type),
            user=Facet.from_raw(FacetKind.USER, user),
        )

    def __getitem__(self, kind: FacetKind | str) -> Facet:
        return getattr(self, FacetKind.parse(kind).value)

    def facets(self) -> tuple[Facet, ...]:
        """Return the facets in declaration order (name, type, user)."""

        return (self.name, self.type, self.user)

    def as_dict(self) -> dict[str, dict[str, str]]:
        """Return a JSON-friendly view keyed by facet kind."""

        return {facet.kind.value: {"raw": facet.raw_value, "normalized": facet.normalized_value} for facet in self.facets()}


@dataclass(frozen=True, slots=True)
class CandidateTier:
    """File names attempted for one facet, composite name first."""

    kind: FacetKind
    facet: Facet
    candidate_names: tuple[str, str]

    @property
    def composite(self) -> str:
        return self.candidate_names[0]

    @property
    def bare(self) -> str:
        return self.candidate_names[1]
