"""Candidate tier construction.

Purpose
-------
Turn a :class:`MachineIdentity` and a precedence order into the ordered tiers
the loader walks. Free of I/O so the ordering rules can be tested in
isolation.

Contents
    - ``build_candidates``: public entry point, one tier per precedence entry.
    - ``candidate_names``: composite/bare pair for a single facet.
"""

from __future__ import annotations

from typing import Iterable

from ..domain.identity import CandidateTier, Facet, FacetKind, MachineIdentity, safe
from ..observability import log_debug


def build_candidates(identity: MachineIdentity, order: Iterable[FacetKind]) -> tuple[CandidateTier, ...]:
    """Return the candidate tiers for *identity* in *order*.

    Why
    ----
    A host named after a user (or a platform) would otherwise collide on the
    same file name; the composite ``"<kind>-<value>"`` name disambiguates while
    the bare name keeps simple setups simple.

    What
    ----
    Tier ``i`` corresponds to ``order[i]``. Tiers are not deduplicated against
    each other; the loader simply retries a colliding name.

    Examples
    --------
    >>> identity = MachineIdentity.from_values(name="bob-pc", type="gnu-linux", user="bob")
    >>> tiers = build_candidates(identity, [FacetKind.TYPE, FacetKind.NAME, FacetKind.USER])
    >>> [tier.candidate_names for tier in tiers]
    [('type-gnu-linux', 'gnu-linux'), ('name-bob-pc', 'bob-pc'), ('user-bob', 'bob')]
    """

    tiers = tuple(
        CandidateTier(kind=kind, facet=identity[kind], candidate_names=candidate_names(identity[kind]))
        for kind in order
    )
    log_debug("candidates_built", tier=None, path=None, tiers=[tier.candidate_names for tier in tiers])
    return tiers


def candidate_names(facet: Facet) -> tuple[str, str]:
    """Return ``(composite, bare)`` file names for *facet*.

    Examples
    --------
    >>> candidate_names(Facet.from_raw(FacetKind.USER, "Bob"))
    ('user-bob', 'bob')
    >>> candidate_names(Facet.from_raw(FacetKind.NAME, ""))
    ('name', '')
    """

    return safe(f"{facet.kind.value}-{facet.normalized_value}"), facet.normalized_value
