"""Tier-by-tier machine file loading.

Purpose
-------
Walk the candidate tiers in order, load at most one file per tier, and apply
the configured error policy when nothing could be loaded.

Contents
    - ``load_tiers``: public entry point returning the loaded paths.
    - ``_load_tier``: tries the composite then the bare name of one tier.
    - ``_signal``: routes a pass-level failure through the error policy.

System Role
-----------
Called by :func:`lib_machine_settings.core.read_machine_settings` after
:func:`lib_machine_settings.application.candidates.build_candidates`. The
loader owns no state beyond the list it returns.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from ..domain.errors import MachineSettingsError, MachineUndetermined, NothingLoaded
from ..domain.identity import CandidateTier
from ..domain.policy import ErrorPolicy
from ..observability import log_debug, log_error, log_info, make_event
from .ports import DiagnosticReporter, FileLoader

UNDETERMINED_MESSAGE = "Machine could not be determined"
NOTHING_LOADED_MESSAGE = "No machine files could be loaded"


def load_tiers(
    tiers: Sequence[CandidateTier],
    directory: str | Path,
    *,
    policy: ErrorPolicy | str | None,
    load_file: FileLoader,
    reporter: DiagnosticReporter,
) -> list[str]:
    """Load the first available candidate of every tier, in tier order.

    Why
    ----
    Later files may intentionally override state set by earlier ones, so the
    attempt order is part of the contract: strictly left to right, tier by
    tier, composite name before bare name.

    Parameters
    ----------
    tiers:
        Output of :func:`build_candidates`.
    directory:
        Directory joined with every candidate name.
    policy:
        Severity used when no tier exists or nothing loaded.
    load_file:
        Primitive that attempts one extensionless path.
    reporter:
        Receives the diagnostic under :attr:`ErrorPolicy.WARN`.

    Returns
    -------
    list[str]
        Candidate paths that loaded, at most one per tier; empty when nothing
        loaded and the policy is not ``fatal``.

    Raises
    ------
    MachineUndetermined
        ``tiers`` is empty and the policy is ``fatal``.
    NothingLoaded
        Every candidate failed and the policy is ``fatal``.

    Examples
    --------
    >>> from lib_machine_settings.domain.identity import MachineIdentity, DEFAULT_PRECEDENCE
    >>> from lib_machine_settings.application.candidates import build_candidates
    >>> tiers = build_candidates(MachineIdentity.from_values(name="bob-pc", type="linux", user="bob"), DEFAULT_PRECEDENCE)
    >>> class Quiet:
    ...     def report(self, message, severity):
    ...         pass
    >>> load_tiers(tiers, "/machine", policy="warn", load_file=lambda path: path.endswith("bob-pc"), reporter=Quiet())
    ['/machine/bob-pc']
    """

    resolved_policy = ErrorPolicy.parse(policy)
    if not tiers:
        _signal(MachineUndetermined(UNDETERMINED_MESSAGE), resolved_policy, reporter)
        return []

    base = Path(directory)
    loaded: list[str] = []
    for tier in tiers:
        path = _load_tier(tier, base, load_file)
        if path is None:
            log_debug("machine_tier_empty", **make_event(tier.kind.value, None, {"candidates": list(tier.candidate_names)}))
            continue
        loaded.append(path)

    if not loaded:
        _signal(NothingLoaded(f"{NOTHING_LOADED_MESSAGE} from {base}"), resolved_policy, reporter)
        return loaded

    log_info("machine_settings_loaded", tier=None, path=str(base), files=list(loaded))
    return loaded


def _load_tier(tier: CandidateTier, base: Path, load_file: FileLoader) -> str | None:
    """Return the first candidate path of *tier* that loads, or ``None``."""

    for name in tier.candidate_names:
        if not name:
            # an empty facet token would resolve to the directory itself
            continue
        path = str(base / name)
        try:
            success = load_file(path)
        except Exception as exc:  # noqa: BLE001 - one failing candidate never aborts the pass
            log_error(
                "machine_file_failed",
                **make_event(tier.kind.value, path, {"error": str(exc), "error_type": type(exc).__name__}),
            )
            continue
        if success:
            log_debug("machine_tier_loaded", **make_event(tier.kind.value, path))
            return path
    return None


def _signal(error: MachineSettingsError, policy: ErrorPolicy, reporter: DiagnosticReporter) -> None:
    """Apply *policy* to a pass-level failure."""

    if policy is ErrorPolicy.FATAL:
        raise error
    if policy is ErrorPolicy.WARN:
        reporter.report(str(error), "warning")
