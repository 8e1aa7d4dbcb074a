"""Application-layer ports describing what the host environment supplies.

Purpose
-------
Define the structural contracts the load pass depends on so the composition
root can orchestrate behaviour without importing concrete adapters.

Contents
--------
* :class:`IdentityResolver` – derives the current :class:`MachineIdentity`.
* :class:`FileLoader` – attempts to load one extensionless candidate path.
* :class:`DiagnosticReporter` – surfaces non-fatal diagnostics.

System Role
-----------
Each default adapter under :mod:`lib_machine_settings.adapters` implements one
protocol. Tests substitute plain callables and recording fakes.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..domain.identity import MachineIdentity


@runtime_checkable
class IdentityResolver(Protocol):
    """Derive the three identity facets from the environment.

    Implementations must not raise: an unreadable facet becomes the empty
    string.
    """

    def resolve(self) -> MachineIdentity:
        """Return a freshly built identity for the current process."""


@runtime_checkable
class FileLoader(Protocol):
    """Attempt to load the machine file at an extensionless *path*.

    Why
    ----
    Extension resolution and the meaning of "load" belong to the host; the
    loader only needs to know whether the attempt succeeded.
    """

    def __call__(self, path: str) -> bool:
        """Return ``True`` when a file for *path* was found and loaded."""


@runtime_checkable
class DiagnosticReporter(Protocol):
    """Surface a diagnostic message to the user at *severity*."""

    def report(self, message: str, severity: str) -> None:
        """Deliver *message*; ``severity`` is ``"warning"`` for load passes."""
