"""Domain-level exception hierarchy.

Purpose
-------
Expose the error taxonomy shared by adapters, the loader, and consuming
applications. It lives in the domain layer so inner layers never import from
outer ones.

Contents
--------
* :class:`MachineSettingsError` – umbrella base class.
* :class:`MachineUndetermined` – no candidate tier could be built.
* :class:`NothingLoaded` – tiers existed but no candidate file loaded.
* :class:`InvalidFormat` – a machine file could not be parsed.
* :class:`NotFound` – a candidate machine file does not exist.
* :class:`InvalidPrecedence` / :class:`InvalidPolicy` – bad configuration input.

System Role
-----------
``MachineUndetermined`` and ``NothingLoaded`` are the only errors a load pass
raises, and only under the ``fatal`` policy. ``NotFound`` and ``InvalidFormat``
stay inside the file-loading primitive, which turns them into a failed
candidate.
"""

from __future__ import annotations


class MachineSettingsError(Exception):
    """Base type for all exceptions emitted by ``lib_machine_settings``."""


class MachineUndetermined(MachineSettingsError):
    """Raised under the ``fatal`` policy when the candidate tier list is empty.

    Normalisation always yields a token, so in practice this only happens when
    the configured precedence order is empty.
    """


class NothingLoaded(MachineSettingsError):
    """Raised under the ``fatal`` policy when every candidate failed to load.

    The usual cause is that no file exists for this host in the load directory.
    """


class InvalidFormat(MachineSettingsError):
    """Raised when a machine file cannot be parsed into a mapping.

    Typical Sources
    ---------------
    :mod:`tomllib`, :mod:`json`, and :mod:`yaml` parse failures.
    """


class NotFound(MachineSettingsError):
    """Represents a missing-but-optional machine file."""


class InvalidPrecedence(MachineSettingsError, ValueError):
    """Raised when a precedence order names an unknown or repeated facet kind."""


class InvalidPolicy(MachineSettingsError, ValueError):
    """Raised when an error-policy selector cannot be recognised."""
