"""Public package surface for ``lib_machine_settings``.

Load the per-machine configuration files that match the current host's type,
name, and user from a shared configuration directory. See
:func:`read_machine_settings` for the full pass and
:func:`load_machine_settings` for the paths-only variant.
"""

from __future__ import annotations

from .adapters.identity.default import DefaultIdentityResolver
from .application.candidates import build_candidates
from .application.loader import load_tiers
from .core import MachineSettings, load_machine_settings, read_machine_settings, resolve_options
from .domain.config import Config
from .domain.errors import (
    InvalidFormat,
    InvalidPolicy,
    InvalidPrecedence,
    MachineSettingsError,
    MachineUndetermined,
    NotFound,
    NothingLoaded,
)
from .domain.identity import DEFAULT_PRECEDENCE, CandidateTier, Facet, FacetKind, MachineIdentity, safe
from .domain.policy import ErrorPolicy
from .examples import scaffold_machine_files
from .hooks import Subscription, ThemeEvents, attach_after_load
from .observability import bind_trace_id, get_logger, trace_pass

__all__ = [
    "CandidateTier",
    "Config",
    "DEFAULT_PRECEDENCE",
    "DefaultIdentityResolver",
    "ErrorPolicy",
    "Facet",
    "FacetKind",
    "InvalidFormat",
    "InvalidPolicy",
    "InvalidPrecedence",
    "MachineIdentity",
    "MachineSettings",
    "MachineSettingsError",
    "MachineUndetermined",
    "NotFound",
    "NothingLoaded",
    "Subscription",
    "ThemeEvents",
    "attach_after_load",
    "bind_trace_id",
    "build_candidates",
    "get_logger",
    "load_machine_settings",
    "load_tiers",
    "read_machine_settings",
    "resolve_options",
    "safe",
    "scaffold_machine_files",
    "trace_pass",
]
