"""Structured logging for machine load passes.

Purpose
    Let a host application follow one load pass from identity resolution to
    the post-load hook: which facets were read, which candidate names were
    tried, which file won each tier, and why the others were rejected.

Contents
    - ``TRACE_ID``: context variable holding the identifier of the running pass.
    - ``get_logger``: the package logger, silent until the host attaches handlers.
    - ``bind_trace_id``: sets or clears the identifier by hand.
    - ``trace_pass``: scopes a fresh identifier to one load pass.
    - ``log_debug`` / ``log_info`` / ``log_warning`` / ``log_error``: emitters
      that attach the identifier to every entry.
    - ``make_event``: payload builder keyed by tier and candidate path.

System Integration
    :func:`lib_machine_settings.core.read_machine_settings` opens a
    ``trace_pass`` scope; the loader, adapters, and hooks only call the
    emitters. Every entry carries ``extra={"context": {...}}`` so handlers can
    render or ship the fields without parsing the message.
"""

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Final, Iterator, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("lib_machine_settings_trace_id", default=None)
"""Identifier of the load pass currently running in this context.

Why
    Two passes may run concurrently (threads, asyncio tasks); their entries
    interleave in the log and must stay separable.
"""

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_machine_settings")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Return the ``lib_machine_settings`` logger.

    Why
        A library that loads user files at start-up must not print on its
        own; the host decides handlers, levels, and formatting.
    """

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Set the pass identifier for the current context; ``None`` clears it.

    Examples
    --------
    >>> bind_trace_id('pass-1')
    >>> TRACE_ID.get()
    'pass-1'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


@contextmanager
def trace_pass(trace_id: str | None = None) -> Iterator[str]:
    """Bind an identifier for the duration of one load pass.

    Why
        A pass started from inside another traced operation keeps its own
        identifier and hands the outer one back when it finishes.
    What
        Binds *trace_id* (a random hex string when omitted), yields it, and
        restores the previous binding on exit, even when the pass raises.

    Examples
    --------
    >>> bind_trace_id('outer')
    >>> with trace_pass('machine-pass') as current:
    ...     current, TRACE_ID.get()
    ('machine-pass', 'machine-pass')
    >>> TRACE_ID.get()
    'outer'
    >>> bind_trace_id(None)
    """

    current = trace_id or uuid.uuid4().hex
    token = TRACE_ID.set(current)
    try:
        yield current
    finally:
        TRACE_ID.reset(token)


def log_debug(message: str, /, **fields: Any) -> None:
    """Per-candidate detail: attempts, misses, rejected files."""

    _emit(logging.DEBUG, message, fields)


def log_info(message: str, /, **fields: Any) -> None:
    """Pass-level outcome: what loaded and from where."""

    _emit(logging.INFO, message, fields)


def log_warning(message: str, /, **fields: Any) -> None:
    """Diagnostics reported under the ``warn`` policy."""

    _emit(logging.WARNING, message, fields)


def log_error(message: str, /, **fields: Any) -> None:
    """Files that exist but could not be read or parsed."""

    _emit(logging.ERROR, message, fields)


def make_event(
    tier: str | None,
    path: str | None,
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the fields of a tier-scoped log entry.

    Inputs
        tier: Facet kind of the tier being walked (``"type"``, ``"name"``,
            ``"user"``), or ``None`` when the file loader does not know it.
        path: Candidate or resolved file path, if any.
        payload: Extra detail such as the error text or the candidate names.
    Outputs
        dict[str, Any]: Always holds ``tier`` and ``path``; payload keys win
        on collision.

    Examples
    --------
    >>> make_event('name', '/cfg/machine/bob-pc', {'attempt': 2})
    {'tier': 'name', 'path': '/cfg/machine/bob-pc', 'attempt': 2}
    """

    event: dict[str, Any] = {"tier": tier, "path": path}
    if payload:
        event |= dict(payload)
    return event


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    _LOGGER.log(level, message, extra={"context": {"trace_id": TRACE_ID.get(), **fields}})
