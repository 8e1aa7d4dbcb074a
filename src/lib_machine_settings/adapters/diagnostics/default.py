"""Diagnostic reporters.

Purpose
-------
Implement the :class:`lib_machine_settings.application.ports.DiagnosticReporter`
protocol for library use (logging) and interactive use (a message sink such
as ``click.echo``).
"""

from __future__ import annotations

from typing import Callable

from ...observability import log_warning


class LoggingDiagnosticReporter:
    """Send diagnostics through the package logger at WARNING level.

    The reported messages are also kept on :attr:`messages` so callers can
    inspect what a pass reported.

    Examples
    --------
    >>> reporter = LoggingDiagnosticReporter()
    >>> reporter.report("No machine files could be loaded", "warning")
    >>> reporter.messages
    [('warning', 'No machine files could be loaded')]
    """

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def report(self, message: str, severity: str) -> None:
        self.messages.append((severity, message))
        log_warning("machine_diagnostic", tier=None, path=None, severity=severity, message=message)


class EchoDiagnosticReporter(LoggingDiagnosticReporter):
    """Log the diagnostic and also hand ``"<severity>: <message>"`` to *sink*."""

    def __init__(self, sink: Callable[[str], None]) -> None:
        super().__init__()
        self._sink = sink

    def report(self, message: str, severity: str) -> None:
        super().report(message, severity)
        self._sink(f"{severity}: {message}")
