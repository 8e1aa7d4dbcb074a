"""Adapter contract tests for the default ports implementation.

Purpose
-------
Verify the default adapters keep satisfying the application-layer ports in
``src/lib_machine_settings/application/ports.py`` so the loader can be driven
by any of them interchangeably.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from lib_machine_settings.adapters.diagnostics.default import EchoDiagnosticReporter, LoggingDiagnosticReporter
from lib_machine_settings.adapters.file_loaders.structured import MachineFileLoader
from lib_machine_settings.adapters.identity.default import DefaultIdentityResolver
from lib_machine_settings.application import ports
from lib_machine_settings.domain.identity import MachineIdentity
from tests.support import create_machine_sandbox


@pytest.fixture()
def sandbox(tmp_path):
    """Provide a machine directory with a pinned identity."""

    return create_machine_sandbox(tmp_path)


def test_identity_resolver_contract(sandbox) -> None:
    """DefaultIdentityResolver must fulfil IdentityResolver and return a full identity."""

    resolver = sandbox.resolver()
    assert isinstance(resolver, ports.IdentityResolver)
    identity = resolver.resolve()
    assert isinstance(identity, MachineIdentity)
    assert identity.name.normalized_value == "bob-pc"


def test_file_loader_contract(sandbox) -> None:
    """MachineFileLoader must fulfil FileLoader and answer with booleans."""

    sandbox.write("bob.toml", 'theme = "dark"\n')
    loader = MachineFileLoader()
    assert isinstance(loader, ports.FileLoader)
    assert loader(str(Path(sandbox.directory) / "bob")) is True
    assert loader(str(Path(sandbox.directory) / "alice")) is False


@pytest.mark.parametrize(
    "reporter",
    [LoggingDiagnosticReporter(), EchoDiagnosticReporter(lambda message: None)],
    ids=["logging", "echo"],
)
def test_diagnostic_reporter_contract(reporter) -> None:
    """Both reporters fulfil DiagnosticReporter and keep what they reported."""

    assert isinstance(reporter, ports.DiagnosticReporter)
    reporter.report("No machine files could be loaded", "warning")
    assert reporter.messages[-1] == ("warning", "No machine files could be loaded")


def test_plain_callable_is_a_file_loader() -> None:
    assert isinstance(lambda path: False, ports.FileLoader)


def test_unrelated_object_is_not_a_reporter() -> None:
    assert not isinstance(object(), ports.DiagnosticReporter)


def test_resolver_is_deterministic(sandbox) -> None:
    resolver = DefaultIdentityResolver(hostname="bob-pc", platform="linux", user="bob")
    assert resolver.resolve() == resolver.resolve()
