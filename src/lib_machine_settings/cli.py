"""CLI adapter for ``lib_machine_settings`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators see which identity a host resolves to, which machine files it
would try, and what a load pass actually loads, without writing Python.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command wiring traceback handling into ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata.
* :func:`cli_env_prefix` – prints the environment prefix for a slug.
* :func:`cli_safe` – prints normalised tokens.
* :func:`cli_identity` – prints the resolved identity as JSON.
* :func:`cli_candidates` – prints the candidate tiers as JSON.
* :func:`cli_load` – runs a load pass and prints the loaded paths.
* :func:`cli_scaffold` – writes starter machine files for this host.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost layer. Commands call the composition root and the scaffolding
helpers; ``lib_cli_exit_tools`` turns exceptions (for instance
:class:`~lib_machine_settings.domain.errors.NothingLoaded` under
``--on-error fatal``) into exit codes.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.diagnostics.default import EchoDiagnosticReporter
from .adapters.env.default import default_env_prefix as _default_env_prefix
from .adapters.identity.default import DefaultIdentityResolver
from .application.candidates import build_candidates
from .application.options import MachineOptions
from .core import read_machine_settings, resolve_options
from .domain.identity import FacetKind, safe
from .examples import scaffold_machine_files

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

KIND_CHOICES: Final[tuple[str, ...]] = tuple(kind.value for kind in FacetKind)
POLICY_CHOICES: Final[tuple[str, ...]] = ("silent", "warn", "fatal")


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when not installed."""

    try:
        return metadata.version("lib_machine_settings")
    except metadata.PackageNotFoundError:
        return "0.0.0"


def _namespace_options(func):
    """Attach the ``--slug/--vendor/--app`` options shared by most commands."""

    func = click.option("--app", default=None, help="Application name used on macOS/Windows (defaults to slug)")(func)
    func = click.option("--vendor", default=None, help="Vendor namespace used on macOS/Windows (defaults to slug)")(func)
    func = click.option("--slug", required=True, help="Slug identifying the application's configuration")(func)
    return func


def _precedence_option(func):
    return click.option(
        "--precedence",
        multiple=True,
        type=click.Choice(KIND_CHOICES, case_sensitive=False),
        help="Tier order (repeatable); defaults to type, name, user",
    )(func)


def _directory_option(func):
    return click.option(
        "--directory",
        type=click.Path(path_type=Path, file_okay=False, dir_okay=True),
        default=None,
        help="Directory holding machine files (defaults to the user config directory)",
    )(func)


@click.group(
    help="Per-machine settings loader",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_machine_settings",
    message="lib_machine_settings version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command storing the traceback preference for ``lib_cli_exit_tools``."""

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_machine_settings")
    except metadata.PackageNotFoundError:
        click.echo("lib_machine_settings (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_machine_settings')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("env-prefix", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("slug")
def cli_env_prefix(slug: str) -> None:
    """Compute the environment prefix for *slug*.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> CliRunner().invoke(cli, ["env-prefix", "my-app"]).output.strip()
    'MY_APP'
    """

    click.echo(_default_env_prefix(slug))


@cli.command("safe", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("values", nargs=-1, required=True)
def cli_safe(values: Sequence[str]) -> None:
    """Print the file-name token of each VALUE, one per line."""

    for value in values:
        click.echo(safe(value))


@cli.command("identity", context_settings=CLICK_CONTEXT_SETTINGS)
@_namespace_options
@click.option("--indent", type=int, default=2, show_default=True, help="JSON indent size")
def cli_identity(slug: str, vendor: Optional[str], app: Optional[str], indent: int) -> None:
    """Print the identity facets this host resolves to."""

    options = resolve_options(slug=slug, vendor=vendor, app=app)
    identity = _identity_resolver(options).resolve()
    click.echo(json.dumps(identity.as_dict(), indent=indent))


@cli.command("candidates", context_settings=CLICK_CONTEXT_SETTINGS)
@_namespace_options
@_directory_option
@_precedence_option
@click.option("--indent", type=int, default=2, show_default=True, help="JSON indent size")
def cli_candidates(
    slug: str,
    vendor: Optional[str],
    app: Optional[str],
    directory: Optional[Path],
    precedence: Sequence[str],
    indent: int,
) -> None:
    """Print the candidate tiers, in the order a load pass attempts them."""

    options = resolve_options(slug=slug, vendor=vendor, app=app, directory=directory, precedence=precedence or None)
    tiers = build_candidates(_identity_resolver(options).resolve(), options.precedence)
    payload = [
        {"tier": tier.kind.value, "candidates": [str(options.directory / name) for name in tier.candidate_names if name]}
        for tier in tiers
    ]
    click.echo(json.dumps(payload, indent=indent))


@cli.command("load", context_settings=CLICK_CONTEXT_SETTINGS)
@_namespace_options
@_directory_option
@_precedence_option
@click.option(
    "--on-error",
    type=click.Choice(POLICY_CHOICES, case_sensitive=False),
    default=None,
    help="What to do when nothing loads (default: warn)",
)
@click.option("--verbose/--quiet", default=None, help="Report each file as it is loaded")
@click.option("--settings/--no-settings", default=False, help="Also print the merged settings")
@click.option("--indent", type=int, default=None, help="Pretty-print JSON output with the provided indent size")
def cli_load(
    slug: str,
    vendor: Optional[str],
    app: Optional[str],
    directory: Optional[Path],
    precedence: Sequence[str],
    on_error: Optional[str],
    verbose: Optional[bool],
    settings: bool,
    indent: Optional[int],
) -> None:
    """Load this host's machine files and print the loaded paths as JSON.

    Diagnostics and progress messages go to stderr. With ``--settings`` the
    output becomes ``{"loaded": [...], "settings": {...}}``.
    """

    result = read_machine_settings(
        slug=slug,
        vendor=vendor,
        app=app,
        directory=directory,
        precedence=precedence or None,
        on_error=on_error,
        verbose=verbose,
        reporter=EchoDiagnosticReporter(_echo_err),
        progress=_echo_err,
    )
    if settings:
        payload = {"loaded": result.loaded, "settings": result.config.as_dict()}
        click.echo(json.dumps(payload, indent=indent, default=str))
        return
    click.echo(json.dumps(result.loaded, indent=indent))


@cli.command("scaffold", context_settings=CLICK_CONTEXT_SETTINGS)
@_namespace_options
@_directory_option
@click.option(
    "--kind",
    "kinds",
    multiple=True,
    type=click.Choice(KIND_CHOICES, case_sensitive=False),
    help="Facet kinds to scaffold (repeatable); defaults to all",
)
@click.option("--bare/--composite", default=False, help="Name files after the bare value instead of <kind>-<value>")
@click.option(
    "--force/--no-force",
    default=False,
    help="Overwrite existing files at the destination if set",
    show_default=True,
)
def cli_scaffold(
    slug: str,
    vendor: Optional[str],
    app: Optional[str],
    directory: Optional[Path],
    kinds: Sequence[str],
    bare: bool,
    force: bool,
) -> None:
    """Write starter machine files for this host and print their paths as JSON."""

    options = resolve_options(slug=slug, vendor=vendor, app=app, directory=directory)
    created = scaffold_machine_files(
        options.directory,
        _identity_resolver(options).resolve(),
        kinds=kinds or None,
        composite=not bare,
        force=force,
    )
    click.echo(json.dumps([str(path) for path in created], indent=2))


def _identity_resolver(options: MachineOptions) -> DefaultIdentityResolver:
    return DefaultIdentityResolver(hostname=options.name, platform=options.type, user=options.user)


def _echo_err(message: str) -> None:
    click.echo(message, err=True)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_machine_settings",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
