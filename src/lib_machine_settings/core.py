"""Composition root for ``lib_machine_settings``.

Purpose
-------
Provide the single entry point that resolves the machine identity, builds the
candidate tiers, loads machine files, merges their payloads, and runs the
post-load hook.

Contents
--------
* :class:`MachineSettings` – everything a load pass produced.
* :func:`read_machine_settings` – full pass returning :class:`MachineSettings`.
* :func:`load_machine_settings` – full pass returning only the loaded paths.
* :func:`resolve_options` – merge keyword arguments, environment, defaults.

System Role
-----------
Wires the default adapters (identity, directory, file loader, diagnostics,
environment) to the application layer. Every call rebuilds identity and tiers
from scratch; nothing is cached between calls.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Mapping, Sequence

from .adapters.diagnostics.default import LoggingDiagnosticReporter
from .adapters.env.default import DefaultEnvLoader, default_env_prefix
from .adapters.file_loaders.structured import LoadedFile, MachineFileLoader
from .adapters.identity.default import DefaultIdentityResolver
from .adapters.path_resolvers.default import DefaultDirectoryResolver
from .application.candidates import build_candidates
from .application.loader import load_tiers
from .application.merge import merge_files
from .application.options import MachineOptions
from .application.ports import DiagnosticReporter, FileLoader, IdentityResolver
from .domain.config import EMPTY_CONFIG, Config
from .domain.identity import CandidateTier, FacetKind, MachineIdentity
from .domain.policy import ErrorPolicy
from .hooks import AfterLoadHook, Subscription, ThemeEvents, attach_after_load
from .observability import log_info, trace_pass


@dataclass(frozen=True, slots=True)
class MachineSettings:
    """Outcome of one load pass.

    Attributes
    ----------
    identity:
        Identity the pass resolved.
    tiers:
        Candidate tiers in the order they were attempted.
    directory:
        Directory the candidates were joined with.
    loaded:
        Candidate paths that loaded, one per satisfied tier, in tier order.
    files:
        Records of the concrete files parsed by the default file loader
        (empty unless the file loader is a :class:`MachineFileLoader`).
    config:
        Merged payload of ``files``; later files override earlier ones.
    subscription:
        Theme-change subscription of the post-load hook, if any.
    """

    identity: MachineIdentity
    tiers: tuple[CandidateTier, ...]
    directory: Path
    loaded: list[str]
    files: tuple[LoadedFile, ...] = ()
    config: Config = EMPTY_CONFIG
    subscription: Subscription | None = None


def resolve_options(
    *,
    slug: str,
    vendor: str | None = None,
    app: str | None = None,
    directory: str | Path | None = None,
    precedence: str | Iterable[str | FacetKind] | None = None,
    on_error: str | ErrorPolicy | None = None,
    verbose: bool | None = None,
    environ: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> MachineOptions:
    """Return validated options: keyword arguments beat environment beats defaults.

    Environment variables are read from ``<PREFIX>_MACHINE__*`` where
    ``PREFIX`` is :func:`default_env_prefix` of *slug*.

    Examples
    --------
    >>> options = resolve_options(slug="demo", environ={"DEMO_MACHINE__ON_ERROR": "silent",
    ...     "XDG_CONFIG_HOME": "/xdg"}, platform="linux")
    >>> options.on_error.value, options.directory.as_posix()
    ('silent', '/xdg/demo/machine')
    """

    env_options = DefaultEnvLoader(environ=environ).machine_options(default_env_prefix(slug))
    # resolved only when neither argument nor environment names a directory
    default_directory = DefaultDirectoryResolver(
        slug=slug, vendor=vendor, app=app, env=environ, platform=platform
    ).machine_dir
    explicit = {"directory": directory, "precedence": precedence, "on_error": on_error, "verbose": verbose}
    return MachineOptions.from_sources(explicit, env_options, default_directory=default_directory)


def read_machine_settings(
    *,
    slug: str,
    vendor: str | None = None,
    app: str | None = None,
    directory: str | Path | None = None,
    precedence: str | Iterable[str | FacetKind] | None = None,
    on_error: str | ErrorPolicy | None = None,
    verbose: bool | None = None,
    identity_resolver: IdentityResolver | None = None,
    file_loader: FileLoader | None = None,
    reporter: DiagnosticReporter | None = None,
    after_load: AfterLoadHook | None = None,
    theme_events: ThemeEvents | None = None,
    environ: Mapping[str, str] | None = None,
    progress: Callable[[str], None] | None = None,
) -> MachineSettings:
    """Resolve, build, and load the machine files for the current host.

    Parameters
    ----------
    slug / vendor / app:
        Naming context for the default directory and the environment prefix.
    directory:
        Overrides the directory holding machine files.
    precedence:
        Tier order; defaults to ``type, name, user``.
    on_error:
        ``silent``, ``warn`` (default), or ``fatal``.
    verbose:
        Lets the default file loader report its own progress.
    identity_resolver / file_loader / reporter:
        Replace the default adapters. ``files`` and ``config`` are only
        populated when the file loader is a :class:`MachineFileLoader`.
    after_load:
        Callback run once after a pass that loaded at least one file.
    theme_events:
        Channel the ``after_load`` callback subscribes to afterwards.
    environ:
        Environment mapping; defaults to :data:`os.environ`.
    progress:
        Sink for the default file loader's progress messages.

    Raises
    ------
    MachineUndetermined / NothingLoaded
        Only under the ``fatal`` policy.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> _ = (Path(tmp.name) / "name-bob-pc.toml").write_text("[fonts]\\nsize = 12\\n", encoding="utf-8")
    >>> result = read_machine_settings(
    ...     slug="demo",
    ...     directory=tmp.name,
    ...     identity_resolver=DefaultIdentityResolver(hostname="bob-pc", platform="linux", user="bob"),
    ... )
    >>> [Path(path).name for path in result.loaded]
    ['name-bob-pc']
    >>> result.config.get("fonts.size")
    12
    >>> tmp.cleanup()
    """

    options = resolve_options(
        slug=slug,
        vendor=vendor,
        app=app,
        directory=directory,
        precedence=precedence,
        on_error=on_error,
        verbose=verbose,
        environ=environ,
    )
    with trace_pass():
        resolver = identity_resolver or DefaultIdentityResolver(
            hostname=options.name, platform=options.type, user=options.user, env=environ
        )
        identity = resolver.resolve()
        tiers = build_candidates(identity, options.precedence)

        loader = file_loader if file_loader is not None else MachineFileLoader(verbose=options.verbose, progress=progress)
        recorded = len(loader.loaded) if isinstance(loader, MachineFileLoader) else 0
        loaded = load_tiers(
            tiers,
            options.directory,
            policy=options.on_error,
            load_file=loader,
            reporter=reporter if reporter is not None else LoggingDiagnosticReporter(),
        )

        records = loader.loaded[recorded:] if isinstance(loader, MachineFileLoader) else []
        files = _tag_tiers(records, tiers, loaded, options.directory)
        config = EMPTY_CONFIG
        if files:
            data, meta = merge_files(files)
            config = Config(data, meta)

        subscription = None
        if loaded and after_load is not None:
            subscription = attach_after_load(after_load, theme_events)

        log_info("machine_settings_read", tier=None, path=str(options.directory), loaded=len(loaded))
    return MachineSettings(
        identity=identity,
        tiers=tiers,
        directory=options.directory,
        loaded=loaded,
        files=files,
        config=config,
        subscription=subscription,
    )


def load_machine_settings(
    *,
    slug: str,
    on_error: str | ErrorPolicy | None = None,
    verbose: bool | None = None,
    **kwargs: object,
) -> list[str]:
    """Load the machine files and return the candidate paths that loaded.

    Accepts the same keyword arguments as :func:`read_machine_settings`;
    ``on_error`` selects the severity and ``verbose`` is handed to the file
    loader.
    """

    result = read_machine_settings(slug=slug, on_error=on_error, verbose=verbose, **kwargs)  # type: ignore[arg-type]
    return result.loaded


def _tag_tiers(
    files: Sequence[LoadedFile],
    tiers: Iterable[CandidateTier],
    loaded: Sequence[str],
    directory: Path,
) -> tuple[LoadedFile, ...]:
    """Attach the facet kind of the tier that loaded each file.

    Each satisfied tier contributed exactly one loaded path and one file
    record, both in tier order, so a single forward scan pairs them even when
    two tiers share a candidate name.
    """

    kinds: list[str] = []
    remaining = iter(loaded)
    pending = next(remaining, None)
    for tier in tiers:
        if pending is None:
            break
        if pending in {str(directory / name) for name in tier.candidate_names if name}:
            kinds.append(tier.kind.value)
            pending = next(remaining, None)
    return tuple(dataclasses.replace(entry, tier=kind) for entry, kind in zip(files, kinds))


__all__ = [
    "MachineSettings",
    "load_machine_settings",
    "read_machine_settings",
    "resolve_options",
]
