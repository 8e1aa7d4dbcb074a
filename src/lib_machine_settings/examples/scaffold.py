"""Machine-file scaffolding helpers.

Purpose
-------
Create starter machine files named after the current host's candidate tokens,
so a new host can be onboarded without working out the normalised names by
hand. Outer ring of the architecture; no runtime coupling to the load pass.

Contents
    - ``MachineFileSpec``: relative file name plus template text.
    - ``scaffold_machine_files``: public orchestration.
    - ``_build_specs``: one spec per requested facet kind.
    - ``_should_write``: skip-or-overwrite decision.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from ..application.candidates import candidate_names
from ..domain.identity import DEFAULT_PRECEDENCE, FacetKind, MachineIdentity, parse_precedence

_TEMPLATE = """\
# Machine settings for {kind} "{raw}".
# Loaded when the {kind} tier of a load pass reaches this file; files loaded
# later in the pass override keys set here.
#
# [fonts]
# family = "monospace"
# size = 11
"""


@dataclass(slots=True)
class MachineFileSpec:
    """A single starter file to be written.

    Attributes
    ----------
    name:
        File name relative to the machine directory, suffix included.
    content:
        Template text.
    """

    name: str
    content: str


def scaffold_machine_files(
    directory: str | Path,
    identity: MachineIdentity,
    *,
    kinds: Iterable[str | FacetKind] | None = None,
    composite: bool = True,
    force: bool = False,
    suffix: str = ".toml",
) -> list[Path]:
    """Write starter machine files for *identity* into *directory*.

    Parameters
    ----------
    directory:
        Machine directory (created when missing).
    identity:
        Identity whose tokens name the files.
    kinds:
        Facet kinds to scaffold; defaults to all three.
    composite:
        Use the ``"<kind>-<value>"`` name instead of the bare value.
    force:
        Overwrite existing files instead of leaving them untouched.
    suffix:
        File suffix; the template is TOML.

    Returns
    -------
    list[pathlib.Path]
        Files written during this call.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> identity = MachineIdentity.from_values(name="Bob-PC", type="linux", user="bob")
    >>> [path.name for path in scaffold_machine_files(tmp.name, identity, kinds=["name"])]
    ['name-bob-pc.toml']
    >>> scaffold_machine_files(tmp.name, identity, kinds=["name"])
    []
    >>> tmp.cleanup()
    """

    base = Path(directory)
    order = DEFAULT_PRECEDENCE if kinds is None else parse_precedence(kinds)
    written: list[Path] = []
    for spec in _build_specs(identity, order, composite=composite, suffix=suffix):
        target = base / spec.name
        if not _should_write(target, force):
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(spec.content, encoding="utf-8")
        written.append(target)
    return written


def _build_specs(
    identity: MachineIdentity,
    kinds: Iterable[FacetKind],
    *,
    composite: bool,
    suffix: str,
) -> Iterator[MachineFileSpec]:
    """Yield one spec per kind whose token is non-empty."""

    for kind in kinds:
        facet = identity[kind]
        composite_name, bare_name = candidate_names(facet)
        stem = composite_name if composite else bare_name
        if not stem or not facet.normalized_value:
            continue
        content = _TEMPLATE.format(kind=kind.value, raw=facet.raw_value.replace('"', "'"))
        yield MachineFileSpec(name=f"{stem}{suffix}", content=content)


def _should_write(target: Path, force: bool) -> bool:
    return force or not target.exists()
