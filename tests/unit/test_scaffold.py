from __future__ import annotations

from pathlib import Path

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[no-redef]

from lib_machine_settings.domain.identity import MachineIdentity
from lib_machine_settings.examples import MachineFileSpec, scaffold_machine_files

IDENTITY = MachineIdentity.from_values(name="Bob-PC", type="gnu/linux", user="bob")


def test_scaffold_writes_composite_names_in_default_order(tmp_path: Path) -> None:
    written = scaffold_machine_files(tmp_path / "machine", IDENTITY)
    assert [path.name for path in written] == ["type-gnu-linux.toml", "name-bob-pc.toml", "user-bob.toml"]
    assert all(path.parent == tmp_path / "machine" for path in written)


def test_scaffold_bare_names(tmp_path: Path) -> None:
    written = scaffold_machine_files(tmp_path, IDENTITY, kinds=["user"], composite=False)
    assert [path.name for path in written] == ["bob.toml"]


def test_scaffold_template_is_valid_toml(tmp_path: Path) -> None:
    (path,) = scaffold_machine_files(tmp_path, IDENTITY, kinds=["name"])
    text = path.read_text(encoding="utf-8")
    assert 'name "Bob-PC"' in text
    assert tomllib.loads(text) == {}


def test_scaffold_respects_existing_files_unless_forced(tmp_path: Path) -> None:
    target = tmp_path / "user-bob.toml"
    target.write_text('theme = "mine"\n', encoding="utf-8")
    assert scaffold_machine_files(tmp_path, IDENTITY, kinds=["user"]) == []
    assert target.read_text(encoding="utf-8") == 'theme = "mine"\n'
    assert scaffold_machine_files(tmp_path, IDENTITY, kinds=["user"], force=True) == [target]
    assert "theme" not in tomllib.loads(target.read_text(encoding="utf-8"))


def test_scaffold_skips_empty_facets(tmp_path: Path) -> None:
    identity = MachineIdentity.from_values(name="", type="linux", user="bob")
    written = scaffold_machine_files(tmp_path, identity, kinds=["name", "user"])
    assert [path.name for path in written] == ["user-bob.toml"]


def test_machine_file_spec_fields() -> None:
    spec = MachineFileSpec(name="bob.toml", content="# empty\n")
    assert (spec.name, spec.content) == ("bob.toml", "# empty\n")
