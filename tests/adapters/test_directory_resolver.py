from __future__ import annotations

from pathlib import Path

from lib_machine_settings.adapters.path_resolvers.default import MACHINE_DIRNAME, DefaultDirectoryResolver


def test_linux_uses_xdg_config_home(tmp_path: Path) -> None:
    resolver = DefaultDirectoryResolver(slug="demo", env={"XDG_CONFIG_HOME": str(tmp_path)}, platform="linux")
    assert resolver.machine_dir() == tmp_path / "demo" / MACHINE_DIRNAME


def test_linux_without_xdg_uses_home(monkeypatch) -> None:
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    resolver = DefaultDirectoryResolver(slug="demo", platform="linux")
    assert resolver.machine_dir() == Path.home() / ".config" / "demo" / "machine"


def test_macos_uses_vendor_and_app(tmp_path: Path) -> None:
    resolver = DefaultDirectoryResolver(
        slug="demo",
        vendor="Acme",
        app="Demo",
        env={"LIB_MACHINE_SETTINGS_MAC_HOME_ROOT": str(tmp_path)},
        platform="darwin",
    )
    assert resolver.machine_dir() == tmp_path / "Acme" / "Demo" / "machine"


def test_windows_prefers_override_then_appdata(tmp_path: Path) -> None:
    appdata = tmp_path / "appdata"
    resolver = DefaultDirectoryResolver(slug="demo", env={"APPDATA": str(appdata)}, platform="win32")
    assert resolver.machine_dir() == appdata / "demo" / "demo" / "machine"

    override = tmp_path / "override"
    resolver = DefaultDirectoryResolver(
        slug="demo",
        vendor="Acme",
        env={"APPDATA": str(appdata), "LIB_MACHINE_SETTINGS_APPDATA": str(override)},
        platform="win32",
    )
    assert resolver.machine_dir() == override / "Acme" / "demo" / "machine"
