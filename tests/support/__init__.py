"""Shared fixtures for machine-settings tests.

``create_machine_sandbox`` builds a throwaway machine directory plus the
environment variables that pin the identity facets, so CLI and end-to-end
tests never depend on the real host name or user.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from lib_machine_settings.adapters.env.default import default_env_prefix
from lib_machine_settings.adapters.identity.default import DefaultIdentityResolver

SLUG = "demo-app"


@dataclass(slots=True)
class MachineSandbox:
    """A machine directory with a pinned identity."""

    root: Path
    directory: Path
    slug: str
    hostname: str
    platform: str
    user: str
    env: dict[str, str] = field(default_factory=dict)

    def write(self, name: str, content: str = "") -> Path:
        """Write *content* to ``directory/name`` and return the path."""

        target = self.directory / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return target

    def resolver(self) -> DefaultIdentityResolver:
        return DefaultIdentityResolver(hostname=self.hostname, platform=self.platform, user=self.user)

    def apply_env(self, monkeypatch) -> None:
        for key, value in self.env.items():
            monkeypatch.setenv(key, value)


def create_machine_sandbox(
    tmp_path: Path,
    *,
    slug: str = SLUG,
    hostname: str = "bob-pc",
    platform: str = "gnu-linux",
    user: str = "bob",
) -> MachineSandbox:
    """Return a sandbox whose default machine directory lives under *tmp_path*."""

    xdg = tmp_path / "xdg"
    directory = xdg / slug / "machine"
    directory.mkdir(parents=True, exist_ok=True)
    prefix = default_env_prefix(slug)
    env = {
        "XDG_CONFIG_HOME": str(xdg),
        "LIB_MACHINE_SETTINGS_APPDATA": str(xdg),
        "LIB_MACHINE_SETTINGS_MAC_HOME_ROOT": str(xdg),
        f"{prefix}_MACHINE__DIR": str(directory),
        f"{prefix}_MACHINE__NAME": hostname,
        f"{prefix}_MACHINE__TYPE": platform,
        f"{prefix}_MACHINE__USER": user,
    }
    return MachineSandbox(
        root=tmp_path,
        directory=directory,
        slug=slug,
        hostname=hostname,
        platform=platform,
        user=user,
        env=env,
    )


__all__ = ["MachineSandbox", "SLUG", "create_machine_sandbox"]
