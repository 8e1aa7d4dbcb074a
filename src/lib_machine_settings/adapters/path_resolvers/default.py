"""Filesystem location of the machine-file directory.

Purpose
-------
Encapsulate the OS-specific rules for the default load directory so the
composition root stays platform-agnostic.

Contents
--------
* :class:`DefaultDirectoryResolver` – resolves ``<user config>/.../machine``.

System Role
-----------
Supplies the default ``directory`` of
:class:`lib_machine_settings.application.options.MachineOptions` and the
target directory of :func:`lib_machine_settings.examples.scaffold_machine_files`.
Environment overrides keep tests away from the real home directory.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Final, Mapping

from ...observability import log_debug

#: Sub-directory name that holds machine files inside the user config root.
MACHINE_DIRNAME: Final[str] = "machine"


class DefaultDirectoryResolver:
    """Resolve the per-user directory that holds machine files.

    Why
    ----
    Machine files are user configuration; they live next to the application's
    other per-user files following XDG, Application Support, or AppData
    conventions.
    """

    def __init__(
        self,
        *,
        slug: str,
        vendor: str | None = None,
        app: str | None = None,
        env: Mapping[str, str] | None = None,
        platform: str | None = None,
    ) -> None:
        """Store the naming context.

        Parameters
        ----------
        slug:
            Configuration slug used on Linux (``~/.config/<slug>/machine``).
        vendor / app:
            Namespace used on macOS and Windows; both default to *slug*.
        env:
            Mapping overriding ``os.environ`` values (useful for tests).
        platform:
            ``sys.platform`` clone; defaults to the running interpreter.
        """

        self.slug = slug
        self.vendor = vendor or slug
        self.application = app or slug
        self.env = {**os.environ, **(env or {})}
        self.platform = platform or sys.platform

    def machine_dir(self) -> Path:
        """Return the directory holding machine files for this platform.

        Examples
        --------
        >>> resolver = DefaultDirectoryResolver(slug="demo", env={"XDG_CONFIG_HOME": "/xdg"}, platform="linux")
        >>> resolver.machine_dir().as_posix()
        '/xdg/demo/machine'
        >>> resolver = DefaultDirectoryResolver(slug="demo", vendor="Acme", app="Demo",
        ...     env={"LIB_MACHINE_SETTINGS_APPDATA": "/appdata"}, platform="win32")
        >>> resolver.machine_dir().as_posix()
        '/appdata/Acme/Demo/machine'
        """

        if self.platform == "darwin":
            base = self._macos_root()
        elif self.platform.startswith("win"):
            base = self._windows_root()
        else:
            base = self._posix_root()
        directory = base / MACHINE_DIRNAME
        log_debug("machine_dir_resolved", tier=None, path=str(directory), platform=self.platform)
        return directory

    def _posix_root(self) -> Path:
        """Follow the XDG base directory specification."""

        xdg = self.env.get("XDG_CONFIG_HOME")
        base = Path(xdg) if xdg else Path.home() / ".config"
        return base / self.slug

    def _macos_root(self) -> Path:
        home_default = Path.home() / "Library/Application Support"
        home_root = Path(self.env.get("LIB_MACHINE_SETTINGS_MAC_HOME_ROOT", home_default))
        return home_root / self.vendor / self.application

    def _windows_root(self) -> Path:
        appdata = Path(
            self.env.get(
                "LIB_MACHINE_SETTINGS_APPDATA",
                self.env.get("APPDATA", Path.home() / "AppData" / "Roaming"),
            )
        )
        return appdata / self.vendor / self.application
