"""Scaffolding helpers for ``lib_machine_settings``."""

from .scaffold import MachineFileSpec, scaffold_machine_files

__all__ = [
    "MachineFileSpec",
    "scaffold_machine_files",
]
