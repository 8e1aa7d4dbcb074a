"""Structured machine-file loaders.

Purpose
-------
Provide the default "load a file by path" primitive. Candidate names are
extensionless, so this adapter resolves the extension, parses the file into a
mapping, and records what it loaded.

Contents
--------
* :class:`BaseFileLoader` – shared read/validate helpers.
* :class:`TOMLFileLoader` / :class:`JSONFileLoader` / :class:`YAMLFileLoader` –
  format parsers.
* :class:`LoadedFile` – record of one successfully loaded machine file.
* :class:`MachineFileLoader` – the :class:`~lib_machine_settings.application.ports.FileLoader`
  implementation used by default.

System Role
-----------
Invoked by :func:`lib_machine_settings.application.loader.load_tiers` once per
candidate. Missing and malformed files both count as a failed candidate; they
never abort the pass.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Final, Mapping

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[no-redef]

import yaml

from ...domain.errors import InvalidFormat, NotFound
from ...observability import log_debug, log_error, log_info, make_event


class BaseFileLoader:
    """Common utilities shared by the structured file loaders."""

    format: str = ""

    def load(self, path: str) -> Mapping[str, object]:
        """Return the mapping stored in the file at *path*.

        Raises
        ------
        NotFound
            The file does not exist.
        InvalidFormat
            The file does not parse, or its top level is not a mapping.
        """

        payload = self._read(path)
        try:
            data = self._parse(payload)
        except (ValueError, yaml.YAMLError) as exc:
            # TOMLDecodeError, JSONDecodeError and UnicodeDecodeError are ValueErrors
            log_error("machine_file_invalid", tier=None, path=path, format=self.format, error=str(exc))
            raise InvalidFormat(f"Invalid {self.format.upper()} in {path}: {exc}") from exc
        return self._ensure_mapping(data, path=path)

    def _parse(self, payload: bytes) -> object:
        raise NotImplementedError

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes.

        Raises :class:`NotFound` when it is not a file and :class:`InvalidFormat`
        when it exists but cannot be read.
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Machine file not found: {path}")
        try:
            return file_path.read_bytes()
        except OSError as exc:
            log_error("machine_file_invalid", tier=None, path=path, format=self.format, error=str(exc))
            raise InvalidFormat(f"Cannot read {path}: {exc}") from exc

    @staticmethod
    def _ensure_mapping(data: object, *, path: str) -> Mapping[str, object]:
        """Ensure *data* is a mapping, otherwise raise :class:`InvalidFormat`.

        Examples
        --------
        >>> BaseFileLoader._ensure_mapping({"theme": "dark"}, path="demo")
        {'theme': 'dark'}
        >>> BaseFileLoader._ensure_mapping([1], path="demo")
        Traceback (most recent call last):
        ...
        lib_machine_settings.domain.errors.InvalidFormat: File demo did not produce a mapping
        """

        if not isinstance(data, Mapping):
            raise InvalidFormat(f"File {path} did not produce a mapping")
        return data


class TOMLFileLoader(BaseFileLoader):
    """Load TOML documents."""

    format = "toml"

    def _parse(self, payload: bytes) -> object:
        return tomllib.loads(payload.decode("utf-8"))


class JSONFileLoader(BaseFileLoader):
    """Load JSON documents."""

    format = "json"

    def _parse(self, payload: bytes) -> object:
        return json.loads(payload)


class YAMLFileLoader(BaseFileLoader):
    """Load YAML documents; an empty document is an empty mapping."""

    format = "yaml"

    def _parse(self, payload: bytes) -> object:
        data = yaml.safe_load(payload)
        return {} if data is None else data


#: Suffixes tried, in order, when resolving an extensionless candidate.
SUFFIX_LOADERS: Final[dict[str, BaseFileLoader]] = {
    ".toml": TOMLFileLoader(),
    ".json": JSONFileLoader(),
    ".yaml": YAMLFileLoader(),
    ".yml": YAMLFileLoader(),
}


@dataclass(frozen=True, slots=True)
class LoadedFile:
    """A machine file that loaded successfully.

    Attributes
    ----------
    candidate:
        Extensionless candidate path handed to the loader.
    path:
        Concrete file that was parsed.
    data:
        Parsed mapping.
    tier:
        Facet kind of the tier that loaded the file; filled in by the
        composition root once the tier is known.
    """

    candidate: str
    path: str
    data: Mapping[str, object]
    tier: str = ""


class MachineFileLoader:
    """Default file-loading primitive: resolve, parse, and record.

    Why
    ----
    Machine files are named after identity tokens and carry no extension; the
    author picks whichever structured format they like.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> _ = (Path(tmp.name) / "bob-pc.toml").write_text('theme = "dark"', encoding="utf-8")
    >>> loader = MachineFileLoader()
    >>> loader(str(Path(tmp.name) / "bob-pc")), loader(str(Path(tmp.name) / "bob"))
    (True, False)
    >>> loader.loaded[0].data["theme"]
    'dark'
    >>> tmp.cleanup()
    """

    def __init__(
        self,
        *,
        verbose: bool = False,
        progress: Callable[[str], None] | None = None,
        loaders: Mapping[str, BaseFileLoader] | None = None,
    ) -> None:
        """Configure progress reporting and the suffix table.

        Parameters
        ----------
        verbose:
            Emit ``Loading <path>...`` progress messages.
        progress:
            Sink for progress messages; defaults to an INFO log entry.
        loaders:
            Suffix to parser mapping, tried in insertion order.
        """

        self.verbose = verbose
        self._progress = progress or _log_progress
        self._loaders = dict(SUFFIX_LOADERS if loaders is None else loaders)
        self.loaded: list[LoadedFile] = []

    def __call__(self, path: str) -> bool:
        """Attempt the candidate *path*; return ``True`` when a file loaded."""

        resolved = self.resolve(path)
        if resolved is None:
            log_debug("machine_file_missing", **make_event(None, path))
            return False
        if self.verbose:
            self._progress(f"Loading {resolved}...")
        try:
            data = self._loaders[resolved.suffix.lower()].load(str(resolved))
        except (NotFound, InvalidFormat) as exc:
            log_debug("machine_file_rejected", **make_event(None, str(resolved), {"error": str(exc)}))
            return False
        self.loaded.append(LoadedFile(candidate=path, path=str(resolved), data=data))
        if self.verbose:
            self._progress(f"Loading {resolved}...done")
        log_debug("machine_file_loaded", **make_event(None, str(resolved), {"keys": len(data)}))
        return True

    def resolve(self, path: str) -> Path | None:
        """Return the concrete file for the candidate *path*, or ``None``.

        A candidate that already carries a supported suffix is used as is;
        otherwise each supported suffix is appended in order.
        """

        candidate = Path(path)
        if not candidate.name:
            return None
        if candidate.suffix.lower() in self._loaders and candidate.is_file():
            return candidate
        for suffix in self._loaders:
            option = candidate.with_name(candidate.name + suffix)
            if option.is_file():
                return option
        return None


def _log_progress(message: str) -> None:
    log_info("machine_file_progress", tier=None, path=None, message=message)
