"""Error-severity policy applied when a load pass cannot produce files."""

from __future__ import annotations

from enum import Enum
from typing import Final

from .errors import InvalidPolicy


class ErrorPolicy(str, Enum):
    """How a failed load pass is reported.

    ``SILENT`` reports nothing, ``WARN`` reports one non-fatal diagnostic, and
    ``FATAL`` raises. All three return the same (possibly empty) result when
    they do not raise.
    """

    SILENT = "silent"
    WARN = "warn"
    FATAL = "fatal"

    @classmethod
    def parse(cls, value: str | ErrorPolicy | None) -> ErrorPolicy:
        """Return the policy named by *value*; ``None`` means :attr:`WARN`.

        Examples
        --------
        >>> ErrorPolicy.parse("suppress")
        <ErrorPolicy.SILENT: 'silent'>
        >>> ErrorPolicy.parse("hard-fail")
        <ErrorPolicy.FATAL: 'fatal'>
        >>> ErrorPolicy.parse(None)
        <ErrorPolicy.WARN: 'warn'>
        """

        if value is None:
            return cls.WARN
        if isinstance(value, ErrorPolicy):
            return value
        alias = str(value).strip().lower()
        try:
            return _ALIASES[alias]
        except KeyError as exc:
            raise InvalidPolicy(f"Unknown error policy: {value!r} (expected silent, warn, or fatal)") from exc


_ALIASES: Final[dict[str, ErrorPolicy]] = {
    "silent": ErrorPolicy.SILENT,
    "suppress": ErrorPolicy.SILENT,
    "ignore": ErrorPolicy.SILENT,
    "nil": ErrorPolicy.SILENT,
    "warn": ErrorPolicy.WARN,
    "warning": ErrorPolicy.WARN,
    "fatal": ErrorPolicy.FATAL,
    "error": ErrorPolicy.FATAL,
    "hard-fail": ErrorPolicy.FATAL,
}
