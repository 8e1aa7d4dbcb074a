"""Identity resolver reading the host name, platform, and real user.

Purpose
-------
Implement the :class:`lib_machine_settings.application.ports.IdentityResolver`
protocol on top of :mod:`socket`, :mod:`sys`, :mod:`pwd`, and :mod:`getpass`.

Contents
--------
* :class:`DefaultIdentityResolver` – builds a fresh :class:`MachineIdentity`
  on every :meth:`~DefaultIdentityResolver.resolve` call.
* :func:`real_user` – login name of the human behind the process.

System Role
-----------
First stage of every load pass. Reads never raise: an unreadable facet
becomes the empty string and the failure surfaces later, only if nothing
loads.
"""

from __future__ import annotations

import getpass
import os
import socket
import sys
from typing import Callable, Mapping

from ...domain.identity import MachineIdentity
from ...observability import log_debug


class DefaultIdentityResolver:
    """Derive the machine identity from the running environment.

    Examples
    --------
    >>> resolver = DefaultIdentityResolver(hostname="Bob-PC", platform="linux", user="Bob")
    >>> resolver.resolve().as_dict()["name"]
    {'raw': 'Bob-PC', 'normalized': 'bob-pc'}
    """

    def __init__(
        self,
        *,
        hostname: str | None = None,
        platform: str | None = None,
        user: str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        """Store optional overrides for each facet.

        Parameters
        ----------
        hostname / platform / user:
            Raw facet values that bypass the environment read when given.
        env:
            Mapping consulted for ``SUDO_USER``; defaults to ``os.environ``.
        """

        self._hostname = hostname
        self._platform = platform
        self._user = user
        self._env = os.environ if env is None else env

    def resolve(self) -> MachineIdentity:
        """Return a freshly built identity; every facet is read on each call."""

        identity = MachineIdentity.from_values(
            name=self._hostname if self._hostname is not None else _read(socket.gethostname),
            type=self._platform if self._platform is not None else sys.platform,
            user=self._user if self._user is not None else real_user(self._env),
        )
        log_debug("identity_resolved", tier=None, path=None, identity=identity.as_dict())
        return identity


def real_user(env: Mapping[str, str] | None = None) -> str:
    """Return the login name of the human who started the process.

    Why
    ----
    Under ``sudo`` both the real and effective uid are root, but machine
    settings should follow the person, so ``SUDO_USER`` wins. Otherwise the
    real uid (not the effective one) is looked up in the password database;
    platforms without :mod:`pwd` fall back to :func:`getpass.getuser`.

    Returns
    -------
    str
        The login name, or ``""`` when nothing could be read.

    Examples
    --------
    >>> real_user({"SUDO_USER": "bob"})
    'bob'
    """

    environ = os.environ if env is None else env
    sudo_user = environ.get("SUDO_USER")
    if sudo_user:
        return sudo_user
    name = _read(_passwd_name)
    if name:
        return name
    return _read(getpass.getuser)


def _passwd_name() -> str:
    import pwd

    return pwd.getpwuid(os.getuid()).pw_name


def _read(reader: Callable[[], str]) -> str:
    """Call *reader*, mapping lookup failures to the empty string."""

    try:
        return reader() or ""
    except (OSError, KeyError, ImportError, AttributeError) as exc:
        log_debug("identity_read_failed", tier=None, path=None, reader=getattr(reader, "__name__", "?"), error=str(exc))
        return ""
