# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: lvlog
"""
Destinations a Logger can write to.

Any object with a ``write`` method will do. This module provides the two
built-in ones: a synchronous, truncated log file and a system log connection.
"""

from __future__ import annotations

import datetime
import os
import socket
import sys
from logging.handlers import SysLogHandler
from typing import IO, Protocol, runtime_checkable

from lvlog.errors import ConnectError, OpenError

DEFAULT_SYSLOG_ADDRESS = "/dev/log"

# Every record goes out at this fixed binding; the line carries no priority.
SYSLOG_PRIORITY = (SysLogHandler.LOG_USER << 3) | SysLogHandler.LOG_ERR


@runtime_checkable
class WriterProtocol(Protocol):
    """Anything accepting one complete log line per call."""

    def write(self, data: bytes, /) -> object: ...


def open_file_writer(path: str | os.PathLike[str]) -> IO[bytes]:
    """Open ``path`` for synchronous writes, erasing previous contents.

    The file is created with mode 0600 if it does not exist.

    Raises:
        OpenError: If the file cannot be opened or created
    """
    flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_SYNC", 0)
    try:
        fd = os.open(path, flags, 0o600)
    except OSError as exc:
        raise OpenError(
            f"Can't open log file '{os.fspath(path)}': {exc}", path=os.fspath(path)
        ) from exc
    return os.fdopen(fd, "wb")


class SyslogWriter:
    """Connection to the local system log.

    Each write is sent as one record, ``<PRI>Mmm dd HH:MM:SS ident[pid]: line``.
    """

    def __init__(
        self, address: str = DEFAULT_SYSLOG_ADDRESS, ident: str | None = None
    ) -> None:
        """Connect to the syslog socket at ``address``.

        Datagram sockets are tried first, then stream sockets.

        Raises:
            ConnectError: If the system log is unavailable
        """
        if ident is None:
            ident = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "python"
        self.address = address
        self.ident = ident
        self._pid = os.getpid()
        self._socket = self._connect(address)

    @staticmethod
    def _connect(address: str) -> socket.socket:
        family = getattr(socket, "AF_UNIX", None)
        if family is None:
            raise ConnectError(
                "Can't open SYSLOG connection: unix sockets are not supported",
                address=address,
            )
        last_exc: OSError | None = None
        for socktype in (socket.SOCK_DGRAM, socket.SOCK_STREAM):
            sock = socket.socket(family, socktype)
            try:
                sock.connect(address)
            except OSError as exc:
                sock.close()
                last_exc = exc
                continue
            return sock
        raise ConnectError(
            f"Can't open SYSLOG connection: {last_exc}", address=address
        ) from last_exc

    def write(self, data: bytes) -> int:
        now = datetime.datetime.now()
        stamp = f"{now:%b} {now.day:2d} {now:%H:%M:%S}"
        header = f"<{SYSLOG_PRIORITY}>{stamp} {self.ident}[{self._pid}]: "
        record = header.encode("utf-8") + data
        if self._socket.type == socket.SOCK_STREAM:
            self._socket.sendall(record if record.endswith(b"\n") else record + b"\n")
        else:
            self._socket.send(record)
        return len(data)

    def close(self) -> None:
        self._socket.close()

    def __repr__(self) -> str:
        return f"SyslogWriter(address={self.address!r}, ident={self.ident!r})"
