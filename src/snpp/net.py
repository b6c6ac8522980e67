from __future__ import annotations

import logging
import socket
from typing import Protocol

from .constants import DEFAULT_TIMEOUT_S

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """What the handshake needs from a connection.

    ``timeout_s`` is the time left on the caller's deadline; implementations
    raise ``TimeoutError`` (or another ``OSError``) when it runs out. An
    empty ``recv`` means the peer closed its side.
    """

    def recv(self, bufsize: int, timeout_s: float) -> bytes: ...

    def send(self, data: bytes, timeout_s: float) -> None: ...

    def close(self) -> None: ...


class TcpConnection:
    def __init__(self, sock: socket.socket):
        self.sock = sock
        self._writer = sock.makefile("wb")
        self._closed = False

    @classmethod
    def connect(
        cls,
        host: str,
        port: int,
        timeout_s: float = DEFAULT_TIMEOUT_S,
    ) -> "TcpConnection":
        sock = socket.create_connection((host, port), timeout=timeout_s)
        logger.info("connected to %s:%d", host, port)
        return cls(sock)

    @property
    def closed(self) -> bool:
        return self._closed

    def recv(self, bufsize: int, timeout_s: float) -> bytes:
        self.sock.settimeout(timeout_s)
        return self.sock.recv(bufsize)

    def send(self, data: bytes, timeout_s: float) -> None:
        self.sock.settimeout(timeout_s)
        self._writer.write(data)
        self._writer.flush()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._writer.close()
        except OSError as e:
            # a failed send can leave bytes behind in the buffer
            logger.debug("dropping unsent bytes on close: %s", e)
        finally:
            self.sock.close()

    def __enter__(self) -> "TcpConnection":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
