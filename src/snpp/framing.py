"""CR LF framed reads and writes with a per-call deadline.

A frame is complete once the most recently read chunk ends with the
terminator. The deadline covers the whole call, not each chunk.
"""
from __future__ import annotations

import logging
import time

from .constants import DEFAULT_TIMEOUT_S, ENCODING, READ_CHUNK_SIZE, TERMINATOR
from .net import Transport

logger = logging.getLogger(__name__)


def _remaining(deadline: float, what: str) -> float:
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise TimeoutError(f"{what} deadline exceeded")
    return remaining


def ends_frame(chunk: bytes) -> bool:
    if len(chunk) < len(TERMINATOR):
        return False
    return chunk[-2:] == TERMINATOR


def read_frame(conn: Transport, timeout_s: float = DEFAULT_TIMEOUT_S) -> str:
    deadline = time.monotonic() + timeout_s
    buf = bytearray()

    while True:
        chunk = conn.recv(READ_CHUNK_SIZE, _remaining(deadline, "read"))
        if not chunk:
            # peer closed; whatever arrived is the answer
            logger.debug("end of input after %d bytes", len(buf))
            break
        buf.extend(chunk)
        if ends_frame(chunk):
            break

    text = buf.decode(ENCODING, errors="replace")
    logger.debug("<- %r", text)
    return text


def write_frame(conn: Transport, command: str, timeout_s: float = DEFAULT_TIMEOUT_S) -> None:
    deadline = time.monotonic() + timeout_s
    logger.debug("-> %r", command)
    conn.send(command.encode(ENCODING), _remaining(deadline, "write"))
