"""Handshake driver and the one-call ``send_page`` entry point.

Following the simple example in RFC 1861 section 4.1.1::

    <- 220 gateway ready
    -> PAGE <pager id>
    <- 250
    -> MESS <message>
    <- 250
    -> SEND
    <- 250
    -> QUIT
    <- 221

The first response that does not carry the expected status ends the
exchange; nothing after it is sent.
"""
from __future__ import annotations

import logging
import time
from contextlib import closing
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from .commands import Command, build_command, status_code
from .constants import CLOSING, DEFAULT_TIMEOUT_S, OK, READY
from .errors import ErrorKind, SnppError
from .framing import read_frame, write_frame
from .net import TcpConnection, Transport

logger = logging.getLogger(__name__)

Connector = Callable[[str, int, float], Transport]


@dataclass(frozen=True, slots=True)
class Step:
    command: Optional[Command]
    expect: int
    failure: ErrorKind

    @property
    def name(self) -> str:
        return self.command.value if self.command else "greeting"


STEPS: Tuple[Step, ...] = (
    Step(None, READY, ErrorKind.GREETING_REJECTED),
    Step(Command.PAGE, OK, ErrorKind.PAGER_REJECTED),
    Step(Command.MESS, OK, ErrorKind.MESSAGE_REJECTED),
    Step(Command.SEND, OK, ErrorKind.SEND_REJECTED),
    Step(Command.QUIT, CLOSING, ErrorKind.QUIT_NOT_ACKNOWLEDGED),
)

Exchange = List[Tuple[Step, Optional[str]]]


def plan_exchange(pager_id: str, message: str) -> Exchange:
    """Pair every step with the line it sends (``None`` for the greeting).

    Raises ``ValueError`` for arguments that cannot be framed, before any
    connection is made.
    """
    arguments = {Command.PAGE: pager_id, Command.MESS: message}
    exchange: Exchange = []
    for step in STEPS:
        line = None
        if step.command is not None:
            line = build_command(step.command, arguments.get(step.command))
        exchange.append((step, line))
    return exchange


@dataclass(slots=True)
class Handshake:
    conn: Transport
    timeout_s: float = DEFAULT_TIMEOUT_S
    responses: List[str] = field(default_factory=list)

    def run(self, exchange: Exchange) -> None:
        for step, line in exchange:
            try:
                if line is not None:
                    write_frame(self.conn, line, self.timeout_s)
                response = read_frame(self.conn, self.timeout_s)
            except OSError as e:
                logger.warning("%s: %s", step.name, e)
                raise SnppError(ErrorKind.TRANSPORT) from e

            self.responses.append(response)
            if not response.startswith(str(step.expect)):
                logger.warning(
                    "%s: expected %d, got %s",
                    step.name,
                    step.expect,
                    status_code(response),
                )
                raise SnppError(step.failure, response)


@dataclass(slots=True)
class PageResult:
    error: Optional[SnppError] = None
    responses: List[str] = field(default_factory=list)
    duration_s: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error else None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


def _dial(connect: Connector, host: str, port: int, timeout_s: float) -> Transport:
    try:
        return connect(host, port, timeout_s)
    except OSError as e:
        logger.warning("connect to %s:%d failed: %s", host, port, e)
        raise SnppError(ErrorKind.CONNECTION_FAILED) from e


def send_page(
    host: str,
    port: int,
    pager_id: str,
    message: str,
    *,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    connect: Connector = TcpConnection.connect,
) -> PageResult:
    """Deliver one page through the gateway at ``host:port``.

    Network and gateway failures are reported in the returned
    ``PageResult`` rather than raised. The connection is closed before
    this returns, whatever the outcome.
    """
    exchange = plan_exchange(pager_id, message)
    start = time.monotonic()
    result = PageResult()

    try:
        with closing(_dial(connect, host, port, timeout_s)) as conn:
            handshake = Handshake(conn, timeout_s, result.responses)
            handshake.run(exchange)
    except SnppError as e:
        result.error = e
    else:
        logger.info("page to %s accepted by %s:%d", pager_id, host, port)

    result.duration_s = time.monotonic() - start
    return result
