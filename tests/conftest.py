from __future__ import annotations

import socket
import threading
from typing import List, Optional, Sequence, Union

import pytest

Chunk = Union[bytes, BaseException]

GOOD_REPLIES = [
    b"220 SNPP gateway ready\r\n",
    b"250 Pager ID accepted\r\n",
    b"250 Message OK\r\n",
    b"250 Message sent successfully\r\n",
    b"221 OK, goodbye\r\n",
]


class ScriptedConnection:
    """In-memory transport: replays ``chunks`` on recv, records sends.

    An exception in ``chunks`` is raised by the recv that reaches it; an
    exhausted script reads as end-of-input.
    """

    def __init__(self, chunks: Sequence[Chunk] = (), send_error: Optional[BaseException] = None):
        self.chunks: List[Chunk] = list(chunks)
        self.send_error = send_error
        self.sent: List[bytes] = []
        self.recv_timeouts: List[float] = []
        self.close_calls = 0

    def recv(self, bufsize: int, timeout_s: float) -> bytes:
        self.recv_timeouts.append(timeout_s)
        if not self.chunks:
            return b""
        chunk = self.chunks.pop(0)
        if isinstance(chunk, BaseException):
            raise chunk
        assert len(chunk) <= bufsize
        return chunk

    def send(self, data: bytes, timeout_s: float) -> None:
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(data)

    def close(self) -> None:
        self.close_calls += 1


class LoopbackGateway:
    """One-shot TCP gateway on 127.0.0.1 that answers from a script.

    The first reply is sent on accept; each later reply waits for one
    command line. A ``None`` reply means go silent until the client hangs
    up. Whatever the client sends after the script ends lands in
    ``trailing``.
    """

    def __init__(self, replies: Sequence[Optional[bytes]]):
        self.replies = list(replies)
        self.received: List[bytes] = []
        self.trailing: Optional[bytes] = None
        self.listener = socket.create_server(("127.0.0.1", 0))
        self.listener.settimeout(10.0)
        self.port = self.listener.getsockname()[1]
        self.thread = threading.Thread(target=self._serve, daemon=True)
        self.thread.start()

    def _serve(self) -> None:
        conn, _ = self.listener.accept()
        conn.settimeout(10.0)
        with conn, conn.makefile("rb") as reader:
            for i, reply in enumerate(self.replies):
                if i > 0:
                    line = reader.readline()
                    if not line:
                        return
                    self.received.append(line)
                if reply is None:
                    break
                conn.sendall(reply)
            self.trailing = reader.read()

    def stop(self) -> None:
        self.thread.join(timeout=10.0)
        self.listener.close()


@pytest.fixture
def scripted():
    return ScriptedConnection


@pytest.fixture
def gateway():
    started: List[LoopbackGateway] = []

    def start(*replies: Optional[bytes]) -> LoopbackGateway:
        gw = LoopbackGateway(replies)
        started.append(gw)
        return gw

    yield start
    for gw in started:
        gw.stop()


@pytest.fixture
def good_replies() -> List[bytes]:
    return list(GOOD_REPLIES)
