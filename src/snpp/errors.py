from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    CONNECTION_FAILED = "gateway could not be reached"
    TRANSPORT = "network error talking to gateway"
    GREETING_REJECTED = "gateway did not accept connection"
    PAGER_REJECTED = "gateway did not accept pager number"
    MESSAGE_REJECTED = "gateway did not accept message"
    SEND_REJECTED = "gateway did not send message"
    QUIT_NOT_ACKNOWLEDGED = "gateway did not close remote connection"

    @property
    def is_rejection(self) -> bool:
        return self not in (ErrorKind.CONNECTION_FAILED, ErrorKind.TRANSPORT)


class SnppError(Exception):
    """A page that did not go through.

    ``kind`` names the stage that failed. For gateway rejections
    ``response`` holds the line the gateway answered with; network
    failures carry the underlying ``OSError`` as ``__cause__``.
    """

    def __init__(self, kind: ErrorKind, response: str | None = None):
        detail = kind.value
        if response:
            detail = f"{detail}: {response.strip()!r}"
        super().__init__(detail)
        self.kind = kind
        self.response = response
