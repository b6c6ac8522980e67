from __future__ import annotations

TERMINATOR = b"\r\n"
ENCODING = "utf-8"

READY = 220
OK = 250
CLOSING = 221

READ_CHUNK_SIZE = 256
DEFAULT_TIMEOUT_S = 30.0  # gateways can be slow
DEFAULT_PORT = 444
