"""Simple Network Paging Protocol (SNPP) client

Sends one page per connection using the PAGE/MESS/SEND/QUIT exchange:
- framed reads and writes with a per-call deadline
- a linear handshake that stops at the first rejected status code
- a typed result naming the stage that failed

Every invocation owns its connection and closes it before returning.
"""

from .client import PageResult, send_page
from .errors import ErrorKind, SnppError

__all__ = ["ErrorKind", "PageResult", "SnppError", "send_page"]
