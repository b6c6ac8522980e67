from __future__ import annotations

import enum

from .constants import TERMINATOR

_EOL = TERMINATOR.decode("ascii")


class Command(str, enum.Enum):
    PAGE = "PAGE"
    MESS = "MESS"
    SEND = "SEND"
    QUIT = "QUIT"

    @property
    def takes_argument(self) -> bool:
        return self in (Command.PAGE, Command.MESS)


def build_command(command: Command, argument: str | None = None) -> str:
    """Format one command line, e.g. ``"PAGE 5551234 \\r\\n"``.

    Gateways expect the space before CR LF even when there is no argument.
    """
    if command.takes_argument:
        if argument is None:
            raise ValueError(f"{command.value} needs an argument")
        if "\r" in argument or "\n" in argument:
            raise ValueError(f"{command.value} argument may not contain CR or LF")
        return f"{command.value} {argument} {_EOL}"
    if argument is not None:
        raise ValueError(f"{command.value} takes no argument")
    return f"{command.value} {_EOL}"


def status_code(response: str) -> int | None:
    head = response[:3]
    if len(head) == 3 and head.isascii() and head.isdigit():
        return int(head)
    return None
