"""Command line entry point that serves a directory until Enter is pressed."""

from __future__ import annotations

import os
import sys
from typing import NamedTuple, Sequence

from .server import (
    DEFAULT_ADDRESS,
    DEFAULT_PORT,
    AlreadyStartedError,
    BaseDirectoryMissingError,
    BindingError,
    ListeningError,
    Server,
    SocketCreationError,
)
from .textutil import is_number

_VALUE_OPTIONS = ("--root_path", "--address", "--port")

_MISSING_VALUE = (
    'It must be at least one argument after "--root_path", "--address" and "--port"'
)
_PORT_NOT_NUMBER = 'It must be number after "--port"'


class ArgumentError(ValueError):
    """The command line could not be understood."""


class _Arguments(NamedTuple):
    root_path: str
    address: str
    port: int


def _program_directory() -> str:
    program = sys.argv[0] if sys.argv and sys.argv[0] else os.curdir
    return os.path.dirname(os.path.abspath(program))


def parse_args(argv: Sequence[str]) -> _Arguments:
    """Read ``--root_path``, ``--address`` and ``--port`` from ``argv``.

    Arguments that are not one of these options are ignored. Missing options
    fall back to the program's directory, the default address and port.
    """
    root_path = ""
    address = ""
    port: int | None = None

    args = iter(argv)
    for arg in args:
        if arg not in _VALUE_OPTIONS:
            continue
        value = next(args, None)
        if value is None:
            raise ArgumentError(_MISSING_VALUE)
        if arg == "--root_path":
            root_path = value
        elif arg == "--address":
            address = value
        elif not is_number(value):
            raise ArgumentError(_PORT_NOT_NUMBER)
        else:
            port = int(value)

    return _Arguments(
        root_path=root_path or _program_directory(),
        address=address or DEFAULT_ADDRESS,
        port=DEFAULT_PORT if port is None else port,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Start the server, wait for a line on standard input, then stop."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        options = parse_args(argv)
    except ArgumentError as exc:
        print(exc)
        return 0

    server = Server(options.root_path, options.address, options.port)
    try:
        server.start()
    except AlreadyStartedError:
        print("Server already started")
    except SocketCreationError:
        print("Failed to create socket")
    except (BindingError, OverflowError):
        print("Failed to bind socket")
    except ListeningError:
        print("Failed of listening")
    except BaseDirectoryMissingError:
        print("Directory don't exists")
    else:
        try:
            sys.stdin.readline()
        finally:
            server.stop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())