"""TCP server that runs file system commands sent by clients.

A request is one block of at most ``buffer_size`` bytes holding a command
and its arguments separated by spaces. Commands that upload text are
followed by as many ``buffer_size`` blocks as the announced length needs.
Every reply starts with a one-byte :class:`ResponseStatus`, is followed by
a message and is padded with zero bytes to ``buffer_size``.
"""

from __future__ import annotations

import os
import socket
import threading
from enum import IntEnum
from typing import Callable

from . import filesystem
from .filesystem import FileSystemError
from .textutil import div_round_up, is_number, split_nonempty

DEFAULT_ADDRESS = "127.0.0.1"
DEFAULT_PORT = 8000
DEFAULT_BUFFER_SIZE = 1024

_BACKLOG = 3
_ACCEPT_POLL_SECONDS = 0.2


class ResponseStatus(IntEnum):
    """First byte of every reply."""

    OK = 1
    BAD_REQUEST = 2
    INCORRECT_ARGUMENTS = 3
    INCORRECT_COMMAND = 4
    COMMAND_CANT_BE_EXECUTED = 5
    SERVER_ERROR = 128


class StartError(Exception):
    """The server could not be started."""


class AlreadyStartedError(StartError):
    """The server is already running."""


class SocketCreationError(StartError):
    """The listening socket could not be created."""


class BindingError(StartError):
    """The listening socket could not be bound to the address."""


class ListeningError(StartError):
    """The bound socket could not start listening."""


class BaseDirectoryMissingError(StartError):
    """The directory the server should serve does not exist."""


def make_response(
    error: FileSystemError | type[FileSystemError] | None = None, message: str = ""
) -> bytes:
    """Build a reply for the outcome of a file system command.

    ``error`` is None on success; otherwise the failure (instance or class)
    selects the status byte and the reason placed before ``message``.
    """
    if error is None:
        return bytes([ResponseStatus.OK]) + message.encode("utf-8")
    kind = error if isinstance(error, type) else type(error)
    if issubclass(kind, FileSystemError) and kind is not FileSystemError:
        status, reason = ResponseStatus.COMMAND_CANT_BE_EXECUTED, kind.reason
    else:
        status, reason = ResponseStatus.SERVER_ERROR, FileSystemError.reason
    return bytes([status]) + (reason + message).encode("utf-8")


def _reply(status: ResponseStatus, text: str) -> bytes:
    return bytes([status]) + text.encode("utf-8")


def _run(operation: Callable[[], str | None]) -> bytes:
    try:
        message = operation()
    except FileSystemError as exc:
        return make_response(exc)
    except OSError:
        return make_response(FileSystemError())
    return make_response(None, message or "")


class Server:
    """Serves file system commands for one base directory."""

    def __init__(
        self,
        base_directory: str | os.PathLike[str],
        address: str = DEFAULT_ADDRESS,
        port: int = DEFAULT_PORT,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        self.base_directory = os.fspath(base_directory) + "/"
        self.address = address
        self.port = port
        self.buffer_size = buffer_size
        self._running = threading.Event()
        self._socket: socket.socket | None = None
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._running.is_set()

    def start(self) -> None:
        """Bind, listen and accept connections in a background thread.

        After a successful start ``port`` holds the port actually bound.
        """
        if not os.path.exists(self.base_directory):
            raise BaseDirectoryMissingError(self.base_directory)
        if self._running.is_set():
            raise AlreadyStartedError(f"{self.address}:{self.port}")
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        except OSError as exc:
            raise SocketCreationError(str(exc)) from exc
        try:
            sock.bind((self.address, self.port))
        except OSError as exc:
            sock.close()
            raise BindingError(f"{self.address}:{self.port}") from exc
        try:
            sock.listen(_BACKLOG)
        except OSError as exc:
            sock.close()
            raise ListeningError(f"{self.address}:{self.port}") from exc

        self.port = sock.getsockname()[1]
        sock.settimeout(_ACCEPT_POLL_SECONDS)
        self._socket = sock
        self._running.set()
        self._thread = threading.Thread(target=self._serve, args=(sock,), daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop accepting connections and close the listening socket."""
        if not self._running.is_set():
            return
        self._running.clear()
        if self._socket is not None:
            self._socket.close()
            self._socket = None
        if self._thread is not None:
            self._thread.join(timeout=2 * _ACCEPT_POLL_SECONDS + 1)
            self._thread = None

    def __enter__(self) -> Server:
        self.start()
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()

    def _serve(self, sock: socket.socket) -> None:
        while self._running.is_set():
            try:
                conn, _ = sock.accept()
            except socket.timeout:
                continue
            except OSError:
                break
            threading.Thread(target=self.handle_connection, args=(conn,), daemon=True).start()

    def handle_connection(self, conn: socket.socket) -> None:
        """Read one request from ``conn``, execute it, reply and close."""
        with conn:
            try:
                request = self._read_text(conn)
                response = self._dispatch(conn, split_nonempty(request))
                if len(response) < self.buffer_size:
                    response += bytes(self.buffer_size - len(response))
                conn.sendall(response)
            except ConnectionError:
                pass

    def _read_block(self, conn: socket.socket) -> bytes:
        data = bytearray()
        while len(data) < self.buffer_size:
            chunk = conn.recv(self.buffer_size - len(data))
            if not chunk:
                break
            data += chunk
        return bytes(data)

    def _read_text(self, conn: socket.socket) -> str:
        block = self._read_block(conn)
        return block.split(b"\0", 1)[0].decode("utf-8", "replace")

    def _resolve(self, relative: str) -> str:
        return os.path.normpath(self.base_directory + "/" + relative)

    def _dispatch(self, conn: socket.socket, args: list[str]) -> bytes:
        if not args:
            return _reply(ResponseStatus.INCORRECT_COMMAND, "Request must contain command")
        command = args[0]
        if command in ("show_files", "delete"):
            return self._path_command(command, args)
        if command in ("create_file", "rewrite_file", "create_or_rewrite_file"):
            return self._write_command(conn, command, args)
        if command in ("change_file_data", "change_directory_data"):
            return self._rename_command(command, args)
        if command == "replace_file":
            return self._replace_command(command, args)
        if command == "create_directory":
            return self._directory_command(command, args)
        return _reply(ResponseStatus.INCORRECT_COMMAND, f'It\'s no "{command}" command')

    def _path_command(self, command: str, args: list[str]) -> bytes:
        if len(args) < 2:
            return _reply(
                ResponseStatus.INCORRECT_ARGUMENTS,
                f' "{command}" command must have path to file as first argument'
                " and file length as second argument",
            )
        path = self._resolve(args[1])
        if command == "delete":
            return _run(lambda: filesystem.delete(path))

        def show() -> str:
            return "".join(
                f"{'directory' if entry.is_directory else 'file'} {entry.name} "
                for entry in filesystem.list_entries(path)
            )

        return _run(show)

    def _write_command(self, conn: socket.socket, command: str, args: list[str]) -> bytes:
        if len(args) < 3:
            return _reply(
                ResponseStatus.INCORRECT_ARGUMENTS,
                f' "{command}" command must have path to file as first argument'
                " and file length as second argument",
            )
        if not is_number(args[2]):
            return _reply(
                ResponseStatus.INCORRECT_ARGUMENTS,
                f' "{command}" command must have number as second argument',
            )
        file_size = int(args[2])
        path = self._resolve(args[1])
        text = "".join(
            self._read_text(conn) for _ in range(div_round_up(file_size, self.buffer_size))
        )
        writers = {
            "create_file": filesystem.create_file,
            "rewrite_file": filesystem.rewrite_file,
            "create_or_rewrite_file": filesystem.create_or_rewrite_file,
        }
        write = writers[command]
        return _run(lambda: write(path, text))

    def _rename_command(self, command: str, args: list[str]) -> bytes:
        if len(args) < 2:
            return _reply(
                ResponseStatus.INCORRECT_ARGUMENTS,
                f' "{command}" command must have path to file as first argument',
            )
        name: str | None = None
        if "--name" in args:
            position = args.index("--name") + 1
            if position >= len(args):
                return _reply(
                    ResponseStatus.INCORRECT_ARGUMENTS,
                    f' "{command}" command must have path to file after --name parameter',
                )
            name = args[position]
        path = self._resolve(args[1])
        rename = filesystem.rename_file if command == "change_file_data" else filesystem.rename_directory
        return _run(lambda: rename(path, name))

    def _replace_command(self, command: str, args: list[str]) -> bytes:
        if len(args) < 3:
            return _reply(
                ResponseStatus.INCORRECT_ARGUMENTS,
                f' "{command}" command must have old path to file as first argument'
                " and new path to file as second",
            )
        old_path = self._resolve(args[1])
        new_path = self._resolve(args[2])
        return _run(lambda: filesystem.move_file(old_path, new_path))

    def _directory_command(self, command: str, args: list[str]) -> bytes:
        if len(args) < 2:
            return _reply(
                ResponseStatus.INCORRECT_ARGUMENTS,
                f' "{command}" command must have path to folder as first argument',
            )
        path = self._resolve(args[1])
        return _run(lambda: filesystem.create_directory(path))