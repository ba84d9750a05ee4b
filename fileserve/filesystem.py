"""File and directory operations performed on behalf of clients."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


class FileSystemError(Exception):
    """Base class for failed file system commands."""

    reason = "Unknown error"

    def __init__(self, path: PathLike | None = None) -> None:
        super().__init__(self.reason if path is None else f"{self.reason}: {os.fspath(path)}")
        self.path = path


class IncorrectNameError(FileSystemError):
    reason = "Incorrect name"


class FileMissingError(FileSystemError):
    reason = "File don't exists"


class FileExistsAlreadyError(FileSystemError):
    reason = "File already exists"


class DirectoryMissingError(FileSystemError):
    reason = "Directory don't exists"


class DirectoryExistsAlreadyError(FileSystemError):
    reason = "Directory already exists"


@dataclass(frozen=True)
class Entry:
    """One item found in a directory."""

    name: str
    is_directory: bool
    path: Path


def list_entries(dir_path: PathLike) -> list[Entry]:
    """Return the entries of a directory."""
    if not os.path.isdir(dir_path):
        raise DirectoryMissingError(dir_path)
    with os.scandir(dir_path) as it:
        return [Entry(item.name, item.is_dir(), Path(item.path)) for item in it]


def delete(path: PathLike) -> None:
    """Remove a file or an empty directory."""
    if not os.path.exists(path):
        raise FileMissingError(path)
    if os.path.isdir(path) and not os.path.islink(path):
        os.rmdir(path)
    else:
        os.remove(path)


def _write(path: PathLike, text: str) -> None:
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text)
        handle.write("\n")


def create_file(path: PathLike, text: str) -> None:
    """Create a new file holding ``text`` and a trailing newline."""
    if os.path.exists(path):
        raise FileExistsAlreadyError(path)
    _write(path, text)


def rewrite_file(path: PathLike, text: str) -> None:
    """Replace the contents of an existing file."""
    if not os.path.exists(path):
        raise FileMissingError(path)
    _write(path, text)


def create_or_rewrite_file(path: PathLike, text: str) -> None:
    """Write ``text`` to a file, creating it if needed."""
    _write(path, text)


def _rename_in_place(path: PathLike, name: str | None) -> None:
    if name:
        source = os.path.normpath(path)
        os.rename(source, os.path.join(os.path.dirname(source), name))


def rename_file(path: PathLike, name: str | None = None) -> None:
    """Give a file a new name within its directory."""
    if not os.path.exists(path):
        raise FileMissingError(path)
    _rename_in_place(path, name)


def rename_directory(path: PathLike, name: str | None = None) -> None:
    """Give a directory a new name within its parent."""
    if not os.path.exists(path):
        raise DirectoryMissingError(path)
    _rename_in_place(path, name)


def move_file(old_path: PathLike, new_path: PathLike) -> None:
    """Move a file to a new path that must not exist yet."""
    if not os.path.exists(old_path):
        raise FileMissingError(old_path)
    if os.path.exists(new_path):
        raise FileExistsAlreadyError(new_path)
    parent = os.path.dirname(os.fspath(new_path))
    if not os.path.exists(parent or os.curdir):
        raise DirectoryMissingError(parent)
    os.rename(old_path, new_path)


def create_directory(path: PathLike) -> None:
    """Create a directory along with any missing parents."""
    if os.path.exists(path):
        raise DirectoryExistsAlreadyError(path)
    os.makedirs(path)