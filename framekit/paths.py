"""Path string helpers and simple folder utilities using forward slashes."""

from __future__ import annotations

import fnmatch
import os
from collections.abc import Iterable

from framekit.strings import replace_all, split_string

__all__ = [
    "exist_file",
    "exist_directory",
    "combine",
    "get_directory_name",
    "get_extension",
    "get_file_name",
    "get_file_name_without_extension",
    "get_files",
    "create_folder",
    "create_folders",
]


def _forward(path: str) -> str:
    return replace_all(path, "\\", "/")


def exist_file(path: str) -> bool:
    """Return True when anything (file or directory) exists at ``path``."""
    return os.path.exists(path)


def exist_directory(path: str) -> bool:
    """Return True when ``path`` is an existing directory."""
    return os.path.isdir(path)


def combine(*args: str | Iterable[str]) -> str:
    """Concatenate path parts as given, without inserting separators.

    Accepts either several strings or a single iterable of strings.
    """
    if len(args) == 1 and not isinstance(args[0], str):
        return "".join(args[0])
    return "".join(args)  # type: ignore[arg-type]


def get_directory_name(path: str) -> str:
    """Return everything up to and including the last slash."""
    path = _forward(path)
    return path[: path.rfind("/") + 1]


def get_extension(path: str) -> str:
    """Return the text after the last dot, or the whole path if there is none."""
    path = _forward(path)
    return path[path.rfind(".") + 1 :]


def get_file_name(path: str) -> str:
    """Return the text after the last slash."""
    path = _forward(path)
    return path[path.rfind("/") + 1 :]


def get_file_name_without_extension(path: str) -> str:
    """Return the file name with its last extension removed."""
    name = get_file_name(path)
    index = name.rfind(".")
    return name if index < 0 else name[:index]


def get_files(path: str, pattern: str, find_sub_folder: bool) -> list[str]:
    """List files in ``path`` whose names match ``pattern``.

    ``path`` is used as a prefix and should end with a slash. Directories
    are only entered when their own name matches ``pattern``, recursion is
    enabled and the name does not start with a dot.
    """
    files: list[str] = []
    try:
        entries = sorted(os.scandir(path or "."), key=lambda entry: entry.name)
    except OSError:
        return files
    for entry in entries:
        if not fnmatch.fnmatch(entry.name, pattern):
            continue
        if entry.is_dir():
            if find_sub_folder and not entry.name.startswith("."):
                files.extend(get_files(path + entry.name + "/", pattern, find_sub_folder))
        else:
            files.append(path + entry.name)
    return files


def create_folder(path: str) -> None:
    """Create a single directory if it is not already there.

    Failures (such as a missing parent) are ignored.
    """
    if not exist_directory(path):
        try:
            os.mkdir(path)
        except OSError:
            pass


def create_folders(path: str) -> None:
    """Create every directory along ``path``, one level at a time."""
    path = _forward(path)
    current = "/" if path.startswith("/") else ""
    for folder in split_string(path, "/"):
        current += folder + "/"
        create_folder(current)