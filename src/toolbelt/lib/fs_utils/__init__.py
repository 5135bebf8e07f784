"""
Helpers for common filesystem operations in command-line tools.

Each helper checks for the existence (or absence) of its target before acting on it, and reports problems using the
`toolbelt.lib.error_utils` taxonomy:

- `NotFoundError` if an entry that should be there is missing
- `AlreadyExistsError` if a create-only operation finds its destination taken
- `FileIOError` for any other failure, with the original `OSError` as its cause

Caution: the existence checks are not atomic with respect to the operations that follow them.
"""

import os
import shutil

from typing import AnyStr, Union
from os import PathLike
from pathlib import Path

from toolbelt.lib.error_utils import InvalidArgumentError, NotFoundError, AlreadyExistsError, FileIOError, io_errors


__version__ = '1.0.0'


PathType = Union[PathLike, AnyStr]


def file_extension(path: PathType) -> str:
    """
    Gets the extension of a file path, i.e. the text after the last dot, in lowercase and without the dot.

    For instance, both ``config.JSON`` and ``/etc/app/config.json`` will yield ``'json'``.

    Raises:
        InvalidArgumentError: If the path does not contain a dot
    """
    path = os.fsdecode(path)

    if '.' not in path:
        raise InvalidArgumentError(
            f"Failed to find file extension for '{path}'. The path must be in the format <filename>.<ext>", path
        )

    return path.rsplit('.', 1)[-1].lower()


def path_exists(path: PathType) -> bool:
    """
    Checks whether something exists at the given path (following symlinks).

    Raises:
        FileIOError: If the check itself fails for a reason other than the entry being absent (e.g. permissions)
    """
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    except OSError as e:
        raise FileIOError(f"Can't check whether '{os.fsdecode(path)}' exists", os.fsdecode(path)) from e

    return True


def path_not_exists(path: PathType) -> bool:
    return not path_exists(path)


def create_directory(path: PathType, mode: int = 0o755):
    """
    Creates a directory, failing if the path is already taken. The parent directory must exist.
    """
    _check_absent(path)

    with io_errors("Can't create directory", path):
        os.mkdir(path, mode)


def delete_directory(path: PathType):
    """
    Deletes an empty directory, failing if it doesn't exist.
    """
    _check_present(path, "Directory")

    with io_errors("Can't delete directory", path):
        os.rmdir(path)


def delete_directory_all(path: PathType):
    """
    Deletes a directory along with everything in it, failing if it doesn't exist.
    """
    _check_present(path, "Directory")

    with io_errors("Can't delete directory", path):
        shutil.rmtree(path)


def create_file(path: PathType, mode: int = 0o644):
    """
    Creates an empty file with the given permissions, failing if the path is already taken.
    """
    _check_absent(path)

    with io_errors("Can't create file", path):
        with open(path, 'xb'):
            pass

        os.chmod(path, mode)


def delete_file(path: PathType):
    _check_present(path, "File")

    with io_errors("Can't delete file", path):
        os.remove(path)


def read_file(path: PathType) -> bytes:
    """
    Reads the entire contents of a file.
    """
    _check_present(path, "File")

    with io_errors("Can't read file", path):
        with open(path, 'rb') as f:
            return f.read()


def write_file(path: PathType, data: bytes, mode: int = 0o644):
    """
    Creates a file with the given data and permissions, failing if the path is already taken.

    The data is flushed to disk before the function returns.
    """
    _check_absent(path)

    with io_errors("Can't write file", path):
        with open(path, 'xb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

        os.chmod(path, mode)


def home_directory() -> str:
    """
    Returns the home directory of the executing user.

    Raises:
        NotFoundError: If the home directory cannot be determined
    """
    try:
        return str(Path.home())
    except (RuntimeError, KeyError) as e:
        raise NotFoundError('~', "Can't determine the home directory of the current user") from e


def create_symlink(source: PathType, target: PathType):
    """
    Creates a symbolic link at `target` pointing to `source`, which must exist.
    """
    _check_present(source, "Source")

    with io_errors("Can't create symlink", target):
        os.symlink(source, target)


def _check_present(path: PathType, what: str):
    if not path_exists(path):
        raise NotFoundError(os.fsdecode(path), f"{what} '{os.fsdecode(path)}' doesn't exist")


def _check_absent(path: PathType):
    # A broken symlink also counts as taken
    if os.path.lexists(path):
        raise AlreadyExistsError(os.fsdecode(path))

