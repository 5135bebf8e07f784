"""
Computes the names under which filesystem entries are stored in an archive.
"""

import os
import posixpath

from typing import Optional


def archive_base_dir(source: str) -> str:
    """
    Gets the base directory name for an archive made from the directory `source`, i.e. its last path component.

    Trailing separators are ignored, so ``/tmp/foo/`` yields ``'foo'``. The current directory yields ``'.'``.
    A source ending in ``..`` is named after the directory it actually refers to, e.g. ``..`` from ``/tmp/foo/work``
    yields ``'foo'``.
    """
    base_dir = os.path.basename(os.path.normpath(source))

    if base_dir == os.pardir:
        base_dir = os.path.basename(os.path.abspath(source))

    return base_dir


def archive_entry_name(base_dir: Optional[str], source: str, path: str) -> Optional[str]:
    """
    Computes the archive name for the filesystem entry at `path`, found while walking `source`.

    The name is relative, uses forward slashes regardless of the OS, and is rooted at the base directory: archiving
    ``/tmp/foo`` stores ``/tmp/foo/bar.txt`` as ``foo/bar.txt``. When archiving the current directory (`base_dir` is
    ``'.'``), names are just the walked paths, normalized.

    Directory names are returned without a trailing slash; the caller adds it.

    Args:
        base_dir: The base directory name as returned by `archive_base_dir`, or None if the source is a single file
            (in which case the entry is named after the file alone).
        source: The path the walk started from.
        path: The path of the visited entry, as produced by the walk (i.e. starting with `source`).

    Returns:
        The name, or None if the entry is the source directory itself, which must not get an entry of its own.
    """
    if base_dir is None:
        return os.path.basename(path)

    if base_dir == '.':
        name = os.path.join(base_dir, path)
    else:
        name = os.path.join(base_dir, os.path.relpath(path, source))

    name = posixpath.normpath(_to_slash(name))

    return None if name == base_dir else name


def _to_slash(path: str) -> str:
    return path if os.sep == '/' else path.replace(os.sep, '/')
