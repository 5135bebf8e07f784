"""
Extracting zip archives to a directory.
"""

import os

from typing import Optional
from zipfile import ZipFile, ZipInfo, BadZipFile
from shutil import copyfileobj

from toolbelt.lib.error_utils import InvalidArgumentError, NotFoundError, FileIOError, io_errors
from toolbelt.lib.console_log import Logger
from toolbelt.lib.fs_utils import PathType


DEFAULT_DIR_MODE = 0o755
"""Mode for directories the archive says nothing about (missing parents, or entries without Unix attributes)"""


def unarchive(source: PathType, target: PathType = '', log: Optional[Logger] = None):
    """
    Extracts the zip archive `source` into the directory `target`, recreating its directory structure.

    Entries may come in any order: the parent directories of every entry are created as needed, whether or not the
    archive lists them explicitly. Directories that already exist are reused. Directory entries keep the permission
    bits stored in the archive.

    If the extraction fails midway, whatever was extracted up to that point stays on disk.

    Args:
        source: The path of the zip file.
        target: The directory to extract to. It is created if missing. Defaults to the current directory.
        log: If provided, every entry extracted is reported on this logger at the trace level.

    Raises:
        NotFoundError: If the source does not exist or is not a valid zip archive
        InvalidArgumentError: If an entry would be extracted outside the target directory (e.g. ``../../etc/passwd``)
        FileIOError: If any file or directory cannot be created or written
    """
    source = os.fsdecode(source)
    target_dir = os.fsdecode(target) or os.curdir

    try:
        zip_file = ZipFile(source)
    except (OSError, BadZipFile) as e:
        raise NotFoundError(source, f"'{source}' doesn't exist or is not a valid zip archive") from e

    with zip_file:
        for info in zip_file.infolist():
            dest = _extraction_path(target_dir, info.filename)

            if info.is_dir():
                _ensure_parent_dir(dest)

                with io_errors("Can't create directory", dest):
                    os.makedirs(dest, _stored_mode(info) or DEFAULT_DIR_MODE, exist_ok=True)
            else:
                _ensure_parent_dir(dest)
                _extract_file(zip_file, info, dest)

            if log is not None:
                log.tracef("Extracted '{}' to '{}'", info.filename, dest)


def _extraction_path(target_dir: str, name: str) -> str:
    path = os.path.join(target_dir, *name.split('/'))

    root = os.path.abspath(target_dir)
    if os.path.commonpath([root, os.path.abspath(path)]) != root:
        raise InvalidArgumentError(f"Archive entry '{name}' would be extracted outside of '{target_dir}'", name)

    return path


def _ensure_parent_dir(path: str):
    parent = os.path.dirname(os.path.normpath(path))

    if parent != '' and not os.path.isdir(parent):
        with io_errors("Can't create directory", parent):
            os.makedirs(parent, DEFAULT_DIR_MODE, exist_ok=True)


def _extract_file(zip_file: ZipFile, info: ZipInfo, dest: str):
    try:
        with io_errors("Can't extract file", dest):
            with zip_file.open(info) as src, open(dest, 'wb') as out:
                copyfileobj(src, out)
    except (BadZipFile, NotImplementedError) as e:
        raise FileIOError(f"Can't extract file '{dest}': {e}", dest) from e


def _stored_mode(info: ZipInfo) -> int:
    return (info.external_attr >> 16) & 0o777
