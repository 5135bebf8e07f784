"""
Creating zip archives from a file or directory tree.
"""

import os
import stat

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple
from zipfile import ZipFile, ZipInfo, ZIP_DEFLATED, ZIP_STORED
from shutil import copyfileobj

from toolbelt.lib.error_utils import InvalidArgumentError, NotFoundError, FileIOError, io_errors
from toolbelt.lib.console_log import Logger
from toolbelt.lib.fs_utils import PathType
from toolbelt.lib.zip_utils.naming import archive_base_dir, archive_entry_name


@dataclass(frozen=True)
class ArchiveEntry:
    """
    Describes an entry that goes into an archive.

    Attributes:
        name: The name of the entry in the archive. Slash-separated and relative; ends in a slash for directories.
        path: The location of the entry on the filesystem.
        is_dir: Whether this is a directory marker (with no content) rather than a file.
        mode: The permission bits of the filesystem entry.
        size: The size of the file content, in bytes (0 for directories).
    """

    name: str
    path: str
    is_dir: bool
    mode: int
    size: int


def archive(source: PathType, target: PathType, log: Optional[Logger] = None):
    """
    Creates a zip archive at `target` containing the file or directory `source`.

    For a directory, all entries are stored under the directory's own name, e.g. archiving ``/tmp/foo`` produces
    entries like ``foo/bar/`` and ``foo/bar/baz.txt``. The root directory itself gets no entry.
    Files are compressed with deflate, directories are stored as empty markers.

    The target is created (or truncated) before the source is even looked at, and it is not removed if the operation
    fails later on. It is always closed properly, though.

    Args:
        source: The file or directory to archive.
        target: The path of the zip file to create.
        log: If provided, every entry added is reported on this logger at the trace level.

    Raises:
        InvalidArgumentError: If either `source` or `target` is empty
        NotFoundError: If the source does not exist
        FileIOError: If the archive cannot be created or written, or a source entry cannot be read
    """
    if not target:
        raise InvalidArgumentError("The 'target' parameter was empty. A target is required to create a zip archive")
    if not source:
        raise InvalidArgumentError("The 'source' parameter was empty. A source is required to create a zip archive")

    source = os.fsdecode(source)
    target = os.fsdecode(target)

    with io_errors("Can't create archive", target):
        zip_file = ZipFile(target, 'w')

    with io_errors("Can't write archive", target), zip_file:
        for entry in iter_archive_entries(source):
            _write_entry(zip_file, entry)

            if log is not None:
                log.tracef("Archived '{}' as '{}'", entry.path, entry.name)


def iter_archive_entries(source: PathType) -> Iterator[ArchiveEntry]:
    """
    Walks `source` and yields the entries an archive of it would contain, in the order they would be written.

    The walk is depth-first with each directory listed before its contents, and otherwise follows the order in which
    the OS enumerates directory entries (no sorting). Symlinks to directories are listed but not followed.

    Raises:
        NotFoundError: If the source does not exist
        FileIOError: If any directory cannot be listed or entry cannot be examined
    """
    source = os.fsdecode(source)

    try:
        source_stat = os.stat(source)
    except FileNotFoundError as e:
        raise NotFoundError(source, f"Source '{source}' doesn't exist") from e
    except OSError as e:
        raise FileIOError(f"Can't examine source '{source}': {e.strerror or e}", source) from e

    base_dir = archive_base_dir(source) if stat.S_ISDIR(source_stat.st_mode) else None

    for path, path_stat in _walk(source, source_stat):
        name = archive_entry_name(base_dir, source, path)
        if name is None:
            continue

        is_dir = stat.S_ISDIR(path_stat.st_mode)

        yield ArchiveEntry(
            name=name + '/' if is_dir else name,
            path=path,
            is_dir=is_dir,
            mode=stat.S_IMODE(path_stat.st_mode),
            size=0 if is_dir else path_stat.st_size,
        )


def _walk(path: str, path_stat: os.stat_result) -> Iterator[Tuple[str, os.stat_result]]:
    yield path, path_stat

    if not stat.S_ISDIR(path_stat.st_mode):
        return

    with io_errors("Can't list directory", path):
        with os.scandir(path) as it:
            children = list(it)

    for child in children:
        with io_errors("Can't examine", child.path):
            child_stat = child.stat()
            descend = child.is_dir(follow_symlinks=False)

        if descend:
            yield from _walk(child.path, child_stat)
        else:
            yield child.path, child_stat


def _write_entry(zip_file: ZipFile, entry: ArchiveEntry):
    with io_errors("Can't examine", entry.path):
        info = ZipInfo.from_file(entry.path, entry.name, strict_timestamps=False)

    if entry.is_dir:
        info.compress_type = ZIP_STORED
        zip_file.writestr(info, b'')
        return

    info.compress_type = ZIP_DEFLATED

    with io_errors("Can't archive file", entry.path):
        with open(entry.path, 'rb') as src, zip_file.open(info, 'w') as dest:
            copyfileobj(src, dest)
