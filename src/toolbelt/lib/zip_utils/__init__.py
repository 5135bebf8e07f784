"""
Helpers for creating, extracting and downloading zip archives.

The three operations are::

    from toolbelt.lib.zip_utils import archive, unarchive, download

    download('https://example.com/data.zip', 'data.zip')
    unarchive('data.zip', 'extracted')
    archive('extracted/data', 'repacked.zip')

Archives are standard zip files: files are compressed with deflate, and directories are stored as empty entries whose
names end in a slash. Entry names are always relative and slash-separated, and all entries of an archive made from a
directory are placed under that directory's name.

All operations raise the errors defined in `toolbelt.lib.error_utils` and never clean up partial output on failure.
"""

from toolbelt.lib.zip_utils.archive import archive, iter_archive_entries, ArchiveEntry
from toolbelt.lib.zip_utils.unarchive import unarchive
from toolbelt.lib.zip_utils.download import download


__version__ = '1.0.0'
