"""
Fetching archives over HTTP.
"""

import os

from typing import Optional, Union, Tuple
from urllib.parse import urlsplit

import requests

from toolbelt.lib.error_utils import InvalidArgumentError, NetworkError, io_errors
from toolbelt.lib.console_log import Logger
from toolbelt.lib.fs_utils import PathType


CHUNK_SIZE = 64 * 1024


def download(
    source: str, target: PathType, timeout: Union[None, float, Tuple[float, float]] = None, check_status: bool = True,
    log: Optional[Logger] = None
):
    """
    Downloads the archive (or any other file) at the HTTP(S) URL `source` to the local path `target`.

    The response body is streamed straight to the target file, which is created or truncated once the server has
    answered. A partially downloaded file is not removed if the transfer fails midway.

    Args:
        source: An absolute ``http://`` or ``https://`` URL.
        target: The path of the file to save to.
        timeout: Passed on to `requests`. By default, there is no timeout.
        check_status: If True (the default), an error status from the server (4xx, 5xx) is reported as a
            `NetworkError` and nothing is written. If False, the body of any response is saved as-is.
        log: If provided, the transfer is reported on this logger at the trace level.

    Raises:
        InvalidArgumentError: If `source` is not a valid absolute HTTP(S) URL
        NetworkError: If the transfer fails, or the server answers with an error status and `check_status` is set
        FileIOError: If the target file cannot be created or written
    """
    _check_url(source)

    target = os.fsdecode(target)

    try:
        with requests.get(source, stream=True, timeout=timeout) as response:
            if check_status and not response.ok:
                raise NetworkError(
                    f"Failed to download '{source}': HTTP {response.status_code} {response.reason}",
                    source, status_code=response.status_code
                )

            with io_errors("Can't create file", target):
                out = open(target, 'wb')

            with out:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    with io_errors("Can't write file", target):
                        out.write(chunk)

            if log is not None:
                log.tracef("Downloaded '{}' to '{}' (HTTP {})", source, target, response.status_code)
    except requests.RequestException as e:
        raise NetworkError(f"Failed to download '{source}': {e}", source) from e


def _check_url(url: str):
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise InvalidArgumentError(f"'{url}' is not a valid URL", url) from e

    if parts.scheme.lower() not in ('http', 'https') or not parts.hostname:
        raise InvalidArgumentError(f"'{url}' is not a valid absolute HTTP(S) URL", url)
