"""
The error taxonomy shared by all the `toolbelt.lib` packages, plus a few helpers for presenting exceptions.

Every error raised on purpose by the toolbelt packages derives from `ToolbeltError`, so a command-line program can
catch that one class at its top level. The more specific classes are:

- `InvalidArgumentError`: an empty or malformed input path, URL etc. Also a `ValueError`.
- `NotFoundError`: an expected filesystem entry or archive is missing
- `AlreadyExistsError`: the destination of a create-only operation is already taken
- `FileIOError`: any other read/write/permission failure
- `NetworkError`: a transfer failed, or the server answered with an error status

Whenever such an error is caused by a lower-level exception (usually an `OSError`), the latter is available through
`__cause__`.
"""

import os
import traceback

from typing import Optional, List, Iterator, Union, AnyStr
from os import PathLike
from textwrap import indent
from contextlib import contextmanager


__version__ = '1.0.0'


class ToolbeltError(Exception):
    """
    Base class for all errors raised by the toolbelt packages.

    The `path` attribute holds the file, directory or URL the error pertains to, if any.
    """

    path: Optional[str]

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path

        super().__init__(message)


class InvalidArgumentError(ToolbeltError, ValueError):
    pass


class NotFoundError(ToolbeltError):
    def __init__(self, path: str, message: Optional[str] = None):
        super().__init__(message or f"'{path}' doesn't exist", path)


class AlreadyExistsError(ToolbeltError):
    def __init__(self, path: str, message: Optional[str] = None):
        super().__init__(message or f"'{path}' already exists", path)


class FileIOError(ToolbeltError):
    pass


class NetworkError(ToolbeltError):
    status_code: Optional[int]

    def __init__(self, message: str, path: Optional[str] = None, status_code: Optional[int] = None):
        self.status_code = status_code

        super().__init__(message, path)


@contextmanager
def io_errors(action: str, path: Union[PathLike, AnyStr]) -> Iterator[None]:
    """
    Use ``with io_errors("Can't read file", path): <code>`` to turn any `OSError` raised by the code into a
    `FileIOError` whose message starts with the given action and mentions the path. The original error is kept as the
    cause.
    """
    path = os.fsdecode(path)

    try:
        yield
    except OSError as e:
        raise FileIOError(f"{action} '{path}': {e.strerror or e}", path) from e


def format_exception_head(exception: BaseException) -> str:
    """
    Formats the head of an exception (i.e. the class and message, without the traceback) as it would appear when printed
    by Python's exception handler.

    Args:
        exception: The exception to format

    Returns:
        A string, possibly multiline, with the exception head text. There is no newline at the end.
    """
    return ''.join(traceback.format_exception_only(exception.__class__, exception)).rstrip()


def short_format_exception(exception: BaseException, follow_cause: bool = True) -> str:
    """
    Presents an exception in a short format, e.g. for inclusion into a log message.

    Toolbelt errors are shown by their message alone, as the message already says what happened and where. Other
    exceptions are shown with their class name. The trace is never shown.

    Exceptions in `__cause__` will also be followed and printed, each on its own indented line. Note that the return
    value may be multiline because of this.
    """
    return '\n'.join([
        _short_head(exception),
        *(indent(_short_head(cause), '  ') for cause in _causal_chain(exception, follow_cause)[1:])
    ])


def _short_head(exception: BaseException) -> str:
    if isinstance(exception, ToolbeltError):
        return str(exception) or exception.__class__.__name__

    return format_exception_head(exception)


def _causal_chain(exception: BaseException, follow_cause: bool) -> List[BaseException]:
    result = [exception]

    while follow_cause and exception.__cause__ is not None:
        exception = exception.__cause__
        result.append(exception)

    return result
