"""
Leveled console logger for command-line utilities.

Messages are written one per line to a text stream (stdout by default), tagged with their level and highlighted in an
appropriate color where the terminal supports it::

    from toolbelt.lib.console_log import Logger, LoggerConfig

    log = Logger(LoggerConfig(verbose=True))

    log.print("Fetching archive")
    log.vprintf("Target is {}", target)  # Shown only in verbose mode
    log.warning("Archive is empty")

The levels and their appearance are:

- ``print``: untagged, light cyan. Always shown.
- ``vprint``: tagged ``INFO:``, light cyan. Shown only in verbose mode.
- ``success``: tagged ``SUCCESS:``, light green.
- ``warning``: tagged ``WARNING:``, light yellow.
- ``failure``, ``error``: tagged ``FAILURE:`` / ``ERROR:``, light red.
- ``panic``: tagged ``PANIC:``, light red. Raises `LoggerPanic` after logging.
- ``fatal``: tagged ``FATAL:``, light red. Exits the program with status 1 after logging.
- ``debug``, ``trace``: tagged ``DEBUG:`` / ``TRACE:``, uncolored. Shown only if enabled.

Every level also has a ``*f`` variant taking a `str.format` template followed by its arguments.

Notes:

- All the state of a logger (which levels are enabled, whether to use colors) lives in its `LoggerConfig`. There are no
  global flags, so independent loggers can be used side by side (e.g. in tests).
- A default instance is available as the `log` property of this module, for programs that do not need more than one.
- Most methods that change the configuration return the logger itself, enabling fluent calls like::

      log.enable_verbose().enable_debug()
"""

import sys

from dataclasses import dataclass, replace
from typing import Optional, TextIO, NoReturn

from colorama import just_fix_windows_console
from termcolor import colored

from toolbelt.lib.error_utils import short_format_exception


__version__ = '1.0.0'


just_fix_windows_console()


@dataclass(frozen=True)
class LoggerConfig:
    """
    Configuration for a `Logger`.

    Attributes:
        verbose: Show ``vprint`` messages.
        debug: Show ``debug`` messages.
        trace: Show ``trace`` messages.
        color: True to always use ANSI colors, False to never use them. If None (the default), colors are used only if
            stdout is a terminal, honoring the ``NO_COLOR`` and ``FORCE_COLOR`` environment variables.
    """

    verbose: bool = False
    debug: bool = False
    trace: bool = False
    color: Optional[bool] = None


class LoggerPanic(RuntimeError):
    """
    Raised by `Logger.panic` after the panic message has been logged.
    """


class Logger:
    """
    A leveled logger writing to the console.
    """

    _config: LoggerConfig
    _stream: Optional[TextIO]

    def __init__(self, config: Optional[LoggerConfig] = None, stream: Optional[TextIO] = None):
        """
        Args:
            config: The logger configuration. By default, only the always-on levels are shown.
            stream: The stream to write to. If None, messages go to whatever `sys.stdout` is at the time of writing.
        """
        self._config = config or LoggerConfig()
        self._stream = stream

    @property
    def config(self) -> LoggerConfig:
        return self._config

    def configure(self, **changes) -> 'Logger':
        """
        Changes some settings of the configuration, e.g. ``log.configure(color=False)``.
        """
        self._config = replace(self._config, **changes)
        return self

    def enable_verbose(self) -> 'Logger':
        return self.configure(verbose=True)

    def enable_debug(self) -> 'Logger':
        return self.configure(debug=True)

    def enable_trace(self) -> 'Logger':
        return self.configure(trace=True)

    def print(self, message: str) -> 'Logger':
        return self._emit(message, 'light_cyan')

    def printf(self, template: str, *args, **kwargs) -> 'Logger':
        return self.print(template.format(*args, **kwargs))

    def vprint(self, message: str) -> 'Logger':
        if self._config.verbose:
            self._emit(f"INFO: {message}", 'light_cyan')
        return self

    def vprintf(self, template: str, *args, **kwargs) -> 'Logger':
        if self._config.verbose:
            self.vprint(template.format(*args, **kwargs))
        return self

    def success(self, message: str) -> 'Logger':
        return self._emit(f"SUCCESS: {message}", 'light_green')

    def successf(self, template: str, *args, **kwargs) -> 'Logger':
        return self.success(template.format(*args, **kwargs))

    def warning(self, message: str) -> 'Logger':
        return self._emit(f"WARNING: {message}", 'light_yellow')

    def warningf(self, template: str, *args, **kwargs) -> 'Logger':
        return self.warning(template.format(*args, **kwargs))

    def failure(self, message: str) -> 'Logger':
        return self._emit(f"FAILURE: {message}", 'light_red')

    def failuref(self, template: str, *args, **kwargs) -> 'Logger':
        return self.failure(template.format(*args, **kwargs))

    def error(self, message: str) -> 'Logger':
        return self._emit(f"ERROR: {message}", 'light_red')

    def errorf(self, template: str, *args, **kwargs) -> 'Logger':
        return self.error(template.format(*args, **kwargs))

    def exception(self, exception: BaseException, follow_cause: bool = True) -> 'Logger':
        """
        Logs an exception at the error level, in the short format given by `short_format_exception` (no traceback).
        """
        return self.error(short_format_exception(exception, follow_cause=follow_cause))

    def panic(self, message: str) -> NoReturn:
        """
        Logs a message at the panic level, then raises `LoggerPanic` with the same message.
        """
        self._emit(f"PANIC: {message}", 'light_red')
        raise LoggerPanic(message)

    def panicf(self, template: str, *args, **kwargs) -> NoReturn:
        self.panic(template.format(*args, **kwargs))

    def fatal(self, message: str) -> NoReturn:
        """
        Logs a message at the fatal level, then exits the program with status 1.
        """
        self._emit(f"FATAL: {message}", 'light_red')
        sys.exit(1)

    def fatalf(self, template: str, *args, **kwargs) -> NoReturn:
        self.fatal(template.format(*args, **kwargs))

    def debug(self, message: str) -> 'Logger':
        if self._config.debug:
            self._emit(f"DEBUG: {message}")
        return self

    def debugf(self, template: str, *args, **kwargs) -> 'Logger':
        if self._config.debug:
            self.debug(template.format(*args, **kwargs))
        return self

    def trace(self, message: str) -> 'Logger':
        if self._config.trace:
            self._emit(f"TRACE: {message}")
        return self

    def tracef(self, template: str, *args, **kwargs) -> 'Logger':
        if self._config.trace:
            self.trace(template.format(*args, **kwargs))
        return self

    def _emit(self, text: str, color: Optional[str] = None) -> 'Logger':
        stream = self._stream if self._stream is not None else sys.stdout

        if color is not None:
            text = _colorize(text, color, self._config.color)

        print(text, file=stream, flush=True)

        return self


def _colorize(text: str, color: str, use_color: Optional[bool]) -> str:
    if use_color is None:
        return colored(text, color)

    return colored(text, color, no_color=not use_color, force_color=use_color)


# Singleton
log = Logger()
"""A default logger, for programs that only need one."""
