import io
import unittest

from contextlib import redirect_stdout

from toolbelt.lib.console_log import Logger, LoggerConfig, LoggerPanic
from toolbelt.lib.error_utils import FileIOError


def _capture(config: LoggerConfig, action) -> str:
    stream = io.StringIO()
    action(Logger(config, stream=stream))
    return stream.getvalue()


COLOR = LoggerConfig(color=True)


class StandardMessagesTest(unittest.TestCase):
    def test_print(self):
        self.assertEqual(
            _capture(COLOR, lambda log: log.print("Standard Log Message")),
            "\x1b[96mStandard Log Message\x1b[0m\n"
        )

    def test_printf(self):
        self.assertEqual(
            _capture(COLOR, lambda log: log.printf("Standard Log Message with {}", "formatting")),
            "\x1b[96mStandard Log Message with formatting\x1b[0m\n"
        )

    def test_success(self):
        self.assertEqual(
            _capture(COLOR, lambda log: log.success("Success Log Message")),
            "\x1b[92mSUCCESS: Success Log Message\x1b[0m\n"
        )

    def test_warningf(self):
        self.assertEqual(
            _capture(COLOR, lambda log: log.warningf("Warning Log Message with {what}", what="formatting")),
            "\x1b[93mWARNING: Warning Log Message with formatting\x1b[0m\n"
        )

    def test_failure(self):
        self.assertEqual(
            _capture(COLOR, lambda log: log.failure("Failure Log Message")),
            "\x1b[91mFAILURE: Failure Log Message\x1b[0m\n"
        )

    def test_error(self):
        self.assertEqual(
            _capture(COLOR, lambda log: log.error("Error Log Message")),
            "\x1b[91mERROR: Error Log Message\x1b[0m\n"
        )

    def test_no_color(self):
        self.assertEqual(
            _capture(LoggerConfig(color=False), lambda log: log.error("Error Log Message")),
            "ERROR: Error Log Message\n"
        )

    def test_fluent(self):
        self.assertEqual(
            _capture(LoggerConfig(color=False), lambda log: log.print("one").success("two")),
            "one\nSUCCESS: two\n"
        )

    def test_default_stream_is_current_stdout(self):
        log = Logger(LoggerConfig(color=False))
        out = io.StringIO()

        with redirect_stdout(out):
            log.print("to stdout")

        self.assertEqual(out.getvalue(), "to stdout\n")


class LevelGatingTest(unittest.TestCase):
    def test_vprint_disabled(self):
        self.assertEqual(_capture(COLOR, lambda log: log.vprint("hidden").vprintf("hidden {}", 2)), "")

    def test_vprint_enabled(self):
        self.assertEqual(
            _capture(LoggerConfig(verbose=True, color=True), lambda log: log.vprint("Verbose Log Message")),
            "\x1b[96mINFO: Verbose Log Message\x1b[0m\n"
        )

    def test_debug(self):
        self.assertEqual(_capture(COLOR, lambda log: log.debug("hidden")), "")
        self.assertEqual(
            _capture(LoggerConfig(debug=True, color=True), lambda log: log.debugf("Debug {}", "Message")),
            "DEBUG: Debug Message\n"
        )

    def test_trace(self):
        self.assertEqual(_capture(COLOR, lambda log: log.trace("hidden")), "")
        self.assertEqual(
            _capture(LoggerConfig(trace=True, color=True), lambda log: log.trace("Trace Message")),
            "TRACE: Trace Message\n"
        )

    def test_enable_toggles(self):
        stream = io.StringIO()
        log = Logger(LoggerConfig(color=False), stream=stream)

        log.enable_verbose().enable_debug().enable_trace()
        log.vprint("v").debug("d").trace("t")

        self.assertEqual(stream.getvalue(), "INFO: v\nDEBUG: d\nTRACE: t\n")
        self.assertEqual(log.config, LoggerConfig(verbose=True, debug=True, trace=True, color=False))

    def test_loggers_are_independent(self):
        first = Logger(LoggerConfig(color=False), stream=io.StringIO())
        second = Logger(LoggerConfig(color=False), stream=io.StringIO())

        first.enable_debug()

        self.assertTrue(first.config.debug)
        self.assertFalse(second.config.debug)


class AbortingMessagesTest(unittest.TestCase):
    def test_panic(self):
        stream = io.StringIO()
        log = Logger(LoggerConfig(color=True), stream=stream)

        with self.assertRaises(LoggerPanic) as ctx:
            log.panicf("Panic {}", "Message")

        self.assertEqual(str(ctx.exception), "Panic Message")
        self.assertEqual(stream.getvalue(), "\x1b[91mPANIC: Panic Message\x1b[0m\n")

    def test_fatal(self):
        stream = io.StringIO()
        log = Logger(LoggerConfig(color=False), stream=stream)

        with self.assertRaises(SystemExit) as ctx:
            log.fatal("Fatal Message")

        self.assertEqual(ctx.exception.code, 1)
        self.assertEqual(stream.getvalue(), "FATAL: Fatal Message\n")


class ExceptionTest(unittest.TestCase):
    def test_with_cause(self):
        error = FileIOError("Can't read file 'x': boom", 'x')
        error.__cause__ = ValueError("bad")

        self.assertEqual(
            _capture(LoggerConfig(color=False), lambda log: log.exception(error)),
            "ERROR: Can't read file 'x': boom\n  ValueError: bad\n"
        )

    def test_without_cause(self):
        error = FileIOError("Can't read file 'x': boom", 'x')
        error.__cause__ = ValueError("bad")

        self.assertEqual(
            _capture(LoggerConfig(color=False), lambda log: log.exception(error, follow_cause=False)),
            "ERROR: Can't read file 'x': boom\n"
        )
