import unittest

from toolbelt.lib.error_utils import ToolbeltError, InvalidArgumentError, NotFoundError, AlreadyExistsError, \
    FileIOError, NetworkError, io_errors, format_exception_head, short_format_exception


class TaxonomyTest(unittest.TestCase):
    def test_common_base(self):
        for cls in (InvalidArgumentError, NotFoundError, AlreadyExistsError, FileIOError, NetworkError):
            self.assertTrue(issubclass(cls, ToolbeltError))

    def test_invalid_argument_is_value_error(self):
        with self.assertRaises(ValueError):
            raise InvalidArgumentError("bad input")

    def test_default_messages(self):
        self.assertEqual(str(NotFoundError('/tmp/x')), "'/tmp/x' doesn't exist")
        self.assertEqual(str(AlreadyExistsError('/tmp/x')), "'/tmp/x' already exists")
        self.assertEqual(NotFoundError('/tmp/x').path, '/tmp/x')

    def test_network_status(self):
        error = NetworkError("Failed", 'http://example.com/', status_code=404)

        self.assertEqual(error.status_code, 404)
        self.assertEqual(error.path, 'http://example.com/')


class IOErrorsTest(unittest.TestCase):
    def test_translates_os_error(self):
        original = PermissionError(13, "Permission denied")

        with self.assertRaises(FileIOError) as ctx:
            with io_errors("Can't write file", '/tmp/x'):
                raise original

        self.assertEqual(str(ctx.exception), "Can't write file '/tmp/x': Permission denied")
        self.assertEqual(ctx.exception.path, '/tmp/x')
        self.assertIs(ctx.exception.__cause__, original)

    def test_other_errors_pass_through(self):
        with self.assertRaises(KeyError):
            with io_errors("Can't write file", '/tmp/x'):
                raise KeyError('k')


class FormatTest(unittest.TestCase):
    def test_format_exception_head(self):
        self.assertEqual(format_exception_head(ValueError("bad")), "ValueError: bad")

    def test_short_format_toolbelt_error(self):
        self.assertEqual(short_format_exception(NotFoundError('/tmp/x')), "'/tmp/x' doesn't exist")

    def test_short_format_chain(self):
        try:
            try:
                raise KeyError('k')
            except KeyError as e:
                raise FileIOError("Can't do it") from e
        except FileIOError as e:
            error = e

        self.assertEqual(short_format_exception(error), "Can't do it\n  KeyError: 'k'")
        self.assertEqual(short_format_exception(error, follow_cause=False), "Can't do it")
