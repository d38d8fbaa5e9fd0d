'''
Tests for the command-line front end
'''

import contextlib
import io
import os
import tempfile
import unittest
from unittest import mock

from bftape import cli
from bftape.core.streams import StreamSink, StreamSource
from bftape.errors import ExitStatus


class CLITestCase(unittest.TestCase):
    '''Runs cli.main against in-memory stdio and a clean environment'''

    def setUp(self):
        self.stdout = io.BytesIO()
        self.stderr = io.StringIO()
        patches = [
            mock.patch.object(cli, "stdio_streams", side_effect=self._streams),
            mock.patch("bftape.config.load_dotenv"),
            mock.patch.dict(os.environ, {}, clear=True),
        ]
        for p in patches:
            p.start()
            self.addCleanup(p.stop)
        self.stdin = b""

    def _streams(self):
        return StreamSource(io.BytesIO(self.stdin)), StreamSink(self.stdout)

    def run_cli(self, *argv):
        with contextlib.redirect_stderr(self.stderr):
            return cli.main(list(argv))

    def write_program(self, text):
        fd, path = tempfile.mkstemp(suffix=".bf")
        with os.fdopen(fd, "w") as f:
            f.write(text)
        self.addCleanup(os.remove, path)
        return path


class TestRunPrograms(CLITestCase):

    def test_inline_code(self):
        self.assertEqual(self.run_cli("-x", "+++."), ExitStatus.SUCCESS)
        self.assertEqual(self.stdout.getvalue(), b"\x03")

    def test_inline_code_reads_stdin(self):
        self.stdin = b"hi"
        self.assertEqual(self.run_cli("-x", ",.,."), ExitStatus.SUCCESS)
        self.assertEqual(self.stdout.getvalue(), b"hi")

    def test_positional_file(self):
        path = self.write_program("++++++++[>++++++++<-]>+.  prints A")
        self.assertEqual(self.run_cli(path), ExitStatus.SUCCESS)
        self.assertEqual(self.stdout.getvalue(), b"A")

    def test_file_option(self):
        path = self.write_program("+.")
        self.assertEqual(self.run_cli("-f", path), ExitStatus.SUCCESS)
        self.assertEqual(self.stdout.getvalue(), b"\x01")

    def test_missing_file(self):
        missing = os.path.join(tempfile.gettempdir(), "does-not-exist.bf")
        self.assertEqual(self.run_cli(missing), ExitStatus.IO)
        self.assertIn("does-not-exist.bf", self.stderr.getvalue())

    def test_directory_is_io_error(self):
        self.assertEqual(self.run_cli(tempfile.gettempdir()), ExitStatus.IO)

    def test_empty_path_is_io_error(self):
        self.assertEqual(self.run_cli(""), ExitStatus.IO)
        self.assertEqual(self.run_cli("-f", ""), ExitStatus.IO)


class TestExitCodes(CLITestCase):

    def test_program_errors(self):
        cases = {
            "]": ExitStatus.LOOP_UNDERFLOW,
            "[": ExitStatus.LOOP_UNMATCHED,
            "<": ExitStatus.TAPE_UNDERFLOW,
        }
        for code, status in cases.items():
            with self.subTest(code=code):
                self.assertEqual(self.run_cli("-x", code), status)
        self.assertIn("tape underflow", self.stderr.getvalue())

    def test_exit_code_values(self):
        self.assertEqual(int(ExitStatus.INVALID_ARGS), 0x21)
        self.assertEqual(int(ExitStatus.TAPE_OVERFLOW), 0x41)
        self.assertEqual(int(ExitStatus.LOOP_UNMATCHED), 0x43)
        self.assertEqual(int(ExitStatus.LOOP_UNDERFLOW), 0x44)
        self.assertEqual(int(ExitStatus.LOOP_OVERFLOW), 0x45)

    def test_unallocatable_tape(self):
        self.assertEqual(self.run_cli("--tape-size", str(10 ** 20), "-x", "+"), ExitStatus.NOMEM)
        self.assertIn("cannot allocate", self.stderr.getvalue())

    def test_tape_size_option(self):
        self.assertEqual(self.run_cli("--tape-size", "2", "-x", ">>"), ExitStatus.TAPE_OVERFLOW)

    def test_loop_depth_option(self):
        self.assertEqual(self.run_cli("--max-loop-depth", "1", "-x", "[[]]"), ExitStatus.LOOP_OVERFLOW)

    def test_step_limit_option(self):
        self.assertEqual(self.run_cli("--step-limit", "50", "-x", "+[]"), ExitStatus.STEP_LIMIT)

    def test_environment_config(self):
        with mock.patch.dict(os.environ, {"BF_TAPE_SIZE": "1"}):
            self.assertEqual(self.run_cli("-x", ">"), ExitStatus.TAPE_OVERFLOW)

    def test_invalid_config_value(self):
        self.assertEqual(self.run_cli("--tape-size", "0", "-x", "+"), ExitStatus.INVALID_ARGS)


class TestArguments(CLITestCase):

    def assertExits(self, status, *argv):
        with self.assertRaises(SystemExit) as cm:
            self.run_cli(*argv)
        self.assertEqual(cm.exception.code, status)

    def test_no_arguments(self):
        self.assertExits(ExitStatus.INVALID_ARGS)

    def test_file_and_inline_code(self):
        self.assertExits(ExitStatus.INVALID_ARGS, "prog.bf", "-x", "+")

    def test_unknown_option(self):
        self.assertExits(ExitStatus.INVALID_ARGS, "-q", "prog.bf")

    def test_help(self):
        with contextlib.redirect_stdout(io.StringIO()) as out:
            self.assertExits(0, "--help")
        self.assertIn("-x CODE", out.getvalue())


class TestDebugFlag(CLITestCase):

    def test_trace_goes_to_stderr(self):
        self.assertEqual(self.run_cli("--debug", "-x", "++."), ExitStatus.SUCCESS)
        self.assertEqual(self.stdout.getvalue(), b"\x02")
        trace = self.stderr.getvalue()
        self.assertIn("Step 3", trace)
        self.assertIn("FINAL RESULT", trace)


if __name__ == '__main__':
    unittest.main()
