import io
import logging
import tempfile
import unittest as ut
from contextlib import redirect_stderr
from pathlib import Path

from config_reader import read_config
from errors import MissingSettings
from main import Config, format_message, main, parse_args, process
from suites import suite_config_text

TOY_CONFIG = """ABCD
2 1
REF R (AB)(CD)
ROT MA (AC)(BD)
"""


class FormatTest(ut.TestCase):
    def test_groups_of_five(self):
        self.assertEqual(format_message("ABCDEFGHIJKL"), "ABCDE FGHIJ KL")
        self.assertEqual(format_message("ABCDE"), "ABCDE")
        self.assertEqual(format_message(""), "")
        self.assertEqual(format_message("ABCDEFG", block=3), "ABC DEF G")


class ProcessTest(ut.TestCase):
    def setUp(self):
        self.machine = read_config(suite_config_text("M3"))

    def test_settings_reset_the_machine(self):
        lines = [
            "* B I II III AAA\n",
            "AAA AA\n",
            "\n",
            "* B I II III AAA\n",
            "aaaaa\n",
        ]
        out = io.StringIO()
        process(self.machine, lines, out, Config(uppercase=True))
        self.assertEqual(out.getvalue(), "BDZGO\r\n\r\nBDZGO\r\n")

    def test_settings_line_detection_matches_parser(self):
        lines = ["*B I II III AAA\n", "AAAAA\n", "  * B I II III AAA\n", "AAAAA\n"]
        out = io.StringIO()
        process(self.machine, lines, out, Config())
        self.assertEqual(out.getvalue(), "BDZGO\r\nBDZGO\r\n")

    def test_message_before_settings(self):
        with self.assertRaises(MissingSettings):
            process(self.machine, ["HELLO\n"], io.StringIO(), Config())


class MainTest(ut.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.config = self.dir / "toy.conf"
        self.config.write_text(TOY_CONFIG, encoding="utf-8")

    def tearDown(self):
        self.tmp.cleanup()

    def run_main(self, messages: str) -> bytes:
        src, dst = self.dir / "in.txt", self.dir / "out.txt"
        src.write_text(messages, encoding="utf-8")
        main(["--config", str(self.config), str(src), str(dst)])
        return dst.read_bytes()

    def test_files_in_and_out(self):
        self.assertEqual(self.run_main("* REF ROT A\nAB\n"), b"BA\r\n")

    def test_builtin_suite(self):
        src, dst = self.dir / "in.txt", self.dir / "out.txt"
        src.write_text("* B I II III AAA\nAA AAA\n", encoding="utf-8")
        main(["--suite", "M3", str(src), str(dst)])
        self.assertEqual(dst.read_bytes(), b"BDZGO\r\n")

    def test_log_file_gets_the_trace(self):
        src, dst, log = self.dir / "in.txt", self.dir / "out.txt", self.dir / "run.log"
        src.write_text("* REF ROT A\nAB\n", encoding="utf-8")
        logger = logging.getLogger("enigma")
        self.addCleanup(logger.setLevel, logging.NOTSET)
        self.addCleanup(setattr, logger, "propagate", True)
        with redirect_stderr(io.StringIO()):
            main(["--config", str(self.config), "--log", str(log), str(src), str(dst)])
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        self.assertEqual(dst.read_bytes(), b"BA\r\n")
        trace = log.read_text(encoding="utf-8")
        self.assertIn("[STEPPING] A -> B (slots [1])", trace)
        self.assertIn("[CONFIG] REF ROT at A", trace)

    def test_engine_fault_exits_with_message(self):
        with self.assertRaises(SystemExit) as cm:
            self.run_main("* ROT REF A\nAB\n")
        self.assertTrue(str(cm.exception.code).startswith("Error: "))
        self.assertIn("reflector", str(cm.exception.code))

    def test_missing_file_exits(self):
        with self.assertRaises(SystemExit) as cm:
            main(["--config", str(self.dir / "nope.conf")])
        self.assertTrue(str(cm.exception.code).startswith("Error: "))

    def test_bad_block_rejected(self):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                parse_args(["--block", "0"])

    def test_defaults(self):
        args = parse_args([])
        self.assertEqual(args.suite, "M4")
        self.assertIsNone(args.config)
        self.assertFalse(args.verbose)


if __name__ == '__main__':
    ut.main()
