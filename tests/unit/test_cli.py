import contextlib
import io
import json
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "apps" / "cli"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "spans"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from spanpaint_app.cli import build_parser, main
from spanpaint_core.logging_setup import reset_logging


class CliParserTests(unittest.TestCase):
    def test_render_command(self):
        args = build_parser().parse_args(["render", "main.ts", "--spans", "spans.txt", "--color-system", "256"])
        self.assertEqual(args.command, "render")
        self.assertEqual(args.source, "main.ts")
        self.assertEqual(args.spans, "spans.txt")
        self.assertEqual(args.color_system, "256")
        self.assertFalse(args.flush)

    def test_render_defaults_to_stdin(self):
        args = build_parser().parse_args(["render", "main.ts"])
        self.assertIsNone(args.spans)
        self.assertIsNone(args.output)

    def test_check_command(self):
        args = build_parser().parse_args(["check", "--spans", "spans.txt", "--source", "main.ts"])
        self.assertEqual(args.command, "check")
        self.assertEqual(args.source, "main.ts")
        self.assertEqual(args.max_errors, 200)

    def test_doctor_command(self):
        args = build_parser().parse_args(["doctor"])
        self.assertEqual(args.command, "doctor")


class CliRunTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self._env = mock.patch.dict(os.environ, {"SPANPAINT_HOME": str(self.tmp / "home")})
        self._env.start()
        self.source = self.tmp / "hello.txt"
        self.source.write_text("hello world\n", encoding="utf-8")

    def tearDown(self):
        reset_logging()
        self._env.stop()
        self._tmp.cleanup()

    def _spans(self, *lines: str) -> Path:
        path = self.tmp / "spans.txt"
        path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
        return path

    def test_render_to_file(self):
        spans = self._spans("0 5 #ff0000", "6 11 !#0000ff")
        out = self.tmp / "out.ansi"
        rc = main(["render", str(self.source), "--spans", str(spans), "-o", str(out)])
        self.assertEqual(rc, 0)
        self.assertEqual(
            out.read_bytes(),
            b"\x1b[38;2;255;0;0mhello\x1b[0m \x1b[48;2;0;0;255mworld\x1b[0m\n",
        )

    def test_render_reports_span_errors(self):
        spans = self._spans("0 3 #ff0000", "1 4 #00ff00")
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            rc = main(["render", str(self.source), "--spans", str(spans), "-o", str(self.tmp / "out.ansi")])
        self.assertEqual(rc, 2)
        self.assertIn("spanpaint: line 2: OverlappingSpan:", stderr.getvalue())

    def test_render_missing_source_is_io_error(self):
        spans = self._spans("0 3 #ff0000")
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            rc = main(["render", str(self.tmp / "nope.txt"), "--spans", str(spans)])
        self.assertEqual(rc, 1)
        self.assertIn("StreamIOError", stderr.getvalue())

    def test_check_prints_report(self):
        spans = self._spans("0 3 #ff0000", "0 3 zzzzzz", "4 40 #00ff00")
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            rc = main(["check", "--spans", str(spans), "--source", str(self.source)])
        self.assertEqual(rc, 2)
        payload = json.loads(stdout.getvalue())
        self.assertFalse(payload["success"])
        self.assertEqual(payload["valid_spans"], 1)
        self.assertEqual(payload["out_of_range"], 1)
        self.assertEqual(payload["error_counts"]["UnrecognizedColorToken"], 1)

    def test_check_rejects_what_render_rejects(self):
        source = self.tmp / "accent.txt"
        source.write_text("héllo\n", encoding="utf-8")
        spans = self._spans("0 2 #ff0000")

        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            check_rc = main(["check", "--spans", str(spans), "--source", str(source)])
        with contextlib.redirect_stderr(io.StringIO()):
            render_rc = main(["render", str(source), "--spans", str(spans), "-o", str(self.tmp / "out.ansi")])

        self.assertEqual(check_rc, 2)
        self.assertEqual(render_rc, 2)
        self.assertEqual(json.loads(stdout.getvalue())["error_counts"], {"SpanBoundaryError": 1})

    def test_check_clean_stream(self):
        spans = self._spans("0 5 #ff0000")
        with contextlib.redirect_stdout(io.StringIO()):
            rc = main(["check", "--spans", str(spans)])
        self.assertEqual(rc, 0)

    def test_doctor(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            rc = main(["doctor"])
        self.assertEqual(rc, 0)
        payload = json.loads(stdout.getvalue())
        self.assertEqual(payload["config_path"], str(self.tmp / "home" / "config.json"))
        self.assertEqual(payload["config"]["render"]["color_system"], "truecolor")
        self.assertIn("truecolor", payload["color_systems"])


if __name__ == "__main__":
    unittest.main()
