import json
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))

from spanpaint_core.config import AppConfig, config_path, load_config, save_config


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            cfg = load_config(Path(tmp) / "missing.json")
            self.assertIsInstance(cfg, AppConfig)
            self.assertEqual(cfg.render.color_system, "truecolor")
            self.assertEqual(cfg.stream.encoding, "utf-8")
            self.assertFalse(cfg.diagnostics.console_log)

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            cfg = load_config(path)
            cfg.render.color_system = "256"
            cfg.render.flush_each_span = True
            save_config(cfg, path)
            reloaded = load_config(path)
            self.assertEqual(reloaded.render.color_system, "256")
            self.assertTrue(reloaded.render.flush_each_span)

    def test_invalid_values_are_normalized(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {
                "config_version": 2,
                "render": {"color_system": "hologram"},
                "stream": {"encoding": "no-such-codec", "max_line_bytes": 1},
                "diagnostics": {"keep_log_files": 0},
            }
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.render.color_system, "truecolor")
            self.assertEqual(cfg.stream.encoding, "utf-8")
            self.assertEqual(cfg.stream.max_line_bytes, 64)
            self.assertEqual(cfg.diagnostics.keep_log_files, 2)

    def test_non_numeric_values_fall_back_to_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {
                "config_version": "two",
                "render": ["truecolor"],
                "stream": {"max_line_bytes": None},
                "diagnostics": {"keep_log_files": "many"},
            }
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.config_version, 2)
            self.assertEqual(cfg.render.color_system, "truecolor")
            self.assertEqual(cfg.stream.max_line_bytes, 4096)
            self.assertEqual(cfg.diagnostics.keep_log_files, 7)

    def test_corrupt_file_falls_back_to_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_config(path), AppConfig())

    def test_migrate_v1_shape(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(json.dumps({"color_system": "standard", "encoding": "latin-1"}), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.config_version, 2)
            self.assertEqual(cfg.render.color_system, "standard")
            self.assertEqual(cfg.stream.encoding, "latin-1")

    def test_home_override(self):
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch.dict(os.environ, {"SPANPAINT_HOME": tmp}):
                self.assertEqual(config_path(), Path(tmp) / "config.json")


if __name__ == "__main__":
    unittest.main()
