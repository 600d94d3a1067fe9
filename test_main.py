"""
Automated test suite for the Board Tessellator command line.

Run:  python -m pytest test_main.py -v
Or:   python test_main.py
"""

import argparse
import inspect
import json
import os
import shutil
import subprocess
import sys
import tempfile
import unittest

from gridboard import cli, config
from gridboard.colors import ColorParser, is_texture_ref, swatch_fill_value, texture_ref
from gridboard.config import Swatch, get_all_palettes, get_default_palette, get_palette_by_id, get_texture_by_id
from gridboard.settings import SettingsManager, ensure_json_extension, parse_bool

MAIN_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "main.py")


# ---------------------------------------------------------------------------
# Helper: run main.py as a subprocess (for CLI / integration tests)
# ---------------------------------------------------------------------------
def _run_cli(*args, expect_fail=False):
    """Run main.py with the given CLI args and return (returncode, stdout, stderr)."""
    result = subprocess.run(
        [sys.executable, MAIN_FILE, *args],
        capture_output=True, text=True, encoding="utf-8", timeout=120
    )
    if not expect_fail and result.returncode != 0:
        raise AssertionError(
            f"CLI exited with code {result.returncode}\n"
            f"STDERR: {result.stderr}\nSTDOUT: {result.stdout}"
        )
    return result.returncode, result.stdout, result.stderr


SQUARE_4x3 = ("--grid_type", "square", "--board_shape", "rectangle", "--width", "4", "--height", "3",
              "--canvas_width", "800", "--canvas_height", "600")


# ===================================================================
# 1. ARCHITECTURAL / STRUCTURAL TESTS
# ===================================================================
class TestArchitecture(unittest.TestCase):
    """Verify the CLI classes exist and carry documentation."""

    def test_required_classes_exist(self):
        for name in ("Application",):
            self.assertTrue(inspect.isclass(getattr(cli, name, None)), f"Missing class: {name}")
        self.assertTrue(inspect.isclass(SettingsManager))
        self.assertTrue(inspect.isclass(ColorParser))

    def test_classes_have_docstrings(self):
        for cls in (cli.Application, SettingsManager, ColorParser):
            self.assertTrue(cls.__doc__ and cls.__doc__.strip(), f"{cls.__name__} has no docstring")

    def test_version_comes_from_changelog(self):
        self.assertEqual(cli.Application.VERSION, "1.0.0")

    def test_config_carries_no_drawing_styles(self):
        for name in ("GRID_STROKE", "HOVER_OUTLINE"):
            self.assertFalse(hasattr(config, name), name)


# ===================================================================
# 2. COLOUR PARSER TESTS
# ===================================================================
class TestColorParser(unittest.TestCase):
    """CSS names, hex codes, RGB tuples and texture references."""

    def setUp(self):
        self.parser = ColorParser()

    def test_css_named_color_red(self):
        self.assertEqual(self.parser.parse("red"), (255, 0, 0))

    def test_css_named_color_cornflowerblue(self):
        self.assertEqual(self.parser.parse("cornflowerblue"), (100, 149, 237))

    def test_hex_code_full(self):
        self.assertEqual(self.parser.parse("#FF8000"), (255, 128, 0))

    def test_hex_code_short(self):
        self.assertEqual(self.parser.parse("#F00"), (255, 0, 0))

    def test_rgb_comma_tuple_with_spaces(self):
        self.assertEqual(self.parser.parse(" 255, 128 , 0 "), (255, 128, 0))

    def test_invalid_color_raises(self):
        with self.assertRaises(ValueError):
            self.parser.parse("not_a_color_xyz")

    def test_rgb_out_of_range_raises(self):
        with self.assertRaises(ValueError):
            self.parser.parse("256,0,0")

    def test_rgb_wrong_arity_raises(self):
        with self.assertRaises(ValueError):
            self.parser.parse("1,2")

    def test_normalize(self):
        self.assertEqual(self.parser.normalize("red"), "#ff0000")
        self.assertEqual(self.parser.normalize("#2D5016"), "#2d5016")
        self.assertEqual(self.parser.normalize("0,128,255"), "#0080ff")

    def test_texture_refs_pass_through(self):
        self.assertEqual(self.parser.normalize("texture:grass-tiles"), "texture:grass-tiles")
        self.assertTrue(is_texture_ref(texture_ref("stone-tiles")))
        self.assertFalse(is_texture_ref("#ffffff"))

    def test_swatch_fill_value(self):
        self.assertEqual(swatch_fill_value(Swatch("Forest", "#2D5016")), "#2D5016")
        self.assertEqual(swatch_fill_value(Swatch("Stone", "#b6b7ba", "stone-tiles")), "texture:stone-tiles")


# ===================================================================
# 3. PALETTE CATALOGUE TESTS
# ===================================================================
class TestPalettes(unittest.TestCase):

    def test_default_palette(self):
        self.assertEqual(get_default_palette().id, "landscape")

    def test_lookup(self):
        self.assertEqual(get_palette_by_id("arctic").name, "Arctic")
        self.assertIsNone(get_palette_by_id("missing"))
        self.assertEqual(len({p.id for p in get_all_palettes()}), len(get_all_palettes()))

    def test_texture_swatches_resolve(self):
        for swatch in get_palette_by_id("textures").colors:
            texture = get_texture_by_id(swatch.texture_id)
            self.assertIsNotNone(texture)
            self.assertEqual(swatch.hex, texture.fallback)

    def test_swatches_parse(self):
        parser = ColorParser()
        for palette in get_all_palettes():
            for swatch in palette.colors:
                parser.parse(swatch.hex)


# ===================================================================
# 4. SETTINGS MANAGER TESTS
# ===================================================================
class TestSettingsManager(unittest.TestCase):
    """JSON import/export and CLI precedence."""

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.manager = SettingsManager()

    def tearDown(self):
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def _namespace(self, **overrides):
        values = {key: None for key in self.manager.persisted_keys}
        values.update(grid_type="hexagon", width=11, debug=False)
        values.update(overrides)
        return argparse.Namespace(**values)

    def test_ensure_json_extension(self):
        self.assertEqual(ensure_json_extension("board"), "board.json")
        self.assertEqual(ensure_json_extension("board.JSON"), "board.JSON")

    def test_export_creates_valid_json(self):
        path = self.manager.export_settings(self._namespace(), os.path.join(self.tmp_dir, "board"))
        self.assertTrue(path.endswith("board.json"))
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(set(data), set(self.manager.persisted_keys))
        self.assertIs(data["debug"], False)

    def test_import_rejects_non_object(self):
        path = os.path.join(self.tmp_dir, "list.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump([1, 2, 3], f)
        with self.assertRaises(ValueError):
            self.manager.import_settings(path)

    def test_merge_respects_explicit_keys(self):
        args = self._namespace(width=3)
        merged = self.manager.merge_settings(args, {"grid_type": "square", "width": 9, "unknown": 1}, {"width"})
        self.assertEqual(merged.grid_type, "square")
        self.assertEqual(merged.width, 3)
        self.assertFalse(hasattr(merged, "unknown"))

    def test_parse_bool(self):
        self.assertIs(parse_bool(True), True)
        self.assertIs(parse_bool("False"), False)
        self.assertIs(parse_bool(" yes "), True)
        self.assertIs(parse_bool(0), False)
        with self.assertRaises(ValueError):
            parse_bool("maybe")

    def test_merge_parses_boolean_text(self):
        merged = self.manager.merge_settings(self._namespace(debug=True), {"debug": "false"}, set())
        self.assertIs(merged.debug, False)
        merged = self.manager.merge_settings(self._namespace(), {"debug": "1"}, set())
        self.assertIs(merged.debug, True)
        with self.assertRaises(ValueError):
            self.manager.merge_settings(self._namespace(), {"debug": "maybe"}, set())


# ===================================================================
# 5. CLI TESTS
# ===================================================================
class TestCLI(unittest.TestCase):
    """End-to-end runs of main.py."""

    def test_default_run(self):
        _, stdout, _ = _run_cli()
        self.assertIn("Board Tessellator", stdout)
        self.assertIn("Grid type:        hexagon", stdout)
        self.assertIn("Polygons:         91", stdout)
        self.assertIn("History:          1 / 1", stdout)

    def test_square_board(self):
        _, stdout, _ = _run_cli(*SQUARE_4x3)
        self.assertIn("Polygons:         12", stdout)
        self.assertIn("Canvas:           800 x 600 (padding 48)", stdout)

    def test_paint_and_hit(self):
        _, stdout, _ = _run_cli(*SQUARE_4x3, "--paint", "square_0_0", "--color", "red", "--hit", "148,132")
        self.assertIn("Hit (148, 132): square_0_0 (#ff0000)", stdout)
        self.assertIn("History:          2 / 2", stdout)

    def test_paint_at(self):
        _, stdout, _ = _run_cli(*SQUARE_4x3, "--paint_at", "316,132", "--color", "0,0,255", "--hit", "316,132")
        self.assertIn("Hit (316, 132): square_0_1 (#0000ff)", stdout)

    def test_undo_and_redo(self):
        _, stdout, _ = _run_cli(*SQUARE_4x3, "--paint", "square_0_0", "--color", "red",
                                "--undo", "1", "--hit", "148,132")
        self.assertIn("square_0_0 (#ffffff)", stdout)
        self.assertIn("History:          1 / 2", stdout)
        _, stdout, _ = _run_cli(*SQUARE_4x3, "--paint", "square_0_0", "--color", "red",
                                "--undo", "1", "--redo", "1", "--hit", "148,132")
        self.assertIn("square_0_0 (#ff0000)", stdout)

    def test_random_fill_and_clear(self):
        _, stdout, _ = _run_cli(*SQUARE_4x3, "--random_fill", "--seed", "4")
        self.assertIn("History:          2 / 2", stdout)
        _, stdout, _ = _run_cli(*SQUARE_4x3, "--random_fill", "--seed", "4", "--clear", "--hit", "148,132")
        self.assertIn("History:          3 / 3", stdout)
        self.assertIn("square_0_0 (#ffffff)", stdout)

    def test_missed_actions_are_reported(self):
        _, stdout, _ = _run_cli(*SQUARE_4x3, "--paint", "hex_9_9", "--hit", "1,1", "--undo", "1")
        self.assertIn("unknown polygon 'hex_9_9'", stdout)
        self.assertIn("nothing to undo", stdout)
        self.assertIn("Hit (1, 1): none", stdout)

    def test_debug_lists_polygons(self):
        _, stdout, _ = _run_cli(*SQUARE_4x3, "--debug")
        self.assertIn("square_2_3", stdout)

    def test_triangle_board(self):
        _, stdout, _ = _run_cli("--grid_type", "triangle", "--board_shape", "triangle", "--size", "6")
        self.assertIn("Polygons:         36", stdout)


# ===================================================================
# 6. SETTINGS IMPORT / EXPORT THROUGH THE CLI
# ===================================================================
class TestCLISettings(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def _write(self, name, data):
        path = os.path.join(self.tmp_dir, name)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f)
        return path

    def _write_text(self, name, text):
        path = os.path.join(self.tmp_dir, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def test_export_auto_appends_json_extension(self):
        target = os.path.join(self.tmp_dir, "exported")
        _, stdout, _ = _run_cli(*SQUARE_4x3, "--export_settings", target)
        self.assertTrue(os.path.exists(target + ".json"))
        self.assertIn("Saved:", stdout)
        with open(target + ".json", encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(data["grid_type"], "square")
        self.assertEqual(data["width"], 4)

    def test_import_applies_settings(self):
        path = self._write("board.json", {"grid_type": "square", "board_shape": "rectangle",
                                          "width": 2, "height": 2})
        _, stdout, _ = _run_cli("--import_settings", path)
        self.assertIn("Polygons:         4", stdout)

    def test_cli_overrides_imported_settings(self):
        path = self._write("board.json", {"grid_type": "square", "board_shape": "rectangle",
                                          "width": 2, "height": 2})
        _, stdout, _ = _run_cli("--import_settings", path, "--width", "3")
        self.assertIn("Polygons:         6", stdout)

    def test_export_import_round_trip(self):
        target = os.path.join(self.tmp_dir, "round_trip.json")
        _, first, _ = _run_cli(*SQUARE_4x3, "--orientation", "flat-top", "--export_settings", target)
        _, second, _ = _run_cli("--import_settings", target)
        for label in ("Grid type:", "Board shape:", "Orientation:", "Canvas:", "Polygons:"):
            line = next(text for text in first.splitlines() if label in text)
            self.assertIn(line, second)

    def test_imported_debug_text_is_parsed(self):
        board = {"grid_type": "square", "board_shape": "rectangle", "width": 2, "height": 2}
        _, stdout, _ = _run_cli("--import_settings", self._write("quiet.json", dict(board, debug="false")))
        self.assertNotIn("square_1_1", stdout)
        _, stdout, _ = _run_cli("--import_settings", self._write("loud.json", dict(board, debug="true")))
        self.assertIn("square_1_1", stdout)

    def test_oversized_imported_numbers_fall_back(self):
        huge_int = "1" + "0" * 400
        for padding in ("1e400", huge_int, "-1e400"):
            text = ('{"grid_type": "square", "board_shape": "rectangle", "width": 1e400, '
                    '"height": %s, "padding": %s}' % (huge_int, padding))
            code, stdout, stderr = _run_cli("--import_settings", self._write_text("huge.json", text))
            self.assertEqual(code, 0)
            self.assertIn("(padding 48)", stdout, padding[:8])
            self.assertIn("Polygons:         121", stdout)
            self.assertNotIn("Traceback", stderr)


# ===================================================================
# 7. ERROR HANDLING TESTS
# ===================================================================
class TestErrorHandling(unittest.TestCase):
    """Graceful error handling with non-zero exit codes."""

    def test_invalid_color_exits_nonzero(self):
        code, _, stderr = _run_cli("--color", "not_a_color_xyz", expect_fail=True)
        self.assertNotEqual(code, 0)
        self.assertTrue(len(stderr) > 0, "No error output on stderr")

    def test_invalid_default_fill_exits_nonzero(self):
        code, _, _ = _run_cli("--default_fill", "300,0,0", expect_fail=True)
        self.assertNotEqual(code, 0)

    def test_malformed_json_import_exits_nonzero(self):
        with tempfile.NamedTemporaryFile(suffix=".json", delete=False, mode="w") as f:
            f.write("{this is not valid json")
            bad_json = f.name
        try:
            code, _, stderr = _run_cli("--import_settings", bad_json, expect_fail=True)
            self.assertNotEqual(code, 0)
            self.assertIn("Malformed JSON", stderr)
        finally:
            os.remove(bad_json)

    def test_import_missing_file_exits_nonzero(self):
        code, _, stderr = _run_cli("--import_settings", "nonexistent_file_12345.json", expect_fail=True)
        self.assertNotEqual(code, 0)
        self.assertIn("not found", stderr)

    def test_non_boolean_debug_in_settings_exits_nonzero(self):
        with tempfile.NamedTemporaryFile(suffix=".json", delete=False, mode="w") as f:
            json.dump({"debug": "maybe"}, f)
            bad_json = f.name
        try:
            code, _, stderr = _run_cli("--import_settings", bad_json, expect_fail=True)
            self.assertEqual(code, 1)
            self.assertIn("Boolean value expected", stderr)
        finally:
            os.remove(bad_json)

    def test_bad_point_exits_nonzero(self):
        code, _, _ = _run_cli("--hit", "abc", expect_fail=True)
        self.assertNotEqual(code, 0)


# ===================================================================
# RUNNER
# ===================================================================
if __name__ == "__main__":
    unittest.main(verbosity=2)
