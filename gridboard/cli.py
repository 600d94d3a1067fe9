"""
Board Tessellator command-line application.

Generates a tessellated board for a configuration and canvas size, applies
optional paint, fill, clear and undo/redo actions through a BoardSession,
reports hit-test results and prints a summary of the resulting board.

Usage:
    python main.py --grid_type square --board_shape rectangle --width 4 --height 3
    python main.py --board_shape hexagon --radius 3 --hit 512,384 --debug
    python main.py --grid_type triangle --board_shape triangle --size 6 --paint triangle_0_0 --color red
    python main.py --import_settings board.json --export_settings board_copy.json
"""

import argparse
import json
import os
import random
import re
import sys
from typing import List, Optional, Tuple

import structlog

from gridboard.colors import ColorParser
from gridboard.config import CANVAS_PADDING, DEFAULT_BOARD_CONFIG, DEFAULT_FILL, DEFAULT_PALETTE_ID, VERSION
from gridboard.grids.base import resolve_padding
from gridboard.log import configure_logging
from gridboard.models import BoardConfig, Point
from gridboard.session import BoardSession
from gridboard.settings import SettingsManager, ensure_json_extension, parse_bool

logger = structlog.get_logger()


# ---------------------------------------------------------------------------
# Version helper
# ---------------------------------------------------------------------------
def _changelog_version(fallback: str = "0.0.0") -> str:
    """Read the highest version from CHANGELOG.md at the project root.

    Scans for ``## [X.Y.Z]`` headings (skipping ``[Unreleased]``) and returns
    the first match. Returns *fallback* when the file is missing or has no
    versioned headings.
    """
    root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    changelog = os.path.join(root, "CHANGELOG.md")
    try:
        with open(changelog, "r", encoding="utf-8") as fh:
            for line in fh:
                m = re.match(r"^##\s+\[(\d+\.\d+\.\d+)\]", line)
                if m:
                    return m.group(1)
    except OSError:
        pass
    return fallback


def _parse_point(value: str) -> Point:
    """Parse an ``x,y`` pixel coordinate."""
    parts = [p.strip() for p in str(value).split(",")]
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"Point must be 'x,y', got '{value}'")
    try:
        return Point(float(parts[0]), float(parts[1]))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Point coordinates must be numbers: '{value}'")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------
class Application:
    """Top-level entry point for the Board Tessellator.

    Orchestrates CLI argument parsing, settings loading, board generation,
    paint actions and summary output.
    """

    VERSION:      str = _changelog_version(VERSION)
    BUILD_DATE:   str = "2026-10-18"
    TITLE:        str = "Board Tessellator"
    BANNER_WIDTH: int = 60

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Execute the full application pipeline.

        Args:
            argv: Argument list; ``sys.argv[1:]`` when None.

        Returns:
            Process exit code.
        """
        # Step 1: Parse CLI arguments and detect explicit keys
        args, explicit_keys = self._parse_args(argv)
        manager = SettingsManager()

        # Step 2: Import settings if requested
        if args.import_settings:
            path = ensure_json_extension(args.import_settings)
            try:
                json_data = manager.import_settings(path)
                args = manager.merge_settings(args, json_data, explicit_keys)
            except FileNotFoundError:
                print(f"Error: Settings file not found: '{path}'", file=sys.stderr)
                return 1
            except json.JSONDecodeError as e:
                print(f"Error: Malformed JSON in settings file: {e}", file=sys.stderr)
                return 1
            except ValueError as e:
                print(f"Error: {e}", file=sys.stderr)
                return 1

        configure_logging(bool(args.debug))

        # Step 3: Export settings if requested
        export_path = None
        if args.export_settings:
            try:
                export_path = manager.export_settings(args, args.export_settings)
                logger.info("Settings exported", path=export_path)
            except OSError as e:
                print(f"Error: Cannot write settings file: {e}", file=sys.stderr)
                return 1

        # Step 4: Parse colour strings and padding
        parser = ColorParser()
        try:
            default_fill = parser.normalize(args.default_fill)
            paint_color = parser.normalize(args.color) if args.color else None
            padding = self._parse_padding(args.padding)
        except (TypeError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        # Step 5: Generate the board
        config = BoardConfig.with_defaults({
            "grid_type": args.grid_type,
            "orientation": args.orientation,
            "board_shape": args.board_shape,
            "width": args.width,
            "height": args.height,
            "radius": args.radius,
            "size": args.size,
            "triangle_orientation": args.triangle_orientation,
        })
        session = BoardSession(
            canvas=(args.canvas_width, args.canvas_height),
            padding=padding,
            default_fill=default_fill,
        )
        session.select_palette(args.palette)
        if paint_color:
            session.select_color(paint_color)
        session.generate_board(config, mark_dirty=False)

        # Step 6: Apply paint actions
        skipped = self._apply_actions(args, session)
        logger.debug("Actions applied", polygons=len(session.polygons), skipped=len(skipped))

        # Step 7: Report
        self._print_banner()
        self._print_summary(session, args, skipped)
        if args.debug:
            self._print_debug(session)
        if export_path:
            print(f"  Saved: {export_path}")
        print()
        return 0

    def _apply_actions(self, args: argparse.Namespace, session: BoardSession) -> List[str]:
        """Apply paint/fill/clear/undo/redo flags in a fixed order.

        Returns:
            Human-readable notes for actions that had no target.
        """
        skipped: List[str] = []
        for polygon_id in args.paint or []:
            if session.polygon_by_id(polygon_id) is None:
                skipped.append(f"unknown polygon '{polygon_id}'")
                continue
            session.paint(polygon_id)
        for point in args.paint_at or []:
            if session.paint_at(point) is None:
                skipped.append(f"no polygon at ({point.x:g}, {point.y:g})")
        if args.random_fill:
            rng = random.Random(args.seed) if args.seed is not None else None
            session.random_fill(rng)
        if args.clear:
            session.clear_board()
        for _ in range(max(0, args.undo)):
            if not session.undo():
                skipped.append("nothing to undo")
                break
        for _ in range(max(0, args.redo)):
            if not session.redo():
                skipped.append("nothing to redo")
                break
        return skipped

    def _parse_args(self, argv: Optional[List[str]] = None) -> Tuple[argparse.Namespace, set]:
        """Parse CLI arguments and detect which were explicitly provided.

        Returns:
            A tuple of (parsed Namespace, set of explicitly-provided key names).
        """
        parser = self._build_parser()
        args = parser.parse_args(argv)

        # Second parse with SUPPRESS defaults to detect explicit keys
        suppress_parser = self._build_parser(suppress_defaults=True)
        explicit_args = suppress_parser.parse_args(argv)
        explicit_keys = set(vars(explicit_args).keys())

        return args, explicit_keys

    def _build_parser(self, suppress_defaults: bool = False) -> argparse.ArgumentParser:
        """Build the argparse ArgumentParser.

        Args:
            suppress_defaults: If True, set all defaults to SUPPRESS to
                detect explicitly-provided CLI args.

        Returns:
            A configured ArgumentParser.
        """
        banner = self._banner_text()

        class _BannerParser(argparse.ArgumentParser):
            """ArgumentParser that prints the banner before help text."""

            def print_help(self, file=None):
                if file is None:
                    file = sys.stdout
                file.write(banner + "\n\n")
                super().print_help(file)

        def d(value):
            return argparse.SUPPRESS if suppress_defaults else value

        defaults = DEFAULT_BOARD_CONFIG
        parser = _BannerParser(
            description="Board Tessellator: generate and paint tessellated game boards.",
        )

        parser.add_argument("--grid_type", type=str, default=d(defaults["grid_type"]),
                            help="Cell shape: hexagon, triangle, square, orthogonal-square (default: hexagon)")
        parser.add_argument("--orientation", type=str, default=d(defaults["orientation"]),
                            help="Hexagon orientation: pointy-top, flat-top (default: pointy-top)")
        parser.add_argument("--board_shape", type=str, default=d(defaults["board_shape"]),
                            help="Board outline: rectangle, square, hexagon, triangle, circle (default: hexagon)")
        parser.add_argument("--width", type=int, default=d(defaults["width"]),
                            help="Columns for rectangular boards (default: 11)")
        parser.add_argument("--height", type=int, default=d(defaults["height"]),
                            help="Rows for rectangular boards (default: 11)")
        parser.add_argument("--radius", type=int, default=d(defaults["radius"]),
                            help="Radius for hexagon and circle boards (default: 5)")
        parser.add_argument("--size", type=int, default=d(defaults["size"]),
                            help="Base size for triangle boards (default: 10)")
        parser.add_argument("--triangle_orientation", type=str, default=d(defaults["triangle_orientation"]),
                            help="Triangle board apex: point-up, point-down (default: point-up)")
        parser.add_argument("--canvas_width", type=int, default=d(1024),
                            help="Canvas width in pixels (default: 1024)")
        parser.add_argument("--canvas_height", type=int, default=d(768),
                            help="Canvas height in pixels (default: 768)")
        parser.add_argument("--padding", type=int, default=d(CANVAS_PADDING),
                            help=f"Canvas padding in pixels (default: {CANVAS_PADDING})")
        parser.add_argument("--default_fill", type=str, default=d(DEFAULT_FILL),
                            help=f"Fill colour of blank cells (default: {DEFAULT_FILL})")
        parser.add_argument("--palette", type=str, default=d(DEFAULT_PALETTE_ID),
                            help=f"Palette used for painting and random fill (default: {DEFAULT_PALETTE_ID})")
        parser.add_argument("--color", type=str, default=d(None),
                            help="Paint colour (default: first swatch of the palette)")
        parser.add_argument("--paint", type=str, action="append", default=d(None), metavar="ID",
                            help="Paint the polygon with this id (repeatable)")
        parser.add_argument("--paint_at", type=_parse_point, action="append", default=d(None), metavar="X,Y",
                            help="Paint the polygon under this canvas point (repeatable)")
        parser.add_argument("--random_fill", nargs="?", const=True, default=d(False),
                            type=self._parse_bool_flag,
                            help="Fill every cell with a random palette swatch")
        parser.add_argument("--seed", type=int, default=d(None),
                            help="Random seed for --random_fill")
        parser.add_argument("--clear", nargs="?", const=True, default=d(False),
                            type=self._parse_bool_flag,
                            help="Reset every cell to the blank tile colour")
        parser.add_argument("--undo", type=int, default=d(0),
                            help="Undo steps to apply after painting (default: 0)")
        parser.add_argument("--redo", type=int, default=d(0),
                            help="Redo steps to apply after undoing (default: 0)")
        parser.add_argument("--hit", type=_parse_point, action="append", default=d(None), metavar="X,Y",
                            help="Report the polygon under this canvas point (repeatable)")
        parser.add_argument("--debug", nargs="?", const=True, default=d(False),
                            type=self._parse_bool_flag,
                            help="Enable debug output")
        parser.add_argument("--export_settings", type=str, default=None,
                            help="Export parameters to a JSON file")
        parser.add_argument("--import_settings", type=str, default=None,
                            help="Import parameters from a JSON file")

        return parser

    def _parse_bool_flag(self, value: str) -> bool:
        """Parse a boolean flag value ('true'/'false' or bare flag)."""
        try:
            return parse_bool(value)
        except ValueError as e:
            raise argparse.ArgumentTypeError(str(e))

    def _parse_padding(self, value) -> float:
        """Parse the padding setting.

        Non-numeric values raise ValueError. Numbers that are NaN, infinite,
        too large for a float or negative fall back to CANVAS_PADDING.
        """
        try:
            return resolve_padding(float(value))
        except OverflowError:
            return float(CANVAS_PADDING)

    def _banner_text(self) -> str:
        w = self.BANNER_WIDTH
        inner = w - 2
        lines = [
            "┌" + "─" * inner + "┐",
            f"│{'  Program:    ' + self.TITLE:<{inner}}│",
            f"│{'  Version:    ' + self.VERSION:<{inner}}│",
            f"│{'  Build Date: ' + self.BUILD_DATE:<{inner}}│",
            "└" + "─" * inner + "┘",
        ]
        return "\n".join(lines)

    def _print_banner(self) -> None:
        print(self._banner_text())

    def _print_summary(self, session: BoardSession, args: argparse.Namespace, skipped: List[str]) -> None:
        """Print the board summary and any hit-test results."""
        config = session.board_config
        history = session.history
        canvas = session.canvas
        canvas_str = f"{canvas.width:g} x {canvas.height:g}" if canvas else "unavailable"
        print(f"\n  Grid type:        {config.grid_type.value}")
        print(f"  Board shape:      {config.board_shape.value}")
        print(f"  Orientation:      {config.orientation.value}")
        print(f"  Canvas:           {canvas_str} (padding {session.padding:g})")
        print(f"  Polygons:         {len(session.polygons)}")
        print(f"  History:          {history.cursor + 1} / {len(history)}")
        for note in skipped:
            print(f"  Skipped:          {note}")
        for point in args.hit or []:
            polygon = session.find_polygon(point)
            result = f"{polygon.id} ({polygon.color})" if polygon else "none"
            print(f"  Hit ({point.x:g}, {point.y:g}): {result}")

    def _print_debug(self, session: BoardSession) -> None:
        """Print one line per polygon: id, type, centre and colour."""
        print()
        for polygon in session.polygons:
            cx, cy = polygon.center
            print(f"  {polygon.id:<24} {polygon.type.value:<18} ({cx:8.2f}, {cy:8.2f})  {polygon.color}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the Board Tessellator."""
    if sys.stdout and hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    app = Application()
    sys.exit(app.run(argv))
