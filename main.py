"""
Board Tessellator

Command-line front end for the gridboard package: generates hexagon,
triangle, square and diamond boards for a canvas, applies paint actions
and prints a summary of the result.

Usage:
    python main.py --debug
    python main.py --grid_type square --board_shape rectangle --width 4 --height 3
    python main.py --import_settings settings.json
    python main.py --export_settings settings.json
"""

from gridboard.cli import main


if __name__ == "__main__":
    main()
