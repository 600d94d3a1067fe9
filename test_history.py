"""
Paint history tests: snapshot capture and restore, cursor movement,
redo-branch discard and capacity eviction.

Run:  python -m pytest test_history.py -v
Or:   python test_history.py
"""

import unittest

from gridboard.config import HISTORY_LIMIT
from gridboard.history import HistorySnapshot, PaintHistory, SnapshotEntry, restore_snapshot
from gridboard.models import GridType, create_polygon


def _cells(*colors):
    return [
        create_polygon(f"square_0_{i}", GridType.SQUARE, (i, 0), [(i, 0), (i + 1, 0), (i + 1, 1), (i, 1)], color)
        for i, color in enumerate(colors)
    ]


# ===================================================================
# 1. SNAPSHOTS
# ===================================================================
class TestSnapshot(unittest.TestCase):

    def test_capture_copies_colors(self):
        cells = _cells("#ff0000", "#00ff00")
        snapshot = HistorySnapshot.capture(cells)
        cells[0].color = "#0000ff"
        self.assertEqual(list(snapshot), [SnapshotEntry("square_0_0", "#ff0000"), SnapshotEntry("square_0_1", "#00ff00")])
        self.assertEqual(len(snapshot), 2)

    def test_restore_round_trip(self):
        """Restoring a snapshot onto the same ids brings back every captured colour."""
        cells = _cells("#111111", "#222222", "#333333")
        snapshot = HistorySnapshot.capture(cells)
        for cell in cells:
            cell.color = "#ffffff"
        self.assertEqual(restore_snapshot(snapshot, cells), 3)
        self.assertEqual([c.color for c in cells], ["#111111", "#222222", "#333333"])

    def test_restore_leaves_absent_ids(self):
        snapshot = HistorySnapshot((SnapshotEntry("square_0_0", "#abcdef"),))
        cells = _cells("#ffffff", "#123456")
        self.assertEqual(restore_snapshot(snapshot, cells), 1)
        self.assertEqual(cells[0].color, "#abcdef")
        self.assertEqual(cells[1].color, "#123456")

    def test_restore_none_is_noop(self):
        cells = _cells("#ffffff")
        self.assertEqual(restore_snapshot(None, cells), 0)


# ===================================================================
# 2. UNDO / REDO
# ===================================================================
class TestPaintHistory(unittest.TestCase):

    def test_empty_history(self):
        history = PaintHistory()
        self.assertEqual(history.cursor, -1)
        self.assertIsNone(history.current)
        self.assertIsNone(history.undo())
        self.assertIsNone(history.redo())
        self.assertEqual(history.limit, HISTORY_LIMIT)

    def test_record_without_polygons(self):
        history = PaintHistory()
        self.assertIsNone(history.record([]))
        self.assertEqual(len(history), 0)

    def test_undo_and_redo(self):
        cells = _cells("#ffffff")
        history = PaintHistory()
        history.record(cells)
        cells[0].color = "#ff0000"
        history.record(cells)

        snapshot = history.undo()
        history.restore(snapshot, cells)
        self.assertEqual(cells[0].color, "#ffffff")
        self.assertEqual(history.cursor, 0)
        self.assertIsNone(history.undo())
        self.assertFalse(history.can_undo)

        history.restore(history.redo(), cells)
        self.assertEqual(cells[0].color, "#ff0000")
        self.assertIsNone(history.redo())
        self.assertFalse(history.can_redo)

    def test_undo_then_redo_returns_to_same_snapshot(self):
        """k undos followed by k redos land on the snapshot they started from, for every k."""
        cells = _cells("#ffffff", "#ffffff")
        history = PaintHistory()
        for color in ("#ffffff", "#111111", "#222222", "#333333", "#444444"):
            cells[0].color = color
            history.record(cells)
        start_cursor, start = history.cursor, history.current

        for k in range(len(history)):
            for _ in range(k):
                history.restore(history.undo(), cells)
            self.assertEqual(history.cursor, start_cursor - k)
            for _ in range(k):
                history.restore(history.redo(), cells)
            self.assertEqual(history.cursor, start_cursor, f"k={k}")
            self.assertIs(history.current, start, f"k={k}")
            self.assertEqual(cells[0].color, "#444444", f"k={k}")

    def test_record_after_undo_discards_redo_branch(self):
        cells = _cells("#ffffff")
        history = PaintHistory()
        for color in ("#ffffff", "#111111", "#222222"):
            cells[0].color = color
            history.record(cells)
        history.undo()
        history.undo()
        cells[0].color = "#999999"
        history.record(cells)
        self.assertEqual(len(history), 2)
        self.assertEqual(history.cursor, 1)
        self.assertFalse(history.can_redo)
        self.assertEqual(history.current.color_map(), {"square_0_0": "#999999"})

    def test_capacity_evicts_oldest(self):
        cells = _cells("#ffffff")
        history = PaintHistory()
        for i in range(HISTORY_LIMIT + 1):
            cells[0].color = f"#0000{i:02x}"
            history.record(cells)
        self.assertEqual(len(history), HISTORY_LIMIT)
        self.assertEqual(history.cursor, HISTORY_LIMIT - 1)
        self.assertEqual(history.entries[0].color_map(), {"square_0_0": "#000001"})

    def test_cursor_stays_in_range(self):
        cells = _cells("#ffffff")
        history = PaintHistory(limit=3)
        for _ in range(5):
            history.record(cells)
            self.assertTrue(-1 <= history.cursor < len(history))
        for _ in range(5):
            history.undo()
            self.assertTrue(-1 <= history.cursor < len(history))
        self.assertEqual(history.cursor, 0)

    def test_reset(self):
        history = PaintHistory()
        history.record(_cells("#ffffff"))
        history.reset()
        self.assertEqual(len(history), 0)
        self.assertEqual(history.cursor, -1)


# ===================================================================
# RUNNER
# ===================================================================
if __name__ == "__main__":
    unittest.main(verbosity=2)
