"""
Bounded undo/redo history of per-cell colours.

An append-only log of immutable snapshots with a movable cursor. Recording
after an undo discards the redo branch; recording past capacity evicts the
oldest snapshot.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple

import structlog

from gridboard.config import HISTORY_LIMIT
from gridboard.models import Polygon

logger = structlog.get_logger()


class SnapshotEntry(NamedTuple):
    id: str
    color: str


@dataclass(frozen=True)
class HistorySnapshot:
    """Immutable record of every polygon colour at one point in time."""

    entries: Tuple[SnapshotEntry, ...]

    @classmethod
    def capture(cls, polygons: Iterable[Polygon]) -> "HistorySnapshot":
        return cls(tuple(SnapshotEntry(p.id, p.color) for p in polygons))

    def color_map(self) -> Dict[str, str]:
        return {entry.id: entry.color for entry in self.entries}

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[SnapshotEntry]:
        return iter(self.entries)


def restore_snapshot(snapshot: Optional[HistorySnapshot], polygons: Iterable[Polygon]) -> int:
    """Apply snapshot colours onto live polygons by id.

    Polygons whose id is absent from the snapshot keep their colour.

    Args:
        snapshot: Snapshot to apply; None is a no-op.
        polygons: The live polygon collection.

    Returns:
        Number of polygons whose colour changed.
    """
    if snapshot is None:
        return 0
    colors = snapshot.color_map()
    changed = 0
    for polygon in polygons:
        if polygon.id in colors and polygon.color != colors[polygon.id]:
            polygon.color = colors[polygon.id]
            changed += 1
    return changed


class PaintHistory:
    """Undo/redo stack over polygon colour snapshots.

    ``cursor`` indexes the active snapshot; -1 means empty. The invariant
    ``-1 <= cursor < len(entries)`` holds after every operation.

    Attributes:
        limit: Maximum number of retained snapshots.
    """

    def __init__(self, limit: int = HISTORY_LIMIT) -> None:
        self._limit: int = max(1, int(limit))
        self._entries: List[HistorySnapshot] = []
        self._cursor: int = -1

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def entries(self) -> Tuple[HistorySnapshot, ...]:
        return tuple(self._entries)

    @property
    def current(self) -> Optional[HistorySnapshot]:
        """Snapshot at the cursor, or None when empty."""
        if self._cursor < 0:
            return None
        return self._entries[self._cursor]

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, polygons: Iterable[Polygon]) -> Optional[HistorySnapshot]:
        """Snapshot the colours of every live polygon.

        Entries after the cursor are discarded first. When the log then
        exceeds ``limit`` the oldest entry is evicted. The cursor ends on the
        new snapshot.

        Args:
            polygons: The live polygon collection.

        Returns:
            The recorded snapshot, or None when there are no polygons.
        """
        snapshot = HistorySnapshot.capture(polygons)
        if not snapshot.entries:
            return None

        if self._cursor < len(self._entries) - 1:
            discarded = len(self._entries) - self._cursor - 1
            del self._entries[self._cursor + 1:]
            logger.debug("Discarded redo branch", entries=discarded)

        self._entries.append(snapshot)
        if len(self._entries) > self._limit:
            self._entries.pop(0)
            logger.debug("Evicted oldest history entry", limit=self._limit)
        self._cursor = len(self._entries) - 1
        return snapshot

    def undo(self) -> Optional[HistorySnapshot]:
        """Step back one snapshot; None when already at the oldest."""
        if self._cursor <= 0:
            return None
        self._cursor -= 1
        return self._entries[self._cursor]

    def redo(self) -> Optional[HistorySnapshot]:
        """Step forward one snapshot; None when already at the newest."""
        if self._cursor >= len(self._entries) - 1:
            return None
        self._cursor += 1
        return self._entries[self._cursor]

    def restore(self, snapshot: Optional[HistorySnapshot], polygons: Iterable[Polygon]) -> int:
        return restore_snapshot(snapshot, polygons)

    def reset(self) -> None:
        """Forget every snapshot, e.g. after generating an unrelated board."""
        self._entries.clear()
        self._cursor = -1
