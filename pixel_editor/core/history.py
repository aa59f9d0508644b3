import logging
from dataclasses import dataclass
from typing import Optional

from pixel_editor.core.constants import UNDO_LIMIT
from pixel_editor.core.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


@dataclass
class HistoryManager:
    """
    Bounded undo/redo of full buffer snapshots. One snapshot per user action;
    the oldest snapshot is evicted once ``limit`` is exceeded.
    """
    limit: int = UNDO_LIMIT

    def __post_init__(self):
        self.limit = max(1, int(self.limit))
        self._undo: list[PixelBuffer] = []
        self._redo: list[PixelBuffer] = []

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def push_undo(self, buffer: PixelBuffer):
        self._undo.append(buffer.clone())
        if len(self._undo) > self.limit:
            self._undo.pop(0)
            logger.debug("History full, evicted oldest snapshot")
        self._redo.clear()

    def undo(self, current: PixelBuffer) -> Optional[PixelBuffer]:
        if not self._undo:
            return None
        snapshot = self._undo.pop()
        self._redo.append(current.clone())
        return snapshot

    def redo(self, current: PixelBuffer) -> Optional[PixelBuffer]:
        if not self._redo:
            return None
        snapshot = self._redo.pop()
        self._undo.append(current.clone())
        return snapshot

    def clear(self):
        self._undo.clear()
        self._redo.clear()
