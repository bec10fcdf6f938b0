from collections import Counter, deque
from typing import Deque, Hashable, Optional, Tuple

WINDOW_SIZE = 10
CONFIRM_THRESHOLD = 7


class GestureStabilizer:
    """
    Majority vote over the last `window` raw labels.

    update() returns a label only at the moment it becomes the confirmed one:
    it must hold at least `threshold` slots of the window and differ from the
    label confirmed before. Frames without a label are skipped entirely, so
    they neither dilute nor evict earlier evidence.
    """

    def __init__(self, window: int = WINDOW_SIZE, threshold: int = CONFIRM_THRESHOLD):
        if int(window) < 1:
            raise ValueError(f"window must be >= 1, got {window}")
        if not 1 <= int(threshold) <= int(window):
            raise ValueError(f"threshold must be within 1..{window}, got {threshold}")
        self.window = int(window)
        self.threshold = int(threshold)
        self._buffer: Deque[Hashable] = deque(maxlen=self.window)
        self._confirmed: Optional[Hashable] = None

    @property
    def confirmed(self) -> Optional[Hashable]:
        return self._confirmed

    @property
    def buffer(self) -> Tuple[Hashable, ...]:
        """Buffered raw labels, oldest first."""
        return tuple(self._buffer)

    @property
    def fill(self) -> float:
        return len(self._buffer) / self.window

    def dominant(self) -> Tuple[Optional[Hashable], int]:
        """Most frequent buffered label and its count; ties go to the oldest."""
        if not self._buffer:
            return None, 0
        # Counter keeps insertion order and most_common() is stable, so the
        # label seen first wins a tie.
        label, votes = Counter(self._buffer).most_common(1)[0]
        return label, votes

    def update(self, raw: Optional[Hashable]) -> Optional[Hashable]:
        if raw is None:
            return None

        self._buffer.append(raw)

        label, votes = self.dominant()
        if votes >= self.threshold and label != self._confirmed:
            self._confirmed = label
            return label
        return None

    def reset(self) -> None:
        self._buffer.clear()
        self._confirmed = None

    def __len__(self) -> int:
        return len(self._buffer)
