from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple

import numpy as np

# Landmark indices (wrist, then each finger MCP -> tip)
WRIST = 0
THUMB_CMC, THUMB_MCP, THUMB_IP, THUMB_TIP = 1, 2, 3, 4
INDEX_MCP, INDEX_PIP, INDEX_DIP, INDEX_TIP = 5, 6, 7, 8
MIDDLE_MCP, MIDDLE_PIP, MIDDLE_DIP, MIDDLE_TIP = 9, 10, 11, 12
RING_MCP, RING_PIP, RING_DIP, RING_TIP = 13, 14, 15, 16
PINKY_MCP, PINKY_PIP, PINKY_DIP, PINKY_TIP = 17, 18, 19, 20

NUM_LANDMARKS = 21
MAX_HANDS = 2


@dataclass(frozen=True)
class Landmark:
    """One normalized hand point. x/y are in [0, 1] relative to the frame."""

    x: float
    y: float
    z: float = 0.0


def _extract_point(entry: Any) -> Landmark:
    if isinstance(entry, Landmark):
        return entry
    if hasattr(entry, "x") and hasattr(entry, "y"):
        return Landmark(float(entry.x), float(entry.y), float(getattr(entry, "z", 0.0) or 0.0))
    if isinstance(entry, Mapping):
        if "x" not in entry or "y" not in entry:
            raise ValueError("Landmark mapping needs at least 'x' and 'y' keys.")
        return Landmark(float(entry["x"]), float(entry["y"]), float(entry.get("z", 0.0)))
    if isinstance(entry, (list, tuple)) and len(entry) in (2, 3):
        return Landmark(*(float(v) for v in entry))
    raise ValueError("Unsupported landmark format; expected object with x,y(,z) or sequence of 2-3 values.")


@dataclass(frozen=True)
class Hand:
    """
    Landmarks of a single detected hand, ordered by the mediapipe convention.
    A well-formed hand has exactly NUM_LANDMARKS points; anything else is kept
    as-is so the classifier can reject it.
    """

    landmarks: Tuple[Landmark, ...]
    handedness: str = "Unknown"

    @classmethod
    def from_points(cls, points: Iterable[Any], handedness: Optional[str] = None) -> "Hand":
        return cls(tuple(_extract_point(p) for p in points), handedness or "Unknown")

    @property
    def is_complete(self) -> bool:
        return len(self.landmarks) == NUM_LANDMARKS

    def __len__(self) -> int:
        return len(self.landmarks)

    def __getitem__(self, idx: int) -> Landmark:
        return self.landmarks[idx]

    def as_array(self) -> np.ndarray:
        """(n, 3) float array of x, y, z."""
        if not self.landmarks:
            return np.zeros((0, 3), dtype=float)
        return np.array([[lm.x, lm.y, lm.z] for lm in self.landmarks], dtype=float)

    def to_dict(self):
        """Serialize to JSON-friendly dict."""
        return {
            "handedness": self.handedness,
            "landmarks": [{"x": lm.x, "y": lm.y, "z": lm.z} for lm in self.landmarks],
        }


@dataclass(frozen=True)
class DetectionFrame:
    """Hands reported by the detector for one video frame."""

    hands: Tuple[Hand, ...] = field(default_factory=tuple)
    timestamp_ms: int = 0

    @classmethod
    def empty(cls, timestamp_ms: int = 0) -> "DetectionFrame":
        return cls((), timestamp_ms)

    @classmethod
    def from_hands(cls, hands: Sequence[Hand], timestamp_ms: int = 0) -> "DetectionFrame":
        return cls(tuple(hands), timestamp_ms)

    def __len__(self) -> int:
        return len(self.hands)

    def to_dict(self):
        return {
            "timestamp_ms": self.timestamp_ms,
            "hands": [h.to_dict() for h in self.hands],
        }
