from dataclasses import dataclass
from typing import Tuple

from .HandData import (
    INDEX_MCP,
    INDEX_PIP,
    INDEX_TIP,
    MIDDLE_MCP,
    MIDDLE_PIP,
    MIDDLE_TIP,
    PINKY_MCP,
    PINKY_PIP,
    PINKY_TIP,
    RING_MCP,
    RING_PIP,
    RING_TIP,
    THUMB_TIP,
    WRIST,
    Hand,
)
from .helpers import dist, dx, rise

# All distances are in normalized frame units.
TIP_OVER_PIP = 0.04
TIP_OVER_MCP = 0.06
THUMB_EXTENDED_DIST = 0.12
THUMB_RAISED_MARGIN = 0.08
PINCH_RADIUS = 0.05
POINTING_OFFSET = 0.12

# (mcp, pip, tip) per non-thumb finger
FINGER_JOINTS: Tuple[Tuple[int, int, int], ...] = (
    (INDEX_MCP, INDEX_PIP, INDEX_TIP),
    (MIDDLE_MCP, MIDDLE_PIP, MIDDLE_TIP),
    (RING_MCP, RING_PIP, RING_TIP),
    (PINKY_MCP, PINKY_PIP, PINKY_TIP),
)


def finger_up(hand: Hand, mcp: int, pip: int, tip: int) -> bool:
    """
    Tip must clear the PIP and the MCP by fixed margins so a slightly bent
    finger does not flicker between up and down.
    """
    return (
        rise(hand[tip], hand[pip]) > TIP_OVER_PIP
        and rise(hand[tip], hand[mcp]) > TIP_OVER_MCP
    )


@dataclass(frozen=True)
class FingerState:
    thumb: bool
    index: bool
    middle: bool
    ring: bool
    pinky: bool
    pinch: bool = False
    pointing_left: bool = False
    pointing_right: bool = False
    thumb_raised: bool = False
    tip_gap: float = 0.0
    tilt: float = 0.0
    spread: float = 0.0

    @property
    def fingers(self) -> Tuple[bool, bool, bool, bool]:
        """index, middle, ring, pinky"""
        return (self.index, self.middle, self.ring, self.pinky)

    @property
    def is_flat(self) -> bool:
        return all(self.fingers)

    @property
    def is_fist(self) -> bool:
        return not any(self.fingers)

    def only(self, *names: str) -> bool:
        """True if exactly the named non-thumb fingers are up."""
        wanted = set(names)
        return all(
            getattr(self, name) == (name in wanted)
            for name in ("index", "middle", "ring", "pinky")
        )


def extract_finger_state(hand: Hand) -> FingerState:
    """Derive the FingerState of a complete (21 point) hand."""
    index, middle, ring, pinky = (finger_up(hand, *joints) for joints in FINGER_JOINTS)

    thumb_tip = hand[THUMB_TIP]
    index_mcp = hand[INDEX_MCP]
    thumb = dist(thumb_tip, index_mcp) > THUMB_EXTENDED_DIST
    thumb_raised = thumb and rise(thumb_tip, index_mcp) > THUMB_RAISED_MARGIN

    pinch = (
        dist(thumb_tip, hand[INDEX_TIP]) < PINCH_RADIUS
        and dist(thumb_tip, hand[MIDDLE_TIP]) < PINCH_RADIUS
    )

    pointing = dx(hand[INDEX_TIP], index_mcp)

    return FingerState(
        thumb=thumb,
        index=index,
        middle=middle,
        ring=ring,
        pinky=pinky,
        pinch=pinch,
        pointing_left=pointing < -POINTING_OFFSET,
        pointing_right=pointing > POINTING_OFFSET,
        thumb_raised=thumb_raised,
        tip_gap=abs(dx(hand[INDEX_TIP], hand[MIDDLE_TIP])),
        tilt=abs(dx(hand[INDEX_TIP], hand[WRIST])),
        spread=abs(dx(hand[INDEX_TIP], hand[PINKY_TIP])),
    )
