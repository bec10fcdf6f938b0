import pytest

from signbridge.HandData import DetectionFrame, Hand

# Synthetic upright right hand, normalized coordinates (y grows downward).
WRIST_XY = (0.50, 0.80)
FINGER_X = {"index": 0.44, "middle": 0.50, "ring": 0.56, "pinky": 0.62}
MCP_Y = 0.60
UP_Y = (0.50, 0.45, 0.40)  # pip, dip, tip
DOWN_Y = (0.55, 0.60, 0.63)

THUMB_BASE = ((0.46, 0.75), (0.40, 0.70), (0.35, 0.66))  # cmc, mcp, ip
THUMB_TIPS = {
    "tucked": (0.48, 0.68),  # close to index MCP, across the palm
    "out": (0.26, 0.62),  # extended sideways
    "raised": (0.40, 0.42),  # extended and pointing up
}

PINCH = {4: (0.47, 0.47), 8: (0.46, 0.46), 12: (0.48, 0.46)}


def build_hand(
    index=False,
    middle=False,
    ring=False,
    pinky=False,
    thumb="tucked",
    overrides=None,
    handedness="Right",
):
    points = [WRIST_XY]
    points.extend(THUMB_BASE)
    points.append(THUMB_TIPS[thumb])
    for name, up in (("index", index), ("middle", middle), ("ring", ring), ("pinky", pinky)):
        x = FINGER_X[name]
        points.append((x, MCP_Y))
        points.extend((x, y) for y in (UP_Y if up else DOWN_Y))
    for idx, xy in (overrides or {}).items():
        points[idx] = xy
    return Hand.from_points(points, handedness)


def flat(thumb="out", **kw):
    return build_hand(True, True, True, True, thumb=thumb, **kw)


def fist(thumb="tucked", **kw):
    return build_hand(thumb=thumb, **kw)


def frame_of(*hands, ts=0):
    return DetectionFrame.from_hands(hands, ts)


@pytest.fixture
def make_hand():
    return build_hand


@pytest.fixture
def flat_hand():
    return flat


@pytest.fixture
def fist_hand():
    return fist


@pytest.fixture
def make_frame():
    return frame_of


@pytest.fixture
def pinch_overrides():
    return dict(PINCH)
