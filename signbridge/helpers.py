import copy
import json
import logging
import math
import os
import sys

import cv2
import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "camera": {
        "index": 0,
        "frame_width": 1280,
        "frame_height": 720,
        "mirror": True,
    },
    "tracker": {
        "model_path": "hand_landmarker.task",
        "num_hands": 2,
        "min_detection_confidence": 0.5,
        "min_presence_confidence": 0.5,
        "min_tracking_confidence": 0.5,
    },
    "speech": {
        "enabled": True,
        "rate": 165,
        "volume": 1.0,
    },
    "debug": {
        "draw_landmarks": True,
        "window_name": "Sign Bridge",
    },
    "logging": {
        "level": "INFO",
    },
}

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


# ---------- geometry (z is ignored) ----------
def dist(a, b):
    """Euclidean distance in normalized x/y between two landmarks."""
    return math.hypot(a.x - b.x, a.y - b.y)


def rise(upper, lower):
    """How far `upper` sits above `lower` (image y grows downward)."""
    return lower.y - upper.y


def dx(a, b):
    return a.x - b.x


# ---------- config ----------
def merge_config(base, override):
    """Deep-merge `override` into a copy of `base`."""
    merged = copy.deepcopy(base)
    if not override:
        return merged
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(merged.get(k), dict):
            merged[k] = merge_config(merged[k], v)
        else:
            merged[k] = v
    return merged


def load_config(path="config.json"):
    """Load a JSON config file merged over DEFAULT_CONFIG."""
    if not path or not os.path.exists(path):
        logger.warning("Config '%s' not found, using defaults.", path)
        return merge_config(DEFAULT_CONFIG, None)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error("Failed to load config '%s': %s", path, e)
        return merge_config(DEFAULT_CONFIG, None)
    if not isinstance(data, dict):
        logger.error("Config '%s' must hold a JSON object, using defaults.", path)
        return merge_config(DEFAULT_CONFIG, None)
    return merge_config(DEFAULT_CONFIG, data)


def setup_logging(level="INFO"):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


# ---------- debug drawing ----------
HAND_PATHS = (
    (0, 1, 2, 3, 4),
    (0, 5, 6, 7, 8),
    (0, 9, 10, 11, 12),
    (0, 13, 14, 15, 16),
    (0, 17, 18, 19, 20),
    (5, 9, 13, 17),
)

PATH_COLOR = (6, 245, 249)
POINT_COLOR = (255, 122, 0)
TEXT_COLOR = (6, 245, 249)
PAUSED_COLOR = (0, 0, 255)
ACTIVE_COLOR = (0, 200, 0)


def draw_hand_debug(frame, hand):
    """Draw the hand skeleton onto a BGR frame."""
    h, w = frame.shape[:2]
    pts = hand.as_array()
    if len(pts) == 0:
        return
    px = np.round(pts[:, :2] * np.array([w, h])).astype(np.int32)

    for path in HAND_PATHS:
        idx = [i for i in path if i < len(px)]
        if len(idx) < 2:
            continue
        cv2.polylines(frame, [px[idx].reshape(-1, 1, 2)], False, PATH_COLOR, 3, cv2.LINE_AA)
    for x, y in px:
        cv2.circle(frame, (int(x), int(y)), 4, POINT_COLOR, -1)


def draw_status(frame, word, tracking, speech_on, stability=0.0, history=()):
    """
    Text overlay: tracking status, current word, stability bar and the
    recent-confirmations list.
    """
    h, w = frame.shape[:2]
    status = "AI Tracking Active" if tracking else "Tracking Paused"
    cv2.putText(
        frame,
        status,
        (10, 30),
        cv2.FONT_HERSHEY_SIMPLEX,
        0.7,
        ACTIVE_COLOR if tracking else PAUSED_COLOR,
        2,
        cv2.LINE_AA,
    )
    cv2.putText(
        frame,
        f"Speech {'ON' if speech_on else 'OFF'}",
        (10, 60),
        cv2.FONT_HERSHEY_SIMPLEX,
        0.55,
        TEXT_COLOR,
        1,
        cv2.LINE_AA,
    )

    bar_w = int(200 * max(0.0, min(1.0, stability)))
    cv2.rectangle(frame, (10, 75), (210, 85), (80, 80, 80), 1)
    if bar_w > 0:
        cv2.rectangle(frame, (10, 75), (10 + bar_w, 85), TEXT_COLOR, -1)

    for i, past in enumerate(history):
        cv2.putText(
            frame,
            str(past),
            (w - 220, 30 + i * 24),
            cv2.FONT_HERSHEY_SIMPLEX,
            0.55,
            (200, 200, 200),
            1,
            cv2.LINE_AA,
        )

    cv2.putText(
        frame,
        str(word) if word else "...",
        (10, h - 30),
        cv2.FONT_HERSHEY_SIMPLEX,
        2.0,
        TEXT_COLOR,
        4,
        cv2.LINE_AA,
    )


class SignBridgeError(Exception):
    """Base class for host-side failures reported once to the user."""
