import logging

import cv2
import numpy as np

from .HandData import MAX_HANDS, DetectionFrame, Hand
from .helpers import SignBridgeError

logger = logging.getLogger(__name__)


class TrackerInitError(SignBridgeError):
    """The hand landmark model could not be created."""


def _handedness_label(result, idx):
    try:
        return result.handedness[idx][0].category_name
    except (AttributeError, IndexError, TypeError):
        return "Unknown"


def result_to_frame(result, timestamp_ms: int) -> DetectionFrame:
    """
    Convert a mediapipe HandLandmarkerResult into a DetectionFrame.
    Landmarks are copied, so the frame does not keep mediapipe objects alive.
    """
    hand_landmarks = getattr(result, "hand_landmarks", None) if result is not None else None
    if not hand_landmarks:
        return DetectionFrame.empty(timestamp_ms)

    hands = []
    for idx, lm_list in enumerate(hand_landmarks[:MAX_HANDS]):
        hands.append(Hand.from_points(lm_list, _handedness_label(result, idx)))
    return DetectionFrame.from_hands(hands, timestamp_ms)


class HandTracker:
    """
    Thin wrapper around the mediapipe Tasks HandLandmarker in VIDEO mode.
    detect() never raises; a failing model call yields an empty frame.
    """

    def __init__(self, cfg, landmarker=None):
        self.cfg = cfg
        tcfg = cfg.get("tracker", {})
        self.num_hands = min(int(tcfg.get("num_hands", MAX_HANDS)), MAX_HANDS)
        self._last_ts = -1
        self._landmarker = landmarker if landmarker is not None else self._create_landmarker(tcfg)

    def _create_landmarker(self, tcfg):
        model_path = tcfg.get("model_path", "hand_landmarker.task")
        try:
            from mediapipe.tasks import python as mp_python
            from mediapipe.tasks.python import vision as mp_vision

            options = mp_vision.HandLandmarkerOptions(
                base_options=mp_python.BaseOptions(model_asset_path=model_path),
                running_mode=mp_vision.RunningMode.VIDEO,
                num_hands=self.num_hands,
                min_hand_detection_confidence=tcfg.get("min_detection_confidence", 0.5),
                min_hand_presence_confidence=tcfg.get("min_presence_confidence", 0.5),
                min_tracking_confidence=tcfg.get("min_tracking_confidence", 0.5),
            )
            landmarker = mp_vision.HandLandmarker.create_from_options(options)
        except Exception as e:
            raise TrackerInitError(f"Could not create hand landmarker from '{model_path}': {e}") from e

        logger.info("HandLandmarker ready (VIDEO mode, num_hands=%d)", self.num_hands)
        return landmarker

    def detect(self, frame_bgr, timestamp_ms: int) -> DetectionFrame:
        timestamp_ms = int(timestamp_ms)
        # VIDEO mode rejects timestamps that do not increase
        if timestamp_ms <= self._last_ts:
            timestamp_ms = self._last_ts + 1

        try:
            import mediapipe as mp

            rgb = np.ascontiguousarray(cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB))
            image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb)
            result = self._landmarker.detect_for_video(image, timestamp_ms)
            self._last_ts = timestamp_ms
            return result_to_frame(result, timestamp_ms)
        except Exception as e:
            logger.warning("Landmark detection failed: %s", e)
            return DetectionFrame.empty(timestamp_ms)

    def close(self):
        if self._landmarker is not None:
            self._landmarker.close()
            self._landmarker = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
