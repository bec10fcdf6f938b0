import logging
from collections import deque
from typing import Callable, Iterable, List, Optional

from .GestureClassifier import Gesture, GestureClassifier
from .GestureStabilizer import GestureStabilizer
from .HandData import DetectionFrame

logger = logging.getLogger(__name__)

HISTORY_SIZE = 5


def _as_list(callbacks) -> List[Callable]:
    if callbacks is None:
        return []
    if callable(callbacks):
        return [callbacks]
    return list(callbacks)


# ==========================================
# PROCESSING CORE
# ==========================================
class GestureProcessor:
    """
    One recognition session: classify -> stabilize -> notify, once per frame.

    All per-session state (smoothing buffer, confirmed word, video-time
    marker, history) lives here so independent sessions never share it.
    """

    def __init__(
        self,
        classifier: Optional[GestureClassifier] = None,
        stabilizer: Optional[GestureStabilizer] = None,
        on_raw: Optional[Iterable[Callable]] = None,
        on_confirmed: Optional[Iterable[Callable]] = None,
        history_size: int = HISTORY_SIZE,
    ):
        self.classifier = classifier or GestureClassifier()
        self.stabilizer = stabilizer or GestureStabilizer()
        self.on_raw = _as_list(on_raw)
        self.on_confirmed = _as_list(on_confirmed)

        self.tracking_enabled = True
        self.last_video_time = None
        self.last_raw: Optional[Gesture] = None
        self.detected_word: Optional[Gesture] = None
        self.history = deque(maxlen=history_size)

    # -------- controls --------
    def set_tracking_enabled(self, enabled: bool) -> None:
        enabled = bool(enabled)
        if enabled != self.tracking_enabled:
            logger.info("Tracking %s", "enabled" if enabled else "paused")
        self.tracking_enabled = enabled

    def toggle_tracking(self) -> bool:
        self.set_tracking_enabled(not self.tracking_enabled)
        return self.tracking_enabled

    def clear(self) -> None:
        """Forget the confirmed word and the smoothing buffer."""
        self.stabilizer.reset()
        self.detected_word = None
        self.last_raw = None
        logger.info("Cleared detected word")

    @property
    def confirmed(self) -> Optional[Gesture]:
        return self.stabilizer.confirmed

    # -------- per-frame pass --------
    def process_frame(self, video_time, detect: Callable[[int], DetectionFrame]) -> Optional[Gesture]:
        """
        Run detection for a new video frame and feed the result through the
        pipeline. Frames whose time has not moved since the last processed
        one are skipped, as is everything while tracking is paused.
        """
        if not self.tracking_enabled:
            return None
        if self.last_video_time is not None and video_time == self.last_video_time:
            return None
        self.last_video_time = video_time

        try:
            frame = detect(video_time)
        except Exception as e:
            logger.warning("Hand detection failed, treating frame as empty: %s", e)
            frame = None
        if frame is None:
            frame = DetectionFrame.empty(video_time)

        return self.handle_detection(frame)

    def handle_detection(self, frame: DetectionFrame) -> Optional[Gesture]:
        raw = self.classifier.classify(frame)
        self.last_raw = raw
        if raw is not None:
            logger.debug("Raw gesture: %s", raw)
        self._emit(self.on_raw, raw)

        confirmed = self.stabilizer.update(raw)
        if confirmed is None:
            return None

        self.detected_word = confirmed
        self.history.appendleft(confirmed)
        logger.info("Confirmed gesture: %s", confirmed)
        self._emit(self.on_confirmed, confirmed)
        return confirmed

    def _emit(self, callbacks, label) -> None:
        for cb in callbacks:
            try:
                cb(label)
            except Exception:
                logger.exception("Gesture listener %r failed", cb)
