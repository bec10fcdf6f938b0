import logging
import time

import cv2

from .GestureProcessor import GestureProcessor
from .HandTracker import HandTracker
from .Speech import SpeechBridge
from .helpers import SignBridgeError, draw_hand_debug, draw_status

logger = logging.getLogger(__name__)

KEY_ESC = 27


class CameraError(SignBridgeError):
    """The camera could not be opened."""


def open_camera(cfg):
    ccfg = cfg.get("camera", {})
    index = ccfg.get("index", 0)
    cap = cv2.VideoCapture(index)
    if not cap.isOpened():
        raise CameraError(f"Cannot open camera {index}")
    cap.set(cv2.CAP_PROP_FRAME_WIDTH, ccfg.get("frame_width", 1280))
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, ccfg.get("frame_height", 720))
    return cap


def frame_time_ms(cap, start):
    """
    Video position of the current frame. Webcams usually report 0, in which
    case time since `start` is used instead.
    """
    pos = cap.get(cv2.CAP_PROP_POS_MSEC)
    if pos and pos > 0:
        return int(pos)
    return int((time.monotonic() - start) * 1000)


def handle_key(key, processor, speech):
    """Apply a keyboard control. Returns False when the loop should stop."""
    if key in (KEY_ESC, ord("q")):
        return False
    if key == ord("t"):
        processor.toggle_tracking()
    elif key == ord("c"):
        processor.clear()
    elif key == ord("s"):
        speech.toggle()
    return True


def run(cfg, tracker=None, speech=None):
    """
    Capture -> detect -> classify -> stabilize -> speak/display, one pass per
    captured frame, until the window is closed.
    """
    speech = speech or SpeechBridge(cfg)
    tracker = tracker or HandTracker(cfg)
    try:
        cap = open_camera(cfg)
    except CameraError:
        tracker.close()
        raise

    processor = GestureProcessor(on_confirmed=[speech.speak])

    debug_cfg = cfg.get("debug", {})
    window = debug_cfg.get("window_name", "Sign Bridge")
    mirror = cfg.get("camera", {}).get("mirror", True)
    cv2.namedWindow(window, cv2.WINDOW_NORMAL)

    speech.start()
    start = time.monotonic()
    latest = {"frame": None}

    def detect(video_time):
        latest["frame"] = tracker.detect(frame, video_time)
        return latest["frame"]

    logger.info("Loop started. Keys: t=tracking, c=clear, s=speech, Esc/q=quit")
    try:
        while cap.isOpened():
            ok, frame = cap.read()
            if not ok:
                time.sleep(0.01)
                continue
            if mirror:
                frame = cv2.flip(frame, 1)

            processor.process_frame(frame_time_ms(cap, start), detect)

            if debug_cfg.get("draw_landmarks", True) and processor.tracking_enabled and latest["frame"]:
                for hand in latest["frame"].hands:
                    draw_hand_debug(frame, hand)

            draw_status(
                frame,
                processor.detected_word,
                processor.tracking_enabled,
                speech.enabled,
                stability=processor.stabilizer.dominant()[1] / processor.stabilizer.threshold,
                history=processor.history,
            )

            cv2.imshow(window, frame)
            if not handle_key(cv2.waitKey(1) & 0xFF, processor, speech):
                break
            if cv2.getWindowProperty(window, cv2.WND_PROP_VISIBLE) < 1:
                break
    finally:
        speech.stop()
        tracker.close()
        cap.release()
        cv2.destroyAllWindows()
        logger.info("Shutdown complete.")
