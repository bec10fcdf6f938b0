from .GestureClassifier import Gesture, GestureClassifier
from .GestureProcessor import GestureProcessor
from .GestureStabilizer import GestureStabilizer
from .HandData import DetectionFrame, Hand, Landmark
from .HandFeatures import FingerState, extract_finger_state

__version__ = "0.1.0"

__all__ = [
    "DetectionFrame",
    "FingerState",
    "Gesture",
    "GestureClassifier",
    "GestureProcessor",
    "GestureStabilizer",
    "Hand",
    "Landmark",
    "extract_finger_state",
]
