from enum import Enum
from typing import Callable, NamedTuple, Optional, Sequence, Union

from .HandData import MAX_HANDS, DetectionFrame, Hand
from .HandFeatures import FingerState, extract_finger_state

REST_ROOM_TIP_GAP = 0.04
SLEEP_TILT = 0.22
PLEASE_SPREAD = 0.2


class Gesture(str, Enum):
    HELLO = "HELLO"
    YES = "YES"
    GOOD = "GOOD"
    BAD = "BAD"
    FOOD = "FOOD"
    HELP = "HELP"
    STOP = "STOP"
    GO = "GO"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    WAIT = "WAIT"
    NO = "NO"
    REST_ROOM = "REST ROOM"
    DANGER = "DANGER"
    MEDICINE = "MEDICINE"
    SLEEP = "SLEEP"
    PLEASE = "PLEASE"
    THANK_YOU = "THANK YOU"
    SORRY = "SORRY"

    def __str__(self) -> str:
        return self.value


class Rule(NamedTuple):
    name: str
    predicate: Callable
    label: Gesture


def _victory(s: FingerState) -> bool:
    return s.only("index", "middle")


def _point(s: FingerState) -> bool:
    return s.only("index") and not s.thumb


# One flat hand against the other hand's state, checked in both orders.
TWO_HAND_RULES = (
    Rule("flat_and_fist", lambda a, b: a.is_flat and b.is_fist, Gesture.HELP),
    Rule("both_flat", lambda a, b: a.is_flat and b.is_flat, Gesture.STOP),
)

# Order matters: several gestures share the same base finger pattern and the
# first matching rule wins.
SINGLE_HAND_RULES = (
    Rule("pinch", lambda s: s.pinch, Gesture.FOOD),
    Rule("medicine", lambda s: s.only("index", "ring", "pinky"), Gesture.MEDICINE),
    Rule("index_and_thumb", lambda s: s.only("index") and s.thumb, Gesture.DANGER),
    Rule("pinky_only", lambda s: s.only("pinky") and not s.thumb, Gesture.BAD),
    Rule("thumbs_up", lambda s: s.is_fist and s.thumb_raised, Gesture.GOOD),
    Rule("victory_closed", lambda s: _victory(s) and s.tip_gap < REST_ROOM_TIP_GAP, Gesture.REST_ROOM),
    Rule("victory_thumb", lambda s: _victory(s) and s.thumb, Gesture.NO),
    Rule("victory", _victory, Gesture.WAIT),
    Rule("flat_tilted", lambda s: s.is_flat and s.tilt > SLEEP_TILT, Gesture.SLEEP),
    Rule("flat_spread", lambda s: s.is_flat and s.spread > PLEASE_SPREAD, Gesture.PLEASE),
    Rule("flat_thumb", lambda s: s.is_flat and s.thumb, Gesture.HELLO),
    Rule("flat", lambda s: s.is_flat, Gesture.THANK_YOU),
    Rule("point_left", lambda s: _point(s) and s.pointing_left, Gesture.LEFT),
    Rule("point_right", lambda s: _point(s) and s.pointing_right, Gesture.RIGHT),
    Rule("point", _point, Gesture.GO),
    Rule("fist_thumb", lambda s: s.is_fist and s.thumb, Gesture.YES),
    Rule("fist", lambda s: s.is_fist, Gesture.SORRY),
)


def classify_two_hands(first: FingerState, second: FingerState) -> Optional[Gesture]:
    for rule in TWO_HAND_RULES:
        if rule.predicate(first, second) or rule.predicate(second, first):
            return rule.label
    return None


def classify_single(state: FingerState) -> Optional[Gesture]:
    for rule in SINGLE_HAND_RULES:
        if rule.predicate(state):
            return rule.label
    return None


class GestureClassifier:
    """
    Maps one frame's detected hands to at most one Gesture.
    Stateless; a single instance can be shared.
    """

    def __init__(self, max_hands: int = MAX_HANDS):
        self.max_hands = max_hands

    def finger_states(self, hands: Sequence[Hand]):
        """FingerState per considered hand, or None if any hand is malformed."""
        considered = list(hands)[: self.max_hands]
        if any(not h.is_complete for h in considered):
            return None
        return [extract_finger_state(h) for h in considered]

    def classify(self, frame: Union[DetectionFrame, Sequence[Hand], None]) -> Optional[Gesture]:
        if frame is None:
            return None
        hands = frame.hands if isinstance(frame, DetectionFrame) else frame
        if not hands:
            return None

        states = self.finger_states(hands)
        if not states:
            return None

        if len(states) == 2:
            label = classify_two_hands(states[0], states[1])
            if label is not None:
                return label

        return classify_single(states[0])

    __call__ = classify
