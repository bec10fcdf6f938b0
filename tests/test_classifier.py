import pytest

from signbridge.GestureClassifier import (
    SINGLE_HAND_RULES,
    Gesture,
    GestureClassifier,
)
from signbridge.HandData import DetectionFrame, Hand


@pytest.fixture
def classifier():
    return GestureClassifier()


def test_no_hands(classifier):
    assert classifier.classify(DetectionFrame.empty()) is None
    assert classifier.classify([]) is None
    assert classifier.classify(None) is None


@pytest.mark.parametrize("count", [0, 1, 5, 20])
def test_short_hand_fails_closed(classifier, flat_hand, count):
    hand = flat_hand()
    short = Hand(hand.landmarks[:count])
    assert classifier.classify(DetectionFrame.from_hands([short])) is None


def test_too_many_points_fails_closed(classifier, flat_hand):
    hand = flat_hand()
    long = Hand(hand.landmarks + hand.landmarks[:1])
    assert classifier.classify([long]) is None


def test_malformed_second_hand_fails_closed(classifier, flat_hand):
    short = Hand(flat_hand().landmarks[:10])
    assert classifier.classify([flat_hand(), short]) is None


def test_hands_beyond_two_are_ignored(classifier, flat_hand):
    short = Hand(flat_hand().landmarks[:10])
    assert classifier.classify([flat_hand(), flat_hand(), short]) == Gesture.STOP


@pytest.mark.parametrize("order", ["flat_first", "fist_first"])
def test_flat_and_fist_is_help(classifier, make_frame, flat_hand, fist_hand, order):
    # on their own these would be HELLO and YES
    flat = flat_hand(thumb="out")
    fist = fist_hand(thumb="out")
    hands = (flat, fist) if order == "flat_first" else (fist, flat)
    assert classifier.classify(make_frame(*hands)) == Gesture.HELP


def test_both_flat_is_stop(classifier, make_frame, flat_hand):
    assert classifier.classify(make_frame(flat_hand(), flat_hand(thumb="tucked"))) == Gesture.STOP


def test_two_hands_without_pair_rule_use_first_hand(classifier, make_frame, make_hand, fist_hand):
    victory = make_hand(index=True, middle=True)
    assert classifier.classify(make_frame(victory, fist_hand())) == Gesture.WAIT
    assert classifier.classify(make_frame(fist_hand(), victory)) == Gesture.SORRY


@pytest.mark.parametrize(
    "kwargs, expected",
    [
        (dict(index=True, ring=True, pinky=True), Gesture.MEDICINE),
        (dict(index=True, thumb="out"), Gesture.DANGER),
        (dict(pinky=True), Gesture.BAD),
        (dict(thumb="raised"), Gesture.GOOD),
        (dict(index=True, middle=True, overrides={12: (0.46, 0.40)}), Gesture.REST_ROOM),
        (dict(index=True, middle=True, thumb="out"), Gesture.NO),
        (dict(index=True, middle=True), Gesture.WAIT),
        (dict(index=True, middle=True, ring=True, pinky=True, overrides={0: (0.20, 0.80)}), Gesture.SLEEP),
        (dict(index=True, middle=True, ring=True, pinky=True, overrides={20: (0.70, 0.40)}), Gesture.PLEASE),
        (dict(index=True, middle=True, ring=True, pinky=True, thumb="out"), Gesture.HELLO),
        (dict(index=True, middle=True, ring=True, pinky=True), Gesture.THANK_YOU),
        (dict(index=True, overrides={8: (0.29, 0.40)}), Gesture.LEFT),
        (dict(index=True, overrides={8: (0.59, 0.40)}), Gesture.RIGHT),
        (dict(index=True), Gesture.GO),
        (dict(thumb="out"), Gesture.YES),
        (dict(), Gesture.SORRY),
    ],
)
def test_single_hand_vocabulary(classifier, make_hand, kwargs, expected):
    assert classifier.classify([make_hand(**kwargs)]) == expected


def test_pinch_wins_over_finger_pattern(classifier, make_hand, pinch_overrides):
    # ring and pinky up with a pinch would otherwise match nothing or another rule
    hand = make_hand(ring=True, pinky=True, overrides=pinch_overrides)
    assert classifier.classify([hand]) == Gesture.FOOD
    assert classifier.classify([make_hand(overrides=pinch_overrides)]) == Gesture.FOOD


def test_unmatched_pattern_is_none(classifier, make_hand):
    assert classifier.classify([make_hand(ring=True)]) is None
    assert classifier.classify([make_hand(middle=True, ring=True)]) is None
    # pinky with the thumb out is not BAD
    assert classifier.classify([make_hand(pinky=True, thumb="out")]) is None


@pytest.mark.parametrize("wrist_x, pinky_tip_x", [(0.50, 0.62), (0.23, 0.62), (0.50, 0.63), (0.65, 0.60)])
def test_open_hand_with_thumb_is_hello(classifier, flat_hand, wrist_x, pinky_tip_x):
    hand = flat_hand(thumb="out", overrides={0: (wrist_x, 0.80), 20: (pinky_tip_x, 0.40)})
    assert classifier.classify([hand]) == Gesture.HELLO


def test_every_label_is_reachable():
    labels = {rule.label for rule in SINGLE_HAND_RULES} | {Gesture.HELP, Gesture.STOP}
    assert labels == set(Gesture)


def test_classify_is_deterministic(classifier, make_hand):
    hand = make_hand(index=True, middle=True, thumb="out")
    assert {classifier(DetectionFrame.from_hands([hand])) for _ in range(5)} == {Gesture.NO}


def test_gesture_text():
    assert str(Gesture.REST_ROOM) == "REST ROOM"
    assert Gesture.THANK_YOU == "THANK YOU"
