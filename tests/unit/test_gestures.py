"""
Unit tests for the swipe gesture recognizer.
"""

import pytest

from factdeck.deck.card import Card, SwipeDirection, TransitionKind
from factdeck.deck.clamp import LineMeasurer, TextClampController
from factdeck.deck.colors import ColorContrastGenerator
from factdeck.deck.gestures import GestureRecognizer, GestureState
from factdeck.models import CategoryKey, Item


def make_card(text: str = "A fact.") -> Card:
    item = Item(text=text, category=CategoryKey.SCIENCE)
    return Card(
        item=item,
        colors=ColorContrastGenerator.for_hsl(200, 80, 50),
        clamp=TextClampController(text, 8, LineMeasurer(40)),
    )


@pytest.fixture
def stack():
    """Two cards, bottom first; only the top is interactive."""
    bottom, top = make_card("bottom"), make_card("top")
    top.interactive = True
    return [bottom, top]


@pytest.fixture
def commits():
    return []


@pytest.fixture
def recognizer(stack, commits):
    return GestureRecognizer(
        top_card=lambda: stack[-1] if stack else None,
        on_commit=lambda card, direction: commits.append((card, direction)),
    )


class TestThresholds:
    @pytest.mark.parametrize("dy", [0, -300, 250])
    def test_right_commit_ignores_dy(self, recognizer, stack, commits, dy):
        outcome = recognizer.swipe(stack[-1], 150, dy)

        assert outcome.state is GestureState.COMMITTED
        assert outcome.direction is SwipeDirection.RIGHT
        assert commits == [(stack[-1], SwipeDirection.RIGHT)]

    def test_left_commit(self, recognizer, stack, commits):
        outcome = recognizer.swipe(stack[-1], -150, 40)

        assert outcome.direction is SwipeDirection.LEFT
        assert commits[0][1] is SwipeDirection.LEFT

    @pytest.mark.parametrize("dx", [50, -50, 120, -120, 0])
    def test_small_drag_springs_back(self, recognizer, stack, commits, dx):
        card = stack[-1]
        outcome = recognizer.swipe(card, dx, 30)

        assert outcome.state is GestureState.CANCELLED
        assert commits == []
        assert (card.offset_x, card.offset_y, card.rotation) == (0.0, 0.0, 0.0)
        assert card.transition.kind is TransitionKind.SPRING_BACK
        assert card.transition.duration_ms == 200
        assert card.keep_badge.opacity == 0.0
        assert card.skip_badge.opacity == 0.0


class TestDragFeedback:
    def test_keep_badge_scales_with_distance(self, recognizer, stack):
        card = stack[-1]
        recognizer.pointer_down(card, 100, 100)
        recognizer.pointer_move(160, 110)

        assert card.offset_x == 60
        assert card.offset_y == 10
        assert card.rotation == pytest.approx(60 * 0.06)
        assert card.keep_badge.opacity == pytest.approx(0.5)
        assert card.keep_badge.scale == pytest.approx(1.0)
        assert card.skip_badge.opacity == 0.0

    def test_direction_change_swaps_badges(self, recognizer, stack):
        card = stack[-1]
        recognizer.pointer_down(card, 0, 0)
        recognizer.pointer_move(90, 0)
        recognizer.pointer_move(-240, 0)

        assert card.skip_badge.opacity == 1.0
        assert card.keep_badge.opacity == 0.0

    def test_moves_from_other_pointers_are_ignored(self, recognizer, stack):
        card = stack[-1]
        recognizer.pointer_down(card, 0, 0, pointer_id=1)
        recognizer.pointer_move(200, 0, pointer_id=2)

        assert card.offset_x == 0.0


class TestEligibility:
    def test_only_topmost_card_drags(self, recognizer, stack):
        assert recognizer.pointer_down(stack[0], 0, 0) is False
        assert recognizer.state is GestureState.IDLE

    @pytest.mark.parametrize("target", ["button", "link", "select", "read-more", "share"])
    def test_interactive_sub_elements_do_not_drag(self, recognizer, stack, target):
        assert recognizer.pointer_down(stack[-1], 0, 0, target=target) is False

    def test_second_pointer_down_ignored_while_dragging(self, recognizer, stack):
        assert recognizer.pointer_down(stack[-1], 0, 0, pointer_id=1)
        assert recognizer.pointer_down(stack[-1], 5, 5, pointer_id=2) is False
        assert recognizer.session.pointer_id == 1

    def test_non_interactive_top_is_ignored(self, recognizer, stack):
        stack[-1].interactive = False
        assert recognizer.pointer_down(stack[-1], 0, 0) is False


class TestCancel:
    def test_pointer_cancel_aborts_without_commit(self, recognizer, stack, commits):
        card = stack[-1]
        recognizer.pointer_down(card, 0, 0)
        recognizer.pointer_move(400, 0)
        recognizer.pointer_cancel()

        assert recognizer.state is GestureState.IDLE
        assert not recognizer.active
        assert not card.dragging
        assert card.offset_x == 0.0
        assert (card.keep_badge.opacity, card.keep_badge.scale) == (0.0, 1.0)
        assert recognizer.pointer_up().state is GestureState.IDLE
        assert commits == []

    def test_release_without_drag_is_idle(self, recognizer):
        assert recognizer.pointer_up().state is GestureState.IDLE
