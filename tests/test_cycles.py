"""Tests for circular reference tracking."""

import pytest

from gql_opgen.core.config import CircularRefMode, GeneratorConfig
from gql_opgen.core.cycles import CycleDecision, CycleTracker, TraversalPath


class TestTraversalPath:
    """Tests for TraversalPath copy-on-descend behavior."""

    def test_empty_path(self):
        path = TraversalPath()
        assert "User" not in path
        assert path.depth == 0
        assert path.field_path == ""

    def test_enter_returns_new_path(self):
        path = TraversalPath()
        entered = path.enter("User")
        assert "User" in entered
        assert "User" not in path
        assert entered.depth == path.depth

    def test_descend_increments_depth_and_field_path(self):
        path = TraversalPath().enter("User").descend("posts").descend("author")
        assert path.depth == 2
        assert path.field_path == "posts.author"
        assert "User" in path

    def test_siblings_do_not_share_visited_types(self):
        parent = TraversalPath().enter("Query")
        left = parent.descend("left").enter("Left")
        right = parent.descend("right")
        assert "Left" in left
        assert "Left" not in right
        assert "Left" not in parent

    def test_is_immutable(self):
        path = TraversalPath()
        with pytest.raises(AttributeError):
            path.depth = 3


class TestCycleTracker:
    """Tests for CycleTracker decisions."""

    @pytest.fixture
    def on_path(self):
        return TraversalPath().enter("Node")

    def tracker(self, **kwargs):
        return CycleTracker(GeneratorConfig(**kwargs))

    def test_unvisited_type_proceeds(self, on_path):
        for mode in CircularRefMode:
            assert self.tracker(circular_refs=mode).decide("User", on_path) is CycleDecision.PROCEED

    def test_skip_mode(self, on_path):
        tracker = self.tracker(circular_refs="skip")
        assert tracker.decide("Node", on_path) is CycleDecision.SKIP_WITH_MARK

    def test_silent_mode(self, on_path):
        tracker = self.tracker(circular_refs="silent")
        assert tracker.decide("Node", on_path) is CycleDecision.OMIT_SILENTLY

    def test_allow_mode_with_budget(self, on_path):
        tracker = self.tracker(circular_refs="allow", circular_ref_depth=1)
        assert tracker.decide("Node", on_path) is CycleDecision.BOUNDED_REENTER

    def test_allow_budget_ignores_path_depth(self):
        deep = TraversalPath().enter("Node").descend("parent").descend("parent").descend("parent")
        assert deep.depth == 3
        tracker = self.tracker(circular_refs="allow", circular_ref_depth=1)
        assert tracker.decide("Node", deep) is CycleDecision.BOUNDED_REENTER

    def test_allow_mode_without_budget_marks(self, on_path):
        tracker = self.tracker(circular_refs="allow", circular_ref_depth=0)
        assert tracker.decide("Node", on_path) is CycleDecision.SKIP_WITH_MARK

    def test_per_type_override_takes_precedence(self, on_path):
        tracker = self.tracker(
            circular_refs="allow",
            circular_ref_depth=0,
            circular_ref_types={"Node": 2},
        )
        assert tracker.reentry_depth("Node") == 2
        assert tracker.reentry_depth("Other") == 0
        assert tracker.decide("Node", on_path) is CycleDecision.BOUNDED_REENTER

    def test_per_type_override_can_disable(self, on_path):
        tracker = self.tracker(
            circular_refs="allow",
            circular_ref_depth=3,
            circular_ref_types={"Node": 0},
        )
        assert tracker.decide("Node", on_path) is CycleDecision.SKIP_WITH_MARK

    def test_field_decision_defers_in_allow_mode(self, on_path):
        tracker = self.tracker(circular_refs="allow")
        assert tracker.field_decision("Node", on_path) is CycleDecision.PROCEED

    def test_field_decision_in_skip_and_silent_modes(self, on_path):
        assert self.tracker(circular_refs="skip").field_decision("Node", on_path) is (
            CycleDecision.SKIP_WITH_MARK
        )
        assert self.tracker(circular_refs="silent").field_decision("Node", on_path) is (
            CycleDecision.OMIT_SILENTLY
        )

    def test_field_decision_for_unknown_type(self, on_path):
        assert self.tracker().field_decision(None, on_path) is CycleDecision.PROCEED
