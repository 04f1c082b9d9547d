"""
Tests for routing decisions - first match in destination order.
"""

import pytest

from stockroute.backends.memory import MemoryInventory
from stockroute.core.routing import DecisionKind, Reason, find_match, route

from helpers import stack


@pytest.fixture
def chests():
    return [MemoryInventory(name) for name in ("A", "B", "C")]


class TestFindMatch:
    """Test the first-match scan."""

    def test_single_holder_is_returned(self, chests):
        index = {"A": frozenset({"wood"}), "B": frozenset({"stone"}), "C": frozenset()}
        assert find_match("stone", index, chests).name == "B"

    def test_earliest_holder_wins(self, chests):
        index = {"A": frozenset(), "B": frozenset({"stone"}), "C": frozenset({"stone"})}
        assert find_match("stone", index, chests).name == "B"

    def test_order_of_destinations_decides_ties(self, chests):
        index = {"A": frozenset(), "B": frozenset({"stone"}), "C": frozenset({"stone"})}
        assert find_match("stone", index, list(reversed(chests))).name == "C"

    def test_no_holder(self, chests):
        index = {"A": frozenset({"wood"}), "B": frozenset(), "C": frozenset()}
        assert find_match("glass", index, chests) is None

    def test_destination_missing_from_index_is_empty(self, chests):
        index = {"C": frozenset({"stone"})}
        assert find_match("stone", index, chests).name == "C"


class TestRoute:
    """Test the full decision including fallback and unreadable items."""

    def test_match(self, chests):
        index = {"A": frozenset({"wood"}), "B": frozenset({"stone"}), "C": frozenset()}
        decision = route(1, stack("stone", 5), index, chests, fallback=MemoryInventory("F"))

        assert decision.kind is DecisionKind.MATCH
        assert decision.reason is Reason.MATCHED
        assert decision.target_name == "B"
        assert decision.slot == 1

    def test_no_match_goes_to_fallback(self, chests):
        fallback = MemoryInventory("F")
        index = {"A": frozenset({"wood"}), "B": frozenset(), "C": frozenset()}
        decision = route(2, stack("glass", 3), index, chests, fallback=fallback)

        assert decision.kind is DecisionKind.FALLBACK
        assert decision.reason is Reason.NO_MATCH
        assert decision.target is fallback

    def test_no_match_without_fallback_leaves_item(self, chests):
        decision = route(2, stack("glass", 3), {}, chests)

        assert decision.kind is DecisionKind.NONE
        assert decision.reason is Reason.NO_FALLBACK
        assert decision.target is None

    @pytest.mark.parametrize("item_id", [None, ""])
    def test_unreadable_identifier(self, chests, item_id):
        index = {"A": frozenset({"wood"})}
        decision = route(4, stack(item_id), index, chests, fallback=MemoryInventory("F"))

        assert decision.kind is DecisionKind.NONE
        assert decision.reason is Reason.UNREADABLE

    def test_fallback_is_not_matched_even_if_it_holds_the_type(self, chests):
        fallback = MemoryInventory("F")
        index = {"A": frozenset(), "B": frozenset(), "C": frozenset(), "F": frozenset({"glass"})}
        decision = route(1, stack("glass"), index, chests, fallback=fallback)
        assert decision.kind is DecisionKind.FALLBACK

    def test_quantity_and_label_do_not_affect_routing(self, chests):
        index = {"A": frozenset({"wood"}), "B": frozenset({"wood"}), "C": frozenset()}
        small = route(1, stack("wood", 1, "Oak"), index, chests)
        large = route(1, stack("wood", 64, "Birch"), index, chests)
        assert small.target_name == large.target_name == "A"

    def test_empty_destination_list(self):
        fallback = MemoryInventory("F")
        decision = route(1, stack("wood"), {}, [], fallback=fallback)
        assert decision.kind is DecisionKind.FALLBACK
