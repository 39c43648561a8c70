"""
Tests for generated tag predicates and type-level collection delegation.
"""

import warnings

import pytest
from constant_record import ConstantRecord, constant
from constant_record.examples import Competition, Medal, Rank


class TestPredicates:
    """Test is_<tag>() methods generated from tag attributes."""

    def test_predicate_matches_own_record(self):
        assert Rank.GOLD.is_gold()
        assert Rank.SILVER.is_silver()

    def test_predicate_rejects_other_records(self):
        assert not Rank.SILVER.is_gold()
        assert not Rank.GOLD.is_bronze()

    def test_predicate_is_structural(self):
        """Equal ad hoc records satisfy the predicate too."""
        assert Rank(id=1, symbol="gold", name="Gold").is_gold()
        assert not Rank(id=1, symbol="gold", name="Golden").is_gold()

    def test_predicate_metadata(self):
        assert Rank.is_gold.__name__ == "is_gold"

    def test_types_without_tag_attribute(self):
        assert not hasattr(Competition.SPRINT, "is_gold")
        assert not hasattr(Competition, "is_sprint")

    def test_predicates_for_property_types(self):
        assert Medal.OLYMPIC.is_olympic()
        assert not Medal.PARALYMPIC.is_olympic()

    def test_custom_tag_attribute(self):
        class Color(ConstantRecord):
            __attributes__ = ("id", "code")
            __tag_attribute__ = "code"

            RED = constant(id=1, code="red")
            BLUE = constant(id=2, code="blue")

        assert Color.RED.is_red()
        assert not Color.BLUE.is_red()

    def test_disabled_tag_attribute(self):
        class Plain(ConstantRecord):
            __attributes__ = ("id", "symbol")
            __tag_attribute__ = None

            ONE = constant(id=1, symbol="one")

        assert not hasattr(Plain.ONE, "is_one")
        assert Plain.define_predicates() == []

    def test_explicit_attribute_name(self):
        class Plain(ConstantRecord):
            __attributes__ = ("id", "label")

            ONE = constant(id=1, label="one")

        assert Plain.define_predicates("label") == ["is_one"]
        assert Plain.ONE.is_one()

    def test_redefine_after_binding(self):
        """Constants bound later get predicates on request."""
        class Level(ConstantRecord):
            __attributes__ = ("id", "symbol")
            LOW = constant(id=1, symbol="low")

        Level.HIGH = constant(id=2, symbol="high")
        assert not hasattr(Level.HIGH, "is_high")

        assert Level.define_predicates() == ["is_low", "is_high"]
        assert Level.HIGH.is_high()

    def test_invalid_identifier_skipped(self):
        with pytest.warns(UserWarning, match="not an identifier"):
            class Phrase(ConstantRecord):
                __attributes__ = ("id", "symbol")
                SPACED = constant(id=1, symbol="two words")
                SINGLE = constant(id=2, symbol="single")

        assert Phrase.SINGLE.is_single()

    def test_existing_member_not_shadowed(self):
        """A predicate never replaces a member of the type."""
        with pytest.warns(UserWarning, match="shadow"):
            class Door(ConstantRecord):
                __attributes__ = ("id", "symbol")

                def is_open(self):
                    return "handwritten"

                OPEN = constant(id=1, symbol="open")

        assert Door.OPEN.is_open() == "handwritten"

    def test_untagged_records_skipped(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")

            class Partial(ConstantRecord):
                __attributes__ = ("id", "symbol")
                TAGGED = constant(id=1, symbol="tagged")
                UNTAGGED = constant(id=2)

        assert Partial.TAGGED.is_tagged()


class TestDelegation:
    """Test collection operations answered by the type itself."""

    def test_len(self):
        assert len(Rank) == 3

    def test_iteration_is_sorted(self):
        assert list(Rank) == [Rank.GOLD, Rank.SILVER, Rank.BRONZE]
        assert [rank.name for rank in Rank] == ["Gold", "Silver", "Bronze"]

    def test_reversed(self):
        assert list(reversed(Rank)) == [Rank.BRONZE, Rank.SILVER, Rank.GOLD]

    def test_indexing(self):
        assert Rank[0] is Rank.GOLD
        assert Rank[-1] is Rank.BRONZE
        assert Rank[1:] == [Rank.SILVER, Rank.BRONZE]

    def test_membership(self):
        assert Rank.GOLD in Rank
        assert Rank(Rank.GOLD) in Rank
        assert Rank(id=9) not in Rank

    def test_list_operations(self):
        assert Rank.index(Rank.SILVER) == 1
        assert Rank.count(Rank.GOLD) == 1
        assert Rank.copy() == Rank.all()

    def test_copy_is_a_new_list(self):
        ranks = Rank.copy()
        ranks.clear()
        assert len(Rank) == 3

    def test_only_listed_operations_delegated(self):
        """Anything outside the delegated set is an ordinary missing attribute."""
        with pytest.raises(AttributeError):
            Rank.append
        with pytest.raises(AttributeError):
            Rank.sort

    def test_class_members_take_precedence(self):
        assert Rank.all() == list(Rank)
        assert callable(Rank.is_gold)

    def test_empty_type_is_truthy(self):
        class Empty(ConstantRecord):
            pass

        assert len(Empty) == 0
        assert Empty
