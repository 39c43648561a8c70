"""
Test the example record types.

Validates the medal enum from end to end: lookup, projection, ordering
and nested JSON output.
"""

import json

from constant_record.examples import Competition, Rank, build_podium


def test_rank_example():
    assert Rank.find(1) is Rank.GOLD
    assert Rank.find(0) is None
    assert Rank.pluck("symbol") == ["gold", "silver", "bronze"]
    assert Rank.pluck("id", "name") == [(1, "Gold"), (2, "Silver"), (3, "Bronze")]
    assert Rank.GOLD.compare(Rank.SILVER) == -1
    assert Rank.SILVER.compare(Rank.GOLD) == 1
    assert Rank.GOLD.compare(Rank.GOLD) == 0


def test_competition_inlines_rank():
    assert '"rank":{"id":1,"symbol":"gold","name":"Gold"}' in Competition.SPRINT.to_json()


def test_build_podium():
    podium = build_podium()

    assert podium.id == 3
    assert podium.events == ["Gold", "Silver", "Bronze"]
    assert podium.prizes == {"gold": 1, "silver": 2, "bronze": 3}
    assert podium.rank is Rank.GOLD

    # Ad hoc records are not part of the store
    assert podium not in Competition
    assert len(Competition.all()) == 2


def test_build_podium_from_ranks():
    podium = build_podium(Rank.BRONZE)
    assert json.loads(podium.to_json())["rank"]["name"] == "Bronze"
