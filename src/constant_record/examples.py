"""
Example record types for proof-of-concept and demos.

Rank is the canonical three-medal enum. Competition nests a Rank inside
lists and mappings to show deep serialization. Medal adds a property
accessor that is picked up by introspection rather than declared.
"""
from constant_record.record import ConstantRecord, constant


class Rank(ConstantRecord):
    __attributes__ = ("id", "symbol", "name")

    GOLD = constant(id=1, symbol="gold", name="Gold")
    SILVER = constant(id=2, symbol="silver", name="Silver")
    BRONZE = constant(id=3, symbol="bronze", name="Bronze")


class Competition(ConstantRecord):
    __attributes__ = ("id", "events", "prizes", "rank")

    SPRINT = constant(
        id=1,
        events=["100m", "200m", "400m"],
        prizes={"first": 500, "second": 250, "third": 100},
        rank=Rank.GOLD,
    )
    RELAY = constant(
        id=2,
        events=["4x100m"],
        prizes={"first": 800},
        rank=Rank.SILVER,
    )


class Medal(ConstantRecord):
    __attributes__ = ("id", "symbol")

    @property
    def weight(self):
        """Medal weight in grams."""
        return getattr(self, "_weight", None)

    @weight.setter
    def weight(self, value):
        self._weight = value

    OLYMPIC = constant(id=1, symbol="olympic", weight=500)
    PARALYMPIC = constant(id=2, symbol="paralympic", weight=480)


def build_podium(*ranks: Rank) -> Competition:
    """
    Build an ad hoc Competition from the given ranks.

    The result is not bound to a constant, so it is not part of
    ``Competition.all()``.
    """
    ranks = ranks or tuple(Rank.all())
    return Competition(
        id=max(Competition.pluck("id")) + 1,
        events=[rank.name for rank in ranks],
        prizes={str(rank.symbol): rank.id for rank in ranks},
        rank=ranks[0],
    )
