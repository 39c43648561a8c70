"""
Tag identifiers for record types.

A Tag is the value held by a record's tag attribute (conventionally
``symbol``). It is a plain ``str`` subclass, so it compares, hashes and
serializes exactly like the text it wraps. There is no separate symbolic
representation: ``Tag("gold") == "gold"`` and both encode to the JSON
string ``"gold"``.
"""


class Tag(str):
    """
    String-backed identifier for a single record.

    Examples:
        - Tag("gold")
        - Tag("silver")

    Tags are used to generate per-record predicates, so a tag
    should be a valid Python identifier (``Rank.GOLD.is_gold()``).
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Tag({str.__repr__(self)})"
