"""
Core Record Objects

Defines ConstantRecord, the base class for "enums with data": a type
declares an ordered attribute list and binds named constants, each a
record of that exact type.

    class Rank(ConstantRecord):
        __attributes__ = ("id", "symbol", "name")

        GOLD = constant(id=1, symbol="gold", name="Gold")
        SILVER = constant(id=2, symbol="silver", name="Silver")

    Rank.find(1)            -> Rank.GOLD
    Rank.pluck("name")      -> ["Gold", "Silver"]
    Rank.GOLD.is_gold()     -> True
    Rank.GOLD.to_json()     -> '{"id":1,"symbol":"gold","name":"Gold"}'

ARCHITECTURAL RULE:
    Records are immutable by convention once bound to a constant.
    Nothing here mutates a published record.
    Equality is structural, never identity.
"""
from __future__ import annotations

import warnings
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from constant_record import query, serialization
from constant_record.schema import RecordSchema, SchemaFrozenError, is_record
from constant_record.tags import Tag


# Collection operations a record type answers by delegating to all().
DELEGATED_OPERATIONS = frozenset({"index", "count", "copy"})


@dataclass(frozen=True)
class PendingConstant:
    """
    Placeholder for a constant declared in a class body.

    The record type does not exist yet while its body runs, so
    ``constant(...)`` records the values and RecordMeta builds the
    actual record once the class is created.
    """

    values: Dict[str, Any] = field(default_factory=dict)


def constant(values: Optional[Mapping] = None, **kwargs: Any) -> PendingConstant:
    """Declare a constant record inside a ConstantRecord class body."""
    merged = dict(values or {})
    merged.update(kwargs)
    return PendingConstant(values=merged)


class RecordMeta(type):
    """
    Metaclass of every record type.

    On class creation it builds the immutable RecordSchema, turns
    ``constant(...)`` placeholders into records and generates tag
    predicates. At the type level it answers a fixed set of collection
    operations by delegating to ``all()``.
    """

    def __init__(cls, name, bases, namespace):
        super().__init__(name, bases, namespace)
        cls._ordered = None
        cls._sealed = False
        cls._schema = RecordSchema.build(cls)

        for attr, value in namespace.items():
            if isinstance(value, PendingConstant):
                setattr(cls, attr, cls(value.values))

        tag_attribute = cls._schema.tag_attribute
        if tag_attribute is not None and cls._schema.has_attribute(tag_attribute):
            query.define_predicates(cls)

    def __setattr__(cls, name, value):
        if isinstance(value, PendingConstant):
            value = cls(value.values)
        super().__setattr__(name, value)
        if not name.startswith("_"):
            # Constants changed; the sorted view is rebuilt on next query.
            super().__setattr__("_ordered", None)

    def __delattr__(cls, name):
        super().__delattr__(name)
        if not name.startswith("_"):
            super().__setattr__("_ordered", None)

    def __getattr__(cls, name):
        # Only reached when normal lookup fails, so class members and
        # generated predicates always take precedence.
        if name in DELEGATED_OPERATIONS:
            return getattr(cls.all(), name)
        raise AttributeError(f"type object {cls.__name__!r} has no attribute {name!r}")

    def __iter__(cls):
        return iter(cls.all())

    def __reversed__(cls):
        return reversed(cls.all())

    def __len__(cls):
        return len(cls.unsorted_all())

    def __contains__(cls, item):
        return item in cls.unsorted_all()

    def __getitem__(cls, index):
        return cls.all()[index]

    def __bool__(cls):
        return True


class ConstantRecord(metaclass=RecordMeta):
    """
    Base class for record types.

    Construction:
        Rank()                          all attributes None
        Rank({"id": 4, "name": "Tin"})  known keys applied, others ignored
        Rank(id=4, name="Tin")          same, with keyword arguments
        Rank(Rank.GOLD)                 shallow copy of a same-type record

    Class configuration:
        __attributes__      ordered attribute names; the first is the identifier
        __tag_attribute__   attribute used for ``is_<tag>()`` predicates
                            (default "symbol", None disables them)
    """

    __attributes__ = ()

    def __init__(self, source: Any = None, **values: Any):
        cls = type(self)
        cls._sealed = True
        schema = cls._schema

        for name in schema.attributes:
            if name not in schema.properties:
                object.__setattr__(self, name, None)

        if type(source) is cls:
            for name in schema.attributes:
                if schema.is_settable(name):
                    setattr(self, name, getattr(source, name))
            source = None

        merged = dict(source) if isinstance(source, Mapping) else {}
        merged.update(values)
        for key, value in merged.items():
            key = str(key)
            if not schema.is_settable(key):
                continue
            if key == schema.tag_attribute and isinstance(value, str) and not isinstance(value, Tag):
                value = Tag(value)
            setattr(self, key, value)

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------

    @classmethod
    def accessors(cls) -> List[str]:
        """Attribute names in field order."""
        return list(cls._schema.attributes)

    @classmethod
    def declare_attributes(cls, *names: str) -> RecordSchema:
        """
        Replace the explicit attribute list.

        The last declaration wins; names are not appended to the previous
        list. Only allowed before the first instance of the type exists.

        Raises:
            SchemaFrozenError: If the type has already been instantiated
        """
        if cls._sealed:
            raise SchemaFrozenError(
                f"Cannot redeclare attributes of {cls.__name__}: instances already exist"
            )
        if cls._schema.explicit:
            warnings.warn(
                f"Redeclaring attributes of {cls.__name__} replaces {list(cls._schema.explicit)}",
                UserWarning,
            )
        cls.__attributes__ = tuple(names)
        cls._schema = RecordSchema.build(cls)
        return cls._schema

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @classmethod
    def unsorted_all(cls) -> List["ConstantRecord"]:
        return query.unsorted_all(cls)

    @classmethod
    def all(cls) -> List["ConstantRecord"]:
        return query.all_records(cls)

    @classmethod
    def constant_names(cls) -> List[str]:
        return query.constant_names(cls)

    @classmethod
    def find(cls, key: Any) -> Optional["ConstantRecord"]:
        return query.find(cls, key)

    @classmethod
    def find_by(cls, conditions: Optional[Dict[str, Any]] = None, **kwargs: Any) -> Optional["ConstantRecord"]:
        return query.find_by(cls, conditions, **kwargs)

    @classmethod
    def pluck(cls, *names: str) -> List[Any]:
        return query.pluck(cls, *names)

    @classmethod
    def define_predicates(cls, attr_name: Optional[str] = None) -> List[str]:
        return query.define_predicates(cls, attr_name)

    # ------------------------------------------------------------------
    # Equality and ordering
    # ------------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return False
        # Identity first, as list comparison does, so NaN values stay reflexive.
        return all(
            mine is theirs or mine == theirs
            for mine, theirs in (
                (getattr(self, name), getattr(other, name))
                for name in type(self)._schema.attributes
            )
        )

    def __hash__(self) -> int:
        return hash(serialization.freeze(self.to_deep_hash()))

    def compare(self, other: Any) -> Optional[int]:
        """
        Three-way comparison on the identifier attribute.

        Returns -1, 0 or 1, or None when there is no defined order: the
        other value is not a record, either identifier is missing or None,
        or the identifiers cannot be compared.
        """
        attribute = type(self)._schema.key_attribute
        if attribute is None or not is_record(other):
            return None

        mine = getattr(self, attribute, None)
        theirs = getattr(other, attribute, None)
        if mine is None or theirs is None:
            return None

        try:
            if mine < theirs:
                return -1
            if mine > theirs:
                return 1
            if mine == theirs:
                return 0
        except TypeError:
            return None
        return None

    def __lt__(self, other: Any):
        result = self.compare(other)
        return NotImplemented if result is None else result < 0

    def __le__(self, other: Any):
        result = self.compare(other)
        return NotImplemented if result is None else result <= 0

    def __gt__(self, other: Any):
        result = self.compare(other)
        return NotImplemented if result is None else result > 0

    def __ge__(self, other: Any):
        result = self.compare(other)
        return NotImplemented if result is None else result >= 0

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_shallow_hash(self) -> Dict[str, Any]:
        return serialization.to_shallow_hash(self)

    def to_deep_hash(self) -> Dict[str, Any]:
        return serialization.to_deep_hash(self)

    to_dict = to_deep_hash

    def to_json(self, **kwargs: Any) -> str:
        return serialization.to_json(self, **kwargs)

    def to_yaml(self) -> str:
        return serialization.to_yaml(self)

    def __copy__(self):
        # Published records are values; a shallow copy is the record itself.
        return self

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={value!r}" for name, value in self.to_shallow_hash().items())
        if not fields:
            return f"<{type(self).__name__}>"
        return f"<{type(self).__name__} {fields}>"
