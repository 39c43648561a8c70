"""
Attribute schema for record types.

Every record type owns exactly one RecordSchema. It is the single source
of truth for attribute order and is consumed by construction, equality,
ordering, queries and serialization alike.

ARCHITECTURAL RULE:
    A RecordSchema is immutable.
    Redeclaring attributes builds a new schema; it never edits one in place.
    Once an instance of a type exists, its schema can no longer be replaced.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, FrozenSet, List, Optional, Tuple


DEFAULT_TAG_ATTRIBUTE = "symbol"


class UnknownAttributeError(AttributeError):
    """Raised when a query names an attribute the record type does not declare."""

    def __init__(self, type_name: str, attribute: str):
        self.type_name = type_name
        self.attribute = attribute
        super().__init__(f"{type_name} has no declared attribute {attribute!r}")


class SchemaFrozenError(Exception):
    """Raised when attributes are redeclared after the type has been instantiated."""
    pass


@dataclass(frozen=True)
class RecordSchema:
    """
    Immutable descriptor of a record type's attributes.

    Properties:
        type_name:
            Name of the described type (used in messages and repr)

        explicit:
            Attribute names declared through ``__attributes__``,
            in declaration order

        introspected:
            Names of public properties with both a getter and a setter,
            not already named explicitly. Appended after the explicit
            names in reverse discovery order.

        settable:
            Attributes that construction may assign

        properties:
            Attributes backed by a property on the type rather than
            by a plain instance attribute

        tag_attribute:
            Attribute used to generate per-record predicates, or None
    """

    type_name: str
    explicit: Tuple[str, ...] = ()
    introspected: Tuple[str, ...] = ()
    settable: FrozenSet[str] = field(default_factory=frozenset)
    properties: FrozenSet[str] = field(default_factory=frozenset)
    tag_attribute: Optional[str] = DEFAULT_TAG_ATTRIBUTE

    @property
    def attributes(self) -> Tuple[str, ...]:
        """All attributes in field order: explicit names first."""
        return self.explicit + self.introspected

    @property
    def key_attribute(self) -> Optional[str]:
        """The identifier attribute (first declared) used for ordering and find."""
        attributes = self.attributes
        return attributes[0] if attributes else None

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def is_settable(self, name: str) -> bool:
        return name in self.settable

    def require(self, name: str) -> str:
        """
        Return ``name`` if it is a declared attribute.

        Raises:
            UnknownAttributeError: If the type does not declare ``name``
        """
        if name not in self.attributes:
            raise UnknownAttributeError(self.type_name, name)
        return name

    @classmethod
    def build(cls, record_type: type) -> "RecordSchema":
        """
        Build the schema of ``record_type`` from its class attributes.

        Reads ``__attributes__`` (explicit names) and ``__tag_attribute__``,
        then inspects the class hierarchy for read/write properties.

        Raises:
            ValueError: If an explicit attribute name is declared twice
        """
        explicit = tuple(str(name) for name in getattr(record_type, "__attributes__", ()))
        duplicates = sorted({name for name in explicit if explicit.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate attribute names for {record_type.__name__}: {duplicates}")

        discovered = _discover_accessors(record_type)
        introspected = tuple(name for name in reversed(discovered) if name not in explicit)

        properties = set()
        settable = set()
        for name in explicit + introspected:
            descriptor = _find_property(record_type, name)
            if descriptor is None:
                settable.add(name)
                continue
            properties.add(name)
            if descriptor.fset is not None:
                settable.add(name)

        return cls(
            type_name=record_type.__name__,
            explicit=explicit,
            introspected=introspected,
            settable=frozenset(settable),
            properties=frozenset(properties),
            tag_attribute=getattr(record_type, "__tag_attribute__", DEFAULT_TAG_ATTRIBUTE),
        )


def is_record(value: Any) -> bool:
    """True if ``value`` is an instance of a record type."""
    return isinstance(getattr(type(value), "_schema", None), RecordSchema)


def _find_property(record_type: type, name: str) -> Optional[property]:
    for klass in record_type.__mro__:
        if name in vars(klass):
            candidate = vars(klass)[name]
            return candidate if isinstance(candidate, property) else None
    return None


def _discover_accessors(record_type: type) -> List[str]:
    # Private and dunder names (operators included) never count as accessors.
    found: List[str] = []
    seen = set()
    for klass in record_type.__mro__:
        if klass is object:
            continue
        for name, value in vars(klass).items():
            if name.startswith("_") or name in seen:
                continue
            seen.add(name)
            if isinstance(value, property) and value.fget is not None and value.fset is not None:
                found.append(name)
    return found
