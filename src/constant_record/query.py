"""
Query functions over a record type's constants.

These are the ActiveRecord-like lookups of the record store:

    all / unsorted_all   enumerate the constants
    find                 binary search on the identifier attribute
    find_by              linear scan matching attribute values
    pluck                project attribute values

``ConstantRecord`` exposes each of them as a classmethod; the functions
here take the record type as their first argument.
"""
from __future__ import annotations

import warnings
from bisect import bisect_left
from typing import Any, Dict, Iterator, List, Optional, Tuple


def _bound_constants(record_type: type) -> Iterator[Tuple[str, Any]]:
    for name, value in vars(record_type).items():
        if not name.startswith("_") and type(value) is record_type:
            yield name, value


def unsorted_all(record_type: type) -> List[Any]:
    """
    Every record bound to a public class attribute of ``record_type``.

    Only values whose type is exactly ``record_type`` count: subclass
    instances and non-record attributes are skipped. Order follows the
    class body.
    """
    return [value for _, value in _bound_constants(record_type)]


def constant_names(record_type: type) -> List[str]:
    return [name for name, _ in _bound_constants(record_type)]


def _partition(record_type: type) -> Tuple[Tuple[Any, ...], Tuple[Any, ...]]:
    """
    Split the constants into (ordered, unordered).

    ``ordered`` holds the records with an identifier, stably sorted by it.
    ``unordered`` holds the rest in registry order. When the identifiers
    cannot be compared with each other, every record is unordered.

    The result is cached on the type until a public class attribute is
    rebound (see RecordMeta.__setattr__).
    """
    cached = vars(record_type).get("_ordered")
    if cached is not None:
        return cached

    records = unsorted_all(record_type)
    attribute = record_type._schema.key_attribute
    if attribute is None:
        result = ((), tuple(records))
    else:
        keyed = [record for record in records if getattr(record, attribute, None) is not None]
        rest = [record for record in records if getattr(record, attribute, None) is None]
        try:
            result = (tuple(sorted(keyed, key=lambda record: getattr(record, attribute))), tuple(rest))
        except TypeError:
            result = ((), tuple(records))

    type.__setattr__(record_type, "_ordered", result)
    return result


def all_records(record_type: type) -> List[Any]:
    """
    ``unsorted_all`` sorted by the identifier attribute. Never raises.

    Records without an identifier follow the sorted ones, in registry order.
    """
    ordered, unordered = _partition(record_type)
    return list(ordered + unordered)


def find(record_type: type, key: Any) -> Optional[Any]:
    """
    Find the record whose identifier attribute equals ``key``.

    Binary search over the records that have an identifier, sorted once
    per type. Returns None when nothing matches, including when ``key``
    is not comparable with the stored identifiers.
    """
    attribute = record_type._schema.key_attribute
    if attribute is None or key is None:
        return None

    records, _ = _partition(record_type)
    try:
        index = bisect_left(records, key, key=lambda record: getattr(record, attribute))
    except TypeError:
        return None

    if index < len(records) and getattr(records[index], attribute) == key:
        return records[index]
    return None


def find_by(record_type: type, conditions: Optional[Dict[str, Any]] = None, **kwargs: Any) -> Optional[Any]:
    """
    Return the first record whose attributes equal every condition.

    Conditions come from the ``conditions`` mapping and keyword arguments
    (keywords win). With no conditions the first record is returned.

    Raises:
        UnknownAttributeError: If a condition names an undeclared attribute
    """
    criteria = dict(conditions or {})
    criteria.update(kwargs)

    schema = record_type._schema
    for name in criteria:
        schema.require(name)

    for record in unsorted_all(record_type):
        if all(getattr(record, name) == value for name, value in criteria.items()):
            return record
    return None


def pluck(record_type: type, *names: str) -> List[Any]:
    """
    Project attribute values in ``all_records`` order.

    One name gives bare values; several give tuples in the requested order.

    Example:
        pluck(Rank, "symbol")        -> ["gold", "silver", "bronze"]
        pluck(Rank, "id", "name")    -> [(1, "Gold"), (2, "Silver"), (3, "Bronze")]

    Raises:
        ValueError: If no attribute name is given
        UnknownAttributeError: If a name is not a declared attribute
    """
    if not names:
        raise ValueError("pluck requires at least one attribute name")

    schema = record_type._schema
    for name in names:
        schema.require(name)

    records = all_records(record_type)
    if len(names) == 1:
        return [getattr(record, names[0]) for record in records]
    return [tuple(getattr(record, name) for name in names) for record in records]


def define_predicates(record_type: type, attr_name: Optional[str] = None) -> List[str]:
    """
    Add an ``is_<tag>()`` method to ``record_type`` for each tagged constant.

    ``Rank.GOLD.is_gold()`` is True, ``Rank.SILVER.is_gold()`` is False.
    Re-running replaces previously generated predicates. Tags that do not
    form an identifier, or whose method name is already taken by something
    other than a predicate, are skipped with a warning.

    Returns:
        Names of the predicates defined
    """
    attr_name = attr_name or record_type._schema.tag_attribute
    if attr_name is None:
        return []

    defined = []
    for record in unsorted_all(record_type):
        tag = getattr(record, attr_name, None)
        if tag is None:
            continue

        method_name = f"is_{tag}"
        if not method_name.isidentifier():
            warnings.warn(
                f"Cannot define predicate for {record_type.__name__} tag {str(tag)!r}: not an identifier",
                UserWarning,
            )
            continue

        existing = getattr(record_type, method_name, None)
        if existing is not None and not getattr(existing, "_is_record_predicate", False):
            warnings.warn(
                f"Predicate {method_name} would shadow {record_type.__name__}.{method_name}; skipped",
                UserWarning,
            )
            continue

        setattr(record_type, method_name, _make_predicate(record, method_name))
        defined.append(method_name)
    return defined


def _make_predicate(target: Any, method_name: str):
    def predicate(self) -> bool:
        return self == target

    predicate.__name__ = method_name
    predicate.__qualname__ = f"{type(target).__name__}.{method_name}"
    predicate.__doc__ = f"True if this record equals {target!r}."
    predicate._is_record_predicate = True
    return predicate
