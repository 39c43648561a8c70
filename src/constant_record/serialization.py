"""
Serialization helpers for record instances.

Converts records to a shallow dict, to the canonical form (a plain
dict/list/scalar tree with every nested record unfolded), and from there
to JSON or YAML text. Keys always follow declared attribute order.

Nested records are inlined, never referenced by identifier:

    {"id": 1, "rank": {"id": 1, "symbol": "gold", "name": "Gold"}}
"""
from __future__ import annotations

import copy
import json
from collections.abc import Mapping, Set
from enum import Enum
from typing import Any, Dict, List

import yaml

from constant_record.schema import is_record
from constant_record.tags import Tag


class CyclicStructureError(ValueError):
    """Raised when a record's value graph refers back to itself."""
    pass


def to_shallow_hash(record: Any) -> Dict[str, Any]:
    """
    Map each declared attribute to its current value.

    Values are copied one level deep only: nested containers and records
    are shared with the source. Unset (None) attributes are kept.
    """
    return {
        name: copy.copy(getattr(record, name))
        for name in type(record)._schema.attributes
    }


def to_deep_hash(record: Any) -> Dict[str, Any]:
    """Convert a record to its canonical form."""
    return canonicalize(record)


def canonicalize(value: Any) -> Any:
    """
    Recursively rewrite ``value`` until no record remains.

    - mapping  -> new dict, values converted
    - list/tuple -> new list, elements converted
    - record   -> canonical form of its shallow hash
    - other    -> shallow copy

    Already plain trees come back structurally unchanged.

    Raises:
        CyclicStructureError: If a container or record contains itself
    """
    return _unfold(value, set())


def _unfold(value: Any, active: set) -> Any:
    if not (is_record(value) or isinstance(value, (Mapping, list, tuple))):
        return copy.copy(value)

    marker = id(value)
    if marker in active:
        raise CyclicStructureError(
            f"Cyclic structure detected at {type(value).__name__} object"
        )
    active.add(marker)
    try:
        if is_record(value):
            return {key: _unfold(item, active) for key, item in to_shallow_hash(value).items()}
        if isinstance(value, Mapping):
            return {key: _unfold(item, active) for key, item in value.items()}
        return [_unfold(item, active) for item in value]
    finally:
        active.discard(marker)


def freeze(value: Any) -> Any:
    """
    Turn a canonical tree into a hashable value.

    Mappings freeze to frozensets of items, so key order never affects
    the result.
    """
    if isinstance(value, Mapping):
        return frozenset((key, freeze(item)) for key, item in value.items())
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    if isinstance(value, Set):
        return frozenset(freeze(item) for item in value)
    try:
        hash(value)
    except TypeError:
        return repr(value)
    return value


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json(record: Any, **kwargs: Any) -> str:
    """
    Encode the canonical form of ``record`` as JSON text.

    Output is compact (``{"id":1,"symbol":"gold"}``) unless ``separators``
    or ``indent`` are passed. Tags and enum members render as plain values.
    """
    if "indent" not in kwargs:
        kwargs.setdefault("separators", (",", ":"))
    kwargs.setdefault("default", _json_default)
    return json.dumps(to_deep_hash(record), **kwargs)


class _RecordDumper(yaml.SafeDumper):
    """SafeDumper that writes tags and enum members as plain scalars."""
    pass


_RecordDumper.add_representer(Tag, lambda dumper, value: dumper.represent_str(str(value)))
_RecordDumper.add_multi_representer(Enum, lambda dumper, value: dumper.represent_data(value.value))


def to_yaml(record: Any) -> str:
    return yaml.dump(to_deep_hash(record), Dumper=_RecordDumper, sort_keys=False)


def record_from_dict(record_type: type, data: Mapping) -> Any:
    """Build a record from a mapping; unknown keys are ignored."""
    if not isinstance(data, Mapping):
        raise TypeError(f"Expected a mapping for {record_type.__name__}, got {type(data).__name__}")
    return record_type(data)


def record_from_json(record_type: type, text: str) -> Any:
    return record_from_dict(record_type, json.loads(text))


def record_from_yaml(record_type: type, text: str) -> Any:
    return record_from_dict(record_type, yaml.safe_load(text))


def records_to_list(records: List[Any]) -> List[Dict[str, Any]]:
    """Canonical forms of several records, in the given order."""
    return [to_deep_hash(record) for record in records]
