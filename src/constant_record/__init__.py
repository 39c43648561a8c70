"""
Constant Record Package

Declares small, fixed sets of named value records on a type ("enums with
data") and queries, compares and serializes them through a minimal
record-store API.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Databases or external storage
    - Schema migration
    - Concurrent mutation of published records

Records are defined once, at class creation, and only read afterwards.
"""

from constant_record.record import ConstantRecord, PendingConstant, RecordMeta, constant
from constant_record.schema import (
    DEFAULT_TAG_ATTRIBUTE,
    RecordSchema,
    SchemaFrozenError,
    UnknownAttributeError,
)
from constant_record.serialization import CyclicStructureError
from constant_record.tags import Tag

__version__ = "0.1.0"

__all__ = [
    "ConstantRecord",
    "CyclicStructureError",
    "DEFAULT_TAG_ATTRIBUTE",
    "PendingConstant",
    "RecordMeta",
    "RecordSchema",
    "SchemaFrozenError",
    "Tag",
    "UnknownAttributeError",
    "constant",
]
