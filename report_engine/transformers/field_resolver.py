# ==============================================
# report_engine/transformers/field_resolver.py
# ==============================================
"""
Field resolution for raw records.

Upstream collections arrive either as mappings (dict rows, query results) or as
objects exposing fields as attributes (dataclasses, pydantic models, plain
objects). Everything in the engine reads fields through this module so that the
two shapes are handled in exactly one place.

Resolution is null-coalescing: only a missing field or a ``None`` value yields
the default. ``0``, ``False`` and ``""`` are real values.
"""

import dataclasses
import inspect
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, Iterator

_MISSING = object()
_SCALARS = (str, bytes, int, float, Decimal, bool, date, datetime)


def _lookup(record: Any, field_name: str) -> Any:
    if record is None:
        return _MISSING

    if isinstance(record, Mapping):
        return record.get(field_name, _MISSING)

    try:
        return getattr(record, field_name, _MISSING)
    except Exception:
        # Properties that raise are treated as absent
        return _MISSING


def resolve(record: Any, field_name: str, default: Any = None) -> Any:
    """
    Read a field from a mapping or object record.

    Args:
        record: Mapping-like or attribute-bearing record
        field_name: Field to read
        default: Value returned when the field is missing or None

    Returns:
        The field value, or default
    """
    value = _lookup(record, field_name)
    if value is _MISSING or value is None:
        return default
    return value


def resolve_first(record: Any, field_names: Iterable[str], default: Any = None) -> Any:
    """
    Return the first non-None value across fallback field names.

    ``resolve_first(row, ["name", "department"], "Unknown")`` reads ``name``
    and falls back to ``department``, then to ``"Unknown"``.
    """
    for field_name in field_names:
        value = _lookup(record, field_name)
        if value is not _MISSING and value is not None:
            return value
    return default


def has_field(record: Any, field_name: str) -> bool:
    """True when the record carries a non-None value for field_name."""
    value = _lookup(record, field_name)
    return value is not _MISSING and value is not None


def _slot_names(cls: type) -> Iterator[str]:
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        yield from slots


def _public_fields(record: Any) -> Dict[str, Any]:
    cls = type(record)
    names = [name for name in _slot_names(cls) if name not in ("__dict__", "__weakref__")]
    names.extend(getattr(record, "__dict__", {}) or {})
    names.extend(name for name, member in inspect.getmembers(cls) if isinstance(member, property))

    fields: Dict[str, Any] = {}
    for name in names:
        if name.startswith("_") or name in fields:
            continue
        value = _lookup(record, name)
        if value is not _MISSING:
            fields[name] = value
    return fields


def to_mapping(record: Any) -> Dict[str, Any]:
    """
    Canonicalise a raw record into a plain dict.

    Supports mappings, pydantic models (``model_dump``), row objects exposing
    ``_mapping`` (SQLAlchemy) or ``_asdict()`` (namedtuples), dataclass
    instances and plain objects. For plain objects the public instance
    attributes, ``__slots__`` entries and properties are collected. Scalars
    and other values without fields yield an empty dict.
    """
    if record is None:
        return {}

    if isinstance(record, Mapping):
        return dict(record)

    model_dump = getattr(record, "model_dump", None)
    if callable(model_dump):
        return dict(model_dump())

    row_mapping = getattr(record, "_mapping", None)
    if isinstance(row_mapping, Mapping):
        return dict(row_mapping)

    as_dict = getattr(record, "_asdict", None)
    if callable(as_dict):
        return dict(as_dict())

    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return {f.name: getattr(record, f.name) for f in dataclasses.fields(record)}

    if isinstance(record, _SCALARS):
        return {}

    return _public_fields(record)
