"""
Field extraction for insert statements.

Entities declare their columns with a "db" tag:

    @dataclass
    class Course:
        id: Optional[int] = field(default=None, metadata={"db": "id"})
        title: str = field(default="", metadata={"db": "title"})

    class Course(BaseModel):
        title: str = Field("", json_schema_extra={"db": "title"})

column_mapping() turns those tags into a ColumnMapping once per class;
extract_fields() then walks the mapping for an instance and keeps only
populated, non-system fields.
"""

import dataclasses
from decimal import Decimal
from functools import lru_cache
from typing import Any, List, NamedTuple, Optional, Tuple, Type
from pydantic import BaseModel
from datasources.exceptions.errors import InvalidEntityError

TAG = "db"
SYSTEM_COLUMNS = frozenset({"id", "created_at", "updated_at"})


class ColumnField(NamedTuple):
    attribute: str
    column: str
    system: bool = False


ColumnMapping = Tuple[ColumnField, ...]


def is_system_column(column: str) -> bool:
    return column in SYSTEM_COLUMNS or "status" in column


def quote_column(column: str) -> str:
    return "`" + column.replace("`", "``") + "`"


def _field_from_tag(attribute: str, tag: Any) -> Optional[ColumnField]:
    if not isinstance(tag, dict) or not tag.get(TAG):
        return None
    column = tag[TAG]
    return ColumnField(attribute, column, bool(tag.get("system")) or is_system_column(column))


@lru_cache(maxsize=None)
def column_mapping(model_cls: Type[Any]) -> ColumnMapping:
    """Build the tagged-column mapping for a dataclass or pydantic model class."""
    fields: List[ColumnField] = []
    if dataclasses.is_dataclass(model_cls):
        for f in dataclasses.fields(model_cls):
            entry = _field_from_tag(f.name, dict(f.metadata))
            if entry:
                fields.append(entry)
    elif isinstance(model_cls, type) and issubclass(model_cls, BaseModel):
        for name, info in model_cls.model_fields.items():
            entry = _field_from_tag(name, info.json_schema_extra)
            if entry:
                fields.append(entry)
    else:
        raise InvalidEntityError(
            f"{model_cls!r} is neither a dataclass nor a pydantic model",
            operation="column_mapping",
        )
    return tuple(fields)


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return value is False
    if isinstance(value, (int, float, Decimal)):
        return value == 0
    if isinstance(value, (str, bytes, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    return False


def _is_entity(entity: Any) -> bool:
    if isinstance(entity, type):
        return False
    return dataclasses.is_dataclass(entity) or isinstance(entity, BaseModel)


def extract_fields(entity: Any, mapping: Optional[ColumnMapping] = None) -> List[Tuple[str, Any]]:
    """Return (quoted column, value) pairs for every populated, non-system mapped field."""
    if not _is_entity(entity):
        raise InvalidEntityError(
            f"entity must be a dataclass or pydantic model instance, got {type(entity).__name__}",
            operation="extract_fields",
        )
    if mapping is None:
        mapping = column_mapping(type(entity))

    pairs = []
    for entry in mapping:
        if entry.system or is_system_column(entry.column):
            continue
        value = getattr(entity, entry.attribute, None)
        if is_empty(value):
            continue
        pairs.append((quote_column(entry.column), value))
    return pairs
