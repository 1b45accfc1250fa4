"""Decode rows/documents into pydantic (or SQLModel) destination models."""

from typing import Any, Iterable, List, Mapping, Optional, Type
from pydantic import BaseModel, ValidationError
from datasources.exceptions.errors import DecodeError


def _check_model(model: Optional[Type[Any]]) -> None:
    if model is None:
        return
    if not (isinstance(model, type) and issubclass(model, BaseModel)):
        raise DecodeError(
            f"destination must be a pydantic model class, got {model!r}",
            operation="decode",
        )


def decode_one(row: Mapping[str, Any], model: Optional[Type[Any]] = None):
    """Decode one row; without a model the row is returned as a plain dict."""
    _check_model(model)
    if model is None:
        return dict(row)
    try:
        return model.model_validate(dict(row))
    except ValidationError as e:
        raise DecodeError(
            f"row does not match {model.__name__}",
            operation="decode",
            detail=e.errors(include_url=False),
        ) from e


def decode_many(rows: Iterable[Mapping[str, Any]], model: Optional[Type[Any]] = None) -> List[Any]:
    _check_model(model)
    return [decode_one(row, model) for row in rows]
