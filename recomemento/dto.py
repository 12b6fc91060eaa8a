"""Request and response bodies of the book API."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from typing import Any, Optional

from .models import Book


class RequestValidationError(ValueError):
    """Raised when a request body cannot be parsed or fails validation."""


def _load_object(data: Any) -> dict[str, Any]:
    if isinstance(data, (bytes, bytearray)):
        data = data.decode("utf-8", errors="replace")
    if isinstance(data, str):
        if not data.strip():
            raise RequestValidationError("EOF")
        try:
            data = json.loads(data)
        except json.JSONDecodeError as exc:
            raise RequestValidationError(f"invalid JSON: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RequestValidationError(
            f"json: cannot unmarshal {type(data).__name__} into request object"
        )
    return data


def _string_fields(cls: type, data: dict[str, Any], *, optional: bool) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for field in fields(cls):
        value = data.get(field.name)
        if value is None:
            values[field.name] = None if optional else ""
            continue
        if not isinstance(value, str):
            raise RequestValidationError(
                f"json: cannot unmarshal {type(value).__name__} into field "
                f"{cls.__name__}.{field.name} of type string"
            )
        values[field.name] = value
    return values


def _require(cls: type, values: dict[str, Any], required: tuple[str, ...]) -> None:
    problems = [
        f"Key: '{cls.__name__}.{name.capitalize()}' Error:Field validation for "
        f"'{name.capitalize()}' failed on the 'required' tag"
        for name in required
        if not values[name]
    ]
    if problems:
        raise RequestValidationError("\n".join(problems))


@dataclass(frozen=True)
class CreateBookRequest:
    """Body of a create request; every field is required and non-empty."""

    title: str
    author: str
    genre: str
    purpose: str
    description: str

    @classmethod
    def from_json(cls, data: Any) -> "CreateBookRequest":
        values = _string_fields(cls, _load_object(data), optional=False)
        _require(cls, values, tuple(values))
        return cls(**values)

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class UpdateBookRequest:
    """Body of an update request; only the given fields are changed."""

    title: Optional[str] = None
    author: Optional[str] = None
    genre: Optional[str] = None
    purpose: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> "UpdateBookRequest":
        return cls(**_string_fields(cls, _load_object(data), optional=True))

    def to_updates(self) -> dict[str, str]:
        """Column updates for the fields that were provided."""
        return {name: value for name, value in asdict(self).items() if value is not None}


@dataclass(frozen=True)
class RecommendBookRequest:
    """Body of a recommendation request; genre and purpose are required."""

    genre: str
    purpose: str
    type: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "RecommendBookRequest":
        values = _string_fields(cls, _load_object(data), optional=False)
        _require(cls, values, ("genre", "purpose"))
        return cls(**values)


@dataclass(frozen=True)
class BookResponse:
    """A book as returned by the API."""

    id: int
    title: str
    author: str
    genre: str
    purpose: str
    description: str

    @classmethod
    def from_book(cls, book: Book) -> "BookResponse":
        return cls(**book.to_dict())

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ErrorResponse:
    """An error kind with a human-readable message."""

    error: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)