from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import InvalidItem, MalformedPayload


class ProductRecord(BaseModel):
    """
    The only thing the store requires of a product: a usable `id`.

    Every other field is opaque; the raw mapping is what gets written back, this
    model only decides whether it is acceptable.
    """

    model_config = ConfigDict(extra="allow")

    id: str

    @field_validator("id", mode="before")
    @classmethod
    def _id_text(cls, value: Any) -> str:
        # bool is an int subclass but never a sensible identifier
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise ValueError("id must be a string or a number")
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        text = str(value)
        if not text.strip():
            raise ValueError("id must not be blank")
        return text


@dataclass(frozen=True)
class NormalizedPayload:
    products: list[Any]
    # Enclosing object whose sibling fields survive the write; None for a flat array.
    envelope: dict[str, Any] | None = None

    def to_document(self) -> Any:
        if self.envelope is None:
            return self.products
        doc = dict(self.envelope)
        doc["products"] = self.products
        return doc


def _flat_array(value: Any) -> NormalizedPayload | None:
    if isinstance(value, list) and value:
        first = value[0]
        if isinstance(first, Mapping) and first.get("id") is not None:
            return NormalizedPayload(products=value)
    return None


def _envelope(value: Any) -> NormalizedPayload | None:
    if isinstance(value, dict) and isinstance(value.get("products"), list):
        return NormalizedPayload(products=value["products"], envelope=value)
    return None


# Tried in order; the first rule that matches wins. A payload that could satisfy
# both must keep resolving to the flat array.
SHAPE_RULES: tuple[tuple[str, Callable[[Any], NormalizedPayload | None]], ...] = (
    ("flat-array", _flat_array),
    ("envelope", _envelope),
)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def decode(raw: bytes) -> Any:
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError, RecursionError) as e:
        raise MalformedPayload() from e


def extract(value: Any) -> NormalizedPayload:
    for _name, rule in SHAPE_RULES:
        normalized = rule(value)
        if normalized is not None:
            if not normalized.products:
                break
            return normalized
    raise MalformedPayload()


def validate(products: list[Any]) -> None:
    """
    Check every item for a non-empty, unique `id`.

    Stops at the first offending item.
    """
    seen: set[str] = set()
    for i, item in enumerate(products):
        if not isinstance(item, Mapping):
            raise InvalidItem(i, f"Item {i} missing non-empty 'id'")
        try:
            record = ProductRecord.model_validate(item)
        except ValidationError as e:
            raise InvalidItem(i, f"Item {i} missing non-empty 'id'") from e
        if record.id in seen:
            raise InvalidItem(i, f"Duplicate id: {record.id}")
        seen.add(record.id)
