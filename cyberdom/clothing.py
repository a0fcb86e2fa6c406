"""Clothing items, their attributes and the forms that create them."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

_DEFAULT_ATTRIBUTE_NAMES = ("Colour", "Style", "Description")


class MissingNameError(ValueError):
    """Raised when a clothing item or type is given no name."""


@dataclass
class ClothingAttribute:
    """An attribute a clothing type has, with its allowed values if restricted."""

    name: str
    values: list[str] = field(default_factory=list)


@dataclass
class ClothingItem:
    """A named piece of clothing of some type, with free-form attributes."""

    name: str = ""
    type: str = ""
    attributes: dict[str, str] = field(default_factory=dict)

    def add_attribute(self, name: str, value: str) -> None:
        self.attributes[name] = value

    def get_attribute(self, name: str) -> str:
        return self.attributes.get(name, "")

    def to_string(self) -> str:
        """Serialise to compact JSON."""
        payload = {
            "name": self.name,
            "type": self.type,
            "attributes": dict(sorted(self.attributes.items())),
        }
        return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)

    @classmethod
    def from_string(cls, text: str) -> "ClothingItem":
        """Parse the JSON form; anything unreadable gives empty fields."""
        try:
            data = json.loads(text)
        except (ValueError, TypeError):
            data = {}
        if not isinstance(data, dict):
            data = {}

        def as_text(value: object) -> str:
            return value if isinstance(value, str) else ""

        item = cls(as_text(data.get("name")), as_text(data.get("type")))
        attrs = data.get("attributes")
        if isinstance(attrs, dict):
            for key, value in attrs.items():
                item.add_attribute(key, as_text(value))
        return item


class ClothingForm:
    """The fields for adding a clothing item or editing an existing one."""

    def __init__(
        self,
        clothing_type: str,
        attributes: Optional[Sequence[ClothingAttribute]] = None,
        existing: Optional[ClothingItem] = None,
    ) -> None:
        self.clothing_type = clothing_type
        if attributes is None:
            attributes = [ClothingAttribute(name) for name in _DEFAULT_ATTRIBUTE_NAMES]
        self.attributes = list(attributes)
        self.existing = existing

    @property
    def is_edit(self) -> bool:
        return self.existing is not None

    @property
    def initial_name(self) -> str:
        return self.existing.name if self.existing else ""

    def initial_values(self) -> dict[str, str]:
        """The value each attribute field starts with."""
        values: dict[str, str] = {}
        for attr in self.attributes:
            lowered = attr.name.lower()
            if lowered == "type":
                values[attr.name] = self.clothing_type
            elif lowered == "name":
                values[attr.name] = self.initial_name
            elif attr.values:
                current = self.existing.get_attribute(attr.name) if self.existing else ""
                values[attr.name] = current if current in attr.values else attr.values[0]
            else:
                values[attr.name] = self.existing.get_attribute(attr.name) if self.existing else ""
        return values

    def submit(self, name: str, values: Optional[Mapping[str, str]] = None) -> ClothingItem:
        """Build the clothing item from the entered name and attribute values."""
        values = dict(values or {})
        known = {attr.name for attr in self.attributes}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"unknown attributes: {', '.join(sorted(unknown))}")

        name = name.strip()
        if not name:
            raise MissingNameError("Please enter a name for the clothing item.")

        item = ClothingItem(name, self.clothing_type.strip())
        initial = self.initial_values()
        for attr in self.attributes:
            if attr.name.lower() == "type":
                value = self.clothing_type
            else:
                value = values.get(attr.name, initial[attr.name])
                if attr.values and attr.name.lower() != "name" and value not in attr.values:
                    raise ValueError(f"{value!r} is not a choice for {attr.name}")
            value = value.strip()
            if value:
                item.add_attribute(attr.name, value)
        return item


def validate_cloth_type(name: str) -> str:
    """Return the trimmed clothing type name, refusing an empty one."""
    name = name.strip()
    if not name:
        raise MissingNameError("Please enter a name for the clothing type.")
    return name