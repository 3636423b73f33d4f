"""Ingredient domain entity: global named substance with a grocery category."""
from typing import Optional
from uuid import uuid4

from cookwise.domain.errors import InputViolation
from cookwise.utilities.constants import CATEGORIES, DEFAULT_CATEGORY


class Ingredient:
    def __init__(self, name: str = "", category: str = DEFAULT_CATEGORY, id: Optional[str] = None):
        self.id = id or uuid4().hex
        self.name = name.strip()
        self.category = (category or DEFAULT_CATEGORY).lower()
        if self.category not in CATEGORIES:
            raise InputViolation(f"Unknown ingredient category: {category}")

    @property
    def key(self) -> str:
        '''Case-insensitive name used for uniqueness.'''
        return normalize_name(self.name)

    def __eq__(self, other) -> bool:
        return isinstance(other, Ingredient) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return f"{self.name} ({self.category})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates an Ingredient object from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return Ingredient(
            name=d.get("name", ""),
            category=d.get("category") or DEFAULT_CATEGORY,
            id=d.get("id"),
        )

    def to_dict(self):
        return {"id": self.id, "name": self.name, "category": self.category}


def normalize_name(name: str) -> str:
    return " ".join((name or "").split()).lower()
