"""
Bookmarks API - Field Mask
===========================

What:  The set of (field, value) pairs a client actually sent in a PATCH body.
How:   Built from a Pydantic model with `exclude_unset=True`, so a field the
       client omitted is absent from the mask while an explicit null is kept.
       `apply()` writes every pair onto the target entity in one step.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Tuple

from pydantic import BaseModel


@dataclass(frozen=True)
class FieldMask:
    """Immutable mapping of attribute name to new value."""

    changes: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_model(cls, patch: BaseModel) -> "FieldMask":
        return cls(changes=patch.model_dump(exclude_unset=True, by_alias=False))

    @property
    def fields(self) -> frozenset:
        return frozenset(self.changes)

    def __contains__(self, name: object) -> bool:
        return name in self.changes

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return iter(self.changes.items())

    def __bool__(self) -> bool:
        return bool(self.changes)

    def get(self, name: str, default: Any = None) -> Any:
        return self.changes.get(name, default)

    def apply(self, entity: object) -> None:
        """
        Assign each masked value to `entity`.

        Raises:
            AttributeError: The mask names an attribute `entity` does not have.
        """
        for name, value in self.changes.items():
            if not hasattr(entity, name):
                raise AttributeError(f"{type(entity).__name__} has no field '{name}'")
            setattr(entity, name, value)
