"""Gmail labels.

A ``Label`` is a name/id pair. Labels are looked up by name and applied
by id.
"""

from __future__ import annotations


class Label:
    """A Gmail label. Two labels are equal when their ids match."""

    def __init__(self, name: str, id: str) -> None:
        self.name = name
        self.id = id

    def __repr__(self) -> str:
        return f"Label(name={self.name!r}, id={self.id!r})"

    def __str__(self) -> str:
        return self.name

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other) -> bool:
        if isinstance(other, Label):
            return self.id == other.id
        return NotImplemented
