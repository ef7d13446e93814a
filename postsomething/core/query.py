"""Lookup filters passed to repository ``find`` operations.

A ``Filter`` is a query specification: Cassandra repositories turn it into
a prepared ``WHERE <column> = ?`` statement, and it can also be called as a
predicate on an entity (used by in-memory fakes and for re-checking rows).
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Filter:
    """Equality filter on a single entity attribute."""

    field: str
    value: Any

    def __call__(self, entity: Any) -> bool:
        return getattr(entity, self.field, None) == self.value


def by_id(value: Any) -> Filter:
    """Filter on the entity primary key."""
    return Filter("id", value)


def by_field(field: str, value: Any) -> Filter:
    return Filter(field, value)


def is_missing(entity: Any) -> bool:
    """Check whether a lookup result should be treated as absent.

    An entity without an identifier is a placeholder, not a stored record.
    Note that ``0`` is a valid identifier.
    """
    if entity is None:
        return True
    identifier = getattr(entity, "id", None)
    return identifier is None or identifier == ""
