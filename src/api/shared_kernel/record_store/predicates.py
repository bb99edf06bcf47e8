"""Query predicates and sort keys for the record store.

Predicates are small immutable trees that every record store implementation
knows how to evaluate: the in-memory store evaluates them directly against
field maps, the SQL store translates them into JSON-path expressions.

Matching is exact and case-sensitive on stored values. Callers that need
case-insensitive matching store a case-folded shadow field and query that.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union


@dataclass(frozen=True)
class Eq:
    """Field equals value."""

    field: str
    value: Any

    def matches(self, fields: Mapping[str, Any]) -> bool:
        return fields.get(self.field) == self.value


@dataclass(frozen=True)
class In:
    """Field value is a member of a set of values.

    Values are kept as a tuple so the predicate stays hashable and the order
    of the caller's set is preserved for implementations that care.
    """

    field: str
    values: tuple[Any, ...]

    def matches(self, fields: Mapping[str, Any]) -> bool:
        return fields.get(self.field) in self.values


@dataclass(frozen=True)
class StartsWith:
    """String field starts with prefix."""

    field: str
    prefix: str

    def matches(self, fields: Mapping[str, Any]) -> bool:
        value = fields.get(self.field)
        return isinstance(value, str) and value.startswith(self.prefix)


@dataclass(frozen=True)
class Contains:
    """String field contains substring."""

    field: str
    substring: str

    def matches(self, fields: Mapping[str, Any]) -> bool:
        value = fields.get(self.field)
        return isinstance(value, str) and self.substring in value


@dataclass(frozen=True)
class And:
    """All child predicates match."""

    predicates: tuple[Predicate, ...]

    def matches(self, fields: Mapping[str, Any]) -> bool:
        return all(p.matches(fields) for p in self.predicates)


@dataclass(frozen=True)
class Or:
    """At least one child predicate matches."""

    predicates: tuple[Predicate, ...]

    def matches(self, fields: Mapping[str, Any]) -> bool:
        return any(p.matches(fields) for p in self.predicates)


Predicate = Union[Eq, In, StartsWith, Contains, And, Or]


def all_of(*predicates: Predicate) -> And:
    """Combine predicates with logical AND."""
    return And(predicates=tuple(predicates))


def any_of(*predicates: Predicate) -> Or:
    """Combine predicates with logical OR."""
    return Or(predicates=tuple(predicates))


@dataclass(frozen=True)
class SortKey:
    """Ordering on a single field.

    Attributes:
        field: Field name to order by
        descending: Order from largest to smallest
        numeric: Compare as numbers rather than strings. Only the SQL store
            needs this hint; JSON documents do not carry column types.
    """

    field: str
    descending: bool = False
    numeric: bool = False
