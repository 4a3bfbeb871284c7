"""
core/filter.py - Label filter compilation

Turns tag predicates into the filter expression accepted by the Compute
Engine list calls. Multiple predicates are ANDed server-side.

Usage:
    from core.filter import FilterSpec, compile_filter

    filters = FilterSpec.from_strings(["env=prod", "team=web"])
    compile_filter(filters)  # "(labels.env=prod) (labels.team=web)"
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from core.exceptions import ValidationError

NO_FILTER = ""


@dataclass(frozen=True)
class Tag:
    """A single name=value label predicate"""

    name: str
    value: str

    @classmethod
    def parse(cls, text: str) -> Tag:
        """Parse a ``name=value`` string

        Only the first ``=`` separates name and value, so values may contain ``=``.
        """
        name, sep, value = text.partition("=")
        if not sep or not name:
            raise ValidationError("tag", text, "name=value")
        return cls(name=name, value=value)


@dataclass(frozen=True)
class FilterSpec:
    """Ordered set of tag predicates"""

    tags: tuple[Tag, ...] = field(default_factory=tuple)

    @classmethod
    def from_strings(cls, items: Iterable[str]) -> FilterSpec:
        return cls(tags=tuple(Tag.parse(item) for item in items))

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> FilterSpec:
        return cls(tags=tuple(Tag(name, value) for name, value in pairs))

    def __iter__(self) -> Iterator[Tag]:
        return iter(self.tags)

    def __len__(self) -> int:
        return len(self.tags)

    def __bool__(self) -> bool:
        return bool(self.tags)


def compile_filter(filters: FilterSpec | Iterable[Tag] | None) -> str:
    """Compile tag predicates into a query fragment

    Each predicate becomes ``(labels.<name>=<value>)``; predicates are joined
    by a single space in input order. No escaping or validation is done.

    Args:
        filters: predicates, or None

    Returns:
        The filter expression, or NO_FILTER when there are no predicates
    """
    if filters is None:
        return NO_FILTER
    return " ".join(f"(labels.{tag.name}={tag.value})" for tag in filters)
