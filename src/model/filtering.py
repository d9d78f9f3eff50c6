"""FilterEngine: predicate evaluation over fetched records.

The predicate is the AND of a free-text search over the schema's searchable
fields and one exact match per active dropdown filter. Empty values are
inactive and always match.
"""

from __future__ import annotations

from typing import Any, Iterable

from model.schema import SEARCH, Record, ResourceSchema


def normalize(value: Any) -> str:
    """String-normalize a record value; None/missing become ""."""
    if value is None:
        return ""
    return str(value).strip()


def empty_filters(schema: ResourceSchema) -> dict[str, str]:
    return {key: "" for key in schema.filter_keys}


def has_active_filters(filters: dict[str, str]) -> bool:
    return any(value.strip() for value in filters.values())


def matches_search(record: Record, term: str, searchable: Iterable[str]) -> bool:
    """Case-insensitive substring match of `term` against any searchable field."""
    term = term.strip().lower()
    if not term:
        return True
    for name in searchable:
        value = record.get(name)
        if value is None:
            continue
        if term in str(value).lower():
            return True
    return False


def matches(record: Record, filters: dict[str, str], schema: ResourceSchema) -> bool:
    """Evaluate the full predicate for one record."""
    if not matches_search(record, filters.get(SEARCH, ""), schema.searchable):
        return False
    for name in schema.filterable:
        wanted = filters.get(name, "").strip()
        if wanted and normalize(record.get(name)) != wanted:
            return False
    return True


def apply_filters(
    records: list[Record], filters: dict[str, str], schema: ResourceSchema
) -> list[Record]:
    """Return a new list with the records satisfying every active filter, in order."""
    return [r for r in records if matches(r, filters, schema)]


def filter_options(records: Iterable[Record], field: str) -> list[str]:
    """Distinct non-empty values of `field`, sorted ascending."""
    return sorted({normalize(r.get(field)) for r in records} - {""})
