"""UI helper functions for the console."""

from __future__ import annotations

from typing import Any

from model.filtering import normalize
from model.schema import ResourceSchema


# Longest cell text shown in the records table
MAX_CELL_WIDTH = 40


def cell_text(value: Any, width: int = MAX_CELL_WIDTH) -> str:
    """Single-line, truncated text for a table cell."""
    text = " ".join(normalize(value).split())
    if len(text) > width:
        return text[: width - 1] + "…"
    return text


def column_labels(schema: ResourceSchema) -> list[str]:
    return [schema.label_for(name) for name in schema.column_fields]


def row_cells(schema: ResourceSchema, record: dict[str, Any]) -> list[str]:
    return [cell_text(record.get(name)) for name in schema.column_fields]


def select_options(values: list[str]) -> list[tuple[str, str]]:
    """(label, value) pairs for a Select built from distinct values."""
    return [(value, value) for value in values]


def format_status_counts(counts: dict[str, int]) -> str:
    """Status strip text, e.g. "Total: 5  |  Approved: 2  |  Pending: 3"."""
    if not counts:
        return ""
    parts = [f"Total: {counts.get('total', 0)}"]
    parts += [f"{status}: {count}" for status, count in counts.items() if status != "total"]
    return "  |  ".join(parts)
