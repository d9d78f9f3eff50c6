"""ListState: the full collection plus the filtered/paginated view of it."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from constants import DEFAULT_PAGE_SIZE
from model import filtering, pagination
from model.schema import Record, ResourceSchema


@dataclass
class ListState:
    """Per-list state. `filtered` is always replaced wholesale, never mutated."""

    schema: ResourceSchema
    all: list[Record] = field(default_factory=list)
    filtered: list[Record] = field(default_factory=list)
    filters: dict[str, str] = field(default_factory=dict)
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        pagination.validate_page_size(self.page_size)
        if not self.filters:
            self.filters = filtering.empty_filters(self.schema)

    # =========================================================================
    # Derived values
    # =========================================================================

    @property
    def total(self) -> int:
        return len(self.filtered)

    @property
    def pages(self) -> int:
        return pagination.page_count(self.total, self.page_size)

    @property
    def current_page(self) -> int:
        """The page actually rendered; out-of-range pages clamp to the last one."""
        return pagination.clamp_page(self.page, self.total, self.page_size)

    @property
    def has_active_filters(self) -> bool:
        return filtering.has_active_filters(self.filters)

    @property
    def search_term(self) -> str:
        return self.filters.get(filtering.SEARCH, "")

    def visible_rows(self) -> list[Record]:
        return pagination.page_slice(self.filtered, self.current_page, self.page_size)

    def results_info(self) -> str:
        return pagination.results_info(self.current_page, self.page_size, self.total)

    def page_window(self) -> list[int | None]:
        return pagination.page_window(self.current_page, self.pages)

    def filter_options(self) -> dict[str, list[str]]:
        return {name: filtering.filter_options(self.all, name) for name in self.schema.filterable}

    def status_counts(self) -> dict[str, int]:
        """Records per status value plus "total" (empty when the schema has no status)."""
        if not self.schema.status_field:
            return {}
        counts = Counter(
            filtering.normalize(r.get(self.schema.status_field)) or "Pending" for r in self.all
        )
        result = dict(sorted(counts.items()))
        result["total"] = len(self.all)
        return result

    # =========================================================================
    # Mutators
    # =========================================================================

    def replace_all(self, records: list[Record]) -> None:
        """Replace the collection (no merge); active filters still apply, page is kept."""
        self.all = list(records)
        self.refilter()

    def refilter(self) -> None:
        """Recompute `filtered` without moving the page (render clamps it)."""
        if self.has_active_filters:
            self.filtered = filtering.apply_filters(self.all, self.filters, self.schema)
        else:
            self.filtered = list(self.all)

    def prune_filters(self, options: dict[str, list[str]]) -> list[str]:
        """Clear dropdown filters whose value is no longer among `options`.

        Returns the names of the filters that were cleared.
        """
        cleared = []
        for name, values in options.items():
            current = self.filters.get(name, "")
            if current and current not in values:
                self.filters[name] = ""
                cleared.append(name)
        if cleared:
            self.refilter()
        return cleared

    def set_filter(self, name: str, value: str) -> None:
        if name not in self.filters:
            raise KeyError(f"{self.schema.name} has no filter {name!r}")
        self.filters[name] = value.strip()

    def apply_filters(self) -> None:
        self.filtered = filtering.apply_filters(self.all, self.filters, self.schema)
        self.page = 1

    def reset_filters(self) -> None:
        self.filters = filtering.empty_filters(self.schema)
        self.filtered = list(self.all)
        self.page = 1

    def go_to_page(self, page: int) -> bool:
        """Move to `page`; returns False (and does nothing) when out of range."""
        if page < 1 or page > pagination.page_count(self.total, self.page_size):
            return False
        if self.total == 0:
            return False
        self.page = page
        return True

    def set_page_size(self, page_size: int) -> None:
        self.page_size = pagination.validate_page_size(page_size)
        self.page = 1

    def identity_of(self, record: Record) -> str:
        return filtering.normalize(record.get(self.schema.identity_field))

    def add_record(self, record: Record) -> None:
        """Prepend a new record and show everything from page 1."""
        self.all.insert(0, record)
        self.reset_filters()

    def update_record(self, record: Record) -> bool:
        """Replace by identity in both `all` and `filtered`, keeping list order."""
        key = self.identity_of(record)
        found = False

        def replace(rows: list[Record]) -> list[Record]:
            nonlocal found
            result = []
            for existing in rows:
                if self.identity_of(existing) == key:
                    existing = {**existing, **record}
                    found = True
                result.append(existing)
            return result

        self.all = replace(self.all)
        self.filtered = replace(self.filtered)
        return found

    def remove_record(self, record_id: str) -> bool:
        key = filtering.normalize(record_id)
        before = len(self.all)
        self.all = [r for r in self.all if self.identity_of(r) != key]
        self.filtered = [r for r in self.filtered if self.identity_of(r) != key]
        return len(self.all) != before
