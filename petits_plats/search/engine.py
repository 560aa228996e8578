from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from .config import DEFAULT_SEARCH_CONFIG, SearchConfig
from .index_store import SearchIndex
from .indexer import FREE_TEXT_INDEXES, Category, tokens_for
from .models import FilterResult, FilterState
from .sets import intersection, union
from .tokenizer import normalize

logger = logging.getLogger(__name__)


class SelectionLimitError(ValueError):
    """Raised when a category already holds the maximum number of selected tags."""


class FilterEngine:
    """Selected tags and the free-text query of one browsing session.

    An empty selection or a too-short query leaves its factor unconstrained,
    i.e. it yields every catalog id rather than none.
    """

    def __init__(
        self,
        search_index: SearchIndex,
        config: SearchConfig = DEFAULT_SEARCH_CONFIG,
        selected: Mapping[Category | str, Iterable[str]] | None = None,
        query: str = "",
    ) -> None:
        self.index = search_index
        self.config = config
        self.query = query
        self._selected: dict[Category, list[str]] = {category: [] for category in Category}
        for category, tokens in (selected or {}).items():
            for token in tokens:
                self._add(Category(category), token)

    @classmethod
    def from_state(
        cls,
        search_index: SearchIndex,
        state: FilterState,
        config: SearchConfig = DEFAULT_SEARCH_CONFIG,
    ) -> FilterEngine:
        return cls(search_index, config, selected=state.selected, query=state.query)

    def to_state(self) -> FilterState:
        return FilterState(query=self.query, selected=self.selected)

    @property
    def selected(self) -> dict[Category, list[str]]:
        return {category: list(tokens) for category, tokens in self._selected.items()}

    def _add(self, category: Category, token: str) -> bool:
        token = normalize(token)
        tokens = self._selected[category]
        if not token or token in tokens:
            return False
        if len(tokens) >= self.config.max_selected:
            raise SelectionLimitError(
                f"At most {self.config.max_selected} {category.value} tags can be selected"
            )
        tokens.append(token)
        return True

    # ── Set computations ────────────────────────────────────────────────

    def _all_ids(self) -> list[int]:
        return list(self.index.all_ids)

    def _is_unconstrained(self, ids: Sequence[int]) -> bool:
        all_ids = self.index.all_ids
        return len(ids) == len(all_ids) and set(ids) == set(all_ids)

    def filter_by_category(self, category: Category | str) -> list[int]:
        """Ids of recipes carrying every selected tag of *category*.

        Order follows the first selected tag's posting list.
        """
        category = Category(category)
        tokens = self._selected[category]
        if not tokens:
            return self._all_ids()
        return intersection([self.index.postings(category.index, token) for token in tokens])

    def match_free_text(self, query: str) -> dict[str, list[int]]:
        """Ids matched by *query* through each free-text index, keyed by index name."""
        query = normalize(query)
        return {name.value: self.index.match_prefix(name, query) for name in FREE_TEXT_INDEXES}

    def search_free_text(self, query: str) -> list[int]:
        """Ids of recipes whose ingredients, title or description complete *query*."""
        if len(normalize(query)) < self.config.min_query_length:
            return self._all_ids()
        return union(self.match_free_text(query).values())

    def current_visible_ids(self) -> list[int]:
        factors = [self.filter_by_category(category) for category in Category]
        factors.append(self.search_free_text(self.query))
        return intersection(factors)

    def _offered_tokens(self, category: Category, visible_ids: Sequence[int]) -> Iterable[str]:
        selected = self._selected[category]
        if self._is_unconstrained(visible_ids):
            candidates: Iterable[str] = self.index.vocabulary(category.index)
        else:
            catalog = self.index.catalog
            # Ids outside the catalog contribute nothing.
            candidates = (
                token
                for recipe_id in visible_ids
                if recipe_id in catalog
                for token in tokens_for(catalog.by_id[recipe_id], category.index)
            )
        seen: set[str] = set()
        for token in candidates:
            if token not in seen and token not in selected:
                seen.add(token)
                yield token

    def remaining_options(
        self, category: Category | str, visible_ids: Sequence[int] | None = None
    ) -> list[str]:
        """Tags of *category* still worth offering for *visible_ids*, never already selected."""
        category = Category(category)
        if visible_ids is None:
            visible_ids = self.current_visible_ids()
        options: list[str] = []
        for token in self._offered_tokens(category, visible_ids):
            if len(options) >= self.config.max_options:
                break
            options.append(token)
        return options

    def snapshot(self) -> FilterResult:
        visible_ids = self.current_visible_ids()
        return FilterResult(
            query=self.query,
            selected=self.selected,
            visible_ids=visible_ids,
            options={
                category: self.remaining_options(category, visible_ids) for category in Category
            },
        )

    # ── State changes ───────────────────────────────────────────────────

    def select_tag(self, category: Category | str, token: str) -> FilterResult:
        category = Category(category)
        if self._add(category, token):
            logger.debug("Selected %s tag %r", category.value, token)
        return self.snapshot()

    def deselect_tag(self, category: Category | str, token: str) -> FilterResult:
        category = Category(category)
        token = normalize(token)
        tokens = self._selected[category]
        if token in tokens:
            tokens.remove(token)
            logger.debug("Deselected %s tag %r", category.value, token)
        return self.snapshot()

    def set_query(self, query: str) -> FilterResult:
        self.query = query
        logger.debug("Free-text query set to %r", query)
        return self.snapshot()

    def clear(self) -> FilterResult:
        for tokens in self._selected.values():
            tokens.clear()
        self.query = ""
        return self.snapshot()

    # ── Autocomplete ────────────────────────────────────────────────────

    def suggest_options(self, category: Category | str, text: str = "") -> list[str]:
        """Dropdown suggestions for what the user typed in a tag filter's input."""
        category = Category(category)
        text = normalize(text)
        visible_ids = self.current_visible_ids()
        if len(text) < self.config.min_option_prefix:
            return self.remaining_options(category, visible_ids)
        offered = set(self._offered_tokens(category, visible_ids))
        matches = [token for token in self.index.complete(category.index, text) if token in offered]
        return union([matches])[: self.config.max_options]

    def suggest_query(self, query: str) -> list[str]:
        """Completions offered under the search box, empty below the query threshold."""
        query = normalize(query)
        if len(query) < self.config.min_query_length:
            return []
        completions = union(self.index.complete(name, query) for name in FREE_TEXT_INDEXES)
        return completions[: self.config.max_options]
