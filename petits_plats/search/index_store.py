from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from ..catalog.data_store import Catalog, get_catalog
from .config import DEFAULT_SEARCH_CONFIG, SearchConfig
from .indexer import IndexBundle, IndexName, build_indexes
from .sets import union
from .trie import Trie

# Tag vocabularies hold multi-word phrases; word indexes hold single words.
_PHRASE_INDEXES = (IndexName.ingredients, IndexName.appliances, IndexName.ustensils)

_search_index: SearchIndex | None = None


class SearchIndex:
    """Catalog plus its inverted indexes and one autocomplete trie per index.

    Built once, then shared read-only by every FilterEngine.
    """

    def __init__(
        self, catalog: Catalog, bundle: IndexBundle, tries: Mapping[IndexName, Trie]
    ) -> None:
        self.catalog = catalog
        self.bundle = bundle
        self.tries = MappingProxyType(dict(tries))

    @classmethod
    def build(cls, catalog: Catalog, config: SearchConfig = DEFAULT_SEARCH_CONFIG) -> SearchIndex:
        bundle = build_indexes(catalog, config.min_word_length)
        tries: dict[IndexName, Trie] = {}
        for name in IndexName:
            vocabulary = bundle.vocabularies[name]
            if name in _PHRASE_INDEXES:
                tries[name] = Trie.from_phrases(vocabulary, config.min_word_length)
            else:
                tries[name] = Trie.from_words(vocabulary, config.min_word_length)
        return cls(catalog, bundle, tries)

    @property
    def all_ids(self) -> tuple[int, ...]:
        return self.catalog.all_ids

    def vocabulary(self, name: IndexName) -> tuple[str, ...]:
        return self.bundle.vocabularies[name]

    def postings(self, name: IndexName, token: str) -> tuple[int, ...]:
        return self.bundle.postings(name, token)

    def complete(self, name: IndexName, prefix: str) -> list[str]:
        return self.tries[name].complete(prefix)

    def lookup(self, name: IndexName, completions: Iterable[str]) -> list[int]:
        """Union of the posting lists of *completions*; unknown tokens add nothing."""
        return union(self.postings(name, token) for token in completions)

    def match_prefix(self, name: IndexName, prefix: str) -> list[int]:
        """Ids of recipes holding a token of index *name* that *prefix* completes to."""
        return self.lookup(name, self.complete(name, prefix))


def get_search_index() -> SearchIndex:
    """Return the process-wide SearchIndex, building it on first call."""
    global _search_index
    if _search_index is None:
        _search_index = SearchIndex.build(get_catalog())
    return _search_index
