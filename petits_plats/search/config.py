from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchConfig:
    min_query_length: int = 3
    max_options: int = 30
    min_word_length: int = 3
    min_option_prefix: int = 1
    max_selected: int = 20


DEFAULT_SEARCH_CONFIG = SearchConfig()
