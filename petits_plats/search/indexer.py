from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from ..catalog.data_store import Catalog
from ..catalog.models import Recipe
from .tokenizer import DEFAULT_MIN_WORD_LENGTH, normalize, split_words

logger = logging.getLogger(__name__)


class IndexName(str, Enum):
    ingredients = "ingredients"
    appliances = "appliances"
    ustensils = "ustensils"
    title_words = "title_words"
    description_words = "description_words"


class Category(str, Enum):
    """Tag categories a user can filter on."""

    ingredients = "ingredients"
    appliances = "appliances"
    ustensils = "ustensils"

    @property
    def index(self) -> IndexName:
        return IndexName(self.value)


# Indexes consulted by the free-text search box.
FREE_TEXT_INDEXES = (IndexName.ingredients, IndexName.title_words, IndexName.description_words)

InvertedIndex = Mapping[str, tuple[int, ...]]


@dataclass(frozen=True)
class IndexBundle:
    indexes: Mapping[IndexName, InvertedIndex]
    vocabularies: Mapping[IndexName, tuple[str, ...]]

    def postings(self, name: IndexName, token: str) -> tuple[int, ...]:
        return self.indexes[name].get(token, ())


def tokens_for(
    recipe: Recipe,
    name: IndexName,
    min_word_length: int = DEFAULT_MIN_WORD_LENGTH,
) -> list[str]:
    """Return the tokens *recipe* contributes to one index, deduplicated in order."""
    if name == IndexName.ingredients:
        tokens = [normalize(item.ingredient) for item in recipe.ingredients]
    elif name == IndexName.appliances:
        tokens = [normalize(recipe.appliance)]
    elif name == IndexName.ustensils:
        tokens = [normalize(ustensil) for ustensil in recipe.ustensils]
    elif name == IndexName.title_words:
        tokens = split_words(recipe.name, min_word_length)
    else:
        tokens = split_words(recipe.description, min_word_length)
    return [token for token in dict.fromkeys(tokens) if token]


def build_indexes(
    catalog: Catalog,
    min_word_length: int = DEFAULT_MIN_WORD_LENGTH,
) -> IndexBundle:
    """Build one inverted index and vocabulary per IndexName.

    Posting lists and vocabularies follow catalog order, so the same catalog
    always yields identical structures.
    """
    postings: dict[IndexName, dict[str, list[int]]] = {name: {} for name in IndexName}

    for recipe in catalog:
        for name in IndexName:
            index = postings[name]
            for token in tokens_for(recipe, name, min_word_length):
                index.setdefault(token, []).append(recipe.id)

    indexes = {
        name: MappingProxyType({token: tuple(ids) for token, ids in index.items()})
        for name, index in postings.items()
    }
    vocabularies = {name: tuple(index) for name, index in postings.items()}

    logger.info(
        "Indexed %d recipes (%s)",
        len(catalog),
        ", ".join(f"{name.value}={len(vocabularies[name])}" for name in IndexName),
    )
    return IndexBundle(
        indexes=MappingProxyType(indexes),
        vocabularies=MappingProxyType(vocabularies),
    )
