from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .models import Recipe

logger = logging.getLogger(__name__)

_catalog: Catalog | None = None


class CatalogError(Exception):
    """Raised when the recipe source cannot be turned into a Catalog."""


class Catalog:
    """Read-only table of recipes keyed by id, remembering load order."""

    def __init__(self, recipes: Iterable[Recipe]) -> None:
        by_id: dict[int, Recipe] = {}
        for recipe in recipes:
            if recipe.id in by_id:
                raise CatalogError(f"Duplicate recipe id {recipe.id}")
            by_id[recipe.id] = recipe
        self._by_id = MappingProxyType(by_id)
        self._all_ids = tuple(by_id)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> Catalog:
        """Validate raw recipe mappings. Any bad record fails the whole load."""
        recipes: list[Recipe] = []
        for position, record in enumerate(records):
            try:
                recipes.append(Recipe.model_validate(record))
            except ValidationError as exc:
                raise CatalogError(f"Invalid recipe at position {position}: {exc}") from exc
        return cls(recipes)

    @property
    def by_id(self) -> Mapping[int, Recipe]:
        return self._by_id

    @property
    def all_ids(self) -> tuple[int, ...]:
        return self._all_ids

    def get(self, recipe_id: int) -> Recipe | None:
        return self._by_id.get(recipe_id)

    def __contains__(self, recipe_id: object) -> bool:
        return recipe_id in self._by_id

    def __iter__(self) -> Iterator[Recipe]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._all_ids)


def load_catalog(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> Catalog:
    """Read the recipe JSON file named by *config* and build a Catalog.

    The file holds either a list of recipe objects or an object with a
    ``recipes`` list.
    """
    try:
        raw = json.loads(config.recipes_path.read_text(encoding=config.encoding))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read recipes from %s", config.recipes_path)
        raise CatalogError(f"Cannot read recipes from {config.recipes_path}") from exc

    records = raw.get("recipes") if isinstance(raw, dict) else raw
    if not isinstance(records, list):
        raise CatalogError(f"{config.recipes_path} does not contain a list of recipes")

    catalog = Catalog.from_records(records)
    logger.info("Loaded %d recipes from %s", len(catalog), config.recipes_path)
    return catalog


def get_catalog() -> Catalog:
    """Return the process-wide Catalog, loading it on first call."""
    global _catalog
    if _catalog is None:
        _catalog = load_catalog()
    return _catalog
