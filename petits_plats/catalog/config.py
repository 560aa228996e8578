from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_BUNDLED_RECIPES = Path(__file__).resolve().parent.parent / "data" / "recipes.json"


def _recipes_path_from_env() -> Path:
    # An empty RECIPES_PATH counts as unset.
    return Path(os.getenv("RECIPES_PATH") or _BUNDLED_RECIPES)


@dataclass(frozen=True)
class CatalogConfig:
    recipes_path: Path = field(default_factory=_recipes_path_from_env)
    encoding: str = "utf-8"


DEFAULT_CATALOG_CONFIG = CatalogConfig()
