from __future__ import annotations

import os

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from pydantic import ValidationError
from starlette.middleware.sessions import SessionMiddleware

from .catalog.models import Recipe
from .search.engine import FilterEngine, SelectionLimitError
from .search.index_store import SearchIndex, get_search_index
from .search.indexer import Category, IndexName
from .search.models import FilterResult, FilterState, SearchRequest, TagRequest

app = FastAPI(title="Les Petits Plats Search API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "petits-plats-secret-change-in-production"),
)

_STATE_KEY = "filter_state"


def get_engine(request: Request) -> FilterEngine:
    """Rebuild the caller's FilterEngine from the state kept in their session."""
    raw_state = request.session.get(_STATE_KEY)
    try:
        state = FilterState.model_validate(raw_state) if raw_state else FilterState()
        return FilterEngine.from_state(get_search_index(), state)
    except (ValidationError, SelectionLimitError):
        return FilterEngine(get_search_index())


def _save(request: Request, engine: FilterEngine) -> None:
    request.session[_STATE_KEY] = engine.to_state().model_dump(mode="json")


# ── Catalog endpoints ────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata(index: SearchIndex = Depends(get_search_index)) -> dict:
    return {
        "recipes": len(index.catalog),
        "vocabularies": {name.value: len(index.vocabulary(name)) for name in IndexName},
    }


@app.get("/recipes", response_model=list[Recipe])
def recipes(engine: FilterEngine = Depends(get_engine)) -> list[Recipe]:
    by_id = engine.index.catalog.by_id
    return [by_id[recipe_id] for recipe_id in engine.current_visible_ids()]


@app.get("/recipes/{recipe_id}", response_model=Recipe)
def recipe(recipe_id: int, index: SearchIndex = Depends(get_search_index)) -> Recipe:
    found = index.catalog.get(recipe_id)
    if found is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return found


# ── Search & filter endpoints ────────────────────────────────────────────


@app.get("/state", response_model=FilterResult)
def state(engine: FilterEngine = Depends(get_engine)) -> FilterResult:
    return engine.snapshot()


@app.post("/search", response_model=FilterResult)
def search(
    body: SearchRequest,
    request: Request,
    engine: FilterEngine = Depends(get_engine),
) -> FilterResult:
    result = engine.set_query(body.query)
    _save(request, engine)
    return result


@app.get("/autocomplete", response_model=list[str])
def autocomplete(
    q: str = Query(default="", max_length=200),
    engine: FilterEngine = Depends(get_engine),
) -> list[str]:
    return engine.suggest_query(q)


@app.post("/filters/{category}", response_model=FilterResult)
def select_tag(
    category: Category,
    body: TagRequest,
    request: Request,
    engine: FilterEngine = Depends(get_engine),
) -> FilterResult:
    try:
        result = engine.select_tag(category, body.token)
    except SelectionLimitError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    _save(request, engine)
    return result


@app.delete("/filters/{category}/{token}", response_model=FilterResult)
def deselect_tag(
    category: Category,
    token: str,
    request: Request,
    engine: FilterEngine = Depends(get_engine),
) -> FilterResult:
    result = engine.deselect_tag(category, token)
    _save(request, engine)
    return result


@app.get("/filters/{category}/options", response_model=list[str])
def filter_options(
    category: Category,
    q: str = Query(default="", max_length=100),
    engine: FilterEngine = Depends(get_engine),
) -> list[str]:
    return engine.suggest_options(category, q)


@app.post("/reset", response_model=FilterResult)
def reset(request: Request, engine: FilterEngine = Depends(get_engine)) -> FilterResult:
    result = engine.clear()
    _save(request, engine)
    return result
