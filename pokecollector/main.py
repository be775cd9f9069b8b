import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Query

from pokecollector.config import settings
from pokecollector.dependencies import close_clients, get_catalog_loader, get_catalog_state, get_set_finder
from pokecollector.models import BatchResponse, CreatureRecord, SetSearchResponse, TypeLabel
from pokecollector.services import CatalogLoader, CatalogState, SetFinderService
from pokecollector.services.catalog_service import type_labels

logging.basicConfig(level=settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Owns the session catalog and closes the upstream HTTP clients on shutdown."""
    app.state.catalog = CatalogState()
    yield
    await close_clients()


app = FastAPI(
    title=settings.app_name,
    description="Pokedex catalog and trading card set finder backed by PokeAPI and the Pokemon TCG API.",
    lifespan=lifespan,
)


# --- Catalog ---

@app.post(
    "/catalog/batches",
    response_model=BatchResponse,
    summary="Loads the next page of Pokemon into the catalog",
)
async def load_next_batch(
    loader: CatalogLoader = Depends(get_catalog_loader),
    state: CatalogState = Depends(get_catalog_state),
):
    """All-or-nothing: if any Pokemon of the page fails to load, nothing is added (503)."""
    records = await loader.load_next_batch(state)
    return BatchResponse(
        pokemon=records,
        next_offset=state.next_offset,
        loaded_count=state.loaded_count,
    )


@app.get("/catalog", response_model=list[CreatureRecord], summary="Lists loaded Pokemon")
async def list_catalog(
    type: str | None = Query(default=None, description="Only Pokemon of this type, e.g. 'fire'"),
    state: CatalogState = Depends(get_catalog_state),
):
    return state.filter_by_type(type)


@app.get("/catalog/search", response_model=list[CreatureRecord], summary="Searches loaded Pokemon")
async def search_catalog(
    q: str = Query(default=""),
    state: CatalogState = Depends(get_catalog_state),
):
    """Only searches what has been loaded so far (localized name, English name or number)."""
    return state.search(q)


@app.get("/catalog/types", response_model=list[TypeLabel], summary="Type filter labels")
async def list_types():
    return type_labels()


@app.get("/catalog/{creature_id}", response_model=CreatureRecord, summary="Returns one loaded Pokemon")
async def get_creature(
    creature_id: int,
    state: CatalogState = Depends(get_catalog_state),
):
    return state.get(creature_id)


# --- Trading cards ---

@app.get(
    "/tcg/sets",
    response_model=SetSearchResponse,
    summary="Finds every card set containing the given Pokemon",
)
async def find_sets(
    search: str = Query(..., min_length=1, description="Pokemon name, German or English"),
    finder: SetFinderService = Depends(get_set_finder),
):
    """
    Translates the name to English when possible, then groups the matching cards by set.
    Sets are returned newest first. Upstream errors (404, rate limit, 503) propagate as HTTPExceptions.
    """
    return await finder.find_sets(search)
