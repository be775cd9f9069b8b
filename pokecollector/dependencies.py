from fastapi import Depends, Request

from pokecollector.clients import PokeAPIClient
from pokecollector.clients import TCGClient
from pokecollector.services import CardAggregator, CatalogLoader, CatalogState, NameResolver, SetFinderService

_poke_client = None
_tcg_client = None

def get_poke_client() -> PokeAPIClient:
    global _poke_client
    if _poke_client is None:
        _poke_client = PokeAPIClient()
    return _poke_client

def get_tcg_client() -> TCGClient:
    global _tcg_client
    if _tcg_client is None:
        _tcg_client = TCGClient()
    return _tcg_client

async def close_clients():
    global _poke_client, _tcg_client
    for client in (_poke_client, _tcg_client):
        if client is not None:
            await client.close()
    _poke_client = None
    _tcg_client = None

def get_catalog_state(request: Request) -> CatalogState:
    # One catalog per application instance, created in the lifespan
    return request.app.state.catalog

def get_catalog_loader(
    poke_client: PokeAPIClient = Depends(get_poke_client),
) -> CatalogLoader:
    return CatalogLoader(poke_client=poke_client)

def get_set_finder(
    poke_client: PokeAPIClient = Depends(get_poke_client),
    tcg_client: TCGClient = Depends(get_tcg_client),
) -> SetFinderService:
    return SetFinderService(
        resolver=NameResolver(poke_client=poke_client),
        aggregator=CardAggregator(tcg_client=tcg_client),
    )
