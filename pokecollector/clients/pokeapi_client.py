import httpx
import logging
from urllib.parse import quote
from typing import Any
from pydantic import ValidationError

from pokecollector.config import settings
from pokecollector.errors import APIClientError, NotFoundError, ParseError, RateLimitError
from pokecollector.models import PokemonDetailData, PokemonPage, PokemonSpeciesData

logger = logging.getLogger(__name__)


class PokeAPIClient:
    SERVICE_NAME = "PokeAPI"

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.client = httpx.AsyncClient(
            base_url=base_url or settings.pokeapi_base_url,
            timeout=timeout or settings.http_timeout,
        )

    async def _get_json(self, url: str, params: dict[str, Any] | None = None) -> dict:
        """Performs a single GET and maps upstream failures to our error taxonomy."""
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()  # Raises for 4xx/5xx status codes
            return response.json()

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(f"PokeAPI error {status_code} for {url}")
            if status_code == 404:
                raise NotFoundError(detail=f"PokeAPI resource '{url}' not found.")
            if status_code == 429:
                raise RateLimitError(self.SERVICE_NAME)
            raise APIClientError(detail=f"PokeAPI failed with status {status_code}")
        except httpx.RequestError as e:
            logger.error(f"PokeAPI network error: {str(e)}")
            raise APIClientError(detail=f"PokeAPI network error: {str(e)}")
        except ValueError:
            logger.error(f"PokeAPI returned invalid JSON for {url}")
            raise ParseError(self.SERVICE_NAME)

    async def get_pokemon_page(self, offset: int, limit: int) -> PokemonPage:
        """Fetches one page of the pokemon index."""
        data = await self._get_json("/pokemon", params={"limit": limit, "offset": offset})
        return self._validate(PokemonPage, data)

    async def get_pokemon(self, url: str) -> PokemonDetailData:
        """Fetches a pokemon detail record by its absolute resource URL."""
        data = await self._get_json(url)
        return self._validate(PokemonDetailData, data)

    async def get_species(self, url: str) -> PokemonSpeciesData:
        """Fetches a species record by its absolute resource URL."""
        data = await self._get_json(url)
        return self._validate(PokemonSpeciesData, data)

    async def get_species_by_slug(self, slug: str) -> PokemonSpeciesData:
        return await self.get_species(f"/pokemon-species/{quote(slug, safe='')}")

    def _validate(self, model, data):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"PokeAPI response did not match {model.__name__}: {e.error_count()} errors")
            raise ParseError(self.SERVICE_NAME)

    async def close(self):
        """Close the HTTP connection pool (call on app shutdown)."""
        await self.client.aclose()
