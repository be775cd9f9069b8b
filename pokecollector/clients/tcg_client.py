from pydantic import ValidationError
import httpx
import logging

from pokecollector.config import settings
from pokecollector.errors import APIClientError, ParseError, RateLimitError
from pokecollector.models import TCGSearchResult

logger = logging.getLogger(__name__)

CARD_FIELDS = "id,name,set,images,rarity"


class TCGClient:
    SERVICE_NAME = "Pokemon TCG API"

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
    ):
        headers = {}
        api_key = api_key or settings.tcg_api_key
        if api_key:
            headers["X-Api-Key"] = api_key
        self.client = httpx.AsyncClient(
            base_url=base_url or settings.tcg_api_base_url,
            headers=headers,
            timeout=timeout or settings.http_timeout,
        )

    async def search_cards(self, name: str, page_size: int | None = None) -> TCGSearchResult:
        """Searches cards whose name starts with `name`, newest sets first."""
        params = {
            "q": f'name:"{name}*"',
            "orderBy": "-set.releaseDate",
            "pageSize": page_size or settings.tcg_page_size,
            "select": CARD_FIELDS,
        }
        logger.info(f"Searching cards for: {name}")

        try:
            response = await self.client.get("/cards", params=params)
            response.raise_for_status()
            return TCGSearchResult.model_validate(response.json())

        except httpx.HTTPStatusError as e:
            detail = f"Card API failed with status {e.response.status_code}."
            logger.error(f"Card API error: {detail}")
            if e.response.status_code == 429:
                raise RateLimitError(self.SERVICE_NAME)
            raise APIClientError(detail=detail)

        except httpx.RequestError as e:
            logger.error(f"Card API network error: {str(e)}")
            raise APIClientError(detail=f"Card API network error: {str(e)}")

        except (ValueError, ValidationError):
            logger.error("Card API response parsing error.")
            raise ParseError(self.SERVICE_NAME)

    async def close(self):
        """Close the HTTP connection pool (call on app shutdown)."""
        await self.client.aclose()
