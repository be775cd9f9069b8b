import logging
import re

from pokecollector.clients.pokeapi_client import PokeAPIClient
from pokecollector.config import settings

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def to_slug(text: str) -> str:
    """'  Mr  Mime ' -> 'mr-mime'"""
    return _WHITESPACE.sub("-", text.strip().lower())


class NameResolver:
    """Translates a user-typed name into the name the card API understands."""

    def __init__(self, poke_client: PokeAPIClient, canonical_language: str | None = None):
        self._poke_client = poke_client
        self._language = canonical_language or settings.canonical_language

    async def resolve(self, text: str) -> str:
        """
        Returns the canonical name for `text`, or `text` itself when it cannot be resolved.
        The input may already be canonical, so any failure degrades to the original input.
        """
        slug = to_slug(text)
        try:
            species = await self._poke_client.get_species_by_slug(slug)
        except Exception as e:
            logger.warning(f"Name lookup failed for '{slug}', using input as-is: {e}")
            return text

        canonical = species.localized_name(self._language)
        if canonical is None:
            logger.warning(f"No '{self._language}' name for '{slug}', using input as-is")
            return text
        return canonical
