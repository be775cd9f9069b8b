import asyncio
import logging
from dataclasses import dataclass, field

from pydantic import ValidationError

from pokecollector.clients.pokeapi_client import PokeAPIClient
from pokecollector.config import settings
from pokecollector.errors import BatchInProgressError, CatalogLoadError, CreatureNotFoundError, ParseError
from pokecollector.models import CreatureRecord, TypeLabel
from pokecollector.services.normalization import build_creature_record

logger = logging.getLogger(__name__)

# German display labels for the filter chips
TYPE_LABELS = {
    "normal": "Normal",
    "fire": "Feuer",
    "water": "Wasser",
    "grass": "Pflanze",
    "electric": "Elektro",
    "ice": "Eis",
    "fighting": "Kampf",
    "poison": "Gift",
    "ground": "Boden",
    "flying": "Flug",
    "psychic": "Psycho",
    "bug": "Käfer",
    "rock": "Gestein",
    "ghost": "Geist",
    "dragon": "Drache",
    "steel": "Stahl",
    "dark": "Unlicht",
    "fairy": "Fee",
}


def type_labels() -> list[TypeLabel]:
    return [TypeLabel(key=key, label=label) for key, label in TYPE_LABELS.items()]


@dataclass
class CatalogState:
    """Catalog of one session: everything loaded so far plus the paging cursor."""

    all_loaded: list[CreatureRecord] = field(default_factory=list)
    next_offset: int = 0
    is_loading: bool = False

    @property
    def loaded_count(self) -> int:
        return len(self.all_loaded)

    def append_batch(self, records: list[CreatureRecord], page_size: int) -> None:
        self.all_loaded.extend(records)
        self.next_offset += page_size

    def search(self, term: str) -> list[CreatureRecord]:
        """Matches localized or canonical name by substring, or the id exactly."""
        term = term.strip().lower()
        if not term:
            return list(self.all_loaded)
        return [
            record for record in self.all_loaded
            if term in record.name.lower()
            or term in record.canonical_name.lower()
            or str(record.id) == term
        ]

    def filter_by_type(self, type_key: str | None) -> list[CreatureRecord]:
        if not type_key:
            return list(self.all_loaded)
        return [record for record in self.all_loaded if type_key in record.types]

    def get(self, creature_id: int) -> CreatureRecord:
        for record in self.all_loaded:
            if record.id == creature_id:
                return record
        raise CreatureNotFoundError(creature_id)


class CatalogLoader:
    def __init__(self, poke_client: PokeAPIClient, language: str | None = None):
        self._poke_client = poke_client
        self._language = language or settings.display_language

    async def load_batch(self, offset: int, limit: int) -> list[CreatureRecord]:
        """
        Loads one index page and joins detail + species for every entry.
        Entries are fetched concurrently; a single failure fails the whole batch.
        """
        page = await self._poke_client.get_pokemon_page(offset=offset, limit=limit)
        logger.info(f"Loading {len(page.results)} Pokemon from offset {offset}")

        tasks = [asyncio.ensure_future(self._load_entry(entry.url)) for entry in page.results]
        try:
            # gather keeps results in page order regardless of completion order
            records = await asyncio.gather(*tasks)
        except BaseException:
            # A failed batch leaves no requests in flight behind it
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return list(records)

    async def _load_entry(self, url: str) -> CreatureRecord:
        detail = await self._poke_client.get_pokemon(url)
        species = await self._poke_client.get_species(detail.species.url)
        try:
            return build_creature_record(detail, species, self._language)
        except ValidationError as e:
            logger.error(f"Pokemon at {url} cannot be normalized: {e.error_count()} errors")
            raise ParseError(PokeAPIClient.SERVICE_NAME)

    async def load_next_batch(self, state: CatalogState, page_size: int | None = None) -> list[CreatureRecord]:
        """Loads the next page into `state`. Nothing is appended unless the whole batch succeeds."""
        if state.is_loading:
            raise BatchInProgressError()

        page_size = page_size or settings.catalog_page_size
        state.is_loading = True
        try:
            records = await self.load_batch(state.next_offset, page_size)
        except Exception as e:
            logger.error(f"Failed to load batch at offset {state.next_offset}: {e}")
            raise CatalogLoadError() from e
        finally:
            state.is_loading = False

        state.append_batch(records, page_size)
        logger.info(f"Catalog now holds {state.loaded_count} Pokemon")
        return records
