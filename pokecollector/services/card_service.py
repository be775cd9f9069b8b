import logging
from collections.abc import Iterable
from typing import Any

from fastapi import HTTPException, status

from pokecollector.clients.tcg_client import TCGClient
from pokecollector.config import settings
from pokecollector.errors import CardsNotFoundError
from pokecollector.models import CardSummary, SetBucket, SetInfo, SetSearchResponse
from pokecollector.services.name_resolver import NameResolver

logger = logging.getLogger(__name__)


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _set_id(card: Any) -> str | None:
    """The card's set id, or None when the set reference is missing or malformed."""
    if not isinstance(card, dict):
        return None
    return _text(_as_dict(card.get("set")).get("id"))


def _build_set_info(set_id: str, raw_set: dict[str, Any]) -> SetInfo:
    """Set metadata with every unusable field replaced by its default."""
    # The live API nests logo/symbol under "images"
    images = _as_dict(raw_set.get("images"))
    total = raw_set.get("total")
    return SetInfo(
        id=set_id,
        name=_text(raw_set.get("name")) or "",
        series=_text(raw_set.get("series")) or "",
        release_date=_text(raw_set.get("releaseDate")),
        total=total if isinstance(total, int) and not isinstance(total, bool) else None,
        logo=_text(images.get("logo")) or _text(raw_set.get("logo")),
        symbol=_text(images.get("symbol")) or _text(raw_set.get("symbol")),
    )


def _summarize_card(raw_card: dict[str, Any]) -> CardSummary:
    images = _as_dict(raw_card.get("images"))
    return CardSummary(
        name=_text(raw_card.get("name")) or "",
        image_url=_text(images.get("small")) or settings.card_placeholder_image,
        rarity=_text(raw_card.get("rarity")) or settings.default_rarity,
    )


def group_cards_by_set(cards: Iterable[Any]) -> dict[str, SetBucket]:
    """
    Groups a flat card list into per-set buckets in a single stable pass.
    The first card seen for a set supplies the bucket's metadata; buckets keep
    first-seen order and cards keep their relative input order.
    """
    sets: dict[str, SetBucket] = {}
    skipped = 0

    for card in cards:
        set_id = _set_id(card)
        if set_id is None:
            skipped += 1
            continue

        if set_id not in sets:
            sets[set_id] = SetBucket(info=_build_set_info(set_id, card["set"]))
        sets[set_id].cards.append(_summarize_card(card))

    if skipped:
        logger.warning(f"Skipped {skipped} cards without a valid set reference")
    return sets


class CardAggregator:
    def __init__(self, tcg_client: TCGClient):
        self._tcg_client = tcg_client

    async def aggregate(self, resolved_name: str, query: str | None = None) -> dict[str, SetBucket]:
        """
        Fetches all cards for `resolved_name` and groups them by set.
        `query` is the user's original input, used in the not-found message.
        """
        result = await self._tcg_client.search_cards(resolved_name)
        if result.count == 0:
            raise CardsNotFoundError(query or resolved_name)

        sets = group_cards_by_set(result.data)
        logger.info(f"Grouped {len(result.data)} cards for '{resolved_name}' into {len(sets)} sets")
        return sets


class SetFinderService:
    """Search flow: translate the typed name, then collect its cards per set."""

    def __init__(self, resolver: NameResolver, aggregator: CardAggregator):
        self._resolver = resolver
        self._aggregator = aggregator

    async def find_sets(self, query: str) -> SetSearchResponse:
        query = query.strip()
        if not query:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Search term must not be empty.")

        resolved_name = await self._resolver.resolve(query)
        sets = await self._aggregator.aggregate(resolved_name, query=query)

        return SetSearchResponse(
            query=query,
            resolved_name=resolved_name,
            set_count=len(sets),
            sets=list(sets.values()),
        )
