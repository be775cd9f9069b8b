import re

from pokecollector.config import settings
from pokecollector.models import CreatureRecord, PokemonDetailData, PokemonSpeciesData, StatValue

_LINE_BREAKS = re.compile(r"[\n\f\r]")


def clean_flavor_text(text: str) -> str:
    return _LINE_BREAKS.sub(" ", text)


def build_creature_record(
    detail: PokemonDetailData,
    species: PokemonSpeciesData,
    language: str | None = None,
) -> CreatureRecord:
    """Joins a pokemon detail and its species into a display record in `language`."""
    language = language or settings.display_language

    flavor_text = species.flavor_text(language)
    description = clean_flavor_text(flavor_text) if flavor_text is not None else settings.description_placeholder

    # Official artwork is higher quality than the default sprite
    image_url = detail.sprites.other.official_artwork.front_default or detail.sprites.front_default

    return CreatureRecord(
        id=detail.id,
        name=species.localized_name(language) or detail.name,
        canonical_name=detail.name,
        types=tuple(slot.type.name for slot in detail.types),
        stats=tuple(StatValue(name=s.stat.name, value=s.base_stat) for s in detail.stats),
        # PokeAPI reports decimetres and hectograms
        height_m=detail.height / 10,
        weight_kg=detail.weight / 10,
        image_url=image_url,
        description=description,
        genus=species.genus(language) or settings.default_genus,
    )
