from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

SET_DETAILS_URL = "https://pkmncards.com/set/{set_id}/"


# --- Raw PokeAPI shapes (Internal Contract) ---
# Every field the upstream may omit has a default so lookups never KeyError.

class NamedResource(BaseModel):
    name: str = ""
    url: str = ""


class LocalizedName(BaseModel):
    name: str
    language: NamedResource


class FlavorTextEntry(BaseModel):
    flavor_text: str
    language: NamedResource


class GenusEntry(BaseModel):
    genus: str
    language: NamedResource


class PokemonSpeciesData(BaseModel):
    name: str = ""
    names: list[LocalizedName] = Field(default_factory=list)
    flavor_text_entries: list[FlavorTextEntry] = Field(default_factory=list)
    genera: list[GenusEntry] = Field(default_factory=list)

    def localized_name(self, language: str) -> str | None:
        return next((n.name for n in self.names if n.language.name == language), None)

    def flavor_text(self, language: str) -> str | None:
        return next(
            (e.flavor_text for e in self.flavor_text_entries if e.language.name == language),
            None,
        )

    def genus(self, language: str) -> str | None:
        return next((g.genus for g in self.genera if g.language.name == language), None)


class TypeSlot(BaseModel):
    type: NamedResource


class StatSlot(BaseModel):
    base_stat: int
    stat: NamedResource


class ArtworkSprite(BaseModel):
    front_default: str | None = None


class OtherSprites(BaseModel):
    official_artwork: ArtworkSprite = Field(default_factory=ArtworkSprite, alias="official-artwork")


class Sprites(BaseModel):
    front_default: str | None = None
    other: OtherSprites = Field(default_factory=OtherSprites)


class PokemonDetailData(BaseModel):
    id: int
    name: str
    types: list[TypeSlot] = Field(default_factory=list)
    stats: list[StatSlot] = Field(default_factory=list)
    height: int = 0
    weight: int = 0
    sprites: Sprites = Field(default_factory=Sprites)
    species: NamedResource


class PokemonPage(BaseModel):
    count: int = 0
    next: str | None = None
    results: list[NamedResource] = Field(default_factory=list)


# --- Raw Pokemon TCG API shape ---
# Cards stay untyped here: a malformed card must only drop that card,
# not fail validation of the whole page.

class TCGSearchResult(BaseModel):
    count: int = 0
    total_count: int = Field(default=0, alias="totalCount")
    data: list[Any] = Field(default_factory=list)


# --- Normalized records ---

class StatValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: int


class CreatureRecord(BaseModel):
    """A catalog entry joined from the pokemon and pokemon-species resources."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    canonical_name: str
    types: tuple[str, ...] = Field(min_length=1)
    stats: tuple[StatValue, ...]
    height_m: float
    weight_kg: float
    image_url: str | None
    description: str
    genus: str

    @property
    def primary_type(self) -> str:
        return self.types[0]


class CardSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    image_url: str
    rarity: str


class SetInfo(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    name: str = ""
    series: str = ""
    release_date: str | None = Field(default=None, alias="releaseDate")
    total: int | None = None
    logo: str | None = None
    symbol: str | None = None

    @computed_field
    @property
    def details_url(self) -> str:
        return SET_DETAILS_URL.format(set_id=self.id)


class SetBucket(BaseModel):
    info: SetInfo
    cards: list[CardSummary] = Field(default_factory=list)

    @computed_field
    @property
    def card_count(self) -> int:
        return len(self.cards)


# --- Public API responses ---

class BatchResponse(BaseModel):
    pokemon: list[CreatureRecord]
    next_offset: int
    loaded_count: int


class TypeLabel(BaseModel):
    key: str
    label: str


class SetSearchResponse(BaseModel):
    query: str
    resolved_name: str
    set_count: int
    sets: list[SetBucket]
