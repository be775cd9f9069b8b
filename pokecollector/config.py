from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment (POKECOLLECTOR_*)."""

    model_config = SettingsConfigDict(env_prefix="POKECOLLECTOR_", env_file=".env")

    app_name: str = "PokéCollector API"
    log_level: str = "INFO"

    pokeapi_base_url: str = "https://pokeapi.co/api/v2"
    tcg_api_base_url: str = "https://api.pokemontcg.io/v2"
    tcg_api_key: str | None = None
    http_timeout: float = 10.0

    # Names shown to the user vs. names the card API understands
    display_language: str = "de"
    canonical_language: str = "en"

    catalog_page_size: int = 24
    # Max page size of the card API, avoids server-side truncation
    tcg_page_size: int = 250

    description_placeholder: str = "Keine Beschreibung verfügbar."
    default_genus: str = "Pokémon"
    card_placeholder_image: str = "https://images.pokemontcg.io/placeholder.png"
    default_rarity: str = "Common"


settings = Settings()
