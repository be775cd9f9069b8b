"""PokéCollector: Pokedex catalog and trading card set finder."""
