"""Client modules for external API communication."""
from .pokeapi_client import PokeAPIClient
from .tcg_client import TCGClient

__all__ = [
    'PokeAPIClient',
    'TCGClient',
]
