"""Service layer: name resolution, catalog loading and card grouping."""
from .card_service import CardAggregator, SetFinderService, group_cards_by_set
from .catalog_service import CatalogLoader, CatalogState
from .name_resolver import NameResolver

__all__ = [
    'CardAggregator',
    'CatalogLoader',
    'CatalogState',
    'NameResolver',
    'SetFinderService',
    'group_cards_by_set',
]
