"""Public façade for the moodlist.catalog package.

This module exposes the catalog search abstraction and its Spotify Web API
implementation (client-credentials token handling and track search). Callers
should import these symbols from this façade instead of the internal auth or
search modules.
"""

from .auth import SpotifyTokenProvider
from .search import CatalogClient, SpotifyCatalog, track_from_catalog_item

__all__ = [
    "CatalogClient",
    "SpotifyCatalog",
    "SpotifyTokenProvider",
    "track_from_catalog_item",
]
