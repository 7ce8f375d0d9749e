from __future__ import annotations


class PlaylistError(Exception):
    """Base class for failures that abort a playlist generation."""


class InvalidWeights(PlaylistError, ValueError):
    """Weights are empty, negative, non-finite or all zero."""


class NoAgedSongs(PlaylistError):
    """No song in the catalog has ever been played, so there is no fallback age."""


class EmptyCatalog(PlaylistError):
    """Nothing left to pick from after filtering."""


class CatalogError(PlaylistError):
    """The catalog export could not be read."""
