"""Exceptions raised by traintable."""


class TrainTableError(Exception):
    """Base class for all traintable errors."""


class FeedLoadError(TrainTableError):
    """The feed could not be fetched, opened or decoded."""


class EngineNotLoadedError(TrainTableError):
    """A query was made before a feed was successfully loaded."""
