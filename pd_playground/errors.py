"""Exceptions raised by the Prisoner's Dilemma playground."""


class PlaygroundError(Exception):
    """Base class for every error the playground raises."""


class GameConfigError(PlaygroundError, ValueError):
    """Invalid roster or round limit."""


class UnknownStrategyError(PlaygroundError, ValueError):
    """A strategy name that is not in the catalog."""
