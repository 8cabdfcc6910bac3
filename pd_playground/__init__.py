"""Iterated Prisoner's Dilemma playground."""

__version__ = "0.1.0"
