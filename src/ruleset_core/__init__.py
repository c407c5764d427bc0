"""Ruleset core - modifier stacking and degree-of-success resolution."""

__version__ = "0.1.0"
