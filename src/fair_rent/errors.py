"""Exception types raised outside the pricing engine."""

from __future__ import annotations


class FairRentError(Exception):
    """Base class for fair_rent errors."""


class InvalidPropertyError(FairRentError, ValueError):
    """A property document failed intake checks."""

    def __init__(self, problems: list[str], property_id: str | None = None) -> None:
        self.problems = list(problems)
        self.property_id = property_id
        prefix = f"{property_id}: " if property_id else ""
        super().__init__(prefix + "; ".join(self.problems))


class ConfigError(FairRentError, ValueError):
    """A pricing config section is malformed."""
