"""
Veilleur exceptions.
"""

from typing import Sequence


class VeilleurError(Exception):
    """Base exception for Veilleur errors."""

    pass


class AssetNotFoundError(VeilleurError):
    """Raised when an emission has no asset for a unit's output file."""

    def __init__(self, asset: str):
        """
        Initialize AssetNotFoundError.

        Args:
            asset: Asset name that was requested
        """
        super().__init__(f"Asset not found: {asset}")
        self.asset = asset


class SeedError(VeilleurError):
    """Raised when the seed unit cannot be evaluated."""

    def __init__(self, seed_name: str, message: str):
        """
        Initialize SeedError.

        Args:
            seed_name: Name of the configured seed unit
            message: Error message
        """
        super().__init__(message)
        self.seed_name = seed_name


class SeedNotFoundError(SeedError):
    """Raised when no build unit matches the configured seed name."""

    def __init__(self, seed_name: str, available: Sequence[str]):
        """
        Initialize SeedNotFoundError.

        Args:
            seed_name: Name of the requested seed unit
            available: Unit names present in the emission
        """
        self.available = list(available)
        super().__init__(
            seed_name,
            f"Unit {seed_name!r} was not found! "
            f"Available units: {self.available!r}",
        )
