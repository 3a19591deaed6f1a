"""
Veilleur - incremental test re-execution for build pipelines.

Watches build emissions, detects changed test units and reruns only
those, debounced and one run at a time.
"""

from veilleur.core import (
    BuildUnit,
    Emission,
    InMemoryPipeline,
    RunCoordinator,
    TestRunner,
)
from veilleur.core.exceptions import (
    AssetNotFoundError,
    SeedError,
    SeedNotFoundError,
    VeilleurError,
)

__version__ = "0.1.0"

__all__ = [
    "AssetNotFoundError",
    "BuildUnit",
    "Emission",
    "InMemoryPipeline",
    "RunCoordinator",
    "SeedError",
    "SeedNotFoundError",
    "TestRunner",
    "VeilleurError",
]
