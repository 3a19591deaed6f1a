"""
Core components for Veilleur.

Modules:
- units: Build units, emissions and source extraction
- module_executor: In-memory module execution
- seed: One-shot seed initialization
- change_detector: Fingerprint-based change detection
- debounce: Debounced, exclusive run scheduling
- test_runner: In-memory LaborantTest runner
- orchestrator: Emission handling
"""

from veilleur.core.change_detector import ChangeDetector
from veilleur.core.debounce import DebounceScheduler
from veilleur.core.module_executor import (
    ExecutionContext,
    GlobalTable,
    ModuleExecutor,
    shared_globals,
    wrap,
)
from veilleur.core.orchestrator import CoordinatorState, RunCoordinator
from veilleur.core.pipeline import BuildPipeline, InMemoryPipeline
from veilleur.core.seed import SeedGate, SeedInitializer, SeedState
from veilleur.core.test_runner import MemoryFileLoader, RunSummary, TestRunner
from veilleur.core.units import BuildUnit, Emission, extract_sources

__all__ = [
    "BuildPipeline",
    "BuildUnit",
    "ChangeDetector",
    "CoordinatorState",
    "DebounceScheduler",
    "Emission",
    "ExecutionContext",
    "GlobalTable",
    "InMemoryPipeline",
    "MemoryFileLoader",
    "ModuleExecutor",
    "RunCoordinator",
    "RunSummary",
    "SeedGate",
    "SeedInitializer",
    "SeedState",
    "TestRunner",
    "extract_sources",
    "shared_globals",
    "wrap",
]
