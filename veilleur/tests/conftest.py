"""
Test fixtures and configuration.
"""

import pytest
from rich.console import Console

from shared.reporter.system_reporter import SystemReporter
from veilleur.config.settings import Settings
from veilleur.core.module_executor import GlobalTable
from veilleur.core.orchestrator import RunCoordinator
from veilleur.core.pipeline import InMemoryPipeline
from veilleur.core.test_runner import RunSummary
from veilleur.core.units import BuildUnit, Emission


class RecordingRunner:
    """Stand-in for TestRunner recording what each run received."""

    def __init__(self, log):
        self.log = log
        self.files = []
        self.global_names = []

    def register_global(self, name):
        self.global_names.append(name)

    def add_file(self, path, source):
        self.files.append((path, source))

    async def run(self, on_complete=None):
        self.log.append(self)
        summary = RunSummary()
        if on_complete is not None:
            on_complete(summary)
        return summary


@pytest.fixture
def reporter() -> SystemReporter:
    """Reporter that only shows errors."""
    return SystemReporter(name="veilleur_tests", verbose=0)


@pytest.fixture
def quiet_console() -> Console:
    """Rich console discarding output."""
    return Console(quiet=True)


@pytest.fixture
def globals_table() -> GlobalTable:
    """Fresh global table (never the process-wide one)."""
    return GlobalTable()


@pytest.fixture
def runs() -> list:
    """Runners that were run, in order."""
    return []


@pytest.fixture
def runner_factory(runs):
    """Factory building RecordingRunner instances."""
    return lambda: RecordingRunner(runs)


@pytest.fixture
def make_settings():
    """Build Settings with quiet logging and explicit overrides."""

    def factory(**overrides) -> Settings:
        values = {"log_level": "warning", "verbose": 0}
        values.update(overrides)
        return Settings(**values)

    return factory


@pytest.fixture
def compilation():
    """
    Build an emission with two test units, a.test and b.test.

    Assets "a" and "b" evaluate to 1 and 2. Extra units and assets are
    appended after them.
    """

    def factory(a_hash="1", b_hash="1", extra_units=(), extra_assets=None):
        units = [
            BuildUnit("a.test", a_hash, ("a",)),
            BuildUnit("b.test", b_hash, ("b",)),
            *extra_units,
        ]
        assets = {"a": "1", "b": "2"}
        assets.update(extra_assets or {})
        return Emission(units=units, assets=assets)

    return factory


@pytest.fixture
def make_coordinator(make_settings, reporter, globals_table, runner_factory):
    """Build a RunCoordinator applied to a fresh InMemoryPipeline."""

    def factory(runner_factory=runner_factory, **overrides):
        coordinator = RunCoordinator(
            make_settings(**overrides),
            reporter=reporter,
            globals_table=globals_table,
            runner_factory=runner_factory,
        )
        pipeline = InMemoryPipeline("dist")
        coordinator.apply(pipeline)
        return coordinator, pipeline

    return factory
