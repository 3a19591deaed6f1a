"""
Veilleur orchestrator - reruns changed tests on every build emission.

Coordinates:
- Seed gating (one-shot async initialization)
- Change detection (unit fingerprints)
- Debouncing (one exclusive run per burst of emissions)
- Test execution (fresh in-memory runner per run)
"""

import asyncio
from enum import Enum
from typing import Callable, Dict, Optional

from shared.reporter.emojis import VeilleurEmoji
from shared.reporter.system_reporter import SystemReporter

from veilleur.config.settings import Settings, get_settings
from veilleur.core.change_detector import ChangeDetector
from veilleur.core.debounce import DebounceScheduler
from veilleur.core.exceptions import AssetNotFoundError
from veilleur.core.module_executor import GlobalTable, ModuleExecutor, shared_globals
from veilleur.core.pipeline import BuildPipeline, CompletionCallback
from veilleur.core.seed import SeedGate, SeedInitializer
from veilleur.core.test_runner import MemoryFileLoader, RunSummary, TestRunner
from veilleur.core.units import Emission, extract_sources


class CoordinatorState(Enum):
    """Emission handling state."""

    IDLE = "idle"
    AWAITING_SEED = "awaiting_seed"
    FILTERING = "filtering"
    NO_CHANGES = "no_changes"
    SCHEDULED = "scheduled"


class RunCoordinator:
    """
    Main orchestrator for incremental test re-execution.

    Register on a build pipeline with apply(). Each emission is completed
    immediately when no test unit changed; otherwise its completion is
    deferred until its debounced run finishes or a newer emission
    supersedes it.

    Attributes:
        settings: Active configuration
        state: Last CoordinatorState transition
        runs: Number of test runs started
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        reporter: Optional[SystemReporter] = None,
        executor: Optional[ModuleExecutor] = None,
        globals_table: Optional[GlobalTable] = None,
        runner_factory: Optional[Callable[[], TestRunner]] = None,
    ):
        """
        Initialize coordinator.

        Args:
            settings: Configuration (default: global settings)
            reporter: Optional reporter for logging
            executor: Executor for seed and test sources
            globals_table: Table receiving the seed (default: process table)
            runner_factory: Builds a fresh test runner per run
        """
        self.settings = settings or get_settings()
        self.reporter = reporter or SystemReporter.from_level_name(
            "veilleur",
            self.settings.log_level,
            verbose=self.settings.verbose,
            log_dir=self.settings.log_dir,
        )
        self.executor = executor or ModuleExecutor()
        self.globals_table = (
            globals_table if globals_table is not None else shared_globals
        )
        self.runner_factory = runner_factory or self._default_runner

        self.change_detector = ChangeDetector(self.settings.test_marker, self.reporter)
        self.seed_initializer = SeedInitializer(
            self.executor, self.globals_table, self.reporter
        )
        self.seed_gate = SeedGate(self.settings.seed, self.reporter)
        self.scheduler: DebounceScheduler[Dict[str, str]] = DebounceScheduler(
            self.settings.wait, self._run_tests, self.reporter
        )

        self.output_path = ""
        self.state = CoordinatorState.IDLE
        self.runs = 0

    def apply(self, pipeline: BuildPipeline) -> None:
        """
        Register on a build pipeline's emission events.

        Args:
            pipeline: Pipeline to watch
        """
        self.output_path = pipeline.output_path
        pipeline.on_emit(self.handle_emission)

        self.reporter.info(
            f"{VeilleurEmoji.INFO} Watching emissions "
            f"(wait={self.settings.wait}ms, seed={self.settings.seed!r})",
            context="Veilleur",
        )

    async def handle_emission(
        self, emission: Emission, callback: CompletionCallback
    ) -> None:
        """
        Handle one build emission.

        Returns once the emission is either completed or scheduled;
        `callback` is invoked exactly once in both cases.

        Args:
            emission: Current emission
            callback: Pipeline completion callback for this emission
        """
        self.reporter.debug(
            f"{VeilleurEmoji.EMISSION} Emission with {len(emission.units)} unit(s)",
            context="Veilleur",
        )

        if not self.seed_gate.settled:
            self.state = CoordinatorState.AWAITING_SEED
        gate = self.seed_gate.ensure(lambda: self._initialize_seed(emission))
        await asyncio.shield(gate)

        self.state = CoordinatorState.FILTERING
        changed = self.change_detector.filter_changed(emission.units)
        try:
            sources = extract_sources(self.output_path, emission, changed)
        except AssetNotFoundError as e:
            self.reporter.error(
                f"{VeilleurEmoji.TEST_ERROR} Cannot read changed units: {e}",
                context="Veilleur",
            )
            sources = {}

        if not sources:
            self.state = CoordinatorState.NO_CHANGES
            self.reporter.debug(
                f"{VeilleurEmoji.UNCHANGED} No changed test units",
                context="Veilleur",
            )
            callback()
            self.state = CoordinatorState.IDLE
            return

        self.state = CoordinatorState.SCHEDULED
        self.reporter.info(
            f"{VeilleurEmoji.CHANGED} {len(changed)} changed test unit(s): "
            f"{', '.join(unit.name for unit in changed)}",
            context="Veilleur",
        )
        self.scheduler.schedule(sources, callback)
        self.state = CoordinatorState.IDLE

    async def _initialize_seed(self, emission: Emission) -> None:
        await self.seed_initializer.get_seed(
            self.output_path, emission, self.settings.seed
        )

    def _default_runner(self) -> TestRunner:
        return TestRunner(
            loader=MemoryFileLoader(self.executor),
            globals_table=self.globals_table,
            reporter=self.reporter,
        )

    async def _run_tests(self, sources: Dict[str, str]) -> RunSummary:
        """Debounced action: run the changed test files."""
        self.runs += 1

        runner = self.runner_factory()
        if self.settings.seed:
            runner.register_global(self.settings.seed)
        for path, source in sources.items():
            runner.add_file(path, source)

        summary = await runner.run()

        emoji = VeilleurEmoji.TEST_PASS if summary.success else VeilleurEmoji.TEST_FAIL
        self.reporter.info(
            f"{emoji} Run #{self.runs}: {summary.passed}/{summary.total} passed",
            context="Veilleur",
        )
        return summary

    async def close(self) -> None:
        """Settle the pending emission and wait for running tests."""
        self.scheduler.close()
        await self.scheduler.wait_idle()
