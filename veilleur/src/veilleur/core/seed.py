"""
Seed initialization - one-shot asynchronous setup before any test run.

The seed unit's source must evaluate to a callable. It is called once,
its result awaited if needed, and the value published in the global
table under the seed unit's name so loaded test files can use it.
"""

import asyncio
import inspect
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from shared.reporter.emojis import VeilleurEmoji
from shared.reporter.system_reporter import SystemReporter

from veilleur.core.exceptions import SeedError, SeedNotFoundError
from veilleur.core.module_executor import ExecutionContext, GlobalTable, ModuleExecutor
from veilleur.core.units import Emission, extract_sources


class SeedState(Enum):
    """Seed lifecycle state."""

    NOT_STARTED = "not_started"
    PENDING = "pending"
    RESOLVED = "resolved"
    FAILED = "failed"


class SeedInitializer:
    """
    Evaluates the seed unit and publishes its value.
    """

    def __init__(
        self,
        executor: ModuleExecutor,
        globals_table: GlobalTable,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize seed initializer.

        Args:
            executor: Executor used to evaluate the seed source
            globals_table: Table receiving the seed value
            reporter: Optional reporter for logging
        """
        self.executor = executor
        self.globals_table = globals_table
        self.reporter = reporter or SystemReporter(name="seed", level=20, verbose=1)

    def create_seed(
        self, output_path: str, emission: Emission, seed_name: str
    ) -> asyncio.Future:
        """
        Evaluate the seed unit and call the value it exports.

        Lookup and evaluation happen synchronously; the call's result is
        returned as a future (already resolved for plain values).

        Args:
            output_path: Pipeline output directory
            emission: Current emission
            seed_name: Name of the seed unit

        Returns:
            Future of the seed value

        Raises:
            SeedNotFoundError: If no unit is named seed_name
            SeedError: If the unit has no output or exports a non-callable
        """
        units = [unit for unit in emission.units if unit.name == seed_name]
        if not units:
            raise SeedNotFoundError(seed_name, emission.unit_names())

        # First match wins when names collide.
        sources = extract_sources(output_path, emission, units[:1])
        if not sources:
            raise SeedError(seed_name, f"Unit {seed_name!r} has no output files")

        path, source = next(iter(sources.items()))
        factory = self.executor.execute(source, ExecutionContext.for_file(path))

        if not callable(factory):
            raise SeedError(
                seed_name,
                f"Unit {seed_name!r} must evaluate to a callable, "
                f"got {type(factory).__name__}",
            )

        result = factory()
        if inspect.isawaitable(result):
            return asyncio.ensure_future(result)

        resolved = asyncio.get_running_loop().create_future()
        resolved.set_result(result)
        return resolved

    async def get_seed(
        self, output_path: str, emission: Emission, seed_name: str
    ) -> Any:
        """
        Resolve the seed and publish it under seed_name.

        Args:
            output_path: Pipeline output directory
            emission: Current emission
            seed_name: Name of the seed unit

        Returns:
            Seed value
        """
        self.reporter.info(
            f"{VeilleurEmoji.SEED} Initializing seed {seed_name!r}",
            context="SeedInitializer",
        )

        value = await self.create_seed(output_path, emission, seed_name)
        self.globals_table.publish(seed_name, value)

        self.reporter.info(
            f"{VeilleurEmoji.SEED_READY} Seed {seed_name!r} ready",
            context="SeedInitializer",
        )
        return value


class SeedGate:
    """
    Memoized seed computation gating every emission.

    Started at most once. A failed seed is logged and remembered; the
    gate still opens so emissions continue without the seed.

    Attributes:
        seed_name: Configured seed unit (None = no seed, gate open)
        state: Current SeedState
        value: Resolved seed value
        error: Failure, when state is FAILED
    """

    def __init__(
        self, seed_name: Optional[str], reporter: Optional[SystemReporter] = None
    ):
        """
        Initialize seed gate.

        Args:
            seed_name: Configured seed unit name, or None
            reporter: Optional reporter for logging
        """
        self.seed_name = seed_name
        self.reporter = reporter or SystemReporter(
            name="seed_gate", level=20, verbose=1
        )

        self.state = SeedState.NOT_STARTED if seed_name else SeedState.RESOLVED
        self.value: Any = None
        self.error: Optional[BaseException] = None
        self._future: Optional[asyncio.Future] = None

    @property
    def settled(self) -> bool:
        """Check if the gate is open."""
        return self.state in (SeedState.RESOLVED, SeedState.FAILED)

    def ensure(self, start: Callable[[], Awaitable[Any]]) -> asyncio.Future:
        """
        Start the seed on first call; return the same future afterwards.

        Args:
            start: Factory for the seed awaitable (called at most once)

        Returns:
            Future resolving to None once the seed settled
        """
        if self._future is not None:
            return self._future

        loop = asyncio.get_running_loop()

        if self.state is SeedState.RESOLVED:
            self._future = loop.create_future()
            self._future.set_result(None)
            return self._future

        self.state = SeedState.PENDING
        self._future = asyncio.ensure_future(self._settle(start))
        return self._future

    async def _settle(self, start: Callable[[], Awaitable[Any]]) -> None:
        """Await the seed, recording success or failure."""
        try:
            self.value = await start()
        except Exception as e:
            self.state = SeedState.FAILED
            self.error = e
            self.reporter.error(
                f"{VeilleurEmoji.SEED_FAILED} Seed {self.seed_name!r} failed: "
                f"{type(e).__name__}: {e}",
                context="SeedGate",
            )
            return

        self.state = SeedState.RESOLVED
