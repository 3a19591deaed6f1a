"""
Build pipeline boundary.

Veilleur registers for emission events on a BuildPipeline. The pipeline
hands each handler the emission and a completion callback, and must not
proceed past the emission until that callback has been invoked.
"""

import asyncio
from typing import Awaitable, Callable, List, Protocol

from veilleur.core.units import Emission

CompletionCallback = Callable[[], None]
EmitHandler = Callable[[Emission, CompletionCallback], Awaitable[None]]


class BuildPipeline(Protocol):
    """Interface Veilleur expects from a build pipeline."""

    output_path: str

    def on_emit(self, handler: EmitHandler) -> None:
        """Register a handler for emission events."""
        ...


class InMemoryPipeline:
    """
    Minimal BuildPipeline driven by explicit emit() calls.

    Used to embed Veilleur in tools that produce emissions themselves,
    and in tests.
    """

    def __init__(self, output_path: str = "dist"):
        """
        Initialize pipeline.

        Args:
            output_path: Directory prefix for emitted assets
        """
        self.output_path = output_path
        self._handlers: List[EmitHandler] = []

    def on_emit(self, handler: EmitHandler) -> None:
        """Register a handler for emission events."""
        self._handlers.append(handler)

    async def emit(self, emission: Emission) -> None:
        """
        Dispatch an emission and wait until every handler completed it.

        Args:
            emission: Emission to dispatch
        """
        loop = asyncio.get_running_loop()
        waiters = []

        for handler in self._handlers:
            done = loop.create_future()
            await handler(emission, self._completion(done))
            waiters.append(done)

        await asyncio.gather(*waiters)

    @staticmethod
    def _completion(done: asyncio.Future) -> CompletionCallback:
        """Build a one-shot completion callback resolving `done`."""

        def callback() -> None:
            if not done.done():
                done.set_result(None)

        return callback
