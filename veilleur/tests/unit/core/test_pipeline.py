"""
Unit tests for InMemoryPipeline.

Usage:
    pytest veilleur/tests/unit/core/test_pipeline.py
"""

import asyncio

import pytest

from veilleur.core.pipeline import InMemoryPipeline
from veilleur.core.units import Emission


class TestInMemoryPipeline:
    """Unit tests for emission dispatch."""

    @pytest.mark.asyncio
    async def test_emit_waits_for_callback(self):
        """Test emit does not return before the handler completes it."""
        pipeline = InMemoryPipeline()
        callbacks = []

        async def handler(emission, callback):
            callbacks.append(callback)

        pipeline.on_emit(handler)
        emitting = asyncio.ensure_future(pipeline.emit(Emission()))
        await asyncio.sleep(0)

        assert not emitting.done()

        callbacks[0]()
        await asyncio.wait_for(emitting, 1)

    @pytest.mark.asyncio
    async def test_callback_is_one_shot(self):
        """Test extra callback invocations are ignored."""
        pipeline = InMemoryPipeline()

        async def handler(emission, callback):
            callback()
            callback()

        pipeline.on_emit(handler)

        await asyncio.wait_for(pipeline.emit(Emission()), 1)

    @pytest.mark.asyncio
    async def test_every_handler_receives_emission(self):
        """Test all handlers see the emission in registration order."""
        pipeline = InMemoryPipeline("out")
        seen = []
        emission = Emission()

        for name in ("first", "second"):

            async def handler(received, callback, name=name):
                seen.append((name, received))
                callback()

            pipeline.on_emit(handler)

        await pipeline.emit(emission)

        assert seen == [("first", emission), ("second", emission)]
        assert pipeline.output_path == "out"

    @pytest.mark.asyncio
    async def test_emit_without_handlers(self):
        """Test emitting with no handlers returns immediately."""
        await asyncio.wait_for(InMemoryPipeline().emit(Emission()), 1)
