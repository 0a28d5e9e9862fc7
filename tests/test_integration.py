"""
Integration tests running debouncers on a real event loop.
"""

import asyncio
from typing import List

import pytest

from debounced_callback import CancelError, DisposedError, create


class TestAsyncioIntegration:
    """End-to-end behaviour with the default asyncio scheduler."""

    @pytest.mark.asyncio
    async def test_burst_coalesces_on_event_loop(self) -> None:
        """Test that rapid calls produce one execution with the last arguments."""
        seen: List[str] = []

        async def search(query: str) -> List[str]:
            seen.append(query)
            await asyncio.sleep(0)
            return [f"{query}-1", f"{query}-2"]

        debouncer = create(search, 30)
        try:
            futures = [debouncer(q) for q in ("a", "ab", "abc")]
            results = await asyncio.wait_for(asyncio.gather(*futures), timeout=2.0)
        finally:
            debouncer.dispose()

        assert seen == ["abc"]
        assert results == [["abc-1", "abc-2"]] * 3

    @pytest.mark.asyncio
    async def test_max_wait_forces_execution(self) -> None:
        """Test that max-wait fires while calls keep arriving."""
        executions: List[int] = []
        debouncer = create(lambda v: executions.append(v) or v, 50, {'max_wait_ms': 80})

        try:
            first = debouncer(0)
            for i in range(1, 10):
                await asyncio.sleep(0.02)
                debouncer(i)
            assert await asyncio.wait_for(first, timeout=2.0) == executions[0]
        finally:
            debouncer.cancel()
            debouncer.dispose()

        assert executions
        assert executions[0] < 9

    @pytest.mark.asyncio
    async def test_cancel_and_dispose_settle_everything(self) -> None:
        """Test that no future is left pending after cancel and dispose."""
        async with create(lambda v: v, 1000) as debouncer:
            cancelled = debouncer(1)
            debouncer.cancel("no longer needed")
            disposed = debouncer(2)

        with pytest.raises(CancelError, match="no longer needed"):
            await cancelled
        with pytest.raises(DisposedError):
            await disposed
        with pytest.raises(DisposedError):
            await debouncer(3)
