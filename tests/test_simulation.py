"""
Tests for call-trace simulation.
"""

import pytest

from debounced_callback.application.simulation import simulate
from debounced_callback.core.domain.options import DebounceConfig


class TestSimulation:
    """Test cases for simulate()."""

    @pytest.mark.asyncio
    async def test_trailing_execution(self) -> None:
        """Test the t=0, t=100 scenario with a 300ms delay."""
        report = await simulate([0, 100], DebounceConfig(delay_ms=300))

        assert len(report.executions) == 1
        execution = report.executions[0]
        assert execution.at_ms == 400
        assert execution.call_index == 1
        assert [o.result for o in report.outcomes] == ["call-1", "call-1"]

    @pytest.mark.asyncio
    async def test_max_wait_splits_windows(self) -> None:
        """Test that max-wait produces several executions for a long burst."""
        times = list(range(0, 1000, 50))
        report = await simulate(times, DebounceConfig(delay_ms=100, max_wait_ms=300))

        assert report.executions[0].at_ms == 300
        assert all(e.at_ms - e.call_at_ms <= 300 for e in report.executions)
        assert all(o.error is None for o in report.outcomes)

    @pytest.mark.asyncio
    async def test_flush_executes_early(self) -> None:
        """Test that a flush in the middle of a window executes it."""
        report = await simulate([0, 50, 400], DebounceConfig(delay_ms=300), flush_at_ms=100)

        assert [e.at_ms for e in report.executions] == [100, 700]
        assert [o.result for o in report.outcomes] == ["call-1", "call-1", "call-2"]

    @pytest.mark.asyncio
    async def test_flush_after_last_call(self) -> None:
        report = await simulate([0], DebounceConfig(delay_ms=300), flush_at_ms=500)

        assert [e.at_ms for e in report.executions] == [300]
        assert report.to_dict()['config'] == {'delay_ms': 300, 'max_wait_ms': None}

    @pytest.mark.asyncio
    async def test_negative_times_rejected(self) -> None:
        with pytest.raises(ValueError):
            await simulate([-5, 10], DebounceConfig(delay_ms=100))
