"""
Replay of call traces against a virtual clock.

Used by the ``simulate`` CLI command to show when a debouncer with a given
timing would execute for a given sequence of call times.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from ..core.domain.errors import DebounceError
from ..core.domain.options import DebounceConfig
from ..infrastructure.scheduling.manual import ManualScheduler
from .factory import create

logger = logging.getLogger(__name__)


@dataclass
class Execution:
    """One invocation of the simulated operation."""
    at_ms: float
    call_index: int
    call_at_ms: float


@dataclass
class CallOutcome:
    """How one simulated call settled."""
    call_index: int
    call_at_ms: float
    result: Optional[str] = None
    error: Optional[str] = None


@dataclass
class SimulationReport:
    """Result of a simulation run."""
    config: DebounceConfig
    executions: List[Execution] = field(default_factory=list)
    outcomes: List[CallOutcome] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'config': self.config.to_dict(),
            'executions': [e.__dict__ for e in self.executions],
            'outcomes': [o.__dict__ for o in self.outcomes]
        }


async def simulate(
    call_times_ms: Sequence[float],
    config: DebounceConfig,
    flush_at_ms: Optional[float] = None
) -> SimulationReport:
    """
    Replay calls at the given virtual times and report the executions.

    Each call passes its index as the only argument; the operation returns
    ``"call-<index>"`` so outcomes show whose arguments won.

    Args:
        call_times_ms: Virtual times of the calls, in milliseconds
        config: Debounce timing to simulate
        flush_at_ms: Optional virtual time at which flush() is issued
    """
    if any(t < 0 for t in call_times_ms):
        raise ValueError("Call times must not be negative")

    times = sorted(call_times_ms)
    scheduler = ManualScheduler(loop=asyncio.get_running_loop())
    report = SimulationReport(config=config)

    def operation(index: int) -> str:
        report.executions.append(Execution(scheduler.now(), index, times[index]))
        return f"call-{index}"

    options = {'max_wait_ms': config.max_wait_ms} if config.max_wait_ms is not None else None
    debouncer = create(operation, config.delay_ms, options, scheduler=scheduler, name="simulation")

    futures: List["asyncio.Future[Any]"] = []
    flushed = flush_at_ms is None
    with debouncer:
        for index, at_ms in enumerate(times):
            if not flushed and flush_at_ms <= at_ms:
                scheduler.advance_to(flush_at_ms)
                debouncer.flush()
                flushed = True
            scheduler.advance_to(at_ms)
            futures.append(debouncer(index))

        if not flushed:
            scheduler.advance_to(max(flush_at_ms, scheduler.now()))
            debouncer.flush()
        scheduler.run_all()

    for index, future in enumerate(futures):
        outcome = CallOutcome(call_index=index, call_at_ms=times[index])
        try:
            outcome.result = await future
        except DebounceError as e:
            outcome.error = f"{type(e).__name__}: {e}"
        report.outcomes.append(outcome)

    logger.debug(f"Simulated {len(times)} call(s): {len(report.executions)} execution(s)")
    return report
