"""
Construction helpers for debouncers.

This is the entry point host code uses: it picks the default event-loop
scheduler and turns loose options into a validated DebounceConfig.
"""

import functools
from typing import Any, Callable, Mapping, Optional

from ..core.domain.options import DebounceConfig
from ..core.interfaces.scheduling import IScheduler
from ..core.services.debouncer import Debouncer
from ..infrastructure.scheduling.asyncio_scheduler import AsyncioScheduler


def create(
    operation: Callable[..., Any],
    delay_ms: float,
    config: Optional[Mapping[str, Any]] = None,
    *,
    scheduler: Optional[IScheduler] = None,
    name: Optional[str] = None
) -> Debouncer:
    """
    Create a debouncer for ``operation``.

    Args:
        operation: Callable to debounce; may return a value or an awaitable
        delay_ms: Trailing quiet period in milliseconds
        config: Extra options, currently only ``max_wait_ms``
        scheduler: Timer service, defaults to the running asyncio loop
        name: Name used in logs, defaults to the operation's name

    Returns:
        A new Debouncer; the caller owns it and must dispose it

    Raises:
        ValueError: If an option is invalid or unknown
    """
    options = dict(config or {})
    unknown = set(options) - {'max_wait_ms'}
    if unknown:
        raise ValueError(f"Unknown debounce options: {', '.join(sorted(unknown))}")

    debounce_config = DebounceConfig(delay_ms=delay_ms, max_wait_ms=options.get('max_wait_ms'))
    return Debouncer(
        operation,
        debounce_config,
        scheduler or AsyncioScheduler(),
        name=name
    )


def debounced(
    delay_ms: float,
    max_wait_ms: Optional[float] = None,
    *,
    scheduler: Optional[IScheduler] = None
) -> Callable[[Callable[..., Any]], Debouncer]:
    """
    Decorator form of create().

    The decorated name is bound to the Debouncer itself, so the control
    operations are available on it::

        @debounced(300)
        async def save(document): ...

        future = save(doc)
        save.flush()
    """
    def decorator(func: Callable[..., Any]) -> Debouncer:
        options = {'max_wait_ms': max_wait_ms} if max_wait_ms is not None else None
        debouncer = create(func, delay_ms, options, scheduler=scheduler)
        functools.update_wrapper(debouncer, func)
        return debouncer

    return decorator
