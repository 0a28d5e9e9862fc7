"""
Trailing-edge debouncer with per-call futures.

This module provides the Debouncer service. Bursts of calls are coalesced
into one execution of the wrapped operation and every caller receives a
future that settles with the shared outcome of that execution.
"""

import asyncio
import functools
import inspect
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..domain.batch import CallArguments, PendingBatch, Waiter
from ..domain.errors import CancelError, DisposedError, ErrorCode
from ..domain.options import DebounceConfig
from ..interfaces.debouncing import IDebouncer
from ..interfaces.scheduling import IScheduler

logger = logging.getLogger(__name__)

CONFIGURATION_CHANGED_REASON = "Debounce configuration changed, pending call cancelled"


class Debouncer(IDebouncer):
    """
    Debounced front for an operation.

    Calls return immediately with a future. The operation runs once the
    calls have been quiet for ``delay_ms``, or ``max_wait_ms`` after the
    first call of the window, with the arguments of the latest call.
    Every future of the window receives the same value or error.

    The host owns the instance and must call ``dispose()`` exactly once
    when its context ends; a disposed debouncer is never reused.
    """

    def __init__(
        self,
        operation: Callable[..., Any],
        config: DebounceConfig,
        scheduler: IScheduler,
        name: Optional[str] = None
    ):
        if not callable(operation):
            raise TypeError(f"operation must be callable, got {operation!r}")

        self._operation = operation
        self._config = config
        self._scheduler = scheduler
        self._name = name or getattr(operation, '__name__', type(operation).__name__)

        self._batch: Optional[PendingBatch] = None
        self._epoch = 0
        self._disposed = False
        self._in_flight: Dict["asyncio.Future[Any]", List[Waiter]] = {}

        self._metrics: Dict[str, int] = {
            'calls': 0,
            'executions': 0,
            'manual_settlements': 0,
            'cancellations': 0,
            'failures': 0,
            'disposed_rejections': 0
        }

    @property
    def name(self) -> str:
        """Get component name."""
        return f"Debouncer[{self._name}]"

    @property
    def config(self) -> DebounceConfig:
        return self._config

    @property
    def delay_ms(self) -> float:
        return self._config.delay_ms

    @property
    def max_wait_ms(self) -> Optional[float]:
        return self._config.max_wait_ms

    @property
    def operation(self) -> Callable[..., Any]:
        """The operation the next batch will execute."""
        return self._operation

    @operation.setter
    def operation(self, operation: Callable[..., Any]) -> None:
        if not callable(operation):
            raise TypeError(f"operation must be callable, got {operation!r}")
        self._operation = operation

    @property
    def disposed(self) -> bool:
        return self._disposed

    def __call__(self, *args: Any, **kwargs: Any) -> "asyncio.Future[Any]":
        self._metrics['calls'] += 1

        if self._disposed:
            self._metrics['disposed_rejections'] += 1
            return self._failed_future(DisposedError())

        batch = self._batch
        if batch is None:
            self._epoch += 1
            batch = self._batch = PendingBatch(epoch=self._epoch)
            logger.debug(f"{self.name}: opened batch {batch.epoch}")

        batch.args = CallArguments(args, dict(kwargs))
        waiter = Waiter(self._scheduler.create_future())
        batch.waiters.append(waiter)

        # Every call pushes the trailing edge back
        if batch.timer_handle is not None:
            batch.timer_handle.cancel()
        batch.timer_handle = self._scheduler.schedule(
            functools.partial(self._on_timer, batch.epoch, "delay"),
            self._config.delay_ms
        )

        max_wait_ms = self._config.max_wait_ms
        if max_wait_ms is not None and batch.max_wait_timer_handle is None:
            batch.window_opened_at = self._scheduler.now()
            batch.max_wait_timer_handle = self._scheduler.schedule(
                functools.partial(self._on_timer, batch.epoch, "max-wait"),
                max_wait_ms
            )

        return waiter.future

    def cancel(self, reason: Optional[Union[str, BaseException]] = None) -> None:
        """
        Reject every pending call with a cancellation error.

        Args:
            reason: Message for the CancelError, or an exception to use verbatim
        """
        if self._disposed:
            self._reset(DisposedError())
            return

        if isinstance(reason, BaseException):
            error = reason
        elif reason is None:
            error = CancelError()
        else:
            error = CancelError(str(reason))

        rejected = self._reset(error)
        if rejected:
            self._metrics['cancellations'] += 1
            logger.debug(f"{self.name}: cancelled {rejected} pending call(s): {error}")

    def flush(self) -> None:
        """Execute the pending batch immediately, skipping the remaining delay."""
        if self._disposed:
            self._reset(DisposedError())
            return

        batch = self._batch
        if batch is not None and batch.args is not None and batch.waiters:
            self._execute_batch("flush")

    def is_pending(self) -> bool:
        return not self._disposed and self._batch is not None and self._batch.scheduled

    def settle_pending_with(self, executor: Callable[[], Any]) -> "asyncio.Future[Any]":
        """
        Settle the pending calls with the outcome of ``executor``.

        The wrapped operation is not invoked. The executor may return a
        value, return an awaitable or raise; the outcome is delivered to
        every pending call and to the returned future.

        Args:
            executor: Zero-argument callable producing the outcome

        Returns:
            Future settling with the same outcome as the pending calls
        """
        if self._disposed:
            error = DisposedError("Cannot settle pending calls: debouncer disposed")
            self._reset(error)
            self._metrics['disposed_rejections'] += 1
            return self._failed_future(error)

        waiters = self._clear_batch()
        own = Waiter(self._scheduler.create_future())
        self._metrics['manual_settlements'] += 1

        logger.debug(f"{self.name}: settling {len(waiters)} pending call(s) manually")
        self._settle(waiters + [own], executor)
        return own.future

    def dispose(self) -> None:
        """
        Tear the debouncer down.

        Pending and in-flight calls are rejected with DisposedError and all
        later calls fail immediately. Repeated calls are no-ops.
        """
        if self._disposed:
            return

        self._disposed = True
        pending = self._reset(DisposedError())

        in_flight = 0
        in_flight_error = DisposedError("Debouncer disposed while the operation's result was pending")
        for sinks in self._in_flight.values():
            in_flight += self._reject_all(sinks, in_flight_error)
        # Completion callbacks still run and retrieve the dropped outcome
        self._in_flight.clear()

        self._metrics['disposed_rejections'] += pending + in_flight
        logger.info(f"{self.name} disposed ({pending} pending, {in_flight} in-flight call(s) rejected)")

    def configure(self, config: Union[DebounceConfig, Mapping[str, Any]]) -> None:
        """
        Apply new timing.

        A window opened under the old timing never executes under the new
        one: if a batch is pending it is cancelled first.

        Args:
            config: DebounceConfig, or a mapping of fields to change

        Raises:
            ValueError: If the timing is invalid or a mapping key is unknown
        """
        if isinstance(config, DebounceConfig):
            new_config = config
        else:
            current = self._config.to_dict()
            unknown = set(config) - set(current)
            if unknown:
                raise ValueError(f"Unknown debounce options: {', '.join(sorted(unknown))}")
            new_config = DebounceConfig.from_dict({**current, **dict(config)})

        if new_config == self._config:
            return

        if self.is_pending():
            self.cancel(CancelError(CONFIGURATION_CHANGED_REASON, ErrorCode.CONFIGURATION_CHANGED))

        logger.info(f"{self.name}: configuration changed from {self._config} to {new_config}")
        self._config = new_config

    async def check_health(self) -> Dict[str, Any]:
        """Check debouncer health."""
        return {
            'healthy': not self._disposed,
            'status': 'disposed' if self._disposed else ('pending' if self.is_pending() else 'idle'),
            'details': {
                'delay_ms': self._config.delay_ms,
                'max_wait_ms': self._config.max_wait_ms,
                'pending_calls': len(self._batch.waiters) if self._batch else 0,
                'in_flight': len(self._in_flight),
                **self._metrics
            }
        }

    def get_metrics(self) -> Dict[str, Any]:
        """Get debouncer counters."""
        return {
            **self._metrics,
            'pending': self.is_pending(),
            'pending_calls': len(self._batch.waiters) if self._batch else 0,
            'in_flight': len(self._in_flight)
        }

    def __enter__(self) -> 'Debouncer':
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.dispose()

    async def __aenter__(self) -> 'Debouncer':
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.dispose()

    def __repr__(self) -> str:
        state = 'disposed' if self._disposed else ('pending' if self.is_pending() else 'idle')
        return f"<{self.name} delay_ms={self._config.delay_ms} max_wait_ms={self._config.max_wait_ms} {state}>"

    def _on_timer(self, epoch: int, kind: str) -> None:
        """Timer callback; stale timers of a cleared batch are ignored."""
        batch = self._batch
        if self._disposed or batch is None or batch.epoch != epoch:
            logger.debug(f"{self.name}: ignoring stale {kind} timer of batch {epoch}")
            return

        self._execute_batch(kind)

    def _execute_batch(self, trigger: str) -> None:
        batch = self._batch
        if batch is None:
            return

        if self._disposed:
            self._reset(DisposedError())
            return
        if batch.args is None:
            self._reset(CancelError("Execution attempted without arguments", ErrorCode.MISSING_ARGUMENTS))
            return

        args = batch.args
        epoch = batch.epoch
        waiters = self._clear_batch()
        operation = self._operation
        self._metrics['executions'] += 1

        logger.debug(f"{self.name}: executing batch {epoch} ({trigger}) for {len(waiters)} call(s) with {args!r}")
        self._settle(waiters, lambda: operation(*args.args, **args.kwargs))

    def _settle(self, sinks: List[Waiter], action: Callable[[], Any]) -> None:
        """Run ``action`` and fan its outcome out to ``sinks``."""
        try:
            outcome = action()
        except asyncio.CancelledError:
            self._cancel_all(sinks)
            return
        except Exception as e:
            self._deliver_error(sinks, e, "synchronous execution")
            return

        if inspect.isawaitable(outcome):
            # Run on the loop the waiters belong to, which may not be running yet
            loop = sinks[0].future.get_loop()
            task = asyncio.ensure_future(outcome, loop=loop)
            self._in_flight[task] = sinks
            task.add_done_callback(self._on_awaitable_done)
            return

        self._deliver_value(sinks, outcome, "synchronous execution")

    def _on_awaitable_done(self, task: "asyncio.Future[Any]") -> None:
        sinks = self._in_flight.pop(task, [])

        if task.cancelled():
            self._cancel_all(sinks)
            return

        error = task.exception()
        if error is not None:
            self._deliver_error(sinks, error, "result rejection")
        else:
            self._deliver_value(sinks, task.result(), "result resolution")

    def _deliver_value(self, sinks: List[Waiter], value: Any, phase: str) -> None:
        if self._disposed:
            logger.debug(f"{self.name}: dropping value produced after disposal ({phase})")
            self._reject_all(sinks, DisposedError(f"Debouncer disposed during the operation's {phase}"))
            return

        for waiter in sinks:
            waiter.resolve(value)

    def _deliver_error(self, sinks: List[Waiter], error: BaseException, phase: str) -> None:
        if self._disposed:
            logger.debug(f"{self.name}: dropping error raised after disposal ({phase}): {error!r}")
            self._reject_all(sinks, DisposedError(f"Debouncer disposed during the operation's {phase}"))
            return

        self._metrics['failures'] += 1
        logger.debug(f"{self.name}: operation failed ({phase}): {error!r}")
        self._reject_all(sinks, error)

    def _cancel_all(self, sinks: List[Waiter]) -> None:
        if self._disposed:
            self._reject_all(sinks, DisposedError("Debouncer disposed while the operation was cancelled"))
            return

        for waiter in sinks:
            waiter.cancel("Debounced operation was cancelled")

    def _clear_batch(self) -> List[Waiter]:
        """Cancel timers, drop the batch and return its waiters."""
        batch, self._batch = self._batch, None
        if batch is None:
            return []
        batch.cancel_timers()
        return batch.drain()

    def _reset(self, error: BaseException) -> int:
        return self._reject_all(self._clear_batch(), error)

    @staticmethod
    def _reject_all(sinks: List[Waiter], error: BaseException) -> int:
        return sum(1 for waiter in sinks if waiter.reject(error))

    def _failed_future(self, error: BaseException) -> "asyncio.Future[Any]":
        future = self._scheduler.create_future()
        future.set_exception(error)
        return future
