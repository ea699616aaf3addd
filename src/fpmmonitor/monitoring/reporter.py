"""
Periodic reporting loop.

This module provides the IntervalScheduler that paces ticks and the
ReportingLoop that runs one sampling tick per interval and hands positive
totals to the metrics sink. Ticks never overlap and never catch up.
"""

import asyncio
import logging
import time
from concurrent.futures import Executor
from typing import Any, Callable, Dict, Optional

from ..collectors.aggregator import SampleAggregator
from ..exceptions import DiscoveryError, MetricEmissionError
from ..metrics.base import MetricsSink
from ..models.samples import AggregateSample
from ..validation import handle_error, ErrorSeverity

logger = logging.getLogger(__name__)


class IntervalScheduler:
    """
    Fixed-interval tick scheduler.

    The first tick is due immediately. After that each tick is due one
    interval after the previous one. A tick that starts late (because the
    previous one overran) resets the schedule to one interval after its own
    start, so missed ticks are skipped rather than fired back to back.
    """

    def __init__(
        self,
        interval: float,
        clock: Callable[[], float] = time.monotonic,
        late_tolerance: float = 0.1,
    ):
        """
        Args:
            interval: Seconds between tick starts
            clock: Monotonic time source
            late_tolerance: Wake-up lag in seconds still counted as on time
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = interval
        self.late_tolerance = late_tolerance
        self._clock = clock
        self._next_tick: Optional[float] = None

    @property
    def next_tick(self) -> Optional[float]:
        return self._next_tick

    def time_until_next_tick(self) -> float:
        """Seconds until the next tick is due; 0 if it is already due."""
        if self._next_tick is None:
            return 0.0
        return max(0.0, self._next_tick - self._clock())

    def start_tick(self) -> float:
        """
        Record that a tick starts now and schedule the following one.

        Returns:
            The clock value at which the tick started.
        """
        now = self._clock()
        if self._next_tick is None or now - self._next_tick > self.late_tolerance:
            if self._next_tick is not None:
                logger.warning(
                    f"Tick started {now - self._next_tick:.3f}s late, "
                    f"rescheduling from now"
                )
            base = now
        else:
            base = self._next_tick
        self._next_tick = base + self.interval
        return now


class ReportingLoop:
    """
    Drives one sampling tick per interval and reports the aggregate.

    Tick-level errors are logged and absorbed; the loop only ends when the
    stop event is set.
    """

    def __init__(
        self,
        aggregator: SampleAggregator,
        sink: MetricsSink,
        scheduler: IntervalScheduler,
        executor: Optional[Executor] = None,
    ):
        """
        Args:
            aggregator: Runs the sampling pipeline for one tick
            sink: Destination for positive totals
            scheduler: Paces the ticks
            executor: Executor for the blocking tick work; None uses the
                event loop's default executor
        """
        self.aggregator = aggregator
        self.sink = sink
        self.scheduler = scheduler
        self.executor = executor
        self.stats: Dict[str, int] = {
            "ticks_completed": 0,
            "ticks_failed": 0,
            "metrics_emitted": 0,
        }

    async def run_tick(self) -> Optional[AggregateSample]:
        """
        Run one tick: aggregate, then emit the total if it is positive.

        Returns:
            The tick's AggregateSample, or None if sampling failed.
        """
        loop = asyncio.get_running_loop()

        try:
            aggregate = await loop.run_in_executor(self.executor, self.aggregator.collect)
        except DiscoveryError as e:
            self.stats["ticks_failed"] += 1
            handle_error(
                error=e,
                context="container discovery, skipping tick",
                severity=ErrorSeverity.ERROR,
                reraise=False,
                logger=logger,
            )
            return None
        except Exception as e:
            self.stats["ticks_failed"] += 1
            logger.error(f"Error in monitoring loop: {type(e).__name__}: {e}", exc_info=True)
            return None

        logger.info(
            f"Total queue length: {aggregate.total} "
            f"({aggregate.containers_matched}/{aggregate.containers_seen} containers matched)"
        )

        if aggregate.total > 0:
            await self._emit(aggregate.total)

        self.stats["ticks_completed"] += 1
        return aggregate

    async def _emit(self, value: int) -> None:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(self.executor, self.sink.emit, value)
            self.stats["metrics_emitted"] += 1
        except MetricEmissionError as e:
            handle_error(
                error=e,
                context="metric emission",
                severity=ErrorSeverity.ERROR,
                reraise=False,
                logger=logger,
            )
        except Exception as e:
            logger.error(f"Unexpected error emitting metric: {type(e).__name__}: {e}", exc_info=True)

    async def run(self, stop_event: asyncio.Event) -> None:
        """
        Run ticks on the scheduler's cadence until ``stop_event`` is set.

        An in-flight tick always completes before the loop checks the event.
        """
        logger.info(f"Reporting loop started (interval: {self.scheduler.interval}s)")

        while not stop_event.is_set():
            delay = self.scheduler.time_until_next_tick()
            if delay > 0:
                try:
                    await asyncio.wait_for(stop_event.wait(), timeout=delay)
                    break
                except asyncio.TimeoutError:
                    pass

            self.scheduler.start_tick()
            await self.run_tick()

        logger.info(f"Reporting loop stopped: {self.get_stats()}")

    def get_stats(self) -> Dict[str, Any]:
        return dict(self.stats)
