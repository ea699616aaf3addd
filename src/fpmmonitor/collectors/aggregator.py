"""
Per-tick sample aggregation.

This module provides the SampleAggregator that drives one full tick:
enumerate containers, classify each one, sample the matching ones on a
thread pool, and reduce the per-container results into one total.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from ..classification import is_monitored_workload
from ..exceptions import MonitorError
from ..models.config import AgentConfig, DEFAULT_MAX_WORKERS
from ..models.samples import AggregateSample, QueueSample
from ..runtime.base import ContainerRuntime, SocketInspector
from ..runtime.docker import DockerCliRuntime
from ..runtime.sockets import NsenterSocketInspector
from .enumerator import list_running_containers
from .queue_sampler import QueueSampler

logger = logging.getLogger(__name__)


class SampleAggregator:
    """
    Runs the sampling pipeline across all containers for one tick.

    Container pipelines are independent: each worker returns its own
    QueueSample and the total is computed once all workers are done. A
    failure in one container becomes a zero contribution and never affects
    the others. Only enumeration failures abort the tick.
    """

    def __init__(
        self,
        runtime: ContainerRuntime,
        inspector: SocketInspector,
        marker: str,
        socket_path: str,
        max_workers: int = DEFAULT_MAX_WORKERS,
        thread_name_prefix: str = "FpmSampler",
    ):
        """
        Args:
            runtime: Container runtime queried for ids, commands and PIDs
            inspector: Namespace-scoped socket inspector
            marker: Launch command token identifying the workload
            socket_path: Well-known path of the workload's listening socket
            max_workers: Upper bound on concurrent container pipelines
            thread_name_prefix: Name prefix for worker threads
        """
        self.runtime = runtime
        self.marker = marker
        self.max_workers = max_workers
        self.thread_name_prefix = thread_name_prefix
        self.sampler = QueueSampler(runtime, inspector, socket_path)

    @classmethod
    def from_config(
        cls,
        config: AgentConfig,
        runtime: Optional[ContainerRuntime] = None,
        inspector: Optional[SocketInspector] = None,
    ) -> "SampleAggregator":
        """Build an aggregator with the production adapters unless given others."""
        if runtime is None:
            runtime = DockerCliRuntime(
                docker_binary=config.docker_binary, timeout=config.command_timeout
            )
        if inspector is None:
            inspector = NsenterSocketInspector(
                sudo_command=config.sudo_command, timeout=config.command_timeout
            )
        return cls(
            runtime=runtime,
            inspector=inspector,
            marker=config.marker,
            socket_path=config.socket_path,
            max_workers=config.max_workers,
        )

    def collect(self) -> AggregateSample:
        """
        Run one tick and return its aggregate.

        Returns:
            AggregateSample whose total is the sum of all per-container
            queue lengths, failed containers counting as zero.

        Raises:
            DiscoveryError: If the running containers cannot be listed.
        """
        tick_start = time.monotonic()
        container_ids = list_running_containers(self.runtime)

        if not container_ids:
            return AggregateSample.from_samples([], duration=time.monotonic() - tick_start)

        workers = min(self.max_workers, len(container_ids))
        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix=self.thread_name_prefix
        ) as executor:
            samples = list(executor.map(self._sample_container, container_ids))

        aggregate = AggregateSample.from_samples(samples, duration=time.monotonic() - tick_start)
        logger.debug(
            f"Tick sampled {aggregate.containers_seen} containers, "
            f"{aggregate.containers_matched} matched, {len(aggregate.failures)} failed, "
            f"took {aggregate.duration:.3f}s"
        )
        return aggregate

    def _sample_container(self, container_id: str) -> QueueSample:
        """Classify and sample one container; never raises."""
        try:
            if not is_monitored_workload(self.runtime, container_id, self.marker):
                return QueueSample(container_id=container_id, matched=False)
        except Exception as e:
            logger.warning(
                f"Unexpected error classifying container {container_id}: {type(e).__name__}: {e}",
                exc_info=True,
            )
            return QueueSample(container_id=container_id, matched=False, error_info=str(e))

        try:
            return self.sampler.measure(container_id)
        except MonitorError as e:
            logger.warning(f"Failed to sample container {container_id}: {e}")
            return QueueSample(container_id=container_id, matched=True, error_info=str(e))
        except Exception as e:
            logger.warning(
                f"Unexpected error sampling container {container_id}: {type(e).__name__}: {e}",
                exc_info=True,
            )
            return QueueSample(container_id=container_id, matched=True, error_info=str(e))
