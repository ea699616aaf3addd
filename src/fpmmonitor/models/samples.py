"""
Per-tick sample data models.

These structures are created at the start of a tick and discarded when the
tick ends. Nothing here is persisted.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class QueueSample:
    """
    Listen queue length contributed by one container during one tick.

    Attributes:
        container_id: Opaque container handle, valid for this tick only.
        queue_length: Pending connections on the workload socket. A failed
            measurement also reports 0; the two cases are not distinguished
            in the aggregate.
        matched: Whether the container was classified as the monitored workload.
        error_info: Why the measurement fell back to zero, if it did.
    """

    container_id: str
    queue_length: int = 0
    matched: bool = False
    error_info: Optional[str] = None

    @property
    def is_successful(self) -> bool:
        return self.error_info is None


@dataclass
class AggregateSample:
    """
    Result of one full sampling tick.

    ``total`` is the value the reporting loop acts on; the remaining fields are
    bookkeeping for logs.
    """

    total: int
    samples: List[QueueSample] = field(default_factory=list)
    duration: float = 0.0

    @property
    def containers_seen(self) -> int:
        return len(self.samples)

    @property
    def containers_matched(self) -> int:
        return sum(1 for sample in self.samples if sample.matched)

    @property
    def failures(self) -> List[QueueSample]:
        return [sample for sample in self.samples if not sample.is_successful]

    @classmethod
    def from_samples(cls, samples: List[QueueSample], duration: float = 0.0) -> "AggregateSample":
        """Reduce per-container samples into a single aggregate."""
        return cls(
            total=sum(sample.queue_length for sample in samples),
            samples=list(samples),
            duration=duration,
        )
