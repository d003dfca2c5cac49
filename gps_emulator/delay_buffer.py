"""
Bounded FIFO that models GPS signal-acquisition latency.

Samples are queued when they are produced and only become visible once
their age (now - sample.timestamp) reaches the configured delay. This
prevents consumers from seeing a reading before a real receiver would have
reported it.

Samples are produced once per scheduled tick, so insertion order is also
temporal order and the front of the queue is always the oldest sample.
"""

import logging
from collections import deque
from enum import Enum
from typing import Deque, List, Optional

from .messages import DelayedSample
from .time_utils import elapsed_at_least

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE_MAX = 1000


class OverflowPolicy(str, Enum):
    """What to discard when a sample arrives at a full buffer."""
    DROP_OLDEST = "drop_oldest"
    REJECT_NEW = "reject_new"


class DelayBuffer:
    """
    Capacity-bounded queue of DelayedSample released by age.

    The default overflow policy is DROP_OLDEST: the front sample is
    discarded so the buffer keeps the freshest data. Overflow is never
    raised to the caller.

    Example usage:
        >>> buffer = DelayBuffer(delay=0.12)
        >>> buffer.enqueue(sample)
        >>> for ready in buffer.release_ready(now=0.5):
        ...     publish(ready)
    """

    def __init__(self,
                 delay: float,
                 capacity: int = DEFAULT_BUFFER_SIZE_MAX,
                 overflow_policy: OverflowPolicy = OverflowPolicy.DROP_OLDEST):
        """
        Args:
            delay: Age in simulated seconds a sample must reach before release
            capacity: Maximum number of queued samples
            overflow_policy: DROP_OLDEST or REJECT_NEW

        Raises:
            ValueError: If delay is negative or capacity is not positive
        """
        if delay < 0:
            raise ValueError(f"Delay must be non-negative, got {delay}")
        if capacity <= 0:
            raise ValueError(f"Buffer capacity must be positive, got {capacity}")

        self.delay = delay
        self.capacity = capacity
        self.overflow_policy = OverflowPolicy(overflow_policy)
        self.dropped_count = 0
        self._queue: Deque[DelayedSample] = deque()

    def __len__(self) -> int:
        return len(self._queue)

    def enqueue(self, sample: DelayedSample) -> bool:
        """
        Append a sample at the back of the queue.

        Args:
            sample: Noisy sample to delay

        Returns:
            True if the sample was queued, False if it was rejected
            (REJECT_NEW policy with a full buffer).
        """
        if len(self._queue) >= self.capacity:
            self.dropped_count += 1
            if self.overflow_policy is OverflowPolicy.REJECT_NEW:
                logger.debug("Delay buffer full (%d), rejected sample at t=%.6f",
                             self.capacity, sample.timestamp)
                return False
            dropped = self._queue.popleft()
            logger.debug("Delay buffer full (%d), dropped oldest sample at t=%.6f",
                         self.capacity, dropped.timestamp)

        self._queue.append(sample)
        return True

    def peek(self) -> Optional[DelayedSample]:
        """Return the front (oldest) sample without removing it."""
        if not self._queue:
            return None
        return self._queue[0]

    def is_ready(self, now: float) -> bool:
        """True when the front sample has aged past the delay."""
        front = self.peek()
        return front is not None and elapsed_at_least(now, front.timestamp, self.delay)

    def try_release(self, now: float) -> Optional[DelayedSample]:
        """
        Pop the front sample if its age has reached the delay.

        Args:
            now: Current simulated time in seconds

        Returns:
            The released sample, or None if the front is not ready yet
            (or the buffer is empty).
        """
        if not self.is_ready(now):
            return None
        return self._queue.popleft()

    def release_ready(self, now: float) -> List[DelayedSample]:
        """
        Drain every ready sample, oldest first.

        More than one sample can be ready at once when the publish interval
        is shorter than the delay or after the host skipped ahead in time.
        """
        released = []
        while True:
            sample = self.try_release(now)
            if sample is None:
                break
            released.append(sample)
        return released

    def clear(self) -> None:
        """Discard all queued samples."""
        self._queue.clear()
        self.dropped_count = 0
