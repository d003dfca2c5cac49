"""
Fixed-rate publish gate.
"""

from .time_utils import elapsed_at_least

DEFAULT_UPDATE_INTERVAL = 0.2  # s (5 Hz)


class UpdateScheduler:
    """
    Gates sample production to a fixed simulated-time interval.

    The gate looks at elapsed simulated time, not tick count, so it behaves
    the same whatever physics step size the host runs at, and tolerates
    irregular tick spacing.
    """

    def __init__(self, interval: float = DEFAULT_UPDATE_INTERVAL, start_time: float = 0.0):
        if interval <= 0:
            raise ValueError(f"Update interval must be positive, got {interval}")
        self.interval = interval
        self.last_publish = start_time

    def should_publish(self, now: float) -> bool:
        """
        Return True (and record ``now``) once the interval has elapsed.

        A False result leaves the state untouched.
        """
        if not elapsed_at_least(now, self.last_publish, self.interval):
            return False
        self.last_publish = now
        return True

    def reset(self, start_time: float = 0.0) -> None:
        self.last_publish = start_time
