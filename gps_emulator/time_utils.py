"""
Simulated-time helpers.

Simulation time arrives as float seconds. Comparing float differences
against a configured interval is fragile (``6 * 0.02 - 0.0 >= 0.12`` is
False), so every gate in the emulator compares integer nanoseconds instead,
the same way the host physics clock keeps seconds + nanoseconds.
"""

NANOSECONDS_PER_SECOND = 1_000_000_000


def to_nanoseconds(seconds: float) -> int:
    """Convert simulated seconds to the nearest integer nanosecond."""
    return int(round(seconds * NANOSECONDS_PER_SECOND))


def elapsed_at_least(now: float, since: float, duration: float) -> bool:
    """Return True when ``now - since >= duration`` in simulated time."""
    return to_nanoseconds(now) - to_nanoseconds(since) >= to_nanoseconds(duration)
