"""
Host simulation adapter for the GPS sensor.
"""

from typing import Any, List, Optional, Tuple

from .config import GpsSensorConfig
from .gps_sensor import GpsSensor
from .interfaces import Publisher, TruthStateProvider
from .messages import OutputMessages


class InMemoryPublisher:
    """Publisher that records every (topic, message) pair it receives."""

    def __init__(self):
        self.published: List[Tuple[str, Any]] = []

    def publish(self, topic: str, message: Any) -> None:
        self.published.append((topic, message))

    def messages_on(self, topic: str) -> List[Any]:
        """All messages published on ``topic``, in publish order."""
        return [message for t, message in self.published if t == topic]

    def clear(self) -> None:
        self.published = []


class GpsSensorPlugin:
    """
    Wires a GpsSensor to a physics host and a transport.

    The host calls ``load()`` once and ``on_update(now)`` every physics
    step. Truth state is pulled from the provider on each update.
    """

    def __init__(self,
                 config: GpsSensorConfig,
                 provider: TruthStateProvider,
                 publisher: Publisher,
                 seed: Optional[int] = None):
        self.config = config
        self.provider = provider
        self.publisher = publisher
        self.seed = seed
        self.sensor = GpsSensor()

    def load(self) -> None:
        """Configure the sensor and attach the publisher."""
        self.sensor.configure(self.config, seed=self.seed)
        self.sensor.attach(self.publisher)

    def on_update(self, now: float) -> List[OutputMessages]:
        """Forward one host update to the sensor."""
        truth = self.provider.get_truth_state()
        return self.sensor.on_tick(truth, now)
