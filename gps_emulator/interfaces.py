"""
Narrow interfaces between the GPS sensor and its host simulation.
"""

from typing import Any, Protocol

from .messages import TruthState


class TruthStateProvider(Protocol):
    """Read-only access to the noiseless state of the sensor's body."""

    def get_truth_state(self) -> TruthState:
        ...


class Publisher(Protocol):
    """Transport collaborator that delivers rendered messages to a topic."""

    def publish(self, topic: str, message: Any) -> None:
        ...
