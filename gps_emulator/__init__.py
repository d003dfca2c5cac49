"""
GPS Sensor Emulator

Turns the noiseless position/velocity of a simulated body into what a real
GPS receiver would report: Gaussian measurement noise, a fixed update rate
and optional signal-acquisition latency. Intended for closed-loop testing
of estimators and autopilots inside a physics simulation.

Key components:
- NoiseModel: Private-RNG Gaussian noise for position and velocity
- DelayBuffer: Bounded FIFO releasing samples once they reach the delay age
- UpdateScheduler: Fixed-interval publish gate on simulated time
- SampleComposer: Builds noisy samples, renders fix/ground-speed/HIL messages
- GpsSensor: Per-instance pipeline tying the above together

Usage:
    from gps_emulator import GpsSensor, GpsSensorConfig, InMemoryPublisher, TruthState

    config = GpsSensorConfig.from_dict({'delay': {'enabled': True}})
    sensor = GpsSensor(config, seed=42)
    publisher = InMemoryPublisher()
    sensor.attach(publisher)

    truth = TruthState(position=(10.0, 5.0, 2.0), velocity=(1.0, 0.0, 0.0), timestamp=0.2)
    for messages in sensor.on_tick(truth, now=0.2):
        print(messages.position_fix.latitude_deg, messages.position_fix.longitude_deg)
"""

from .config import GpsSensorConfig
from .delay_buffer import DelayBuffer, OverflowPolicy
from .gps_sensor import GpsSensor, SensorState
from .host import GpsSensorPlugin, InMemoryPublisher
from .interfaces import Publisher, TruthStateProvider
from .messages import (
    DelayedSample,
    GroundSpeed,
    HilGps,
    OutputMessages,
    PositionFix,
    TruthState,
)
from .noise_model import NoiseModel, NoiseParameters
from .sample_composer import HomePosition, SampleComposer
from .update_scheduler import UpdateScheduler

__version__ = "1.0.0"
__all__ = [
    "GpsSensorConfig",
    "DelayBuffer",
    "OverflowPolicy",
    "GpsSensor",
    "SensorState",
    "GpsSensorPlugin",
    "InMemoryPublisher",
    "Publisher",
    "TruthStateProvider",
    "DelayedSample",
    "GroundSpeed",
    "HilGps",
    "OutputMessages",
    "PositionFix",
    "TruthState",
    "NoiseModel",
    "NoiseParameters",
    "HomePosition",
    "SampleComposer",
    "UpdateScheduler",
]
