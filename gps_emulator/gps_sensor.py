"""
Simulated GPS receiver.

Per simulation tick::

    truth ──► UpdateScheduler ──(publish tick)──► NoiseModel draw
                                                      │
                                           SampleComposer.build
                                                      │
                      delay enabled ◄─────────────────┴────────► delay disabled
                            │                                         │
                      DelayBuffer ──(age >= delay, oldest first)──────┤
                                                                      ▼
                                                 SampleComposer.render ──► Publisher

The sensor is initialized in two phases: ``configure`` builds the pipeline,
``attach`` wires the publisher. Until a publisher is attached ``on_tick``
does nothing at all: no noise is drawn and the scheduler does not advance.
"""

import logging
from enum import Enum
from typing import List, Optional

from .config import GpsSensorConfig
from .delay_buffer import DelayBuffer
from .interfaces import Publisher
from .messages import OutputMessages, TruthState
from .noise_model import NoiseModel
from .sample_composer import SampleComposer
from .update_scheduler import UpdateScheduler

logger = logging.getLogger(__name__)


class SensorState(str, Enum):
    IDLE = "idle"                  # nothing pending
    ACCUMULATING = "accumulating"  # samples queued, none old enough
    READY = "ready"                # front sample aged past the delay


class GpsSensor:
    """
    One simulated GPS receiver instance.

    Example usage:
        >>> sensor = GpsSensor(GpsSensorConfig.from_dict({'delay': {'enabled': True}}), seed=7)
        >>> sensor.attach(publisher)
        >>> outputs = sensor.on_tick(truth, now=0.2)
    """

    def __init__(self, config: Optional[GpsSensorConfig] = None, seed: Optional[int] = None):
        self.config: Optional[GpsSensorConfig] = None
        self._publisher: Optional[Publisher] = None
        self._warned_unattached = False
        self._last_tick_time: Optional[float] = None
        if config is not None:
            self.configure(config, seed=seed)

    def configure(self, config: GpsSensorConfig, seed: Optional[int] = None) -> None:
        """
        Build the noise, buffering and scheduling pipeline.

        Args:
            config: Validated sensor configuration
            seed: Optional seed for this sensor's private noise RNG
        """
        self.config = config
        self.noise_model = NoiseModel(config.noise, seed=seed)
        self.delay_buffer = DelayBuffer(
            delay=config.delay,
            capacity=config.buffer_size_max,
            overflow_policy=config.overflow_policy,
        )
        self.scheduler = UpdateScheduler(config.update_interval)
        self.composer = SampleComposer(config.noise, home=config.home, frame_id=config.frame_id)
        self._last_tick_time = None

        logger.info(
            "GPS sensor configured: interval=%.3fs delay=%s (%.3fs) std_xy=%.2fm std_z=%.2fm",
            config.update_interval,
            "on" if config.delay_active else "off",
            config.delay,
            config.noise.hor_pos_std_dev,
            config.noise.ver_pos_std_dev,
        )

    def attach(self, publisher: Publisher) -> None:
        """Wire the publishing collaborator. Emission starts after this."""
        self._require_configured()
        self._publisher = publisher
        self._warned_unattached = False
        logger.info("GPS sensor attached, publishing on %s, %s, %s",
                    self.config.topic(self.config.gps_topic),
                    self.config.topic(self.config.ground_speed_topic),
                    self.config.topic(self.config.hil_gps_topic))

    @property
    def attached(self) -> bool:
        return self._publisher is not None

    def reset(self, seed: Optional[int] = None, start_time: float = 0.0) -> None:
        """
        Clear pending samples and restart the publish gate.

        Args:
            seed: Optional seed; if provided the noise RNG is re-seeded
            start_time: Simulated time the update interval is measured from
        """
        self._require_configured()
        if seed is not None:
            self.noise_model.reseed(seed)
        self.delay_buffer.clear()
        self.scheduler.reset(start_time)
        self._last_tick_time = None

    def state_at(self, now: float) -> SensorState:
        """Pipeline state as seen at simulated time ``now``."""
        self._require_configured()
        if not self.config.delay_active or len(self.delay_buffer) == 0:
            return SensorState.IDLE
        if self.delay_buffer.is_ready(now):
            return SensorState.READY
        return SensorState.ACCUMULATING

    @property
    def state(self) -> SensorState:
        """Pipeline state as of the last processed tick."""
        if self._last_tick_time is None:
            return SensorState.IDLE
        return self.state_at(self._last_tick_time)

    def on_tick(self, truth: TruthState, now: float) -> List[OutputMessages]:
        """
        Advance the sensor by one host simulation tick.

        Only publish ticks produce output. On a publish tick a new noisy
        sample is produced. With the delay active it is queued, then every
        queued sample whose age has reached the delay is released, oldest
        first. With the delay off the new sample is emitted in the same tick.

        Args:
            truth: Noiseless state snapshot for this tick
            now: Current simulated time in seconds

        Returns:
            Rendered messages for every sample released this tick, oldest
            first (empty list when nothing was emitted).

        Raises:
            RuntimeError: If called before ``configure``
        """
        self._require_configured()

        if self._publisher is None:
            if not self._warned_unattached:
                logger.warning("GPS sensor ticked before a publisher was attached; not emitting")
                self._warned_unattached = True
            return []

        self._last_tick_time = now
        released = []

        if self.scheduler.should_publish(now):
            sample = self.composer.build(
                truth,
                self.noise_model.sample_position_noise(),
                self.noise_model.sample_velocity_noise(),
                now,
            )
            if self.config.delay_active:
                self.delay_buffer.enqueue(sample)
                released.extend(self.delay_buffer.release_ready(now))
            else:
                released.append(sample)

        outputs = [self.composer.render(sample) for sample in released]
        for messages in outputs:
            self._publish(messages)
        return outputs

    def _publish(self, messages: OutputMessages) -> None:
        config = self.config
        self._publisher.publish(config.topic(config.gps_topic), messages.position_fix)
        self._publisher.publish(config.topic(config.ground_speed_topic), messages.ground_speed)
        self._publisher.publish(config.topic(config.hil_gps_topic), messages.hil_gps)

    def _require_configured(self) -> None:
        if self.config is None:
            raise RuntimeError("GpsSensor.configure() must be called before use")
