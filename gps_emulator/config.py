"""
GPS sensor configuration loading and validation.

Parameters start from complete defaults, are deep-merged with an optional
user JSON file, and are validated before any sensor component is built.
Sensor components assume the values they receive are already valid.

Example params file (partial overrides are allowed)::

    {
        "noise": {"hor_pos_std_dev": 1.5},
        "delay": {"enabled": true, "seconds": 0.2}
    }
"""

import copy
import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

from .delay_buffer import DEFAULT_BUFFER_SIZE_MAX, OverflowPolicy
from .noise_model import (
    DEFAULT_HOR_POS_STD_DEV,
    DEFAULT_HOR_VEL_STD_DEV,
    DEFAULT_VER_POS_STD_DEV,
    DEFAULT_VER_VEL_STD_DEV,
    NoiseParameters,
)
from .sample_composer import HomePosition
from .update_scheduler import DEFAULT_UPDATE_INTERVAL

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 0.12  # s
DEFAULT_ENABLE_DELAY = False


def default_params() -> dict:
    """
    Default parameters.

    Returns:
        Dictionary with a complete, valid GPS sensor configuration
    """
    return {
        'noise': {
            'hor_pos_std_dev': DEFAULT_HOR_POS_STD_DEV,
            'ver_pos_std_dev': DEFAULT_VER_POS_STD_DEV,
            'hor_vel_std_dev': DEFAULT_HOR_VEL_STD_DEV,
            'ver_vel_std_dev': DEFAULT_VER_VEL_STD_DEV,
        },
        'update': {
            'interval_s': DEFAULT_UPDATE_INTERVAL,
        },
        'delay': {
            'enabled': DEFAULT_ENABLE_DELAY,
            'seconds': DEFAULT_DELAY,
            'buffer_size_max': DEFAULT_BUFFER_SIZE_MAX,
            'overflow_policy': OverflowPolicy.DROP_OLDEST.value,
        },
        'home': {
            'latitude_deg': 47.397742,
            'longitude_deg': 8.545594,
            'altitude_m': 488.0,
        },
        'topics': {
            'namespace': '',
            'gps': 'gps',
            'ground_speed': 'ground_speed',
            'hil_gps': 'gps_hil',
        },
        'frame_id': 'gps',
    }


def recursive_update(base: dict, update: dict) -> dict:
    """
    Recursively update base dictionary with values from update dictionary.

    Nested dictionaries are merged rather than replaced, so a partial params
    file only overrides the keys it names.

    Example:
        base = {"delay": {"enabled": False, "seconds": 0.12}}
        update = {"delay": {"enabled": True}}
        result = {"delay": {"enabled": True, "seconds": 0.12}}

    Args:
        base: Base dictionary (typically defaults)
        update: Update dictionary (typically user-provided overrides)

    Returns:
        Updated base dictionary (modified in-place, also returned)
    """
    for key, value in update.items():
        if isinstance(value, dict) and key in base and isinstance(base[key], dict):
            recursive_update(base[key], value)
        else:
            base[key] = value
    return base


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_params(params: dict) -> None:
    """
    Validate merged parameters.

    Checks:
    1. Type validity: numbers are numbers, flags are booleans
    2. Range constraints: std-devs >= 0, interval > 0, delay >= 0, ...
    3. Known enum values and non-empty topic names

    Raises:
        ValueError: If any validation check fails with descriptive message
    """
    for section in ['noise', 'update', 'delay', 'home', 'topics']:
        if not isinstance(params[section], dict):
            raise ValueError(f"{section} must be an object, got {params[section]!r}")

    noise = params['noise']
    for key in ['hor_pos_std_dev', 'ver_pos_std_dev', 'hor_vel_std_dev', 'ver_vel_std_dev']:
        value = noise[key]
        if not _is_number(value) or not math.isfinite(value):
            raise ValueError(f"noise.{key} must be a finite number, got {value!r}")
        if value < 0:
            raise ValueError(f"noise.{key} must be non-negative, got {value}")

    interval = params['update']['interval_s']
    if not _is_number(interval) or not 0 < interval < math.inf:
        raise ValueError(f"update.interval_s must be positive, got {interval!r}")

    delay = params['delay']
    if not isinstance(delay['enabled'], bool):
        raise ValueError(f"delay.enabled must be true or false, got {delay['enabled']!r}")
    if not _is_number(delay['seconds']) or not 0 <= delay['seconds'] < math.inf:
        raise ValueError(f"delay.seconds must be non-negative, got {delay['seconds']!r}")
    size = delay['buffer_size_max']
    if not isinstance(size, int) or isinstance(size, bool) or size <= 0:
        raise ValueError(f"delay.buffer_size_max must be a positive integer, got {size!r}")
    policies = [p.value for p in OverflowPolicy]
    if delay['overflow_policy'] not in policies:
        raise ValueError(
            f"delay.overflow_policy must be one of {policies}, got {delay['overflow_policy']!r}"
        )

    home = params['home']
    for key in ['latitude_deg', 'longitude_deg', 'altitude_m']:
        if not _is_number(home[key]):
            raise ValueError(f"home.{key} must be a number, got {home[key]!r}")
    if not -90.0 <= home['latitude_deg'] <= 90.0:
        raise ValueError(f"home.latitude_deg must be in [-90, 90], got {home['latitude_deg']}")
    if not -180.0 <= home['longitude_deg'] <= 180.0:
        raise ValueError(f"home.longitude_deg must be in [-180, 180], got {home['longitude_deg']}")

    topics = params['topics']
    if not isinstance(topics['namespace'], str):
        raise ValueError("topics.namespace must be a string")
    for key in ['gps', 'ground_speed', 'hil_gps']:
        if not isinstance(topics[key], str) or not topics[key]:
            raise ValueError(f"topics.{key} must be a non-empty string")

    if not isinstance(params['frame_id'], str):
        raise ValueError("frame_id must be a string")


@dataclass(frozen=True)
class GpsSensorConfig:
    """
    Validated, immutable configuration of one simulated GPS sensor.

    Build it with ``from_dict`` or ``from_params_file`` rather than directly,
    so the values go through validation.
    """
    noise: NoiseParameters
    update_interval: float
    enable_delay: bool
    delay: float
    buffer_size_max: int
    overflow_policy: OverflowPolicy
    home: HomePosition
    namespace: str
    gps_topic: str
    ground_speed_topic: str
    hil_gps_topic: str
    frame_id: str

    @property
    def delay_active(self) -> bool:
        """True when samples are held back before release."""
        return self.enable_delay and self.delay > 0

    def topic(self, name: str) -> str:
        """Prefix a topic name with the namespace, if one is set."""
        if not self.namespace:
            return name
        return f"{self.namespace.rstrip('/')}/{name}"

    @classmethod
    def from_dict(cls, overrides: Optional[dict] = None) -> "GpsSensorConfig":
        """
        Merge overrides onto the defaults, validate and build the config.

        Raises:
            ValueError: If parameters fail validation
        """
        params = default_params()
        if overrides:
            recursive_update(params, copy.deepcopy(overrides))
        validate_params(params)

        noise = params['noise']
        delay = params['delay']
        home = params['home']
        topics = params['topics']
        return cls(
            noise=NoiseParameters(
                hor_pos_std_dev=float(noise['hor_pos_std_dev']),
                ver_pos_std_dev=float(noise['ver_pos_std_dev']),
                hor_vel_std_dev=float(noise['hor_vel_std_dev']),
                ver_vel_std_dev=float(noise['ver_vel_std_dev']),
            ),
            update_interval=float(params['update']['interval_s']),
            enable_delay=delay['enabled'],
            delay=float(delay['seconds']),
            buffer_size_max=delay['buffer_size_max'],
            overflow_policy=OverflowPolicy(delay['overflow_policy']),
            home=HomePosition(
                latitude_deg=float(home['latitude_deg']),
                longitude_deg=float(home['longitude_deg']),
                altitude_m=float(home['altitude_m']),
            ),
            namespace=topics['namespace'],
            gps_topic=topics['gps'],
            ground_speed_topic=topics['ground_speed'],
            hil_gps_topic=topics['hil_gps'],
            frame_id=params['frame_id'],
        )

    @classmethod
    def from_params_file(cls, params_file: str) -> "GpsSensorConfig":
        """
        Load a JSON params file on top of the defaults.

        Raises:
            FileNotFoundError: If params_file doesn't exist
            json.JSONDecodeError: If params_file contains invalid JSON
            ValueError: If parameters fail validation
        """
        with open(params_file, 'r') as f:
            user_params = json.load(f)
        config = cls.from_dict(user_params)
        logger.info("Loaded GPS sensor params from %s", params_file)
        return config
