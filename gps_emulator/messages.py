"""
Message and sample types passed through the GPS sensor pipeline.

TruthState comes in from the physics host, DelayedSample lives inside the
delay buffer, and OutputMessages is what consumers receive. All of them are
frozen dataclasses.

Frame convention: local simulation frame, x east, y north, z up (ENU).
"""

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

Vector3 = Tuple[float, float, float]

# NavSatFix covariance types
COVARIANCE_TYPE_UNKNOWN = 0
COVARIANCE_TYPE_APPROXIMATED = 1
COVARIANCE_TYPE_DIAGONAL_KNOWN = 2
COVARIANCE_TYPE_KNOWN = 3


@dataclass(frozen=True)
class TruthState:
    """
    Noiseless body state supplied by the physics host for one tick.

    Attributes:
        position: (x, y, z) in metres, local ENU frame
        velocity: (vx, vy, vz) in m/s, local ENU frame
        timestamp: Simulated time in seconds
    """
    position: Vector3
    velocity: Vector3
    timestamp: float


@dataclass(frozen=True)
class DelayedSample:
    """
    Noisy reading waiting to be released by the delay buffer.

    Attributes:
        timestamp: Simulated time (seconds) at which the reading was taken
        position: Noisy (x, y, z) in metres
        velocity: Noisy (vx, vy, vz) in m/s
    """
    timestamp: float
    position: Vector3
    velocity: Vector3


@dataclass(frozen=True)
class PositionFix:
    """Position fix with covariance (NavSatFix equivalent)."""
    timestamp: float
    latitude_deg: float
    longitude_deg: float
    altitude_m: float
    position_covariance: Tuple[float, ...]  # row-major 3x3
    covariance_type: int
    frame_id: str

    def covariance_matrix(self) -> np.ndarray:
        """Covariance as a 3x3 array (east, north, up)."""
        return np.array(self.position_covariance, dtype=np.float64).reshape(3, 3)


@dataclass(frozen=True)
class GroundSpeed:
    """Velocity report (TwistStamped equivalent, linear part only)."""
    timestamp: float
    linear: Vector3


@dataclass(frozen=True)
class HilGps:
    """
    Raw GPS reading for a hardware-in-the-loop autopilot bridge.

    Holds the decoded scalar values. ``encode()`` produces the scaled
    integer fields used on the HIL wire.

    Attributes:
        time_usec: Sample time in microseconds of simulated time
        latitude_deg: Latitude in decimal degrees
        longitude_deg: Longitude in decimal degrees
        altitude_m: Altitude above mean sea level in metres
        eph: Horizontal position std-dev in metres
        epv: Vertical position std-dev in metres
        velocity: Horizontal ground speed in m/s
        velocity_east: East velocity in m/s
        velocity_north: North velocity in m/s
        velocity_up: Up velocity in m/s
        course_over_ground_deg: Direction of travel, degrees from north in [0, 360)
    """
    time_usec: int
    latitude_deg: float
    longitude_deg: float
    altitude_m: float
    eph: float
    epv: float
    velocity: float
    velocity_east: float
    velocity_north: float
    velocity_up: float
    course_over_ground_deg: float

    def encode(self) -> Dict[str, int]:
        """
        Scale to the integer encoding expected by HIL_GPS consumers.

        Returns:
            Dict with lat/lon in degE7, alt in mm, eph/epv in cm,
            velocities in cm/s (north/east/down) and cog in cdeg.
        """
        return {
            'time_usec': self.time_usec,
            'lat': int(round(self.latitude_deg * 1e7)),
            'lon': int(round(self.longitude_deg * 1e7)),
            'alt': int(round(self.altitude_m * 1000.0)),
            'eph': int(round(self.eph * 100.0)),
            'epv': int(round(self.epv * 100.0)),
            'vel': int(round(self.velocity * 100.0)),
            'vn': int(round(self.velocity_north * 100.0)),
            've': int(round(self.velocity_east * 100.0)),
            'vd': int(round(-self.velocity_up * 100.0)),
            'cog': int(round(self.course_over_ground_deg * 100.0)) % 36000,
        }


@dataclass(frozen=True)
class OutputMessages:
    """The three renderings of a single released sample."""
    position_fix: PositionFix
    ground_speed: GroundSpeed
    hil_gps: HilGps
