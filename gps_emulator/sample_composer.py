"""
Builds noisy samples from truth state and renders released samples into
the messages GPS consumers expect.

**Reprojection**

Local ENU positions are mapped to latitude/longitude with an azimuthal
equidistant projection centred on the home position::

    x_rad = north / R        y_rad = east / R        c = sqrt(x_rad² + y_rad²)
    lat = asin(cos(c)·sin(lat0) + x_rad·sin(c)·cos(lat0) / c)
    lon = lon0 + atan2(y_rad·sin(c), c·cos(lat0)·cos(c) - x_rad·sin(lat0)·sin(c))
    alt = alt0 + up

At c == 0 the result is the home position itself. A non-finite horizontal
offset gives NaN latitude and longitude.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from .messages import (
    COVARIANCE_TYPE_DIAGONAL_KNOWN,
    DelayedSample,
    GroundSpeed,
    HilGps,
    OutputMessages,
    PositionFix,
    TruthState,
    Vector3,
)
from .noise_model import NoiseParameters

EARTH_RADIUS_M = 6371000.0


@dataclass(frozen=True)
class HomePosition:
    """Geodetic origin of the local simulation frame."""
    latitude_deg: float = 47.397742
    longitude_deg: float = 8.545594
    altitude_m: float = 488.0


def reproject(position: Vector3, home: HomePosition) -> Tuple[float, float, float]:
    """
    Convert a local ENU position to (latitude_deg, longitude_deg, altitude_m).

    Args:
        position: (east, north, up) in metres relative to home
        home: Geodetic origin

    Returns:
        Tuple of latitude and longitude in degrees, altitude in metres
    """
    east, north, up = position
    lat_home = math.radians(home.latitude_deg)
    lon_home = math.radians(home.longitude_deg)

    x_rad = north / EARTH_RADIUS_M
    y_rad = east / EARTH_RADIUS_M
    c = math.sqrt(x_rad * x_rad + y_rad * y_rad)

    if not math.isfinite(c):
        # trig functions reject inf
        return math.nan, math.nan, home.altitude_m + up

    if c != 0.0:
        sin_c = math.sin(c)
        cos_c = math.cos(c)
        lat_rad = math.asin(cos_c * math.sin(lat_home) + (x_rad * sin_c * math.cos(lat_home)) / c)
        lon_rad = lon_home + math.atan2(
            y_rad * sin_c,
            c * math.cos(lat_home) * cos_c - x_rad * math.sin(lat_home) * sin_c,
        )
    else:
        lat_rad = lat_home
        lon_rad = lon_home

    return math.degrees(lat_rad), math.degrees(lon_rad), home.altitude_m + up


class SampleComposer:
    """
    Combines truth state with noise draws and renders output messages.

    Both operations are pure: the composer only holds the (immutable)
    noise parameters, home position and frame id it was configured with.
    """

    def __init__(self,
                 params: NoiseParameters,
                 home: HomePosition = HomePosition(),
                 frame_id: str = "gps"):
        self.params = params
        self.home = home
        self.frame_id = frame_id

    @staticmethod
    def build(truth: TruthState,
              noise_pos: Vector3,
              noise_vel: Vector3,
              now: float) -> DelayedSample:
        """
        Sum noise into the truth state and stamp the result with ``now``.

        Non-finite truth values propagate unchanged into the sample.
        """
        return DelayedSample(
            timestamp=now,
            position=(
                truth.position[0] + noise_pos[0],
                truth.position[1] + noise_pos[1],
                truth.position[2] + noise_pos[2],
            ),
            velocity=(
                truth.velocity[0] + noise_vel[0],
                truth.velocity[1] + noise_vel[1],
                truth.velocity[2] + noise_vel[2],
            ),
        )

    def render(self, sample: DelayedSample) -> OutputMessages:
        """
        Render a released sample as position-fix, ground-speed and HIL messages.

        Args:
            sample: Sample released by the delay buffer (or passed through)

        Returns:
            OutputMessages derived entirely from ``sample`` and the
            composer's configuration.
        """
        p = self.params
        latitude, longitude, altitude = reproject(sample.position, self.home)
        v_east, v_north, v_up = sample.velocity

        hor_var = p.hor_pos_std_dev ** 2
        ver_var = p.ver_pos_std_dev ** 2

        position_fix = PositionFix(
            timestamp=sample.timestamp,
            latitude_deg=latitude,
            longitude_deg=longitude,
            altitude_m=altitude,
            position_covariance=(
                hor_var, 0.0, 0.0,
                0.0, hor_var, 0.0,
                0.0, 0.0, ver_var,
            ),
            covariance_type=COVARIANCE_TYPE_DIAGONAL_KNOWN,
            frame_id=self.frame_id,
        )

        ground_speed = GroundSpeed(
            timestamp=sample.timestamp,
            linear=sample.velocity,
        )

        # Course over ground: 0 = north, clockwise
        course = math.degrees(math.atan2(v_east, v_north)) % 360.0

        hil_gps = HilGps(
            time_usec=int(round(sample.timestamp * 1e6)),
            latitude_deg=latitude,
            longitude_deg=longitude,
            altitude_m=altitude,
            eph=p.hor_pos_std_dev,
            epv=p.ver_pos_std_dev,
            velocity=math.hypot(v_east, v_north),
            velocity_east=v_east,
            velocity_north=v_north,
            velocity_up=v_up,
            course_over_ground_deg=course,
        )

        return OutputMessages(
            position_fix=position_fix,
            ground_speed=ground_speed,
            hil_gps=hil_gps,
        )
