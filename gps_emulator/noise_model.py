"""
GPS measurement noise.

**Noise Model**::

    x_noisy  = x  + N(0, σ_hor_pos)        y_noisy  = y  + N(0, σ_hor_pos)
    z_noisy  = z  + N(0, σ_ver_pos)
    vx_noisy = vx + N(0, σ_hor_vel)        vy_noisy = vy + N(0, σ_hor_vel)
    vz_noisy = vz + N(0, σ_ver_vel)

Every draw comes from a random.Random owned by the NoiseModel instance.
Two sensors never share a generator, so one sensor's draws cannot shift
another's sequence and a fixed seed reproduces a run exactly.
"""

import random
from dataclasses import dataclass
from typing import Optional, Tuple

# Defaults match a typical consumer-grade receiver
DEFAULT_HOR_POS_STD_DEV = 3.0  # m
DEFAULT_VER_POS_STD_DEV = 6.0  # m
DEFAULT_HOR_VEL_STD_DEV = 0.1  # m/s
DEFAULT_VER_VEL_STD_DEV = 0.1  # m/s


@dataclass(frozen=True)
class NoiseParameters:
    """
    Standard deviations of the Gaussian GPS noise.

    Attributes:
        hor_pos_std_dev: Horizontal (x, y) position std-dev in metres
        ver_pos_std_dev: Vertical (z) position std-dev in metres
        hor_vel_std_dev: Horizontal (vx, vy) velocity std-dev in m/s
        ver_vel_std_dev: Vertical (vz) velocity std-dev in m/s
    """
    hor_pos_std_dev: float = DEFAULT_HOR_POS_STD_DEV
    ver_pos_std_dev: float = DEFAULT_VER_POS_STD_DEV
    hor_vel_std_dev: float = DEFAULT_HOR_VEL_STD_DEV
    ver_vel_std_dev: float = DEFAULT_VER_VEL_STD_DEV


class NoiseModel:
    """
    Zero-mean Gaussian noise source for GPS position and velocity.

    Example usage:
        >>> model = NoiseModel(NoiseParameters(), seed=42)
        >>> dx, dy, dz = model.sample_position_noise()
        >>> dvx, dvy, dvz = model.sample_velocity_noise()
    """

    def __init__(self, params: NoiseParameters, seed: Optional[int] = None):
        """
        Args:
            params: Noise standard deviations (read-only)
            seed: Optional seed for the private RNG
        """
        self.params = params
        self._rng = random.Random(seed)

    def reseed(self, seed: Optional[int]) -> None:
        """Re-seed the private RNG."""
        self._rng.seed(seed)

    def sample_position_noise(self) -> Tuple[float, float, float]:
        """Draw (dx, dy, dz) position noise in metres."""
        p = self.params
        return (
            self._rng.gauss(0, p.hor_pos_std_dev),
            self._rng.gauss(0, p.hor_pos_std_dev),
            self._rng.gauss(0, p.ver_pos_std_dev),
        )

    def sample_velocity_noise(self) -> Tuple[float, float, float]:
        """Draw (dvx, dvy, dvz) velocity noise in m/s."""
        p = self.params
        return (
            self._rng.gauss(0, p.hor_vel_std_dev),
            self._rng.gauss(0, p.hor_vel_std_dev),
            self._rng.gauss(0, p.ver_vel_std_dev),
        )
