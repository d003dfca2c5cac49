"""
Unit tests for SampleComposer rendering and geodetic reprojection.
"""

import math

import numpy as np
import pytest

from gps_emulator.messages import COVARIANCE_TYPE_DIAGONAL_KNOWN, DelayedSample, HilGps
from gps_emulator.noise_model import NoiseParameters
from gps_emulator.sample_composer import EARTH_RADIUS_M, HomePosition, SampleComposer, reproject

HOME = HomePosition(latitude_deg=47.397742, longitude_deg=8.545594, altitude_m=488.0)
PARAMS = NoiseParameters(hor_pos_std_dev=3.0, ver_pos_std_dev=6.0,
                         hor_vel_std_dev=0.1, ver_vel_std_dev=0.1)


def _make_sample(position=(0.0, 0.0, 0.0), velocity=(0.0, 0.0, 0.0), timestamp=1.5) -> DelayedSample:
    return DelayedSample(timestamp=timestamp, position=position, velocity=velocity)


class TestReproject:

    def test_origin_maps_to_home(self):
        lat, lon, alt = reproject((0.0, 0.0, 0.0), HOME)

        assert lat == pytest.approx(HOME.latitude_deg, abs=1e-12)
        assert lon == pytest.approx(HOME.longitude_deg, abs=1e-12)
        assert alt == HOME.altitude_m

    def test_north_offset_increases_latitude(self):
        lat, lon, _ = reproject((0.0, 1000.0, 0.0), HOME)

        expected = HOME.latitude_deg + math.degrees(1000.0 / EARTH_RADIUS_M)
        assert lat == pytest.approx(expected, abs=1e-9)
        assert lon == pytest.approx(HOME.longitude_deg, abs=1e-9)

    def test_east_offset_at_equator_increases_longitude(self):
        equator = HomePosition(latitude_deg=0.0, longitude_deg=0.0, altitude_m=0.0)

        lat, lon, _ = reproject((1000.0, 0.0, 0.0), equator)

        assert lat == pytest.approx(0.0, abs=1e-12)
        assert lon == pytest.approx(math.degrees(1000.0 / EARTH_RADIUS_M), abs=1e-9)

    def test_east_offset_scales_with_latitude(self):
        """One km east spans more longitude the further from the equator."""
        _, lon_equator, _ = reproject((1000.0, 0.0, 0.0), HomePosition(0.0, 0.0, 0.0))
        _, lon_60, _ = reproject((1000.0, 0.0, 0.0), HomePosition(60.0, 0.0, 0.0))

        assert lon_60 == pytest.approx(2.0 * lon_equator, rel=1e-3)

    def test_up_offset_adds_altitude(self):
        _, _, alt = reproject((0.0, 0.0, 12.5), HOME)

        assert alt == pytest.approx(500.5)


class TestRender:

    def test_position_fix_covariance_is_squared_std(self):
        composer = SampleComposer(PARAMS, home=HOME)

        fix = composer.render(_make_sample()).position_fix

        assert fix.covariance_type == COVARIANCE_TYPE_DIAGONAL_KNOWN
        np.testing.assert_allclose(fix.covariance_matrix(), np.diag([9.0, 9.0, 36.0]))

    def test_position_fix_carries_timestamp_and_frame(self):
        composer = SampleComposer(PARAMS, home=HOME, frame_id="uav1/gps")

        fix = composer.render(_make_sample(timestamp=2.25)).position_fix

        assert fix.timestamp == 2.25
        assert fix.frame_id == "uav1/gps"

    def test_ground_speed_is_sample_velocity(self):
        composer = SampleComposer(PARAMS, home=HOME)

        speed = composer.render(_make_sample(velocity=(1.0, -2.0, 0.5), timestamp=3.0)).ground_speed

        assert speed.linear == (1.0, -2.0, 0.5)
        assert speed.timestamp == 3.0

    def test_hil_gps_fields(self):
        composer = SampleComposer(PARAMS, home=HOME)

        out = composer.render(_make_sample(position=(0.0, 0.0, 2.0), velocity=(3.0, 4.0, 0.5)))
        hil = out.hil_gps

        assert hil.time_usec == 1_500_000
        assert hil.latitude_deg == out.position_fix.latitude_deg
        assert hil.longitude_deg == out.position_fix.longitude_deg
        assert hil.altitude_m == pytest.approx(490.0)
        assert hil.eph == 3.0
        assert hil.epv == 6.0
        assert hil.velocity == pytest.approx(5.0)
        assert hil.velocity_east == 3.0
        assert hil.velocity_north == 4.0
        assert hil.velocity_up == 0.5
        assert hil.course_over_ground_deg == pytest.approx(math.degrees(math.atan2(3.0, 4.0)))

    @pytest.mark.parametrize("velocity, course", [
        ((0.0, 1.0, 0.0), 0.0),
        ((1.0, 0.0, 0.0), 90.0),
        ((0.0, -1.0, 0.0), 180.0),
        ((-1.0, 0.0, 0.0), 270.0),
    ])
    def test_course_over_ground_measured_from_north(self, velocity, course):
        composer = SampleComposer(PARAMS, home=HOME)

        hil = composer.render(_make_sample(velocity=velocity)).hil_gps

        assert hil.course_over_ground_deg == pytest.approx(course)

    @pytest.mark.parametrize("position", [
        (math.inf, 0.0, 0.0),
        (0.0, -math.inf, 0.0),
        (math.nan, 0.0, 0.0),
        (0.0, math.nan, 0.0),
    ])
    def test_non_finite_position_renders_as_nan_fix(self, position):
        composer = SampleComposer(PARAMS, home=HOME)

        out = composer.render(_make_sample(position=position))

        assert math.isnan(out.position_fix.latitude_deg)
        assert math.isnan(out.position_fix.longitude_deg)
        assert out.position_fix.altitude_m == HOME.altitude_m
        assert math.isnan(out.hil_gps.latitude_deg)
        assert math.isnan(out.hil_gps.longitude_deg)

    def test_non_finite_altitude_propagates(self):
        composer = SampleComposer(PARAMS, home=HOME)

        fix = composer.render(_make_sample(position=(0.0, 0.0, math.inf))).position_fix

        assert fix.latitude_deg == pytest.approx(HOME.latitude_deg)
        assert fix.altitude_m == math.inf

    def test_render_is_idempotent(self):
        composer = SampleComposer(PARAMS, home=HOME)
        sample = _make_sample(position=(12.3, -4.5, 6.7), velocity=(0.1, 0.2, -0.3))

        first = composer.render(sample)
        second = composer.render(sample)

        assert first == second
        assert first.position_fix.latitude_deg == second.position_fix.latitude_deg
        assert first.hil_gps.encode() == second.hil_gps.encode()


class TestHilEncoding:

    def test_encode_scales_to_integer_fields(self):
        hil = HilGps(
            time_usec=1_500_000,
            latitude_deg=47.397742,
            longitude_deg=8.545594,
            altitude_m=488.123,
            eph=3.0,
            epv=6.0,
            velocity=5.0,
            velocity_east=3.0,
            velocity_north=4.0,
            velocity_up=0.5,
            course_over_ground_deg=36.8699,
        )

        encoded = hil.encode()

        assert encoded == {
            'time_usec': 1_500_000,
            'lat': 473977420,
            'lon': 85455940,
            'alt': 488123,
            'eph': 300,
            'epv': 600,
            'vel': 500,
            'vn': 400,
            've': 300,
            'vd': -50,
            'cog': 3687,
        }

    def test_encode_wraps_course_at_360(self):
        hil = HilGps(0, 0.0, 0.0, 0.0, 1.0, 1.0, 0.0, 0.0, 0.0, 0.0, 359.999)

        assert hil.encode()['cog'] == 0
