"""
Unit Tests for SGP4 Propagator
==============================

Tests for the SGP4 wrapper.

Tests:
------
TestSgp4Propagator
  - test_known_solution_iss_reference_position : verify the sgp4 documentation example within 1 km
  - test_known_solution_display_convention     : verify km -> Earth radii and axis remap
  - test_sanity_check_marker_on_polyline       : verify SGP4 markers lie on the mean-element polyline
  - test_known_solution_mean_elements          : verify elements read from the TLE
  - test_known_solution_orbital_period         : verify 86400 / n [rev/day]
  - test_sanity_check_naive_time_is_utc        : verify naive datetimes are treated as UTC
  - test_sanity_check_library_error_is_zero    : verify an SGP4 error code yields the zero state

TestSgp4PropagatorMalformed
  - test_sanity_check_malformed_unavailable    : verify malformed TLEs leave every operation unavailable

TestSyntheticTleRoundtrip
  - test_roundtrip_state_to_tle_to_state       : verify synthetic TLE reproduces the state at epoch

Usage:
------
  python -m pytest orbit_mapper/validation/test_sgp4_propagator.py -v
"""
import logging
import pytest
import numpy as np

from datetime import datetime, timedelta, timezone

from orbit_mapper.model.constants             import EARTH
from orbit_mapper.model.display               import DisplayConvention
from orbit_mapper.model.orbit_sampler         import sample_orbit_polyline
from orbit_mapper.propagation.sgp4_propagator import Sgp4Propagator
from orbit_mapper.utility.tle_helper          import build_synthetic_tle
from orbit_mapper.validation.metrics          import distance_to_polyline


# sgp4 documentation example: jd, fr = 2458827, 0.362605
ISS_REFERENCE_TIME    = datetime(2019, 12, 8, 20, 42, 9, 72000, tzinfo=timezone.utc)
ISS_REFERENCE_POS_VEC = np.array([-6102.443276428913, -986.3320160519846, -2820.3130707199672])


class StubSatrec:
  """Satrec stand-in whose sgp4 call always fails with the given error code."""
  def __init__(self, error_code):
    self.error_code = error_code

  def sgp4(self, jd, fr):
    return self.error_code, (1.0, 2.0, 3.0), (4.0, 5.0, 6.0)


class TestSgp4Propagator:

  def test_known_solution_iss_reference_position(self, iss_tle, identity_convention):
    propagator = Sgp4Propagator(*iss_tle, convention=identity_convention)
    state      = propagator.propagate(ISS_REFERENCE_TIME)
    assert propagator.is_available
    assert np.linalg.norm(state.position - ISS_REFERENCE_POS_VEC) < 1.0

  def test_known_solution_display_convention(self, iss_tle, identity_convention):
    state_km = Sgp4Propagator(*iss_tle, convention=identity_convention).propagate(ISS_REFERENCE_TIME)
    state_re = Sgp4Propagator(*iss_tle).propagate(ISS_REFERENCE_TIME)
    expected = DisplayConvention().state_from_km(state_km.position, state_km.velocity)
    assert np.allclose(state_re.position, expected.position, rtol=1e-12)
    assert np.allclose(state_re.velocity, expected.velocity, rtol=1e-12)

  def test_sanity_check_marker_on_polyline(self, iss_tle, iss_epoch):
    convention = DisplayConvention()
    propagator = Sgp4Propagator(*iss_tle, convention=convention)
    polyline   = sample_orbit_polyline(propagator.try_get_mean_elements(), 512, convention)
    period     = propagator.try_get_orbital_period_seconds()
    tolerance  = 50.0 / EARTH.RADIUS.EQUATOR

    for fraction in np.linspace(0.0, 1.0, 13):
      state = propagator.propagate(iss_epoch + timedelta(seconds=fraction * period))
      assert not state.is_zero()
      assert distance_to_polyline(state.position, polyline) < tolerance

  def test_known_solution_mean_elements(self, iss_tle, iss_epoch):
    elements = Sgp4Propagator(*iss_tle).try_get_mean_elements()
    assert np.isclose(elements.inclination_deg,   51.6439,   atol=1e-6)
    assert np.isclose(elements.raan_deg,          211.2001,  atol=1e-6)
    assert np.isclose(elements.eccentricity,      0.0007417, atol=1e-10)
    assert np.isclose(elements.arg_periapsis_deg, 17.6667,   atol=1e-6)
    assert np.isclose(elements.mean_anomaly_deg,  85.6398,   atol=1e-6)
    # About 420 km altitude, in Earth radii
    assert 1.05 < elements.semi_major_axis < 1.08
    assert abs((elements.epoch - iss_epoch).total_seconds()) < 1e-3

  def test_known_solution_orbital_period(self, iss_tle):
    period = Sgp4Propagator(*iss_tle).try_get_orbital_period_seconds()
    assert np.isclose(period, 86400.0 / 15.50103472, rtol=1e-8)

  def test_sanity_check_naive_time_is_utc(self, iss_tle, identity_convention):
    propagator = Sgp4Propagator(*iss_tle, convention=identity_convention)
    state_aware = propagator.propagate(ISS_REFERENCE_TIME)
    state_naive = propagator.propagate(ISS_REFERENCE_TIME.replace(tzinfo=None))
    assert np.array_equal(state_aware.position, state_naive.position)

  def test_sanity_check_library_error_is_zero(self, iss_tle):
    propagator = Sgp4Propagator(*iss_tle)
    propagator.satellite = StubSatrec(error_code=6)
    assert propagator.propagate(ISS_REFERENCE_TIME).is_zero()


class TestSgp4PropagatorMalformed:

  @pytest.mark.parametrize("tle_line_1, tle_line_2", [
    ("", ""),
    (None, None),
    ("1 25544U 98067A", "2 25544  51.6439"),
    ("2 25544  51.6439 211.2001 0007417  17.6667  85.6398 15.50103472202482",
     "1 25544U 98067A   19343.69339541  .00001764  00000-0  38792-4 0  9991"),
    ("1 25544U 98067A   19343.69339541  .00001764  00000-0  38792-4 0  9991",
     "X 25544  51.6439 211.2001 0007417  17.6667  85.6398 15.50103472202482"),
  ])
  def test_sanity_check_malformed_unavailable(self, tle_line_1, tle_line_2, caplog):
    with caplog.at_level(logging.WARNING):
      propagator = Sgp4Propagator(tle_line_1, tle_line_2)

    assert not propagator.is_available
    assert propagator.epoch is None
    assert propagator.propagate(ISS_REFERENCE_TIME).is_zero()
    assert propagator.try_get_mean_elements() is None
    assert propagator.try_get_orbital_period_seconds() is None
    assert any(record.levelno == logging.WARNING for record in caplog.records)


class TestSyntheticTleRoundtrip:

  def test_roundtrip_state_to_tle_to_state(self, epoch, leo_state, identity_convention):
    pos_vec, vel_vec = leo_state
    propagator = Sgp4Propagator(*build_synthetic_tle(epoch, pos_vec, vel_vec), convention=identity_convention)
    state      = propagator.propagate(epoch)

    assert propagator.is_available
    assert np.linalg.norm(state.position - pos_vec) < 20.0
    assert np.isclose(propagator.try_get_orbital_period_seconds(), 2 * np.pi * np.sqrt(6778.0**3 / EARTH.GP), rtol=1e-6)
