"""
Unit Tests for Kepler Propagator
================================

Tests for analytic two-body propagation of orbital elements.

Tests:
------
TestKeplerPropagator
  - test_known_solution_period                 : verify 2π sqrt(a³/μ)
  - test_sanity_check_marker_on_polyline       : verify markers lie on the sampled polyline
  - test_sanity_check_returns_after_one_period : verify state repeats after one period
  - test_sanity_check_velocity_units           : verify km/s speed of a circular orbit in km
  - test_sanity_check_no_epoch_is_static       : verify state at the epoch anomaly without an epoch
  - test_sanity_check_invalid_elements         : verify zero sentinel for a <= 0 or e >= 1

Usage:
------
  python -m pytest orbit_mapper/validation/test_propagator.py -v
"""
import numpy as np

from dataclasses import replace
from datetime    import timedelta

from orbit_mapper.model.constants        import EARTH
from orbit_mapper.model.display          import DisplayConvention
from orbit_mapper.model.elements         import OrbitalElements
from orbit_mapper.model.orbit_sampler    import sample_orbit_polyline
from orbit_mapper.propagation.propagator import KeplerPropagator
from orbit_mapper.validation.metrics     import distance_to_polyline


class TestKeplerPropagator:

  def test_known_solution_period(self, elliptical_elements):
    propagator = KeplerPropagator(elliptical_elements)
    sma_km     = elliptical_elements.semi_major_axis * EARTH.RADIUS.EQUATOR
    expected   = 2 * np.pi * np.sqrt(sma_km**3 / EARTH.GP)
    assert np.isclose(propagator.try_get_orbital_period_seconds(), expected, rtol=1e-12)

  def test_sanity_check_marker_on_polyline(self, elliptical_elements, epoch):
    convention = DisplayConvention()
    propagator = KeplerPropagator(elliptical_elements, convention, epoch)
    polyline   = sample_orbit_polyline(elliptical_elements, 512, convention)
    period     = propagator.try_get_orbital_period_seconds()

    for fraction in np.linspace(0.0, 1.0, 17):
      state = propagator.propagate(epoch + timedelta(seconds=fraction * period))
      assert not state.is_zero()
      assert distance_to_polyline(state.position, polyline) < 0.03

  def test_sanity_check_returns_after_one_period(self, elliptical_elements, epoch):
    propagator = KeplerPropagator(replace(elliptical_elements, epoch=epoch))
    period     = propagator.try_get_orbital_period_seconds()
    state_o    = propagator.propagate(epoch)
    state_f    = propagator.propagate(epoch + timedelta(seconds=period))
    assert np.allclose(state_f.position, state_o.position, atol=1e-5)
    assert np.allclose(state_f.velocity, state_o.velocity, atol=1e-8)

  def test_sanity_check_velocity_units(self, identity_convention, epoch):
    pos_mag  = 7000.0
    elements = OrbitalElements(semi_major_axis=pos_mag, epoch=epoch)
    state    = KeplerPropagator(elements, identity_convention).propagate(epoch)
    assert np.allclose(state.position, [pos_mag, 0.0, 0.0])
    assert np.isclose(np.linalg.norm(state.velocity), np.sqrt(EARTH.GP / pos_mag), rtol=1e-12)

  def test_sanity_check_no_epoch_is_static(self, elliptical_elements, epoch):
    convention = DisplayConvention()
    propagator = KeplerPropagator(elliptical_elements, convention)
    polyline   = sample_orbit_polyline(elliptical_elements, 64, convention)
    state_a    = propagator.propagate(epoch)
    state_b    = propagator.propagate(epoch + timedelta(hours=3))
    assert np.allclose(state_a.position, state_b.position)
    assert np.allclose(state_a.position, polyline[0], atol=1e-10)

  def test_sanity_check_invalid_elements(self, epoch):
    assert KeplerPropagator(OrbitalElements(semi_major_axis=0.0)).propagate(epoch).is_zero()
    assert KeplerPropagator(OrbitalElements(semi_major_axis=-1.0)).try_get_orbital_period_seconds() is None
    assert KeplerPropagator(OrbitalElements(semi_major_axis=2.0, eccentricity=1.2)).propagate(epoch).is_zero()
