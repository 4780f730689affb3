"""
Unit Tests for Display Convention
=================================

Tests:
------
TestDisplayConvention
  - test_known_solution_eci_z_is_display_up   : verify ECI +Z maps to display +Y
  - test_known_solution_length_scaling        : verify km are divided by the length unit
  - test_roundtrip_remap_unmap                : verify unmap(remap(v)) = v
  - test_roundtrip_state_from_km_to_km        : verify state_to_km inverts state_from_km
  - test_sanity_check_identity_passthrough    : verify identity convention changes nothing
  - test_sanity_check_remap_polyline_shape    : verify remap works on Nx3 arrays

Usage:
------
  python -m pytest orbit_mapper/validation/test_display.py -v
"""
import numpy as np

from orbit_mapper.model.constants import EARTH
from orbit_mapper.model.display   import DisplayConvention


class TestDisplayConvention:

  def test_known_solution_eci_z_is_display_up(self):
    convention = DisplayConvention()
    assert np.allclose(convention.remap([0.0, 0.0, 1.0]), [0.0, 1.0, 0.0])
    assert np.allclose(convention.remap([1.0, 2.0, 3.0]), [1.0, 3.0, -2.0])

  def test_known_solution_length_scaling(self):
    convention = DisplayConvention()
    state      = convention.state_from_km([EARTH.RADIUS.EQUATOR, 0.0, 0.0], [0.0, 0.0, EARTH.RADIUS.EQUATOR])
    assert np.allclose(state.position, [1.0, 0.0, 0.0])
    assert np.allclose(state.velocity, [0.0, 1.0, 0.0])

  def test_roundtrip_remap_unmap(self):
    convention = DisplayConvention()
    vec        = np.array([1.5, -2.25, 3.75])
    assert np.allclose(convention.unmap(convention.remap(vec)), vec)

  def test_roundtrip_state_from_km_to_km(self, leo_state):
    convention       = DisplayConvention()
    pos_vec, vel_vec = leo_state
    state            = convention.state_from_km(pos_vec, vel_vec)
    pos_back, vel_back = convention.state_to_km(state)
    assert np.allclose(pos_back, pos_vec, rtol=1e-14)
    assert np.allclose(vel_back, vel_vec, rtol=1e-14)

  def test_sanity_check_identity_passthrough(self, leo_state, identity_convention):
    pos_vec, vel_vec = leo_state
    state            = identity_convention.state_from_km(pos_vec, vel_vec)
    assert np.array_equal(state.position, pos_vec)
    assert np.array_equal(state.velocity, vel_vec)

  def test_sanity_check_remap_polyline_shape(self):
    convention = DisplayConvention()
    polyline   = np.arange(12.0).reshape(4, 3)
    remapped   = convention.remap(polyline)
    assert remapped.shape == (4, 3)
    assert np.allclose(remapped[:, 1],  polyline[:, 2])
    assert np.allclose(remapped[:, 2], -polyline[:, 1])
