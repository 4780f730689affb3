"""
Unit Tests for Kepler Solver
============================

Tests for Kepler's equation, anomaly conversions, and the perifocal to
inertial transform.

Tests:
------
TestSolveKepler
  - test_known_solution_circular                : verify ea = ma for a circular orbit
  - test_sanity_check_residual                  : verify Kepler's equation residual is small
  - test_sanity_check_high_eccentricity         : verify convergence for ecc near 1

TestAnomalyConversions
  - test_known_solution_anomalies_at_periapsis  : verify all anomalies = 0 at periapsis
  - test_known_solution_anomalies_at_apoapsis   : verify all anomalies = π at apoapsis
  - test_roundtrip_ma_to_ta_to_ma               : verify ma -> ta -> ma returns the original

TestPositionFromElements
  - test_known_solution_periapsis_radius        : verify |r| = a(1 - e) at periapsis
  - test_known_solution_ascending_node          : verify position at the ascending node
  - test_sanity_check_rotation_orthonormal      : verify rotation matrix is orthonormal
  - test_sanity_check_velocity_vis_viva         : verify speed matches vis-viva
  - test_sanity_check_ecc_does_not_change_inclination : verify orbit normal matches inclination

Usage:
------
  python -m pytest orbit_mapper/validation/test_kepler.py -v
"""
import pytest
import numpy as np

from dataclasses import replace

from orbit_mapper.model.elements import OrbitalElements
from orbit_mapper.model.kepler   import KeplerSolver


class TestSolveKepler:
  """
  Tests for Newton iteration on Kepler's equation.
  """

  def test_known_solution_circular(self):
    for ma in np.linspace(0.0, 2 * np.pi, 13):
      assert np.isclose(KeplerSolver.solve_kepler(ma, 0.0), ma, atol=1e-12)

  @pytest.mark.parametrize("ecc", [0.01, 0.3, 0.7, 0.85])
  def test_sanity_check_residual(self, ecc):
    for ma in np.linspace(0.0, 2 * np.pi, 37):
      ea = KeplerSolver.solve_kepler(ma, ecc)
      assert abs(ea - ecc * np.sin(ea) - ma) < 1e-10

  def test_sanity_check_high_eccentricity(self):
    ecc = 0.99
    for ma in [0.05, 0.5, 1.0, np.pi, 5.0]:
      ea = KeplerSolver.solve_kepler(ma, ecc)
      assert np.isfinite(ea)
      assert abs(ea - ecc * np.sin(ea) - ma) < 1e-8


class TestAnomalyConversions:
  """
  Tests for conversions between true, eccentric, and mean anomaly.
  """

  def test_known_solution_anomalies_at_periapsis(self):
    ecc = 0.4
    assert np.isclose(KeplerSolver.ta_to_ea(0.0, ecc), 0.0, atol=1e-12)
    assert np.isclose(KeplerSolver.ea_to_ma(0.0, ecc), 0.0, atol=1e-12)
    assert np.isclose(KeplerSolver.ma_to_ta(0.0, ecc), 0.0, atol=1e-12)

  def test_known_solution_anomalies_at_apoapsis(self):
    ecc = 0.4
    assert np.isclose(KeplerSolver.ta_to_ea(np.pi, ecc), np.pi, atol=1e-12)
    assert np.isclose(KeplerSolver.ea_to_ma(np.pi, ecc), np.pi, atol=1e-12)
    assert np.isclose(KeplerSolver.ta_to_ma(np.pi, ecc), np.pi, atol=1e-12)

  def test_roundtrip_ma_to_ta_to_ma(self):
    ecc = 0.6
    for ma in np.linspace(0.1, 2 * np.pi - 0.1, 25):
      ta = KeplerSolver.ma_to_ta(ma, ecc)
      assert np.isclose(KeplerSolver.ta_to_ma(ta, ecc), ma, atol=1e-10)


class TestPositionFromElements:
  """
  Tests for position and velocity on the orbit.
  """

  def test_known_solution_periapsis_radius(self, elliptical_elements):
    pos_vec = KeplerSolver.position_from_elements(elliptical_elements, 0.0)
    expected = elliptical_elements.semi_major_axis * (1 - elliptical_elements.eccentricity)
    assert np.isclose(np.linalg.norm(pos_vec), expected, rtol=1e-12)

  def test_known_solution_ascending_node(self):
    # Circular, aop = 0: true anomaly 0 sits on the ascending node, along raan
    elements = OrbitalElements(semi_major_axis=1.5, inclination_deg=60.0, raan_deg=90.0)
    pos_vec  = KeplerSolver.position_from_elements(elements, 0.0)
    assert np.allclose(pos_vec, [0.0, 1.5, 0.0], atol=1e-12)

  def test_sanity_check_rotation_orthonormal(self, elliptical_elements):
    rot_mat = KeplerSolver.perifocal_to_inertial(elliptical_elements)
    assert np.allclose(rot_mat @ rot_mat.T, np.eye(3), atol=1e-12)
    assert np.isclose(np.linalg.det(rot_mat), 1.0, atol=1e-12)

  def test_sanity_check_velocity_vis_viva(self, elliptical_elements):
    gp = 1.0
    for ta in np.linspace(0.0, 2 * np.pi, 9):
      pos_vec = KeplerSolver.position_from_elements(elliptical_elements, ta)
      vel_vec = KeplerSolver.velocity_from_elements(elliptical_elements, ta, gp)
      expected_vel_sq = gp * (2 / np.linalg.norm(pos_vec) - 1 / elliptical_elements.semi_major_axis)
      assert np.isclose(np.dot(vel_vec, vel_vec), expected_vel_sq, rtol=1e-10)

  def test_sanity_check_ecc_does_not_change_inclination(self, elliptical_elements):
    circular = replace(elliptical_elements, eccentricity=0.0)
    rot_mat  = KeplerSolver.perifocal_to_inertial(circular)
    normal   = rot_mat[:, 2]
    assert np.isclose(np.degrees(np.arccos(normal[2])), circular.inclination_deg, atol=1e-10)
