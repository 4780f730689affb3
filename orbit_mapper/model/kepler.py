import numpy as np

from orbit_mapper.model.constants import CONVERTER, SAMPLING
from orbit_mapper.model.elements  import OrbitalElements


class KeplerSolver:
  """
  Closed-orbit Kepler mechanics: anomaly conversions and the perifocal to
  inertial transform. All functions are pure and total for 0 <= ecc < 1.
  """

  @staticmethod
  def solve_kepler(
    ma       : float,
    ecc      : float,
    tol      : float = SAMPLING.KEPLER_TOL,
    max_iter : int   = SAMPLING.KEPLER_MAX_ITER,
  ) -> float:
    """
    Solve Kepler's equation ma = ea - ecc*sin(ea) for eccentric anomaly ea.

    Input:
    ------
      ma : float
        Mean anomaly [rad]
      ecc : float
        Eccentricity
      tol : float
        Early-exit tolerance on the Newton step [rad]
      max_iter : int
        Fixed iteration cap

    Output:
    -------
      ea : float
        Eccentric anomaly [rad]

    Notes:
    ------
      The iteration count is bounded so the solver is safe on a per-frame
      path. If the cap is reached the best estimate is returned.
    """
    # Initial guess
    if ecc < 0.8:
      ea = ma
    else:
      ea = np.pi

    # Newton-Raphson iteration
    for _ in range(max_iter):
      func       = ea - ecc * np.sin(ea) - ma
      func_prime = 1 - ecc * np.cos(ea)
      delta_ea   = -func / func_prime
      ea         = ea + delta_ea
      if abs(delta_ea) < tol:
        break

    return float(ea)

  @staticmethod
  def ea_to_ta(
    ea  : float,
    ecc : float,
  ) -> float:
    """
    Maps eccentric anomaly to true anomaly [rad].
    """
    return float(2 * np.arctan2(
      np.sqrt(1 + ecc) * np.sin(ea / 2),
      np.sqrt(1 - ecc) * np.cos(ea / 2),
    ))

  @staticmethod
  def ta_to_ea(
    ta  : float,
    ecc : float,
  ) -> float:
    """
    Maps true anomaly to eccentric anomaly [rad].
    """
    return float(2 * np.arctan2(
      np.sqrt(1 - ecc) * np.sin(ta / 2),
      np.sqrt(1 + ecc) * np.cos(ta / 2),
    ))

  @staticmethod
  def ea_to_ma(
    ea  : float,
    ecc : float,
  ) -> float:
    """
    Maps eccentric anomaly to mean anomaly [rad].
    """
    return float(ea - ecc * np.sin(ea))

  @staticmethod
  def ta_to_ma(
    ta  : float,
    ecc : float,
  ) -> float:
    """
    Maps true anomaly to mean anomaly, wrapped to [0, 2π).
    """
    ea = KeplerSolver.ta_to_ea(ta, ecc)
    return float(KeplerSolver.ea_to_ma(ea, ecc) % (2 * np.pi))

  @staticmethod
  def ma_to_ta(
    ma  : float,
    ecc : float,
  ) -> float:
    """
    Maps mean anomaly to true anomaly through Kepler's equation.
    """
    ea = KeplerSolver.solve_kepler(ma, ecc)
    return KeplerSolver.ea_to_ta(ea, ecc)

  @staticmethod
  def perifocal_to_inertial(
    elements : OrbitalElements,
  ) -> np.ndarray:
    """
    Rotation matrix R_z(raan) @ R_x(inc) @ R_z(aop) from the perifocal (PQW)
    frame to the inertial frame.

    Input:
    ------
      elements : OrbitalElements
        Orbit orientation angles are read in degrees.

    Output:
    -------
      rot_mat : np.ndarray
        3x3 rotation matrix such that: inertial_vec = rot_mat @ pqw_vec
    """
    inc  = elements.inclination_deg   * CONVERTER.RAD_PER_DEG
    raan = elements.raan_deg          * CONVERTER.RAD_PER_DEG
    aop  = elements.arg_periapsis_deg * CONVERTER.RAD_PER_DEG

    cos_raan, sin_raan = np.cos(raan), np.sin(raan)
    cos_inc,  sin_inc  = np.cos(inc),  np.sin(inc)
    cos_aop,  sin_aop  = np.cos(aop),  np.sin(aop)

    return np.array([
      [ cos_raan * cos_aop - sin_raan * sin_aop * cos_inc, -cos_raan * sin_aop - sin_raan * cos_aop * cos_inc,  sin_raan * sin_inc],
      [ sin_raan * cos_aop + cos_raan * sin_aop * cos_inc, -sin_raan * sin_aop + cos_raan * cos_aop * cos_inc, -cos_raan * sin_inc],
      [                               sin_aop * sin_inc,                                cos_aop * sin_inc,             cos_inc],
    ])

  @staticmethod
  def position_from_elements(
    elements : OrbitalElements,
    ta       : float,
  ) -> np.ndarray:
    """
    Inertial position on the orbit at a given true anomaly.

    Input:
    ------
      elements : OrbitalElements
        Orbit shape and orientation.
      ta : float
        True anomaly [rad]

    Output:
    -------
      pos_vec : np.ndarray
        Position vector in the unit of elements.semi_major_axis.
    """
    sma = elements.semi_major_axis
    ecc = elements.eccentricity

    # Conic equation in the perifocal frame
    slr     = sma * (1 - ecc**2)
    pos_mag = slr / (1 + ecc * np.cos(ta))
    pos_pqw = np.array([pos_mag * np.cos(ta), pos_mag * np.sin(ta), 0.0])

    return KeplerSolver.perifocal_to_inertial(elements) @ pos_pqw

  @staticmethod
  def velocity_from_elements(
    elements : OrbitalElements,
    ta       : float,
    gp       : float,
  ) -> np.ndarray:
    """
    Inertial velocity on the orbit at a given true anomaly.

    Input:
    ------
      elements : OrbitalElements
        Orbit shape and orientation.
      ta : float
        True anomaly [rad]
      gp : float
        Gravitational parameter in [length unit³/s²] of elements.semi_major_axis.

    Output:
    -------
      vel_vec : np.ndarray
        Velocity vector [length unit/s].
    """
    sma = elements.semi_major_axis
    ecc = elements.eccentricity

    slr      = sma * (1 - ecc**2)
    p_factor = np.sqrt(gp / slr)
    vel_pqw  = np.array([-p_factor * np.sin(ta), p_factor * (ecc + np.cos(ta)), 0.0])

    return KeplerSolver.perifocal_to_inertial(elements) @ vel_pqw
