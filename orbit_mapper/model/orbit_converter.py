import logging
import numpy as np

from typing import Optional

from orbit_mapper.model.constants import CONVERTER, EARTH, ORBITLIMITS
from orbit_mapper.model.display   import DisplayConvention
from orbit_mapper.model.elements  import OrbitalElements
from orbit_mapper.model.kepler    import KeplerSolver


_log = logging.getLogger(__name__)


def wrap_deg(
  angle_deg : float,
) -> float:
  """Wrap an angle to [0, 360) degrees."""
  angle_deg = float(angle_deg) % 360.0
  # -tiny % 360 rounds to 360.0
  return 0.0 if angle_deg >= 360.0 else angle_deg


class OrbitConverter:
  """
  Conversion from ECI position/velocity to classical orbital elements for
  closed orbits, with explicit fallbacks for circular and equatorial geometry.
  """

  @staticmethod
  def pv_to_coe(
    pos_vec : np.ndarray,
    vel_vec : np.ndarray,
    gp      : float = EARTH.GP,
  ) -> Optional[dict]:
    """
    Convert Cartesian position and velocity vectors to classical orbital elements.

    Input:
    ------
      pos_vec : np.ndarray
        Position vector [km]. Must be finite and non-zero.
      vel_vec : np.ndarray
        Velocity vector [km/s].
      gp : float
        Gravitational parameter [km³/s²].

    Output:
    -------
      coe : dict | None
        None if the angular momentum is zero (rectilinear motion). Otherwise:
        - sma  : semi-major axis [km] (np.inf when the energy is exactly zero)
        - ecc  : eccentricity [-]
        - inc  : inclination [rad]
        - raan : right ascension of the ascending node [rad], in [0, 2π)
        - aop  : argument of periapsis [rad], in [0, 2π)
        - ta   : true anomaly [rad], in [0, 2π)

    Notes:
    ------
      - For a near-circular or near-equatorial orbit the argument of periapsis
        is set to 0 and the true anomaly is replaced by the true longitude
        atan2(y, x). RAAN is kept as computed, so the split between RAAN and
        true longitude is not rebalanced.
      - Mean anomaly is left to the caller because it is only defined for ecc < 1.
    """
    pos_vec = np.asarray(pos_vec, dtype=float).flatten()
    vel_vec = np.asarray(vel_vec, dtype=float).flatten()

    pos_mag = np.linalg.norm(pos_vec)
    vel_sq  = np.dot(vel_vec, vel_vec)

    # Angular momentum vector
    ang_mom_vec = np.cross(pos_vec, vel_vec)
    ang_mom_mag = np.linalg.norm(ang_mom_vec)
    if not (np.isfinite(ang_mom_mag) and ang_mom_mag > 0.0):
      return None

    inc = np.arccos(np.clip(ang_mom_vec[2] / ang_mom_mag, -1.0, 1.0))

    # Node vector n = k x h
    node_vec = np.array([-ang_mom_vec[1], ang_mom_vec[0], 0.0])
    node_mag = np.linalg.norm(node_vec)

    raan = 0.0
    if node_mag > ORBITLIMITS.NODE_EQUATORIAL_TOL:
      raan = np.arctan2(node_vec[1], node_vec[0]) % (2 * np.pi)

    # Eccentricity vector
    ecc_vec = np.cross(vel_vec, ang_mom_vec) / gp - pos_vec / pos_mag
    ecc_mag = np.linalg.norm(ecc_vec)

    if ecc_mag > ORBITLIMITS.ECC_CIRCULAR_TOL and node_mag > ORBITLIMITS.NODE_EQUATORIAL_TOL:
      # Argument of periapsis, quadrant from the sign of ecc_vec[2]
      aop = np.arccos(np.clip(np.dot(node_vec, ecc_vec) / (node_mag * ecc_mag), -1.0, 1.0))
      if ecc_vec[2] < 0.0:
        aop = 2 * np.pi - aop

      # True anomaly, quadrant from the sign of the radial velocity
      ta = np.arccos(np.clip(np.dot(ecc_vec, pos_vec) / (ecc_mag * pos_mag), -1.0, 1.0))
      if np.dot(pos_vec, vel_vec) < 0.0:
        ta = 2 * np.pi - ta
    else:
      # Near-circular or equatorial: true longitude
      aop = 0.0
      ta  = np.arctan2(pos_vec[1], pos_vec[0]) % (2 * np.pi)

    # Vis-viva
    sma_inv = 2.0 / pos_mag - vel_sq / gp
    sma     = 1.0 / sma_inv if sma_inv != 0.0 else np.inf

    return {
      'sma'  : float(sma),
      'ecc'  : float(ecc_mag),
      'inc'  : float(inc),
      'raan' : float(raan),
      'aop'  : float(aop),
      'ta'   : float(ta),
    }


def extract_orbital_elements(
  pos_vec    : np.ndarray,
  vel_vec    : np.ndarray,
  convention : Optional[DisplayConvention] = None,
) -> Optional[OrbitalElements]:
  """
  Extract Keplerian orbital elements from an ECI state vector.

  Input:
  ------
    pos_vec : np.ndarray
      Position vector [km].
    vel_vec : np.ndarray
      Velocity vector [km/s].
    convention : DisplayConvention, optional
      Sets the length unit of the returned semi-major axis (default: Earth radii).

  Output:
  -------
    elements : OrbitalElements | None
      None if the state is not a plausible closed Earth orbit:
      radius not in (R_earth, 1e6) km, zero angular momentum, ecc outside
      [0, 0.999], or semi-major axis not in (R_earth, 1e6) km.
  """
  if convention is None:
    convention = DisplayConvention()

  pos_vec = np.asarray(pos_vec, dtype=float).flatten()
  vel_vec = np.asarray(vel_vec, dtype=float).flatten()

  pos_mag = np.linalg.norm(pos_vec)
  vel_sq  = np.dot(vel_vec, vel_vec)
  if not (np.isfinite(pos_mag) and np.isfinite(vel_sq)
          and EARTH.RADIUS.EQUATOR < pos_mag < ORBITLIMITS.POS_MAG_MAX):
    _log.debug("Element extraction rejected: radius %.3f km out of range", pos_mag)
    return None

  coe = OrbitConverter.pv_to_coe(pos_vec, vel_vec, EARTH.GP)
  if coe is None:
    _log.debug("Element extraction rejected: zero angular momentum")
    return None

  ecc = coe['ecc']
  if not (np.isfinite(ecc) and 0.0 <= ecc <= ORBITLIMITS.ECC_MAX):
    _log.debug("Element extraction rejected: ecc %.6f out of range", ecc)
    return None

  sma = coe['sma']
  if not (np.isfinite(sma) and EARTH.RADIUS.EQUATOR < sma < ORBITLIMITS.POS_MAG_MAX):
    _log.debug("Element extraction rejected: sma %.3f km out of range", sma)
    return None

  ma = KeplerSolver.ta_to_ma(coe['ta'], ecc)

  return OrbitalElements(
    semi_major_axis   = sma / convention.length_unit_km,
    eccentricity      = ecc,
    inclination_deg   = wrap_deg(coe['inc']  * CONVERTER.DEG_PER_RAD),
    raan_deg          = wrap_deg(coe['raan'] * CONVERTER.DEG_PER_RAD),
    arg_periapsis_deg = wrap_deg(coe['aop']  * CONVERTER.DEG_PER_RAD),
    mean_anomaly_deg  = wrap_deg(ma          * CONVERTER.DEG_PER_RAD),
  )
