"""
SGP4 Propagator
===============

Thin wrapper around the sgp4 library's Satrec record that evaluates TLE
positions at absolute times and reports them in display units.
"""
import logging
import threading
import numpy as np

from datetime import datetime
from typing   import Optional

from sgp4.api import Satrec

from orbit_mapper.model.constants        import CONVERTER, EARTH
from orbit_mapper.model.display          import DisplayConvention
from orbit_mapper.model.elements         import EciState, OrbitalElements
from orbit_mapper.propagation.propagator import Propagator
from orbit_mapper.utility.time_helper    import datetime_to_jday
from orbit_mapper.utility.tle_helper     import TLE_LINE_LENGTH, get_tle_epoch


_log = logging.getLogger(__name__)


def parse_tle(
  tle_line_1 : str,
  tle_line_2 : str,
) -> Optional[Satrec]:
  """
  Parse a TLE line pair into a Satrec record.

  Input:
  ------
    tle_line_1 : str
      First line of TLE.
    tle_line_2 : str
      Second line of TLE.

  Output:
  -------
    satellite : Satrec | None
      Parsed record, or None if the lines are malformed or rejected by the
      library.
  """
  if len(tle_line_1) < TLE_LINE_LENGTH or len(tle_line_2) < TLE_LINE_LENGTH:
    _log.warning("TLE rejected: lines must be at least %d characters", TLE_LINE_LENGTH)
    return None
  if not (tle_line_1.startswith('1') and tle_line_2.startswith('2')):
    _log.warning("TLE rejected: lines must start with '1' and '2'")
    return None

  try:
    satellite = Satrec.twoline2rv(tle_line_1, tle_line_2)
  except (ValueError, TypeError) as exc:
    _log.warning("TLE rejected by SGP4 parser: %s", exc)
    return None

  if satellite.error != 0:
    _log.warning("TLE rejected by SGP4 initialization: error code %d", satellite.error)
    return None

  return satellite


class Sgp4Propagator(Propagator):
  """
  SGP4 propagation of a single TLE.

  Construction never raises. A malformed TLE leaves the propagator
  unavailable: propagate returns the zero state and the element and period
  accessors return None.
  """

  def __init__(
    self,
    tle_line_1 : str,
    tle_line_2 : str,
    convention : Optional[DisplayConvention] = None,
  ):
    self.convention = convention if convention is not None else DisplayConvention()
    self.tle_lines  = (str(tle_line_1).strip(), str(tle_line_2).strip())

    # Satrec.sgp4 writes to its record
    self._lock = threading.Lock()

    self.satellite = parse_tle(*self.tle_lines)

  @property
  def is_available(self) -> bool:
    return self.satellite is not None

  @property
  def epoch(self) -> Optional[datetime]:
    if self.satellite is None:
      return None
    return get_tle_epoch(self.satellite)

  def propagate(
    self,
    time : datetime,
  ) -> EciState:
    """
    Display-space state at an absolute time.

    Input:
    ------
      time : datetime
        Evaluation time (naive values are treated as UTC).

    Output:
    -------
      state : EciState
        TEME position and velocity converted by the display convention, or
        the zero sentinel if SGP4 reports an error.
    """
    if self.satellite is None:
      return EciState.zero()

    jd, fr = datetime_to_jday(time)
    with self._lock:
      error_code, pos_vec, vel_vec = self.satellite.sgp4(jd, fr)

    if error_code != 0:
      _log.debug("SGP4 error code %d at %s", error_code, time)
      return EciState.zero()

    pos_vec = np.asarray(pos_vec, dtype=float)
    vel_vec = np.asarray(vel_vec, dtype=float)
    if not (np.all(np.isfinite(pos_vec)) and np.all(np.isfinite(vel_vec))):
      return EciState.zero()

    return self.convention.state_from_km(pos_vec, vel_vec)

  def try_get_mean_elements(self) -> Optional[OrbitalElements]:
    """
    Mean elements of the TLE, with the semi-major axis derived from the Kozai
    mean motion and expressed in the convention's length unit.
    """
    if self.satellite is None:
      return None

    mean_motion = self.satellite.no_kozai / CONVERTER.SEC_PER_MIN   # [rad/s]
    if not (np.isfinite(mean_motion) and mean_motion > 0.0):
      return None

    sma_km = (EARTH.GP / mean_motion**2) ** (1.0 / 3.0)

    return OrbitalElements(
      semi_major_axis   = sma_km / self.convention.length_unit_km,
      eccentricity      = float(self.satellite.ecco),
      inclination_deg   = float(self.satellite.inclo) * CONVERTER.DEG_PER_RAD,
      raan_deg          = float(self.satellite.nodeo) * CONVERTER.DEG_PER_RAD,
      arg_periapsis_deg = float(self.satellite.argpo) * CONVERTER.DEG_PER_RAD,
      mean_anomaly_deg  = float(self.satellite.mo)    * CONVERTER.DEG_PER_RAD,
      epoch             = self.epoch,
    )

  def try_get_orbital_period_seconds(self) -> Optional[float]:
    if self.satellite is None:
      return None

    mean_motion_rev_per_day = self.satellite.no_kozai * CONVERTER.MIN_PER_DAY / (2 * np.pi)
    if not (np.isfinite(mean_motion_rev_per_day) and mean_motion_rev_per_day > 0.0):
      return None

    return CONVERTER.SEC_PER_DAY / mean_motion_rev_per_day
