"""
TLE Helpers
===========

Checksums, epoch encoding/decoding, and synthesis of a TLE from a single ECI
state vector so that state-only inputs can be propagated with SGP4.
"""
import logging
import numpy as np

from datetime import datetime, timedelta, timezone
from typing   import Optional

from sgp4.api import Satrec

from orbit_mapper.model.constants       import CONVERTER, EARTH, ORBITLIMITS
from orbit_mapper.model.kepler          import KeplerSolver
from orbit_mapper.model.orbit_converter import OrbitConverter, wrap_deg
from orbit_mapper.utility.time_helper   import to_utc


_log = logging.getLogger(__name__)

TLE_LINE_LENGTH = 69


def compute_tle_checksum(
  line : str,
) -> int:
  """
  TLE modulo-10 checksum: digits count their value, minus signs count one.

  Input:
  ------
    line : str
      TLE line without its checksum character.

  Output:
  -------
    int
      Checksum digit.
  """
  checksum = 0
  for char in line:
    if char.isdigit():
      checksum += int(char)
    elif char == '-':
      checksum += 1
  return checksum % 10


def finalize_tle_line(
  line : str,
) -> str:
  """
  Pad or truncate a TLE line body to 68 characters and append its checksum.
  """
  body = line[:TLE_LINE_LENGTH - 1].ljust(TLE_LINE_LENGTH - 1)
  return body + str(compute_tle_checksum(body))


def format_tle_epoch(
  epoch : datetime,
) -> Optional[str]:
  """
  Encode an epoch in the TLE YYDDD.FFFFFFFF field format.

  Input:
  ------
    epoch : datetime
      Epoch (naive values are treated as UTC).

  Output:
  -------
    str | None
      14-character epoch field, or None if it cannot be encoded.

  Notes:
  ------
    The fractional day is rounded to 8 digits. If rounding reaches a whole
    day, the day of year is carried forward by one.
  """
  epoch_utc = to_utc(epoch)

  year_2digit = epoch_utc.year % 100
  day_of_year = epoch_utc.timetuple().tm_yday

  sec_of_day = (
    epoch_utc.hour * 3600
    + epoch_utc.minute * 60
    + epoch_utc.second
    + epoch_utc.microsecond / 1e6
  )
  day_frac = sec_of_day / CONVERTER.SEC_PER_DAY
  if not (np.isfinite(day_frac) and 0.0 <= day_frac < 1.0):
    return None

  day_frac_scaled = int(round(day_frac * 1e8))
  if day_frac_scaled >= 100000000:
    day_frac_scaled -= 100000000
    day_of_year     += 1

  epoch_str = f"{year_2digit:02d}{day_of_year:03d}.{day_frac_scaled:08d}"
  return epoch_str if len(epoch_str) == 14 else None


def get_tle_epoch(
  satellite : Satrec,
) -> datetime:
  """
  Epoch of a parsed TLE as a UTC datetime.

  Input:
  ------
    satellite : Satrec
      Parsed TLE record.

  Output:
  -------
    datetime
      Timezone-aware UTC epoch.

  Notes:
  ------
    Year and fractional day are used directly rather than the Julian date to
    keep sub-millisecond precision.
  """
  tle_year = satellite.epochyr
  if tle_year < 57:
    tle_year += 2000
  else:
    tle_year += 1900

  tle_days = satellite.epochdays
  return datetime(tle_year, 1, 1, tzinfo=timezone.utc) + timedelta(days=tle_days - 1)


def build_synthetic_tle(
  epoch   : datetime,
  pos_vec : np.ndarray,
  vel_vec : np.ndarray,
) -> Optional[tuple[str, str]]:
  """
  Build a synthetic TLE from an ECI state vector.

  Input:
  ------
    epoch : datetime
      Epoch of the state vector.
    pos_vec : np.ndarray
      Position vector [km].
    vel_vec : np.ndarray
      Velocity vector [km/s].

  Output:
  -------
    tuple[str, str] | None
      (line1, line2), each 69 characters, or None if any geometric quantity
      is non-finite or out of range.

  Notes:
  ------
    SGP4 expects mean elements; these are osculating elements with all drag
    terms set to zero, so the result is intended for visualization. The
    satellite number is 00001 and the element set number is 999.
  """
  pos_vec = np.asarray(pos_vec, dtype=float).flatten()
  vel_vec = np.asarray(vel_vec, dtype=float).flatten()

  pos_mag = np.linalg.norm(pos_vec)
  vel_sq  = np.dot(vel_vec, vel_vec)
  if not (np.isfinite(pos_mag) and np.isfinite(vel_sq) and pos_mag > EARTH.RADIUS.EQUATOR):
    _log.debug("Synthetic TLE rejected: radius %.3f km", pos_mag)
    return None

  coe = OrbitConverter.pv_to_coe(pos_vec, vel_vec, EARTH.GP)
  if coe is None:
    _log.debug("Synthetic TLE rejected: zero angular momentum")
    return None

  # SGP4 rejects ecc >= 0.999
  ecc = coe['ecc']
  if not (np.isfinite(ecc) and 0.0 <= ecc < ORBITLIMITS.ECC_MAX_SGP4):
    _log.debug("Synthetic TLE rejected: ecc %.6f", ecc)
    return None

  sma = coe['sma']
  if not (np.isfinite(sma) and sma > 0.0):
    _log.debug("Synthetic TLE rejected: sma %.3f km", sma)
    return None

  mean_motion_rad_per_s   = np.sqrt(EARTH.GP / sma**3)
  mean_motion_rev_per_day = mean_motion_rad_per_s * CONVERTER.SEC_PER_DAY / (2 * np.pi)
  if not (np.isfinite(mean_motion_rev_per_day) and mean_motion_rev_per_day > 0.0):
    return None

  ma = KeplerSolver.ta_to_ma(coe['ta'], ecc)

  inc_deg  = wrap_deg(coe['inc']  * CONVERTER.DEG_PER_RAD)
  raan_deg = wrap_deg(coe['raan'] * CONVERTER.DEG_PER_RAD)
  aop_deg  = wrap_deg(coe['aop']  * CONVERTER.DEG_PER_RAD)
  ma_deg   = wrap_deg(ma          * CONVERTER.DEG_PER_RAD)

  epoch_str = format_tle_epoch(epoch)
  if epoch_str is None:
    return None

  # Eccentricity as 7 digits with an implied leading decimal point
  ecc_7digit = min(max(int(round(ecc * 1e7)), 0), 9999999)

  line1 = (
    "1 00001U 00000A   "
    f"{epoch_str}"
    "  .00000000  00000-0  00000-0 0  999"
  )
  line2 = (
    "2 00001"
    f" {inc_deg:8.4f}"
    f" {raan_deg:8.4f}"
    f" {ecc_7digit:07d}"
    f" {aop_deg:8.4f}"
    f" {ma_deg:8.4f}"
    f" {mean_motion_rev_per_day:11.8f}"
    f"{1:5d}"
  )

  line1 = finalize_tle_line(line1)
  line2 = finalize_tle_line(line2)
  if len(line1) != TLE_LINE_LENGTH or len(line2) != TLE_LINE_LENGTH:
    return None

  return line1, line2
