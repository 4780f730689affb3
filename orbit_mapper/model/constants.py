class CONVERTER:
  # Angle Conversions
  RAD_PER_DEG = 3.141592653589793 / 180.0  # [radian] per [degree]
  DEG_PER_RAD = 180.0 / 3.141592653589793  # [degree] per [radian]

  # Time Conversions
  SEC_PER_DAY = 86400.0                    # [seconds] per [day]
  SEC_PER_MIN = 60.0                       # [seconds] per [minute]
  MIN_PER_DAY = 1440.0                     # [minutes] per [day]

  # Distance Conversions
  M_PER_KM = 1000.0                        # [meters] per [kilometer]
  KM_PER_M = 1.0 / 1000.0                  # [kilometers] per [meter]


class EARTH:
  """
  Earth constants in kilometer units, matching the SGP4/TLE world.
  """
  class RADIUS:
    EQUATOR = 6378.137     # Earth's WGS84 equatorial radius [km]

  GP = 398600.4418         # Earth's gravitational parameter [km³/s²]


class ORBITLIMITS:
  """
  Sanity bounds applied when converting state vectors to orbital elements.
  These are plausibility limits, not physical ones.
  """
  POS_MAG_MAX         = 1.0e6   # upper bound on orbit radius and semi-major axis [km]
  ECC_MAX             = 0.999   # element extraction rejects ecc above this (inclusive bound)
  ECC_MAX_SGP4        = 0.999   # SGP4 rejects ecc at or above this (exclusive bound)
  ECC_CIRCULAR_TOL    = 1e-10   # below this, argument of periapsis is ill-defined
  NODE_EQUATORIAL_TOL = 1e-12   # below this, the ascending node is ill-defined


class SAMPLING:
  SEGMENTS_MIN     = 8          # minimum polyline segments
  SEGMENTS_DEFAULT = 512        # segments used by the shell for each orbit
  KEPLER_TOL       = 1e-12      # early-exit tolerance for Kepler's equation [rad]
  KEPLER_MAX_ITER  = 12         # fixed iteration cap for Kepler's equation
