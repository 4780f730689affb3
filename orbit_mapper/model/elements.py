"""
Orbit Data Types
================

Value types shared by the Kepler solver, the orbit sampler and the propagators.
"""
import numpy as np

from dataclasses import dataclass, field
from datetime    import datetime, timezone
from typing      import Optional

from orbit_mapper.model.constants import EARTH


UNSET_TIME = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _frozen_vec3(
  values,
) -> np.ndarray:
  vec = np.array(values, dtype=float).reshape(3)
  vec.flags.writeable = False
  return vec


@dataclass(frozen=True)
class OrbitalElements:
  semi_major_axis   : float = 1.0                 # a, display length unit (conventionally Earth radii)
  eccentricity      : float = 0.0                 # e, 0 <= e < 1
  inclination_deg   : float = 0.0                 # i [deg]
  raan_deg          : float = 0.0                 # right ascension of ascending node [deg]
  arg_periapsis_deg : float = 0.0                 # argument of periapsis [deg]
  mean_anomaly_deg  : float = 0.0                 # mean anomaly at epoch [deg]
  epoch             : Optional[datetime] = None   # instant the mean anomaly refers to


def default_leo_elements(
) -> OrbitalElements:
  """
  Default 400 km altitude LEO used for newly added satellites. Semi-major axis in Earth radii.
  """
  altitude_km = 400.0
  return OrbitalElements(
    semi_major_axis   = (EARTH.RADIUS.EQUATOR + altitude_km) / EARTH.RADIUS.EQUATOR,
    eccentricity      = 0.001,
    inclination_deg   = 55.0,
    raan_deg          = 40.0,
    arg_periapsis_deg = 30.0,
  )


@dataclass(frozen=True, eq=False)
class EciState:
  """
  Position and velocity in an Earth-centered inertial-like frame.

  Units follow the producing component: km and km/s before display conversion,
  display length units (and per second) after it. An all-zero state is the
  "propagation unavailable" sentinel, not a position at the origin.
  """
  position : np.ndarray
  velocity : np.ndarray

  def __post_init__(self):
    object.__setattr__(self, 'position', _frozen_vec3(self.position))
    object.__setattr__(self, 'velocity', _frozen_vec3(self.velocity))

  @classmethod
  def zero(cls) -> 'EciState':
    return cls(position=np.zeros(3), velocity=np.zeros(3))

  def is_zero(self) -> bool:
    return not (np.any(self.position) or np.any(self.velocity))


@dataclass(frozen=True, eq=False)
class EphemerisSample:
  """
  Timestamped state sample in km and km/s.

  Notes:
  ------
    Covariance is the upper triangle of the symmetric 6x6 position/velocity
    covariance in row-major order: (0,0) (0,1) ... (0,5) (1,1) ... (5,5).
    A time of None (or the Unix epoch) marks the sample as unset.
  """
  time              : Optional[datetime]
  position_km       : np.ndarray
  velocity_km_per_s : np.ndarray
  has_covariance    : bool  = False
  covariance_upper  : tuple = field(default_factory=tuple)

  def __post_init__(self):
    object.__setattr__(self, 'position_km',       _frozen_vec3(self.position_km))
    object.__setattr__(self, 'velocity_km_per_s', _frozen_vec3(self.velocity_km_per_s))
    object.__setattr__(self, 'covariance_upper',  tuple(float(c) for c in self.covariance_upper))
    if self.time is not None and self.time.tzinfo is None:
      object.__setattr__(self, 'time', self.time.replace(tzinfo=timezone.utc))
    if self.has_covariance and len(self.covariance_upper) != 21:
      raise ValueError(f"Covariance upper triangle requires 21 values, received {len(self.covariance_upper)}")

  @property
  def is_time_set(self) -> bool:
    return self.time is not None and self.time != UNSET_TIME

  def covariance_matrix(self) -> Optional[np.ndarray]:
    """
    Unpack the covariance upper triangle into a symmetric 6x6 matrix.

    Output:
    -------
      cov_mat : np.ndarray | None
        6x6 covariance [km², km²/s, km²/s²], or None if the sample carries none.
    """
    if not self.has_covariance:
      return None

    cov_mat = np.zeros((6, 6))
    cov_mat[np.triu_indices(6)] = self.covariance_upper
    return cov_mat + np.triu(cov_mat, k=1).T
