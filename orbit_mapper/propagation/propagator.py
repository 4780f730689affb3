"""
Propagator Interface
====================

Common capability interface for everything that can place a satellite marker
at an absolute time, plus the analytic two-body propagator used for
element-defined orbits.
"""
import numpy as np

from abc      import ABC, abstractmethod
from datetime import datetime
from typing   import Optional

from orbit_mapper.model.constants     import CONVERTER, EARTH
from orbit_mapper.model.display       import DisplayConvention
from orbit_mapper.model.elements      import EciState, OrbitalElements
from orbit_mapper.model.kepler        import KeplerSolver
from orbit_mapper.utility.time_helper import to_utc


class Propagator(ABC):
  """
  Anything that can produce a display-space state at an absolute time.

  Implementations never raise from propagate; an all-zero EciState signals
  that no state is available.
  """

  @abstractmethod
  def propagate(
    self,
    time : datetime,
  ) -> EciState:
    ...

  def try_get_orbital_period_seconds(self) -> Optional[float]:
    return None


class KeplerPropagator(Propagator):
  """
  Two-body propagation of a fixed set of orbital elements.

  The marker is evaluated with the same Kepler solver and axis remap as the
  orbit sampler, so it always lies on the sampled polyline.
  """

  def __init__(
    self,
    elements   : OrbitalElements,
    convention : Optional[DisplayConvention] = None,
    epoch      : Optional[datetime]          = None,
  ):
    """
    Input:
    ------
      elements : OrbitalElements
        Orbit with semi-major axis in the convention's length unit.
      convention : DisplayConvention, optional
        Display convention (default: Earth radii, remapped axes).
      epoch : datetime, optional
        Instant the mean anomaly refers to. Overrides elements.epoch.
    """
    self.elements   = elements
    self.convention = convention if convention is not None else DisplayConvention()

    if epoch is None:
      epoch = elements.epoch
    self.epoch = to_utc(epoch) if epoch is not None else None

    # Gravitational parameter in display length units [L³/s²]
    self.gp = EARTH.GP / self.convention.length_unit_km**3

    sma = elements.semi_major_axis
    if np.isfinite(sma) and sma > 0.0:
      self.mean_motion = float(np.sqrt(self.gp / sma**3))
    else:
      self.mean_motion = 0.0

  def propagate(
    self,
    time : datetime,
  ) -> EciState:
    """
    Display-space state at an absolute time.

    Input:
    ------
      time : datetime
        Evaluation time. Ignored when no epoch is known, in which case the
        state at the epoch mean anomaly is returned.

    Output:
    -------
      state : EciState
        Position [L] and velocity [L/s], or the zero sentinel if the elements
        do not describe a closed orbit.
    """
    ecc = self.elements.eccentricity
    if self.mean_motion <= 0.0 or not (0.0 <= ecc < 1.0):
      return EciState.zero()

    delta_time = 0.0
    if self.epoch is not None:
      delta_time = (to_utc(time) - self.epoch).total_seconds()

    ma_o = self.elements.mean_anomaly_deg * CONVERTER.RAD_PER_DEG
    ma   = (ma_o + self.mean_motion * delta_time) % (2 * np.pi)
    ta   = KeplerSolver.ma_to_ta(ma, ecc)

    pos_vec = KeplerSolver.position_from_elements(self.elements, ta)
    vel_vec = KeplerSolver.velocity_from_elements(self.elements, ta, self.gp)

    return EciState(
      position = self.convention.remap(pos_vec),
      velocity = self.convention.remap(vel_vec),
    )

  def try_get_orbital_period_seconds(self) -> Optional[float]:
    if self.mean_motion <= 0.0:
      return None
    return 2 * np.pi / self.mean_motion
