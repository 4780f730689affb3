"""
Display Convention
==================

Fixed unit scale and axis permutation shared by the orbit sampler and every
propagator, so that static orbit polylines and live markers agree.
"""
import numpy as np

from dataclasses import dataclass

from orbit_mapper.model.constants import EARTH
from orbit_mapper.model.elements  import EciState


@dataclass(frozen=True)
class DisplayConvention:
  """
  Maps ECI km vectors to display vectors.

  Attributes:
  -----------
    length_unit_km : float
      Kilometers per display length unit (default: Earth equatorial radius).
    remap_axes : bool
      If True, ECI (x, y, z) is shown as (x, z, -y) so that ECI +Z points "up".
  """
  length_unit_km : float = EARTH.RADIUS.EQUATOR
  remap_axes     : bool  = True

  @classmethod
  def identity(cls) -> 'DisplayConvention':
    """Kilometers, no axis permutation."""
    return cls(length_unit_km=1.0, remap_axes=False)

  def remap(
    self,
    vec : np.ndarray,
  ) -> np.ndarray:
    vec = np.asarray(vec, dtype=float)
    if not self.remap_axes:
      return vec.copy()
    return np.stack([vec[..., 0], vec[..., 2], -vec[..., 1]], axis=-1)

  def unmap(
    self,
    vec : np.ndarray,
  ) -> np.ndarray:
    vec = np.asarray(vec, dtype=float)
    if not self.remap_axes:
      return vec.copy()
    return np.stack([vec[..., 0], -vec[..., 2], vec[..., 1]], axis=-1)

  def state_from_km(
    self,
    pos_vec : np.ndarray,
    vel_vec : np.ndarray,
  ) -> EciState:
    """
    Scale a km / km/s state into display units and apply the axis remap.
    """
    return EciState(
      position = self.remap(np.asarray(pos_vec, dtype=float) / self.length_unit_km),
      velocity = self.remap(np.asarray(vel_vec, dtype=float) / self.length_unit_km),
    )

  def state_to_km(
    self,
    state : EciState,
  ) -> tuple[np.ndarray, np.ndarray]:
    """
    Inverse of state_from_km. Returns (pos_vec [km], vel_vec [km/s]).
    """
    pos_vec = self.unmap(state.position) * self.length_unit_km
    vel_vec = self.unmap(state.velocity) * self.length_unit_km
    return pos_vec, vel_vec
