import numpy as np

from typing import Optional

from orbit_mapper.model.constants import CONVERTER, SAMPLING
from orbit_mapper.model.display   import DisplayConvention
from orbit_mapper.model.elements  import OrbitalElements
from orbit_mapper.model.kepler    import KeplerSolver


def sample_orbit_polyline(
  elements   : OrbitalElements,
  segments   : int = SAMPLING.SEGMENTS_DEFAULT,
  convention : Optional[DisplayConvention] = None,
) -> np.ndarray:
  """
  Sample one full revolution of an orbit as a closed polyline.

  Input:
  ------
    elements : OrbitalElements
      Orbit to sample. Semi-major axis sets the output length unit.
    segments : int
      Number of polyline segments (clamped to a minimum of 8).
    convention : DisplayConvention, optional
      If given, its axis remap is applied to every vertex.

  Output:
  -------
    pos_array : np.ndarray
      (segments+1)x3 vertex array. The first and last vertices both sit at the
      epoch mean anomaly.

  Notes:
  ------
    Mean anomaly is stepped uniformly, so vertices bunch up near apoapsis
    where the body moves slowest.
  """
  segments = max(SAMPLING.SEGMENTS_MIN, int(segments))
  ecc      = elements.eccentricity
  ma_o     = elements.mean_anomaly_deg * CONVERTER.RAD_PER_DEG

  pos_array = np.zeros((segments + 1, 3))
  for step in range(segments + 1):
    ma = (ma_o + step / segments * 2 * np.pi) % (2 * np.pi)
    ea = KeplerSolver.solve_kepler(ma, ecc)
    ta = KeplerSolver.ea_to_ta(ea, ecc)
    pos_array[step] = KeplerSolver.position_from_elements(elements, ta)

  if convention is not None:
    pos_array = convention.remap(pos_array)

  return pos_array
