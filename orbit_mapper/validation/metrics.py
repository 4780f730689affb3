"""
Validation Metrics Module
=========================

Geometric helpers shared by the test modules.
"""
import numpy as np


def distance_to_polyline(
  point    : np.ndarray,
  polyline : np.ndarray,
) -> float:
  """
  Smallest distance from a point to the segments of a polyline.

  Input:
  ------
    point : np.ndarray
      3-element position.
    polyline : np.ndarray
      Nx3 vertex array.

  Output:
  -------
    distance : float
      Distance in the units of the inputs.
  """
  starts  = polyline[:-1]
  deltas  = polyline[1:] - starts
  alpha   = np.clip(np.einsum('ij,ij->i', point - starts, deltas) / np.einsum('ij,ij->i', deltas, deltas), 0.0, 1.0)
  closest = starts + alpha[:, None] * deltas
  return float(np.min(np.linalg.norm(closest - point, axis=1)))
