import numpy as np

from typing import Any


def get_equal_limits(
  ax              : Any,
  buffer_fraction : float = 0.0,
) -> tuple[float, float]:
  """
  Get equal limits for a 3D plot to ensure aspect ratio is preserved.

  Input:
  ------
    ax : mpl_toolkits.mplot3d.axes3d.Axes3D
      The 3D axes object.
    buffer_fraction : float
      Fraction of the range to add as buffer on each side (default 0.0).
      E.g., 0.25 adds 25% buffer to each side.

  Output:
  -------
    min_limit : float
      The minimum limit for all axes.
    max_limit : float
      The maximum limit for all axes.
  """
  x_limits   = ax.get_xlim3d()
  y_limits   = ax.get_ylim3d()
  z_limits   = ax.get_zlim3d()
  all_limits = np.array([x_limits, y_limits, z_limits])
  min_limit  = np.min(all_limits[:, 0])
  max_limit  = np.max(all_limits[:, 1])

  # Apply buffer if specified
  if buffer_fraction > 0:
    range_limit = max_limit - min_limit
    buffer      = buffer_fraction * range_limit
    min_limit  -= buffer
    max_limit  += buffer

  return min_limit, max_limit


def earth_sphere(
  radius     : float,
  num_points : int = 50,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
  """
  Surface grid of a sphere about the origin, for plot_surface.
  """
  u = np.linspace(0, 2 * np.pi, num_points)
  v = np.linspace(0, np.pi, num_points)
  x = radius * np.outer(np.cos(u), np.sin(v))
  y = radius * np.outer(np.sin(u), np.sin(v))
  z = radius * np.outer(np.ones(np.size(u)), np.cos(v))
  return x, y, z
