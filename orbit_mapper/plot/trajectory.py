import matplotlib.pyplot as plt
import numpy             as np

from datetime          import datetime, timedelta
from pathlib           import Path
from typing            import Optional
from matplotlib.figure import Figure
from matplotlib.lines  import Line2D

from orbit_mapper.plot.utility    import get_equal_limits, earth_sphere
from orbit_mapper.model.constants import EARTH
from orbit_mapper.model.display   import DisplayConvention


def plot_3d_orbits(
  results    : list[dict],
  convention : Optional[DisplayConvention] = None,
  epoch      : Optional[datetime]          = None,
) -> Figure:
  """
  Plot orbit polylines, marker tracks, and the Earth in one 3D view.

  Input:
  ------
    results : list[dict]
      Result dictionaries from run_propagations.
    convention : DisplayConvention, optional
      Sets the Earth radius in display units and the axis labels.
    epoch : datetime, optional
      Start time, for the info text.

  Output:
  -------
    matplotlib.figure.Figure
      Figure object containing the 3D plot.
  """
  if convention is None:
    convention = DisplayConvention()
  unit_label = "km" if convention.length_unit_km == 1.0 else "L"

  fig = plt.figure(figsize=(12, 10))
  ax  = fig.add_subplot(111, projection='3d')

  # Add Earth sphere in display units
  x_earth, y_earth, z_earth = earth_sphere(EARTH.RADIUS.EQUATOR / convention.length_unit_km)
  ax.plot_surface(x_earth, y_earth, z_earth, color='lightblue', alpha=0.3, edgecolor='none') # type: ignore

  colors = plt.rcParams['axes.prop_cycle'].by_key()['color']
  for idx, result in enumerate(results):
    color = colors[idx % len(colors)]

    # Static orbit polyline
    if result['polyline'] is not None:
      polyline = result['polyline']
      ax.plot(polyline[:, 0], polyline[:, 1], polyline[:, 2], '-', color=color, linewidth=1, label=result['name'])

    # Marker track over the timespan
    valid = result['valid']
    if np.any(valid):
      pos_x, pos_y, pos_z = result['state'][0, valid], result['state'][1, valid], result['state'][2, valid]
      ax.plot(pos_x, pos_y, pos_z, ':', color=color, linewidth=1)
      ax.scatter([pos_x[0]],  [pos_y[0]],  [pos_z[0]],  s=80, marker='>', facecolors='white', edgecolors=color, linewidths=2) # type: ignore
      ax.scatter([pos_x[-1]], [pos_y[-1]], [pos_z[-1]], s=80, marker='s', facecolors='white', edgecolors=color, linewidths=2) # type: ignore

  ax.set_xlabel(f'X [{unit_label}]')
  ax.set_ylabel(f'Y [{unit_label}]')
  ax.set_zlabel(f'Z [{unit_label}]') # type: ignore
  ax.grid(True)
  ax.set_box_aspect([1, 1, 1]) # type: ignore
  min_limit, max_limit = get_equal_limits(ax)
  ax.set_xlim([min_limit, max_limit]) # type: ignore
  ax.set_ylim([min_limit, max_limit]) # type: ignore
  ax.set_zlim([min_limit, max_limit]) # type: ignore

  # Create custom legend handles with black edges
  legend_handles, _ = ax.get_legend_handles_labels()
  legend_handles += [
    Line2D([0], [0], marker='>', color='w', markerfacecolor='white', markeredgecolor='black',
           markersize=10, markeredgewidth=2, linestyle='None', label='Start'),
    Line2D([0], [0], marker='s', color='w', markerfacecolor='white', markeredgecolor='black',
           markersize=10, markeredgewidth=2, linestyle='None', label='End'),
  ]
  fig.legend(handles=legend_handles, loc='upper right', fontsize=11, framealpha=0.9)

  # Add info text as figure text
  if epoch is not None and results:
    end_time  = epoch + timedelta(seconds=float(results[0]['time'][-1]))
    info_text = f"Start: {epoch.strftime('%Y-%m-%d %H:%M:%S UTC')}  |  End: {end_time.strftime('%Y-%m-%d %H:%M:%S UTC')}"
    fig.text(0.5, 0.02, info_text, ha='center', va='bottom', fontsize=11, color='black',
             bbox=dict(boxstyle='round,pad=0.5', facecolor='white', edgecolor='black', alpha=0.9))

  plt.tight_layout(rect=[0, 0.06, 1, 0.95])
  return fig


def generate_plots(
  results       : list[dict],
  plot_filepath : Path,
  convention    : Optional[DisplayConvention] = None,
  time_o_dt     : Optional[datetime]          = None,
) -> None:
  """
  Generate and save the orbit plot.

  Input:
  ------
    results : list[dict]
      Result dictionaries from run_propagations.
    plot_filepath : Path
      Output PNG file. Parent folders are created.
    convention : DisplayConvention, optional
      Display convention.
    time_o_dt : datetime, optional
      Start time, for labels.

  Output:
  -------
    None
  """
  plot_filepath = Path(plot_filepath)
  plot_filepath.parent.mkdir(parents=True, exist_ok=True)

  print("\nGenerate and Save Plots")
  print(f"  Figure Filepath : {plot_filepath}")

  fig = plot_3d_orbits(results, convention, time_o_dt)
  fig.savefig(plot_filepath, dpi=300, bbox_inches='tight')
  plt.close(fig)
