from typing import Optional

from orbit_mapper.model.display       import DisplayConvention
from orbit_mapper.model.elements      import OrbitalElements
from orbit_mapper.utility.time_helper import format_time_offset


def print_elements(
  elements    : OrbitalElements,
  unit_label  : str,
  indent      : str = "    ",
) -> None:
  """
  Print classical orbital elements.

  Input:
  ------
    elements : OrbitalElements
      Elements to print.
    unit_label : str
      Label of the semi-major axis length unit.
    indent : str
      Line prefix.
  """
  epoch_str = elements.epoch.isoformat() if elements.epoch is not None else "None"

  print(f"{indent}Classical Orbital Elements")
  print(f"{indent}  SMA   : {elements.semi_major_axis:>19.12e} {unit_label}")
  print(f"{indent}  ECC   : {elements.eccentricity:>19.12e}")
  print(f"{indent}  INC   : {elements.inclination_deg:>19.12e} deg")
  print(f"{indent}  RAAN  : {elements.raan_deg:>19.12e} deg")
  print(f"{indent}  ARGP  : {elements.arg_periapsis_deg:>19.12e} deg")
  print(f"{indent}  MA    : {elements.mean_anomaly_deg:>19.12e} deg")
  print(f"{indent}  Epoch : {epoch_str}")


def print_results_summary(
  results    : list[dict],
  convention : Optional[DisplayConvention] = None,
) -> None:
  """
  Print a summary of the propagation results.

  Input:
  ------
    results : list[dict]
      Result dictionaries from run_propagations.
    convention : DisplayConvention, optional
      Used only to label the length unit.
  """
  if convention is None:
    convention = DisplayConvention()
  unit_label = "km" if convention.length_unit_km == 1.0 else f"L ({convention.length_unit_km:g} km)"

  print("\nResults Summary")

  for result in results:
    print(f"  {result['name']} ({result['kind']})")
    print(f"    Markers  : {result['message']}")

    period = result['period']
    if period is not None:
      print(f"    Period   : {period:.3f} s ({format_time_offset(period)})")
    else:
      print(f"    Period   : None")

    if result['polyline'] is not None:
      print(f"    Polyline : {result['polyline'].shape[0]} vertices")
    else:
      print(f"    Polyline : None")

    if result['success']:
      last_idx  = int(result['valid'].nonzero()[0][-1])
      pos_vec_f = result['state'][0:3, last_idx]
      vel_vec_f = result['state'][3:6, last_idx]
      print(f"    Final Marker ({format_time_offset(result['time'][last_idx])})")
      print(f"      Position : {pos_vec_f[0]:>19.12e}  {pos_vec_f[1]:>19.12e}  {pos_vec_f[2]:>19.12e} {unit_label}")
      print(f"      Velocity : {vel_vec_f[0]:>19.12e}  {vel_vec_f[1]:>19.12e}  {vel_vec_f[2]:>19.12e} {unit_label}/s")

    if result['elements'] is not None:
      print_elements(result['elements'], unit_label)
