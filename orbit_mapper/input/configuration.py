import yaml

from pathlib  import Path
from datetime import datetime
from types    import SimpleNamespace
from typing   import Optional

from orbit_mapper.model.constants     import EARTH, SAMPLING
from orbit_mapper.model.display       import DisplayConvention
from orbit_mapper.utility.time_helper import parse_time


def print_input_configuration(
  scenario_filepath : Path,
  desired_timespan  : list,
  num_time_points   : int,
  segments          : int,
  plot_filepath     : Optional[Path],
  log_filepath      : Optional[Path],
  verbose           : bool,
) -> None:
  """
  Print the input configuration in a formatted table.

  Input:
  ------
    scenario_filepath : Path
      Scenario YAML file.
    desired_timespan : list
      Initial and final time as a list of datetimes.
    num_time_points : int
      Number of marker evaluation times.
    segments : int
      Polyline segments per orbit.
    plot_filepath : Path | None
      Output figure, or None if disabled.
    log_filepath : Path | None
      Output log, or None if disabled.
    verbose : bool
      Flag to enable DEBUG logging.

  Output:
  -------
    None
  """
  # Define defaults for comparison
  defaults = {
    'num_time_points' : 100,
    'segments'        : SAMPLING.SEGMENTS_DEFAULT,
    'plot_filepath'   : None,
    'log_filepath'    : None,
    'verbose'         : False,
  }

  timespan_str = f"{desired_timespan[0].isoformat()} {desired_timespan[1].isoformat()}"

  # Build configuration entries: (name, value, default, user_set)
  entries = [
    ('scenario',        scenario_filepath, None,                       True),
    ('timespan',        timespan_str,      None,                       True),
    ('num_time_points', num_time_points,   defaults['num_time_points'], num_time_points != defaults['num_time_points']),
    ('segments',        segments,          defaults['segments'],        segments        != defaults['segments']),
    ('plot_filepath',   plot_filepath,     defaults['plot_filepath'],   plot_filepath   is not None),
    ('log_filepath',    log_filepath,      defaults['log_filepath'],    log_filepath    is not None),
    ('verbose',         verbose,           defaults['verbose'],         verbose         != defaults['verbose']),
  ]

  # Convert entries to strings for width calculation
  headers = ['Argument', 'Value', 'Default', 'User Set']
  rows = []
  for name, value, default, user_set in entries:
    rows.append([
      name,
      str(value) if value is not None else "None",
      str(default) if default is not None else "None",
      str(user_set),
    ])

  # Calculate column widths: max of header and all values, plus 4 for spacing
  min_spacing = 4
  col_widths = []
  for col_idx in range(len(headers)):
    max_len = len(headers[col_idx])
    for row in rows:
      max_len = max(max_len, len(row[col_idx]))
    col_widths.append(max_len + min_spacing)

  # Print table
  print("\nInput Configuration")
  header_line = "  " + "".join(h.ljust(col_widths[i]) for i, h in enumerate(headers))
  print(header_line)
  separator_line = "  " + "".join(("-" * (col_widths[i] - min_spacing)).ljust(col_widths[i]) for i in range(len(headers)))
  print(separator_line)

  for row in rows:
    row_line = "  " + "".join(row[col_idx].ljust(col_widths[col_idx]) for col_idx in range(len(row)))
    print(row_line)


def print_display_convention(
  convention : DisplayConvention,
) -> None:
  """
  Print the display convention shared by all satellites.
  """
  print("\nDisplay Convention")
  print(f"  Length Unit : {convention.length_unit_km:.6f} km")
  print(f"  Remap Axes  : {convention.remap_axes}")


def print_configuration(
  config : SimpleNamespace,
) -> None:
  """
  Print the complete configuration (input arguments and display convention).

  Input:
  ------
    config : SimpleNamespace
      Configuration object from build_config.

  Output:
  -------
    None
  """
  print_input_configuration(
    scenario_filepath = config.scenario_filepath,
    desired_timespan  = config.desired_timespan,
    num_time_points   = config.num_time_points,
    segments          = config.segments,
    plot_filepath     = config.plot_filepath,
    log_filepath      = config.log_filepath,
    verbose           = config.verbose,
  )

  print_display_convention(config.convention)


def load_scenario(
  scenario_filepath : Path,
) -> dict:
  """
  Load a scenario YAML file.

  Input:
  ------
    scenario_filepath : Path
      Path to the scenario file.

  Output:
  -------
    scenario : dict
      Parsed scenario with a non-empty 'satellites' list.

  Raises:
  -------
    FileNotFoundError
      If the file does not exist.
    ValueError
      If the file is not valid YAML, not a mapping, or has no satellites.
  """
  if not scenario_filepath.exists():
    raise FileNotFoundError(f"Scenario file not found: {scenario_filepath}")

  with open(scenario_filepath, 'r') as f:
    try:
      scenario = yaml.safe_load(f)
    except yaml.YAMLError as exc:
      raise ValueError(f"Scenario file {scenario_filepath} is not valid YAML: {exc}")

  if not isinstance(scenario, dict):
    raise ValueError(f"Scenario file {scenario_filepath} must contain a mapping.")

  satellites = scenario.get('satellites')
  if not isinstance(satellites, list) or not satellites:
    raise ValueError(f"Scenario file {scenario_filepath} must contain a non-empty 'satellites' list.")

  return scenario


def build_display_convention(
  display_data : Optional[dict],
) -> DisplayConvention:
  """
  Build the display convention from an optional scenario 'display' block.

  Input:
  ------
    display_data : dict | None
      Optional keys 'length_unit_km' (float, or 'km' / 'earth_radii') and
      'remap_axes' (bool).

  Output:
  -------
    convention : DisplayConvention
  """
  if display_data is None:
    return DisplayConvention()
  if not isinstance(display_data, dict):
    raise ValueError(f"Display block must be a mapping, received: {display_data}")

  length_unit = display_data.get('length_unit_km', EARTH.RADIUS.EQUATOR)
  if isinstance(length_unit, str):
    length_unit_str = length_unit.lower().replace('-', '_').replace(' ', '_')
    if length_unit_str == 'km':
      length_unit = 1.0
    elif length_unit_str in ['earth_radii', 'earth_radius', 're']:
      length_unit = EARTH.RADIUS.EQUATOR
    else:
      raise ValueError(f"Unknown length unit '{length_unit}'. Use a number, 'km', or 'earth_radii'.")

  length_unit = float(length_unit)
  if not (length_unit > 0.0):
    raise ValueError(f"Display length unit must be positive, received {length_unit}")

  return DisplayConvention(
    length_unit_km = length_unit,
    remap_axes     = bool(display_data.get('remap_axes', True)),
  )


def build_config(
  scenario_filepath : str,
  timespan_dt       : list[datetime],
  num_time_points   : int            = 100,
  segments          : int            = SAMPLING.SEGMENTS_DEFAULT,
  plot_filepath     : Optional[str]  = None,
  log_filepath      : Optional[str]  = None,
  verbose           : bool           = False,
) -> SimpleNamespace:
  """
  Parse, validate, and set up input parameters for an orbit-mapping run.

  Input:
  ------
    scenario_filepath : str
      Path to the scenario YAML file.
    timespan_dt : list[datetime]
      Initial and final time as a list of datetime objects.
    num_time_points : int
      Number of marker evaluation times across the timespan (at least 2).
    segments : int
      Polyline segments per orbit.
    plot_filepath : str | None
      If given, the 3D figure is saved here.
    log_filepath : str | None
      If given, terminal output is mirrored to this file.
    verbose : bool
      Flag to enable DEBUG logging.

  Output:
  -------
    config : SimpleNamespace
      Configuration object containing parsed and calculated parameters.

  Raises:
  -------
    ValueError
      If the timespan or point count is invalid, or the scenario is malformed.
  """
  # Validate timespan
  if len(timespan_dt) != 2:
    raise ValueError("Timespan requires exactly 2 values: TIME_START TIME_END")
  time_o_dt = parse_time(timespan_dt[0])
  time_f_dt = parse_time(timespan_dt[1])
  if time_f_dt <= time_o_dt:
    raise ValueError(f"Timespan end ({time_f_dt}) must be after start ({time_o_dt}).")
  delta_time_s = (time_f_dt - time_o_dt).total_seconds()

  if num_time_points < 2:
    raise ValueError(f"Number of time points must be at least 2, received {num_time_points}")

  # Load scenario
  scenario_filepath = Path(scenario_filepath)
  scenario          = load_scenario(scenario_filepath)
  convention        = build_display_convention(scenario.get('display'))

  return SimpleNamespace(
    # Store original input values for print_configuration
    scenario_filepath = scenario_filepath,
    desired_timespan  = [time_o_dt, time_f_dt],
    num_time_points   = num_time_points,
    segments          = segments,
    plot_filepath     = Path(plot_filepath) if plot_filepath is not None else None,
    log_filepath      = Path(log_filepath) if log_filepath is not None else None,
    verbose           = verbose,
    # Parsed and calculated values
    time_o_dt         = time_o_dt,
    time_f_dt         = time_f_dt,
    delta_time_s      = delta_time_s,
    convention        = convention,
    satellites_data   = scenario['satellites'],
  )
