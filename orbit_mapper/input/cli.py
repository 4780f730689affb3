import sys
import argparse

from orbit_mapper.model.constants     import SAMPLING
from orbit_mapper.utility.time_helper import parse_time


def parse_command_line_arguments(
  argv : list = None,
) -> argparse.Namespace:
  """
  Parse command-line arguments for the orbit mapper.

  Input:
  ------
    argv : list, optional
      Argument list (default: sys.argv[1:]).

  Output:
  -------
    args : argparse.Namespace
      Parsed command-line arguments.
  """
  parser = argparse.ArgumentParser(
    description     = 'Sample orbit polylines and propagate satellite markers from elements, TLEs, and ephemerides',
    formatter_class = argparse.RawDescriptionHelpFormatter,
  )

  if argv is None:
    argv = sys.argv[1:]

  # If no arguments provided, print help and exit
  if len(argv) == 0:
    parser.print_help(sys.stderr)
    sys.exit(1)

  # Scenario arguments
  parser.add_argument(
    '--scenario',
    dest     = 'scenario_filepath',
    type     = str,
    required = True,
    help     = 'Scenario YAML file listing satellites as elements, TLEs, or ephemeris samples.',
  )

  # Time arguments
  parser.add_argument(
    '--timespan',
    dest     = 'timespan',
    type     = parse_time,
    nargs    = 2,
    metavar  = ('TIME_START', 'TIME_END'),
    required = True,
    help     = "Start and end time for propagation in ISO format (e.g., '2025-10-01T00:00:00 2025-10-02T00:00:00').",
  )
  parser.add_argument(
    '--num-time-points',
    dest    = 'num_time_points',
    type    = int,
    default = 100,
    help    = 'Number of marker evaluation times across the timespan (default: 100).',
  )

  # Sampling arguments
  parser.add_argument(
    '--segments',
    dest    = 'segments',
    type    = int,
    default = SAMPLING.SEGMENTS_DEFAULT,
    help    = f'Polyline segments per orbit, minimum {SAMPLING.SEGMENTS_MIN} (default: {SAMPLING.SEGMENTS_DEFAULT}).',
  )

  # Output arguments
  parser.add_argument(
    '--plot-filepath',
    dest    = 'plot_filepath',
    type    = str,
    default = None,
    help    = 'Save a 3D figure of orbits and markers to this PNG file.',
  )
  parser.add_argument(
    '--log-filepath',
    dest    = 'log_filepath',
    type    = str,
    default = None,
    help    = 'Mirror terminal output to this log file.',
  )
  parser.add_argument(
    '--verbose',
    '-v',
    dest    = 'verbose',
    action  = 'store_true',
    default = False,
    help    = 'Enable DEBUG logging (disabled by default).',
  )

  # Parse arguments
  args = parser.parse_args(argv)

  return args
