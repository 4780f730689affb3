"""
Orbit Mapper

Description:
  This script places satellites on their orbits over a timespan. Each satellite
  in the scenario file is defined one of three ways:
  - Keplerian orbital elements, propagated analytically (two-body)
  - a Two-Line Element set, propagated with SGP4
  - discrete ephemeris samples, interpolated linearly, or promoted to a
    synthetic TLE and propagated with SGP4 when a sample is alone or carries
    covariance

  The script performs the following steps:
  1. Loads the scenario and display convention.
  2. Builds one propagator per satellite.
  3. Samples each orbit polyline once and evaluates the markers over the timespan.
  4. Prints a summary and optionally saves a 3D figure.

Usage:

  Argument            Required   Description
  ------------------  --------   --------------------------------------------------
  --scenario          Yes        Scenario YAML file
  --timespan          Yes        Start and end time (ISO format)
  --num-time-points   No         Marker evaluation times (default 100)
  --segments          No         Polyline segments per orbit (default 512)
  --plot-filepath     No         Save a 3D figure to this PNG file
  --log-filepath      No         Mirror terminal output to this file
  --verbose           No         Enable DEBUG logging

  Example Commands:
    python -m orbit_mapper.main \
      --scenario data/scenarios/demo.yaml \
      --timespan 2019-12-09T20:00:00 2019-12-10T02:00:00 \
      --plot-filepath output/demo.png
"""
import logging
import sys

from datetime import datetime
from typing   import Optional

from orbit_mapper.input.cli             import parse_command_line_arguments
from orbit_mapper.input.configuration   import build_config, print_configuration
from orbit_mapper.input.loader          import build_satellites
from orbit_mapper.model.constants       import SAMPLING
from orbit_mapper.plot.trajectory       import generate_plots
from orbit_mapper.propagation.runner    import run_propagations
from orbit_mapper.utility.logger        import configure_logging, start_logging, stop_logging
from orbit_mapper.utility.printer       import print_results_summary


_log = logging.getLogger(__name__)


def run(
  scenario_filepath : str,
  timespan          : list[datetime],
  num_time_points   : int           = 100,
  segments          : int           = SAMPLING.SEGMENTS_DEFAULT,
  plot_filepath     : Optional[str] = None,
  log_filepath      : Optional[str] = None,
  verbose           : bool          = False,
) -> list[dict]:
  """
  Run the orbit mapping for one scenario.

  Input:
  ------
    scenario_filepath : str
      Scenario YAML file.
    timespan : list[datetime]
      Start and end time.
    num_time_points : int
      Marker evaluation times across the timespan.
    segments : int
      Polyline segments per orbit.
    plot_filepath : str | None
      If given, save a 3D figure here.
    log_filepath : str | None
      If given, mirror terminal output here.
    verbose : bool
      Enable DEBUG logging.

  Output:
  -------
    results : list[dict]
      One result dictionary per satellite.

  Raises:
  -------
    ValueError, FileNotFoundError
      If the configuration or scenario is invalid.
  """
  # Process inputs and setup
  config = build_config(
    scenario_filepath,
    timespan,
    num_time_points,
    segments,
    plot_filepath,
    log_filepath,
    verbose,
  )

  # Start logging to file
  logger = None
  if config.log_filepath is not None:
    logger = start_logging(config.log_filepath)
  configure_logging(config.verbose)

  try:
    # Print input configuration
    print_configuration(config)

    # Build propagators
    satellites = build_satellites(config.satellites_data, config.convention, config.time_o_dt)
    for satellite in satellites:
      if satellite.elements is None:
        _log.warning("%s: no orbit elements available, polyline skipped", satellite.name)

    # Sample polylines and evaluate markers
    results = run_propagations(
      satellites      = satellites,
      time_o_dt       = config.time_o_dt,
      time_f_dt       = config.time_f_dt,
      num_time_points = config.num_time_points,
      segments        = config.segments,
      convention      = config.convention,
    )

    # Display results
    print_results_summary(results, config.convention)

    # Generate plots
    if config.plot_filepath is not None:
      generate_plots(
        results       = results,
        plot_filepath = config.plot_filepath,
        convention    = config.convention,
        time_o_dt     = config.time_o_dt,
      )
  finally:
    # Stop logging
    stop_logging(logger)

  return results


def main(
  argv : Optional[list] = None,
) -> int:
  """
  Command-line entry point. Returns the process exit code.
  """
  # Parse command-line arguments
  args = parse_command_line_arguments(argv)

  try:
    run(
      args.scenario_filepath,
      args.timespan,
      args.num_time_points,
      args.segments,
      args.plot_filepath,
      args.log_filepath,
      args.verbose,
    )
  except (ValueError, FileNotFoundError) as exc:
    print(f"\n    [ERROR] {exc}", file=sys.stderr)
    return 1

  return 0


if __name__ == "__main__":
  sys.exit(main())
