"""
Propagation Runner
==================

Samples each satellite's orbit polyline once and evaluates its marker over a
time grid, the way a rendering loop would frame by frame.
"""
import logging
import numpy as np

from datetime import datetime, timedelta
from typing   import Optional

from orbit_mapper.model.display       import DisplayConvention
from orbit_mapper.model.constants     import SAMPLING
from orbit_mapper.model.orbit_sampler import sample_orbit_polyline
from orbit_mapper.utility.time_helper import format_time_offset


_log = logging.getLogger(__name__)


def propagate_satellite(
  satellite  : object,
  time_o_dt  : datetime,
  time_s     : np.ndarray,
  segments   : int = SAMPLING.SEGMENTS_DEFAULT,
  convention : Optional[DisplayConvention] = None,
) -> dict:
  """
  Sample the orbit polyline and evaluate the marker of one satellite.

  Input:
  ------
    satellite : Satellite
      Satellite record with 'name', 'kind', 'propagator', 'elements'.
    time_o_dt : datetime
      Start time.
    time_s : np.ndarray
      Evaluation times in seconds from time_o_dt.
    segments : int
      Polyline segments.
    convention : DisplayConvention, optional
      Applied to the polyline (the propagator already carries its own).

  Output:
  -------
    result : dict
      Result dictionary with 'success', 'name', 'kind', 'time', 'state'
      (6xN, display units), 'valid' (N bool), 'polyline' ((segments+1)x3 or
      None), 'period' (s or None), 'elements', 'message'.
  """
  if convention is None:
    convention = DisplayConvention()

  polyline = None
  if satellite.elements is not None:
    polyline = sample_orbit_polyline(satellite.elements, segments, convention)

  state = np.zeros((6, len(time_s)))
  valid = np.zeros(len(time_s), dtype=bool)
  for idx, delta_time in enumerate(time_s):
    eci_state = satellite.propagator.propagate(time_o_dt + timedelta(seconds=float(delta_time)))
    state[0:3, idx] = eci_state.position
    state[3:6, idx] = eci_state.velocity
    valid[idx]      = not eci_state.is_zero()

  num_valid = int(np.count_nonzero(valid))
  if num_valid < len(time_s):
    _log.info(
      "%s: %d of %d markers unavailable",
      satellite.name, len(time_s) - num_valid, len(time_s),
    )

  return {
    'success'  : num_valid > 0,
    'name'     : satellite.name,
    'kind'     : satellite.kind,
    'time'     : np.asarray(time_s, dtype=float),
    'state'    : state,
    'valid'    : valid,
    'polyline' : polyline,
    'period'   : satellite.propagator.try_get_orbital_period_seconds(),
    'elements' : satellite.elements,
    'message'  : f"{num_valid}/{len(time_s)} markers available",
  }


def run_propagations(
  satellites      : list,
  time_o_dt       : datetime,
  time_f_dt       : datetime,
  num_time_points : int = 100,
  segments        : int = SAMPLING.SEGMENTS_DEFAULT,
  convention      : Optional[DisplayConvention] = None,
) -> list[dict]:
  """
  Run propagate_satellite for every satellite over a uniform time grid.

  Input:
  ------
    satellites : list[Satellite]
      Satellites to propagate.
    time_o_dt : datetime
      Start time.
    time_f_dt : datetime
      End time.
    num_time_points : int
      Number of evaluation times, endpoints included.
    segments : int
      Polyline segments per orbit.
    convention : DisplayConvention, optional
      Display convention.

  Output:
  -------
    results : list[dict]
      One result dictionary per satellite, in input order.
  """
  delta_time_s = (time_f_dt - time_o_dt).total_seconds()
  time_s       = np.linspace(0.0, delta_time_s, num_time_points)

  print("\nPropagation")
  print(f"  Timespan    : {time_o_dt.isoformat()} to {time_f_dt.isoformat()} ({format_time_offset(delta_time_s)})")
  print(f"  Time Points : {num_time_points}")
  print(f"  Segments    : {max(SAMPLING.SEGMENTS_MIN, int(segments))}")

  results = []
  for satellite in satellites:
    results.append(propagate_satellite(
      satellite  = satellite,
      time_o_dt  = time_o_dt,
      time_s     = time_s,
      segments   = segments,
      convention = convention,
    ))

  return results
