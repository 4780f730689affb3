import numpy as np

from dataclasses import dataclass, replace
from datetime    import datetime
from typing      import Optional, Union

from orbit_mapper.model.constants                  import EARTH
from orbit_mapper.model.display                    import DisplayConvention
from orbit_mapper.model.elements                   import EphemerisSample, OrbitalElements, default_leo_elements
from orbit_mapper.propagation.ephemeris_propagator import EphemerisPropagator
from orbit_mapper.propagation.propagator           import KeplerPropagator, Propagator
from orbit_mapper.propagation.sgp4_propagator      import Sgp4Propagator
from orbit_mapper.utility.time_helper              import parse_time


SATELLITE_KINDS = ('elements', 'tle', 'ephemeris')

ELEMENT_KEYS = (
  'semi_major_axis',
  'eccentricity',
  'inclination_deg',
  'raan_deg',
  'arg_periapsis_deg',
  'mean_anomaly_deg',
)


@dataclass
class Satellite:
  """
  A named satellite with its propagator and the elements used to draw its orbit.
  """
  name       : str
  kind       : str
  propagator : Propagator
  elements   : Optional[OrbitalElements] = None


def parse_vec3(
  raw_val : Union[str, list, tuple],
) -> np.ndarray:
  """
  Parse a 3-vector given either as "x, y, z" (optionally bracketed) or a list.

  Input:
  ------
    raw_val : str | list | tuple
      Raw vector value from the scenario file.

  Output:
  -------
    vec : np.ndarray
      3-element float array.

  Raises:
  -------
    ValueError
      If the value is not a 3-vector of numbers.
  """
  if isinstance(raw_val, str):
    clean = raw_val.replace('[', '').replace(']', '')
    values = [x.strip() for x in clean.split(',') if x.strip()]
  elif isinstance(raw_val, (list, tuple)):
    values = list(raw_val)
  else:
    raise ValueError(f"Unknown format for vector: {raw_val}")

  if len(values) != 3:
    raise ValueError(f"Vector must have 3 components, received {len(values)}: {raw_val}")

  try:
    return np.array([float(x) for x in values])
  except (TypeError, ValueError):
    raise ValueError(f"Vector components must be numbers: {raw_val}")


def load_elements(
  elements_data : Union[str, dict],
  convention    : DisplayConvention,
) -> OrbitalElements:
  """
  Build OrbitalElements from a scenario 'elements' entry.

  Input:
  ------
    elements_data : str | dict
      Either the string 'default' (400 km LEO) or a mapping with any of the
      element keys plus an optional 'epoch'. Missing keys use the defaults of
      OrbitalElements.
    convention : DisplayConvention
      Semi-major axis is read in this convention's length unit.

  Output:
  -------
    elements : OrbitalElements
  """
  if isinstance(elements_data, str):
    if elements_data.lower() != 'default':
      raise ValueError(f"Unknown elements preset '{elements_data}'. Supported: 'default'.")
    elements = default_leo_elements()
    sma_km   = elements.semi_major_axis * EARTH.RADIUS.EQUATOR
    return replace(elements, semi_major_axis=sma_km / convention.length_unit_km)

  if not isinstance(elements_data, dict):
    raise ValueError(f"Elements must be a mapping or 'default', received: {elements_data}")

  unknown_keys = set(elements_data) - set(ELEMENT_KEYS) - {'epoch'}
  if unknown_keys:
    raise ValueError(f"Unknown element keys: {sorted(unknown_keys)}")

  try:
    values = {key: float(elements_data[key]) for key in ELEMENT_KEYS if key in elements_data}
  except (TypeError, ValueError):
    raise ValueError(f"Element values must be numbers, received: {elements_data}")
  if 'epoch' in elements_data and elements_data['epoch'] is not None:
    values['epoch'] = parse_time(elements_data['epoch'])

  elements = OrbitalElements(**values)

  if not (elements.semi_major_axis > 0.0):
    raise ValueError(f"Semi-major axis must be positive, received {elements.semi_major_axis}")
  if not (0.0 <= elements.eccentricity < 1.0):
    raise ValueError(f"Eccentricity must be in [0, 1), received {elements.eccentricity}")

  return elements


def load_tle(
  tle_data : Union[list, str],
) -> tuple[str, str]:
  """
  Extract a TLE line pair from a scenario 'tle' entry.

  Accepts a list of two lines, a list of three lines (name line first), or a
  single multi-line string. Lines are passed through verbatim.
  """
  if isinstance(tle_data, str):
    lines = [line for line in tle_data.splitlines() if line.strip()]
  elif isinstance(tle_data, (list, tuple)):
    lines = [str(line) for line in tle_data]
  else:
    raise ValueError(f"TLE must be a list of lines or a string, received: {tle_data}")

  if len(lines) == 3:
    lines = lines[1:]
  if len(lines) != 2:
    raise ValueError(f"TLE must have 2 lines (or 3 with a name line), received {len(lines)}")

  return lines[0], lines[1]


def load_ephemeris(
  ephemeris_data : list,
) -> list[EphemerisSample]:
  """
  Build ephemeris samples from a scenario 'ephemeris' entry.

  Input:
  ------
    ephemeris_data : list
      Each item holds 'time', 'pos_vec__km', 'vel_vec__km_per_s', and
      optionally 'covariance' (21 upper-triangle values).

  Output:
  -------
    samples : list[EphemerisSample]
  """
  if not isinstance(ephemeris_data, list) or not ephemeris_data:
    raise ValueError("Ephemeris must be a non-empty list of samples.")

  samples = []
  for idx, sample_data in enumerate(ephemeris_data):
    if not isinstance(sample_data, dict):
      raise ValueError(f"Ephemeris sample {idx} must be a mapping.")
    for key in ('time', 'pos_vec__km', 'vel_vec__km_per_s'):
      if key not in sample_data:
        raise ValueError(f"Ephemeris sample {idx} is missing '{key}'.")

    covariance = sample_data.get('covariance')
    if covariance is not None and not isinstance(covariance, (list, tuple)):
      raise ValueError(f"Ephemeris sample {idx} covariance must be a list of 21 values.")

    samples.append(EphemerisSample(
      time              = parse_time(sample_data['time']),
      position_km       = parse_vec3(sample_data['pos_vec__km']),
      velocity_km_per_s = parse_vec3(sample_data['vel_vec__km_per_s']),
      has_covariance    = covariance is not None,
      covariance_upper  = tuple(covariance) if covariance is not None else (),
    ))

  return samples


def build_satellite(
  satellite_data : dict,
  convention     : DisplayConvention,
  time_o_dt      : Optional[datetime] = None,
) -> Satellite:
  """
  Build a Satellite from one scenario entry.

  Input:
  ------
    satellite_data : dict
      Mapping with a 'name' and exactly one of 'elements', 'tle', 'ephemeris'.
    convention : DisplayConvention
      Display convention shared by every propagator.
    time_o_dt : datetime, optional
      Run start. Elements without an epoch are anchored here so their marker
      advances with time.

  Output:
  -------
    satellite : Satellite

  Raises:
  -------
    ValueError
      If the entry has no kind, several kinds, or malformed values.
  """
  if not isinstance(satellite_data, dict):
    raise ValueError(f"Satellite entry must be a mapping, received: {satellite_data}")

  name  = str(satellite_data.get('name', 'satellite'))
  kinds = [kind for kind in SATELLITE_KINDS if kind in satellite_data]
  if len(kinds) != 1:
    raise ValueError(
      f"Satellite '{name}' must define exactly one of {list(SATELLITE_KINDS)}, found {kinds}."
    )
  kind = kinds[0]

  if kind == 'elements':
    elements   = load_elements(satellite_data['elements'], convention)
    if elements.epoch is None and time_o_dt is not None:
      elements = replace(elements, epoch=time_o_dt)
    propagator = KeplerPropagator(elements, convention)
  elif kind == 'tle':
    tle_line_1, tle_line_2 = load_tle(satellite_data['tle'])
    propagator = Sgp4Propagator(tle_line_1, tle_line_2, convention)
    elements   = propagator.try_get_mean_elements()
  else:
    samples    = load_ephemeris(satellite_data['ephemeris'])
    propagator = EphemerisPropagator(samples, convention)
    elements   = propagator.try_get_keplerian_elements()

  return Satellite(
    name       = name,
    kind       = kind,
    propagator = propagator,
    elements   = elements,
  )


def build_satellites(
  satellites_data : list,
  convention      : DisplayConvention,
  time_o_dt       : Optional[datetime] = None,
) -> list[Satellite]:
  """
  Build every satellite of a scenario, in file order.
  """
  return [build_satellite(satellite_data, convention, time_o_dt) for satellite_data in satellites_data]
