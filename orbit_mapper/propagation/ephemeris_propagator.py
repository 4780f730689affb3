"""
Ephemeris Propagator
====================

Propagation from discrete ephemeris samples. A lone sample, or samples that
carry covariance, are promoted to synthetic TLEs and propagated with SGP4;
otherwise positions are linearly interpolated between bracketing samples.
"""
import bisect
import logging

from dataclasses import replace
from datetime    import datetime
from typing      import Iterable, Optional

from orbit_mapper.model.display               import DisplayConvention
from orbit_mapper.model.elements              import EciState, EphemerisSample, OrbitalElements
from orbit_mapper.model.orbit_converter       import extract_orbital_elements
from orbit_mapper.propagation.propagator      import Propagator
from orbit_mapper.propagation.sgp4_propagator import Sgp4Propagator
from orbit_mapper.utility.time_helper         import to_utc
from orbit_mapper.utility.tle_helper          import build_synthetic_tle


_log = logging.getLogger(__name__)


class EphemerisPropagator(Propagator):
  """
  Propagator over a sorted set of ephemeris samples.

  propagate tries, in order:
    1. SGP4 from the synthetic TLE of a lone sample
    2. SGP4 from the synthetic TLE of the nearest sample with covariance
    3. the lone sample itself
    4. linear interpolation between the bracketing samples, clamped at the ends
  """

  def __init__(
    self,
    samples    : Iterable[EphemerisSample],
    convention : Optional[DisplayConvention] = None,
  ):
    self.convention = convention if convention is not None else DisplayConvention()

    # Drop unset times, stable sort by time
    kept = [sample for sample in samples if sample.is_time_set]
    self._samples = tuple(sorted(kept, key=lambda sample: sample.time))

    # Offsets from the first sample [s], for bisection
    if self._samples:
      time_o = self._samples[0].time
      self._offsets = [(sample.time - time_o).total_seconds() for sample in self._samples]
    else:
      self._offsets = []

    self._elements    = self._build_elements()
    self._single_sgp4 = self._build_single_sgp4()
    self._sample_sgp4 = self._build_sample_sgp4()

    self._strategies = (
      self._propagate_single_sgp4,
      self._propagate_nearest_sgp4,
      self._propagate_single_sample,
      self._propagate_interpolated,
    )

  @property
  def samples(self) -> tuple[EphemerisSample, ...]:
    return self._samples

  def _build_elements(self) -> Optional[OrbitalElements]:
    if not self._samples:
      return None

    first    = self._samples[0]
    elements = extract_orbital_elements(
      first.position_km,
      first.velocity_km_per_s,
      self.convention,
    )
    if elements is None:
      return None
    return replace(elements, epoch=first.time)

  def _build_sgp4_for_sample(
    self,
    sample : EphemerisSample,
  ) -> Optional[Sgp4Propagator]:
    tle_lines = build_synthetic_tle(sample.time, sample.position_km, sample.velocity_km_per_s)
    if tle_lines is None:
      return None

    propagator = Sgp4Propagator(tle_lines[0], tle_lines[1], self.convention)
    if not propagator.is_available:
      return None
    return propagator

  def _build_single_sgp4(self) -> Optional[Sgp4Propagator]:
    if len(self._samples) != 1:
      return None

    propagator = self._build_sgp4_for_sample(self._samples[0])
    if propagator is None:
      _log.debug("Single-sample ephemeris has no usable synthetic TLE")
    return propagator

  def _build_sample_sgp4(self) -> Optional[list[Optional[Sgp4Propagator]]]:
    if len(self._samples) < 2:
      return None
    if not any(sample.has_covariance for sample in self._samples):
      return None

    propagators = [
      self._build_sgp4_for_sample(sample) if sample.has_covariance else None
      for sample in self._samples
    ]
    if all(propagator is None for propagator in propagators):
      _log.debug("No covariance sample produced a usable synthetic TLE")
      return None
    return propagators

  def _time_offset(
    self,
    time : datetime,
  ) -> float:
    return (to_utc(time) - self._samples[0].time).total_seconds()

  def _sample_state(
    self,
    index : int,
  ) -> EciState:
    sample = self._samples[index]
    return self.convention.state_from_km(sample.position_km, sample.velocity_km_per_s)

  def _nearest_index(
    self,
    time_offset : float,
  ) -> int:
    """
    Index of the sample closest in time. Ties go to the earlier sample.
    """
    index = bisect.bisect_left(self._offsets, time_offset)
    if index == 0:
      return 0
    if index >= len(self._offsets):
      return len(self._offsets) - 1

    delta_before = time_offset - self._offsets[index - 1]
    delta_after  = self._offsets[index] - time_offset
    return index - 1 if delta_before <= delta_after else index

  def _propagate_single_sgp4(
    self,
    time : datetime,
  ) -> Optional[EciState]:
    if self._single_sgp4 is None:
      return None
    return self._single_sgp4.propagate(time)

  def _propagate_nearest_sgp4(
    self,
    time : datetime,
  ) -> Optional[EciState]:
    if self._sample_sgp4 is None or len(self._sample_sgp4) != len(self._samples):
      return None

    propagator = self._sample_sgp4[self._nearest_index(self._time_offset(time))]
    if propagator is None:
      return None
    return propagator.propagate(time)

  def _propagate_single_sample(
    self,
    time : datetime,
  ) -> Optional[EciState]:
    if len(self._samples) != 1:
      return None
    return self._sample_state(0)

  def _propagate_interpolated(
    self,
    time : datetime,
  ) -> Optional[EciState]:
    if len(self._samples) < 2:
      return None

    time_offset = self._time_offset(time)
    if time_offset <= self._offsets[0]:
      return self._sample_state(0)
    if time_offset >= self._offsets[-1]:
      return self._sample_state(len(self._samples) - 1)

    index_after = bisect.bisect_left(self._offsets, time_offset)
    if self._offsets[index_after] == time_offset:
      return self._sample_state(index_after)
    index_before = index_after - 1

    delta_time = self._offsets[index_after] - self._offsets[index_before]
    if delta_time <= 0.0:
      return self._sample_state(index_before)

    alpha  = (time_offset - self._offsets[index_before]) / delta_time
    alpha  = min(max(alpha, 0.0), 1.0)
    before = self._samples[index_before]
    after  = self._samples[index_after]

    pos_vec = before.position_km       + alpha * (after.position_km       - before.position_km)
    vel_vec = before.velocity_km_per_s + alpha * (after.velocity_km_per_s - before.velocity_km_per_s)
    return self.convention.state_from_km(pos_vec, vel_vec)

  def propagate(
    self,
    time : datetime,
  ) -> EciState:
    """
    Display-space state at an absolute time.

    Input:
    ------
      time : datetime
        Evaluation time (naive values are treated as UTC).

    Output:
    -------
      state : EciState
        State from the first applicable strategy, or the zero sentinel when
        there are no samples.
    """
    if not self._samples:
      return EciState.zero()

    for strategy in self._strategies:
      state = strategy(time)
      if state is not None:
        return state

    return EciState.zero()

  def try_get_orbital_period_seconds(self) -> Optional[float]:
    if self._single_sgp4 is not None:
      period = self._single_sgp4.try_get_orbital_period_seconds()
      if period is not None:
        return period

    if self._sample_sgp4 is not None:
      for propagator in self._sample_sgp4:
        if propagator is None:
          continue
        period = propagator.try_get_orbital_period_seconds()
        if period is not None:
          return period

    return None

  def try_get_keplerian_elements(self) -> Optional[OrbitalElements]:
    return self._elements

  def has_sgp4(self) -> bool:
    return self._single_sgp4 is not None or self._sample_sgp4 is not None

  def is_epoch_state_set(self) -> bool:
    """
    True when the ephemeris carries an epoch state usable beyond its sample
    span: an SGP4 path is active or some sample has covariance.
    """
    if not self._samples:
      return False
    if self.has_sgp4():
      return True
    return any(sample.has_covariance for sample in self._samples)
