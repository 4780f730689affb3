"""
Time Utilities
==============

Utility functions for time parsing, formatting, and UTC/Julian date handling.
"""
from datetime import datetime, timezone

from sgp4.api import jday


def to_utc(
  time : datetime,
) -> datetime:
  """
  Normalize a datetime to timezone-aware UTC. Naive values are taken as UTC.
  """
  if time.tzinfo is None:
    return time.replace(tzinfo=timezone.utc)
  return time.astimezone(timezone.utc)


def datetime_to_jday(
  time : datetime,
) -> tuple[float, float]:
  """
  Convert a datetime to the two-part Julian date used by SGP4.

  Input:
  ------
    time : datetime
      Absolute time (naive values are treated as UTC).

  Output:
  -------
    jd : float
      Julian date at 0h of the day.
    fr : float
      Fraction of the day.
  """
  time_utc = to_utc(time)
  return jday(
    time_utc.year,
    time_utc.month,
    time_utc.day,
    time_utc.hour,
    time_utc.minute,
    time_utc.second + time_utc.microsecond / 1e6,
  )


def format_time_offset(
  seconds : float,
) -> str:
  """
  Format a time offset in seconds as a human-readable string.

  Examples:
    12345.678 -> "+0d 03h 25m 45.678s"
   -98765.432 -> "-1d 03h 26m 05.432s"

  Input:
  ------
    seconds : float
      Time offset in seconds (can be positive or negative).

  Output:
  -------
    str
      Formatted string like "+47d 21h 30m 20.357s" or "-1d 02h 15m 00.000s"
  """
  sign    = '+' if seconds >= 0 else '-'
  abs_sec = abs(seconds)

  days    = int(abs_sec // 86400)
  hours   = int((abs_sec % 86400) // 3600)
  minutes = int((abs_sec % 3600) // 60)
  secs    = abs_sec % 60

  return f"{sign}{days}d {hours:02d}h {minutes:02d}m {secs:06.3f}s"


def parse_time(
  time_str : str,
) -> datetime:
  """
  Parse a time string into a timezone-aware UTC datetime.

  Accepted formats include:
  - ISO 8601 with 'T' separator: "2025-10-01T00:00:00"
  - ISO 8601 with 'Z' suffix: "2025-10-01T00:00:00Z"
  - Space-separated: "2025-10-01 00:00:00"
  - With microseconds: "2025-10-01 00:00:00.123456"

  Input:
  ------
    time_str : str
      Time string to parse.

  Output:
  -------
    datetime
      Parsed datetime, normalized to UTC.
  """
  if isinstance(time_str, datetime):
    return to_utc(time_str)

  time_str = str(time_str).strip()

  # Handle 'Z' suffix for Python < 3.11 compatibility
  if time_str.endswith('Z'):
    time_str = time_str[:-1]

  try:
    return to_utc(datetime.fromisoformat(time_str))
  except ValueError:
    formats = [
      "%Y-%m-%d %H:%M:%S",
      "%Y-%m-%d %H:%M:%S.%f",
    ]
    for fmt in formats:
      try:
        return to_utc(datetime.strptime(time_str, fmt))
      except ValueError:
        continue
    raise ValueError(f"Cannot parse time string: {time_str}")
