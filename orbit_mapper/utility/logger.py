"""
Logger Utility
==============

Mirrors terminal output to a log file and configures the standard logging
module for the command-line run.
"""
import logging
import sys

from pathlib import Path
from typing  import Optional, TextIO


LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class TeeStream:
  """
  A stream that writes to both a terminal stream and a shared log file.
  """
  def __init__(self, terminal: TextIO, log_file: TextIO):
    self.terminal = terminal
    self.log_file = log_file

  def write(self, message: str):
    self.terminal.write(message)
    self.log_file.write(message)
    self.log_file.flush()

  def flush(self):
    self.terminal.flush()
    self.log_file.flush()


class LoggerContext:
  """
  Context to hold logger state for cleanup.
  """
  def __init__(
    self,
    log_file,
    original_stdout,
    original_stderr,
  ):
    self.log_file        = log_file
    self.original_stdout = original_stdout
    self.original_stderr = original_stderr


def start_logging(
  log_filepath : Path,
) -> LoggerContext:
  """
  Start logging terminal output (stdout and stderr) to a file.

  Input:
  ------
    log_filepath : Path
      Path to the log file. Parent folders are created.

  Output:
  -------
    context : LoggerContext
      Context object for cleanup.
  """
  log_filepath = Path(log_filepath)
  log_filepath.parent.mkdir(parents=True, exist_ok=True)

  # Store original streams
  original_stdout = sys.stdout
  original_stderr = sys.stderr

  # One file handle shared by both tee streams
  log_file = open(log_filepath, 'w')

  # Redirect stdout and stderr
  sys.stdout = TeeStream(original_stdout, log_file)
  sys.stderr = TeeStream(original_stderr, log_file)

  return LoggerContext(
    log_file,
    original_stdout,
    original_stderr,
  )


def stop_logging(
  context : Optional[LoggerContext],
) -> None:
  """
  Stop logging and restore original stdout/stderr.

  Input:
  ------
    context : LoggerContext | None
      Context object from start_logging.

  Output:
  -------
    None
  """
  if context is None:
    return

  # Detach log handlers still writing to the tee streams
  root_logger = logging.getLogger()
  for handler in list(root_logger.handlers):
    if isinstance(getattr(handler, 'stream', None), TeeStream):
      root_logger.removeHandler(handler)

  # Restore original streams
  sys.stdout = context.original_stdout
  sys.stderr = context.original_stderr

  # Close log file
  context.log_file.close()


def configure_logging(
  verbose : bool = False,
) -> None:
  """
  Route log records to the current stdout (tee'd when file logging is on).

  Input:
  ------
    verbose : bool
      DEBUG level if True, otherwise INFO.
  """
  logging.basicConfig(
    level  = logging.DEBUG if verbose else logging.INFO,
    format = LOG_FORMAT,
    stream = sys.stdout,
    force  = True,
  )
