"""Trajectory log sink for autopilot diagnostics.

Writes one line per autopilot tick to a text file::

    write
    0.1 9998.7 -12.6
    0.2 9997.4 -12.7
    ...

The file opens lazily on the first record. A fresh file starts with the header
line ``write``; appending to a non-empty file leaves its header in place.
Logging is best-effort: if the file cannot be opened or written, the sink logs a
warning once and silently drops every later record.

Example:
    >>> from lander.output import TrajectoryLog
    >>> with TrajectoryLog("trajectories.txt") as log:
    ...     log.write(0.1, 9998.7, -12.6)
"""

import logging
from pathlib import Path
from typing import Any, TextIO

from beartype import beartype

logger = logging.getLogger(__name__)

HEADER_TOKEN = "write"
LOG_COLUMNS = ("time", "altitude", "radial_velocity")


@beartype
class TrajectoryLog:
    """Lazily-opened, append-only trajectory record file.

    Attributes:
        path: Output file path
        records_written: Number of data lines written so far
    """

    def __init__(self, path: str | Path, append: bool = False) -> None:
        """Initialize the sink. Nothing is opened until the first write.

        Args:
            path: Output file path
            append: Append to an existing file instead of truncating it
        """
        self.path = Path(path)
        self.records_written = 0
        self._mode = "a" if append else "w"
        self._file: TextIO | None = None
        self._failed = False

    @property
    def is_open(self) -> bool:
        """True while the underlying file is open."""
        return self._file is not None

    @property
    def failed(self) -> bool:
        """True once the sink has degraded to a no-op."""
        return self._failed

    def _disable(self, exc: OSError) -> None:
        logger.warning("Trajectory log %s unavailable, disabling: %s", self.path, exc)
        self._failed = True
        if self._file is not None:
            try:
                self._file.close()
            except OSError:
                pass
            self._file = None

    def _open(self) -> bool:
        try:
            self._file = open(self.path, self._mode)
            # Appended runs share the header already at the top of the file
            if self._file.tell() == 0:
                self._file.write(HEADER_TOKEN + "\n")
        except OSError as exc:
            self._disable(exc)
            return False
        logger.debug("Opened trajectory log %s", self.path)
        return True

    def write(self, elapsed_time: float, altitude: float, radial_velocity: float) -> None:
        """Append one ``elapsed_time altitude radial_velocity`` record.

        Never raises for I/O problems.
        """
        if self._failed:
            return
        if self._file is None and not self._open():
            return
        try:
            self._file.write(f"{elapsed_time} {altitude} {radial_velocity}\n")
        except OSError as exc:
            self._disable(exc)
            return
        self.records_written += 1

    def flush(self) -> None:
        """Flush buffered records to disk."""
        if self._file is None:
            return
        try:
            self._file.flush()
        except OSError as exc:
            self._disable(exc)

    def close(self) -> None:
        """Flush and close the file. Safe to call more than once."""
        if self._file is None:
            return
        try:
            self._file.close()
        except OSError as exc:
            logger.warning("Failed to close trajectory log %s: %s", self.path, exc)
        finally:
            self._file = None

    def __enter__(self) -> "TrajectoryLog":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


@beartype
def read_trajectory_log(path: str | Path):
    """Load a trajectory log written by ``TrajectoryLog`` into a Polars DataFrame.

    The leading ``write`` header line is skipped.

    Args:
        path: Log file path

    Returns:
        DataFrame with ``time``, ``altitude`` and ``radial_velocity`` columns

    Raises:
        ValueError: If a data line does not hold three numbers
    """
    import polars as pl

    schema = {name: pl.Float64 for name in LOG_COLUMNS}
    try:
        df = pl.read_csv(
            path,
            separator=" ",
            has_header=False,
            skip_rows=1,
            schema=schema,
            raise_if_empty=False,
        )
    except pl.exceptions.PolarsError as exc:
        raise ValueError(f"{path}: malformed trajectory log: {exc}") from exc

    # Short rows come back padded with nulls
    if df.null_count().sum_horizontal().item() > 0:
        raise ValueError(f"{path}: malformed trajectory log: expected 3 fields per line")
    return df
