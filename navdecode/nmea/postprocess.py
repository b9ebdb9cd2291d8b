"""Field post-processing strategies.

After decoding, each field hands its token columns (one numpy array per token,
one entry per sentence) to its post-processing function, which returns the
field's final value. All strategies here are pure and operate on whole
columns at once. Custom strategies follow the same convention: take one
positional argument per token and raise ``ValueDecodeError`` for values that
cannot be mapped.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np

from navdecode.nmea.errors import ConfigurationError, ValueDecodeError
from navdecode.nmea.types import GPSMode

__all__ = ["FixModes", "decimal_degrees", "default", "fix_quality", "utc_time"]

_HEMISPHERES = ("N", "S", "E", "W")
_NEGATIVE_HEMISPHERES = ("S", "W")

_MODES_BY_CHARACTER = {
    chr(mode.value): mode for mode in GPSMode if mode is not GPSMode.UNKNOWN
}

# GGA fix quality digit -> mode; the digit is the index
_MODES_BY_QUALITY = (
    GPSMode.NO_FIX,
    GPSMode.AUTONOMOUS,
    GPSMode.DIFFERENTIAL,
    GPSMode.PRECISE,
    GPSMode.REAL_TIME_KINEMATIC,
    GPSMode.FLOAT_RTK,
    GPSMode.ESTIMATED,
    GPSMode.MANUAL,
    GPSMode.SIMULATED,
)


def _unknown_modes(shape: tuple[int, ...]) -> np.ndarray:
    """Object array of the given shape holding the UNKNOWN member itself."""
    modes = np.empty(shape, dtype=object)
    modes[...] = GPSMode.UNKNOWN
    return modes


def default(*columns: np.ndarray) -> Any:
    """Return a single column unwrapped, several columns as a tuple."""
    if len(columns) == 1:
        return columns[0]
    return columns


def decimal_degrees(
    degrees: np.ndarray,
    minutes: np.ndarray,
    hemisphere: np.ndarray,
) -> np.ndarray:
    """Combine degrees, minutes and hemisphere into signed decimal degrees.

    The conversion formula is:
        decimal_degrees = sign * (degrees + minutes / 60)

    where sign is -1 for South and West, +1 for North and East.

    Args:
        degrees: Whole degrees, e.g. from a ``%2f64`` or ``%3f64`` token.
        minutes: Decimal minutes.
        hemisphere: One of ``N``, ``S``, ``E``, ``W``, or ``""`` when the
            position is missing.

    Returns:
        float64 decimal degrees; NaN where the hemisphere or either numeric
        part is missing.

    Raises:
        ValueDecodeError: If a hemisphere character is not N, S, E or W.

    Example:
        >>> decimal_degrees(np.array([48.0]), np.array([7.038]), np.array(["N"]))
        array([48.1173])
    """
    hemisphere = np.asarray(hemisphere)
    invalid = ~np.isin(hemisphere, (*_HEMISPHERES, ""))
    if invalid.any():
        row = int(np.flatnonzero(invalid)[0])
        raise ValueDecodeError("invalid hemisphere", row=row, text=str(hemisphere[row]))

    sign = np.where(np.isin(hemisphere, _NEGATIVE_HEMISPHERES), -1.0, 1.0)
    value = sign * (
        np.asarray(degrees, dtype=np.float64)
        + np.asarray(minutes, dtype=np.float64) / 60.0
    )
    return np.where(hemisphere == "", np.nan, value)


def utc_time(
    hours: np.ndarray,
    minutes: np.ndarray,
    seconds: np.ndarray,
) -> np.ndarray:
    """Stack hours, minutes and seconds into an ``(N, 3)`` array.

    No calendar arithmetic is done; each row is a time of day as transmitted.
    """
    return np.column_stack([hours, minutes, seconds])


def fix_quality(codes: np.ndarray) -> np.ndarray:
    """Map GGA fix quality digits (0-8) to ``GPSMode`` members.

    Empty fields (the ``u8`` sentinel 255) and digits outside 0-8 map to
    ``GPSMode.UNKNOWN``.
    """
    codes = np.asarray(codes)
    modes = _unknown_modes(codes.shape)
    for quality, mode in enumerate(_MODES_BY_QUALITY):
        modes[codes == quality] = mode
    return modes


@dataclass(frozen=True)
class FixModes:
    """Map mode indicator strings to ``GPSMode`` members.

    Some sentences carry one mode character per satellite system (e.g. GPS
    then GLONASS). ``columns`` is the number of systems expected.

    Attributes:
        columns: Number of mode characters per sentence.

    Returns (when called):
        An object array of ``GPSMode``; shape ``(N,)`` for one column,
        ``(N, columns)`` otherwise. An empty string yields ``UNKNOWN`` in
        every column, and a string shorter than ``columns`` is padded with
        ``UNKNOWN``.

    Raises (when called):
        ValueDecodeError: For an unmapped character or more characters than
            ``columns``.
    """

    columns: int = 1

    def __post_init__(self) -> None:
        if self.columns < 1:
            raise ConfigurationError("FixModes needs at least one column")

    def __call__(self, codes: np.ndarray) -> np.ndarray:
        modes = _unknown_modes((len(codes), self.columns))
        for row, text in enumerate(codes):
            if len(text) > self.columns:
                raise ValueDecodeError(
                    f"expected at most {self.columns} mode characters",
                    row=row,
                    text=str(text),
                )
            for column, character in enumerate(text):
                mode = _MODES_BY_CHARACTER.get(character)
                if mode is None:
                    raise ValueDecodeError(
                        "unknown mode indicator", row=row, text=str(text)
                    )
                modes[row, column] = mode
        if self.columns == 1:
            return modes[:, 0]
        return modes
