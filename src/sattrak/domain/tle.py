# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Two-Line Element (TLE) parsing.

Fixed-column extraction of the classical orbital elements from TLE
line 2, plus catalog number and epoch from line 1.

Parsing is permissive: a malformed or truncated field becomes nan
(numeric elements) or None (line-1 metadata) instead of raising, so a
single bad record never stops a rendering loop. Use is_propagatable()
before trusting the result. Checksums are not validated.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone


# (start, stop) half-open, 0-indexed columns of TLE line 2
_INCLINATION_COLS = (8, 16)
_RAAN_COLS = (17, 25)
_ECCENTRICITY_COLS = (26, 33)
_ARG_PERIGEE_COLS = (34, 42)
_MEAN_ANOMALY_COLS = (43, 51)
_MEAN_MOTION_COLS = (52, 63)

# TLE line 1
_CATNR_COLS = (2, 7)
_EPOCH_YEAR_COLS = (18, 20)
_EPOCH_DAY_COLS = (20, 32)
# Exclusive upper bound; day 366 of a leap year runs to 366.999...
_MAX_DAY_OF_YEAR = 367.0


@dataclass(frozen=True)
class OrbitalElements:
    """Mean orbital elements parsed from a TLE pair."""
    inclination_deg: float
    raan_deg: float
    eccentricity: float
    arg_perigee_deg: float
    mean_anomaly_deg: float
    mean_motion_rev_per_day: float
    norad_cat_id: int | None = None
    epoch: datetime | None = None

    def is_propagatable(self) -> bool:
        """True when every element is finite and mean motion is nonzero."""
        values = (
            self.inclination_deg,
            self.raan_deg,
            self.eccentricity,
            self.arg_perigee_deg,
            self.mean_anomaly_deg,
            self.mean_motion_rev_per_day,
        )
        return all(math.isfinite(v) for v in values) and self.mean_motion_rev_per_day != 0


def _float_field(line: str, cols: tuple[int, int]) -> float:
    try:
        return float(line[cols[0]:cols[1]])
    except (TypeError, ValueError):
        return math.nan


def _eccentricity_field(line: str) -> float:
    """
    Eccentricity with the implied leading decimal point.

    The point sits before the first column of the field, so blanks
    inside the field are zero digits. Only ASCII digits are accepted.
    """
    try:
        field = line[_ECCENTRICITY_COLS[0]:_ECCENTRICITY_COLS[1]]
    except TypeError:
        return math.nan
    digits = field.rstrip().replace(" ", "0")
    if not (digits.isascii() and digits.isdigit()):
        return math.nan
    return float("0." + digits)


def _catalog_number(line1: str) -> int | None:
    try:
        return int(line1[_CATNR_COLS[0]:_CATNR_COLS[1]])
    except (TypeError, ValueError):
        return None


def parse_epoch(line1: str) -> datetime | None:
    """
    Epoch from TLE line 1 as a UTC datetime.

    Two-digit years 57–99 map to 19xx, 00–56 to 20xx. The day field is
    the 1-based day of year with a fractional part. Days outside
    [1, 367) are malformed.

    Returns:
        Timezone-aware datetime, or None if the field is malformed.
    """
    try:
        year = int(line1[_EPOCH_YEAR_COLS[0]:_EPOCH_YEAR_COLS[1]])
        day_of_year = float(line1[_EPOCH_DAY_COLS[0]:_EPOCH_DAY_COLS[1]])
    except (TypeError, ValueError):
        return None
    if not 1.0 <= day_of_year < _MAX_DAY_OF_YEAR:
        return None
    year += 1900 if year >= 57 else 2000
    start = datetime(year, 1, 1, tzinfo=timezone.utc)
    return start + timedelta(days=day_of_year - 1.0)


def parse_tle(line1: str, line2: str) -> OrbitalElements:
    """
    Parse a TLE line pair into OrbitalElements.

    Orbital elements come from line 2 columns:
        inclination [8,16), RAAN [17,25), eccentricity [26,33)
        (implied "0."), argument of perigee [34,42),
        mean anomaly [43,51), mean motion [52,63).

    Args:
        line1: TLE line 1 (catalog number and epoch only).
        line2: TLE line 2.

    Returns:
        OrbitalElements; unparseable fields are nan / None.
    """
    return OrbitalElements(
        inclination_deg=_float_field(line2, _INCLINATION_COLS),
        raan_deg=_float_field(line2, _RAAN_COLS),
        eccentricity=_eccentricity_field(line2),
        arg_perigee_deg=_float_field(line2, _ARG_PERIGEE_COLS),
        mean_anomaly_deg=_float_field(line2, _MEAN_ANOMALY_COLS),
        mean_motion_rev_per_day=_float_field(line2, _MEAN_MOTION_COLS),
        norad_cat_id=_catalog_number(line1),
        epoch=parse_epoch(line1),
    )


def tle_checksum(line: str) -> int:
    """Modulo-10 checksum over the first 68 columns ('-' counts as 1)."""
    total = 0
    for ch in line[:68]:
        if ch.isdigit():
            total += int(ch)
        elif ch == '-':
            total += 1
    return total % 10


def format_tle_line2(
    elements: OrbitalElements,
    rev_number: int = 0,
) -> str:
    """
    Write elements back into the TLE line 2 column layout.

    Args:
        elements: Orbital elements; norad_cat_id defaults to 0 if unset.
        rev_number: Revolution number at epoch (columns 63–67).

    Returns:
        69-character line 2 including checksum.

    Raises:
        ValueError: If the elements are not propagatable.
    """
    if not elements.is_propagatable():
        raise ValueError("Cannot format non-finite orbital elements")
    catnr = elements.norad_cat_id or 0
    ecc_digits = f"{round(elements.eccentricity * 1e7):07d}"
    body = (
        f"2 {catnr:05d} "
        f"{elements.inclination_deg:8.4f} "
        f"{elements.raan_deg:8.4f} "
        f"{ecc_digits} "
        f"{elements.arg_perigee_deg:8.4f} "
        f"{elements.mean_anomaly_deg:8.4f} "
        f"{elements.mean_motion_rev_per_day:11.8f}"
        f"{rev_number % 100000:5d}"
    )
    return body + str(tle_checksum(body))
