"""Reader for plasma current-profile tables (normalized radius, enclosed fraction)."""

from __future__ import annotations

import math
import re
from pathlib import Path
from typing import List, Optional, Tuple, Union

from tokamaksim.config import CurrentProfilePoint

_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_WHITESPACE = " \t\r\n"
_SEPARATORS = str.maketrans({",": " ", ";": " ", "\t": " "})


class ProfileTableError(ValueError):
    """A current-profile table could not be read or holds invalid data."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        super().__init__(message)
        self.line_number = line_number


def _read_number(text: str, pos: int) -> Optional[Tuple[float, int]]:
    while pos < len(text) and text[pos] in _WHITESPACE:
        pos += 1
    match = _NUMBER.match(text, pos)
    if match is None:
        return None
    value = float(match.group())
    if not math.isfinite(value):
        return None
    return value, match.end()


def parse_current_profile_text(text: str, source: str = "<string>") -> List[CurrentProfilePoint]:
    """Parse table rows from ``text``; ``source`` names the input in error messages."""
    points: List[CurrentProfilePoint] = []

    for line_number, line in enumerate(text.split("\n"), start=1):
        trimmed = line.strip(_WHITESPACE)
        if not trimmed or trimmed.startswith("#"):
            continue
        row = trimmed.translate(_SEPARATORS)

        first = _read_number(row, 0)
        second = _read_number(row, first[1]) if first is not None else None
        if first is None or second is None:
            if not points:
                continue  # a leading header row
            raise ProfileTableError(
                f"Invalid current-profile table row at line {line_number}", line_number
            )

        if row[second[1]:].strip(_WHITESPACE):
            raise ProfileTableError(
                f"Too many values in current-profile table row at line {line_number}", line_number
            )

        radius, fraction = first[0], second[0]
        if not (0.0 <= radius <= 1.0 and 0.0 <= fraction <= 1.0):
            raise ProfileTableError(
                f"Current-profile table values must be finite and in [0,1] at line {line_number}",
                line_number,
            )
        points.append(CurrentProfilePoint(radius, fraction))

    if not points:
        raise ProfileTableError(f"Current-profile table file has no numeric data rows: {source}")
    return points


def parse_current_profile_table(path: Union[str, Path]) -> List[CurrentProfilePoint]:
    """Read and parse a current-profile table file."""
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError):
        raise ProfileTableError(f"Unable to open current-profile table file: {path}") from None
    return parse_current_profile_text(text, str(path))