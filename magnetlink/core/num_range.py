"""Number range parsing for the ``so`` (select only) parameter.

Format:
    ``N``    a single number
    ``A-B``  a closed interval; ``A > B`` is accepted as-is
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from magnetlink.utils.exceptions import MalformedNumRangeError

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


def parse_decimal(text: str) -> int:
    """Parse a base-10 integer with an optional sign.

    Unlike ``int()`` this rejects surrounding whitespace, underscores and
    non-ASCII digits.

    Raises:
        ValueError: If ``text`` is not a plain decimal integer.

    """
    if not _DECIMAL_RE.fullmatch(text):
        msg = f"invalid decimal integer {text!r}"
        raise ValueError(msg)
    return int(text)


@dataclass(frozen=True)
class NumRange:
    """A range of integers with per-bound inclusiveness."""

    start: int
    end: int
    include_start: bool = True
    include_end: bool = True

    @classmethod
    def single(cls, num: int) -> NumRange:
        """Create a range covering exactly ``num``."""
        return cls(num, num, True, True)

    def __contains__(self, num: object) -> bool:
        if not isinstance(num, int):
            return False
        above = num >= self.start if self.include_start else num > self.start
        below = num <= self.end if self.include_end else num < self.end
        return above and below

    def __str__(self) -> str:
        if self.start == self.end and self.include_start and self.include_end:
            return str(self.start)
        return f"{self.start}-{self.end}"


def parse_num_range(text: str) -> NumRange:
    """Parse ``N`` or ``A-B`` into a `NumRange`.

    Raises:
        MalformedNumRangeError: If a bound is not an integer or the text has
            more than one ``-``.

    """
    parts = text.split("-")
    try:
        if len(parts) == 1:
            return NumRange.single(parse_decimal(parts[0]))
        if len(parts) == 2:
            return NumRange(parse_decimal(parts[0]), parse_decimal(parts[1]))
    except ValueError as e:
        msg = f"Invalid number in num range {text!r}"
        raise MalformedNumRangeError(msg, {"cause": str(e)}) from e

    msg = "Malformed num range string"
    raise MalformedNumRangeError(msg, {"segments": len(parts)})
