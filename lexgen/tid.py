"""
Timestamp identifiers (TIDs).

A TID packs a 53-bit microsecond timestamp and a 10-bit clock identifier
into a 63-bit integer and renders it as a 13-character base-32 string::

    value = (timestamp << 10) | clock_id

The alphabet is ordered by character code, and strings are always padded
to 13 characters, so comparing two TID strings gives the same answer as
comparing their integers.

Example:
    ```python
    tid = TID.encode(1_700_000_000_000_000, clock_id=7)
    assert TID.decode(tid.string) == tid
    ```
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .errors import InvalidTIDError

ALPHABET = "234567abcdefghijklmnopqrstuvwxyz"
TID_LENGTH = 13

CLOCK_ID_BITS = 10
CLOCK_ID_MASK = (1 << CLOCK_ID_BITS) - 1
TIMESTAMP_BITS = 53
TIMESTAMP_MASK = (1 << TIMESTAMP_BITS) - 1
MAX_VALUE = (1 << (TIMESTAMP_BITS + CLOCK_ID_BITS)) - 1

_INDEX = {char: index for index, char in enumerate(ALPHABET)}


def _now_microseconds() -> int:
    return time.time_ns() // 1_000


def encode_base32(value: int) -> str:
    """Encode a 63-bit integer as a fixed-width, sortable base-32 string."""
    if value < 0 or value > MAX_VALUE:
        raise InvalidTIDError(f"TID value out of range: {value}")
    chars = []
    while value > 0:
        value, remainder = divmod(value, 32)
        chars.append(ALPHABET[remainder])
    return "".join(reversed(chars)).rjust(TID_LENGTH, ALPHABET[0])


def decode_base32(string: str) -> int:
    """Decode a TID string back into its 63-bit integer."""
    if len(string) != TID_LENGTH:
        raise InvalidTIDError(
            f"TID must be {TID_LENGTH} characters, got {len(string)}: {string!r}"
        )
    value = 0
    for char in string:
        index = _INDEX.get(char)
        if index is None:
            raise InvalidTIDError(f"Invalid TID character {char!r} in {string!r}")
        value = value * 32 + index
    if value > MAX_VALUE:
        raise InvalidTIDError(f"TID exceeds 63 bits: {string!r}")
    return value


@dataclass(frozen=True, order=True)
class TID:
    """An immutable timestamp identifier ordered by its integer value."""

    value: int

    @property
    def timestamp(self) -> int:
        return self.value >> CLOCK_ID_BITS

    @property
    def clock_id(self) -> int:
        return self.value & CLOCK_ID_MASK

    @property
    def string(self) -> str:
        return encode_base32(self.value)

    def __str__(self) -> str:
        return self.string

    @classmethod
    def encode(
        cls,
        timestamp: Optional[int] = None,
        clock_id: Optional[int] = None,
        *,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> "TID":
        """
        Build a TID from a microsecond timestamp and a clock identifier.

        Args:
            timestamp: Microseconds since the epoch (default: now)
            clock_id: Disambiguator; only the low 10 bits are used
                (default: uniformly random in ``[0, 1024)``)
            rng: Random source used when ``clock_id`` is omitted
            clock: Callable returning microseconds, used when ``timestamp``
                is omitted

        Raises:
            InvalidTIDError: If ``timestamp`` is negative
        """
        if timestamp is None:
            timestamp = (clock or _now_microseconds)()
        if timestamp < 0:
            raise InvalidTIDError(f"TID timestamp must be non-negative: {timestamp}")
        if clock_id is None:
            clock_id = (rng or random).randrange(1 << CLOCK_ID_BITS)
        value = ((timestamp & TIMESTAMP_MASK) << CLOCK_ID_BITS) | (clock_id & CLOCK_ID_MASK)
        return cls(value)

    @classmethod
    def now(
        cls,
        *,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> "TID":
        return cls.encode(rng=rng, clock=clock)

    @classmethod
    def decode(cls, string: str) -> "TID":
        return cls(decode_base32(string))


__all__ = [
    "ALPHABET",
    "TID",
    "TID_LENGTH",
    "decode_base32",
    "encode_base32",
]
