"""Tests for the TID codec."""

import random

import pytest

from lexgen.errors import InvalidTIDError
from lexgen.tid import (
    ALPHABET,
    MAX_VALUE,
    TID,
    TID_LENGTH,
    decode_base32,
    encode_base32,
)


class TestBase32:
    """Test the fixed-width base-32 encoding."""

    def test_zero_is_padded(self):
        assert encode_base32(0) == "2" * TID_LENGTH

    def test_small_values(self):
        assert encode_base32(1) == "2" * 12 + "3"
        assert encode_base32(31) == "2" * 12 + "z"
        assert encode_base32(32) == "2" * 11 + "32"

    def test_max_value(self):
        encoded = encode_base32(MAX_VALUE)
        assert len(encoded) == TID_LENGTH
        assert encoded == "b" + "z" * 12
        assert decode_base32(encoded) == MAX_VALUE

    def test_out_of_range(self):
        with pytest.raises(InvalidTIDError):
            encode_base32(-1)
        with pytest.raises(InvalidTIDError):
            encode_base32(MAX_VALUE + 1)

    def test_alphabet_is_sorted(self):
        assert list(ALPHABET) == sorted(ALPHABET)
        assert len(set(ALPHABET)) == 32


class TestDecodeErrors:
    """Test rejection of malformed TID strings."""

    @pytest.mark.parametrize("value", ["", "222", "2" * 14])
    def test_wrong_length(self, value):
        with pytest.raises(InvalidTIDError) as exc_info:
            TID.decode(value)
        assert exc_info.value.code == "LEX002"

    def test_invalid_character(self):
        with pytest.raises(InvalidTIDError, match="Invalid TID character"):
            TID.decode("222222222222A")

    def test_exceeds_63_bits(self):
        with pytest.raises(InvalidTIDError, match="63 bits"):
            TID.decode("c" + "2" * 12)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            TID.decode("1111111111111")


class TestEncode:
    """Test TID construction."""

    def test_layout(self):
        tid = TID.encode(1_700_000_000_000_000, 7)
        assert tid.value == (1_700_000_000_000_000 << 10) | 7
        assert tid.timestamp == 1_700_000_000_000_000
        assert tid.clock_id == 7
        assert len(tid.string) == TID_LENGTH
        assert str(tid) == tid.string

    def test_clock_id_is_masked(self):
        assert TID.encode(1000, 1024 + 5).clock_id == 5
        assert TID.encode(1000, -1).clock_id == 1023

    def test_negative_timestamp_rejected(self):
        with pytest.raises(InvalidTIDError):
            TID.encode(-1, 0)

    def test_injected_clock_and_rng(self):
        rng = random.Random(42)
        expected_clock = random.Random(42).randrange(1024)
        tid = TID.encode(clock=lambda: 123_456, rng=rng)
        assert tid.timestamp == 123_456
        assert tid.clock_id == expected_clock

    def test_now_uses_clock(self):
        tid = TID.now(clock=lambda: 5, rng=random.Random(0))
        assert tid.timestamp == 5

    def test_now_is_current(self):
        import time

        before = time.time_ns() // 1000
        tid = TID.now()
        after = time.time_ns() // 1000
        assert before <= tid.timestamp <= after


class TestLaws:
    """Round-trip and ordering properties."""

    def test_round_trip(self):
        rng = random.Random(1234)
        for _ in range(10_000):
            timestamp = rng.randrange(1 << 53)
            clock_id = rng.randrange(1 << 10)
            decoded = TID.decode(TID.encode(timestamp, clock_id).string)
            assert decoded.timestamp == timestamp
            assert decoded.clock_id == clock_id

    def test_sortability(self):
        rng = random.Random(99)
        for _ in range(2_000):
            t1 = rng.randrange(1 << 53)
            t2 = rng.randrange(1 << 53)
            a = TID.encode(t1, rng.randrange(1024)).string
            b = TID.encode(t2, rng.randrange(1024)).string
            if t1 < t2:
                assert a < b
            elif t1 > t2:
                assert a > b

    def test_same_1024us_bucket_sorts_by_timestamp(self):
        """Timestamps sharing their high bits still order by timestamp, not clock id."""
        bucket = 1_700_000_000_123_456 & ~1023
        earlier = TID.encode(bucket + 1, 1000)
        later = TID.encode(bucket + 2, 0)
        assert earlier.string < later.string
        assert TID.decode(earlier.string).timestamp == bucket + 1
        assert TID.decode(later.string).timestamp == bucket + 2

    def test_low_timestamp_bits_are_kept(self):
        timestamp = 1_700_000_000_123_456
        decoded = TID.decode(TID.encode(timestamp, 7).string)
        assert decoded.timestamp == timestamp
        assert decoded.timestamp != timestamp & ~1023
        assert decoded.clock_id == 7

    def test_small_values_sort_correctly(self):
        strings = [TID.encode(t, 0).string for t in (0, 1, 31, 32, 1023, 1 << 40)]
        assert strings == sorted(strings)

    def test_tid_objects_order_by_value(self):
        assert TID.encode(1, 0) < TID.encode(1, 1) < TID.encode(2, 0)
