from itertools import combinations

import pytest

from dvmodem.golay import checksum_2087, error_pattern_1987, syndrome_1987


def _parity_of(checksum):
    bits = ((checksum & 0xFF) << 4) | (checksum >> 12)
    return bits >> 1


def test_checksum_pinned_values():
    assert checksum_2087(0) == 0x0000
    assert checksum_2087(1) == 0xB08E
    assert checksum_2087(2) == 0xE093


def test_checksum_is_linear():
    for a in range(0, 256, 7):
        for b in range(0, 256, 13):
            assert checksum_2087(a ^ b) == checksum_2087(a) ^ checksum_2087(b)


@pytest.mark.parametrize("value", [0, 1, 0x5A, 0x91, 0xFF])
def test_codewords_have_zero_syndrome(value):
    word = (value << 11) | _parity_of(checksum_2087(value))
    assert syndrome_1987(word) == 0


def test_short_patterns_are_their_own_syndrome():
    for pattern in (0, 1, 0x123, 0x7FF):
        assert syndrome_1987(pattern) == pattern


def test_syndrome_always_fits_eleven_bits():
    for pattern in range(0, 1 << 19, 997):
        assert 0 <= syndrome_1987(pattern) < (1 << 11)


def test_syndrome_rejects_wide_pattern():
    with pytest.raises(ValueError):
        syndrome_1987(1 << 19)


def test_checksum_rejects_out_of_range():
    with pytest.raises(ValueError):
        checksum_2087(256)


def test_error_pattern_pinned_values():
    assert error_pattern_1987(0) == 0
    assert error_pattern_1987(15) == 0x24020


def test_error_pattern_rejects_out_of_range():
    with pytest.raises(ValueError):
        error_pattern_1987(2048)


def test_all_small_error_patterns_are_corrected():
    positions = range(19)
    for weight in (1, 2, 3):
        for bits in combinations(positions, weight):
            pattern = sum(1 << b for b in bits)
            assert error_pattern_1987(syndrome_1987(pattern)) == pattern


def test_corrupted_codeword_recovers_data():
    value = 0xA7
    word = (value << 11) | _parity_of(checksum_2087(value))
    corrupted = word ^ (1 << 2) ^ (1 << 12) ^ (1 << 17)
    fixed = corrupted ^ error_pattern_1987(syndrome_1987(corrupted))
    assert fixed >> 11 == value