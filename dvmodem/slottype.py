"""DMR slot type field: colour code and data type protected by Golay (20,8)."""

from __future__ import annotations

from typing import NamedTuple

from dvmodem.golay import checksum_2087, error_pattern_1987, syndrome_1987

_MIN_FRAME_LENGTH = 21


class SlotType(NamedTuple):
    color_code: int
    data_type: int


def _check_frame(frame: bytes | bytearray) -> None:
    if len(frame) < _MIN_FRAME_LENGTH:
        raise ValueError(
            f"frame must hold at least {_MIN_FRAME_LENGTH} bytes, got {len(frame)}"
        )


def decode_2087(data: bytes | bytearray) -> int:
    """Correct a received Golay (20,8) word held in three bytes and return its data byte."""
    if len(data) < 3:
        raise ValueError(f"Golay word needs three bytes, got {len(data)}")
    code = (data[0] << 11) + (data[1] << 3) + (data[2] >> 5)
    code ^= error_pattern_1987(syndrome_1987(code))
    return (code >> 11) & 0xFF


def decode(frame: bytes | bytearray) -> SlotType:
    """Extract and error-correct the slot type from a DMR burst (without control byte)."""
    _check_frame(frame)
    first = ((frame[12] << 2) & 0xFC) | ((frame[13] >> 6) & 0x03)
    second = (
        ((frame[13] << 2) & 0xC0)
        | ((frame[19] << 2) & 0x3C)
        | ((frame[20] >> 6) & 0x03)
    )
    third = (frame[20] << 2) & 0xF0
    code = decode_2087(bytes((first, second, third)))
    return SlotType((code >> 4) & 0x0F, code & 0x0F)


def encode(color_code: int, data_type: int, frame: bytes | bytearray) -> bytes:
    """Return a copy of ``frame`` with the slot type field set."""
    _check_frame(frame)
    if not 0 <= color_code <= 0x0F:
        raise ValueError(f"colour code out of range: {color_code}")
    if not 0 <= data_type <= 0x0F:
        raise ValueError(f"data type out of range: {data_type}")

    value = (color_code << 4) | data_type
    checksum = checksum_2087(value)
    low = checksum & 0xFF
    high = (checksum >> 8) & 0xFF

    out = bytearray(frame)
    out[12] = (out[12] & 0xC0) | ((value >> 2) & 0x3F)
    out[13] = (out[13] & 0x0F) | ((value << 6) & 0xC0) | ((low >> 2) & 0x30)
    out[19] = (out[19] & 0xF0) | ((low >> 2) & 0x0F)
    out[20] = (out[20] & 0x03) | ((low << 6) & 0xC0) | ((high >> 2) & 0x3C)
    return bytes(out)