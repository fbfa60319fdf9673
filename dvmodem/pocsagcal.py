"""POCSAG deviation calibration: a continuous alternating-bit carrier."""

from __future__ import annotations

from typing import Protocol

_MIN_SPACE = 165
_CAL_BYTE = 0xAA


class SampleOutput(Protocol):
    def space(self) -> int: ...


class ByteTransmitter(Protocol):
    def write_byte(self, value: int) -> None: ...


class POCSAGCalibrator:
    """Feeds 0xAA bytes to a POCSAG transmitter while calibration is on."""

    def __init__(self, io: SampleOutput, transmitter: ByteTransmitter) -> None:
        self._io = io
        self._transmitter = transmitter
        self._active = False

    @property
    def active(self) -> bool:
        """True while the calibration carrier is being sent."""
        return self._active

    def process(self) -> None:
        """Queue one calibration byte if active and the output has room."""
        if not self._active:
            return
        if self._io.space() <= _MIN_SPACE:
            return
        self._transmitter.write_byte(_CAL_BYTE)

    def write(self, data: bytes) -> None:
        """Turn calibration on (``b"\\x01"``) or off (any other single byte)."""
        if len(data) != 1:
            raise ValueError(f"calibration command must be one byte, got {len(data)}")
        self._active = data[0] == 1