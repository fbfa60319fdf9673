"""Calibration signal generators: RSSI statistics, NXDN and P25 test patterns, FM tones."""

from __future__ import annotations

import math
from enum import Enum
from typing import Callable, Iterable, Protocol, Sequence

# NXDN frame geometry (24 kHz sample rate)
NXDN_RADIO_SYMBOL_LENGTH = 10
NXDN_FRAME_LENGTH_BITS = 384
NXDN_FRAME_LENGTH_BYTES = NXDN_FRAME_LENGTH_BITS // 8
NXDN_FRAME_LENGTH_SYMBOLS = NXDN_FRAME_LENGTH_BITS // 2
NXDN_FRAME_LENGTH_SAMPLES = NXDN_FRAME_LENGTH_SYMBOLS * NXDN_RADIO_SYMBOL_LENGTH

NXDN_FSW_LENGTH_BITS = 20
NXDN_FSW_LENGTH_SYMBOLS = NXDN_FSW_LENGTH_BITS // 2
NXDN_FSW_LENGTH_SAMPLES = NXDN_FSW_LENGTH_SYMBOLS * NXDN_RADIO_SYMBOL_LENGTH

NXDN_FSW_BYTES = bytes((0xCD, 0xF5, 0x90))
NXDN_FSW_BYTES_MASK = bytes((0xFF, 0xFF, 0xF0))
NXDN_FSW_BITS = 0x000CDF59
NXDN_FSW_BITS_MASK = 0x000FFFFF
NXDN_FSW_SYMBOLS_VALUES = (-3, +1, -3, +3, -3, -3, +3, +3, -1, +3)
NXDN_FSW_SYMBOLS = 0x014D
NXDN_FSW_SYMBOLS_MASK = 0x03FF

P25_LDU_FRAME_LENGTH_BYTES = 216

RSSI_REPORT_SAMPLES = 24000


class FrameTransmitter(Protocol):
    def process(self) -> None: ...

    def space(self) -> int: ...

    def write_data(self, data: bytes) -> None: ...


class SampleOutput(Protocol):
    def space(self) -> int: ...

    def write(self, samples: Sequence[int]) -> None: ...


def _check_command(data: bytes) -> bool:
    if len(data) != 1:
        raise ValueError(f"calibration command must be one byte, got {len(data)}")
    return data[0] == 1


class RSSICalibrator:
    """Collects RSSI readings and reports max, min and average every 24000 samples."""

    def __init__(self, sink: Callable[[bytes], None]) -> None:
        self._sink = sink
        self._clear()

    def _clear(self) -> None:
        self._count = 0
        self._accum = 0
        self._min = 0xFFFF
        self._max = 0x0000

    def samples(self, rssi: Iterable[int]) -> None:
        """Accumulate readings, sending a six-byte report when a period completes."""
        for value in rssi:
            if not 0 <= value <= 0xFFFF:
                raise ValueError(f"RSSI reading out of 16-bit range: {value}")
            self._accum += value
            self._max = max(self._max, value)
            self._min = min(self._min, value)
            self._count += 1
            if self._count >= RSSI_REPORT_SAMPLES:
                average = self._accum // self._count
                self._sink(
                    self._max.to_bytes(2, "big")
                    + self._min.to_bytes(2, "big")
                    + average.to_bytes(2, "big")
                )
                self._clear()


# NXDN 1031 Hz test pattern, RAN 1, unit ID 1, group 1, outbound direction.
_NXDN_TAIL = bytes.fromhex(
    "4CAADE8B26E4F28288"
    "C68A7429A4ECD00822"
    "CEA2FC018CECDA0AA0"
    "EE8A7E2B26CCF88A08"
)

NXDN_CAL1K_FRAMES = tuple(
    b"\x00" + bytes.fromhex(head) + _NXDN_TAIL
    for head in (
        "CDF59D5D7CFA0A6E8A2356E8",
        "CDF59D5D7C6DBB0EB3A426A8",
        "CDF59D5D763A1B4A81A8E280",
        "CDF59D5D74288302B02D07E2",
    )
)


class NXDNCalibrator:
    """Sends the four-frame NXDN 1031 Hz test pattern in a loop."""

    def __init__(self, transmitter: FrameTransmitter) -> None:
        self._tx = transmitter
        self._transmit = False
        self._sending = False
        self._seq = 0

    def process(self) -> None:
        self._tx.process()
        if self._tx.space() < 1:
            return
        if self._sending:
            self._tx.write_data(NXDN_CAL1K_FRAMES[self._seq])
            self._seq = (self._seq + 1) % len(NXDN_CAL1K_FRAMES)
            if not self._transmit:
                self._sending = False
        else:
            self._seq = 0

    def write(self, data: bytes) -> None:
        """Turn the pattern on (``b"\\x01"``) or off (any other single byte)."""
        self._transmit = _check_command(data)
        if self._transmit and not self._sending:
            self._sending = True


# P25 phase 1 1011 Hz test pattern, NAC 0x293, source 1, talkgroup 1.
LDU1_1K = b"\x00" + bytes.fromhex(
    "5575F5FF77FF2935547BCB194D0DCE24A124"
    "0D433C0BE1B91844FCC162962760E4E24A10"
    "90D433C0BE1B91844CFC162962760EC00000"
    "0000038928490D433C02F86E46113FC16294"
    "89D839000000001C3824A124350CF02F86E4"
    "1844FF058A589D83B00000000070E24A1240"
    "D433C0BE1B91844FF0162962760E6DE5D548"
    "ADE38928490D433C08F86E46113FC1629624"
    "D83BA141C2D2BA3890A124350CF02F86E460"
    "44FF058A589D8394C8FB0235A4E24A124350"
    "33C0BE1B91844FF0582962760EC00000000C"
    "8928490D433C0BE1B846113FC162962760E4"
)

LDU2_1K = b"\x00" + bytes.fromhex(
    "5575F5FF77FF293AB8A4EFB09A8ACE24A124"
    "0D433C0BE1B91844FCC162962760ECE24A10"
    "90D433C0BE1B91844CFC162962760E400000"
    "0000038928490D433C02F86E46113FC16294"
    "89D83B00000000003824A124350CF02F86E4"
    "1844FF058A589D83900000000000E24A1240"
    "D433C0BE1B91844FF0162962760EE0E00000"
    "00038928490D433C08F86E46113FC1629624"
    "D839AE8B48B6493890A124350CF02F86E460"
    "44FF058A589D83B9A8F4F1FD60E24A124350"
    "33C0BE1B91844FF0582962760E400000000C"
    "8928490D433C0BE1B846113FC162962760EC"
)


class _P25State(Enum):
    IDLE = 0
    LDU1 = 1
    LDU2 = 2


class P25Calibrator:
    """Alternates LDU1 and LDU2 test frames, stopping after a complete LDU2."""

    def __init__(self, transmitter: FrameTransmitter) -> None:
        self._tx = transmitter
        self._transmit = False
        self._state = _P25State.IDLE

    def process(self) -> None:
        self._tx.process()
        if self._tx.space() < 1:
            return
        if self._state is _P25State.LDU1:
            self._tx.write_data(LDU1_1K)
            self._state = _P25State.LDU2
        elif self._state is _P25State.LDU2:
            self._tx.write_data(LDU2_1K)
            self._state = _P25State.LDU1 if self._transmit else _P25State.IDLE

    def write(self, data: bytes) -> None:
        """Turn the pattern on (``b"\\x01"``) or off (any other single byte)."""
        self._transmit = _check_command(data)
        if self._transmit and self._state is _P25State.IDLE:
            self._state = _P25State.LDU1


class FMCalMode(Enum):
    """FM deviation calibration modes, valued by their tone frequency in Hz."""

    FMCAL10K = 956
    FMCAL12K = 1039
    FMCAL15K = 1247
    FMCAL20K = 1633
    FMCAL25K = 2079
    FMCAL30K = 2495


# frequency -> (samples per cycle, q31 phase increment)
_TONE_TABLE: dict[int, tuple[int, int]] = {
    2495: (10, 223248821),
    2079: (12, 186025772),
    1633: (15, 146118367),
    1247: (19, 111579672),
    1039: (23, 93012886),
    956: (25, 85541432),
}

DEFAULT_FM_LEVEL = 128 * 12


def _sin_q31(arg: int) -> int:
    phase = (arg & 0x7FFFFFFF) / 0x80000000 * 2.0 * math.pi
    return max(-0x80000000, min(0x7FFFFFFF, round(math.sin(phase) * 0x80000000)))


def make_tone(frequency: int, level: int) -> tuple[int, ...]:
    """Return one cycle of the calibration tone at ``frequency`` scaled to ``level``."""
    entry = _TONE_TABLE.get(frequency)
    if entry is None:
        raise ValueError(f"no calibration tone at {frequency} Hz")
    length, increment = entry
    samples = []
    arg = 0
    for _ in range(length):
        value = (_sin_q31(arg) * level) >> 31
        samples.append(max(-32768, min(32767, value)))
        arg += increment
    return tuple(samples)


class FMCalibrator:
    """Generates a continuous tone whose frequency follows the FM calibration mode."""

    def __init__(self, io: SampleOutput) -> None:
        self._io = io
        self._level = DEFAULT_FM_LEVEL
        self._tone: tuple[int, ...] = ()
        self._transmit = False
        self._last_mode: FMCalMode | None = None

    def process(self, mode: FMCalMode | None) -> None:
        """Update the tone for ``mode`` and fill the output while transmitting."""
        if mode != self._last_mode:
            if not isinstance(mode, FMCalMode):
                return
            self._tone = make_tone(mode.value, self._level)
            self._last_mode = mode

        if self._transmit and self._tone:
            length = len(self._tone)
            space = self._io.space()
            while space > length:
                self._io.write(self._tone)
                space -= length

    def write(self, data: bytes) -> None:
        """Turn the tone on (``b"\\x01"``) or off (any other single byte)."""
        self._transmit = _check_command(data)