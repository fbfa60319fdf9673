"""DMR calibration: raw transmit, and 1031 Hz test pattern calls on repeater or direct mode."""

from __future__ import annotations

from enum import Enum, auto
from typing import Protocol

DMR_FRAME_LENGTH_BYTES = 33

# Voice LC BS header, CC 1, source 1, talkgroup 9.
VH_1K = bytes((
    0x00,
    0x00, 0x20, 0x08, 0x08, 0x02, 0x38, 0x15, 0x00, 0x2C, 0xA0, 0x14,
    0x60, 0x84, 0x6D, 0xFF, 0x57, 0xD7, 0x5D, 0xF5, 0xDE, 0x30, 0x30,
    0x01, 0x10, 0x01, 0x40, 0x03, 0xC0, 0x13, 0xC1, 0x1E, 0x80, 0x6F,
))

# Voice terminator BS with LC, CC 1, source 1, talkgroup 9.
VT_1K = bytes((
    0x00,
    0x00, 0x4F, 0x08, 0xDC, 0x02, 0x88, 0x15, 0x78, 0x2C, 0xD0, 0x14,
    0xC0, 0x84, 0xAD, 0xFF, 0x57, 0xD7, 0x5D, 0xF5, 0xD9, 0x65, 0x24,
    0x02, 0x28, 0x06, 0x20, 0x0F, 0x80, 0x1B, 0xC1, 0x07, 0x80, 0x5C,
))

# Voice LC MS header, CC 1, source 1, talkgroup 9.
VH_DMO1K = bytes((
    0x00,
    0x00, 0x20, 0x08, 0x08, 0x02, 0x38, 0x15, 0x00, 0x2C, 0xA0, 0x14,
    0x60, 0x84, 0x6D, 0x5D, 0x7F, 0x77, 0xFD, 0x75, 0x7E, 0x30, 0x30,
    0x01, 0x10, 0x01, 0x40, 0x03, 0xC0, 0x13, 0xC1, 0x1E, 0x80, 0x6F,
))

# Voice terminator MS with LC, CC 1, source 1, talkgroup 9.
VT_DMO1K = bytes((
    0x00,
    0x00, 0x4F, 0x08, 0xDC, 0x02, 0x88, 0x15, 0x78, 0x2C, 0xD0, 0x14,
    0xC0, 0x84, 0xAD, 0x5D, 0x7F, 0x77, 0xFD, 0x75, 0x79, 0x65, 0x24,
    0x02, 0x28, 0x06, 0x20, 0x0F, 0x80, 0x1B, 0xC1, 0x07, 0x80, 0x5C,
))

# Voice coding data with FEC, 1031 Hz test tone.
VOICE_1K = bytes((
    0x00,
    0xCE, 0xA8, 0xFE, 0x83, 0xAC, 0xC4, 0x58, 0x20, 0x0A, 0xCE, 0xA8,
    0xFE, 0x83, 0xA0, 0x00, 0x00, 0x00, 0x00, 0x00, 0x0C, 0xC4, 0x58,
    0x20, 0x0A, 0xCE, 0xA8, 0xFE, 0x83, 0xAC, 0xC4, 0x58, 0x20, 0x0A,
))

# Sync / embedded signalling per audio sequence, BS: CC 1, source 1, talkgroup 9.
SYNCEMB_1K = (
    bytes((0x07, 0x55, 0xFD, 0x7D, 0xF7, 0x5F, 0x70)),
    bytes((0x01, 0x30, 0x00, 0x00, 0x90, 0x09, 0x10)),
    bytes((0x01, 0x70, 0x00, 0x90, 0x00, 0x07, 0x40)),
    bytes((0x01, 0x70, 0x00, 0x31, 0x40, 0x07, 0x40)),
    bytes((0x01, 0x50, 0xA1, 0x71, 0xD1, 0x70, 0x70)),
    bytes((0x01, 0x10, 0x00, 0x00, 0x00, 0x0E, 0x20)),
)

# Sync / embedded signalling per audio sequence, MS: CC 1, source 1, talkgroup 9.
SYNCEMB_DMO1K = (
    bytes((0x07, 0xF7, 0xD5, 0xDD, 0x57, 0xDF, 0xD0)),
    bytes((0x01, 0x30, 0x00, 0x00, 0x90, 0x09, 0x10)),
    bytes((0x01, 0x70, 0x00, 0x90, 0x00, 0x07, 0x40)),
    bytes((0x01, 0x70, 0x00, 0x31, 0x40, 0x07, 0x40)),
    bytes((0x01, 0x50, 0xA1, 0x71, 0xD1, 0x70, 0x70)),
    bytes((0x01, 0x10, 0x00, 0x00, 0x00, 0x0E, 0x20)),
)

# Short LC: TS1 idle, TS2 voice on talkgroup 9.
SHORTLC_1K = bytes((0x33, 0x3A, 0xA0, 0x30, 0x00, 0x55, 0xA6, 0x5F, 0x50))

_AUDIO_SEQUENCE_LENGTH = 6
_HANG_FRAMES = 30


class CalMode(Enum):
    """Modem calibration states that the DMR calibrator acts on."""

    DMRCAL = auto()
    LFCAL = auto()
    DMRCAL1K = auto()
    DMRDMO1K = auto()


class RepeaterTransmitter(Protocol):
    def set_cal(self, enabled: bool) -> None: ...

    def process(self) -> None: ...

    def slot2_space(self) -> int: ...

    def set_color_code(self, color_code: int) -> None: ...

    def write_short_lc(self, data: bytes) -> None: ...

    def write_slot2(self, data: bytes) -> None: ...

    def set_start(self, start: bool) -> None: ...

    def frame_count(self) -> int: ...

    def reset_slot2(self) -> None: ...


class DirectTransmitter(Protocol):
    def process(self) -> None: ...

    def space(self) -> int: ...

    def write_data(self, data: bytes) -> None: ...


class _State(Enum):
    IDLE = auto()
    HEADER = auto()
    VOICE = auto()
    TERMINATOR = auto()
    WAIT = auto()


def _voice_frame(base: bytearray, syncemb: bytes) -> bytes:
    base[15:20] = syncemb[1:6]
    base[14] = (base[14] & 0xF0) | (syncemb[0] & 0x0F)
    base[20] = (base[20] & 0x0F) | (syncemb[6] & 0xF0)
    return bytes(base)


class DMRCalibrator:
    """Drives the DMR transmitters for the calibration modes."""

    def __init__(self, dmr_tx: RepeaterTransmitter, dmo_tx: DirectTransmitter) -> None:
        self._dmr = dmr_tx
        self._dmo = dmo_tx
        self._transmit = False
        self._state = _State.IDLE
        self._frame_start = 0
        self._voice = bytearray(VOICE_1K)
        self._seq = 0

    def process(self, mode: CalMode | None) -> None:
        """Run one step of the calibration matching the modem's current ``mode``."""
        if mode in (CalMode.DMRCAL, CalMode.LFCAL):
            if self._transmit:
                self._dmr.set_cal(True)
                self._dmr.process()
            else:
                self._dmr.set_cal(False)
        elif mode is CalMode.DMRCAL1K:
            self._repeater_1k()
        elif mode is CalMode.DMRDMO1K:
            self._direct_1k()

    def _advance_voice(self) -> None:
        if self._seq == _AUDIO_SEQUENCE_LENGTH - 1:
            self._seq = 0
            if not self._transmit:
                self._state = _State.TERMINATOR
        else:
            self._seq += 1

    def _repeater_1k(self) -> None:
        self._dmr.process()
        if self._dmr.slot2_space() < 1:
            return

        if self._state is _State.HEADER:
            self._dmr.set_color_code(1)
            self._dmr.write_short_lc(SHORTLC_1K)
            self._dmr.write_slot2(VH_1K)
            self._dmr.set_start(True)
            self._state = _State.VOICE
        elif self._state is _State.VOICE:
            self._dmr.write_slot2(_voice_frame(self._voice, SYNCEMB_1K[self._seq]))
            self._advance_voice()
        elif self._state is _State.TERMINATOR:
            self._dmr.write_slot2(VT_1K)
            self._frame_start = self._dmr.frame_count()
            self._state = _State.WAIT
        elif self._state is _State.WAIT:
            if self._dmr.frame_count() > self._frame_start + _HANG_FRAMES:
                self._dmr.set_start(False)
                self._dmr.reset_slot2()
                self._seq = 0
                self._state = _State.IDLE
        else:
            self._state = _State.IDLE

    def _direct_1k(self) -> None:
        self._dmo.process()
        if self._dmo.space() < 1:
            return

        if self._state is _State.HEADER:
            self._dmo.write_data(VH_DMO1K)
            self._state = _State.VOICE
        elif self._state is _State.VOICE:
            self._dmo.write_data(_voice_frame(self._voice, SYNCEMB_DMO1K[self._seq]))
            self._advance_voice()
        elif self._state is _State.TERMINATOR:
            self._dmo.write_data(VT_DMO1K)
            self._state = _State.IDLE
        else:
            self._state = _State.IDLE
            self._seq = 0

    def write(self, data: bytes, mode: CalMode | None) -> None:
        """Turn calibration on (``b"\\x01"``) or off (any other single byte)."""
        if len(data) != 1:
            raise ValueError(f"calibration command must be one byte, got {len(data)}")
        self._transmit = data[0] == 1
        if (
            self._transmit
            and self._state is _State.IDLE
            and mode in (CalMode.DMRCAL1K, CalMode.DMRDMO1K)
        ):
            self._state = _State.HEADER