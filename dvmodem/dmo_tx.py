"""DMR direct-mode (DMO) transmitter: 4FSK modulation through a root-raised-cosine filter."""

from __future__ import annotations

from collections import deque
from typing import Iterable, Protocol, Sequence

DMR_FRAME_LENGTH_BYTES = 33
DMR_RADIO_SYMBOL_LENGTH = 5  # samples per symbol at 24 kHz

FIFO_LENGTH = 1000

# Root-raised-cosine, roll-off 0.2, span 8 symbols, 5 samples per symbol.
RRC_0_2_FILTER = (
    0, 0, 0, 0, 850, 219, -720, -1548, -1795, -1172, 237, 1927, 3120, 3073, 1447, -1431, -4544, -6442,
    -5735, -1633, 5651, 14822, 23810, 30367, 32767, 30367, 23810, 14822, 5651, -1633, -5735, -6442,
    -4544, -1431, 1447, 3073, 3120, 1927, 237, -1172, -1795, -1548, -720, 219, 850,
)

DMR_LEVELA = 1362
DMR_LEVELB = 454
DMR_LEVELC = -454
DMR_LEVELD = -1362

_LEVELS = {0b11: DMR_LEVELA, 0b10: DMR_LEVELB, 0b00: DMR_LEVELC, 0b01: DMR_LEVELD}

PR_FILL = bytes((
    0x63, 0xEA, 0x00, 0x76, 0x6C, 0x76, 0xC4, 0x52, 0xC8, 0x78,
    0x09, 0x2D, 0xB8, 0x79, 0x27, 0x57, 0x9B, 0x31, 0xBC, 0x3E,
    0xEA, 0x45, 0xC3, 0x30, 0x49, 0x17, 0x93, 0xAE, 0x8B, 0x6D,
    0xA4, 0xA5, 0xAD, 0xA2, 0xF1, 0x35, 0xB5, 0x3C, 0x1E,
))

DMR_SYNC = 0x5F

SAMPLES_PER_BYTE = 4 * DMR_RADIO_SYMBOL_LENGTH

DEFAULT_TX_DELAY = 240
_MIN_TX_DELAY = 600
_MAX_TX_DELAY = 1200


class SampleOutput(Protocol):
    def space(self) -> int: ...

    def write(self, samples: Sequence[int]) -> None: ...


class FIRInterpolator:
    """Polyphase FIR interpolator on Q15 samples, keeping state between blocks."""

    def __init__(self, coeffs: Iterable[int], factor: int) -> None:
        taps = tuple(coeffs)
        if factor < 1:
            raise ValueError(f"interpolation factor must be positive, got {factor}")
        if not taps or len(taps) % factor:
            raise ValueError(
                f"number of taps ({len(taps)}) must be a positive multiple of {factor}"
            )
        self._phases = tuple(taps[factor - j::factor] for j in range(1, factor + 1))
        self._history = [0] * (len(taps) // factor - 1)

    def filter(self, block: Iterable[int]) -> list[int]:
        """Return ``factor`` output samples for every input sample."""
        out: list[int] = []
        for sample in block:
            window = self._history + [sample]
            for phase in self._phases:
                acc = sum(w * c for w, c in zip(window, phase)) >> 15
                out.append(max(-32768, min(32767, acc)))
            self._history = window[1:]
        return out


class DMOTransmitter:
    """Queues DMR bursts and modulates them, sending a sync preamble until keyed up."""

    def __init__(self, io: SampleOutput) -> None:
        self._io = io
        self._fifo: deque[int] = deque()
        self._modulator = FIRInterpolator(RRC_0_2_FILTER, DMR_RADIO_SYMBOL_LENGTH)
        self._out = b""
        self._ptr = 0
        self._tx_delay = DEFAULT_TX_DELAY

    def write_data(self, data: bytes) -> None:
        """Queue one burst: a control byte followed by 33 payload bytes."""
        if len(data) != DMR_FRAME_LENGTH_BYTES + 1:
            raise ValueError(
                f"DMR frame must be {DMR_FRAME_LENGTH_BYTES + 1} bytes, got {len(data)}"
            )
        if FIFO_LENGTH - len(self._fifo) < DMR_FRAME_LENGTH_BYTES:
            raise OverflowError("DMO transmit queue is full")
        self._fifo.extend(data[1:])

    def process(self, transmitting: bool) -> None:
        """Modulate queued bytes into the output while it has room.

        While the transmitter is not yet keyed (``transmitting`` false), a
        preamble of sync bytes is sent in place of the queued data.
        """
        if not self._out and self._fifo:
            if transmitting:
                frame = bytes(self._fifo.popleft() for _ in range(DMR_FRAME_LENGTH_BYTES))
                self._out = frame + PR_FILL
            else:
                self._out = bytes((DMR_SYNC,)) * self._tx_delay
            self._ptr = 0

        if not self._out:
            return

        space = self._io.space()
        while space > SAMPLES_PER_BYTE:
            self._write_byte(self._out[self._ptr])
            self._ptr += 1
            space -= SAMPLES_PER_BYTE
            if self._ptr >= len(self._out):
                self._out = b""
                self._ptr = 0
                return

    def _write_byte(self, value: int) -> None:
        symbols = [_LEVELS[(value >> shift) & 0x03] for shift in (6, 4, 2, 0)]
        self._io.write(self._modulator.filter(symbols))

    def set_tx_delay(self, delay: int) -> None:
        """Set the preamble length from a delay setting in 10 ms units."""
        self._tx_delay = min(_MIN_TX_DELAY + delay * 12, _MAX_TX_DELAY)

    def space(self) -> int:
        """Number of whole bursts the queue can still take."""
        return (FIFO_LENGTH - len(self._fifo)) // (DMR_FRAME_LENGTH_BYTES + 2)