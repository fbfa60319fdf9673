"""Morse code station identification transmitter."""

from __future__ import annotations

from typing import Protocol, Sequence

TONE = (
    0, 518, 1000, 1414, 1732, 1932, 2000, 1932, 1732, 1414, 1000, 518,
    0, -518, -1000, -1414, -1732, -1932, -2000, -1932, -1732, -1414, -1000, -518,
)
SILENCE = (0,) * 24

CYCLE_LENGTH = 24
DOT_LENGTH = 50

_LEAD_BITS = 8
_TAIL_BITS = 5
_MAX_BITS = 995

_SYMBOLS: dict[str, tuple[int, int]] = {
    "A": (0xB8000000, 8), "B": (0xEA800000, 12), "C": (0xEBA00000, 14),
    "D": (0xEA000000, 10), "E": (0x80000000, 4), "F": (0xAE800000, 12),
    "G": (0xEE800000, 12), "H": (0xAA000000, 10), "I": (0xA0000000, 6),
    "J": (0xBBB80000, 16), "K": (0xEB800000, 12), "L": (0xBA800000, 12),
    "M": (0xEE000000, 10), "N": (0xE8000000, 8), "O": (0xEEE00000, 14),
    "P": (0xBBA00000, 14), "Q": (0xEEB80000, 16), "R": (0xBA000000, 10),
    "S": (0xA8000000, 8), "T": (0xE0000000, 6), "U": (0xAE000000, 10),
    "V": (0xAB800000, 12), "W": (0xBB800000, 12), "X": (0xEAE00000, 14),
    "Y": (0xEBB80000, 16), "Z": (0xEEA00000, 14),
    "1": (0xBBBB8000, 20), "2": (0xAEEE0000, 18), "3": (0xABB80000, 16),
    "4": (0xAAE00000, 14), "5": (0xAA800000, 12), "6": (0xEAA00000, 14),
    "7": (0xEEA80000, 16), "8": (0xEEEA0000, 18), "9": (0xEEEE8000, 20),
    "0": (0xEEEEE000, 22),
    "/": (0xEAE80000, 16), "?": (0xAEEA0000, 18), ",": (0xEEAEE000, 22),
    "-": (0xEAAE0000, 18), "=": (0xEAB80000, 16), ".": (0xBAEB8000, 20),
    " ": (0x00000000, 4),
}


class SampleOutput(Protocol):
    def space(self) -> int: ...

    def write(self, samples: Sequence[int]) -> None: ...


def encode_message(text: str) -> tuple[bool, ...]:
    """Return the keying bits for ``text``, one bit per dot period.

    Characters without a Morse symbol are skipped. Raises ValueError if nothing
    is left to send or the message does not fit the transmit buffer.
    """
    bits: list[bool] = [False] * _LEAD_BITS
    for char in text:
        symbol = _SYMBOLS.get(char)
        if symbol is None:
            continue
        pattern, length = symbol
        for k in range(length):
            bits.append(bool(pattern & (0x80000000 >> k)))
            if len(bits) > _MAX_BITS:
                raise ValueError("CW id message is too long")
    if len(bits) == _LEAD_BITS:
        raise ValueError("CW id message is empty")
    bits.extend([False] * _TAIL_BITS)
    return tuple(bits)


class CWIdTransmitter:
    """Keys a sine tone on and off to send a Morse identification."""

    def __init__(self, io: SampleOutput) -> None:
        self._io = io
        self._bits: tuple[bool, ...] = ()
        self._ptr = 0
        self._n = 0

    @property
    def busy(self) -> bool:
        """True while a message is still being sent."""
        return bool(self._bits)

    def write(self, text: str) -> None:
        """Start sending ``text``; on error the transmitter is left idle."""
        self.reset()
        self._bits = encode_message(text)

    def process(self) -> None:
        """Write as many tone or silence cycles as the output has room for."""
        if not self._bits:
            return
        space = self._io.space()
        while space > CYCLE_LENGTH:
            self._io.write(TONE if self._bits[self._ptr] else SILENCE)
            space -= CYCLE_LENGTH

            self._n += 1
            if self._n >= DOT_LENGTH:
                self._ptr += 1
                self._n = 0

            if self._ptr >= len(self._bits):
                self.reset()
                return

    def reset(self) -> None:
        """Abandon any message in progress."""
        self._bits = ()
        self._ptr = 0
        self._n = 0