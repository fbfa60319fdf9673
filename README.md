# dvmodem

Pure-Python building blocks for a multi-mode digital voice modem. The package
has no runtime dependencies. It does no audio or hardware I/O of its own:
each component works through the objects you pass in, such as an audio
output, a frame transmitter or a callback.

## Modules

- `dvmodem.ringbuffer`: `RingBuffer(size)` is a byte FIFO with a power-of-two
  size. One slot always stays free, so it holds at most `size - 1` bytes.
  `put` raises `OverflowError` when the buffer is full and `get` raises
  `IndexError` when it is empty. It also has `reset`, `is_empty`, `is_full`
  and `len()`.
- `dvmodem.golay`: helpers for the Golay (20,8) and (19,8) codes.
  - `syndrome_1987(pattern)` gives the remainder of a 19-bit word.
  - `checksum_2087(value)` gives the 12 parity bits for a byte, packed into
    the two checksum bytes.
  - `error_pattern_1987(syndrome)` looks up the correction to XOR onto a word.
- `dvmodem.slottype`: the DMR slot type field.
  - `encode(color_code, data_type, frame)` returns a copy of `frame` with the
    field set. The frame needs at least 21 bytes.
  - `decode(frame)` corrects errors and returns a `SlotType(color_code,
    data_type)` named tuple.
  - `decode_2087(data)` corrects a three-byte Golay word and returns its
    data byte.
- `dvmodem.cwid`: Morse identification.
  - `encode_message(text)` returns the keying bits, one per dot period.
    Characters that have no Morse symbol are skipped. It raises
    `ValueError` when the message is empty or too long.
  - `CWIdTransmitter(io)` writes 24-sample tone or silence blocks to `io`
    while `io.space()` has room, through `write`, `process`, `reset` and
    `busy`.
- `dvmodem.calibration`: calibration generators.
  - `RSSICalibrator(sink)` sends a six-byte max/min/average report to `sink`
    every 24000 readings.
  - `NXDNCalibrator` loops the four-frame NXDN 1031 Hz test pattern.
  - `P25Calibrator` alternates the P25 LDU1 and LDU2 1011 Hz test frames.
  - `FMCalibrator(io)` sends a continuous tone chosen by an `FMCalMode`.
    `make_tone(frequency, level)` gives one cycle of such a tone.
- `dvmodem.pocsagcal`: `POCSAGCalibrator(io, transmitter)` feeds `0xAA` bytes
  to a POCSAG transmitter while calibration is on.
- `dvmodem.dmo_tx`: the DMR direct-mode transmitter.
  - `FIRInterpolator(coeffs, factor)` is a polyphase interpolating FIR on
    Q15 samples.
  - `DMOTransmitter(io)` queues 34-byte bursts with `write_data`. Its
    `process(transmitting)` sends a sync preamble until `transmitting` is
    true. After that it sends each burst with PR fill, shaped as 4FSK
    through a root-raised-cosine filter. It also has `set_tx_delay` and
    `space`.
- `dvmodem.caldmr`: `DMRCalibrator(dmr_tx, dmo_tx)` runs the DMR calibration
  modes named by `CalMode`: raw transmit, and 1031 Hz test calls on a
  repeater slot or in direct mode.

Calibrator commands are a single byte. `b"\x01"` turns calibration on and any
other byte turns it off. A command of any other length raises `ValueError`.

## Install

```
pip install .
pip install ".[test]"   # with pytest
```

## Example

```python
from dvmodem import slottype

frame = bytearray(slottype.encode(1, 3, bytes(33)))
frame[12] ^= 0x01          # flip a bit; the Golay code corrects it
assert slottype.decode(frame) == (1, 3)
```

Run the tests with:

```
pytest
```

## What it does not do

There are no receivers or demodulators for any mode. There is no host
serial protocol and no command-line program. Nothing here drives an audio
device or a radio. You supply the outputs, transmitters and sinks yourself,
and you call `process` on your own schedule.