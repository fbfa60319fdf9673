import pytest

from dvmodem.dmo_tx import (
    DMR_FRAME_LENGTH_BYTES,
    DMR_LEVELA,
    DMR_LEVELD,
    DMR_RADIO_SYMBOL_LENGTH,
    FIFO_LENGTH,
    RRC_0_2_FILTER,
    SAMPLES_PER_BYTE,
    DMOTransmitter,
    FIRInterpolator,
)


class FakeIO:
    def __init__(self, space=10**7):
        self.room = space
        self.writes = []

    def space(self):
        return self.room

    def write(self, samples):
        self.writes.append(list(samples))


def frame(fill=0x11):
    return bytes([0x00]) + bytes([fill]) * DMR_FRAME_LENGTH_BYTES


def test_interpolator_impulse_gives_reversed_coefficients():
    coeffs = [2, 4, 6, 8, 10, 12]
    fir = FIRInterpolator(coeffs, 2)
    out = fir.filter([16384, 0, 0])
    assert out == [c // 2 for c in reversed(coeffs)]


def test_interpolator_output_length():
    fir = FIRInterpolator(RRC_0_2_FILTER, DMR_RADIO_SYMBOL_LENGTH)
    assert len(fir.filter([100, -100, 50, 0])) == 4 * DMR_RADIO_SYMBOL_LENGTH


def test_interpolator_keeps_state_between_blocks():
    block = [1362, -454, 454, -1362, 1362, 1362, -1362, 454]
    whole = FIRInterpolator(RRC_0_2_FILTER, 5).filter(block)
    split = FIRInterpolator(RRC_0_2_FILTER, 5)
    parts = split.filter(block[:3]) + split.filter(block[3:])
    assert parts == whole


def test_interpolator_saturates():
    fir = FIRInterpolator([32767, 32767], 1)
    out = fir.filter([32767, 32767])
    assert out[1] == 32767
    fir = FIRInterpolator([32767, 32767], 1)
    out = fir.filter([-32768, -32768])
    assert out[1] == -32768


def test_interpolator_rejects_bad_tap_count():
    with pytest.raises(ValueError):
        FIRInterpolator([1, 2, 3], 2)
    with pytest.raises(ValueError):
        FIRInterpolator([1, 2], 0)


def test_write_data_rejects_wrong_length():
    tx = DMOTransmitter(FakeIO())
    with pytest.raises(ValueError):
        tx.write_data(bytes(DMR_FRAME_LENGTH_BYTES))


def test_queue_overflow_raises():
    tx = DMOTransmitter(FakeIO())
    accepted = 0
    with pytest.raises(OverflowError):
        for _ in range(FIFO_LENGTH):
            tx.write_data(frame())
            accepted += 1
    assert accepted == FIFO_LENGTH // DMR_FRAME_LENGTH_BYTES


def test_space_shrinks_and_recovers():
    io = FakeIO()
    tx = DMOTransmitter(io)
    before = tx.space()
    for _ in range(3):
        tx.write_data(frame())
    assert tx.space() < before
    for _ in range(3):
        tx.process(True)
    assert tx.space() == before


def test_nothing_sent_when_queue_empty():
    io = FakeIO()
    tx = DMOTransmitter(io)
    tx.process(False)
    tx.process(True)
    assert io.writes == []


def test_preamble_when_not_keyed():
    io = FakeIO()
    tx = DMOTransmitter(io)
    tx.write_data(frame())
    tx.process(False)
    assert len(io.writes) == 240
    assert all(len(w) == SAMPLES_PER_BYTE for w in io.writes)
    # preamble does not consume the queued frame
    assert tx.space() == (FIFO_LENGTH - DMR_FRAME_LENGTH_BYTES) // (DMR_FRAME_LENGTH_BYTES + 2)


def test_preamble_byte_modulation():
    io = FakeIO()
    tx = DMOTransmitter(io)
    tx.write_data(frame())
    tx.process(False)
    # 0x5F is the dibits 01 01 11 11
    reference = FIRInterpolator(RRC_0_2_FILTER, DMR_RADIO_SYMBOL_LENGTH)
    expected = reference.filter([DMR_LEVELD, DMR_LEVELD, DMR_LEVELA, DMR_LEVELA])
    assert io.writes[0] == expected


def test_keyed_frame_sends_payload_and_fill():
    io = FakeIO()
    tx = DMOTransmitter(io)
    tx.write_data(frame())
    tx.process(True)
    assert len(io.writes) == 72
    io.writes.clear()
    tx.process(True)
    assert io.writes == []


def test_tx_delay_setting():
    io = FakeIO()
    tx = DMOTransmitter(io)
    tx.set_tx_delay(0)
    tx.write_data(frame())
    tx.process(False)
    assert len(io.writes) == 600

    io2 = FakeIO()
    tx2 = DMOTransmitter(io2)
    tx2.set_tx_delay(100)
    tx2.write_data(frame())
    tx2.process(False)
    assert len(io2.writes) == 1200


def test_output_space_limits_bytes_per_call():
    io = FakeIO(space=2 * SAMPLES_PER_BYTE + 10)
    tx = DMOTransmitter(io)
    tx.write_data(frame())
    tx.process(True)
    assert len(io.writes) == 2
    tx.process(True)
    assert len(io.writes) == 4