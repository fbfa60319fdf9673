import pytest

from dvmodem.cwid import (
    CYCLE_LENGTH,
    DOT_LENGTH,
    SILENCE,
    TONE,
    CWIdTransmitter,
    encode_message,
)


class FakeIO:
    def __init__(self, space):
        self.available = space
        self.blocks = []

    def space(self):
        return self.available

    def write(self, samples):
        self.blocks.append(tuple(samples))


def test_encode_single_dot():
    bits = encode_message("E")
    assert bits == (False,) * 8 + (True, False, False, False) + (False,) * 5


def test_encode_dash():
    bits = encode_message("T")
    assert bits[8:14] == (True, True, True, False, False, False)


def test_unknown_characters_skipped():
    assert encode_message("e#E!") == encode_message("E")


def test_symbol_lengths_add_up():
    one = encode_message("0")
    two = encode_message("00")
    assert len(two) - len(one) == len(one) - 13


def test_empty_message_rejected():
    with pytest.raises(ValueError):
        encode_message("")
    with pytest.raises(ValueError):
        encode_message("abc")


def test_too_long_message_rejected():
    with pytest.raises(ValueError):
        encode_message("0" * 46)


def test_long_message_that_fits():
    bits = encode_message("0" * 44)
    assert bits[:8] == (False,) * 8
    assert bits[-5:] == (False,) * 5


def test_process_sends_whole_message():
    io = FakeIO(10**6)
    tx = CWIdTransmitter(io)
    tx.write("E")
    assert tx.busy
    tx.process()
    bits = encode_message("E")
    assert len(io.blocks) == len(bits) * DOT_LENGTH
    expected = [TONE if b else SILENCE for b in bits for _ in range(DOT_LENGTH)]
    assert io.blocks == expected
    assert not tx.busy


def test_process_respects_space():
    io = FakeIO(CYCLE_LENGTH)
    tx = CWIdTransmitter(io)
    tx.write("E")
    tx.process()
    assert io.blocks == []
    io.available = 2 * CYCLE_LENGTH + 1
    tx.process()
    assert len(io.blocks) == 2
    assert tx.busy


def test_idle_process_writes_nothing():
    io = FakeIO(10**6)
    tx = CWIdTransmitter(io)
    tx.process()
    assert io.blocks == []


def test_reset_stops_transmission():
    io = FakeIO(10**6)
    tx = CWIdTransmitter(io)
    tx.write("SOS")
    tx.reset()
    tx.process()
    assert io.blocks == []
    assert not tx.busy


def test_failed_write_leaves_idle():
    io = FakeIO(10**6)
    tx = CWIdTransmitter(io)
    tx.write("E")
    with pytest.raises(ValueError):
        tx.write("")
    assert not tx.busy
    tx.process()
    assert io.blocks == []


def test_tone_blocks_are_one_cycle():
    io = FakeIO(10**6)
    tx = CWIdTransmitter(io)
    tx.write("T")
    tx.process()
    tone_blocks = [block for block in io.blocks if any(block)]
    assert tone_blocks
    assert all(len(block) == CYCLE_LENGTH for block in io.blocks)
    assert all(sum(block) == 0 for block in tone_blocks)