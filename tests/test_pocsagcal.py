import pytest

from dvmodem.pocsagcal import POCSAGCalibrator


class FakeIO:
    def __init__(self, space):
        self.free = space

    def space(self):
        return self.free


class FakeTransmitter:
    def __init__(self):
        self.sent = []

    def write_byte(self, value):
        self.sent.append(value)


def make(space=1000):
    io = FakeIO(space)
    tx = FakeTransmitter()
    return POCSAGCalibrator(io, tx), io, tx


def test_idle_sends_nothing():
    cal, _, tx = make()
    cal.process()
    assert tx.sent == []
    assert cal.active is False


def test_active_sends_alternating_byte():
    cal, _, tx = make()
    cal.write(b"\x01")
    cal.process()
    cal.process()
    assert tx.sent == [0xAA, 0xAA]


def test_needs_more_than_threshold_space():
    cal, io, tx = make(space=165)
    cal.write(b"\x01")
    cal.process()
    assert tx.sent == []
    io.free = 166
    cal.process()
    assert tx.sent == [0xAA]


def test_turning_off_stops_output():
    cal, _, tx = make()
    cal.write(b"\x01")
    cal.write(b"\x00")
    cal.process()
    assert tx.sent == []
    assert cal.active is False


def test_other_values_mean_off():
    cal, _, _ = make()
    cal.write(b"\x01")
    cal.write(b"\x02")
    assert cal.active is False


@pytest.mark.parametrize("data", [b"", b"\x01\x01"])
def test_wrong_length_raises(data):
    cal, _, _ = make()
    with pytest.raises(ValueError):
        cal.write(data)