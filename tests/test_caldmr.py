import pytest

from dvmodem.caldmr import (
    DMR_FRAME_LENGTH_BYTES,
    SHORTLC_1K,
    SYNCEMB_1K,
    SYNCEMB_DMO1K,
    VH_1K,
    VH_DMO1K,
    VOICE_1K,
    VT_1K,
    VT_DMO1K,
    CalMode,
    DMRCalibrator,
)


class FakeDMR:
    def __init__(self):
        self.cal = None
        self.process_calls = 0
        self.room = 10
        self.color_code = None
        self.short_lc = None
        self.slot2 = []
        self.start = None
        self.frames = 0
        self.resets = 0

    def set_cal(self, enabled):
        self.cal = enabled

    def process(self):
        self.process_calls += 1

    def slot2_space(self):
        return self.room

    def set_color_code(self, color_code):
        self.color_code = color_code

    def write_short_lc(self, data):
        self.short_lc = bytes(data)

    def write_slot2(self, data):
        self.slot2.append(bytes(data))

    def set_start(self, start):
        self.start = start

    def frame_count(self):
        return self.frames

    def reset_slot2(self):
        self.resets += 1


class FakeDMO:
    def __init__(self):
        self.room = 10
        self.written = []
        self.process_calls = 0

    def process(self):
        self.process_calls += 1

    def space(self):
        return self.room

    def write_data(self, data):
        self.written.append(bytes(data))


def make():
    dmr, dmo = FakeDMR(), FakeDMO()
    return DMRCalibrator(dmr, dmo), dmr, dmo


def check_voice(frame, syncemb):
    assert len(frame) == DMR_FRAME_LENGTH_BYTES + 1
    assert frame[15:20] == syncemb[1:6]
    assert frame[14] & 0x0F == syncemb[0] & 0x0F
    assert frame[14] & 0xF0 == VOICE_1K[14] & 0xF0
    assert frame[20] & 0xF0 == syncemb[6] & 0xF0
    assert frame[20] & 0x0F == VOICE_1K[20] & 0x0F
    assert frame[:14] == VOICE_1K[:14]
    assert frame[21:] == VOICE_1K[21:]


def test_write_rejects_wrong_length():
    cal, _, _ = make()
    with pytest.raises(ValueError):
        cal.write(b"\x01\x00", CalMode.DMRCAL1K)


def test_raw_cal_mode_toggles_cal():
    cal, dmr, _ = make()
    cal.write(b"\x01", CalMode.DMRCAL)
    cal.process(CalMode.DMRCAL)
    assert dmr.cal is True
    assert dmr.process_calls == 1
    cal.write(b"\x00", CalMode.DMRCAL)
    cal.process(CalMode.LFCAL)
    assert dmr.cal is False
    assert dmr.process_calls == 1


def test_direct_mode_full_call():
    cal, _, dmo = make()
    cal.write(b"\x01", CalMode.DMRDMO1K)
    cal.process(CalMode.DMRDMO1K)
    assert dmo.written == [VH_DMO1K]
    cal.write(b"\x00", CalMode.DMRDMO1K)
    for _ in range(6):
        cal.process(CalMode.DMRDMO1K)
    for seq, frame in enumerate(dmo.written[1:]):
        check_voice(frame, SYNCEMB_DMO1K[seq])
    cal.process(CalMode.DMRDMO1K)
    assert dmo.written[-1] == VT_DMO1K
    count = len(dmo.written)
    cal.process(CalMode.DMRDMO1K)
    assert len(dmo.written) == count


def test_direct_mode_loops_while_on():
    cal, _, dmo = make()
    cal.write(b"\x01", CalMode.DMRDMO1K)
    for _ in range(1 + 6 + 2):
        cal.process(CalMode.DMRDMO1K)
    assert VT_DMO1K not in dmo.written
    check_voice(dmo.written[7], SYNCEMB_DMO1K[0])
    check_voice(dmo.written[8], SYNCEMB_DMO1K[1])


def test_repeater_mode_full_call():
    cal, dmr, _ = make()
    cal.write(b"\x01", CalMode.DMRCAL1K)
    cal.process(CalMode.DMRCAL1K)
    assert dmr.color_code == 1
    assert dmr.short_lc == SHORTLC_1K
    assert dmr.slot2 == [VH_1K]
    assert dmr.start is True

    cal.write(b"\x00", CalMode.DMRCAL1K)
    for _ in range(6):
        cal.process(CalMode.DMRCAL1K)
    for seq, frame in enumerate(dmr.slot2[1:]):
        check_voice(frame, SYNCEMB_1K[seq])

    dmr.frames = 100
    cal.process(CalMode.DMRCAL1K)
    assert dmr.slot2[-1] == VT_1K

    dmr.frames = 130
    cal.process(CalMode.DMRCAL1K)
    assert dmr.start is True
    assert dmr.resets == 0

    dmr.frames = 131
    cal.process(CalMode.DMRCAL1K)
    assert dmr.start is False
    assert dmr.resets == 1


def test_no_space_writes_nothing():
    cal, _, dmo = make()
    dmo.room = 0
    cal.write(b"\x01", CalMode.DMRDMO1K)
    cal.process(CalMode.DMRDMO1K)
    assert dmo.written == []
    assert dmo.process_calls == 1


def test_start_needs_pattern_mode():
    cal, dmr, dmo = make()
    cal.write(b"\x01", CalMode.DMRCAL)
    cal.process(CalMode.DMRCAL1K)
    cal.process(CalMode.DMRDMO1K)
    assert dmr.slot2 == []
    assert dmo.written == []