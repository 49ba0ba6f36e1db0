import io

import pytest

from laser_guidance.dac8568 import Dac8568, voltage_to_code
from laser_guidance.galvo_commands import GalvoCommander
from laser_guidance.galvo_options import GalvoOptions, Target, WiringMode


class FakeSpi:
    def __init__(self):
        self.writes = []

    def write(self, data):
        self.writes.append(bytes(data))

    def decoded(self):
        result = []
        for data in self.writes:
            payload = int.from_bytes(data, "big")
            result.append(((payload >> 20) & 0xF, (payload >> 4) & 0xFFFF))
        return result


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def make(options):
    spi = FakeSpi()
    out = io.StringIO()
    clock = FakeClock()
    dac = Dac8568(spi, out=out, sleep=clock.sleep)
    commander = GalvoCommander(dac, options, out=out, clock=clock, sleep=clock.sleep)
    return commander, spi, out, clock


MID = voltage_to_code(0.0)


def test_center_differential_writes_all_four_legs():
    commander, spi, _, _ = make(GalvoOptions())
    commander.write_center()
    assert spi.decoded() == [(0, MID), (2, MID), (1, MID), (3, MID)]


def test_center_single_ended_writes_two_legs():
    commander, spi, _, _ = make(GalvoOptions(wiring=WiringMode.single_ended))
    commander.write_center()
    assert spi.decoded() == [(0, MID), (1, MID)]


def test_axis_state_differential_codes_and_report():
    commander, spi, out, _ = make(GalvoOptions())
    commander.write_axis_state(0.5, 0.0, "x_positive")
    assert spi.decoded() == [
        (0, voltage_to_code(0.5)),
        (2, voltage_to_code(-0.5)),
        (1, MID),
        (3, MID),
    ]
    assert "x_positive: galvo effective command X=1.000V" in out.getvalue()


def test_axis_state_quiet_prints_nothing():
    commander, spi, out, _ = make(GalvoOptions())
    commander.write_axis_state(0.25, -0.25, "quiet", verbose=False)
    assert out.getvalue() == ""
    assert len(spi.writes) == 4


def test_sequence_writes_nine_states_and_holds_between():
    commander, spi, out, clock = make(GalvoOptions(hold_ms=1200))
    commander.run_sequence()
    assert len(spi.writes) == 9 * 4
    assert clock.sleeps == [pytest.approx(1.2)] * 8
    assert "step 9/9: center_5" in out.getvalue()
    decoded = spi.decoded()
    assert decoded[4:8] == [
        (0, voltage_to_code(0.5)),
        (2, voltage_to_code(-0.5)),
        (1, MID),
        (3, MID),
    ]


def test_run_target_y_negative_single_ended():
    options = GalvoOptions(wiring=WiringMode.single_ended, target=Target.y_negative)
    commander, spi, _, _ = make(options)
    commander.run_target()
    assert spi.decoded() == [(0, MID), (1, voltage_to_code(-0.5))]


def test_run_target_center():
    commander, spi, _, _ = make(GalvoOptions(target=Target.center))
    commander.run_target()
    assert [code for _, code in spi.decoded()] == [MID] * 4


def test_x_sine_sweep_keeps_y_centered():
    options = GalvoOptions(
        target=Target.x_sine_sweep, sample_hz=4, sweep_duration_ms=1000, diff_voltage=1.5
    )
    commander, spi, out, _ = make(options)
    commander.run_target()
    decoded = spi.decoded()
    assert len(decoded) == 5 * 4
    assert all(code == MID for channel, code in decoded if channel in (1, 3))
    assert decoded[0] == (0, MID)
    assert "starting X-axis sine sweep" in out.getvalue()
    assert "sweep progress 0%" in out.getvalue()


def test_y_sine_sweep_keeps_x_centered():
    options = GalvoOptions(target=Target.y_sine_sweep, sample_hz=4, sweep_duration_ms=1000)
    commander, spi, _, _ = make(options)
    commander.run_target()
    decoded = spi.decoded()
    assert len(decoded) == 20
    assert all(code == MID for channel, code in decoded if channel in (0, 2))


def test_xy_pattern_starts_at_negative_x():
    options = GalvoOptions(
        target=Target.xy_sine_pattern, sample_hz=4, sweep_duration_ms=1000, diff_voltage=2.5
    )
    commander, spi, out, _ = make(options)
    commander.run_target()
    decoded = spi.decoded()
    assert len(decoded) == 20
    assert decoded[0] == (0, voltage_to_code(-2.5))
    assert decoded[1] == (2, voltage_to_code(2.5))
    assert "cycles=1 " in out.getvalue()
    assert "pattern progress 0%" in out.getvalue()


def test_sweep_sleeps_one_period_per_sample():
    options = GalvoOptions(target=Target.x_sine_sweep, sample_hz=4, sweep_duration_ms=1000)
    commander, _, _, clock = make(options)
    commander.run_sine_sweep(True)
    assert clock.sleeps == [pytest.approx(0.25)] * 5