"""Drive a galvo pair through DAC8568 outputs: centring, steps and sweeps."""

from __future__ import annotations

import sys
import time
from collections.abc import Callable
from typing import TextIO

from .dac8568 import Dac8568
from .galvo_options import GalvoOptions, Target
from .galvo_waveforms import axis_legs, sequence_steps, sweep_value, xy_pattern_point


def _shortest(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


class GalvoCommander:
    """Issues galvo commands described by ``GalvoOptions`` through a DAC."""

    def __init__(
        self,
        dac: Dac8568,
        options: GalvoOptions,
        out: TextIO | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], object] = time.sleep,
    ) -> None:
        self._dac = dac
        self._options = options
        self._out = out
        self._clock = clock
        self._sleep = sleep

    @property
    def options(self) -> GalvoOptions:
        return self._options

    def _print(self, message: str) -> None:
        print(message, file=self._out if self._out is not None else sys.stdout)

    def _hold(self) -> None:
        if self._options.hold_ms > 0:
            self._sleep(self._options.hold_ms / 1000.0)

    def _sleep_until(self, deadline: float) -> None:
        remaining = deadline - self._clock()
        if remaining > 0:
            self._sleep(remaining)

    def _effective(self, value: float) -> float:
        return value * 2.0 if self._options.differential else value

    def write_center(self) -> None:
        """Set every used output leg to 0 V."""
        opts = self._options
        self._dac.write_voltage(opts.x_plus, 0.0, "center_x_plus")
        if opts.differential:
            self._dac.write_voltage(opts.x_minus, 0.0, "center_x_minus")
        self._dac.write_voltage(opts.y_plus, 0.0, "center_y_plus")
        if opts.differential:
            self._dac.write_voltage(opts.y_minus, 0.0, "center_y_minus")

    def write_axis_state(
        self, x_diff: float, y_diff: float, label: str, verbose: bool = True
    ) -> None:
        """Command both axes; in differential mode the minus legs get the negation."""
        opts = self._options
        legs = axis_legs(opts.wiring, x_diff, y_diff)
        if verbose:
            self._print(
                f"{label}: galvo effective command X={legs.x_seen:.3f}V Y={legs.y_seen:.3f}V"
            )
        self._dac.write_voltage(opts.x_plus, legs.x_pos, "write_x_plus", verbose)
        if opts.differential:
            self._dac.write_voltage(opts.x_minus, legs.x_neg, "write_x_minus", verbose)
        self._dac.write_voltage(opts.y_plus, legs.y_pos, "write_y_plus", verbose)
        if opts.differential:
            self._dac.write_voltage(opts.y_minus, legs.y_neg, "write_y_minus", verbose)

    def run_sequence(self) -> None:
        steps = sequence_steps(self._options.diff_voltage)
        total = len(steps)
        for index, (label, (x, y)) in enumerate(steps, start=1):
            self._print(f"step {index}/{total}: {label}")
            self.write_axis_state(x, y, label)
            if index < total:
                self._hold()

    def _timed_loop(self, emit: Callable[[int, float], None]) -> None:
        opts = self._options
        duration_s = opts.sweep_duration_ms / 1000.0
        period = 1.0 / opts.sample_hz
        start = self._clock()
        next_tick = start
        step = 0
        while True:
            elapsed = self._clock() - start
            if elapsed > duration_s:
                break
            emit(step, elapsed)
            step += 1
            next_tick += period
            self._sleep_until(next_tick)

    def _progress_due(self, step: int) -> bool:
        return step % max(1, self._options.sample_hz // 2) == 0

    def run_sine_sweep(self, x_axis: bool) -> None:
        """Chirp one axis from the start to the end frequency."""
        opts = self._options
        duration_s = opts.sweep_duration_ms / 1000.0
        f0, f1 = opts.sweep_start_hz, opts.sweep_end_hz
        rate = (f1 - f0) / duration_s
        axis = "X" if x_axis else "Y"
        self._print(
            f"starting {axis}-axis sine sweep: per-leg peak={opts.diff_voltage:.3f}V "
            f"effective peak={self._effective(opts.diff_voltage):.3f}V "
            f"start_hz={f0:.3f} end_hz={f1:.3f} duration={opts.sweep_duration_ms}ms "
            f"sample_hz={opts.sample_hz}"
        )

        def emit(step: int, elapsed: float) -> None:
            value = sweep_value(opts.diff_voltage, f0, f1, duration_s, elapsed)
            x, y = (value, 0.0) if x_axis else (0.0, value)
            self.write_axis_state(x, y, "xsine" if x_axis else "ysine", False)
            if self._progress_due(step):
                self._print(
                    f"sweep progress {elapsed / duration_s * 100.0:.0f}% "
                    f"freq={f0 + rate * elapsed:.3f}Hz "
                    f"effective_{axis}={self._effective(value):.3f}V"
                )

        self._timed_loop(emit)

    def run_xy_sine_pattern(self) -> None:
        """Trace a sine curve in Y while X sweeps back and forth."""
        opts = self._options
        duration_s = opts.sweep_duration_ms / 1000.0
        f0, f1 = opts.sweep_start_hz, opts.sweep_end_hz
        rate = (f1 - f0) / duration_s
        self._print(
            f"starting XY sine pattern: per-leg peak={opts.diff_voltage:.3f}V "
            f"effective peak={self._effective(opts.diff_voltage):.3f}V "
            f"cycles={_shortest(opts.curve_cycles)} start_hz={f0:.3f} end_hz={f1:.3f} "
            f"duration={opts.sweep_duration_ms}ms sample_hz={opts.sample_hz}"
        )

        def emit(step: int, elapsed: float) -> None:
            x, y = xy_pattern_point(
                opts.diff_voltage, f0, f1, duration_s, opts.curve_cycles, elapsed
            )
            self.write_axis_state(x, y, "xysine", False)
            if self._progress_due(step):
                self._print(
                    f"pattern progress {elapsed / duration_s * 100.0:.0f}% "
                    f"freq={f0 + rate * elapsed:.3f}Hz "
                    f"effective_X={self._effective(x):.3f}V "
                    f"effective_Y={self._effective(y):.3f}V"
                )

        self._timed_loop(emit)

    def run_target(self) -> None:
        """Run whatever the options' target asks for."""
        opts = self._options
        d = opts.diff_voltage
        target = opts.target
        if target is Target.center:
            self.write_center()
        elif target is Target.x_positive:
            self.write_axis_state(d, 0.0, "x_positive")
        elif target is Target.x_negative:
            self.write_axis_state(-d, 0.0, "x_negative")
        elif target is Target.y_positive:
            self.write_axis_state(0.0, d, "y_positive")
        elif target is Target.y_negative:
            self.write_axis_state(0.0, -d, "y_negative")
        elif target is Target.x_sine_sweep:
            self.run_sine_sweep(True)
        elif target is Target.y_sine_sweep:
            self.run_sine_sweep(False)
        elif target is Target.xy_sine_pattern:
            self.run_xy_sine_pattern()
        elif target is Target.sequence:
            self.run_sequence()
        else:
            raise ValueError("unsupported target")