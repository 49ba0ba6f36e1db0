"""Pure waveform and leg-voltage computations for galvo command patterns."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .galvo_options import WiringMode


@dataclass(frozen=True)
class AxisLegs:
    """Per-leg DAC voltages for both galvo axes."""

    x_pos: float
    x_neg: float
    y_pos: float
    y_neg: float
    wiring: WiringMode = WiringMode.differential

    @property
    def differential(self) -> bool:
        return self.wiring is WiringMode.differential

    @property
    def x_seen(self) -> float:
        """Effective X command as seen by the galvo driver."""
        return self.x_pos - self.x_neg if self.differential else self.x_pos

    @property
    def y_seen(self) -> float:
        """Effective Y command as seen by the galvo driver."""
        return self.y_pos - self.y_neg if self.differential else self.y_pos


def axis_legs(wiring: WiringMode, x_diff: float, y_diff: float) -> AxisLegs:
    """Split per-axis commands into leg voltages for the given wiring."""
    if wiring is WiringMode.differential:
        return AxisLegs(x_diff, -x_diff, y_diff, -y_diff, wiring)
    return AxisLegs(x_diff, 0.0, y_diff, 0.0, wiring)


def _chirp_cycles(start_hz: float, end_hz: float, duration_s: float, elapsed_s: float) -> float:
    rate = (end_hz - start_hz) / duration_s
    return start_hz * elapsed_s + 0.5 * rate * elapsed_s * elapsed_s


def sweep_value(
    amplitude: float,
    start_hz: float,
    end_hz: float,
    duration_s: float,
    elapsed_s: float,
) -> float:
    """Value of a linear chirp from ``start_hz`` to ``end_hz`` at ``elapsed_s``."""
    phase = 2.0 * math.pi * _chirp_cycles(start_hz, end_hz, duration_s, elapsed_s)
    return amplitude * math.sin(phase)


def xy_pattern_point(
    amplitude: float,
    start_hz: float,
    end_hz: float,
    duration_s: float,
    curve_cycles: float,
    elapsed_s: float,
) -> tuple[float, float]:
    """Point of a triangle-swept X with a sine Y traced across each X traversal."""
    cycles = _chirp_cycles(start_hz, end_hz, duration_s, elapsed_s)
    frac = cycles - math.floor(cycles)
    x_norm = 1.0 - 4.0 * abs(frac - 0.5)
    s = (x_norm + 1.0) * 0.5
    y_norm = math.sin(2.0 * math.pi * curve_cycles * s)
    return amplitude * x_norm, amplitude * y_norm


def sequence_steps(diff_voltage: float) -> list[tuple[str, tuple[float, float]]]:
    """Labelled (x, y) commands for the centre/X/Y step sequence."""
    d = diff_voltage
    return [
        ("center_1", (0.0, 0.0)),
        ("x_positive", (d, 0.0)),
        ("center_2", (0.0, 0.0)),
        ("x_negative", (-d, 0.0)),
        ("center_3", (0.0, 0.0)),
        ("y_positive", (0.0, d)),
        ("center_4", (0.0, 0.0)),
        ("y_negative", (0.0, -d)),
        ("center_5", (0.0, 0.0)),
    ]