"""Command-line options for driving a galvo pair through DAC8568 outputs."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .dac8568 import parse_channel, parse_double, parse_int

MAX_DIFF_VOLTAGE = 5.0


class WiringMode(Enum):
    differential = "differential"
    single_ended = "single-ended"


class Target(Enum):
    sequence = "sequence"
    center = "center"
    x_positive = "xp"
    x_negative = "xn"
    y_positive = "yp"
    y_negative = "yn"
    x_sine_sweep = "xsine"
    y_sine_sweep = "ysine"
    xy_sine_pattern = "xysine"


@dataclass
class GalvoOptions:
    """Galvo smoke test settings; channels are DAC indices 0-7."""

    x_plus: int = 0
    x_minus: int = 2
    y_plus: int = 1
    y_minus: int = 3
    diff_voltage: float = 0.5
    hold_ms: int = 1200
    sweep_start_hz: float = 0.5
    sweep_end_hz: float = 5.0
    sweep_duration_ms: int = 5000
    sample_hz: int = 100
    curve_cycles: float = 1.0
    keep_last: bool = False
    show_help: bool = False
    wiring: WiringMode = WiringMode.differential
    target: Target = Target.sequence

    @property
    def differential(self) -> bool:
        return self.wiring is WiringMode.differential


def parse_wiring(text: str) -> WiringMode:
    try:
        return WiringMode(text)
    except ValueError:
        raise ValueError("wiring must be differential or single-ended") from None


def parse_target(text: str) -> Target:
    try:
        return Target(text)
    except ValueError:
        raise ValueError(
            "target must be sequence, center, xp, xn, yp, yn, xsine, ysine, or xysine"
        ) from None


def validate_unique_channels(options: GalvoOptions) -> None:
    """Raise ValueError if two used outputs share a DAC channel."""
    used = [options.x_plus, options.y_plus]
    if options.differential:
        used += [options.x_minus, options.y_minus]
    if len(set(used)) != len(used):
        raise ValueError("DAC channel assignments must be unique for all used outputs")


_VALUE_OPTIONS = {
    "--wiring": ("wiring", parse_wiring),
    "--target": ("target", parse_target),
    "--diff-voltage": ("diff_voltage", lambda t: parse_double(t, "diff-voltage")),
    "--hold-ms": ("hold_ms", lambda t: parse_int(t, "hold-ms")),
    "--sweep-start-hz": ("sweep_start_hz", lambda t: parse_double(t, "sweep-start-hz")),
    "--sweep-end-hz": ("sweep_end_hz", lambda t: parse_double(t, "sweep-end-hz")),
    "--sweep-duration-ms": ("sweep_duration_ms", lambda t: parse_int(t, "sweep-duration-ms")),
    "--sample-hz": ("sample_hz", lambda t: parse_int(t, "sample-hz")),
    "--curve-cycles": ("curve_cycles", lambda t: parse_double(t, "curve-cycles")),
    "--x-plus": ("x_plus", parse_channel),
    "--x-minus": ("x_minus", parse_channel),
    "--y-plus": ("y_plus", parse_channel),
    "--y-minus": ("y_minus", parse_channel),
}


def parse_galvo_options(argv: Sequence[str]) -> GalvoOptions:
    """Parse and validate command-line arguments (without the program name)."""
    options = GalvoOptions()
    args = iter(argv)
    for arg in args:
        if arg == "--help":
            options.show_help = True
        elif arg == "--keep-last":
            options.keep_last = True
        elif arg in _VALUE_OPTIONS:
            field_name, parser = _VALUE_OPTIONS[arg]
            try:
                text = next(args)
            except StopIteration:
                raise ValueError(f"{arg} requires a value") from None
            setattr(options, field_name, parser(text))
        else:
            raise ValueError(f"unknown argument: {arg}")

    if abs(options.diff_voltage) > MAX_DIFF_VOLTAGE:
        raise ValueError("diff-voltage must be within [-5.0, 5.0] for a safe first test")
    if options.sample_hz <= 0:
        raise ValueError("sample-hz must be > 0")
    if options.sweep_duration_ms <= 0:
        raise ValueError("sweep-duration-ms must be > 0")
    if options.sweep_start_hz < 0.0 or options.sweep_end_hz < 0.0:
        raise ValueError("sweep frequencies must be >= 0")
    if options.curve_cycles <= 0.0:
        raise ValueError("curve-cycles must be > 0")
    validate_unique_channels(options)
    return options