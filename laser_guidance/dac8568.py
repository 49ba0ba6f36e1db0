"""DAC8568 command encoding and a write-path smoke routine over an SPI link."""

from __future__ import annotations

import math
import re
import sys
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol, TextIO

DAC_MIN_V = -10.0
DAC_MAX_V = 10.0
CODE_MAX = 0xFFFF
CHANNEL_COUNT = 8

CONTROL_WRITE_UPDATE = 0x03
ENABLE_INTERNAL_REFERENCE = 0x08000001

SMOKE_SEQUENCE = (0.0, 1.0, -1.0, 0.0)

_INT_MAX = 2**31 - 1
_SPACE = r"[ \t\n\v\f\r]*"
_INT_RE = re.compile(_SPACE + r"[+-]?[0-9]+")
_DEC_RE = re.compile(
    _SPACE + r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|inf(?:inity)?|nan(?:\([0-9A-Za-z_]*\))?)",
    re.IGNORECASE,
)
_HEX_RE = re.compile(
    _SPACE + r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?[0-9]+)?"
)


class SpiWriter(Protocol):
    """Anything that can push raw bytes out over SPI."""

    def write(self, data: bytes) -> object: ...


def parse_channel(text: str) -> int:
    """Parse a DAC channel letter A-H (any case) into an index 0-7."""
    if len(text) != 1:
        raise ValueError("channel must be a single letter A-H")
    letter = text.upper()
    if not "A" <= letter <= "H":
        raise ValueError("channel must be in range A-H")
    return ord(letter) - ord("A")


def channel_name(channel: int) -> str:
    return chr(ord("A") + channel)


def clamp_voltage(voltage: float) -> float:
    return min(DAC_MAX_V, max(DAC_MIN_V, voltage))


def voltage_to_code(voltage: float) -> int:
    """Map a voltage in [-10, 10] V onto the 16-bit DAC code, rounding half up."""
    clipped = clamp_voltage(voltage)
    code = (clipped - DAC_MIN_V) / (DAC_MAX_V - DAC_MIN_V) * CODE_MAX
    return int(math.floor(code + 0.5))


def build_payload(control: int, address: int, data: int, feature: int = 0) -> int:
    """Assemble a 32-bit DAC8568 command word."""
    return (
        ((control & 0xFF) << 24)
        | ((address & 0xFF) << 20)
        | ((data & 0xFFFF) << 4)
        | (feature & 0xFF)
    ) & 0xFFFFFFFF


def payload_bytes(payload: int) -> bytes:
    """Big-endian wire bytes of a command word."""
    return (payload & 0xFFFFFFFF).to_bytes(4, "big")


def parse_int(text: str, name: str) -> int:
    """Parse a non-negative decimal integer option value."""
    if text == "":
        return 0
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"{name} must be an integer")
    value = int(text.strip())
    if value < 0:
        raise ValueError(f"{name} must be >= 0")
    if value > _INT_MAX:
        raise ValueError(f"{name} is too large")
    return value


def parse_double(text: str, name: str) -> float:
    """Parse a finite floating-point option value."""
    if text == "":
        return 0.0
    if _DEC_RE.fullmatch(text):
        value = float(text.lstrip())
    elif _HEX_RE.fullmatch(text):
        value = float.fromhex(text.lstrip())
    else:
        raise ValueError(f"{name} must be a number")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite")
    return value


@dataclass
class SmokeOptions:
    """Options for the single-channel DAC smoke run."""

    channel: int = 0
    hold_ms: int = 1500
    show_help: bool = False
    keep_last: bool = False
    single_voltage: float | None = None


def parse_smoke_options(argv: Sequence[str]) -> SmokeOptions:
    """Parse command-line arguments (without the program name)."""
    options = SmokeOptions()
    args = iter(argv)

    def value_for(flag: str) -> str:
        try:
            return next(args)
        except StopIteration:
            raise ValueError(f"{flag} requires a value") from None

    for arg in args:
        if arg == "--help":
            options.show_help = True
        elif arg == "--keep-last":
            options.keep_last = True
        elif arg == "--channel":
            options.channel = parse_channel(value_for(arg))
        elif arg == "--hold-ms":
            options.hold_ms = parse_int(value_for(arg), "hold-ms")
        elif arg == "--voltage":
            options.single_voltage = parse_double(value_for(arg), "voltage")
        else:
            raise ValueError(f"unknown argument: {arg}")
    return options


class Dac8568:
    """Writes DAC8568 commands through an SPI link, reporting each write."""

    def __init__(
        self,
        spi: SpiWriter,
        out: TextIO | None = None,
        sleep: Callable[[float], object] = time.sleep,
    ) -> None:
        self._spi = spi
        self._out = out
        self._sleep = sleep

    def _print(self, message: str) -> None:
        print(message, file=self._out if self._out is not None else sys.stdout)

    def hold(self, hold_ms: int) -> None:
        """Pause between steps; non-positive durations do nothing."""
        if hold_ms > 0:
            self._sleep(hold_ms / 1000.0)

    def write_payload(self, payload: int, label: str, verbose: bool = True) -> None:
        data = payload_bytes(payload)
        if verbose:
            shown = ", ".join(f"0x{byte:02X}" for byte in data)
            self._print(f"{label}: payload=0x{payload:08X} bytes=[{shown}]")
        self._spi.write(data)

    def enable_internal_reference(self) -> None:
        self.write_payload(ENABLE_INTERNAL_REFERENCE, "enable_internal_reference")

    def write_voltage(
        self,
        channel: int,
        voltage: float,
        label: str | None = None,
        verbose: bool = True,
    ) -> None:
        """Set one channel to a voltage, clipped to the DAC range."""
        clipped = clamp_voltage(voltage)
        code = voltage_to_code(clipped)
        payload = build_payload(CONTROL_WRITE_UPDATE, channel, code, 0x00)
        if verbose:
            prefix = f"{label}: " if label is not None else ""
            self._print(
                f"{prefix}channel={channel_name(channel)} "
                f"target_voltage={clipped:.3f}V code=0x{code:04X}"
            )
        self.write_payload(payload, label if label is not None else "write_voltage", verbose)

    def run_single_voltage(self, options: SmokeOptions) -> None:
        voltage = options.single_voltage if options.single_voltage is not None else 0.0
        name = channel_name(options.channel)
        self.write_voltage(options.channel, voltage)
        if options.keep_last:
            self._print(
                f"kept channel {name} at {clamp_voltage(voltage):.3f}V; measure it now "
                "with a multimeter and reset manually when done"
            )
            return
        self.hold(options.hold_ms)
        self.write_voltage(options.channel, 0.0)
        self._print(f"restored channel {name} to 0.000V")

    def run_sequence(self, options: SmokeOptions) -> None:
        name = channel_name(options.channel)
        total = len(SMOKE_SEQUENCE)
        for step, voltage in enumerate(SMOKE_SEQUENCE, start=1):
            self._print(
                f"step {step}/{total}: set channel {name} to {voltage:.3f}V "
                "and observe the output"
            )
            self.write_voltage(options.channel, voltage)
            if step < total:
                self.hold(options.hold_ms)
        self._print(
            "sequence finished; expected multimeter readings followed "
            f"0V -> +1V -> -1V -> 0V on channel {name}"
        )