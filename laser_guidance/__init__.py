"""DAC8568 galvo command encoding, waveforms, aiming, runtime control and overlay text."""

__version__ = "0.1.0"

__all__ = [
    "aiming",
    "benchmark",
    "control",
    "dac8568",
    "galvo_commands",
    "galvo_options",
    "galvo_waveforms",
    "overlay",
    "types",
]