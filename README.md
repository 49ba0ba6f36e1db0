# laser_guidance

Building blocks for a camera-driven laser guidance system: DAC8568 command
encoding for galvo mirrors, galvo waveform generation, aiming decisions from
tracker state, runtime control commands and operator overlay text.

The package is pure Python with no third-party dependencies. Hardware access
is kept behind a small writer interface (any object with a `write(data: bytes)`
method), so everything can be exercised without an SPI adapter attached.

## What is inside

| Module | Purpose |
| --- | --- |
| `laser_guidance.types` | `Frame`, `ModelCandidate`, `LidarPoint`, `LidarFrame`, `TargetObservation` |
| `laser_guidance.benchmark` | `percentile_index`, `summarize_latencies` and `LatencySummary` |
| `laser_guidance.dac8568` | voltage codes, 32-bit command payloads, option parsing and the `Dac8568` smoke routines |
| `laser_guidance.galvo_options` | `GalvoOptions`, `WiringMode`, `Target` and `parse_galvo_options` |
| `laser_guidance.galvo_waveforms` | `axis_legs`, `sweep_value`, `xy_pattern_point`, `sequence_steps` |
| `laser_guidance.galvo_commands` | `GalvoCommander`, which drives the galvo through a `Dac8568` |
| `laser_guidance.overlay` | class names and colours, candidate labels, status lines |
| `laser_guidance.control` | `ControlCommand`, `parse_command`, `ControlState`, `filter_candidates` |
| `laser_guidance.aiming` | `TrackState`, `AimPlanner`, `AimCommand` and `lookahead_aim` |

## Encoding DAC8568 commands

```python
from laser_guidance.dac8568 import build_payload, payload_bytes, voltage_to_code

code = voltage_to_code(0.0)                  # mid-scale of the +/-10 V range
payload = build_payload(0x03, 0, code, 0)    # write and update channel A
frame = payload_bytes(payload)               # four bytes, most significant first
```

Voltages outside +/-10 V are clamped before they are converted.
`parse_channel("c")` turns a channel letter A-H into its index.

## Driving a galvo

```python
from laser_guidance.dac8568 import Dac8568
from laser_guidance.galvo_commands import GalvoCommander
from laser_guidance.galvo_options import parse_galvo_options


class RecordingSpi:
    def __init__(self):
        self.writes = []

    def write(self, data: bytes):
        self.writes.append(data)


dac = Dac8568(RecordingSpi())
options = parse_galvo_options(["--target", "xp", "--diff-voltage", "1.0"])
commander = GalvoCommander(dac, options)
dac.enable_internal_reference()
commander.run_target()
commander.write_center()
```

In differential wiring each axis uses a plus and a minus leg and the driver
sees twice the per-leg voltage; in single-ended wiring only the plus legs are
written. `parse_galvo_options` rejects a `--diff-voltage` beyond +/-5 V,
non-positive sample rates, durations or curve cycles, negative sweep
frequencies and DAC channels shared between used outputs, by raising
`ValueError`. `GalvoCommander` also accepts `clock` and `sleep` callables, so
sweeps can be run against a simulated clock.

## Runtime control

```python
from laser_guidance.control import ControlState, parse_command

state = ControlState()
state.apply(parse_command("enemy blue"))   # returns "FIFO: enemy → BLUE"
```

`parse_command` matches by prefix and returns `None` for unknown text.
`filter_candidates` keeps purple targets and the selected enemy colour; an
enemy class id below zero keeps every candidate.

## Aiming

`AimPlanner.update(observation, track)` decides, frame by frame, whether to
aim at the tracked position projected ahead with `lookahead_aim`, to recentre
the galvo when the track is first lost, or to leave the output unchanged. With
the tracker disabled it aims straight at the detected centre.

## What the package does not do

It does not capture camera frames, run detection models, read YAML
configuration files, stream or record video, or talk to a USB-to-SPI adapter
itself, and it installs no command-line programs. The caller supplies frames,
detections, tracker states and an SPI writer; the package computes what to
send and what to show.

## Running the tests

Install the `test` extra and run `pytest` from the project root.