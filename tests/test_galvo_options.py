import pytest

from laser_guidance.dac8568 import parse_channel
from laser_guidance.galvo_options import (
    GalvoOptions,
    Target,
    WiringMode,
    parse_galvo_options,
    parse_target,
    parse_wiring,
    validate_unique_channels,
)


def test_defaults_match_recommended_mapping():
    options = parse_galvo_options([])
    assert (options.x_plus, options.x_minus, options.y_plus, options.y_minus) == (
        parse_channel("A"),
        parse_channel("C"),
        parse_channel("B"),
        parse_channel("D"),
    )
    assert options.diff_voltage == 0.5
    assert options.hold_ms == 1200
    assert options.sample_hz == 100
    assert options.sweep_duration_ms == 5000
    assert options.wiring is WiringMode.differential
    assert options.target is Target.sequence


@pytest.mark.parametrize(
    "token", ["sequence", "center", "xp", "xn", "yp", "yn", "xsine", "ysine", "xysine"]
)
def test_parse_target_round_trip(token):
    assert parse_target(token).value == token


def test_parse_target_rejects_unknown():
    with pytest.raises(ValueError, match="target must be sequence"):
        parse_target("zigzag")


def test_parse_wiring():
    assert parse_wiring("differential") is WiringMode.differential
    assert parse_wiring("single-ended") is WiringMode.single_ended
    with pytest.raises(ValueError, match="wiring must be differential or single-ended"):
        parse_wiring("single_ended")


def test_full_argument_set():
    options = parse_galvo_options(
        [
            "--target", "xysine",
            "--wiring", "single-ended",
            "--diff-voltage", "2.5",
            "--hold-ms", "10",
            "--sweep-start-hz", "1",
            "--sweep-end-hz", "2",
            "--sweep-duration-ms", "300",
            "--sample-hz", "50",
            "--curve-cycles", "3",
            "--x-plus", "e",
            "--y-plus", "f",
            "--keep-last",
        ]
    )
    assert options.target is Target.xy_sine_pattern
    assert options.wiring is WiringMode.single_ended
    assert options.diff_voltage == 2.5
    assert options.hold_ms == 10
    assert (options.sweep_start_hz, options.sweep_end_hz) == (1.0, 2.0)
    assert options.sweep_duration_ms == 300
    assert options.sample_hz == 50
    assert options.curve_cycles == 3.0
    assert options.x_plus == parse_channel("E")
    assert options.y_plus == parse_channel("F")
    assert options.keep_last


def test_single_ended_ignores_minus_channels():
    options = parse_galvo_options(["--wiring", "single-ended", "--x-minus", "B"])
    assert options.x_minus == options.y_plus


def test_differential_rejects_shared_channel():
    with pytest.raises(ValueError, match="must be unique"):
        parse_galvo_options(["--x-minus", "B"])


def test_validate_unique_channels_direct():
    with pytest.raises(ValueError, match="must be unique"):
        validate_unique_channels(GalvoOptions(x_plus=1, y_plus=1))


@pytest.mark.parametrize(
    "argv,message",
    [
        (["--diff-voltage", "5.5"], "diff-voltage must be within"),
        (["--diff-voltage", "-6"], "diff-voltage must be within"),
        (["--sample-hz", "0"], "sample-hz must be > 0"),
        (["--sweep-duration-ms", "0"], "sweep-duration-ms must be > 0"),
        (["--sweep-start-hz", "-1"], "sweep frequencies must be >= 0"),
        (["--curve-cycles", "0"], "curve-cycles must be > 0"),
        (["--hold-ms", "-5"], "hold-ms must be >= 0"),
        (["--target"], "--target requires a value"),
        (["--y-minus"], "--y-minus requires a value"),
        (["--x-plus", "Z"], "channel must be in range A-H"),
        (["--nope"], "unknown argument: --nope"),
    ],
)
def test_parse_errors(argv, message):
    with pytest.raises(ValueError, match=message):
        parse_galvo_options(argv)


def test_negative_diff_voltage_within_limit_is_allowed():
    assert parse_galvo_options(["--diff-voltage", "-5"]).diff_voltage == -5.0