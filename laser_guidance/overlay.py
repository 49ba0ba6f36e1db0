"""Text, colours and filtering used when drawing detections and status overlays."""

from __future__ import annotations

import math
from collections.abc import Iterable

from .types import ModelCandidate, Point2f

MIN_DRAW_SCORE = 0.25

Color = tuple[int, int, int]

_CLASS_NAMES = {0: "purple", 1: "red", 2: "blue"}
_CLASS_COLORS: dict[int, Color] = {
    0: (255, 0, 255),
    1: (0, 0, 255),
    2: (255, 0, 0),
}
_DEFAULT_COLOR: Color = (0, 255, 0)
_ENEMY_TAGS = {1: " [RED]", 2: " [BLUE]"}


def class_name(class_id: int) -> str:
    """Human-readable name of a detector class."""
    return _CLASS_NAMES.get(class_id, "?")


def class_color(class_id: int) -> Color:
    """BGR drawing colour for a detector class."""
    return _CLASS_COLORS.get(class_id, _DEFAULT_COLOR)


def candidate_label(candidate: ModelCandidate) -> str:
    """Label drawn next to a candidate's box: class name and score percentage."""
    return f"{class_name(candidate.class_id)} {candidate.score * 100.0:.0f}%"


def visible_candidates(candidates: Iterable[ModelCandidate]) -> list[ModelCandidate]:
    """Candidates confident enough to be drawn, in their original order."""
    return [c for c in candidates if c.score >= MIN_DRAW_SCORE]


def guidance_status_text(
    guidance_active: bool, ekf_ok: bool, depth_ok: bool, message: str
) -> str:
    """Status line describing the guidance loop, most blocking condition first."""
    if not guidance_active:
        return "GUIDANCE: disabled"
    if not ekf_ok:
        return "GUIDANCE: EKF lost/waiting"
    if not depth_ok:
        return "GUIDANCE: waiting for depth"
    if message:
        return f"GUIDANCE: {message}"
    return "GUIDANCE OK"


def status_bar_text(
    streaming: bool, recording: bool, enemy_class_id: int, using_trt: bool
) -> str:
    """Tags for the top-right status bar: backend, streaming, recording, enemy."""
    parts = [" [TRT]" if using_trt else " [ONNX]"]
    if streaming:
        parts.append(" [RTP]")
    if recording:
        parts.append(" [REC]")
    parts.append(_ENEMY_TAGS.get(enemy_class_id, ""))
    return "".join(parts)


def ekf_speed_label(velocity: Point2f) -> str:
    """Speed annotation for the tracked target, in pixels per second."""
    vx, vy = velocity
    return f"EKF {math.hypot(vx, vy):.0f} px/s"