"""Decide where the galvo should aim from detections and the target track."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .types import ModelCandidate, Point2f, TargetObservation


@dataclass(frozen=True)
class TrackState:
    """Snapshot of the target tracker: pixel position and velocity (px/s)."""

    initialized: bool = False
    lost: bool = False
    position: Point2f = (0.0, 0.0)
    velocity: Point2f = (0.0, 0.0)


class AimAction(Enum):
    """What the guidance output should do this frame."""

    none = "none"
    aim = "aim"
    center = "center"


@dataclass(frozen=True)
class AimCommand:
    """Result of one planning step.

    ``position`` and ``candidate`` are set when ``action`` is ``aim``;
    ``candidate`` may still be None when aiming from the track alone.
    ``reset_depth`` asks the caller to forget its last depth estimate.
    ``tracking_ok`` and ``depth_ok`` feed the guidance status line.
    """

    action: AimAction = AimAction.none
    position: Point2f | None = None
    candidate: ModelCandidate | None = None
    reset_depth: bool = False
    tracking_ok: bool = False
    depth_ok: bool = False


def lookahead_aim(position: Point2f, velocity: Point2f, lookahead_ms: float) -> Point2f:
    """Extrapolate a position along its velocity by ``lookahead_ms``."""
    latency_s = lookahead_ms * 0.001
    px, py = position
    vx, vy = velocity
    return (px + vx * latency_s, py + vy * latency_s)


def _top_candidate(observation: TargetObservation) -> ModelCandidate | None:
    if observation.detected and observation.candidates:
        return observation.candidates[0]
    return None


class AimPlanner:
    """Turns per-frame observations and track states into aim commands."""

    def __init__(self, ekf_enabled: bool = True, lookahead_ms: float = 12.0) -> None:
        self.ekf_enabled = ekf_enabled
        self.lookahead_ms = lookahead_ms
        self.depth_valid = False
        self._was_lost = False

    def update(self, observation: TargetObservation, track: TrackState) -> AimCommand:
        """Plan this frame's guidance output."""
        action = AimAction.none
        position: Point2f | None = None
        candidate = _top_candidate(observation)
        reset_depth = False

        if not self.ekf_enabled:
            if candidate is not None:
                action = AimAction.aim
                position = observation.center
                self.depth_valid = True
            elif self.depth_valid:
                action = AimAction.center
                self.depth_valid = False
        elif track.initialized and not track.lost:
            if candidate is not None:
                self.depth_valid = True
            if self.depth_valid:
                action = AimAction.aim
                position = lookahead_aim(track.position, track.velocity, self.lookahead_ms)
        elif track.lost and not self._was_lost:
            action = AimAction.center
            self.depth_valid = False
            reset_depth = True
        self._was_lost = track.lost

        if self.ekf_enabled:
            tracking_ok = track.initialized and not track.lost
        else:
            tracking_ok = self.depth_valid

        return AimCommand(
            action=action,
            position=position,
            candidate=candidate if action is AimAction.aim else None,
            reset_depth=reset_depth,
            tracking_ok=tracking_ok,
            depth_ok=self.depth_valid,
        )