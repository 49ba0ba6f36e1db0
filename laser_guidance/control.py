"""Runtime control commands and the state they switch while the guidance loop runs."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from .overlay import MIN_DRAW_SCORE
from .types import ModelCandidate, TargetObservation

PURPLE_CLASS_ID = 0
RED_CLASS_ID = 1
BLUE_CLASS_ID = 2
ANY_ENEMY = -1


class ControlCommand(Enum):
    """Commands accepted on the control pipe, matched by prefix in this order."""

    stream_on = "stream on"
    stream_off = "stream off"
    record_on = "record on"
    record_off = "record off"
    enemy_red = "enemy red"
    enemy_blue = "enemy blue"
    enemy_auto = "enemy auto"
    backend_tensorrt = "backend tensorrt"
    backend_onnx = "backend onnx"
    ekf_on = "ekf on"
    ekf_off = "ekf off"
    quit = "quit"


def parse_command(text: str) -> ControlCommand | None:
    """Return the first command whose text starts ``text``, or None if none does."""
    if not text:
        return None
    for command in ControlCommand:
        if text.startswith(command.value):
            return command
    return None


def filter_candidates(
    candidates: Iterable[ModelCandidate], enemy_class_id: int
) -> list[ModelCandidate]:
    """Keep purple candidates and those of the enemy class; keep all if no enemy is set."""
    if enemy_class_id < 0:
        return list(candidates)
    return [
        c for c in candidates if c.class_id in (PURPLE_CLASS_ID, enemy_class_id)
    ]


def top_purple_detected(observation: TargetObservation) -> bool:
    """True when the best candidate of a detected observation is a confident purple one."""
    if not observation.detected or not observation.candidates:
        return False
    top = observation.candidates[0]
    return top.class_id == PURPLE_CLASS_ID and top.score >= MIN_DRAW_SCORE


@dataclass
class ControlState:
    """Switches that control commands change while the main loop runs."""

    running: bool = True
    streaming: bool = False
    recording: bool = False
    can_record: bool = True
    enemy_class_id: int = ANY_ENEMY
    tensorrt_available: bool = False
    onnx_available: bool = False
    using_tensorrt: bool = False
    ekf_enabled: bool = True

    def apply(self, command: ControlCommand) -> str | None:
        """Apply a command; return the log line it produces, or None if it changed nothing."""
        if command is ControlCommand.stream_on:
            if self.streaming:
                return None
            self.streaming = True
            return "FIFO: streaming ON"
        if command is ControlCommand.stream_off:
            self.streaming = False
            return "FIFO: streaming OFF"
        if command is ControlCommand.record_on:
            if self.recording or not self.can_record:
                return None
            self.recording = True
            return "FIFO: recording ON"
        if command is ControlCommand.record_off:
            if not self.recording:
                return None
            self.recording = False
            return "FIFO: recording OFF"
        if command is ControlCommand.enemy_red:
            self.enemy_class_id = RED_CLASS_ID
            return "FIFO: enemy → RED"
        if command is ControlCommand.enemy_blue:
            self.enemy_class_id = BLUE_CLASS_ID
            return "FIFO: enemy → BLUE"
        if command is ControlCommand.enemy_auto:
            self.enemy_class_id = ANY_ENEMY
            return "FIFO: enemy → AUTO (all classes)"
        if command is ControlCommand.backend_tensorrt:
            if not self.tensorrt_available:
                return None
            self.using_tensorrt = True
            return "FIFO: backend → TensorRT"
        if command is ControlCommand.backend_onnx:
            if not self.onnx_available:
                return None
            self.using_tensorrt = False
            return "FIFO: backend → ONNX"
        if command is ControlCommand.ekf_on:
            self.ekf_enabled = True
            return "FIFO: EKF ON"
        if command is ControlCommand.ekf_off:
            self.ekf_enabled = False
            return "FIFO: EKF OFF (raw detection)"
        if command is ControlCommand.quit:
            self.running = False
            return None
        raise ValueError(f"unsupported command: {command}")