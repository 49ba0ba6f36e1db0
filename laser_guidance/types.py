"""Frame, detection and lidar records shared across the guidance pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

Point2f = tuple[float, float]
Point3f = tuple[float, float, float]
Rect2f = tuple[float, float, float, float]


@dataclass
class Frame:
    """A captured image and the monotonic time (seconds) it was taken."""

    image: Any = None
    timestamp: float = 0.0


@dataclass
class ModelCandidate:
    """One detection produced by a model backend.

    ``bbox`` is ``(x, y, width, height)`` in pixels.
    """

    score: float = 0.0
    class_id: int = -1
    bbox: Rect2f = (0.0, 0.0, 0.0, 0.0)
    center: Point2f = (-1.0, -1.0)


@dataclass
class LidarPoint:
    """A single lidar return in millimetres, with its scan grid position."""

    x_mm: float = 0.0
    y_mm: float = 0.0
    z_mm: float = 0.0
    intensity: float = 0.0
    row: int = -1
    col: int = -1


@dataclass
class LidarFrame:
    """A set of lidar points sharing one timestamp in nanoseconds."""

    points: list[LidarPoint] = field(default_factory=list)
    timestamp_ns: int = 0


@dataclass
class TargetObservation:
    """What the vision stage reports about the target in one frame."""

    detected: bool = False
    center: Point2f = (-1.0, -1.0)
    contour: list[Point2f] = field(default_factory=list)
    brightness: float = 0.0
    candidates: list[ModelCandidate] = field(default_factory=list)
    lidar_frame: LidarFrame = field(default_factory=LidarFrame)