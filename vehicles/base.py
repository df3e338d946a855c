# vehicles/base.py
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Pose:
    """Position (x, y) plus heading in radians (0 faces +y). Heading is not wrapped."""
    position: Tuple[float, float]
    heading: float


@dataclass
class VehicleState:
    """Pose plus scalar speed. Owned and written by the simulation only."""
    position: Tuple[float, float]
    heading: float
    speed: float = 0.0
