"""
world.py
Scene for the tracktor steering demo.

Holds the static circular obstacles, the vehicle's starting pose and the
current target pose. New targets are drawn by rejection sampling inside a
square arena, keeping clear of every obstacle; the sampler is capped so an
overcrowded arena can never hang the loop.
"""
import logging
import math
import random
from dataclasses import dataclass
from typing import Tuple

from geom.angles import normalize_angle
from geom.collision import clear_of_all
from vehicles.base import Pose, VehicleState

logger = logging.getLogger(__name__)


# ========================
# Global configuration
# ========================

ARENA_HALF_SIZE = 500.0              # targets are drawn in [-500, 500]^2
TARGET_CLEARANCE = 200.0             # keep targets this far outside obstacle radii
TARGET_HEADING_SPREAD = math.pi / 2  # new heading = old heading + U(-spread, spread)
MAX_TARGET_TRIES = 1000

START_POSITION = (-300.0, -300.0)
START_HEADING = math.pi
START_TARGET = Pose((400.0, 400.0), math.pi)


@dataclass(frozen=True)
class Obstacle:
    position: Tuple[float, float]
    radius: float


DEFAULT_OBSTACLES = (
    Obstacle((200.0, 200.0), 100.0),
    Obstacle((-200.0, 200.0), 100.0),
)


# ========================
# Helper functions
# ========================

def pick_target(current_target, obstacles, rng,
                half_size=ARENA_HALF_SIZE,
                clearance=TARGET_CLEARANCE,
                heading_spread=TARGET_HEADING_SPREAD,
                uniform_heading=False,
                max_tries=MAX_TARGET_TRIES):
    """
    Draw the next target pose.

    - Position uniform in [-half_size, half_size]^2, rejected if within
      radius + clearance of any obstacle.
    - Heading is the current target heading plus U(-spread, spread), or
      U(0, 2pi) when uniform_heading is set.
    - After max_tries rejections the last candidate is returned as is.
    """
    if max_tries < 1:
        raise ValueError("max_tries must be >= 1")

    for _ in range(max_tries):
        position = (rng.uniform(-half_size, half_size), rng.uniform(-half_size, half_size))
        if uniform_heading:
            heading = rng.uniform(0.0, 2.0 * math.pi)
        else:
            heading = current_target.heading + rng.uniform(-heading_spread, heading_spread)
        if clear_of_all(position, obstacles, clearance):
            return Pose(position, normalize_angle(heading))

    logger.warning("no obstacle-free target after %d tries; using %s anyway", max_tries, position)
    return Pose(position, normalize_angle(heading))


# ========================
# World class
# ========================

class World:
    """Obstacles, start pose and target sampler for one run."""

    def __init__(self,
                 obstacles=DEFAULT_OBSTACLES,
                 start_position=START_POSITION,
                 start_heading=START_HEADING,
                 first_target=START_TARGET,
                 seed=None,
                 uniform_heading=False):
        self.obstacles = tuple(obstacles)
        self.start_position = start_position
        self.start_heading = start_heading
        self.first_target = first_target
        self.uniform_heading = uniform_heading
        self.rng = random.Random(seed)

    def initial_state(self):
        return VehicleState(self.start_position, self.start_heading, 0.0)

    def next_target(self, current_target):
        return pick_target(current_target, self.obstacles, self.rng,
                           uniform_heading=self.uniform_heading)
