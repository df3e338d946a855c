# sim/simulation.py
import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from env.world import World
from geom.angles import angle_diff
from geom.bezier import bezier_point, sample_curve
from geom.vectors import distance
from plan.behaviors import (CRUISE_SPEED, DANGER_MARGIN, DriveCommand,
                            DriveToPointBehavior, ObstacleAvoidanceBehavior)
from plan.bezier_planner import CurvePlan, CurvePlanner, PlannerConfig
from vehicles.base import Pose, VehicleState
from vehicles.tractor import Tractor

logger = logging.getLogger(__name__)

ARRIVAL_DISTANCE = 50.0
ARRIVAL_HEADING_TOL = 0.65


@dataclass(frozen=True)
class SimConfig:
    planner: PlannerConfig = field(default_factory=PlannerConfig)
    cruise_speed: float = CRUISE_SPEED
    danger_margin: float = DANGER_MARGIN
    arrival_distance: float = ARRIVAL_DISTANCE
    arrival_heading_tol: float = ARRIVAL_HEADING_TOL


@dataclass(frozen=True)
class StepResult:
    command: DriveCommand
    avoid_turn: Optional[float]
    turn_rate: float
    arrived: bool


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of one tick for drawing and logging."""
    vehicle: VehicleState
    target: Pose
    obstacles: Tuple
    plan: Optional[CurvePlan]
    curve: Optional[np.ndarray]
    look_ahead: Optional[tuple]


class Simulation:
    """
    Owns the vehicle, the target and the obstacle set. Behaviors only read
    values handed to them; step() is the single writer.
    """

    def __init__(self, world: Optional[World] = None, config: Optional[SimConfig] = None,
                 tractor: Optional[Tractor] = None):
        self.world = world if world is not None else World()
        self.config = config if config is not None else SimConfig()
        self.tractor = tractor if tractor is not None else Tractor()

        self.drive = DriveToPointBehavior(CurvePlanner(self.config.planner), self.config.cruise_speed)
        self.avoidance = ObstacleAvoidanceBehavior(self.config.danger_margin)

        self.vehicle = self.world.initial_state()
        self.target = self.world.first_target
        self.obstacles = self.world.obstacles

        self.time = 0.0
        self.ticks = 0
        self.arrivals = 0

    def arrived(self):
        v, tgt = self.vehicle, self.target
        return (distance(v.position, tgt.position) < self.config.arrival_distance
                and abs(angle_diff(v.heading, tgt.heading)) < self.config.arrival_heading_tol)

    def step(self, dt) -> StepResult:
        if not math.isfinite(dt) or dt < 0:
            raise ValueError(f"dt must be a finite non-negative number, got {dt!r}")

        v, tgt = self.vehicle, self.target
        cmd = self.drive.output(v.position, v.heading, tgt.position, tgt.heading)
        avoid = self.avoidance.output(v.position, v.heading, self.obstacles)
        turn = avoid if avoid is not None else cmd.turn_rate

        self.vehicle = self.tractor.step(v, cmd.speed, turn, dt)
        self.time += dt
        self.ticks += 1

        arrived = self.arrived()
        if arrived:
            self.arrivals += 1
            # Whole Pose swapped in one assignment
            self.target = self.world.next_target(self.target)
            logger.info("arrived at target #%d (t=%.2fs); next target %s heading %.2f",
                        self.arrivals, self.time, self.target.position, self.target.heading)

        return StepResult(cmd, avoid, turn, arrived)

    def snapshot(self) -> Snapshot:
        v, tgt = self.vehicle, self.target
        plan = self.drive.planner.plan(v.position, v.heading, tgt.position, tgt.heading)
        curve = sample_curve(plan.control_points) if plan is not None else None
        look_ahead = bezier_point(*plan.control_points, plan.t) if plan is not None else None
        return Snapshot(
            vehicle=VehicleState(v.position, v.heading, v.speed),
            target=tgt,
            obstacles=self.obstacles,
            plan=plan,
            curve=curve,
            look_ahead=look_ahead,
        )
