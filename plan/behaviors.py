# plan/behaviors.py
import logging
from dataclasses import dataclass
from typing import Optional

from geom.angles import angle_diff, clamp
from geom.bezier import bezier_point
from geom.collision import first_within
from geom.vectors import heading_to
from plan.bezier_planner import CurvePlan, CurvePlanner

logger = logging.getLogger(__name__)

CRUISE_SPEED = 10.0
DANGER_MARGIN = 70.0
MAX_TURN = 1.0


@dataclass(frozen=True)
class DriveCommand:
    speed: float
    turn_rate: float
    plan: Optional[CurvePlan] = None
    look_ahead: Optional[tuple] = None


class DriveToPointBehavior:
    """Pure-pursuit on a Bezier curve: aim at the curve point at the planner's t."""

    def __init__(self, planner: Optional[CurvePlanner] = None, cruise_speed=CRUISE_SPEED):
        self.planner = planner if planner is not None else CurvePlanner()
        self.cruise_speed = cruise_speed

    def output(self, vehicle_pos, vehicle_heading, target_pos, target_heading) -> DriveCommand:
        plan = self.planner.plan(vehicle_pos, vehicle_heading, target_pos, target_heading)
        if plan is None:
            # Sitting on the target: nothing to steer toward this tick
            return DriveCommand(self.cruise_speed, 0.0)

        look_ahead = bezier_point(*plan.control_points, plan.t)
        desired = heading_to(vehicle_pos, look_ahead)
        turn = clamp(angle_diff(desired, vehicle_heading), -MAX_TURN, MAX_TURN)
        return DriveCommand(self.cruise_speed, turn, plan, look_ahead)


class ObstacleAvoidanceBehavior:
    """
    Reactive avoidance. Returns a turn away from the first obstacle (in the
    given order) whose danger radius contains the vehicle, or None when no
    obstacle is that close. Only one obstacle is considered per call.
    """

    def __init__(self, danger_margin=DANGER_MARGIN):
        self.danger_margin = danger_margin

    def output(self, vehicle_pos, vehicle_heading, obstacles) -> Optional[float]:
        j, ob = first_within(vehicle_pos, obstacles, self.danger_margin)
        if ob is None:
            return None

        toward = heading_to(vehicle_pos, ob.position)
        turn = clamp(angle_diff(vehicle_heading, toward), -MAX_TURN, MAX_TURN)
        logger.debug("avoiding obstacle %d at %s: turn=%.3f", j, ob.position, turn)
        return turn
