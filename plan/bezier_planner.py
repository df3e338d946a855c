# plan/bezier_planner.py
"""
Cubic Bezier curve from the vehicle pose to the target pose, plus the
look-ahead parameter t at which the vehicle should aim.

P0 is the vehicle, P3 the target. P1 extends forward from the vehicle along
its heading; P2 extends backward from the target along its heading, so the
curve arrives facing the target heading. When the two headings are close to
opposite the naive handles make the curve loop back on itself, and a
reversal correction is applied (two policies, see PlannerConfig).
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from geom.angles import angle_diff, clamp, normalize_angle
from geom.vectors import add, bearing, distance, heading_vector, scale, sub, unit

logger = logging.getLogger(__name__)


# ========================
# Global configuration
# ========================

NEAR_HANDLE_LENGTH = 200.0
FAR_HANDLE_LENGTH = 500.0            # fixed approach handle (final variant)
ADAPTIVE_FAR_HANDLE_MIN = 400.0      # max(dist/2, this) when the far handle is adaptive
FOLLOW_POINT_DIST = 250.0
T_MIN = 0.1
T_MAX = 1.0

# Below this vehicle-target distance there is no curve to follow
MIN_PLAN_DISTANCE = 1e-9

REVERSAL_ANGULAR = "angular"
REVERSAL_DISTANCE_GATED = "distance_gated"
REVERSAL_POLICIES = (REVERSAL_ANGULAR, REVERSAL_DISTANCE_GATED)

# "angular": |heading diff| above threshold -> push P1 toward the target, fixed t
REVERSAL_THRESHOLD = math.pi / 1.5
REVERSAL_OFFSET = 100.0
REVERSAL_T = 0.70

# "distance_gated": pi - |heading diff| below threshold -> twist both handles;
# additionally fix t when the target is close
GATED_HANDLE_THRESHOLD = 1.2
GATED_HANDLE_TWIST = math.pi / 4.0
GATED_FAR_HANDLE_SCALE = 1.2
GATED_T_THRESHOLD = 1.3
GATED_DISTANCE = 280.0
GATED_T = 0.5


@dataclass(frozen=True)
class PlannerConfig:
    near_handle_length: float = NEAR_HANDLE_LENGTH
    far_handle_length: Optional[float] = FAR_HANDLE_LENGTH  # None -> distance-adaptive
    adaptive_far_handle_min: float = ADAPTIVE_FAR_HANDLE_MIN
    follow_point_dist: float = FOLLOW_POINT_DIST
    t_min: float = T_MIN
    t_max: float = T_MAX
    reversal_policy: str = REVERSAL_ANGULAR
    reversal_threshold: float = REVERSAL_THRESHOLD
    reversal_offset: float = REVERSAL_OFFSET
    reversal_t: float = REVERSAL_T
    gated_handle_threshold: float = GATED_HANDLE_THRESHOLD
    gated_handle_twist: float = GATED_HANDLE_TWIST
    gated_far_handle_scale: float = GATED_FAR_HANDLE_SCALE
    gated_t_threshold: float = GATED_T_THRESHOLD
    gated_distance: float = GATED_DISTANCE
    gated_t: float = GATED_T

    def __post_init__(self):
        if self.reversal_policy not in REVERSAL_POLICIES:
            raise ValueError(f"unknown reversal policy {self.reversal_policy!r}; "
                             f"expected one of {REVERSAL_POLICIES}")
        if self.near_handle_length <= 0:
            raise ValueError("near_handle_length must be positive")
        if self.far_handle_length is not None and self.far_handle_length <= 0:
            raise ValueError("far_handle_length must be positive or None")
        if self.follow_point_dist <= 0:
            raise ValueError("follow_point_dist must be positive")
        if not (0.0 <= self.t_min <= self.t_max <= 1.0):
            raise ValueError(f"need 0 <= t_min <= t_max <= 1, got {self.t_min}, {self.t_max}")

    @classmethod
    def legacy(cls, **overrides):
        """Earlier behavior: adaptive far handle and the distance-gated reversal test."""
        params = dict(far_handle_length=None, reversal_policy=REVERSAL_DISTANCE_GATED)
        params.update(overrides)
        return cls(**params)


@dataclass(frozen=True)
class CurvePlan:
    control_points: Tuple[Tuple[float, float], ...]  # (P0, P1, P2, P3)
    t: float
    distance: float
    reversal: bool = False


class CurvePlanner:
    def __init__(self, config: Optional[PlannerConfig] = None):
        self.config = config if config is not None else PlannerConfig()

    def far_handle(self, dist):
        cfg = self.config
        if cfg.far_handle_length is None:
            return max(dist / 2.0, cfg.adaptive_far_handle_min)
        return cfg.far_handle_length

    def plan(self, vehicle_pos, vehicle_heading, target_pos, target_heading) -> Optional[CurvePlan]:
        """
        Build the control polygon and look-ahead t.
        Returns None when the vehicle sits on the target (no direction to plan in).
        """
        cfg = self.config
        dist = distance(vehicle_pos, target_pos)
        if dist <= MIN_PLAN_DISTANCE:
            return None

        far = self.far_handle(dist)
        p0 = vehicle_pos
        p3 = target_pos
        p1 = add(p0, heading_vector(cfg.near_handle_length, vehicle_heading))
        p2 = add(p3, heading_vector(far, target_heading + math.pi))
        t = clamp(cfg.follow_point_dist / dist, cfg.t_min, cfg.t_max)

        diff = angle_diff(vehicle_heading, target_heading)
        reversal = False

        if cfg.reversal_policy == REVERSAL_ANGULAR:
            if abs(diff) > cfg.reversal_threshold:
                reversal = True
                p1 = add(p1, scale(unit(sub(p3, p0)), cfg.reversal_offset))
                t = cfg.reversal_t
        else:
            near_reversal = math.pi - abs(diff)
            if near_reversal < cfg.gated_handle_threshold:
                reversal = True
                twist = -cfg.gated_handle_twist if diff < 0 else cfg.gated_handle_twist
                base = normalize_angle(bearing(p0, p3) + math.pi / 2.0)
                p1 = add(p0, heading_vector(cfg.near_handle_length, base - twist))
                p2 = add(p3, heading_vector(far * cfg.gated_far_handle_scale,
                                            target_heading + math.pi + twist))
            if dist <= cfg.gated_distance and near_reversal < cfg.gated_t_threshold:
                reversal = True
                t = cfg.gated_t

        if reversal:
            logger.debug("reversal branch: diff=%.3f dist=%.1f t=%.2f", diff, dist, t)

        return CurvePlan((p0, p1, p2, p3), t, dist, reversal)
