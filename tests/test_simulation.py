import math

import pytest

from env.world import Obstacle, World
from plan.bezier_planner import PlannerConfig
from sim.simulation import SimConfig, Simulation
from vehicles.base import Pose, VehicleState

TARGET = Pose((0.0, 0.0), 0.0)


def make_sim(vehicle, target=TARGET, obstacles=(), **cfg):
    world = World(obstacles=obstacles, first_target=target, seed=1)
    sim = Simulation(world, SimConfig(**cfg))
    sim.vehicle = vehicle
    return sim


def test_arrival_at_exact_target_replaces_target():
    sim = make_sim(VehicleState((0.0, 0.0), 0.0, 0.0))
    res = sim.step(0.01)
    assert res.arrived
    assert sim.arrivals == 1
    assert sim.target is not TARGET
    assert sim.target != TARGET


def test_heading_mismatch_blocks_arrival():
    sim = make_sim(VehicleState((0.0, -49.0), 0.7, 0.0))
    res = sim.step(0.01)
    assert not res.arrived
    assert sim.target is TARGET


def test_distance_blocks_arrival():
    sim = make_sim(VehicleState((0.0, -51.0), 0.0, 0.0))
    assert not sim.step(0.001).arrived


def test_stationary_vehicle_keeps_heading():
    sim = make_sim(VehicleState((0.0, -400.0), 0.3, 0.0), cruise_speed=0.0,
                   obstacles=(Obstacle((0.0, -420.0), 10.0),))
    res = sim.step(0.1)
    assert res.turn_rate != 0.0
    assert sim.vehicle.heading == 0.3


def test_avoidance_overrides_drive():
    obstacle = Obstacle((-60.0, -300.0), 50.0)
    sim = make_sim(VehicleState((0.0, -300.0), 0.0, 5.0), obstacles=(obstacle,))
    res = sim.step(0.01)
    assert res.avoid_turn is not None
    assert res.turn_rate == res.avoid_turn
    assert res.turn_rate < 0.0


def test_no_obstacle_uses_drive_turn():
    sim = make_sim(VehicleState((300.0, -300.0), 0.0, 5.0))
    res = sim.step(0.01)
    assert res.avoid_turn is None
    assert res.turn_rate == res.command.turn_rate


def test_speed_ramps_toward_cruise():
    sim = make_sim(VehicleState((0.0, -400.0), 0.0, 0.0))
    sim.step(0.5)
    assert sim.vehicle.speed == pytest.approx(0.25)
    assert sim.vehicle.position[1] > -400.0


@pytest.mark.parametrize("dt", [-0.1, float("nan"), float("inf")])
def test_invalid_dt_rejected(dt):
    sim = make_sim(VehicleState((0.0, -400.0), 0.0, 0.0))
    with pytest.raises(ValueError):
        sim.step(dt)


def test_zero_dt_is_a_noop_for_pose():
    sim = make_sim(VehicleState((0.0, -400.0), 0.2, 3.0))
    sim.step(0.0)
    assert sim.vehicle == VehicleState((0.0, -400.0), 0.2, 3.0)


def test_snapshot_exposes_curve():
    sim = Simulation(World(seed=0))
    snap = sim.snapshot()
    assert snap.plan is not None
    assert snap.curve.shape == (101, 2)
    assert tuple(snap.curve[0]) == pytest.approx(sim.vehicle.position)
    assert tuple(snap.curve[-1]) == pytest.approx(sim.target.position)
    # snapshot is a copy
    snap.vehicle.speed = 99.0
    assert sim.vehicle.speed == 0.0


def test_snapshot_on_target_has_no_curve():
    sim = make_sim(VehicleState((0.0, 0.0), 0.0, 0.0))
    snap = sim.snapshot()
    assert snap.plan is None and snap.curve is None and snap.look_ahead is None


@pytest.mark.parametrize("planner", [PlannerConfig(), PlannerConfig.legacy()])
def test_long_run_stays_finite_and_reaches_targets(planner):
    sim = Simulation(World(seed=5), SimConfig(planner=planner))
    for _ in range(60 * 120):
        sim.step(1.0 / 60.0)
    v = sim.vehicle
    assert all(math.isfinite(c) for c in (*v.position, v.heading, v.speed))
    assert sim.ticks == 60 * 120
    assert sim.time == pytest.approx(120.0)
