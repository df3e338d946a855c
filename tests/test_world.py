import math
import random

import pytest

from env.world import (ARENA_HALF_SIZE, DEFAULT_OBSTACLES, TARGET_CLEARANCE, Obstacle, World,
                       pick_target)
from geom.angles import angle_diff
from geom.vectors import distance
from vehicles.base import Pose


def test_targets_clear_of_obstacles_and_in_arena():
    rng = random.Random(3)
    target = Pose((0.0, 0.0), 0.0)
    for _ in range(200):
        new = pick_target(target, DEFAULT_OBSTACLES, rng)
        assert abs(new.position[0]) <= ARENA_HALF_SIZE
        assert abs(new.position[1]) <= ARENA_HALF_SIZE
        for ob in DEFAULT_OBSTACLES:
            assert distance(new.position, ob.position) >= ob.radius + TARGET_CLEARANCE
        assert abs(angle_diff(new.heading, target.heading)) <= math.pi / 2 + 1e-9
        assert -math.pi < new.heading <= math.pi
        target = new


def test_uniform_heading_variant_in_range():
    rng = random.Random(11)
    for _ in range(50):
        new = pick_target(Pose((0.0, 0.0), 0.0), [], rng, uniform_heading=True)
        assert -math.pi < new.heading <= math.pi


def test_infeasible_arena_falls_back(caplog):
    # one obstacle covering the whole arena
    blocker = [Obstacle((0.0, 0.0), 2000.0)]
    with caplog.at_level("WARNING", logger="env.world"):
        new = pick_target(Pose((0.0, 0.0), 0.0), blocker, random.Random(0), max_tries=25)
    assert abs(new.position[0]) <= ARENA_HALF_SIZE
    assert "no obstacle-free target" in caplog.text


def test_pick_target_rejects_bad_cap():
    with pytest.raises(ValueError):
        pick_target(Pose((0.0, 0.0), 0.0), [], random.Random(0), max_tries=0)


def test_world_seed_reproducible():
    a = World(seed=42)
    b = World(seed=42)
    ta = a.next_target(a.first_target)
    tb = b.next_target(b.first_target)
    assert ta == tb


def test_world_defaults():
    w = World()
    state = w.initial_state()
    assert state.position == (-300.0, -300.0)
    assert state.heading == math.pi
    assert state.speed == 0.0
    assert w.first_target == Pose((400.0, 400.0), math.pi)
    assert len(w.obstacles) == 2
