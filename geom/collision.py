# geom/collision.py
# Proximity tests between a point and circular obstacles.
from geom.vectors import distance


def within_clearance(point, obstacle, clearance):
    """True if point is strictly closer than obstacle.radius + clearance to its center."""
    return distance(point, obstacle.position) < obstacle.radius + clearance


def first_within(point, obstacles, clearance):
    """
    Scan obstacles in the given order and return (index, obstacle) for the
    first one whose inflated radius contains point, or (None, None) if clear.
    """
    for j, ob in enumerate(obstacles):
        if within_clearance(point, ob, clearance):
            return j, ob
    return None, None


def clear_of_all(point, obstacles, clearance):
    j, _ = first_within(point, obstacles, clearance)
    return j is None
