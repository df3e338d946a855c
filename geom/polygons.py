# geom/polygons.py
import math


def oriented_box(center, length, width, theta):
    """
    Return a 4-vertex polygon for a rectangle centered at 'center' with heading 'theta'.
    Long side = length (along theta), short side = width.
    """
    x, y = center
    L = length / 2.0
    W = width / 2.0
    c, s = math.cos(theta), math.sin(theta)
    corners = [(L, W), (L, -W), (-L, -W), (-L, W)]
    return [(x + c*px - s*py, y + s*px + c*py) for (px, py) in corners]


def vehicle_footprint(position, heading, length, width):
    """
    Footprint of a vehicle whose heading 0 faces +y.
    oriented_box measures theta from +x, hence the quarter-turn shift.
    """
    return oriented_box(position, length, width, heading + math.pi / 2.0)
