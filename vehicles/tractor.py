# vehicles/tractor.py
import math

from geom.angles import clamp
from vehicles.base import VehicleState

TRACKTOR_WIDTH = 20.0
TRACKTOR_LENGTH = 35.0

MAX_SPEED_DELTA = 0.5   # per second, per unit of speed error
LINEAR_SCALE = 50.0     # world units per second per unit of speed
TURN_GAIN = 1.0


class Tractor:
    def __init__(self, width=TRACKTOR_WIDTH, length=TRACKTOR_LENGTH,
                 max_speed_delta=MAX_SPEED_DELTA, linear_scale=LINEAR_SCALE,
                 turn_gain=TURN_GAIN):
        self.width = width
        self.length = length
        self.max_speed_delta = max_speed_delta
        self.linear_scale = linear_scale
        self.turn_gain = turn_gain

    def step(self, state: VehicleState, commanded_speed: float, turn_rate: float, dt: float) -> VehicleState:
        """
        Integrate one tick and return the new state.
        state:           current pose and speed
        commanded_speed: speed the behavior asks for
        turn_rate:       steering command in [-1, 1]
        dt:              elapsed time [s]

        Speed approaches the command at a bounded rate. Turning is scaled by
        the updated speed, so a vehicle at rest does not rotate.
        """
        speed_delta = clamp(commanded_speed - state.speed, -self.max_speed_delta, self.max_speed_delta)
        speed = state.speed + speed_delta * dt

        heading = state.heading + turn_rate * dt * speed * self.turn_gain

        step_len = speed * dt * self.linear_scale
        x = state.position[0] - step_len * math.sin(heading)
        y = state.position[1] + step_len * math.cos(heading)
        return VehicleState((x, y), heading, speed)

    def rollout(self, state, commanded_speed, turn_rate, dt, steps):
        """Apply the same command for several ticks; returns all states including the first."""
        states = [state]
        for _ in range(steps):
            state = self.step(state, commanded_speed, turn_rate, dt)
            states.append(state)
        return states
