# particle.py
"""
Defines the particles ("balls") of the simulation and their color animation.

This module holds the per-particle state (position, velocity, radius and a
color model) together with the two per-particle operations of a tick:
advancing a particle on its own and resolving a collision between two of them.
"""
import logging
import colorsys
from collections import namedtuple
from typing import Dict, Any, List, Tuple

import numpy as np

# --- Data Contracts ---
#
# Bounds(left, right, bottom, top):
#   - World-space rectangle, y axis pointing up, origin at the window center.
#
# class Particle:
#   - advance(self, bounds: Bounds) -> None:
#     - Side Effects: position += velocity; velocity components are negated
#       when the new position is outside the bounds (position is NOT clamped);
#       the color model advances by one step.
#     - Invariants: Cannot fail.
#
#   - resolve_collision(self, other: Particle) -> bool:
#     - Outputs: True if the two particles overlapped and were separated.
#     - Side Effects: Exchanges the along-normal velocity components and
#       pushes both particles apart by half the overlap each.
#     - Invariants: Never raises for numeric edge cases. Coincident centers
#       use FALLBACK_NORMAL.
#
# spawn_particles(params: Dict[str, Any], bounds: Bounds, rng) -> List[Particle]

class Bounds(namedtuple('Bounds', ['left', 'right', 'bottom', 'top'])):
    __slots__ = ()

    @classmethod
    def centered(cls, width: float, height: float) -> "Bounds":
        """Bounds of a width x height window with the origin at its center."""
        half_w, half_h = width / 2.0, height / 2.0
        return cls(-half_w, half_w, -half_h, half_h)


# Used when two particles share the exact same center.
FALLBACK_NORMAL = np.array([1.0, 0.0])

COLOR_MODELS = ("per_channel", "hue")


class PerChannelDrift:
    """
    Red, green and blue drift independently between 0 and 1.

    Each channel moves by its speed in its own direction every step and turns
    around once it reaches either end, producing a triangle wave per channel.
    """
    def __init__(self, values, speeds, directions):
        self.values = np.array(values, dtype=np.float64)
        self.speeds = np.array(speeds, dtype=np.float64)
        self.directions = np.array(directions, dtype=np.float64)

    def advance_color(self) -> None:
        self.values += self.speeds * self.directions
        # Reflect, never clamp: the value may sit slightly past the edge
        # for one step before heading back.
        at_edge = (self.values <= 0.0) | (self.values >= 1.0)
        self.directions[at_edge] *= -1.0

    @property
    def rgb(self) -> Tuple[float, float, float]:
        r, g, b = self.values
        return float(r), float(g), float(b)


class HueDrift:
    """
    A single hue cycling around the color wheel at a fixed saturation/value.

    The stored hue is never wrapped and may grow without bound in either
    direction; it is wrapped onto [0, 1) only when converted to RGB.
    """
    def __init__(self, hue: float, speed: float, direction: float,
                 saturation: float = 1.0, value: float = 1.0):
        self.hue = float(hue)
        self.speed = float(speed)
        self.direction = float(direction)
        self.saturation = float(saturation)
        self.value = float(value)

    def advance_color(self) -> None:
        self.hue += self.speed * self.direction

    @property
    def rgb(self) -> Tuple[float, float, float]:
        return colorsys.hsv_to_rgb(self.hue % 1.0, self.saturation, self.value)


class Particle:
    """
    A single ball: kinematic state, a fixed radius and an animated color.
    """
    def __init__(self, position, velocity, radius: float, color):
        self.position = np.array(position, dtype=np.float64)
        self.velocity = np.array(velocity, dtype=np.float64)
        self.radius = float(radius)
        self.color = color

    def advance(self, bounds: Bounds) -> None:
        """
        Moves the particle one tick, bounces it off the bounds and animates
        its color.
        """
        self.position += self.velocity

        x, y = self.position
        if x < bounds.left or x > bounds.right:
            self.velocity[0] = -self.velocity[0]
        if y < bounds.bottom or y > bounds.top:
            self.velocity[1] = -self.velocity[1]

        self.color.advance_color()

    def resolve_collision(self, other: "Particle") -> bool:
        """
        Resolves an overlap with another particle as an equal-mass elastic
        collision along the line of centers.

        Args:
            other (Particle): A different particle.

        Returns:
            bool: True if the particles overlapped, False otherwise.
        """
        if other is self:
            raise ValueError("A particle cannot collide with itself.")

        offset = self.position - other.position
        distance = float(np.hypot(offset[0], offset[1]))
        radii_sum = self.radius + other.radius

        if distance >= radii_sum:
            return False

        if distance > 0.0:
            normal = offset / distance
        else:
            normal = FALLBACK_NORMAL.copy()
            logging.debug("Coincident particle centers, using fallback collision normal.")

        # Along-normal velocity components; the tangential parts stay untouched.
        self_normal_velocity = np.dot(self.velocity, normal) * normal
        other_normal_velocity = np.dot(other.velocity, normal) * normal

        self.velocity += other_normal_velocity - self_normal_velocity
        other.velocity += self_normal_velocity - other_normal_velocity

        overlap = radii_sum - distance
        correction = normal * (overlap / 2.0)
        self.position += correction
        other.position -= correction
        return True

    def __repr__(self):
        return (
            f"Particle(position={self.position.tolist()}, "
            f"velocity={self.velocity.tolist()}, radius={self.radius})"
        )


def _random_sign(rng: np.random.Generator, size: int) -> np.ndarray:
    return np.where(rng.random(size) < 0.5, -1.0, 1.0)


def spawn_particles(params: Dict[str, Any], bounds: Bounds, rng: np.random.Generator) -> List[Particle]:
    """
    Creates the particles for a new run.

    Positions are uniform inside the bounds, velocities point in a uniformly
    random direction at the configured speed. Colors follow the configured
    color model: random channels with random drift signs, or hues spread
    evenly around the color wheel.

    Args:
        params (Dict[str, Any]): The "simulation_parameters" section of the config.
        bounds (Bounds): Region the particles are spawned in.
        rng (np.random.Generator): Source of all randomness for the run.

    Returns:
        List[Particle]: The new particles, in collision-sweep order.
    """
    count = params.get('particle_count', 5)
    speed = params.get('ball_speed', 3.0)
    radius = params.get('particle_radius', 20.0)
    color_model = params.get('color_model', 'per_channel')

    if color_model not in COLOR_MODELS:
        msg = (
            f"Configuration error: Unknown color_model '{color_model}'. "
            f"Expected one of {COLOR_MODELS}."
        )
        logging.critical(msg)
        raise ValueError(msg)
    if count < 1:
        msg = f"Configuration error: particle_count must be at least 1, got {count}."
        logging.critical(msg)
        raise ValueError(msg)
    if speed < 0:
        msg = f"Configuration error: ball_speed must not be negative, got {speed}."
        logging.critical(msg)
        raise ValueError(msg)

    particles = []
    for i in range(count):
        position = rng.uniform(
            low=[bounds.left, bounds.bottom],
            high=[bounds.right, bounds.top]
        )
        angle = rng.uniform(0.0, 2.0 * np.pi)
        velocity = np.array([np.cos(angle), np.sin(angle)]) * speed

        if color_model == 'per_channel':
            channel_speed = params.get('color_change_speed', 0.005)
            color = PerChannelDrift(
                values=rng.random(3),
                speeds=np.full(3, channel_speed),
                directions=_random_sign(rng, 3)
            )
        else:
            color = HueDrift(
                hue=i / count,
                speed=params.get('hue_change_speed', 0.001),
                direction=1.0,
                saturation=params.get('hue_saturation', 1.0),
                value=params.get('hue_value', 1.0)
            )

        particles.append(Particle(position, velocity, radius, color))

    logging.info(
        f"Spawned {count} particles (speed={speed}, radius={radius}, "
        f"color_model={color_model})."
    )
    logging.debug(f"Initial particles: {particles}")
    return particles
