"""Deterministic spring solver shared by the scale, spring and bounce effects.

Models a unit mass-spring-damper released at rest one unit away from its
target and returns how far it has travelled towards the target. The
response is evaluated in closed form at ``t = frame / fps`` seconds, so the
same inputs always give the same float regardless of how many frames were
rendered before.

- Damping ratio below 1: under-damped; overshoots 1, then settles.
- Damping ratio at or above 1: follows the critically damped response at
  the natural frequency; rises monotonically to 1 with no overshoot.
"""

from __future__ import annotations

import math

DEFAULT_DAMPING = 10.0
DEFAULT_STIFFNESS = 100.0
DEFAULT_MASS = 1.0


def damping_ratio(damping: float, stiffness: float, mass: float) -> float:
    """Return zeta = c / (2 * sqrt(k * m))."""
    return damping / (2 * math.sqrt(stiffness * mass))


def spring_progress(
    frame: float,
    fps: float,
    *,
    damping: float = DEFAULT_DAMPING,
    stiffness: float = DEFAULT_STIFFNESS,
    mass: float = DEFAULT_MASS,
) -> float:
    """Progress of the spring towards 1 after *frame* frames.

    Args:
        frame: Frames elapsed since the spring was released. Values <= 0
            return exactly 0.
        fps: Frames per second of the composition.
        damping: Damping coefficient c (> 0).
        stiffness: Spring constant k (> 0).
        mass: Mass m (> 0).

    Returns:
        Progress value; starts at 0 and converges to 1.
    """
    if fps <= 0:
        raise ValueError(f"fps must be > 0, got {fps}")
    if damping <= 0 or stiffness <= 0 or mass <= 0:
        raise ValueError("damping, stiffness and mass must all be > 0")
    if frame <= 0:
        return 0.0

    t = frame / fps
    omega0 = math.sqrt(stiffness / mass)
    zeta = damping_ratio(damping, stiffness, mass)

    # x0 = remaining distance at release, v0 = 0
    if zeta < 1:
        omega1 = omega0 * math.sqrt(1 - zeta**2)
        envelope = math.exp(-zeta * omega0 * t)
        remaining = envelope * (
            (zeta * omega0 / omega1) * math.sin(omega1 * t) + math.cos(omega1 * t)
        )
    else:
        remaining = math.exp(-omega0 * t) * (1 + omega0 * t)

    return 1 - remaining
