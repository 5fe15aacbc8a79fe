"""
Collision detection and response for spheres in a cube centred on the origin.

Wall contacts flip one velocity component; sphere overlaps negate both
velocities. Nothing here separates overlapping spheres or conserves energy.
"""

from enum import IntEnum
from typing import List, Tuple

import numpy as np


class WallFace(IntEnum):
    """Container faces.

              *-------*
             /| 1(t) /|  5 (back)
            *-|-----* |  6 (right)
   (left) 2 | *-----|-*
            |/ 3(b) |/ 4 (front)
            *-------*
    """
    NONE = 0
    TOP = 1
    LEFT = 2
    BOTTOM = 3
    FRONT = 4
    BACK = 5
    RIGHT = 6


# face → velocity component it reverses
FACE_AXIS = {
    WallFace.RIGHT: 0, WallFace.LEFT: 0,
    WallFace.TOP: 1, WallFace.BOTTOM: 1,
    WallFace.BACK: 2, WallFace.FRONT: 2,
}


def detect_wall_collision(position, radius: float, size: float) -> WallFace:
    """First face the sphere crosses, checked right, left, top, bottom, back, front.

    Only one face is reported, so a corner hit flips a single axis.
    """
    half = size / 2
    x, y, z = position[0], position[1], position[2]
    if x + radius > half:
        return WallFace.RIGHT
    elif x - radius < -half:
        return WallFace.LEFT
    elif y + radius > half:
        return WallFace.TOP
    elif y - radius < -half:
        return WallFace.BOTTOM
    elif z + radius > half:
        return WallFace.BACK
    elif z - radius < -half:
        return WallFace.FRONT
    return WallFace.NONE


def resolve_wall_collision(position: np.ndarray, velocity: np.ndarray,
                           radius: float, size: float, face: WallFace):
    """In place: flip the reported face's axis, then clamp every axis."""
    if face == WallFace.NONE:
        return
    axis = FACE_AXIS[face]
    velocity[axis] = -velocity[axis]

    half = size / 2
    for k in range(3):
        if position[k] + radius > half:
            position[k] = half - radius
        elif position[k] - radius < -half:
            position[k] = -half + radius


def detect_particle_collision(p1, p2, r1: float, r2: float) -> bool:
    distance = np.linalg.norm(np.asarray(p1, dtype=np.float64)
                              - np.asarray(p2, dtype=np.float64))
    return bool(distance < r1 + r2)


def find_particle_collisions(positions: np.ndarray,
                             radii: np.ndarray) -> List[Tuple[int, int]]:
    """All overlapping pairs (i, j), i < j, in ascending order."""
    n = len(radii)
    pairs = []
    for i in range(n - 1):
        for j in range(i + 1, n):
            if detect_particle_collision(positions[i], positions[j],
                                         radii[i], radii[j]):
                pairs.append((i, j))
    return pairs


def resolve_particle_collisions(velocities: np.ndarray,
                                pairs: List[Tuple[int, int]]):
    # A sphere hit twice in one pass is negated twice and ends unchanged.
    for i, j in pairs:
        velocities[i] = -velocities[i]
        velocities[j] = -velocities[j]
