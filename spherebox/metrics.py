import numpy as np


def compute_energy(velocities, masses=None):
    """velocities (T, N, 3) → total kinetic energy per frame (T,)"""
    if masses is None:
        masses = np.ones(velocities.shape[1])
    return (0.5 * masses[None, :, None] * velocities ** 2).sum(axis=(1, 2))


def compute_momentum(velocities, masses=None):
    if masses is None:
        masses = np.ones(velocities.shape[1])
    p = (masses[None, :, None] * velocities).sum(axis=1)
    return np.linalg.norm(p, axis=1)


def wall_protrusion(positions, radii, container_sizes):
    """Largest distance any sphere surface sits outside the cube, per frame (T,).

    Zero when every sphere is inside. container_sizes is a scalar or (T,).
    """
    half = np.broadcast_to(np.asarray(container_sizes, dtype=np.float64),
                           positions.shape[:1])[:, None, None] / 2
    outside = np.abs(positions) + radii[None, :, None] - half
    if outside.shape[1] == 0:
        return np.zeros(positions.shape[0])
    return np.clip(outside.max(axis=(1, 2)), 0.0, None)


def count_overlaps(positions, radii):
    """Number of overlapping sphere pairs per frame (T,)."""
    n = positions.shape[1]
    if n < 2:
        return np.zeros(positions.shape[0], dtype=int)
    i, j = np.triu_indices(n, k=1)
    dist = np.linalg.norm(positions[:, i] - positions[:, j], axis=-1)
    return (dist < (radii[i] + radii[j])[None, :]).sum(axis=1)
