"""
3D bounce engine — spheres in a cube, sign-flip collision response.

- N spheres, radius derived from mass and a fixed density
- Cube of edge `container_size` centred on the origin, resizable between ticks
- Wall hit: flip one velocity component, clamp back inside
- Sphere overlap: negate both velocities, no separation
- State per sphere: (x, y, z, vx, vy, vz, radius, mass)
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

import numpy as np

import spherebox as P
from spherebox.collisions import (
    WallFace, detect_wall_collision, resolve_wall_collision,
    find_particle_collisions, resolve_particle_collisions,
)
from spherebox.inputs import ConfigError, validate_masses, validate_container_size

logger = logging.getLogger(__name__)


def radius_from_mass(mass, density: float = P.DENSITY):
    """cbrt(3m / (4π ρ)); works on scalars and arrays."""
    return np.cbrt(3 * np.asarray(mass, dtype=np.float64) / (4 * np.pi) / density)


@dataclass
class SimulationState:
    """Parallel per-sphere arrays. The engine writes, everyone else reads."""
    masses: np.ndarray = field(default_factory=lambda: np.zeros(0))
    radii: np.ndarray = field(default_factory=lambda: np.zeros(0))
    positions: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    velocities: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))

    @property
    def n_particles(self) -> int:
        return len(self.masses)

    @property
    def full_state(self) -> np.ndarray:
        """(n, 8) → [x, y, z, vx, vy, vz, radius, mass]"""
        return np.column_stack([self.positions, self.velocities,
                                self.radii, self.masses]).reshape(-1, 8)

    def read_only(self) -> 'SimulationState':
        """Views that follow engine updates but refuse writes."""
        views = {}
        for name in ('masses', 'radii', 'positions', 'velocities'):
            v = getattr(self, name).view()
            v.flags.writeable = False
            views[name] = v
        return SimulationState(**views)


@dataclass
class WorldConfig:
    container_size: float = P.CONTAINER_SIZE
    density: float = P.DENSITY
    velocity_scale: float = P.VELOCITY_SCALE
    seed: Optional[int] = None


class PhysicsEngine:
    """
    Bounce-and-reflect engine driven one tick per frame by the host.

    Step: move + wall check per sphere (index order) → pairwise pass
    """

    def __init__(self, config: Optional[WorldConfig] = None):
        self.config = config or WorldConfig()
        self.rng = np.random.RandomState(self.config.seed)
        self.state = SimulationState()
        self.initialized = False
        self.tick: int = 0
        self.collision_log: List[Dict] = []

    @property
    def container_size(self) -> float:
        return self.config.container_size

    def initialize(self, masses, positions: Optional[np.ndarray] = None,
                   velocities: Optional[np.ndarray] = None) -> SimulationState:
        """Populate the state once. Later calls return it unchanged."""
        if self.initialized:
            logger.debug("initialize() called again, ignoring")
            return self.state

        masses = np.array(validate_masses(masses), dtype=np.float64)
        size = validate_container_size(self.config.container_size)
        n = len(masses)
        radii = radius_from_mass(masses, self.config.density)

        too_big = np.flatnonzero(2 * radii > size)
        if len(too_big):
            i = int(too_big[0])
            raise ConfigError(
                f"sphere {i} (radius {radii[i]:.3f}) does not fit in a container of size {size}")

        if positions is None:
            positions = np.array([[self._random_coordinate(r, size) for _ in range(3)]
                                  for r in radii]).reshape(n, 3)
        else:
            positions = self._check_vectors(positions, n, 'positions')

        if velocities is None:
            scale = self.config.velocity_scale
            velocities = ((self.rng.random_sample((n, 3)) - 0.5) * scale).reshape(n, 3)
        else:
            velocities = self._check_vectors(velocities, n, 'velocities')

        self.state = SimulationState(masses=masses, radii=radii,
                                     positions=positions, velocities=velocities)
        self.initialized = True
        self.tick = 0
        self.collision_log = []
        logger.info("Initialized %d spheres in a container of size %g", n, size)
        return self.state

    def _random_coordinate(self, radius: float, size: float) -> float:
        # uniform over [-(l - 2r)/2, (l - 2r)/2)
        span = size - 2 * radius
        return self.rng.random_sample() * span - span / 2

    @staticmethod
    def _check_vectors(values, n: int, name: str) -> np.ndarray:
        arr = np.array(values, dtype=np.float64)
        if arr.shape != (n, 3) and not (n == 0 and arr.size == 0):
            raise ValueError(f"{name} must have shape ({n}, 3), got {arr.shape}")
        return arr.reshape(n, 3)

    def set_container_size(self, size: float):
        """Takes effect on the next tick. Spheres are not pushed back inside."""
        self.config.container_size = validate_container_size(size)
        logger.debug("Container size set to %g", self.config.container_size)

    def step(self) -> SimulationState:
        size = self.config.container_size
        s = self.state

        for i in range(s.n_particles):
            s.positions[i] += s.velocities[i]
            face = detect_wall_collision(s.positions[i], s.radii[i], size)
            if face != WallFace.NONE:
                resolve_wall_collision(s.positions[i], s.velocities[i],
                                       s.radii[i], size, face)
                self.collision_log.append({
                    'tick': self.tick, 'type': 'wall', 'particle': i, 'face': face,
                })

        pairs = find_particle_collisions(s.positions, s.radii)
        for i, j in pairs:
            logger.debug("Collision happened! spheres %d and %d", i, j)
            self.collision_log.append({
                'tick': self.tick, 'type': 'particle', 'particle_i': i, 'particle_j': j,
            })
        resolve_particle_collisions(s.velocities, pairs)

        self.tick += 1
        return s

    # State access

    def get_state(self) -> np.ndarray:
        """(n, 6) → [x, y, z, vx, vy, vz]"""
        return np.hstack([self.state.positions, self.state.velocities]).reshape(-1, 6)

    def get_full_state(self) -> np.ndarray:
        return self.state.full_state

    def view(self) -> SimulationState:
        return self.state.read_only()


def generate_trajectory(config: WorldConfig, masses, n_steps: int = P.N_STEPS,
                        resize_at: Optional[Dict[int, float]] = None,
                        positions: Optional[np.ndarray] = None,
                        velocities: Optional[np.ndarray] = None) -> Dict:
    """Returns dict with positions, velocities, full_states, container_sizes, collisions.

    resize_at maps a tick index to the container size applied just before it.
    """
    engine = PhysicsEngine(replace(config))
    engine.initialize(masses, positions=positions, velocities=velocities)
    resize_at = resize_at or {}

    positions_t = [engine.state.positions.copy()]
    velocities_t = [engine.state.velocities.copy()]
    full_states = [engine.get_full_state()]
    sizes = [engine.container_size]

    for t in range(n_steps):
        if t in resize_at:
            engine.set_container_size(resize_at[t])
        engine.step()
        positions_t.append(engine.state.positions.copy())
        velocities_t.append(engine.state.velocities.copy())
        full_states.append(engine.get_full_state())
        sizes.append(engine.container_size)

    return {
        'positions': np.array(positions_t),
        'velocities': np.array(velocities_t),
        'full_states': np.array(full_states),
        'container_sizes': np.array(sizes),
        'radii': engine.state.radii.copy(),
        'masses': engine.state.masses.copy(),
        'config': config,
        'collisions': engine.collision_log,
    }
