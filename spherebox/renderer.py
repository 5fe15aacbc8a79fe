import numpy as np
from typing import List, Tuple, Optional
from dataclasses import dataclass
import os

import spherebox as P
from spherebox.engine import PhysicsEngine

os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = '1'
import pygame


@dataclass
class AppearanceConfig:
    """Pixels only — nothing here feeds back into the physics."""
    resolution: int = P.RESOLUTION
    sphere_colors: Optional[List[Tuple[int, int, int]]] = None
    bg_color: Tuple[int, int, int] = P.BG_COLOR
    edge_color: Tuple[int, int, int] = P.EDGE_COLOR
    camera_position: Tuple[float, float, float] = P.CAMERA_POSITION
    fov: float = P.CAMERA_FOV
    near: float = 0.1


def box_edges(size: float) -> List[Tuple[np.ndarray, np.ndarray]]:
    """12 edges of the cube of edge `size` centred on the origin."""
    h = size / 2
    corners = [np.array([x, y, z]) for x in (-h, h) for y in (-h, h) for z in (-h, h)]
    edges = []
    for a in range(8):
        for b in range(a + 1, 8):
            # corners joined by an edge differ on exactly one axis
            if np.count_nonzero(corners[a] != corners[b]) == 1:
                edges.append((corners[a], corners[b]))
    return edges


class Renderer:
    """Maps simulation state → pixel frames through a fixed perspective camera."""

    def __init__(self, config: Optional[AppearanceConfig] = None):
        self.config = config or AppearanceConfig()
        self.box_size: Optional[float] = None
        self.edges: List[Tuple[np.ndarray, np.ndarray]] = []
        self._display_initialized = False

        eye = np.array(self.config.camera_position, dtype=np.float64)
        forward = -eye / np.linalg.norm(eye)
        right = np.cross(forward, [0.0, 1.0, 0.0])
        right /= np.linalg.norm(right)
        self._eye = eye
        self._basis = np.stack([right, np.cross(right, forward), forward])
        self._focal = (self.config.resolution / 2) / np.tan(np.radians(self.config.fov) / 2)

    def make_box(self, size: float):
        """Rebuild the boundary wireframe for a new container size."""
        self.box_size = size
        self.edges = box_edges(size)

    def sphere_colors(self, n: int) -> List[Tuple[int, int, int]]:
        palette = self.config.sphere_colors or P.SPHERE_COLORS
        return [palette[i % len(palette)] for i in range(n)]

    def project(self, points: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """World points (N, 3) → pixel coords (N, 2) and camera depth (N,)."""
        cam = (np.asarray(points, dtype=np.float64).reshape(-1, 3) - self._eye) @ self._basis.T
        depth = cam[:, 2]
        safe = np.where(depth > self.config.near, depth, np.inf)
        half = self.config.resolution / 2
        px = half + self._focal * cam[:, 0] / safe
        py = half - self._focal * cam[:, 1] / safe
        return np.stack([px, py], axis=1), depth

    def draw(self, surface, positions: np.ndarray, radii: np.ndarray,
             container_size: float, colors: Optional[List[Tuple[int, int, int]]] = None):
        if container_size != self.box_size:
            self.make_box(container_size)
        if colors is None:
            colors = self.sphere_colors(len(radii))

        surface.fill(self.config.bg_color)
        for a, b in self.edges:
            (pa, pb), depth = self.project(np.stack([a, b]))
            if np.all(depth > self.config.near):
                pygame.draw.line(surface, self.config.edge_color,
                                 pa.astype(int).tolist(), pb.astype(int).tolist())

        if len(radii) == 0:
            return
        pixels, depth = self.project(positions)
        # far spheres first so near ones overlap them
        for i in np.argsort(-depth):
            if depth[i] <= self.config.near:
                continue
            pr = max(1, int(self._focal * radii[i] / depth[i]))
            pygame.draw.circle(surface, colors[i], pixels[i].astype(int).tolist(), pr)

    def render(self, positions: np.ndarray, radii: np.ndarray, container_size: float,
               colors: Optional[List[Tuple[int, int, int]]] = None) -> np.ndarray:
        """Render single frame → (res, res, 3) uint8."""
        res = self.config.resolution
        surface = pygame.Surface((res, res))
        self.draw(surface, positions, radii, container_size, colors=colors)
        return pygame.surfarray.array3d(surface).transpose(1, 0, 2)

    def render_trajectory(self, trajectory: dict,
                          colors: Optional[List[Tuple[int, int, int]]] = None) -> np.ndarray:
        """Render full trajectory → (T+1, res, res, 3) uint8."""
        positions = trajectory['positions']
        radii = trajectory['radii']
        sizes = trajectory['container_sizes']
        res = self.config.resolution
        frames = np.zeros((len(positions), res, res, 3), dtype=np.uint8)
        for t in range(len(positions)):
            frames[t] = self.render(positions[t], radii, sizes[t], colors=colors)
        return frames

    def play(self, engine: PhysicsEngine, fps: int = P.FPS):
        """Step `engine` once per frame in a pygame window.

        Up/Down resize the container, Q or closing the window exits.
        """
        if not self._display_initialized:
            pygame.init()
            self._display_initialized = True

        res = self.config.resolution
        screen = pygame.display.set_mode((res, res))
        clock = pygame.time.Clock()
        view = engine.view()
        colors = self.sphere_colors(view.n_particles)
        lo, hi = P.CONTAINER_SIZE_RANGE

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_q:
                        running = False
                    elif event.key in (pygame.K_UP, pygame.K_DOWN):
                        delta = P.CONTAINER_SIZE_STEP if event.key == pygame.K_UP else -P.CONTAINER_SIZE_STEP
                        engine.set_container_size(min(hi, max(lo, engine.container_size + delta)))

            engine.step()
            pygame.display.set_caption(f'spherebox  l = {engine.container_size:g}')
            self.draw(screen, view.positions, view.radii, engine.container_size, colors=colors)
            pygame.display.flip()
            clock.tick(fps)

        pygame.quit()
        self._display_initialized = False


def save_frames(frames: np.ndarray, outdir: str, prefix: str = 'frame') -> List[str]:
    """Write (T, res, res, 3) frames to numbered PNGs, returns the paths written."""
    os.makedirs(outdir, exist_ok=True)
    paths = []
    for t, frame in enumerate(frames):
        path = os.path.join(outdir, f'{prefix}_{t:05d}.png')
        pygame.image.save(pygame.surfarray.make_surface(np.swapaxes(frame, 0, 1)), path)
        paths.append(path)
    return paths
