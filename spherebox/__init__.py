# ── Central defaults (tune here, not scattered across files) ──

import math

# World
CONTAINER_SIZE = 12.0
CONTAINER_SIZE_RANGE = (2.0, 30.0)
CONTAINER_SIZE_STEP = 0.5
DENSITY = 3 / (4 * math.pi)
VELOCITY_SCALE = 1 / 500

# Rendering
RESOLUTION = 800
FPS = 60
BG_COLOR = (0, 0, 0)
EDGE_COLOR = (255, 255, 255)
SPHERE_COLORS = [
    (255, 0, 0), (0, 255, 0), (0, 0, 255),
    (255, 255, 0), (255, 0, 255), (0, 255, 255),
]
CAMERA_POSITION = (18.0, 12.0, 15.0)
CAMERA_FOV = 75.0

# Simulation
N_STEPS = 5000
SEED = 42
