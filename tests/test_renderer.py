import numpy as np
import pytest

import spherebox as P
from spherebox.renderer import Renderer, AppearanceConfig, box_edges, save_frames


def test_box_edges():
    edges = box_edges(6.0)
    assert len(edges) == 12
    for a, b in edges:
        assert np.linalg.norm(b - a) == pytest.approx(6.0)
        assert np.all(np.abs(a) == 3.0)


def test_origin_projects_to_centre():
    renderer = Renderer(AppearanceConfig(resolution=100))
    pixels, depth = renderer.project(np.zeros((1, 3)))
    np.testing.assert_allclose(pixels[0], [50.0, 50.0], atol=1e-9)
    assert depth[0] == pytest.approx(np.linalg.norm(P.CAMERA_POSITION))


def test_point_behind_camera_has_negative_depth():
    renderer = Renderer()
    _, depth = renderer.project(2 * np.array([P.CAMERA_POSITION]))
    assert depth[0] < 0


def test_render_draws_one_sphere_per_particle():
    renderer = Renderer(AppearanceConfig(resolution=64))
    frame = renderer.render(np.zeros((1, 3)), np.array([3.0]), 12.0)
    assert frame.shape == (64, 64, 3)
    assert frame.dtype == np.uint8
    assert tuple(frame[32, 32]) == P.SPHERE_COLORS[0]


def test_render_without_spheres_draws_box():
    renderer = Renderer(AppearanceConfig(resolution=64))
    frame = renderer.render(np.zeros((0, 3)), np.zeros(0), 12.0)
    assert frame.any()
    assert tuple(frame[0, 0]) == P.BG_COLOR


def test_box_rebuilt_on_resize():
    renderer = Renderer(AppearanceConfig(resolution=32))
    renderer.render(np.zeros((0, 3)), np.zeros(0), 12.0)
    assert renderer.box_size == 12.0
    renderer.render(np.zeros((0, 3)), np.zeros(0), 6.0)
    assert renderer.box_size == 6.0
    assert max(np.abs(a).max() for a, _ in renderer.edges) == 3.0


def test_colors_cycle():
    renderer = Renderer()
    colors = renderer.sphere_colors(8)
    assert len(colors) == 8
    assert colors[6] == colors[0]
    assert colors[7] == colors[1]


def test_render_trajectory():
    renderer = Renderer(AppearanceConfig(resolution=16))
    traj = {
        'positions': np.zeros((3, 2, 3)),
        'radii': np.ones(2),
        'container_sizes': np.array([12.0, 12.0, 6.0]),
    }
    frames = renderer.render_trajectory(traj)
    assert frames.shape == (3, 16, 16, 3)


def test_save_frames_writes_numbered_pngs(tmp_path):
    renderer = Renderer(AppearanceConfig(resolution=16))
    frames = np.stack([renderer.render(np.zeros((1, 3)), np.ones(1), 12.0) for _ in range(2)])
    paths = save_frames(frames, str(tmp_path / 'out'), prefix='snap')
    assert [p.rsplit('/', 1)[-1] for p in paths] == ['snap_00000.png', 'snap_00001.png']
    assert all((tmp_path / 'out' / name).stat().st_size > 0
               for name in ('snap_00000.png', 'snap_00001.png'))
