import demo
import eval_collisions
from eval_collisions import collision_counts, parse_resize
from spherebox.collisions import WallFace


def test_collision_counts():
    log = [
        {'tick': 0, 'type': 'wall', 'particle': 1, 'face': WallFace.TOP},
        {'tick': 2, 'type': 'particle', 'particle_i': 0, 'particle_j': 1},
        {'tick': 2, 'type': 'wall', 'particle': 0, 'face': WallFace.LEFT},
    ]
    wall, particle = collision_counts(log, 4)
    assert wall.tolist() == [1, 0, 1, 0]
    assert particle.tolist() == [0, 0, 1, 0]


def test_parse_resize():
    assert parse_resize('2500:6') == (2500, 6.0)


def test_demo_rejects_bad_masses(capsys):
    assert demo.main(['--numbers', '[1, "x"]']) == 1
    assert '[Error]' in capsys.readouterr().out


def test_demo_rejects_bad_size(capsys):
    assert demo.main(['--numbers', '[1]', '--size', '-4']) == 1
    assert '[Error]' in capsys.readouterr().out


def test_demo_rejects_huge_mass(capsys):
    assert demo.main(['--numbers', '[1' + '0' * 400 + ']']) == 1
    assert '[Error]' in capsys.readouterr().out


def test_eval_rejects_bad_size(capsys, tmp_path):
    assert eval_collisions.main(['--size', '0', '--outdir', str(tmp_path)]) == 1
    assert '[Error]' in capsys.readouterr().out


def test_eval_rejects_bad_masses(capsys, tmp_path):
    assert eval_collisions.main(['--numbers', '[1, -2]', '--outdir', str(tmp_path)]) == 1
    assert '[Error]' in capsys.readouterr().out


def test_eval_rejects_sphere_too_big_for_container(capsys, tmp_path):
    assert eval_collisions.main(['--numbers', '[27]', '--size', '4', '--steps', '1',
                                 '--outdir', str(tmp_path)]) == 1
    assert '[Error]' in capsys.readouterr().out
