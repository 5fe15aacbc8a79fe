"""
Headless run — collision statistics and diagnostics.

  1. Wall / sphere collision counts over time
  2. Kinetic energy and |momentum| (not conserved, by construction)
  3. Wall protrusion after resolution (should stay at zero)
  4. Overlapping pairs per frame (overlaps can persist, no separation)

Run: python eval_collisions.py --numbers "[1, 2, 3, 4, 5]" --resize-at 2500:6
"""

import argparse
import os
import sys

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

import spherebox as P
from spherebox.engine import generate_trajectory, WorldConfig
from spherebox.inputs import ConfigError, parse_masses, parse_container_size
from spherebox.metrics import compute_energy, compute_momentum, wall_protrusion, count_overlaps
from spherebox.renderer import Renderer, AppearanceConfig, save_frames


COLORS = {
    'wall':     '#e74c3c',  # red
    'particle': '#3498db',  # blue
    'size':     '#2c3e50',  # dark
}


def collision_counts(collisions, n_steps):
    """Per-tick counts of wall and sphere collisions → two (n_steps,) arrays."""
    wall = np.zeros(n_steps, dtype=int)
    particle = np.zeros(n_steps, dtype=int)
    for c in collisions:
        if c['type'] == 'wall':
            wall[c['tick']] += 1
        else:
            particle[c['tick']] += 1
    return wall, particle


def parse_resize(text):
    tick, size = text.split(':')
    return int(tick), parse_container_size(size)


def evaluate(masses, n_steps, seed, container_size, velocity_scale, resize_at, outdir):
    os.makedirs(outdir, exist_ok=True)
    config = WorldConfig(container_size=container_size, velocity_scale=velocity_scale, seed=seed)
    traj = generate_trajectory(config, masses, n_steps=n_steps, resize_at=resize_at)

    wall, particle = collision_counts(traj['collisions'], n_steps)
    energy = compute_energy(traj['velocities'], traj['masses'])
    momentum = compute_momentum(traj['velocities'], traj['masses'])
    protrusion = wall_protrusion(traj['positions'], traj['radii'], traj['container_sizes'])
    overlaps = count_overlaps(traj['positions'], traj['radii'])

    print(f"Spheres: {len(masses)}, ticks: {n_steps}")
    print(f"Wall collisions:     {wall.sum()}")
    print(f"Sphere collisions:   {particle.sum()}")
    print(f"Energy drift:        {abs(energy[-1] - energy[0]):.3e}")
    print(f"|p| range:           {momentum.min():.3e} .. {momentum.max():.3e}")
    print(f"Max wall protrusion: {protrusion.max():.3e}")
    print(f"Max overlaps/frame:  {overlaps.max()}")

    fig, axes = plt.subplots(2, 2, figsize=(12, 8))
    ax = axes[0, 0]
    ax.plot(np.cumsum(wall), label='Wall', color=COLORS['wall'])
    ax.plot(np.cumsum(particle), label='Sphere', color=COLORS['particle'])
    ax.set_title('Cumulative collisions')
    ax.set_xlabel('Tick')
    ax.legend()

    ax = axes[0, 1]
    ax.plot(energy, label='KE', color=COLORS['wall'])
    ax.plot(momentum, label='|p|', color=COLORS['particle'])
    ax.set_title('Energy / momentum')
    ax.set_xlabel('Tick')
    ax.legend()

    ax = axes[1, 0]
    ax.plot(protrusion, color=COLORS['wall'], label='Protrusion')
    ax.plot(traj['container_sizes'] / 2, color=COLORS['size'], linestyle='--', label='l / 2')
    ax.set_title('Wall protrusion')
    ax.set_xlabel('Tick')
    ax.legend()

    ax = axes[1, 1]
    ax.plot(overlaps, color=COLORS['particle'])
    ax.set_title('Overlapping pairs')
    ax.set_xlabel('Tick')

    plt.tight_layout()
    plt.savefig(os.path.join(outdir, 'collisions.png'), dpi=150)
    plt.close()

    renderer = Renderer(AppearanceConfig(resolution=400))
    last = {k: traj[k][-1:] for k in ('positions', 'container_sizes')}
    last['radii'] = traj['radii']
    save_frames(renderer.render_trajectory(last), os.path.join(outdir, 'final_frame'))
    print(f"Plots saved to {outdir}/")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Collision statistics for a headless run")
    parser.add_argument('--numbers', type=str, default='[1, 2, 3, 4, 5, 8]')
    parser.add_argument('--steps', type=int, default=P.N_STEPS)
    parser.add_argument('--seed', type=int, default=P.SEED)
    parser.add_argument('--size', type=str, default=str(P.CONTAINER_SIZE))
    parser.add_argument('--velocity-scale', type=float, default=P.VELOCITY_SCALE)
    parser.add_argument('--resize-at', type=parse_resize, action='append', default=[],
                        help="tick:size, may be repeated")
    parser.add_argument('--outdir', type=str, default='results/plots')
    args = parser.parse_args(argv)

    try:
        masses = parse_masses(args.numbers)
        size = parse_container_size(args.size)
        evaluate(masses, args.steps, args.seed, size,
                 args.velocity_scale, dict(args.resize_at), args.outdir)
    except ConfigError as e:
        print(f"[Error] {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
