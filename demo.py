"""
Quick demo — watch the spheres bounce.
Run: python demo.py --numbers "[1, 2, 3, 0.5]"
     python demo.py --query "?numbers=[4,1,1]"
Up/Down resize the container, Q or close window to exit.
"""
import argparse
import logging
import sys

import spherebox as P
from spherebox.engine import PhysicsEngine, WorldConfig
from spherebox.inputs import ConfigError, parse_masses, masses_from_query, parse_container_size
from spherebox.renderer import Renderer, AppearanceConfig


def main(argv=None):
    parser = argparse.ArgumentParser(description="Bounce spheres around a resizable cube")
    parser.add_argument('--numbers', type=str, help="JSON array of sphere masses, e.g. '[1, 2, 3]'")
    parser.add_argument('--query', type=str, help="Query string or URL carrying numbers=[...]")
    parser.add_argument('--size', type=str, default=str(P.CONTAINER_SIZE), help="Container edge length")
    parser.add_argument('--seed', type=int, default=P.SEED)
    parser.add_argument('--fps', type=int, default=P.FPS)
    parser.add_argument('--resolution', type=int, default=P.RESOLUTION)
    parser.add_argument('--verbose', action='store_true', help="Log every collision")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s')

    try:
        if args.numbers is not None:
            masses = parse_masses(args.numbers)
        elif args.query is not None:
            masses = masses_from_query(args.query)
        else:
            masses = []
        config = WorldConfig(container_size=parse_container_size(args.size), seed=args.seed)
        engine = PhysicsEngine(config)
        engine.initialize(masses)
    except ConfigError as e:
        print(f"[Error] {e}")
        return 1

    print(f"Masses: {masses}")
    renderer = Renderer(AppearanceConfig(resolution=args.resolution))
    renderer.play(engine, fps=args.fps)
    print(f"Ticks: {engine.tick}, collisions: {len(engine.collision_log)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
