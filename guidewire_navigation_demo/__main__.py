"""
命令行入口: python -m guidewire_navigation_demo --viewer pygame
"""

import argparse
import logging

from guidewire_navigation_demo.config import SimulationConfig
from guidewire_navigation_demo.logging_config import setup_logging

VIEWERS = ("pygame", "pyvista", "profile")


def positive_int(text):
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text}")
    return value


def parse_args(argv=None):
    defaults = SimulationConfig()
    parser = argparse.ArgumentParser(description="Guidewire navigation simulation demo")
    parser.add_argument("--viewer", choices=VIEWERS, default="pygame",
                        help="pygame (2D), pyvista (3D) or profile (matplotlib replay)")
    parser.add_argument("--centerline", default=defaults.centerline,
                        help="'curved', 'straight' or a path to a .npy / text file of x y z rows")
    parser.add_argument("--smooth", type=float, default=defaults.smooth_sigma,
                        help="Gaussian smoothing sigma (in samples) for loaded centerlines")
    parser.add_argument("--wire-radius", type=float, default=defaults.wire_radius)
    parser.add_argument("--forward-speed", type=float, default=defaults.forward_speed)
    parser.add_argument("--ticks", type=positive_int, default=2400, help="profile viewer: ticks to replay")
    parser.add_argument("--save", default=None, help="profile viewer: save figure instead of showing")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)

    config = SimulationConfig(
        wire_radius=args.wire_radius,
        forward_speed=args.forward_speed,
        centerline=args.centerline,
        smooth_sigma=args.smooth,
    )

    # 各个渲染后端按需导入
    if args.viewer == "pygame":
        from guidewire_navigation_demo import guidewire_sim
        guidewire_sim.main(config)
    elif args.viewer == "pyvista":
        from guidewire_navigation_demo import guidewire_3d_pyvista
        guidewire_3d_pyvista.main(config)
    else:
        from guidewire_navigation_demo import guidewire_profile_matplotlib
        guidewire_profile_matplotlib.main(config, num_ticks=args.ticks, save_path=args.save)


if __name__ == "__main__":
    main()
