import argparse
import logging
import sys

from .session import Mode


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def configure_logging(level_name):
    """Send pyspiral log records to stderr at the given level."""
    logging.basicConfig(
        level=logging.getLevelName(level_name),
        format="%(levelname)s %(name)s: %(message)s",
    )


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="pyspiral",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "mode",
        nargs="?",
        type=Mode.parse,
        default=Mode.SPIRAL,
        help="the scene to start with: spiral, htree or mandelbrot",
    )
    parser.add_argument(
        "--dims",
        type=int,
        default=[1200, 800],
        nargs=2,
        help="The logical size of the window, in pixels",
    )
    parser.add_argument(
        "--dpr",
        type=float,
        default=1.0,
        help="device pixel ratio between physical and logical pixels",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=60,
        help="the frame rate cap of the render loop",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="logging level (DEBUG shows skipped frames)",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_level)

    from .host import SetupError
    from .viewer import SceneViewer

    print(f"mode: {args.mode.value}")
    print(f"dims: {args.dims}")
    print(f"dpr: {args.dpr}")

    viewer = SceneViewer(
        width=args.dims[0],
        height=args.dims[1],
        mode=args.mode,
        dpr=args.dpr,
        fps=args.fps,
    )
    try:
        viewer.run()
    except SetupError as exc:
        print(f"pyspiral: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
