from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from cubewalk.config import load_settings
from cubewalk.errors import CubeWalkError
from cubewalk.util.log import configure_logging, logger
from cubewalk.walk.cube import fold, follow_cube
from cubewalk.walk.flat import follow_flat
from cubewalk.walk.scanner import parse_input
from cubewalk.walk.solver import password


def _solve(args: argparse.Namespace) -> int:
    try:
        text = Path(args.path).read_text()
    except OSError as e:
        raise CubeWalkError(f"cannot read {args.path}: {e.strerror or e}") from e
    blocks, instructions = parse_input(text)
    if args.mode in ("flat", "both"):
        print(f"flat: {password(follow_flat(blocks, instructions))}")
    if args.mode in ("cube", "both"):
        cube = fold(blocks)
        logger.debug("face length %d, neighbors %s", cube.face_length, [f.neighbors for f in cube.faces])
        print(f"cube: {password(follow_cube(cube, instructions))}")
    return 0


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("cubewalk.main:app", host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cubewalk", description="Walk a monkey map flat or folded into a cube")
    parser.add_argument("--log-level", default=None, help="logging level (default: CUBEWALK_LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_solve = subparsers.add_parser("solve", help="Print the password for a puzzle file")
    p_solve.add_argument("path", help="puzzle text: map, blank line, instructions")
    p_solve.add_argument("--mode", choices=("flat", "cube", "both"), default="both")
    p_solve.set_defaults(func=_solve)

    p_serve = subparsers.add_parser("serve", help="Run the HTTP/WebSocket service")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8000)
    p_serve.set_defaults(func=_serve)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    args.log_level = args.log_level or load_settings().log_level
    configure_logging(args.log_level)
    try:
        return args.func(args)
    except CubeWalkError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
