from __future__ import annotations

from typing import Literal

from cubewalk.walk.cube import fold, follow_cube
from cubewalk.walk.flat import follow_flat
from cubewalk.walk.geometry import Pose
from cubewalk.walk.scanner import parse_input

Mode = Literal["flat", "cube"]


def password(pose: Pose) -> int:
    row, col = pose.position.y + 1, pose.position.x + 1
    return 1000 * row + 4 * col + int(pose.facing)


def solve(text: str, mode: Mode) -> Pose:
    blocks, instructions = parse_input(text)
    if mode == "flat":
        return follow_flat(blocks, instructions)
    if mode == "cube":
        return follow_cube(fold(blocks), instructions)
    raise ValueError(f"unknown mode: {mode!r}")


def solve_flat(text: str) -> int:
    return password(solve(text, "flat"))


def solve_cube(text: str) -> int:
    return password(solve(text, "cube"))


def pose_fields(pose: Pose) -> dict[str, int]:
    return {"row": pose.position.y, "col": pose.position.x, "facing": int(pose.facing)}


def pose_payload(pose: Pose) -> dict[str, int]:
    return {"password": password(pose), **pose_fields(pose)}
