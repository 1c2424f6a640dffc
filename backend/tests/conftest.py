from __future__ import annotations

import pytest

EXAMPLE_MAP = "\n".join(
    [
        "        ...#",
        "        .#..",
        "        #...",
        "        ....",
        "...#.......#",
        "........#...",
        "..#....#....",
        "..........#.",
        "        ...#....",
        "        .....#..",
        "        .#......",
        "        ......#.",
    ]
)
EXAMPLE_INSTRUCTIONS = "10R5L5R10L4R5L5"
EXAMPLE = f"{EXAMPLE_MAP}\n\n{EXAMPLE_INSTRUCTIONS}\n"

# The eleven distinct cube nets, one face per "x".
NETS = {
    "1-4-1 a": ["x", "xxxx", "x"],
    "1-4-1 b": ["x", "xxxx", " x"],
    "1-4-1 c": ["x", "xxxx", "  x"],
    "1-4-1 d": ["x", "xxxx", "   x"],
    "1-4-1 e": [" x", "xxxx", " x"],
    "1-4-1 f": [" x", "xxxx", "  x"],
    "2-3-1 a": ["xx", " xxx", " x"],
    "2-3-1 b": ["xx", " xxx", "  x"],
    "2-3-1 c": ["xx", " xxx", "   x"],
    "2-2-2": ["xx", " xx", "  xx"],
    "3-3": ["xxx", "  xxx"],
}


def _grid(rows: list[str]) -> list[str]:
    width = max(len(r) for r in rows)
    return [r.ljust(width) for r in rows]


def rotate_pattern(rows: list[str]) -> list[str]:
    grid = _grid(rows)
    return ["".join(grid[len(grid) - 1 - j][i] for j in range(len(grid))) for i in range(len(grid[0]))]


def mirror_pattern(rows: list[str]) -> list[str]:
    return [r[::-1] for r in _grid(rows)]


def pattern_variants(rows: list[str]) -> list[list[str]]:
    variants = []
    current = rows
    for _ in range(4):
        variants.append(current)
        variants.append(mirror_pattern(current))
        current = rotate_pattern(current)
    return variants


def render_net(rows: list[str], n: int, walls: frozenset = frozenset()) -> str:
    """Scale a face pattern up to ``n x n`` faces; ``walls`` are absolute (x, y)."""
    lines = []
    for j, row in enumerate(rows):
        for dy in range(n):
            y = j * n + dy
            line = ""
            for i, ch in enumerate(row):
                for dx in range(n):
                    x = i * n + dx
                    if ch == " ":
                        line += " "
                    else:
                        line += "#" if (x, y) in walls else "."
            lines.append(line.rstrip())
    return "\n".join(lines)


@pytest.fixture
def example_text() -> str:
    return EXAMPLE
