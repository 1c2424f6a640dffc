from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Optional

from cubewalk.util.ids import new_net_id
from cubewalk.util.log import logger
from cubewalk.util.time import now_ms
from cubewalk.walk.cube import Cube, fold
from cubewalk.walk.scanner import MapBlock, parse_blocks


@dataclass(slots=True)
class NetEntry:
    net_id: str
    blocks: list[MapBlock]
    cube: Cube
    created_ms: int

    def describe(self) -> dict[str, Any]:
        return {
            "netId": self.net_id,
            "faceLength": self.cube.face_length,
            "start": {
                "row": self.cube.start.position.y,
                "col": self.cube.start.position.x,
            },
            "faces": [
                {
                    "index": i,
                    "min": {"row": f.min.y, "col": f.min.x},
                    "max": {"row": f.max.y, "col": f.max.x},
                    "walls": len(f.walls),
                    "neighbors": list(f.neighbors),
                }
                for i, f in enumerate(self.cube.faces)
            ],
        }


class NetRegistry:
    """Folded nets kept by id so instructions can be replayed without refolding."""

    def __init__(self, max_nets: int = 64) -> None:
        self.max_nets = max_nets
        self.nets: dict[str, NetEntry] = {}
        self.lock = asyncio.Lock()

    async def register(self, map_text: str) -> NetEntry:
        # Scanning and folding are pure; only the dict is guarded.
        blocks = parse_blocks(map_text)
        cube = fold(blocks)

        async with self.lock:
            net_id = new_net_id()
            while net_id in self.nets:
                net_id = new_net_id()
            entry = NetEntry(net_id=net_id, blocks=blocks, cube=cube, created_ms=now_ms())
            self.nets[net_id] = entry
            while len(self.nets) > self.max_nets:
                oldest = next(iter(self.nets))
                self.nets.pop(oldest)
                logger.info("evicted net %s", oldest)

        logger.info("registered net %s (face length %d)", net_id, cube.face_length)
        return entry

    async def get(self, net_id: str) -> Optional[NetEntry]:
        async with self.lock:
            return self.nets.get(net_id)

    async def remove(self, net_id: str) -> bool:
        async with self.lock:
            return self.nets.pop(net_id, None) is not None
