from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Any, Literal, Optional

from fastapi import FastAPI, HTTPException, Request, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from cubewalk.config import load_settings
from cubewalk.errors import CubeWalkError, InputTooLargeError, TopologyError
from cubewalk.nets import NetEntry, NetRegistry
from cubewalk.protocol import done_msg, error_from, error_msg, loaded_msg, parse_incoming, pong_msg, pose_msg
from cubewalk.util.log import logger
from cubewalk.util.time import now_ms
from cubewalk.walk.cube import Cube, fold, follow_cube, walk_cube
from cubewalk.walk.flat import follow_flat, walk_flat
from cubewalk.walk.geometry import Pose
from cubewalk.walk.scanner import Instruction, MapBlock, parse_input, parse_instructions
from cubewalk.walk.solver import pose_payload

WalkMode = Literal["flat", "cube", "both"]

settings = load_settings()
nets = NetRegistry(max_nets=settings.max_nets)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("cubewalk service starting (max nets %d)", settings.max_nets)
    yield


app = FastAPI(title="cubewalk", version="1.0.0", lifespan=lifespan)


class SolveRequest(BaseModel):
    input: str = Field(..., min_length=1)
    mode: WalkMode = "both"


class NetRequest(BaseModel):
    map: str = Field(..., min_length=1)


class FollowRequest(BaseModel):
    instructions: str = Field(..., min_length=1)
    mode: WalkMode = "both"


@app.exception_handler(CubeWalkError)
async def cubewalk_error_handler(request: Request, exc: CubeWalkError) -> JSONResponse:
    if isinstance(exc, InputTooLargeError):
        status = 413
    elif isinstance(exc, TopologyError):
        status = 422
    else:
        status = 400
    logger.warning("rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"detail": {"code": exc.code, "message": str(exc)}})


def _check_size(text: str) -> None:
    if len(text.encode("utf-8")) > settings.max_input_bytes:
        raise InputTooLargeError(f"input exceeds {settings.max_input_bytes} bytes")


def _modes(mode: WalkMode) -> list[str]:
    return ["flat", "cube"] if mode == "both" else [mode]


def _follow(mode: WalkMode, blocks: list[MapBlock], instructions: list[Instruction], cube: Optional[Cube] = None) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for m in _modes(mode):
        if m == "flat":
            pose = follow_flat(blocks, instructions)
        else:
            pose = follow_cube(cube if cube is not None else fold(blocks), instructions)
        result[m] = pose_payload(pose)
    return result


async def _entry_or_404(net_id: str) -> NetEntry:
    entry = await nets.get(net_id)
    if entry is None:
        raise HTTPException(status_code=404, detail={"code": "unknown_net", "message": f"no net {net_id}"})
    return entry


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/solve")
def solve(req: SolveRequest) -> dict[str, Any]:
    _check_size(req.input)
    blocks, instructions = parse_input(req.input)
    return _follow(req.mode, blocks, instructions)


@app.post("/nets")
async def create_net(req: NetRequest) -> dict[str, Any]:
    _check_size(req.map)
    entry = await nets.register(req.map)
    return entry.describe()


@app.get("/nets/{net_id}")
async def get_net(net_id: str) -> dict[str, Any]:
    entry = await _entry_or_404(net_id)
    return entry.describe()


@app.delete("/nets/{net_id}")
async def delete_net(net_id: str) -> dict[str, Any]:
    if not await nets.remove(net_id):
        raise HTTPException(status_code=404, detail={"code": "unknown_net", "message": f"no net {net_id}"})
    return {"netId": net_id, "deleted": True}


@app.post("/nets/{net_id}/follow")
async def follow_net(net_id: str, req: FollowRequest) -> dict[str, Any]:
    _check_size(req.instructions)
    entry = await _entry_or_404(net_id)
    instructions = parse_instructions(req.instructions)
    return await run_in_threadpool(_follow, req.mode, entry.blocks, instructions, entry.cube)


def _poses(mode: str, entry: NetEntry, instructions: list[Instruction]) -> list[Pose]:
    if mode == "flat":
        return list(walk_flat(entry.blocks, instructions))
    return list(walk_cube(entry.cube, instructions))


@app.websocket("/ws")
async def ws_endpoint(ws: WebSocket) -> None:
    await ws.accept()

    entry: Optional[NetEntry] = None
    try:
        mtype, payload = parse_incoming(await asyncio.wait_for(ws.receive_json(), timeout=settings.load_timeout))
        if mtype != "load":
            await ws.send_json(error_msg("bad_load", "first message must be load"))
            await ws.close()
            return

        map_text = str(payload.get("map") or "")
        try:
            _check_size(map_text)
            entry = await nets.register(map_text)
        except CubeWalkError as e:
            await ws.send_json(error_from(e))
            await ws.close()
            return

        await ws.send_json(loaded_msg(entry.net_id, entry.cube.face_length))

        while True:
            mtype, payload = parse_incoming(await ws.receive_json())
            if mtype is None:
                continue

            if mtype == "leave":
                await ws.close()
                return

            if mtype == "ping":
                await ws.send_json(pong_msg(payload.get("clientTimeMs"), now_ms()))
                continue

            if mtype == "follow":
                mode = payload.get("mode") or "both"
                if mode not in ("flat", "cube", "both"):
                    await ws.send_json(error_msg("bad_mode", f"unknown mode {mode!r}"))
                    continue
                try:
                    instructions = parse_instructions(str(payload.get("instructions") or ""))
                except CubeWalkError as e:
                    await ws.send_json(error_from(e))
                    continue

                for m in _modes(mode):
                    poses = await run_in_threadpool(_poses, m, entry, instructions)
                    for index, pose in enumerate(poses):
                        await ws.send_json(pose_msg(m, index, pose))
                    await ws.send_json(done_msg(m, poses[-1] if poses else entry.cube.start))
                continue

            await ws.send_json(error_msg("bad_type", f"unknown message type {mtype!r}"))

    except WebSocketDisconnect:
        pass
    except asyncio.TimeoutError:
        try:
            await ws.send_json(error_msg("load_timeout", "load timed out"))
        except Exception:
            pass
    except Exception as e:
        logger.exception("websocket session failed")
        try:
            await ws.send_json(error_msg("server_error", str(e)))
        except Exception:
            pass
    finally:
        if entry is not None:
            await nets.remove(entry.net_id)
