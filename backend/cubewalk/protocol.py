from __future__ import annotations

from typing import Any, Literal, Optional, TypedDict

from cubewalk.errors import CubeWalkError
from cubewalk.walk.geometry import Pose
from cubewalk.walk.solver import password, pose_fields

PROTOCOL_VERSION: Literal[1] = 1


class Envelope(TypedDict):
    v: int
    type: str
    payload: dict[str, Any]


def msg(msg_type: str, payload: dict[str, Any]) -> Envelope:
    return {"v": PROTOCOL_VERSION, "type": msg_type, "payload": payload}


def parse_incoming(raw: Any) -> tuple[Optional[str], dict[str, Any]]:
    """Message type and payload of a client frame; junk payloads read as empty."""
    if not isinstance(raw, dict):
        return None, {}
    payload = raw.get("payload") or {}
    if not isinstance(payload, dict):
        payload = {}
    mtype = raw.get("type")
    return (mtype if isinstance(mtype, str) else None), payload


def loaded_msg(net_id: str, face_length: int) -> Envelope:
    return msg("loaded", {"netId": net_id, "faceLength": face_length})


def pose_msg(mode: str, index: int, pose: Pose) -> Envelope:
    return msg("pose", {"mode": mode, "index": index, **pose_fields(pose)})


def done_msg(mode: str, final: Pose) -> Envelope:
    return msg("done", {"mode": mode, "password": password(final)})


def pong_msg(client_time_ms: Any, server_time_ms: int) -> Envelope:
    return msg("pong", {"clientTimeMs": client_time_ms, "serverTimeMs": server_time_ms})


def error_msg(code: str, message: str) -> Envelope:
    return msg("error", {"code": code, "message": message})


def error_from(exc: CubeWalkError) -> Envelope:
    return error_msg(exc.code, str(exc))
