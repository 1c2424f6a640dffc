from __future__ import annotations


class CubeWalkError(Exception):
    """Base class for everything the solver refuses to compute."""

    code = "cubewalk_error"


class MapFormatError(CubeWalkError, ValueError):
    """The puzzle text cannot be scanned into blocks and instructions."""

    code = "bad_input"


class TopologyError(CubeWalkError):
    """The blocks do not form a foldable net of six equal faces."""

    code = "bad_topology"


class InputTooLargeError(MapFormatError):
    code = "too_large"
