"""Chunk move direction."""

from enum import StrEnum


class Direction(StrEnum):
    """Direction in which a chunk is moved within its manuscript."""

    UP = "up"
    DOWN = "down"
