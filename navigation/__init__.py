"""
Navigation: the free-flying camera and the commands that drive it.

Usage:
    from navigation import spawn_camera, apply_command, Move, CameraMovement
    camera = spawn_camera(universe)
    apply_command(camera, Move(CameraMovement.FORWARD, dt))
"""

from .camera import Camera, CameraMovement, spawn_camera
from .commands import (
    AdjustSpeed,
    Command,
    Look,
    Move,
    Search,
    Zoom,
    apply_command,
    apply_commands,
)

__all__ = [
    "Camera",
    "CameraMovement",
    "spawn_camera",
    "AdjustSpeed",
    "Command",
    "Look",
    "Move",
    "Search",
    "Zoom",
    "apply_command",
    "apply_commands",
]
