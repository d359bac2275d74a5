"""
Camera commands, the message channel from the input layer to the Camera.

The window layer never touches the Camera directly: it emits commands and
the frame loop applies them in order with apply_command().

    Move(CameraMovement.FORWARD, dt)
    Look(dx, dy)
    Zoom(delta)
    AdjustSpeed(increase=True)
    Search("alpha centauri")      # teleports on a hit
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from universe.bodies import CelestialBody
from universe.universe import Universe
from .camera import Camera, CameraMovement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Move:
    direction: CameraMovement
    delta_time: float


@dataclass(frozen=True)
class Look:
    dx: float
    dy: float
    constrain_pitch: bool = True


@dataclass(frozen=True)
class Zoom:
    delta: float


@dataclass(frozen=True)
class AdjustSpeed:
    increase: bool


@dataclass(frozen=True)
class Search:
    query: str


Command = Union[Move, Look, Zoom, AdjustSpeed, Search]


def apply_command(camera: Camera, command: Command,
                  universe: Optional[Universe] = None) -> Optional[CelestialBody]:
    """
    Apply one command. Returns the star found by a Search (None otherwise,
    or when the search has no match).
    """
    if isinstance(command, Move):
        camera.process_keyboard(command.direction, command.delta_time)
    elif isinstance(command, Look):
        camera.process_mouse_movement(command.dx, command.dy, command.constrain_pitch)
    elif isinstance(command, Zoom):
        camera.process_mouse_scroll(command.delta)
    elif isinstance(command, AdjustSpeed):
        camera.adjust_speed(command.increase)
    elif isinstance(command, Search):
        if universe is None:
            raise ValueError("Search needs a universe to resolve against")
        found = universe.search(command.query)
        if found is None:
            logger.info("No star matches '%s'", command.query)
            return None
        camera.teleport_to(found.position)
        logger.info("Teleported to %s", found.name)
        return found
    else:
        raise TypeError(f"Unknown camera command: {command!r}")
    return None


def apply_commands(camera: Camera, commands: Iterable[Command],
                   universe: Optional[Universe] = None) -> Optional[CelestialBody]:
    """Apply commands in order; returns the last search hit, if any."""
    hit = None
    for command in commands:
        found = apply_command(camera, command, universe)
        if found is not None:
            hit = found
    return hit
