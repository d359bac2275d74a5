"""
Camera — free-flying viewpoint driven by Euler angles.

Position is kept in float64: single precision cannot resolve a star's
surface when the camera is hundreds of light-years from the origin.

Angles in degrees. With yaw = -90 and pitch = 0 the camera looks down -Z.

    front = normalize(cos(yaw)·cos(pitch), sin(pitch), sin(yaw)·cos(pitch))
    right = normalize(front × world_up)
    up    = normalize(right × front)
"""

from __future__ import annotations
import logging
import math
from enum import Enum
from typing import Optional

import numpy as np

from core.config import CameraConfig
from core.coords import clamp, normalize

logger = logging.getLogger(__name__)


class CameraMovement(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class Camera:
    """
    Viewpoint state plus motion integration.

    Every mutation goes through a process_* / adjust_* method; the derived
    front/right/up vectors are refreshed whenever yaw or pitch change.
    """

    def __init__(self, position=(0.0, 0.0, 0.0),
                 world_up=(0.0, 1.0, 0.0),
                 config: Optional[CameraConfig] = None):
        self.config = config or CameraConfig()

        self.position = np.array(position, dtype=np.float64)
        self.world_up = np.array(world_up, dtype=np.float64)

        self.yaw = self.config.yaw_deg
        self.pitch = self.config.pitch_deg
        self.movement_speed = self.config.movement_speed
        self.mouse_sensitivity = self.config.mouse_sensitivity
        self.zoom = self.config.zoom_deg

        self.front = np.zeros(3)
        self.right = np.zeros(3)
        self.up = np.zeros(3)
        self.update_camera_vectors()

    def update_camera_vectors(self) -> None:
        yaw = math.radians(self.yaw)
        pitch = math.radians(self.pitch)
        front = np.array([math.cos(yaw) * math.cos(pitch),
                          math.sin(pitch),
                          math.sin(yaw) * math.cos(pitch)])
        self.front = normalize(front)
        self.right = normalize(np.cross(self.front, self.world_up))
        self.up = normalize(np.cross(self.right, self.front))

    # -----------------------------------------------------------------------
    # Input
    # -----------------------------------------------------------------------

    def process_keyboard(self, direction: CameraMovement, delta_time: float) -> None:
        velocity = self.movement_speed * delta_time

        if direction is CameraMovement.FORWARD:
            self.position += self.front * velocity
        elif direction is CameraMovement.BACKWARD:
            self.position -= self.front * velocity
        elif direction is CameraMovement.LEFT:
            self.position -= self.right * velocity
        elif direction is CameraMovement.RIGHT:
            self.position += self.right * velocity
        elif direction is CameraMovement.UP:
            self.position += self.up * velocity
        elif direction is CameraMovement.DOWN:
            self.position -= self.up * velocity

    def process_mouse_movement(self, x_offset: float, y_offset: float,
                               constrain_pitch: bool = True) -> None:
        self.yaw += x_offset * self.mouse_sensitivity
        self.pitch += y_offset * self.mouse_sensitivity

        # past ±90° the view flips
        if constrain_pitch:
            limit = self.config.pitch_limit_deg
            self.pitch = clamp(self.pitch, -limit, limit)

        self.update_camera_vectors()

    def process_mouse_scroll(self, y_offset: float) -> None:
        """Scroll changes the field of view."""
        self.zoom = clamp(self.zoom - y_offset,
                          self.config.zoom_min_deg, self.config.zoom_max_deg)

    def adjust_speed(self, increase: bool) -> None:
        cfg = self.config
        if increase:
            self.movement_speed = min(self.movement_speed * cfg.speed_factor, cfg.speed_max)
        else:
            self.movement_speed = max(self.movement_speed / cfg.speed_factor, cfg.speed_min)
        logger.info("Speed %s to %.4g ly/s",
                    "increased" if increase else "decreased", self.movement_speed)

    def teleport_to(self, position, offset_z: Optional[float] = None) -> None:
        """Jump next to a point; the camera keeps its orientation."""
        if offset_z is None:
            offset_z = self.config.teleport_offset_ly
        self.position = np.array(position, dtype=np.float64) + np.array([0.0, 0.0, offset_z])
        self.update_camera_vectors()

    def __repr__(self) -> str:
        x, y, z = self.position
        return (f"<Camera at ({x:.4f}, {y:.4f}, {z:.4f}) ly "
                f"yaw={self.yaw:.1f} pitch={self.pitch:.1f} fov={self.zoom:.1f}>")


def spawn_camera(universe=None, config: Optional[CameraConfig] = None) -> Camera:
    """
    Initial camera: just outside the Sun on +Z, looking back down -Z,
    at a gentle 0.1 ly/s.
    """
    cfg = config or CameraConfig()
    sun_radius_ly = 0.0
    if universe is not None:
        sun = universe.lookup("sun")
        if sun is not None:
            sun_radius_ly = sun.radius_ly

    camera = Camera(position=(0.0, 0.0, sun_radius_ly + cfg.spawn_offset_ly), config=cfg)
    camera.movement_speed = cfg.spawn_speed
    logger.info("Camera initialised: %r", camera)
    return camera
