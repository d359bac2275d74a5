"""
pygame input → camera commands.

    W / S        forward / backward        (held)
    A / D        left / right              (held)
    SPACE / LSHIFT  up / down              (held)
    mouse        look (y inverted: moving the mouse up looks up)
    wheel        zoom
    = / -        speed up / down
    /            open/close the search prompt; type, ENTER to jump, BACKSPACE to edit

Only the translation lives here; the Camera never sees a pygame event.
"""

from __future__ import annotations
from typing import List

import pygame

from .camera import CameraMovement
from .commands import AdjustSpeed, Command, Look, Move, Search, Zoom

MOVEMENT_KEYS = (
    (pygame.K_w, CameraMovement.FORWARD),
    (pygame.K_s, CameraMovement.BACKWARD),
    (pygame.K_a, CameraMovement.LEFT),
    (pygame.K_d, CameraMovement.RIGHT),
    (pygame.K_SPACE, CameraMovement.UP),
    (pygame.K_LSHIFT, CameraMovement.DOWN),
)

SPEED_UP_KEYS = (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS)
SPEED_DOWN_KEYS = (pygame.K_MINUS, pygame.K_KP_MINUS)


class InputMapper:
    """
    Stateful only for the search prompt; everything else is a direct
    event → command translation.
    """

    def __init__(self):
        self.search_mode = False
        self.search_text = ""

    def handle_event(self, event) -> List[Command]:
        if event.type == pygame.MOUSEMOTION:
            dx, dy = event.rel
            return [Look(float(dx), float(-dy))]

        if event.type == pygame.MOUSEWHEEL:
            return [Zoom(float(event.y))]

        if event.type == pygame.TEXTINPUT:
            if self.search_mode and event.text != "/":
                self.search_text += event.text
            return []

        if event.type == pygame.KEYDOWN:
            return self._key_down(event.key)

        return []

    def _key_down(self, key) -> List[Command]:
        if key == pygame.K_SLASH:
            self.search_mode = not self.search_mode
            self.search_text = ""
            return []

        if self.search_mode:
            if key == pygame.K_BACKSPACE:
                self.search_text = self.search_text[:-1]
            elif key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                query = self.search_text.strip()
                self.search_mode = False
                self.search_text = ""
                if query:
                    return [Search(query)]
            elif key == pygame.K_ESCAPE:
                self.search_mode = False
                self.search_text = ""
            return []

        if key in SPEED_UP_KEYS:
            return [AdjustSpeed(True)]
        if key in SPEED_DOWN_KEYS:
            return [AdjustSpeed(False)]
        return []

    def movement_commands(self, pressed, delta_time: float) -> List[Command]:
        """
        Held-key movement for one frame. `pressed` is pygame.key.get_pressed()
        or anything indexable by key code.
        """
        if self.search_mode:
            return []
        return [Move(direction, delta_time)
                for key, direction in MOVEMENT_KEYS if pressed[key]]
