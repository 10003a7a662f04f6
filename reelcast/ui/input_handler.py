"""
Input Handler - Translates pygame events to gameplay commands.
This is a THIN ADAPTER - no game logic here.
"""
from typing import Optional

import pygame

from reelcast.engine.scheduler import FrameScheduler
from reelcast.gameplay.game import FishingGame
from reelcast.ui.renderer import Renderer


HOLD_KEYS = (pygame.K_SPACE,)

# Number keys pick a stake option by position
STAKE_KEYS = {
    pygame.K_1: 0,
    pygame.K_2: 1,
    pygame.K_3: 2,
    pygame.K_4: 3,
}


class InputHandler:
    """
    Handles pointer, touch and keyboard input.

    Press/touch/space start an input, release ends it. Leaving the window
    also ends it so a hold cannot get stuck on.
    """

    def __init__(
        self,
        game: FishingGame,
        renderer: Optional[Renderer] = None,
        scheduler: Optional[FrameScheduler] = None,
    ):
        self.game = game
        self.renderer = renderer
        self.scheduler = scheduler

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns True if the game should quit.
        """
        if event.type == pygame.QUIT:
            return True

        if event.type == pygame.KEYDOWN:
            return self.handle_key(event.key)
        if event.type == pygame.KEYUP:
            if event.key in HOLD_KEYS:
                self.game.input_end()
            return False

        # pygame mirrors touches as mouse events; the FINGER events are used instead
        if event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 1 and not getattr(event, "touch", False):
                self.game.input_start()
        elif event.type == pygame.MOUSEBUTTONUP:
            if event.button == 1 and not getattr(event, "touch", False):
                self.game.input_end()
        elif event.type == pygame.FINGERDOWN:
            self.game.input_start()
        elif event.type == pygame.FINGERUP:
            self.game.input_end()
        elif event.type in (pygame.WINDOWLEAVE, pygame.WINDOWFOCUSLOST):
            self.game.input_end()
        elif event.type == pygame.WINDOWMINIMIZED:
            self.game.input_end()
            if self.scheduler is not None:
                self.scheduler.stop()
        elif event.type == pygame.WINDOWRESTORED:
            if self.scheduler is not None:
                self.scheduler.start()
        elif event.type == pygame.VIDEORESIZE:
            if self.renderer is not None:
                self.renderer.set_target(pygame.display.get_surface() or self.renderer.target)

        return False

    def handle_key(self, key: int) -> bool:
        """
        Handle a single key press.
        Returns True if the game should quit.
        """
        if key == pygame.K_ESCAPE:
            return True

        if key in HOLD_KEYS:
            self.game.input_start()
        elif key in STAKE_KEYS:
            options = self.game.settings.economy.stake_options
            index = STAKE_KEYS[key]
            if index < len(options):
                self.game.set_stake(options[index])

        return False
