"""Pygame window host for the scroller engine.

The window owns the pygame display and event loop. Each loop iteration it
translates key and mouse events into engine inputs, delivers one frame through a
``FrameScheduler`` with ``pygame.time.get_ticks()`` and draws the engine's
latest snapshot. Closing the window tears the engine down so no further
ticks reach it.
"""

import logging
from typing import Dict, Optional

import pygame

from rendering.ui_renderer import UIRenderer
from scroller.config.display import (
    FLYER_SCREEN_HEIGHT,
    FLYER_SCREEN_WIDTH,
    FRAME_RATE,
    RUNNER_SCREEN_HEIGHT,
    RUNNER_SCREEN_WIDTH,
)
from scroller.config.game_config import BodyKind
from scroller.input import InputKind
from scroller.simulation.clock import FrameScheduler
from scroller.simulation.engine import GameEngine

logger = logging.getLogger(__name__)

KEYDOWN_INPUTS: Dict[int, InputKind] = {
    pygame.K_SPACE: InputKind.JUMP,
    pygame.K_UP: InputKind.JUMP,
    pygame.K_DOWN: InputKind.DUCK_START,
    pygame.K_RETURN: InputKind.START,
}
KEYUP_INPUTS: Dict[int, InputKind] = {
    pygame.K_DOWN: InputKind.DUCK_END,
}
# A left click flaps, or starts a round when tap_to_start is on
POINTER_BUTTON = 1


def input_for_event(event: pygame.event.Event) -> Optional[InputKind]:
    """Map a pygame event to an engine input, or None if it has no meaning."""
    if event.type == pygame.KEYDOWN:
        return KEYDOWN_INPUTS.get(event.key)
    if event.type == pygame.KEYUP:
        return KEYUP_INPUTS.get(event.key)
    if event.type == pygame.MOUSEBUTTONDOWN and event.button == POINTER_BUTTON:
        return InputKind.JUMP
    return None


class GameWindow:
    """A pygame window that plays one engine session.

    Attributes:
        engine: The engine being displayed
        scheduler: Frame source the engine is attached to
        screen: Pygame display surface
        clock: Pygame clock for frame pacing
        ui_renderer: Scene and HUD renderer
    """

    def __init__(self, engine: GameEngine) -> None:
        self.engine = engine
        self.scheduler = FrameScheduler()
        self.clock: pygame.time.Clock = pygame.time.Clock()
        self.screen: Optional[pygame.Surface] = None
        self.ui_renderer: Optional[UIRenderer] = None

    def screen_size(self) -> tuple:
        if self.engine.config.physics.body_kind is BodyKind.FLYER:
            return (FLYER_SCREEN_WIDTH, FLYER_SCREEN_HEIGHT)
        return (RUNNER_SCREEN_WIDTH, RUNNER_SCREEN_HEIGHT)

    def ground_top(self) -> float:
        physics = self.engine.config.physics
        if physics.body_kind is BodyKind.FLYER:
            return physics.floor_y + physics.height
        return self.engine.config.obstacles.ground_line

    def setup_game(self) -> bool:
        """Open the window and attach the engine. Returns False if no display is available."""
        try:
            self.screen = pygame.display.set_mode(self.screen_size())
            pygame.display.set_caption(f"Scroller - {self.engine.config.name}")
        except pygame.error as e:
            logger.error("Couldn't set the display mode: %s", e)
            return False

        self.ui_renderer = UIRenderer(self.screen, pygame.font.Font(None, 28), self.ground_top())
        self.engine.attach(self.scheduler)
        return True

    def handle_events(self) -> bool:
        """Forward input events to the engine. Returns False when the window should close."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
            kind = input_for_event(event)
            if kind is not None:
                self.engine.push_input(kind)
        return True

    def render(self) -> None:
        if self.ui_renderer is None:
            return
        self.ui_renderer.render(self.engine.snapshot())
        pygame.display.flip()

    def run(self) -> None:
        """Run until the window is closed."""
        if not self.setup_game():
            return
        try:
            while self.handle_events():
                self.scheduler.advance(pygame.time.get_ticks())
                self.render()
                self.clock.tick(FRAME_RATE)
        finally:
            self.engine.teardown()

        snapshot = self.engine.snapshot()
        logger.info(
            "Window closed after %d frames: rounds=%d high score=%d",
            snapshot.frame,
            snapshot.round_number,
            snapshot.high_score,
        )


def main(engine: GameEngine) -> None:
    """Entry point for the windowed game."""
    pygame.init()
    try:
        GameWindow(engine).run()
    finally:
        pygame.quit()
