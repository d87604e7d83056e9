"""UI rendering utilities for the scroller window.

This module draws the scene and the HUD (score, high score, phase prompts)
from a ``FrameSnapshot``. It never touches engine state.
"""

import math
from typing import Tuple

import pygame

from scroller.config.display import (
    AERIAL_OBSTACLE_COLOR,
    GROUND_COLOR,
    NIGHT_SKY_COLOR,
    OBSTACLE_COLOR,
    PLAYER_COLOR,
    SKY_COLOR,
    TEXT_COLOR,
)
from scroller.simulation.snapshot import FrameSnapshot

PROMPTS = {
    "IDLE": "Press SPACE or ENTER to start",
    "GAME_OVER": "Game over - press SPACE or ENTER to retry",
}


class UIRenderer:
    """Renders the world and HUD for the scroller window.

    Attributes:
        screen: Pygame surface to render to
        stats_font: Font for score and prompts
        ground_top: Screen y where the ground strip begins
    """

    def __init__(self, screen: pygame.Surface, stats_font: pygame.font.Font, ground_top: float) -> None:
        """Initialize the UI renderer.

        Args:
            screen: Pygame surface to render to
            stats_font: Font for rendering the HUD
            ground_top: Screen y of the top of the ground strip
        """
        self.screen = screen
        self.stats_font = stats_font
        self.ground_top = ground_top

    def draw_background(self, night: bool) -> None:
        self.screen.fill(NIGHT_SKY_COLOR if night else SKY_COLOR)
        width, height = self.screen.get_size()
        pygame.draw.rect(
            self.screen, GROUND_COLOR, (0, self.ground_top, width, height - self.ground_top)
        )

    def draw_obstacles(self, snapshot: FrameSnapshot) -> None:
        for obstacle in snapshot.obstacles:
            color = AERIAL_OBSTACLE_COLOR if obstacle.kind == "aerial" else OBSTACLE_COLOR
            for left, top, width, height in obstacle.boxes:
                pygame.draw.rect(self.screen, color, _to_rect(left, top, width, height))

    def draw_player(self, snapshot: FrameSnapshot) -> None:
        player = snapshot.player
        if player.rotation == 0.0:
            pygame.draw.rect(
                self.screen, PLAYER_COLOR, _to_rect(player.x, player.y, player.width, player.height)
            )
            return

        # Tilted bodies are drawn as a rotated surface around the box center
        body = pygame.Surface((int(player.width), int(player.height)), pygame.SRCALPHA)
        body.fill(PLAYER_COLOR)
        rotated = pygame.transform.rotate(body, -math.degrees(player.rotation))
        center = (player.x + player.width / 2, player.y + player.height / 2)
        self.screen.blit(rotated, rotated.get_rect(center=center))

    def draw_hud(self, snapshot: FrameSnapshot) -> None:
        """Draw score, high score and the phase prompt."""
        score = self.stats_font.render(f"Score: {snapshot.score}", True, TEXT_COLOR)
        best = self.stats_font.render(f"Best: {snapshot.high_score}", True, TEXT_COLOR)
        self.screen.blit(score, (10, 10))
        self.screen.blit(best, (self.screen.get_width() - best.get_width() - 10, 10))

        prompt = PROMPTS.get(snapshot.phase)
        if prompt is not None:
            text = self.stats_font.render(prompt, True, TEXT_COLOR)
            x = (self.screen.get_width() - text.get_width()) // 2
            y = (self.screen.get_height() - text.get_height()) // 2
            self.screen.blit(text, (x, y))

    def render(self, snapshot: FrameSnapshot) -> None:
        self.draw_background(snapshot.night)
        self.draw_obstacles(snapshot)
        self.draw_player(snapshot)
        self.draw_hud(snapshot)


def _to_rect(left: float, top: float, width: float, height: float) -> Tuple[int, int, int, int]:
    return (int(left), int(top), int(width), int(height))
