"""
Mini Invaders game: pygame input, rendering and frame clock around the
simulation.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

import pygame

from mini_invaders.constants import (
    BACKGROUND_COLOR,
    BULLET_COOLDOWN_MS,
    TEXT_COLOR,
)
from mini_invaders.scenes.invaders import (
    InvadersIntent,
    InvadersSimulation,
    RenderFrame,
    RunStatus,
    render_frame,
)
from mini_invaders.settings import GameSettings
from mini_invaders.utils import configure_logging, logger


def cooldown_frames(cooldown_ms: int, fps: int) -> int:
    """
    Convert a cooldown in milliseconds to whole frames at ``fps``.

    :param cooldown_ms: Cooldown in milliseconds
    :type cooldown_ms: int

    :param fps: Nominal frame rate
    :type fps: int

    :return: int
    :rtype: int
    """
    return max(0, round(cooldown_ms * fps / 1000))


@dataclass
class FireThrottle:
    """
    Rate limit for the fire key, applied before the intent reaches the
    simulation.
    """

    cooldown: int
    _last_shot: int | None = field(default=None, init=False)

    def allow(self, frame: int) -> bool:
        """
        Check (and consume) a shot at ``frame``

        :param frame: Current frame
        :type frame: int

        :return: bool
        :rtype: bool
        """
        if self._last_shot is not None and frame - self._last_shot < self.cooldown:
            return False
        self._last_shot = frame
        return True


class MiniInvaders:
    """
    Mini Invaders game window
    """

    _carry_on = True
    _frame = 0
    _fire_pressed = False

    def __init__(
        self, settings: GameSettings | None = None, seed: int | None = None
    ):
        """
        :param settings: Game settings
        :type settings: GameSettings | None

        :param seed: Seed for alien fire
        :type seed: int | None

        :raise ConfigurationError: If the settings are not playable
        """
        self._simulation = InvadersSimulation(
            settings=settings, rng=random.Random(seed)
        )
        self._settings = self._simulation.settings
        self._throttle = FireThrottle(
            cooldown_frames(BULLET_COOLDOWN_MS, self._settings.fps)
        )

        logger.debug("Initializing Mini Invaders")
        pygame.init()
        self._clock = pygame.time.Clock()
        self._screen = pygame.display.set_mode(
            (self._settings.width, self._settings.height)
        )
        pygame.display.set_caption("Mini Invaders")
        self._font = pygame.font.Font(None, 36)

    def handle_events(self):
        """
        Handle the events
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logger.debug("Quitting the game")
                self._carry_on = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._carry_on = False
                elif event.key == pygame.K_SPACE:
                    self._fire_pressed = True

    def _intent(self) -> InvadersIntent:
        keys = pygame.key.get_pressed()
        fire = self._fire_pressed and self._throttle.allow(self._frame)
        self._fire_pressed = False
        return InvadersIntent(
            move_left=bool(keys[pygame.K_LEFT]),
            move_right=bool(keys[pygame.K_RIGHT]),
            fire=fire,
        )

    def handle_game_logic(self):
        """
        Handle the game logic
        """
        self._simulation.step(self._intent(), self._frame)

    def draw_stuff(self, frame: RenderFrame):
        """
        Draw the stuff
        """
        self._screen.fill(BACKGROUND_COLOR)

        if frame.status is RunStatus.GAME_OVER:
            self._draw_game_over(frame.score)
        else:
            for call in frame.draw_calls:
                pygame.draw.rect(
                    self._screen,
                    call.color,
                    pygame.Rect(
                        int(call.x), int(call.y), int(call.width), int(call.height)
                    ),
                )
            score = self._font.render(f"Score: {frame.score}", True, TEXT_COLOR)
            self._screen.blit(score, (10, 10))

        pygame.display.flip()

    def _draw_game_over(self, score: int):
        title = self._font.render("GAME OVER", True, TEXT_COLOR)
        final = self._font.render(f"Score: {score}", True, TEXT_COLOR)
        cx, cy = self._settings.width // 2, self._settings.height // 2
        self._screen.blit(title, title.get_rect(center=(cx, cy - 20)))
        self._screen.blit(final, final.get_rect(center=(cx, cy + 20)))

    def run(self):
        """
        Run the game
        """
        logger.debug("Running the game")

        while self._carry_on:
            self._clock.tick(self._settings.fps)
            self._frame += 1
            self.handle_events()
            self.handle_game_logic()
            self.draw_stuff(render_frame(self._simulation.world))

        pygame.quit()


def run(seed: int | None = None, level: int = logging.INFO):
    """
    Main entry point for Mini Invaders.

    :param seed: Seed for alien fire, random when omitted
    :type seed: int | None

    :param level: Logging level
    :type level: int
    """
    configure_logging(level)
    settings = GameSettings()
    logger.info("Starting Mini Invaders...")
    logger.info(settings.to_dict())
    MiniInvaders(settings=settings, seed=seed).run()


if __name__ == "__main__":
    run()
