"""
Constants for the game.
"""

from __future__ import annotations

FPS = 60
WIDTH = 800
HEIGHT = 600

PLAYER_WIDTH = 40
PLAYER_HEIGHT = 20
PLAYER_STEP = 5  # pixels per frame
PLAYER_OFFSET_Y = 40  # distance from the bottom of the playfield

ALIEN_ROWS = 3
ALIENS_PER_ROW = 10
ALIEN_SIZE = 30
ALIEN_SPACING = 40
ALIEN_ORIGIN_X = 50
ALIEN_ORIGIN_Y = 50
ALIEN_SPEED = 1.0
ALIEN_SPEED_INCREMENT = 0.1
ALIEN_SHOT_PROBABILITY = 0.005  # per alien, per frame

PLAYER_BULLET_SPEED = -5
ALIEN_BULLET_SPEED = 5
BULLET_WIDTH = 2
BULLET_HEIGHT = 10
HIT_MARGIN = 2

# Only used by the front end to throttle SPACE.
BULLET_COOLDOWN_MS = 500

BACKGROUND_COLOR = (0, 0, 0)
PLAYER_COLOR = (255, 255, 255)
ALIEN_COLOR = (0, 255, 0)
BULLET_COLOR = (255, 255, 255)
TEXT_COLOR = (255, 255, 255)
