"""
Game settings: a frozen snapshot of the tuning constants.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

from mini_invaders import constants as C


class ConfigurationError(ValueError):
    """Raised once at start-up when the constants cannot produce a valid run."""


@dataclass(frozen=True)
class GameSettings:  # pylint: disable=too-many-instance-attributes
    """
    Game settings

    Fixed for the lifetime of a simulation; the defaults are the game's
    constants.
    """

    width: int = C.WIDTH
    height: int = C.HEIGHT
    fps: int = C.FPS

    player_width: int = C.PLAYER_WIDTH
    player_height: int = C.PLAYER_HEIGHT
    player_step: float = C.PLAYER_STEP
    player_offset_y: int = C.PLAYER_OFFSET_Y

    alien_rows: int = C.ALIEN_ROWS
    aliens_per_row: int = C.ALIENS_PER_ROW
    alien_size: int = C.ALIEN_SIZE
    alien_spacing: int = C.ALIEN_SPACING
    alien_origin_x: int = C.ALIEN_ORIGIN_X
    alien_origin_y: int = C.ALIEN_ORIGIN_Y
    alien_speed: float = C.ALIEN_SPEED
    alien_speed_increment: float = C.ALIEN_SPEED_INCREMENT
    alien_shot_probability: float = C.ALIEN_SHOT_PROBABILITY

    player_bullet_speed: float = C.PLAYER_BULLET_SPEED
    alien_bullet_speed: float = C.ALIEN_BULLET_SPEED
    bullet_width: int = C.BULLET_WIDTH
    bullet_height: int = C.BULLET_HEIGHT
    hit_margin: float = C.HIT_MARGIN

    @property
    def row_offset(self) -> int:
        """Vertical distance between two formation rows."""
        return self.alien_size + self.alien_spacing

    @property
    def player_max_x(self) -> int:
        return self.width - self.player_width

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameSettings:
        """
        Build settings from a flat dictionary.

        :param data: Overrides keyed by field name
        :type data: dict[str, Any]

        :return: GameSettings
        :rtype: GameSettings

        :raises KeyError: If a key is not a known setting
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise KeyError(f"Unknown settings: {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def validate(self) -> GameSettings:
        """
        Check the settings describe a playable field.

        :return: self, for chaining
        :rtype: GameSettings

        :raises ConfigurationError: On the first violated constraint
        """
        # pylint: disable=too-many-branches
        if self.fps <= 0:
            raise ConfigurationError(f"fps must be positive, got {self.fps}")
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"playfield must be positive, got {self.width}x{self.height}"
            )
        for name in (
            "player_width",
            "player_height",
            "alien_size",
            "bullet_width",
            "bullet_height",
        ):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive")
        if self.player_width > self.width:
            raise ConfigurationError("player is wider than the playfield")
        if not 0 < self.player_offset_y <= self.height:
            raise ConfigurationError("player row is outside the playfield")
        if self.player_step < 0 or self.alien_spacing < 0:
            raise ConfigurationError("steps and spacing cannot be negative")
        if self.alien_rows <= 0 or self.aliens_per_row <= 0:
            raise ConfigurationError("formation needs at least one alien")

        formation_right = (
            self.alien_origin_x
            + (self.aliens_per_row - 1) * self.row_offset
            + self.alien_size
        )
        formation_bottom = (
            self.alien_origin_y
            + (self.alien_rows - 1) * self.row_offset
            + self.alien_size
        )
        if self.alien_origin_x <= 0 or formation_right >= self.width:
            raise ConfigurationError(
                f"formation spans x={self.alien_origin_x}..{formation_right}, "
                f"outside the playfield width {self.width}"
            )
        if self.alien_origin_y < 0 or formation_bottom >= self.height:
            raise ConfigurationError(
                f"formation spans y={self.alien_origin_y}..{formation_bottom}, "
                f"outside the playfield height {self.height}"
            )

        if self.alien_speed <= 0:
            raise ConfigurationError("alien_speed must be positive")
        if self.alien_speed_increment < 0:
            raise ConfigurationError("alien_speed_increment cannot be negative")
        if not 0.0 <= self.alien_shot_probability <= 1.0:
            raise ConfigurationError("alien_shot_probability must be in [0, 1]")
        if self.player_bullet_speed >= 0:
            raise ConfigurationError("player bullets must travel upwards")
        if self.alien_bullet_speed <= 0:
            raise ConfigurationError("alien bullets must travel downwards")
        if self.hit_margin < 0:
            raise ConfigurationError("hit_margin cannot be negative")
        return self
