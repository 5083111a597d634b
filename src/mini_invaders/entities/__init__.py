"""
Mini Invaders entities
"""

from __future__ import annotations

from dataclasses import dataclass

from mini_arcade_core.spaces.d2.collision2d import RectCollider
from mini_arcade_core.spaces.geometry.bounds import Position2D, Size2D

from mini_invaders.constants import (
    ALIEN_BULLET_SPEED,
    ALIEN_SIZE,
    ALIEN_SPACING,
    BULLET_HEIGHT,
    BULLET_WIDTH,
    HEIGHT,
    HIT_MARGIN,
    PLAYER_BULLET_SPEED,
    PLAYER_HEIGHT,
    PLAYER_STEP,
    PLAYER_WIDTH,
    WIDTH,
)
from mini_invaders.utils import clamp


def rect_collider(x: float, y: float, width: float, height: float) -> RectCollider:
    return RectCollider(Position2D(x, y), Size2D(width, height))


@dataclass
class Bullet:
    """
    Bullet entity

    The sign of ``speed`` encodes the owner: negative travels up and belongs
    to the ship, positive travels down and belongs to an alien.
    """

    x: float
    y: float
    speed: float
    width: float = BULLET_WIDTH
    height: float = BULLET_HEIGHT

    @property
    def from_alien(self) -> bool:
        return self.speed > 0

    def update(self) -> None:
        """Move the bullet one frame along its velocity."""
        self.y += self.speed

    def offscreen(self, height: float = HEIGHT) -> bool:
        """
        Check if the bullet left the playfield vertically

        :param height: Height of the playfield
        :type height: float

        :return: bool
        :rtype: bool
        """
        return self.y < 0 or self.y > height

    def hits(self, target: Ship | Alien, margin: float = HIT_MARGIN) -> bool:
        """
        Check the bullet against a target rectangle.

        Alien bullets see the target widened by ``margin`` on every side;
        ship bullets test against the exact rectangle. Touching edges count
        as a hit.

        :param target: Ship or alien to test against
        :type target: Ship | Alien

        :param margin: Padding applied for alien bullets
        :type margin: float

        :return: bool
        :rtype: bool
        """
        target_collider = target.collider
        if self.from_alien:
            target_collider = rect_collider(
                target.x - margin,
                target.y - margin,
                target.width + 2 * margin,
                target.height + 2 * margin,
            )

        return self.collider.intersects(target_collider)

    @property
    def collider(self) -> RectCollider:
        return rect_collider(self.x, self.y, self.width, self.height)


@dataclass
class Ship:
    """
    Ship entity
    """

    x: float
    y: float
    width: float = PLAYER_WIDTH
    height: float = PLAYER_HEIGHT

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def collider(self) -> RectCollider:
        return rect_collider(self.x, self.y, self.width, self.height)

    def update(
        self,
        move_left: bool,
        move_right: bool,
        step: float = PLAYER_STEP,
        max_x: float = WIDTH - PLAYER_WIDTH,
    ) -> None:
        """
        Move the ship from the held directions and keep it on the field.
        Left wins when both are held.

        :param move_left: Left is held
        :type move_left: bool

        :param move_right: Right is held
        :type move_right: bool

        :param step: Pixels moved this frame
        :type step: float

        :param max_x: Largest x keeping the ship inside the playfield
        :type max_x: float
        """
        if move_left:
            self.x -= step
        elif move_right:
            self.x += step

        self.x = clamp(self.x, 0, max_x)

    def shoot(
        self,
        bullets: list[Bullet],
        speed: float = PLAYER_BULLET_SPEED,
        size: tuple[float, float] = (BULLET_WIDTH, BULLET_HEIGHT),
    ) -> None:
        """
        Fire a bullet from the top-center of the ship.

        :param bullets: Collection receiving the bullet
        :type bullets: list[Bullet]

        :param speed: Vertical speed of the bullet
        :type speed: float

        :param size: Width and height of the bullet
        :type size: tuple[float, float]
        """
        bw, bh = size
        # bottom of the bullet rests on the top of the ship
        bullets.append(Bullet(self.center_x, self.y - bh, speed, bw, bh))


@dataclass
class Alien:
    """
    Alien entity
    """

    x: float
    y: float
    size: float = ALIEN_SIZE
    alive: bool = True
    row: int = 0
    col: int = 0

    @property
    def width(self) -> float:
        return self.size

    @property
    def height(self) -> float:
        return self.size

    @property
    def collider(self) -> RectCollider:
        return rect_collider(self.x, self.y, self.size, self.size)

    def move(self, speed: float) -> None:
        self.x += speed

    def shift_down(self, offset: float = ALIEN_SIZE + ALIEN_SPACING) -> None:
        self.y += offset

    def destroy(self) -> None:
        self.alive = False

    def shoot(
        self,
        bullets: list[Bullet],
        speed: float = ALIEN_BULLET_SPEED,
        size: tuple[float, float] = (BULLET_WIDTH, BULLET_HEIGHT),
    ) -> None:
        """
        Fire a bullet from the bottom-center of the alien.

        :param bullets: Collection receiving the bullet
        :type bullets: list[Bullet]

        :param speed: Vertical speed of the bullet
        :type speed: float

        :param size: Width and height of the bullet
        :type size: tuple[float, float]
        """
        bw, bh = size
        bullets.append(
            Bullet(self.x + self.size / 2, self.y + self.size, speed, bw, bh)
        )
