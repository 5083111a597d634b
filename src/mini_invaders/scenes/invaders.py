"""
Mini Invaders Scene
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Protocol

from mini_arcade_core.scenes.systems import BaseSystem, SystemPipeline

from mini_invaders.constants import (
    ALIEN_COLOR,
    BULLET_COLOR,
    PLAYER_COLOR,
)
from mini_invaders.entities import Alien, Bullet, Ship
from mini_invaders.settings import GameSettings
from mini_invaders.utils import logger


class RunStatus(str, Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"


@dataclass
class InvadersWorld:
    """
    Mini Invaders World

    All state touched by a simulation step lives here.
    """

    settings: GameSettings
    ship: Ship
    aliens: list[Alien] = field(default_factory=list)
    bullets: list[Bullet] = field(default_factory=list)  # fired by the ship
    alien_bullets: list[Bullet] = field(default_factory=list)
    alien_speed: float = 1.0
    score: int = 0
    status: RunStatus = RunStatus.RUNNING

    @property
    def game_over(self) -> bool:
        return self.status is RunStatus.GAME_OVER

    def alive_aliens(self) -> list[Alien]:
        return [a for a in self.aliens if a.alive]

    def end(self, reason: str) -> None:
        """
        Switch to game over. Later calls are ignored.

        :param reason: Why the run ended, for the log
        :type reason: str
        """
        if self.game_over:
            return
        self.status = RunStatus.GAME_OVER
        logger.info(f"Game over ({reason}), score: {self.score}")


def create_aliens(settings: GameSettings) -> list[Alien]:
    """
    Build a full formation grid.

    :param settings: Game settings
    :type settings: GameSettings

    :return: list[Alien]
    :rtype: list[Alien]
    """
    aliens: list[Alien] = []
    for row in range(settings.alien_rows):
        for col in range(settings.aliens_per_row):
            aliens.append(
                Alien(
                    x=col * settings.row_offset + settings.alien_origin_x,
                    y=row * settings.row_offset + settings.alien_origin_y,
                    size=settings.alien_size,
                    row=row,
                    col=col,
                )
            )
    return aliens


def create_world(settings: GameSettings) -> InvadersWorld:
    ship = Ship(
        x=settings.width / 2,
        y=settings.height - settings.player_offset_y,
        width=settings.player_width,
        height=settings.player_height,
    )
    return InvadersWorld(
        settings=settings,
        ship=ship,
        aliens=create_aliens(settings),
        alien_speed=settings.alien_speed,
    )


@dataclass
class InvadersIntent:
    """
    Input state for one frame.
    """

    move_left: bool = False
    move_right: bool = False
    fire: bool = False


@dataclass
class InvadersTickContext:
    """
    Mini Invaders Tick Context
    """

    world: InvadersWorld
    intent: InvadersIntent
    frame: int


class InvadersSystem:
    """
    Base for the simulation systems: once the run is over, the rest of the
    frame is skipped.
    """

    def enabled(self, ctx: InvadersTickContext) -> bool:
        return not ctx.world.game_over


class RandomSource(Protocol):
    def random(self) -> float: ...


def formation_interval(speed: float, fps: int) -> int:
    """
    Frames between two formation ticks: one second at speed 1, shorter as
    the formation speeds up.

    :param speed: Current formation speed
    :type speed: float

    :param fps: Nominal frame rate
    :type fps: int

    :return: int
    :rtype: int
    """
    return max(1, round(fps / speed))


def move_formation(world: InvadersWorld) -> bool:
    """
    Advance the formation one tick.

    - Move every alive alien by the shared speed
    - If any touched an edge, drop the whole formation one row
    - Ramp up the shared speed

    :param world: World to update
    :type world: InvadersWorld

    :return: Whether an edge was touched
    :rtype: bool
    """
    settings = world.settings
    right_edge = settings.width - settings.alien_size
    aliens = world.alive_aliens()

    hit_edge = False
    for a in aliens:
        a.move(world.alien_speed)
        if a.x <= 0 or a.x >= right_edge:
            hit_edge = True

    if hit_edge:
        for a in aliens:
            a.shift_down(settings.row_offset)

    world.alien_speed += settings.alien_speed_increment
    logger.debug(
        f"Formation tick, edge: {hit_edge}, speed: {world.alien_speed:.2f}"
    )
    return hit_edge


def respawn_aliens(world: InvadersWorld) -> None:
    world.alien_speed = world.settings.alien_speed
    world.aliens = create_aliens(world.settings)
    logger.info(f"Formation respawned, score: {world.score}")


@dataclass
class BulletSpawnSystem(InvadersSystem):
    """
    Fire a ship bullet on the fire trigger.
    """

    name: str = "invaders_bullet_spawn"
    order: int = 10

    def step(self, ctx: InvadersTickContext):
        if not ctx.intent.fire:
            return
        settings = ctx.world.settings
        ctx.world.ship.shoot(
            ctx.world.bullets,
            speed=settings.player_bullet_speed,
            size=(settings.bullet_width, settings.bullet_height),
        )


@dataclass
class ShipSystem(InvadersSystem):
    """
    Move ship based on intent.
    """

    name: str = "invaders_ship"
    order: int = 20

    def step(self, ctx: InvadersTickContext):
        settings = ctx.world.settings
        ctx.world.ship.update(
            ctx.intent.move_left,
            ctx.intent.move_right,
            step=settings.player_step,
            max_x=settings.player_max_x,
        )


@dataclass
class AlienSystem(InvadersSystem):
    """
    Move aliens as a formation on a cadence tied to their speed.
    """

    name: str = "invaders_aliens"
    order: int = 30

    def step(self, ctx: InvadersTickContext):
        w = ctx.world
        interval = formation_interval(w.alien_speed, w.settings.fps)
        if ctx.frame % interval != 0:
            return
        move_formation(w)


@dataclass
class AlienFireSystem(InvadersSystem):
    """
    Every alive alien rolls once per frame to fire.
    """

    name: str = "invaders_alien_fire"
    order: int = 32

    rng: RandomSource = field(default_factory=random.Random)

    def step(self, ctx: InvadersTickContext):
        w = ctx.world
        settings = w.settings
        # dead aliens stay in the list but never fire
        for a in w.alive_aliens():
            if self.rng.random() < settings.alien_shot_probability:
                a.shoot(
                    w.alien_bullets,
                    speed=settings.alien_bullet_speed,
                    size=(settings.bullet_width, settings.bullet_height),
                )
                logger.debug(f"Alien at row {a.row} col {a.col} fired.")


@dataclass
class BulletMoveSystem(InvadersSystem):
    """Moves every bullet, whoever fired it."""

    name: str = "invaders_bullet_move"
    order: int = 35

    def step(self, ctx: InvadersTickContext):
        for b in ctx.world.bullets:
            b.update()
        for b in ctx.world.alien_bullets:
            b.update()


@dataclass
class BulletShipCollisionSystem(InvadersSystem):
    """
    Cull offscreen ship bullets; a ship bullet touching the ship ends the run.
    """

    name: str = "invaders_bullet_ship_collision"
    order: int = 40

    def step(self, ctx: InvadersTickContext):
        w = ctx.world
        bullets = w.bullets
        margin = w.settings.hit_margin

        for i in range(len(bullets) - 1, -1, -1):
            b = bullets[i]
            if b.offscreen(w.settings.height):
                del bullets[i]
                continue
            if b.hits(w.ship, margin):
                w.end("ship hit by its own bullet")
                return


@dataclass
class BulletAlienCollisionSystem(InvadersSystem):
    """Kills aliens hit by ship bullets and removes the bullet."""

    name: str = "invaders_bullet_alien_collision"
    order: int = 45

    def step(self, ctx: InvadersTickContext):
        w = ctx.world
        margin = w.settings.hit_margin

        remaining: list[Bullet] = []
        for b in w.bullets:
            target = next(
                (a for a in w.aliens if a.alive and b.hits(a, margin)), None
            )
            if target is None:
                if b.speed > 0:
                    b.y += b.speed
                remaining.append(b)
                continue

            target.destroy()
            w.score += 1
            logger.debug(
                f"Hit alien at row {target.row} col {target.col}, "
                f"score: {w.score}"
            )
        w.bullets = remaining


@dataclass
class AlienBulletCollisionSystem(InvadersSystem):
    """
    Removes alien bullets leaving the field. Reaching the bottom edge, or
    hitting the ship, ends the run.
    """

    name: str = "invaders_alien_bullet_collision"
    order: int = 50

    def step(self, ctx: InvadersTickContext):
        w = ctx.world
        bullets = w.alien_bullets
        height = w.settings.height
        margin = w.settings.hit_margin

        for i in range(len(bullets) - 1, -1, -1):
            b = bullets[i]
            reached_bottom = b.y >= height
            if b.offscreen(height) or reached_bottom:
                del bullets[i]
                if reached_bottom:
                    w.end("alien bullet reached the bottom")
                    return
                continue
            if b.hits(w.ship, margin):
                del bullets[i]
                w.end("ship hit")
                return


@dataclass
class RespawnSystem(InvadersSystem):
    name: str = "invaders_respawn"
    order: int = 60

    def step(self, ctx: InvadersTickContext):
        if not ctx.world.alive_aliens():
            respawn_aliens(ctx.world)


def default_systems(
    rng: RandomSource | None = None,
) -> list[BaseSystem[InvadersTickContext]]:
    return [
        BulletSpawnSystem(),
        ShipSystem(),
        AlienSystem(),
        AlienFireSystem(rng=rng if rng is not None else random.Random()),
        BulletMoveSystem(),
        BulletShipCollisionSystem(),
        BulletAlienCollisionSystem(),
        AlienBulletCollisionSystem(),
        RespawnSystem(),
    ]


class InvadersSimulation:
    """
    Runs the systems once per frame against a single world.
    """

    def __init__(
        self,
        settings: GameSettings | None = None,
        rng: RandomSource | None = None,
        systems: Iterable[BaseSystem[InvadersTickContext]] | None = None,
    ):
        """
        :param settings: Game settings, validated here
        :type settings: GameSettings | None

        :param rng: Random source for alien fire
        :type rng: RandomSource | None

        :param systems: Replaces the default pipeline
        :type systems: Iterable[BaseSystem[InvadersTickContext]] | None

        :raise ConfigurationError: If the settings are not playable
        """
        self.settings = (settings or GameSettings()).validate()
        self.world = create_world(self.settings)
        self.pipeline: SystemPipeline[InvadersTickContext] = SystemPipeline()
        self.pipeline.extend(
            systems if systems is not None else default_systems(rng)
        )
        logger.debug(
            f"Systems: {', '.join(s.name for s in self.systems)}"
        )

    @property
    def systems(self) -> list[BaseSystem[InvadersTickContext]]:
        return self.pipeline.systems

    @property
    def game_over(self) -> bool:
        return self.world.game_over

    def step(self, intent: InvadersIntent, frame: int) -> None:
        """
        Advance the world one frame. Does nothing once the run is over.

        :param intent: Input state for this frame
        :type intent: InvadersIntent

        :param frame: Frame counter from the driver
        :type frame: int
        """
        if self.world.game_over:
            return

        ctx = InvadersTickContext(world=self.world, intent=intent, frame=frame)
        self.pipeline.step(ctx)


@dataclass(frozen=True)
class DrawCall:
    kind: str  # "ship", "alien" or "bullet"
    x: float
    y: float
    width: float
    height: float
    color: tuple[int, int, int]


@dataclass(frozen=True)
class RenderFrame:
    """
    What the renderer needs for one frame.
    """

    draw_calls: list[DrawCall]
    score: int
    status: RunStatus


def render_frame(world: InvadersWorld) -> RenderFrame:
    """
    Snapshot the drawable state of the world.

    :param world: World to draw
    :type world: InvadersWorld

    :return: RenderFrame
    :rtype: RenderFrame
    """
    ship = world.ship
    calls = [
        DrawCall("ship", ship.x, ship.y, ship.width, ship.height, PLAYER_COLOR)
    ]
    calls.extend(
        DrawCall("alien", a.x, a.y, a.width, a.height, ALIEN_COLOR)
        for a in world.alive_aliens()
    )
    calls.extend(
        DrawCall("bullet", b.x, b.y, b.width, b.height, BULLET_COLOR)
        for b in (*world.bullets, *world.alien_bullets)
    )
    return RenderFrame(draw_calls=calls, score=world.score, status=world.status)
