from mini_invaders.entities import Alien, Bullet
from mini_invaders.scenes.invaders import (
    AlienBulletCollisionSystem,
    BulletAlienCollisionSystem,
    BulletShipCollisionSystem,
    RunStatus,
)


class TestShipBulletsAgainstShip:
    def test_offscreen_bullets_are_dropped(self, world, make_ctx):
        keep = Bullet(100, 300, -5)
        world.bullets = [Bullet(100, -1, -5), keep, Bullet(200, 601, -5)]

        BulletShipCollisionSystem().step(make_ctx())

        assert world.bullets == [keep]
        assert world.status is RunStatus.RUNNING

    def test_touching_the_ship_ends_the_run(self, world, make_ctx):
        ship = world.ship
        world.bullets = [Bullet(ship.x + 5, ship.y + 5, -5)]

        BulletShipCollisionSystem().step(make_ctx())

        assert world.game_over


class TestShipBulletsAgainstAliens:
    def test_hit_destroys_alien_and_scores(self, world, make_ctx):
        target = Alien(380, 50)
        world.aliens = [target]
        world.bullets = [Bullet(390, 60, -5)]

        BulletAlienCollisionSystem().step(make_ctx())

        assert not target.alive
        assert world.score == 1
        assert world.bullets == []

    def test_bullet_destroys_at_most_one_alien(self, world, make_ctx):
        first, second = Alien(100, 100), Alien(100, 100)
        world.aliens = [first, second]
        world.bullets = [Bullet(110, 110, -5)]

        BulletAlienCollisionSystem().step(make_ctx())

        assert world.score == 1
        assert [first.alive, second.alive].count(False) == 1

    def test_dead_aliens_are_not_hit(self, world, make_ctx):
        world.aliens = [Alien(100, 100, alive=False)]
        bullet = Bullet(110, 110, -5)
        world.bullets = [bullet]

        BulletAlienCollisionSystem().step(make_ctx())

        assert world.score == 0
        assert world.bullets == [bullet]

    def test_two_bullets_two_aliens(self, world, make_ctx):
        world.aliens = [Alien(100, 100), Alien(300, 100)]
        world.bullets = [Bullet(110, 110, -5), Bullet(310, 110, -5)]

        BulletAlienCollisionSystem().step(make_ctx())

        assert world.score == 2
        assert world.alive_aliens() == []

    def test_missed_downward_bullet_is_nudged(self, world, make_ctx):
        down = Bullet(700, 300, 5)
        up = Bullet(720, 300, -5)
        world.bullets = [down, up]

        BulletAlienCollisionSystem().step(make_ctx())

        assert down.y == 305
        assert up.y == 300
        assert world.bullets == [down, up]


class TestAlienBullets:
    def test_reaching_bottom_ends_the_run(self, world, make_ctx):
        world.ship.x = 0
        world.alien_bullets = [Bullet(700, 600, 5)]

        AlienBulletCollisionSystem().step(make_ctx())

        assert world.game_over
        assert world.alien_bullets == []

    def test_offscreen_above_is_removed_quietly(self, world, make_ctx):
        world.alien_bullets = [Bullet(700, -3, 5)]

        AlienBulletCollisionSystem().step(make_ctx())

        assert world.alien_bullets == []
        assert not world.game_over

    def test_bullet_in_play_is_kept(self, world, make_ctx):
        bullet = Bullet(700, 300, 5)
        world.alien_bullets = [bullet]

        AlienBulletCollisionSystem().step(make_ctx())

        assert world.alien_bullets == [bullet]
        assert not world.game_over

    def test_hitting_ship_within_margin_ends_the_run(self, world, make_ctx):
        ship = world.ship
        world.alien_bullets = [Bullet(ship.x + ship.width + 2, ship.y, 5)]

        AlienBulletCollisionSystem().step(make_ctx())

        assert world.game_over
        assert world.alien_bullets == []
