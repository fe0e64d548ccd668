import pytest

from game.shmup.entities import Bullet, Mine, PlayerShip, ProjectileKind
from game.shmup.utils import Vector2


def test_bullet_moves_linearly():
    b = Bullet(Vector2(10, 10), Vector2(3, -1))
    b.update()
    b.update()
    assert (b.pos.x, b.pos.y) == (16, 8)
    assert b.kind is ProjectileKind.BULLET


@pytest.mark.parametrize("x,y", [(-1, 300), (801, 300), (400, -1), (400, 601)])
def test_bullet_off_screen_on_every_side(x, y):
    assert Bullet(Vector2(x, y), Vector2(0, 0)).is_off_screen(800, 600)


def test_bullet_inside_playfield_is_kept():
    assert not Bullet(Vector2(400, 300), Vector2(0, 0)).is_off_screen(800, 600)


def _mine_on(target, created_at=0.0):
    cx = target.pos.x + target.display_width / 2
    cy = target.pos.y + target.display_height / 2
    return Mine(Vector2(cx, cy), Vector2(0, 0), created_at=created_at)


def test_mine_lifecycle():
    mine = Mine(Vector2(100, 100), Vector2(0, 0), created_at=1000)
    assert mine.kind is ProjectileKind.MINE

    assert mine.update(now=4000) is False  # exactly the fuse, still armed
    assert not mine.detonated
    assert mine.detonation_radius == 0

    assert mine.update(now=4001) is False
    assert mine.detonated
    assert mine.detonation_radius == 5

    removed = False
    ticks = 1
    while not removed:
        removed = mine.update(now=4001 + ticks)
        ticks += 1
    # grows 5 per tick and is spent once past 100
    assert mine.detonation_radius == 105
    assert ticks == 21


def test_mine_never_collides_before_detonation():
    target = PlayerShip(pos=Vector2(100, 100))
    mine = _mine_on(target)
    for now in (0, 1000, 2999, 3000):
        mine.update(now)
        assert not mine.check_collision(target)


def test_mine_collision_uses_radius_plus_average_hitbox():
    target = PlayerShip(pos=Vector2(100, 100))  # hitbox 50x50 -> reach 25
    mine = _mine_on(target)
    mine.pos.x += 35  # 35 px from the target center
    mine.update(now=3001)  # detonates, radius 5
    assert mine.detonated
    assert not mine.check_collision(target)

    mine.update(now=3002)  # radius 10: 35 < 35 is false
    assert not mine.check_collision(target)

    mine.update(now=3003)  # radius 15
    assert mine.check_collision(target)


def test_mine_explosion_has_main_and_three_ripples():
    effects = Mine(Vector2(50, 60), Vector2(0, 0), created_at=0).create_explosion()
    assert len(effects) == 4
    assert effects[0].radius == 20
    assert [e.radius for e in effects[1:]] == [25, 35, 45]
    assert all((e.pos.x, e.pos.y) == (50, 60) for e in effects)


def test_mine_off_screen_uses_radius_margin():
    mine = Mine(Vector2(-10, 300), Vector2(0, 0), created_at=0)  # radius 10
    assert not mine.is_off_screen(800, 600)
    for x, y in [(-10.5, 300), (810.5, 300), (400, -10.5), (400, 610.5)]:
        mine.pos = Vector2(x, y)
        assert mine.is_off_screen(800, 600)
    mine.pos = Vector2(810, 610)
    assert not mine.is_off_screen(800, 600)
