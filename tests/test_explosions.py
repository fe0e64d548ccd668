import pytest

from game.shmup.explosions import (
    Burst,
    ExplosionEffect,
    ScreenFlash,
    boss_explosion,
    kamikaze_explosion,
    regular_explosion,
    swarm_explosion,
)
from game.shmup.utils import Vector2

RED = (255, 0, 0)
DARK = (200, 50, 50)


def test_effect_grows_and_fades_until_finished():
    fx = ExplosionEffect(Vector2(0, 0), radius=10, alpha=1.0, growth_rate=2, fade_rate=63.75)
    fx.update()
    assert fx.radius == 12
    assert fx.alpha == pytest.approx(0.75)
    assert not fx.finished

    for _ in range(3):
        fx.update()
    assert fx.finished
    assert fx.alpha == 0.0

    radius = fx.radius
    fx.update()
    assert fx.radius == radius
    assert fx.alpha == 0.0


def test_regular_table():
    effects = regular_explosion(100, 200, RED, DARK)
    assert len(effects) == 4
    main = effects[0]
    assert (main.radius, main.alpha, main.growth_rate, main.fade_rate) == (15, 1.0, 2.5, 5)
    assert [e.radius for e in effects[1:]] == [18, 26, 34]
    assert [e.alpha for e in effects[1:]] == pytest.approx([0.55, 0.4, 0.25])
    assert [e.growth_rate for e in effects[1:]] == [3.5, 4.0, 4.5]
    assert all(e.fade_rate == 4 for e in effects[1:])
    assert all(e.color == RED and e.secondary_color == DARK for e in effects)


def test_swarm_table_is_gentler():
    effects = swarm_explosion(0, 0, RED, DARK)
    assert len(effects) == 3
    assert [e.alpha for e in effects[1:]] == pytest.approx([0.5, 0.3])
    assert [e.growth_rate for e in effects[1:]] == [3.0, 3.5]


def test_kamikaze_adds_one_large_faint_ripple():
    effects = kamikaze_explosion(0, 0, RED, DARK)
    assert len(effects) == 5
    extra = effects[-1]
    assert (extra.radius, extra.alpha, extra.growth_rate, extra.fade_rate) == (25, 0.4, 4, 3)


def test_boss_table():
    effects = boss_explosion(0, 0, RED, DARK)
    assert len(effects) == 6
    assert (effects[0].radius, effects[0].fade_rate) == (30, 3)
    assert [e.radius for e in effects[1:]] == [35, 50, 65, 80, 95]
    assert [e.fade_rate for e in effects[1:]] == [2.5, 3.0, 3.5, 4.0, 4.5]
    assert [e.alpha for e in effects[1:]] == pytest.approx([0.68, 0.56, 0.44, 0.32, 0.2])


def test_burst_and_flash_finish():
    burst = Burst(Vector2(0, 0))
    for _ in range(26):
        burst.update()
    assert burst.finished
    assert burst.size == 50 + 26 * 5

    flash = ScreenFlash()
    for _ in range(19):
        flash.update()
    assert not flash.finished
    flash.update()
    assert flash.finished
