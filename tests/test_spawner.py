import pytest

from game.shmup import spawner
from game.shmup.enemies import BossEnemy, EnemyKind, TurretEnemy, WaveEnemy, create_boss
from game.shmup.spawner import WaveState, eligible_types, spawn_wave, wave_interval
from game.shmup.utils import Vector2


def test_no_spawn_while_boss_alive(player):
    roster = [create_boss(1, player)]
    for d in (0, 2.5, 5, 9):
        assert spawn_wave(d, 1, False, player, roster) == []
        assert spawn_wave(d, 1, True, player, roster) == []


def test_boss_spawns_alone_at_threshold(player):
    wave = spawn_wave(5, 3, False, player, [], now=1234)
    assert len(wave) == 1
    boss = wave[0]
    assert isinstance(boss, BossEnemy)
    assert boss.level == 3
    assert boss.type_code == 103
    assert boss.last_shot_time == 1234
    assert (boss.pos.x, boss.pos.y) == (900, 300)


def test_regular_waves_after_boss_defeated(player):
    for _ in range(20):
        wave = spawn_wave(5, 1, True, player, [])
        assert wave
        assert not any(isinstance(e, BossEnemy) for e in wave)


def test_first_wave_is_three_to_five_wave_enemies(player):
    for _ in range(50):
        wave = spawn_wave(0, 1, False, player, [])
        assert 3 <= len(wave) <= 5
        assert all(type(e) is WaveEnemy for e in wave)
        assert [e.pos.x for e in wave] == [800 + i * 80 for i in range(len(wave))]
        assert all(50 <= e.pos.y <= 550 for e in wave)


def test_swarm_fills_five_slots(player, monkeypatch):
    monkeypatch.setattr(spawner.random, "choice", lambda seq: EnemyKind.SWARM)
    for _ in range(20):
        wave = spawn_wave(2, 1, False, player, [])
        assert len(wave) % 5 == 0
        assert len(wave) >= 5


def test_turret_cap_respected(player):
    roster = [TurretEnemy(Vector2(600, 100), player), TurretEnemy(Vector2(600, 300), player)]
    for _ in range(30):
        wave = spawn_wave(4, 1, False, player, roster)
        assert not any(e.kind == EnemyKind.TURRET for e in wave)


def test_turrets_per_wave_never_exceed_cap(player):
    for _ in range(50):
        wave = spawn_wave(4.5, 1, False, player, [])
        assert sum(1 for e in wave if e.kind == EnemyKind.TURRET) <= 2


def test_eligible_types_grow_with_difficulty():
    assert eligible_types(0) == [EnemyKind.WAVE]
    assert eligible_types(1) == [EnemyKind.WAVE, EnemyKind.SHOOTER]
    assert set(eligible_types(2)) == {EnemyKind.WAVE, EnemyKind.SHOOTER, EnemyKind.KAMIKAZE, EnemyKind.SWARM}
    assert len(eligible_types(3)) == 6
    assert EnemyKind.BOSS not in eligible_types(10)


@pytest.mark.parametrize("difficulty,expected", [(0, 5000), (2.5, 4500), (5, 4000), (10, 3000), (50, 3000)])
def test_wave_interval(difficulty, expected):
    assert wave_interval(difficulty) == expected


def test_wave_state_advance_and_reset():
    waves = WaveState()
    assert not waves.due(5000)
    assert waves.due(5001)
    assert waves.wave_number == 1

    waves.advance(5001)
    assert waves.difficulty == 0.5
    assert waves.interval == 4900
    assert waves.last_wave_time == 5001
    assert waves.wave_number == 2

    for _ in range(9):
        waves.advance(6000)
    assert waves.difficulty == 5
    assert waves.wave_number == 11

    waves.reset(7000)
    assert (waves.difficulty, waves.last_wave_time, waves.interval) == (0, 7000, 5000)


def test_turret_cap_holds_across_consecutive_waves(player):
    roster = [TurretEnemy(Vector2(600, 300), player)]
    for _ in range(40):
        roster += spawn_wave(4.5, 1, False, player, roster)
        assert sum(1 for e in roster if e.kind == EnemyKind.TURRET) <= 2
