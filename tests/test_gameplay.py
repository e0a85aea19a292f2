import math

import pytest

from skirmish.gameplay import (
    BULLET_DAMAGE,
    BULLET_SPEED,
    DEFAULT_PLAYER_ATTACK_COOLDOWN,
    ENEMY_HEALTH,
    ENEMY_SPAWN_COOLDOWN,
    FLOOR_THICKNESS,
    JUMP_FORCE,
    MAX_ENEMIES,
    MAX_MOVEMENT_SPEED,
    PLAYER_START,
    STARTING_PLAYER_HEALTH,
    BodyKind,
    GameWorld,
    Timer,
    cursor_to_world,
)


def ready_world():
    world = GameWorld()
    world.player.attack_cooldown.tick(DEFAULT_PLAYER_ATTACK_COOLDOWN)
    return world


def test_timer_finishes_and_resets():
    timer = Timer(1.0)
    assert not timer.finished
    assert timer.tick(0.5) is False
    assert timer.tick(0.75) is True
    assert timer.elapsed == 1.0
    timer.reset()
    assert not timer.finished
    assert timer.elapsed == 0.0


def test_initial_world():
    world = GameWorld()
    assert world.player.position == PLAYER_START
    assert world.player.health == STARTING_PLAYER_HEALTH
    kinds = [b.kind for b in world.statics]
    assert kinds.count(BodyKind.WALL) == 4
    assert kinds.count(BodyKind.FLOOR) == 4
    assert world.enemies == []
    assert len({b.id for b in world.bodies}) == len(world.bodies)


def test_jump_sets_vertical_velocity():
    world = GameWorld()
    world.player.velocity = (3.0, -50.0)
    world.jump()
    assert world.player.velocity == (3.0, JUMP_FORCE)


def test_move_left_and_right_respect_speed_limit():
    world = GameWorld()
    world.move_left(0.01)
    assert world.player.velocity[0] < 0.0
    world.player.velocity = (-MAX_MOVEMENT_SPEED, 0.0)
    world.move_left(0.01)
    assert world.player.velocity[0] == -MAX_MOVEMENT_SPEED
    world.player.velocity = (MAX_MOVEMENT_SPEED, 0.0)
    world.move_right(0.01)
    assert world.player.velocity[0] == MAX_MOVEMENT_SPEED
    world.player.velocity = (0.0, 0.0)
    world.move_right(0.01)
    assert world.player.velocity[0] > 0.0


def test_attack_needs_cooldown():
    world = GameWorld()
    assert world.attack((100.0, 0.0)) is None
    assert world.bullets == []


def test_attack_fires_towards_target():
    world = ready_world()
    px, py = world.player.position
    bullet = world.attack((px + 30.0, py + 40.0))
    assert bullet is not None
    assert bullet.source == world.player.id
    assert math.isclose(math.hypot(*bullet.velocity), BULLET_SPEED)
    assert bullet.velocity[0] > 0 and bullet.velocity[1] > 0
    assert math.isclose(bullet.velocity[1] / bullet.velocity[0], 40.0 / 30.0)
    assert world.attack((px + 30.0, py)) is None
    assert world.bullets == [bullet]


def test_attack_uses_mouse_position_by_default():
    world = ready_world()
    px, py = world.player.position
    world.mouse_position = (px - 10.0, py)
    bullet = world.attack()
    assert bullet.velocity[0] < 0
    assert math.isclose(bullet.velocity[1], 0.0, abs_tol=1e-9)


def test_attack_on_self_position_fires_nothing():
    world = ready_world()
    assert world.attack(world.player.position) is None
    assert world.player.attack_cooldown.finished


def test_can_collide_filters_bullet_source():
    world = ready_world()
    bullet = world.attack((0.0, 300.0))
    wall = world.statics[0]
    assert world.can_collide(bullet.id, world.player.id) is False
    assert world.can_collide(world.player.id, bullet.id) is False
    assert world.can_collide(bullet.id, wall.id) is True
    assert world.can_collide(world.player.id, wall.id) is True


def test_enemy_spawns_after_cooldown():
    world = GameWorld()
    steps = int(ENEMY_SPAWN_COOLDOWN / 0.25)
    for _ in range(steps - 1):
        world.update(0.25)
    assert world.enemies == []
    world.update(0.25)
    assert len(world.enemies) == 1
    assert world.enemies[0].health == ENEMY_HEALTH
    assert not world.enemy_spawn_cooldown.finished


def test_enemy_count_is_capped():
    world = GameWorld()
    for _ in range(int(ENEMY_SPAWN_COOLDOWN / 0.25) * (MAX_ENEMIES + 3)):
        world.update(0.25)
    assert len(world.enemies) == MAX_ENEMIES


def test_paused_world_does_not_spawn_or_move():
    world = GameWorld(paused=True)
    start = world.player.position
    for _ in range(20):
        world.update(0.25)
    assert world.enemies == []
    assert world.player.position == start


def test_bullet_damages_enemy_and_despawns():
    world = GameWorld()
    enemy = world.spawn_enemy((100.0, 100.0))
    world.spawn_bullet(world.player.id, (100.0, 100.0), (BULLET_SPEED, 0.0))
    world.update(0.0)
    assert world.bullets == []
    assert enemy.health == ENEMY_HEALTH - BULLET_DAMAGE


def test_bullet_damage_saturates_at_zero():
    world = GameWorld()
    enemy = world.spawn_enemy((100.0, 100.0))
    enemy.health = BULLET_DAMAGE // 2
    world.spawn_bullet(world.player.id, (100.0, 100.0), (0.0, 0.0))
    world.update(0.0)
    assert enemy.health == 0


def test_bullet_does_not_hit_its_source():
    world = GameWorld()
    world.spawn_bullet(world.player.id, world.player.position, (0.0, 0.0))
    world.update(0.0)
    assert len(world.bullets) == 1
    assert world.player.health == STARTING_PLAYER_HEALTH


def test_bullet_hitting_wall_despawns():
    world = GameWorld()
    wall = world.statics[0]
    world.spawn_bullet(world.player.id, wall.position, (0.0, 0.0))
    world.update(0.0)
    assert world.bullets == []
    assert world.player.health == STARTING_PLAYER_HEALTH


def test_damping_slows_horizontal_motion():
    world = GameWorld(paused=True)
    world.player.velocity = (80.0, 0.0)
    world.update(0.0)
    vx = world.player.velocity[0]
    assert 0.0 < vx < 80.0


def test_crosshair_follows_mouse():
    world = GameWorld()
    world.mouse_position = (12.0, -34.0)
    world.update(0.01)
    assert world.crosshair == (12.0, -34.0)


def test_player_lands_on_floor():
    world = GameWorld()
    for _ in range(400):
        world.update(0.005)
    floor_top = min(
        b.position[1] + b.size[1] / 2 for b in world.statics if b.kind is BodyKind.FLOOR
    )
    bottom = world.player.position[1] - world.player.size[1] / 2
    assert bottom >= floor_top - 1e-6
    assert bottom <= floor_top + FLOOR_THICKNESS
    assert world.player.velocity[1] == pytest.approx(0.0, abs=1e-6)


def test_cursor_to_world_center_is_camera():
    assert cursor_to_world((640.0, 360.0), (1280.0, 720.0), (5.0, 7.0)) == (5.0, 7.0)
    x, y = cursor_to_world((0.0, 0.0), (1280.0, 720.0))
    assert x < 0 and y > 0
    x2, y2 = cursor_to_world((0.0, 0.0), (1280.0, 720.0), scale=2.0)
    assert (x2, y2) == (2 * x, 2 * y)