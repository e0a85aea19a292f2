"""The gameplay arena: player movement, shooting, enemy spawning and simple physics."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Iterator, Optional

from skirmish.camera import WINDOW_HEIGHT

Vec2 = tuple[float, float]
Color = tuple[float, float, float, float]

PIXELS_PER_METER = 16.0
GRAVITY: Vec2 = (0.0, -9.81 * PIXELS_PER_METER * 3.0)

WALL_COLOR: Color = (0.2, 0.2, 0.2, 1.0)
FLOOR_COLOR: Color = (0.3, 0.1, 0.1, 1.0)

PLAY_AREA_DIAMETER = WINDOW_HEIGHT
FLOOR_THICKNESS = 5.0

PLAYER_COLOR: Color = (0.2, 0.5, 0.2, 1.0)
PLAYER_SIZE: Vec2 = (10.0, 20.0)
STARTING_PLAYER_HEALTH = 100
PLAYER_START: Vec2 = (0.0, -(PLAY_AREA_DIAMETER * 0.33))

ENEMY_COLOR: Color = (0.5, 0.2, 0.2, 1.0)
ENEMY_SIZE: Vec2 = (10.0, 20.0)
ENEMY_HEALTH = 10
ENEMY_SPAWN_COOLDOWN = 2.0
ENEMY_ATTACK_COOLDOWN = 2.5
MAX_ENEMIES = 25
ENEMY_SPAWN_POSITION: Vec2 = (0.0, -(PLAY_AREA_DIAMETER * 0.33))

CROSSHAIR_COLOR: Color = (1.0, 1.0, 1.0, 0.33)
CROSSHAIR_SIZE: Vec2 = (7.0, 7.0)
CROSSHAIR_Z = 10.0

JUMP_FORCE = 200.0
MOVEMENT_ACCEL = 1000.0
MAX_MOVEMENT_SPEED = 100.0
DEFAULT_MOVEMENT_DAMPING_FACTOR = 0.92

DEFAULT_PLAYER_ATTACK_COOLDOWN = 0.65

BULLET_COLOR: Color = (0.5, 0.5, 1.0, 1.0)
BULLET_SIZE: Vec2 = (5.0, 5.0)
BULLET_Z = 1.0
BULLET_SPEED = 1000.0
BULLET_DAMAGE = 10


@dataclass
class Timer:
    """A one-shot countdown measured in seconds."""

    duration: float
    elapsed: float = 0.0

    @property
    def finished(self) -> bool:
        return self.elapsed >= self.duration

    def tick(self, dt: float) -> bool:
        """Advance by ``dt`` seconds, stopping at the duration; return ``finished``."""
        self.elapsed = min(self.elapsed + max(dt, 0.0), self.duration)
        return self.finished

    def reset(self) -> None:
        self.elapsed = 0.0


class BodyKind(enum.Enum):
    WALL = "wall"
    FLOOR = "floor"
    PLAYER = "player"
    ENEMY = "enemy"


@dataclass
class Body:
    """A rectangular collider; static bodies never move."""

    id: int
    kind: BodyKind
    position: Vec2
    size: Vec2
    color: Color
    velocity: Vec2 = (0.0, 0.0)
    health: Optional[int] = None
    attack_cooldown: Optional[Timer] = None
    damping: Optional[float] = None

    @property
    def dynamic(self) -> bool:
        return self.kind in (BodyKind.PLAYER, BodyKind.ENEMY)


@dataclass
class Bullet:
    """A projectile that ignores gravity and cannot hit the body that fired it."""

    id: int
    source: int
    position: Vec2
    velocity: Vec2
    damage: int = BULLET_DAMAGE
    size: Vec2 = BULLET_SIZE
    color: Color = BULLET_COLOR


def cursor_to_world(
    cursor: Vec2, viewport_size: Vec2, camera_position: Vec2 = (0.0, 0.0), scale: float = 1.0
) -> Vec2:
    """Convert a cursor position in window pixels (y down) to world coordinates (y up)."""
    width, height = viewport_size
    cx, cy = cursor
    return (
        camera_position[0] + (cx - width / 2.0) * scale,
        camera_position[1] - (cy - height / 2.0) * scale,
    )


def _bounds(position: Vec2, size: Vec2) -> tuple[float, float, float, float]:
    x, y = position
    hw, hh = size[0] / 2.0, size[1] / 2.0
    return x - hw, x + hw, y - hh, y + hh


def _overlaps(a_pos: Vec2, a_size: Vec2, b_pos: Vec2, b_size: Vec2) -> bool:
    al, ar, ab, at = _bounds(a_pos, a_size)
    bl, br, bb, bt = _bounds(b_pos, b_size)
    return al < br and bl < ar and ab < bt and bb < at


def _arena(ids: Iterator[int]) -> list[Body]:
    d = PLAY_AREA_DIAMETER
    walls = [(-d, 0.0), (0.0, d), (d, 0.0), (0.0, -d)]
    floors = [
        (-(d * 0.25), -(d * 0.50)),
        (d * 0.25, -(d * 0.25)),
        (-(d * 0.25), 0.0),
        (d * 0.25, d * 0.25),
    ]
    statics = [Body(next(ids), BodyKind.WALL, pos, (d, d), WALL_COLOR) for pos in walls]
    statics += [
        Body(next(ids), BodyKind.FLOOR, pos, (d * 0.5, FLOOR_THICKNESS), FLOOR_COLOR)
        for pos in floors
    ]
    return statics


@dataclass
class GameWorld:
    """The state of one round of gameplay."""

    paused: bool = False
    mouse_position: Vec2 = (0.0, 0.0)
    crosshair: Vec2 = (0.0, 0.0)
    statics: list[Body] = field(init=False)
    player: Body = field(init=False)
    enemies: list[Body] = field(default_factory=list, init=False)
    bullets: list[Bullet] = field(default_factory=list, init=False)
    enemy_spawn_cooldown: Timer = field(
        default_factory=lambda: Timer(ENEMY_SPAWN_COOLDOWN), init=False
    )
    _next_id: int = field(default=1, init=False, repr=False)

    def __post_init__(self) -> None:
        self.statics = _arena(self._ids())
        self.player = Body(
            self._new_id(),
            BodyKind.PLAYER,
            PLAYER_START,
            PLAYER_SIZE,
            PLAYER_COLOR,
            health=STARTING_PLAYER_HEALTH,
            attack_cooldown=Timer(DEFAULT_PLAYER_ATTACK_COOLDOWN),
            damping=DEFAULT_MOVEMENT_DAMPING_FACTOR,
        )

    def _new_id(self) -> int:
        ident = self._next_id
        self._next_id += 1
        return ident

    def _ids(self) -> Iterator[int]:
        while True:
            yield self._new_id()

    @property
    def bodies(self) -> list[Body]:
        return [*self.statics, self.player, *self.enemies]

    def _bullet(self, ident: int) -> Optional[Bullet]:
        return next((b for b in self.bullets if b.id == ident), None)

    def spawn_enemy(self, position: Vec2 = ENEMY_SPAWN_POSITION) -> Body:
        enemy = Body(
            self._new_id(),
            BodyKind.ENEMY,
            position,
            ENEMY_SIZE,
            ENEMY_COLOR,
            health=ENEMY_HEALTH,
            attack_cooldown=Timer(ENEMY_ATTACK_COOLDOWN),
            damping=DEFAULT_MOVEMENT_DAMPING_FACTOR,
        )
        self.enemies.append(enemy)
        return enemy

    def spawn_bullet(self, source: int, position: Vec2, velocity: Vec2) -> Bullet:
        bullet = Bullet(self._new_id(), source, position, velocity)
        self.bullets.append(bullet)
        return bullet

    def jump(self) -> None:
        vx, _ = self.player.velocity
        self.player.velocity = (vx, JUMP_FORCE)

    def move_left(self, dt: float) -> None:
        vx, vy = self.player.velocity
        if vx > -MAX_MOVEMENT_SPEED:
            self.player.velocity = (vx - MOVEMENT_ACCEL * dt, vy)

    def move_right(self, dt: float) -> None:
        vx, vy = self.player.velocity
        if vx < MAX_MOVEMENT_SPEED:
            self.player.velocity = (vx + MOVEMENT_ACCEL * dt, vy)

    def attack(self, target: Optional[Vec2] = None) -> Optional[Bullet]:
        """Fire towards ``target`` (the mouse by default) if the cooldown allows.

        Returns the bullet fired, or None when the player cannot fire or the
        target lies on the player.
        """
        cooldown = self.player.attack_cooldown
        if cooldown is None or not cooldown.finished:
            return None
        tx, ty = self.mouse_position if target is None else target
        px, py = self.player.position
        dx, dy = tx - px, ty - py
        length = math.hypot(dx, dy)
        if length == 0.0:
            return None
        bullet = self.spawn_bullet(
            self.player.id,
            self.player.position,
            (dx / length * BULLET_SPEED, dy / length * BULLET_SPEED),
        )
        cooldown.reset()
        return bullet

    def can_collide(self, first: int, second: int) -> bool:
        """Whether two colliders may touch: a bullet never touches its source."""
        bullet = self._bullet(first)
        if bullet is not None:
            return bullet.source != second
        bullet = self._bullet(second)
        if bullet is not None:
            return bullet.source != first
        return True

    def update(self, dt: float) -> None:
        """Advance the world by ``dt`` seconds."""
        if not self.paused:
            for body in (self.player, *self.enemies):
                if body.attack_cooldown is not None:
                    body.attack_cooldown.tick(dt)
            self.enemy_spawn_cooldown.tick(dt)

        self.crosshair = self.mouse_position
        self._spawn_enemies()
        self._apply_damping()

        if not self.paused:
            self._step_physics(dt)
        self._handle_bullet_collisions()

    def _spawn_enemies(self) -> None:
        if self.enemy_spawn_cooldown.finished and len(self.enemies) < MAX_ENEMIES:
            self.spawn_enemy()
            self.enemy_spawn_cooldown.reset()

    def _apply_damping(self) -> None:
        for body in (self.player, *self.enemies):
            if body.damping is not None:
                vx, vy = body.velocity
                body.velocity = (vx * body.damping, vy)

    def _step_physics(self, dt: float) -> None:
        for body in (self.player, *self.enemies):
            vx, vy = body.velocity
            vx += GRAVITY[0] * dt
            vy += GRAVITY[1] * dt
            body.velocity = (vx, vy)
            self._move_axis(body, 0, vx * dt)
            self._move_axis(body, 1, body.velocity[1] * dt)
        for bullet in self.bullets:
            x, y = bullet.position
            vx, vy = bullet.velocity
            bullet.position = (x + vx * dt, y + vy * dt)

    def _move_axis(self, body: Body, axis: int, delta: float) -> None:
        pos = list(body.position)
        pos[axis] += delta
        half = body.size[axis] / 2.0
        vel = list(body.velocity)
        for wall in self.statics:
            if not _overlaps(tuple(pos), body.size, wall.position, wall.size):
                continue
            wall_half = wall.size[axis] / 2.0
            low = wall.position[axis] - wall_half - half
            high = wall.position[axis] + wall_half + half
            if delta > 0:
                pos[axis] = low
            elif delta < 0:
                pos[axis] = high
            else:
                pos[axis] = low if pos[axis] - low < high - pos[axis] else high
            vel[axis] = 0.0
        body.position = (pos[0], pos[1])
        body.velocity = (vel[0], vel[1])

    def _handle_bullet_collisions(self) -> None:
        colliders: list[tuple[int, Vec2, Vec2]] = [
            (b.id, b.position, b.size) for b in self.bodies
        ] + [(b.id, b.position, b.size) for b in self.bullets]
        damageable = {b.id: b for b in (self.player, *self.enemies)}

        hits = set()
        for bullet in self.bullets:
            hit = False
            for ident, position, size in colliders:
                if ident == bullet.id or ident == bullet.source:
                    continue
                if not self.can_collide(bullet.id, ident):
                    continue
                if not _overlaps(bullet.position, bullet.size, position, size):
                    continue
                target = damageable.get(ident)
                if target is not None and target.health is not None:
                    target.health = max(target.health - bullet.damage, 0)
                hit = True
            if hit:
                hits.add(bullet.id)
        self.bullets = [b for b in self.bullets if b.id not in hits]