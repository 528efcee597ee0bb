"""Cosmetic effects driven by match events: screen shake, hit sprites, explosion, animation.

Nothing here writes back into the match state. Effects are rebuilt every tick
from the previous list and the new events.
"""

import random
from dataclasses import dataclass, field

from volley.types import ClashEvent, HitEvent, MatchState, Side

HIT_SHAKE = (10, 10)       # (intensity px, duration ticks)
CLASH_SHAKE = (30, 30)
HIT_SPRITE_FRAMES = 4
HIT_SPRITE_FRAME_TICKS = 3
HIT_SPRITE_LIFT = 30       # sprite is drawn this far above the ball
HIT_FLASH_TICKS = 10
EXPLOSION_TICKS = 60
RUN_FRAME_TICKS = 5
RUN_FRAMES = {Side.LEFT: 4, Side.RIGHT: 3}


@dataclass
class ScreenShake:
    intensity: float = 0.0
    duration: int = 0
    offset: tuple = (0.0, 0.0)

    def start(self, intensity: float, duration: int) -> None:
        self.intensity = intensity
        self.duration = duration

    def update(self) -> None:
        if self.duration > 0:
            self.duration -= 1
            self.offset = (
                (random.random() - 0.5) * self.intensity,
                (random.random() - 0.5) * self.intensity,
            )
        else:
            self.offset = (0.0, 0.0)


@dataclass(frozen=True)
class HitSprite:
    """A short sprite animation at the point of contact."""
    x: float
    y: float
    age: int = 0

    @property
    def frame(self) -> int:
        return self.age // HIT_SPRITE_FRAME_TICKS

    @property
    def alive(self) -> bool:
        return self.frame < HIT_SPRITE_FRAMES

    def aged(self) -> "HitSprite":
        return HitSprite(self.x, self.y, self.age + 1)


@dataclass
class Explosion:
    active: bool = False
    frame: int = 0
    scale: float = 1.0
    opacity: float = 1.0

    def start(self) -> None:
        self.active = True
        self.frame = 0
        self.scale = 1.0
        self.opacity = 1.0

    def update(self) -> None:
        if not self.active:
            return
        self.frame += 1
        self.scale += 0.1
        self.opacity = max(0.0, 1 - self.frame / EXPLOSION_TICKS)
        if self.frame >= EXPLOSION_TICKS:
            self.active = False


@dataclass
class RunAnimation:
    frame: int = 0
    timer: int = 0


@dataclass
class Effects:
    """All cosmetic state for one match view."""
    shake: ScreenShake = field(default_factory=ScreenShake)
    explosion: Explosion = field(default_factory=Explosion)
    sprites: list = field(default_factory=list)  # list[HitSprite]
    hit_flash: dict = field(default_factory=lambda: {Side.LEFT: 0, Side.RIGHT: 0})
    run: dict = field(default_factory=lambda: {Side.LEFT: RunAnimation(), Side.RIGHT: RunAnimation()})

    def update(self, state: MatchState, events: list) -> None:
        """Advance every effect one tick, then start the ones triggered by `events`."""
        self.shake.update()
        self.explosion.update()
        aged = [s.aged() for s in self.sprites]
        self.sprites = [s for s in aged if s.alive]
        self.hit_flash = {side: max(0, t - 1) for side, t in self.hit_flash.items()}
        for side, player in state.players.items():
            self._animate_run(side, player.vel.x != 0)

        new_sprites = []
        for e in events:
            if isinstance(e, HitEvent):
                self.shake.start(*HIT_SHAKE)
                self.hit_flash[e.side] = HIT_FLASH_TICKS
                new_sprites.append(HitSprite(e.pos.x, e.pos.y - HIT_SPRITE_LIFT))
            elif isinstance(e, ClashEvent):
                self.shake.start(*CLASH_SHAKE)
                self.explosion.start()
        self.sprites = self.sprites + new_sprites

    def _animate_run(self, side: Side, moving: bool) -> None:
        anim = self.run[side]
        if not moving:
            anim.frame = 0
            anim.timer = 0
            return
        anim.timer += 1
        if anim.timer > RUN_FRAME_TICKS:
            anim.timer = 0
            anim.frame = (anim.frame + 1) % RUN_FRAMES[side]
