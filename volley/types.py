"""Core data types for the volley simulation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from volley import court


@dataclass
class Vec2:
    """2D vector for position and velocity."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vec2":
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> "Vec2":
        return self.__mul__(scalar)

    def magnitude(self) -> float:
        return (self.x**2 + self.y**2) ** 0.5

    def copy(self) -> "Vec2":
        return Vec2(self.x, self.y)


class Side(Enum):
    """Which half of the court a player (or event) belongs to."""
    LEFT = "left"
    RIGHT = "right"

    @property
    def opposite(self) -> "Side":
        return Side.RIGHT if self is Side.LEFT else Side.LEFT

    @property
    def direction(self) -> int:
        """Horizontal sign of a shot hit from this side."""
        return 1 if self is Side.LEFT else -1


class AttackState(Enum):
    NEUTRAL = "neutral"
    WINDUP = "windup"  # jumped, not yet touched the ball
    STRIKE = "strike"  # touched the ball during this jump (or on the ground)


class MatchPhase(Enum):
    SERVING = "serving"
    RALLYING = "rallying"
    POINT_SCORED = "point_scored"
    GAME_WON = "game_won"


@dataclass
class Ball:
    """The ball: a circle whose position is its centre."""
    pos: Vec2 = field(default_factory=lambda: Vec2(court.COURT_WIDTH / 2, court.COURT_HEIGHT / 2))
    vel: Vec2 = field(default_factory=Vec2)
    radius: float = court.BALL_RADIUS
    gravity: float = court.BALL_GRAVITY
    bounce: float = court.BALL_BOUNCE
    friction: float = court.BALL_FRICTION
    rotation: float = 0.0
    rotation_speed: float = 0.0

    @property
    def left(self) -> float:
        return self.pos.x - self.radius

    @property
    def right(self) -> float:
        return self.pos.x + self.radius

    @property
    def top(self) -> float:
        return self.pos.y - self.radius

    @property
    def bottom(self) -> float:
        return self.pos.y + self.radius

    def speed(self) -> float:
        return self.vel.magnitude()

    def copy(self) -> "Ball":
        return Ball(
            pos=self.pos.copy(),
            vel=self.vel.copy(),
            radius=self.radius,
            gravity=self.gravity,
            bounce=self.bounce,
            friction=self.friction,
            rotation=self.rotation,
            rotation_speed=self.rotation_speed,
        )


@dataclass
class Player:
    """A player avatar: an axis-aligned rectangle whose position is its top-left corner."""
    side: Side
    pos: Vec2
    vel: Vec2 = field(default_factory=Vec2)
    width: float = court.PLAYER_WIDTH
    height: float = court.PLAYER_HEIGHT
    is_airborne: bool = False
    attack: AttackState = AttackState.NEUTRAL
    score: int = 0
    touches: int = 0
    max_touches: int = court.MAX_TOUCHES
    game_wins: int = 0

    @property
    def right(self) -> float:
        return self.pos.x + self.width

    @property
    def bottom(self) -> float:
        return self.pos.y + self.height

    @property
    def center_x(self) -> float:
        return self.pos.x + self.width / 2


@dataclass(frozen=True)
class Net:
    """Static net rectangle, anchored to the floor."""
    center_x: float = court.NET_X
    width: float = court.NET_WIDTH
    height: float = court.NET_HEIGHT

    @property
    def left(self) -> float:
        return self.center_x - self.width / 2

    @property
    def right(self) -> float:
        return self.center_x + self.width / 2

    @property
    def top(self) -> float:
        return court.COURT_HEIGHT - self.height


@dataclass
class MatchState:
    """Everything the simulation step owns and mutates each tick."""
    ball: Ball
    players: dict  # dict[Side, Player]
    net: Net = field(default_factory=Net)
    phase: MatchPhase = MatchPhase.SERVING
    tick: int = 0
    last_hit_tick: dict = field(default_factory=lambda: {Side.LEFT: None, Side.RIGHT: None})

    @property
    def left(self) -> Player:
        return self.players[Side.LEFT]

    @property
    def right(self) -> Player:
        return self.players[Side.RIGHT]


# --- Events: emitted by the core, consumed by referee, renderer and audio ---

@dataclass
class WallEvent:
    """The ball touched the side wall behind `side`."""
    side: Side
    tick: int


@dataclass
class HitEvent:
    """A player touched the ball and deflected it."""
    side: Side
    pos: Vec2
    tick: int
    airborne: bool = False
    touch: int = 1


@dataclass
class ClashEvent:
    """Both sides hit the ball within the clash window."""
    pos: Vec2
    tick: int


@dataclass
class PointEvent:
    """A point was awarded to `winner`."""
    winner: Side
    reason: str  # "wall" or "touches"
    tick: int
    score: tuple = (0, 0)  # (left, right) right after the point


@dataclass
class RallyResetEvent:
    tick: int


@dataclass
class GameWonEvent:
    winner: Side
    game_wins: int
    tick: int
    final_score: Optional[tuple] = None  # (left, right) before the reset
