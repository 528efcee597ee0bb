"""Ball-vs-player collision: touch bookkeeping, hit angle/speed/spin, and clashes.

The overlap test treats the ball as its bounding box, not a true circle.
"""

import math

from volley.referee import score_point
from volley.types import (
    AttackState,
    Ball,
    ClashEvent,
    HitEvent,
    MatchPhase,
    MatchState,
    Player,
    Side,
    Vec2,
)
from volley import court


def overlaps(ball: Ball, player: Player) -> bool:
    """Axis-aligned overlap between the ball's bounding box and the player's rectangle."""
    return (
        ball.right > player.pos.x
        and ball.left < player.right
        and ball.bottom > player.pos.y
        and ball.top < player.bottom
    )


def hit_angle(ball: Ball, player: Player) -> float:
    """Deflection angle: +/-45 degrees depending on where the ball met the player.

    0 at the player's vertical midpoint, positive below it, negative above.
    """
    half_h = player.height / 2
    collision_point = (ball.pos.y - (player.pos.y + half_h)) / half_h
    return math.pi * court.HIT_CONE * collision_point


def _deflect(ball: Ball, player: Player) -> None:
    """Compute the post-hit velocity and spin, then move the ball clear of the player."""
    angle = hit_angle(ball, player)
    # Airborne is judged by height, not by the jump flag
    in_air = player.pos.y < court.GROUND_Y
    new_speed = max(ball.speed(), court.MIN_HIT_SPEED)

    if in_air:
        new_speed *= court.AIR_SPEED_BOOST
        ball.vel.y = court.AIR_LIFT
        ball.rotation_speed = new_speed * court.AIR_SPIN_FACTOR
        horizontal_boost = court.AIR_HORIZONTAL_BOOST
    else:
        ball.vel.y = court.GROUND_LIFT
        ball.rotation_speed = new_speed * court.GROUND_SPIN_FACTOR
        horizontal_boost = 1.0

    # Set-then-attack: the second touch in a row hits harder
    if player.touches == 2:
        new_speed *= court.SECOND_TOUCH_BOOST
        ball.vel.y *= court.SECOND_TOUCH_BOOST
        ball.rotation_speed *= court.SECOND_TOUCH_BOOST

    direction = player.side.direction
    ball.vel.x = direction * new_speed * horizontal_boost * math.cos(angle)

    if direction == 1:
        ball.pos.x = player.right + ball.radius
    else:
        ball.pos.x = player.pos.x - ball.radius


def _clash(state: MatchState) -> ClashEvent:
    """Both sides hit at once: the ball pops straight up from mid-height."""
    ball = state.ball
    ball.vel = Vec2(0, court.CLASH_LIFT)
    ball.pos.y = court.COURT_HEIGHT / 2
    state.last_hit_tick = {Side.LEFT: None, Side.RIGHT: None}
    return ClashEvent(pos=ball.pos.copy(), tick=state.tick)


def _is_clash(state: MatchState, side: Side) -> bool:
    other = state.last_hit_tick[side.opposite]
    return other is not None and state.tick - other < court.CLASH_THRESHOLD


def resolve_player_hits(state: MatchState) -> list:
    """Test the ball against both players (left first) and apply every hit.

    Returns HitEvent / ClashEvent, plus the referee's events when a side
    overflows its touch limit.
    """
    events: list = []

    for side in (Side.LEFT, Side.RIGHT):
        player = state.players[side]
        if not overlaps(state.ball, player):
            continue

        state.players[side.opposite].touches = 0
        player.touches += 1
        state.phase = MatchPhase.RALLYING

        if player.touches > player.max_touches:
            # One point only, however far past the limit the counter went
            events.extend(score_point(state, side.opposite, "touches"))
            continue

        _deflect(state.ball, player)
        player.attack = AttackState.STRIKE
        events.append(HitEvent(
            side=side,
            pos=state.ball.pos.copy(),
            tick=state.tick,
            airborne=player.pos.y < court.GROUND_Y,
            touch=player.touches,
        ))

        clash = _is_clash(state, side)
        state.last_hit_tick[side] = state.tick
        if clash:
            events.append(_clash(state))

    return events
