"""Ball physics: gravity, friction, wall/floor/ceiling bounces and net collision."""

from typing import Optional

from volley.types import Ball, Net, Side, WallEvent
from volley import court


def _apply_gravity(ball: Ball) -> Ball:
    ball.vel.y += ball.gravity
    return ball


def _apply_friction(ball: Ball) -> Ball:
    ball.vel.x *= ball.friction
    ball.vel.y *= ball.friction
    return ball


def _check_walls(ball: Ball, tick: int) -> tuple[Ball, list[WallEvent]]:
    """Bounce off the side walls. Each wall contact is reported for scoring."""
    events: list[WallEvent] = []

    if ball.right > court.COURT_WIDTH:
        ball.pos.x = court.COURT_WIDTH - ball.radius
        ball.vel.x *= -ball.bounce
        events.append(WallEvent(side=Side.RIGHT, tick=tick))

    if ball.left < 0:
        ball.pos.x = ball.radius
        ball.vel.x *= -ball.bounce
        events.append(WallEvent(side=Side.LEFT, tick=tick))

    return ball, events


def _check_floor_and_ceiling(ball: Ball) -> Ball:
    """Bounce off the floor (never slower than MIN_BOUNCE_SPEED) and the ceiling."""
    if ball.bottom > court.COURT_HEIGHT:
        ball.pos.y = court.COURT_HEIGHT - ball.radius
        ball.vel.y *= -ball.bounce
        # Keeps the ball from ever settling on the floor
        if abs(ball.vel.y) < court.MIN_BOUNCE_SPEED:
            ball.vel.y = -court.MIN_BOUNCE_SPEED
        ball.vel.x *= court.FLOOR_DRAG

    if ball.top < 0:
        ball.pos.y = ball.radius
        ball.vel.y *= -ball.bounce

    return ball


def _check_net_collision(ball: Ball, net: Net) -> bool:
    """Reflect the ball off the net and push it outside the near face."""
    if ball.right > net.left and ball.left < net.right and ball.bottom > net.top:
        ball.vel.x *= -ball.bounce
        if ball.pos.x < net.center_x:
            ball.pos.x = net.left - ball.radius
        else:
            ball.pos.x = net.right + ball.radius
        return True
    return False


def integrate_ball(ball: Ball, net: Net, tick: int = 0) -> list[WallEvent]:
    """Advance the ball by one tick.

    Order: gravity, position, friction, walls, floor/ceiling, net, rotation.
    Returns the side-wall contacts of this tick; scoring is left to the referee.
    """
    _apply_gravity(ball)
    ball.pos.x += ball.vel.x
    ball.pos.y += ball.vel.y
    _apply_friction(ball)

    ball, events = _check_walls(ball, tick)
    _check_floor_and_ceiling(ball)
    _check_net_collision(ball, net)

    ball.rotation += ball.rotation_speed
    return events


def simulate(ball: Ball, net: Optional[Net] = None, ticks: int = 60) -> tuple[list[Ball], list[WallEvent]]:
    """Run free ball flight (no players) for a number of ticks.

    Returns (states, events) where states holds a copy of the ball after every tick.
    """
    net = net or Net()
    state = ball.copy()
    states = [state.copy()]
    all_events: list[WallEvent] = []

    for t in range(1, ticks + 1):
        all_events.extend(integrate_ball(state, net, t))
        states.append(state.copy())

    return states, all_events
