"""Match state machine: points, rally resets, game wins.

Rules:
- Ball touches a side wall → point to the opposite side
- Third consecutive touch by one side → point to the opposite side
- First to 10 wins the game; game wins persist, the score pair resets
"""

from volley.types import (
    AttackState,
    Ball,
    GameWonEvent,
    MatchPhase,
    MatchState,
    Player,
    PointEvent,
    RallyResetEvent,
    Side,
    Vec2,
    WallEvent,
)
from volley import court


def _spawn_x(side: Side) -> float:
    return court.LEFT_SPAWN_X if side is Side.LEFT else court.RIGHT_SPAWN_X


def _respawn(player: Player) -> None:
    player.pos = Vec2(_spawn_x(player.side), court.GROUND_Y)
    player.vel = Vec2()
    player.is_airborne = False
    player.attack = AttackState.NEUTRAL


def create_match() -> MatchState:
    """Create a new match: ball at centre, both players at their spawn points."""
    players = {
        side: Player(side=side, pos=Vec2(_spawn_x(side), court.GROUND_Y))
        for side in Side
    }
    return MatchState(ball=Ball(), players=players)


def reset_rally(state: MatchState) -> list:
    """Re-centre the ball and clear the touch bookkeeping. Rotation is kept."""
    state.ball.pos = Vec2(court.COURT_WIDTH / 2, court.COURT_HEIGHT / 2)
    state.ball.vel = Vec2()
    for player in state.players.values():
        player.touches = 0
    state.last_hit_tick = {Side.LEFT: None, Side.RIGHT: None}
    return [RallyResetEvent(tick=state.tick)]


def reset_game(state: MatchState) -> list:
    """Start a new game: scores to 0, players to spawn, fresh rally. Game wins are kept."""
    for player in state.players.values():
        player.score = 0
        _respawn(player)
    return reset_rally(state)


def score_point(state: MatchState, winner: Side, reason: str) -> list:
    """Award exactly one point to `winner` and reset the rally or the game.

    Returns the emitted events (PointEvent, optional GameWonEvent, RallyResetEvent).
    """
    player = state.players[winner]
    player.score += 1
    events: list = [PointEvent(
        winner=winner,
        reason=reason,
        tick=state.tick,
        score=(state.left.score, state.right.score),
    )]

    if player.score >= court.WIN_THRESHOLD:
        player.game_wins += 1
        events.append(GameWonEvent(
            winner=winner,
            game_wins=player.game_wins,
            tick=state.tick,
            final_score=(state.left.score, state.right.score),
        ))
        events.extend(reset_game(state))
        state.phase = MatchPhase.GAME_WON
    else:
        events.extend(reset_rally(state))
        state.phase = MatchPhase.POINT_SCORED

    return events


def handle_wall(state: MatchState, event: WallEvent) -> list:
    """The side whose wall the ball touched concedes the point."""
    return score_point(state, event.side.opposite, "wall")
