"""Tests for the match state machine."""

from volley.game import step
from volley.referee import create_match, handle_wall, reset_game, score_point
from volley.types import (
    GameWonEvent,
    MatchPhase,
    PointEvent,
    RallyResetEvent,
    Side,
    Vec2,
    WallEvent,
)
from volley import court


def test_create_match():
    """New match: ball at centre at rest, players grounded at their spawn points."""
    state = create_match()
    assert state.ball.pos == Vec2(400, 200)
    assert state.ball.vel == Vec2(0, 0)
    assert state.left.pos == Vec2(court.LEFT_SPAWN_X, court.GROUND_Y)
    assert state.right.pos == Vec2(court.RIGHT_SPAWN_X, court.GROUND_Y)
    assert state.left.side is Side.LEFT
    assert state.phase is MatchPhase.SERVING
    assert state.tick == 0


def test_wall_awards_opposite_side():
    """Ball on the right wall → left scores."""
    state = create_match()
    events = handle_wall(state, WallEvent(side=Side.RIGHT, tick=0))

    assert state.left.score == 1
    assert state.right.score == 0
    assert state.phase is MatchPhase.POINT_SCORED
    assert [type(e) for e in events] == [PointEvent, RallyResetEvent]
    assert events[0].reason == "wall"
    assert events[0].score == (1, 0)


def test_rally_reset_keeps_spin_and_positions():
    """A rally reset re-centres the ball but keeps its rotation and the players' spots."""
    state = create_match()
    state.ball.rotation = 2.5
    state.ball.rotation_speed = 0.3
    state.ball.vel = Vec2(7, -3)
    state.left.pos.x = 100
    state.left.touches = 2
    state.last_hit_tick[Side.LEFT] = 4
    score_point(state, Side.RIGHT, "wall")

    assert state.ball.pos == Vec2(400, 200)
    assert state.ball.vel == Vec2(0, 0)
    assert state.ball.rotation == 2.5
    assert state.ball.rotation_speed == 0.3
    assert state.left.pos.x == 100
    assert state.left.touches == 0
    assert state.last_hit_tick == {Side.LEFT: None, Side.RIGHT: None}


def test_tenth_point_wins_game():
    """Score 9 + 1 → game won, scores reset, game wins incremented."""
    state = create_match()
    state.left.score = 9
    state.right.score = 4
    state.left.pos.x = 50
    events = score_point(state, Side.LEFT, "wall")

    assert state.left.game_wins == 1
    assert state.right.game_wins == 0
    assert state.left.score == 0
    assert state.right.score == 0
    assert state.left.pos.x == court.LEFT_SPAWN_X
    assert state.phase is MatchPhase.GAME_WON
    won = [e for e in events if isinstance(e, GameWonEvent)]
    assert len(won) == 1
    assert won[0].winner is Side.LEFT
    assert won[0].final_score == (10, 4)
    assert events[0].score == (10, 4)


def test_game_wins_accumulate():
    """25 straight points: two games won, 5 points into the third."""
    state = create_match()
    for _ in range(25):
        score_point(state, Side.RIGHT, "touches")

    assert state.right.game_wins == 2
    assert state.right.score == 5
    assert state.left.game_wins == 0
    assert state.left.score == 0


def test_reset_game_keeps_game_wins():
    state = create_match()
    state.left.game_wins = 3
    state.left.score = 7
    reset_game(state)
    assert state.left.game_wins == 3
    assert state.left.score == 0


def test_phase_returns_to_serving_next_step():
    """POINT_SCORED and GAME_WON last one tick, then the next serve starts."""
    state = create_match()
    score_point(state, Side.LEFT, "wall")
    assert state.phase is MatchPhase.POINT_SCORED
    step(state)
    assert state.phase is MatchPhase.SERVING

    state.left.score = 9
    score_point(state, Side.LEFT, "wall")
    assert state.phase is MatchPhase.GAME_WON
    step(state)
    assert state.phase is MatchPhase.SERVING
