"""Tests for the fixed-tick step and headless CPU games."""

import random

from volley.ai_player import CpuPlayer
from volley.controller import Intent, Move
from volley.game import simulate_game, step
from volley.referee import create_match
from volley.types import ClashEvent, HitEvent, PointEvent, Side, Vec2
from volley import court


def _cpus(left_style="classic", right_style="eager"):
    return {
        Side.LEFT: CpuPlayer("L", left_style, Side.LEFT),
        Side.RIGHT: CpuPlayer("R", right_style, Side.RIGHT),
    }


def test_step_advances_tick():
    state = create_match()
    step(state)
    step(state)
    assert state.tick == 2


def test_right_wall_scores_for_left():
    """Ball driven into the right wall: left scores and the ball is re-centred at rest."""
    state = create_match()
    state.ball.pos = Vec2(791, 100)
    state.ball.vel = Vec2(5, 0)
    events = step(state)

    assert state.left.score == 1
    assert state.right.score == 0
    assert state.ball.pos == Vec2(400, 200)
    assert state.ball.vel == Vec2(0, 0)
    assert isinstance(events[0], PointEvent)
    assert events[0].winner is Side.LEFT
    assert events[0].reason == "wall"


def test_third_touch_through_step():
    """Left already on two touches meets the ball again: right scores."""
    state = create_match()
    state.ball.pos = Vec2(220, 370)
    state.left.touches = 2
    events = step(state)

    assert state.right.score == 1
    assert state.ball.pos == Vec2(400, 200)
    assert not any(isinstance(e, HitEvent) for e in events)


def test_human_intent_moves_player():
    """Player velocity set this tick is integrated on the same tick."""
    state = create_match()
    step(state, intents={Side.LEFT: Intent(move=Move.RIGHT, jump=True)})
    assert state.left.pos.x == court.LEFT_SPAWN_X + court.MOVE_SPEED
    assert state.left.is_airborne


def test_cpu_side_ignores_human_intent():
    """A CPU-controlled side never applies keyboard intents."""
    random.seed(1)
    state = create_match()
    cpus = {Side.LEFT: CpuPlayer("L", "classic", Side.LEFT)}
    step(state, intents={Side.LEFT: Intent(jump=True)}, cpus=cpus)

    assert state.left.is_airborne is False
    assert state.left.vel.y == 0


def test_invariants_hold_through_cpu_play():
    """Across a CPU game: net never crossed, ball inside the court, touch reset on every hit."""
    random.seed(11)
    state = create_match()
    cpus = _cpus()
    net = state.net

    for _ in range(court.TICK_RATE * 30):
        events = step(state, cpus=cpus)

        assert state.left.right <= net.left
        assert state.right.pos.x >= net.right
        assert state.ball.radius <= state.ball.pos.x <= court.COURT_WIDTH - state.ball.radius
        assert state.ball.radius <= state.ball.pos.y <= court.COURT_HEIGHT - state.ball.radius

        hits = [e for e in events if isinstance(e, HitEvent)]
        other = [e for e in events if isinstance(e, (PointEvent, ClashEvent))]
        if len(hits) == 1 and not other:
            hitter = hits[0].side
            assert state.players[hitter.opposite].touches == 0
            assert 1 <= state.players[hitter].touches <= court.MAX_TOUCHES


def test_simulate_game_result():
    """A bounded CPU game returns consistent points and stats."""
    random.seed(5)
    result = simulate_game(
        CpuPlayer("L", "classic", Side.LEFT),
        CpuPlayer("R", "lazy", Side.RIGHT),
        max_ticks=court.TICK_RATE * 60,
    )

    assert result.ticks <= court.TICK_RATE * 60
    s = result.stats
    for key in ("left_points", "right_points", "total_points", "avg_rally_ticks",
                "max_rally_ticks", "reasons", "left_touch_faults", "right_touch_faults",
                "total_hits", "airborne_hits", "clashes", "max_ball_speed", "ticks"):
        assert key in s
    assert s["total_points"] == len(result.points)
    assert s["left_points"] + s["right_points"] == s["total_points"]
    assert sum(s["reasons"].values()) == s["total_points"]
    assert s["airborne_hits"] <= s["total_hits"]
    assert s["left_style"] == "Classic"
    for point in result.points:
        assert point.reason in ("wall", "touches")
        assert 1 <= max(point.score) <= court.WIN_THRESHOLD


def test_simulate_game_stops_at_tenth_point():
    """A game one point from the end finishes on the next point with the winner on ten."""
    random.seed(2)
    state = create_match()
    state.left.score = 9
    state.ball.pos = Vec2(791, 100)
    state.ball.vel = Vec2(5, 0)
    result = simulate_game(
        CpuPlayer("L", "eager", Side.LEFT),
        CpuPlayer("R", "lazy", Side.RIGHT),
        max_ticks=court.TICK_RATE,
        state=state,
    )

    assert result.winner is Side.LEFT
    assert result.ticks == 1
    assert len(result.points) == 1
    last = result.points[-1]
    assert last.winner is Side.LEFT
    assert last.reason == "wall"
    assert last.score == (court.WIN_THRESHOLD, 0)
    assert result.state.left.game_wins == 1
    assert result.state.left.score == 0


def test_seeded_games_are_deterministic():
    """Same seed, same game."""
    outcomes = []
    for _ in range(2):
        random.seed(42)
        result = simulate_game(
            CpuPlayer("L", "classic", Side.LEFT),
            CpuPlayer("R", "blocker", Side.RIGHT),
            max_ticks=court.TICK_RATE * 20,
        )
        outcomes.append((
            [(p.tick, p.winner, p.reason) for p in result.points],
            result.stats["total_hits"],
            result.state.ball.pos,
        ))
    assert outcomes[0] == outcomes[1]
