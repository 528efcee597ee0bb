"""Game simulation: the fixed-tick step and headless CPU-vs-CPU games.

One tick runs, in order:
- input intents → player velocities
- player physics (gravity, ground, court and net clamps)
- CPU decisions (applied now, integrated next tick)
- ball physics → referee reaction to wall contacts
- ball-vs-player collisions → touches, hits, clashes, touch-limit points
"""

from dataclasses import dataclass, field
from typing import Optional

from volley.ai_player import CpuPlayer
from volley.collision import resolve_player_hits
from volley.controller import apply_intent, integrate_player
from volley.physics import integrate_ball
from volley.referee import create_match, handle_wall
from volley.types import (
    ClashEvent,
    GameWonEvent,
    HitEvent,
    MatchPhase,
    MatchState,
    PointEvent,
    Side,
)
from volley import court


def step(
    state: MatchState,
    intents: Optional[dict] = None,
    cpus: Optional[dict] = None,
) -> list:
    """Advance the match by one tick.

    Args:
        state: The match aggregate; mutated in place.
        intents: dict[Side, Intent] for human-controlled sides.
        cpus: dict[Side, CpuPlayer] for CPU-controlled sides. A CPU side
            ignores any human intent given for it.

    Returns:
        Events emitted this tick, in order.
    """
    intents = intents or {}
    cpus = cpus or {}

    state.tick += 1
    if state.phase in (MatchPhase.POINT_SCORED, MatchPhase.GAME_WON):
        state.phase = MatchPhase.SERVING

    for side, intent in intents.items():
        if side not in cpus:
            apply_intent(state.players[side], intent)

    for side in Side:
        integrate_player(state.players[side], state.net)

    for side, cpu in cpus.items():
        apply_intent(state.players[side], cpu.decide(state))

    events: list = []
    for wall_event in integrate_ball(state.ball, state.net, state.tick):
        events.extend(handle_wall(state, wall_event))

    events.extend(resolve_player_hits(state))
    return events


@dataclass
class PointRecord:
    """One finished rally."""
    tick: int
    winner: Side
    reason: str      # "wall" or "touches"
    rally_ticks: int
    hits: int
    score: tuple     # (left, right) right after the point, before any game reset


@dataclass
class GameResult:
    """Full game result with every point."""
    state: MatchState
    points: list          # list[PointRecord]
    winner: Optional[Side]
    ticks: int
    left: CpuPlayer
    right: CpuPlayer
    stats: dict = field(default_factory=dict)


def simulate_game(
    left: CpuPlayer,
    right: CpuPlayer,
    max_ticks: int = court.TICK_RATE * 60 * 20,
    state: Optional[MatchState] = None,
) -> GameResult:
    """Play CPU vs CPU until one side wins a game or `max_ticks` runs out.

    Returns GameResult with all points and stats. `winner` is None on timeout.
    """
    state = state or create_match()
    cpus = {Side.LEFT: left, Side.RIGHT: right}
    points: list[PointRecord] = []
    winner = None

    rally_start = state.tick
    rally_hits = 0
    hits = 0
    airborne_hits = 0
    clashes = 0
    max_speed = 0.0

    for _ in range(max_ticks):
        events = step(state, cpus=cpus)
        max_speed = max(max_speed, state.ball.speed())

        for e in events:
            if isinstance(e, HitEvent):
                hits += 1
                rally_hits += 1
                airborne_hits += e.airborne
            elif isinstance(e, ClashEvent):
                clashes += 1
            elif isinstance(e, PointEvent):
                points.append(PointRecord(
                    tick=e.tick,
                    winner=e.winner,
                    reason=e.reason,
                    rally_ticks=state.tick - rally_start,
                    hits=rally_hits,
                    score=e.score,
                ))
                rally_start = state.tick
                rally_hits = 0
            elif isinstance(e, GameWonEvent):
                winner = e.winner

        if winner is not None:
            break

    stats = _compute_game_stats(points, left, right)
    stats.update({
        "total_hits": hits,
        "airborne_hits": airborne_hits,
        "clashes": clashes,
        "max_ball_speed": round(max_speed, 2),
        "ticks": state.tick,
    })

    return GameResult(
        state=state,
        points=points,
        winner=winner,
        ticks=state.tick,
        left=left,
        right=right,
        stats=stats,
    )


def _compute_game_stats(points: list, left: CpuPlayer, right: CpuPlayer) -> dict:
    """Compute game statistics."""
    left_points = sum(1 for p in points if p.winner is Side.LEFT)
    right_points = sum(1 for p in points if p.winner is Side.RIGHT)

    rally_lengths = [p.rally_ticks for p in points]
    avg_rally = sum(rally_lengths) / max(len(rally_lengths), 1)
    max_rally = max(rally_lengths) if rally_lengths else 0

    reasons = {}
    for p in points:
        reasons[p.reason] = reasons.get(p.reason, 0) + 1

    left_faults = sum(1 for p in points if p.winner is Side.RIGHT and p.reason == "touches")
    right_faults = sum(1 for p in points if p.winner is Side.LEFT and p.reason == "touches")

    return {
        "left_points": left_points,
        "right_points": right_points,
        "total_points": len(points),
        "avg_rally_ticks": round(avg_rally, 1),
        "max_rally_ticks": max_rally,
        "reasons": reasons,
        "left_touch_faults": left_faults,
        "right_touch_faults": right_faults,
        "left_name": left.name,
        "right_name": right.name,
        "left_style": left.label,
        "right_style": right.label,
    }
