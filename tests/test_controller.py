"""Tests for the player controller, player physics and boundary clamps."""

import pytest

from volley.body import clamp_ball, clamp_player
from volley.controller import (
    IDLE,
    KEYMAPS,
    Intent,
    Move,
    apply_intent,
    integrate_player,
    intent_from_keys,
)
from volley.types import AttackState, Ball, Net, Player, Side, Vec2
from volley import court


def _grounded(side=Side.LEFT, x=200.0):
    return Player(side=side, pos=Vec2(x, court.GROUND_Y))


def test_move_sets_horizontal_speed():
    """Left/right intents set +/-MOVE_SPEED, no move zeroes it."""
    p = _grounded()
    apply_intent(p, Intent(move=Move.LEFT))
    assert p.vel.x == -court.MOVE_SPEED
    apply_intent(p, Intent(move=Move.RIGHT))
    assert p.vel.x == court.MOVE_SPEED
    apply_intent(p, IDLE)
    assert p.vel.x == 0


def test_jump_from_ground():
    """Jump from the ground: upward impulse, airborne, wind-up."""
    p = _grounded()
    apply_intent(p, Intent(jump=True))
    assert p.vel.y == court.JUMP_FORCE
    assert p.is_airborne is True
    assert p.attack is AttackState.WINDUP


def test_no_double_jump():
    """Jump intent while airborne changes nothing vertical."""
    p = _grounded()
    p.is_airborne = True
    p.vel.y = -3
    p.attack = AttackState.STRIKE
    apply_intent(p, Intent(jump=True))
    assert p.vel.y == -3
    assert p.attack is AttackState.STRIKE


def test_integrate_first_jump_tick():
    """First tick of a jump: gravity added, then position advanced."""
    p = _grounded()
    apply_intent(p, Intent(jump=True))
    integrate_player(p, Net())
    assert p.vel.y == pytest.approx(court.JUMP_FORCE + court.GRAVITY)
    assert p.pos.y == pytest.approx(court.GROUND_Y + court.JUMP_FORCE + court.GRAVITY)
    assert p.is_airborne


def test_landing_regrounds_player():
    """Reaching the ground line snaps to it and resets jump state."""
    p = Player(side=Side.LEFT, pos=Vec2(200, court.GROUND_Y - 1), vel=Vec2(0, 2))
    p.is_airborne = True
    p.attack = AttackState.STRIKE
    integrate_player(p, Net())

    assert p.pos.y == court.GROUND_Y
    assert p.vel.y == 0
    assert p.is_airborne is False
    assert p.attack is AttackState.NEUTRAL


def test_full_jump_lands():
    """A jump returns to the ground within a bounded number of ticks."""
    p = _grounded()
    apply_intent(p, Intent(jump=True))
    peak = p.pos.y
    for _ in range(100):
        integrate_player(p, Net())
        peak = min(peak, p.pos.y)
        if not p.is_airborne:
            break

    assert not p.is_airborne
    assert p.pos.y == court.GROUND_Y
    assert peak < court.GROUND_Y - 150


def test_standing_player_stays_grounded():
    """A standing player never leaves the ground line."""
    p = _grounded()
    for _ in range(10):
        integrate_player(p, Net())
        assert p.pos.y == court.GROUND_Y
        assert not p.is_airborne


def test_left_player_cannot_cross_net():
    """Running right forever stops the left player at the net's left face."""
    net = Net()
    p = _grounded(Side.LEFT)
    for _ in range(200):
        apply_intent(p, Intent(move=Move.RIGHT))
        integrate_player(p, net)
        assert p.pos.x + p.width <= net.left
    assert p.pos.x + p.width == net.left


def test_right_player_cannot_cross_net():
    """Running left forever stops the right player at the net's right face."""
    net = Net()
    p = _grounded(Side.RIGHT, x=court.RIGHT_SPAWN_X)
    for _ in range(200):
        apply_intent(p, Intent(move=Move.LEFT))
        integrate_player(p, net)
        assert p.pos.x >= net.right
    assert p.pos.x == net.right


def test_players_clamped_to_court_walls():
    """Players stop at the outer walls."""
    net = Net()
    left = clamp_player(_grounded(Side.LEFT, x=-25), net)
    right = clamp_player(_grounded(Side.RIGHT, x=court.COURT_WIDTH), net)
    assert left.pos.x == 0
    assert right.pos.x == court.COURT_WIDTH - right.width


def test_clamp_player_uses_side_tag():
    """The same position clamps differently depending on the side tag."""
    net = Net()
    left = clamp_player(_grounded(Side.LEFT, x=390), net)
    right = clamp_player(_grounded(Side.RIGHT, x=390), net)
    assert left.pos.x == net.left - left.width
    assert right.pos.x == net.right


def test_clamp_ball_inside_court():
    """Ball circle is pinned inside the court on both axes."""
    ball = clamp_ball(Ball(pos=Vec2(-5, court.COURT_HEIGHT + 20)))
    assert ball.pos.x == ball.radius
    assert ball.pos.y == court.COURT_HEIGHT - ball.radius


def test_intent_from_keys_left_side():
    """WASD-style mapping for the left side."""
    keymap = KEYMAPS[Side.LEFT]
    assert intent_from_keys({"d": True}, keymap) == Intent(move=Move.RIGHT)
    assert intent_from_keys({"a": True, "w": True}, keymap) == Intent(move=Move.LEFT, jump=True)
    assert intent_from_keys({}, keymap) == IDLE


def test_intent_from_keys_left_wins_tie():
    """Both horizontal keys held: left wins."""
    keymap = KEYMAPS[Side.RIGHT]
    intent = intent_from_keys({"left": True, "right": True}, keymap)
    assert intent.move is Move.LEFT


def test_keymaps_do_not_overlap():
    """The two sides never share a physical key."""
    left_keys = set(KEYMAPS[Side.LEFT].values())
    right_keys = set(KEYMAPS[Side.RIGHT].values())
    assert not left_keys & right_keys
