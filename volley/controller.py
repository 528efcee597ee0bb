"""Player controller: input intent to velocity, jump and attack state, plus player physics.

Human input and the CPU heuristic both speak the same `Intent` interface, so a
side can be handed from keyboard to CPU without touching the physics.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from volley.body import clamp_player
from volley.types import AttackState, Net, Player, Side
from volley import court


class Move(Enum):
    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


@dataclass(frozen=True)
class Intent:
    """What a player wants to do this tick."""
    move: Move = Move.NONE
    jump: bool = False


IDLE = Intent()

# Physical key names (pygame naming) per side
KEYMAPS = {
    Side.LEFT: {"left": "a", "right": "d", "jump": "w"},
    Side.RIGHT: {"left": "left", "right": "right", "jump": "up"},
}


def intent_from_keys(pressed: Mapping[str, bool], keymap: Mapping[str, str]) -> Intent:
    """Read one snapshot of the key-state table into an Intent.

    If both horizontal keys are held, left wins.
    """
    if pressed.get(keymap["left"], False):
        move = Move.LEFT
    elif pressed.get(keymap["right"], False):
        move = Move.RIGHT
    else:
        move = Move.NONE
    return Intent(move=move, jump=bool(pressed.get(keymap["jump"], False)))


def apply_intent(player: Player, intent: Intent) -> Player:
    """Set horizontal velocity and, when grounded, start a jump."""
    if intent.move is Move.LEFT:
        player.vel.x = -court.MOVE_SPEED
    elif intent.move is Move.RIGHT:
        player.vel.x = court.MOVE_SPEED
    else:
        player.vel.x = 0

    if intent.jump and not player.is_airborne:
        player.vel.y = court.JUMP_FORCE
        player.is_airborne = True
        player.attack = AttackState.WINDUP
    return player


def integrate_player(player: Player, net: Net) -> Player:
    """Advance one tick of player physics and clamp to the player's half."""
    player.vel.y += court.GRAVITY
    player.pos.x += player.vel.x
    player.pos.y += player.vel.y

    if player.pos.y >= court.GROUND_Y:
        player.pos.y = court.GROUND_Y
        player.vel.y = 0
        player.is_airborne = False
        player.attack = AttackState.NEUTRAL

    return clamp_player(player, net)
