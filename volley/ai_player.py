"""CPU opponent: a reactive controller that chases the ball on its own half.

Produces the same `Intent` a keyboard would, so it plugs into the controller
unchanged. The "classic" playstyle reproduces the arcade's original CPU.
"""

import random

from volley.controller import Intent, Move
from volley.types import MatchState, Side
from volley import court


# CPU playstyle presets
PLAYSTYLES = {
    "classic": {
        "label": "Classic",
        "lookahead": 3,       # ticks of ball travel to anticipate
        "dead_zone": 10,      # px around the CPU centre where it stops moving
        "reaction": 1.0,      # chance per tick to re-aim while the ball is on its half
        "drift_chance": 0.02, # chance per tick to wander while the ball is away
        "jump_reach": 150,    # max horizontal distance to the ball for a jump
        "jump_line": 150,     # ball must be this far above the floor to jump
    },
    "eager": {
        "label": "Eager",
        "lookahead": 5,
        "dead_zone": 6,
        "reaction": 1.0,
        "drift_chance": 0.05,
        "jump_reach": 180,
        "jump_line": 170,
    },
    "lazy": {
        "label": "Lazy",
        "lookahead": 1,
        "dead_zone": 20,
        "reaction": 0.6,
        "drift_chance": 0.01,
        "jump_reach": 100,
        "jump_line": 120,
    },
    "blocker": {
        "label": "Net Blocker",
        "lookahead": 2,
        "dead_zone": 8,
        "reaction": 0.9,
        "drift_chance": 0.0,
        "jump_reach": 120,
        "jump_line": 200,
    },
}


class CpuPlayer:
    """A CPU-controlled side."""

    def __init__(self, name: str, playstyle: str, side: Side):
        """Create a CPU player.

        Args:
            name: Display name.
            playstyle: Key from PLAYSTYLES.
            side: Side.LEFT or Side.RIGHT.
        """
        self.name = name
        self.side = side
        preset = PLAYSTYLES[playstyle]
        self.playstyle = playstyle
        self.label = preset["label"]
        self.lookahead = preset["lookahead"]
        self.dead_zone = preset["dead_zone"]
        self.reaction = preset["reaction"]
        self.drift_chance = preset["drift_chance"]
        self.jump_reach = preset["jump_reach"]
        self.jump_line = preset["jump_line"]
        self._move = Move.NONE

    def ball_on_my_half(self, state: MatchState) -> bool:
        if self.side is Side.LEFT:
            return state.ball.pos.x < court.COURT_WIDTH / 2
        return state.ball.pos.x > court.COURT_WIDTH / 2

    def _chase(self, state: MatchState) -> Move:
        me = state.players[self.side]
        target_x = state.ball.pos.x + state.ball.vel.x * self.lookahead
        if target_x < me.center_x - self.dead_zone:
            return Move.LEFT
        if target_x > me.center_x + self.dead_zone:
            return Move.RIGHT
        return Move.NONE

    def should_jump(self, state: MatchState) -> bool:
        me = state.players[self.side]
        ball = state.ball
        return (
            not me.is_airborne
            and ball.pos.y < court.COURT_HEIGHT - self.jump_line
            and abs(ball.pos.x - me.pos.x) < self.jump_reach
        )

    def decide(self, state: MatchState) -> Intent:
        """Pick this tick's intent from the current match state."""
        if self.ball_on_my_half(state):
            if random.random() < self.reaction:
                self._move = self._chase(state)
        elif random.random() < self.drift_chance:
            self._move = random.choice(list(Move))

        return Intent(move=self._move, jump=self.should_jump(state))
