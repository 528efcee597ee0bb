"""Boundary clamps shared by the ball and the players."""

from volley.types import Ball, Net, Player, Side
from volley import court


def clamp_ball(ball: Ball) -> Ball:
    """Pin the ball's circle inside the court."""
    ball.pos.x = min(max(ball.pos.x, ball.radius), court.COURT_WIDTH - ball.radius)
    ball.pos.y = min(max(ball.pos.y, ball.radius), court.COURT_HEIGHT - ball.radius)
    return ball


def clamp_player(player: Player, net: Net) -> Player:
    """Pin a player's rectangle inside the court and on its own side of the net.

    Left players keep their right edge at or before the net's left face,
    right players keep their left edge at or after the net's right face.
    """
    x = min(max(player.pos.x, 0.0), court.COURT_WIDTH - player.width)
    if player.side is Side.LEFT:
        x = min(x, net.left - player.width)
    else:
        x = max(x, net.right)
    player.pos.x = x
    player.pos.y = min(max(player.pos.y, 0.0), court.COURT_HEIGHT - player.height)
    return player
