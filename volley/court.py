"""Court dimensions, physical constants, and match rules.

All values are in screen units (pixels) and ticks. The y axis grows downward,
so negative vertical velocity moves a body up. One tick is one frame at 60 Hz.
"""

# Court: fixed for the session
COURT_WIDTH = 800
COURT_HEIGHT = 400
TICK_RATE = 60

# Net: anchored to the floor at the centre of the court
NET_WIDTH = 5
NET_HEIGHT = 100
NET_X = COURT_WIDTH / 2

# Players
PLAYER_WIDTH = 40
PLAYER_HEIGHT = 60
GROUND_Y = COURT_HEIGHT - PLAYER_HEIGHT  # top edge of a standing player
GRAVITY = 0.5
JUMP_FORCE = -15
MOVE_SPEED = 5
LEFT_SPAWN_X = COURT_WIDTH / 4
RIGHT_SPAWN_X = COURT_WIDTH / 4 * 3

# Ball
BALL_RADIUS = 10
BALL_GRAVITY = 0.3
BALL_BOUNCE = 0.8  # restitution against walls, floor and net
BALL_FRICTION = 0.98  # per-tick velocity decay on both axes
MIN_BOUNCE_SPEED = 4  # floor bounces never leave the ball slower than this
FLOOR_DRAG = 0.95  # extra horizontal decay on floor contact

# Hits
MIN_HIT_SPEED = 8
HIT_CONE = 0.25  # fraction of pi: +/-45 degrees around the player's midline
AIR_SPEED_BOOST = 1.5
AIR_HORIZONTAL_BOOST = 1.3
AIR_LIFT = -18
GROUND_LIFT = -12
AIR_SPIN_FACTOR = 0.03
GROUND_SPIN_FACTOR = 0.02
SECOND_TOUCH_BOOST = 1.5
CLASH_LIFT = -20

# Rules
MAX_TOUCHES = 2
WIN_THRESHOLD = 10
CLASH_THRESHOLD = 5  # ticks
