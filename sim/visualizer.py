"""Pygame front-end: keyboard input, rendering and sound around the fixed-tick engine."""

import math
import os

try:
    import pygame
except ImportError:
    pygame = None

from volley.ai_player import CpuPlayer, PLAYSTYLES
from volley.controller import KEYMAPS, intent_from_keys
from volley.game import step
from volley.referee import create_match, reset_game
from volley.types import (
    AttackState,
    ClashEvent,
    GameWonEvent,
    HitEvent,
    MatchState,
    Player,
    RallyResetEvent,
    Side,
)
from volley import court
from sim.effects import Effects

WIN_W = court.COURT_WIDTH
WIN_H = court.COURT_HEIGHT

# Colors
BG_COLOR = (255, 228, 236)
NET_WHITE = (255, 255, 255)
TEXT_DARK = (20, 20, 20)
HEART_RED = (255, 0, 0)
HOT_PINK = (255, 105, 180)
LEFT_BLUE = (40, 80, 220)
RIGHT_RED = (220, 50, 50)
STRIKE_GOLD = (255, 217, 61)
FLASH_WHITE = (255, 255, 255)

SIDE_COLORS = {Side.LEFT: LEFT_BLUE, Side.RIGHT: RIGHT_RED}

ASSET_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "assets")
SOUND_FILES = {
    "hit": "hit.mp3",
    "reset": "reset.mp3",
    "explosion": "bigexplosion.wav",
}

# Ball drawn as a pixel heart, (dx, dy) cells around the centre
_HEART_PIXELS = [
    (-2, -3), (-1, -3), (1, -3), (2, -3),
    (-3, -2), (-2, -2), (-1, -2), (0, -2), (1, -2), (2, -2), (3, -2),
    (-3, -1), (-2, -1), (-1, -1), (0, -1), (1, -1), (2, -1), (3, -1),
    (-3, 0), (-2, 0), (-1, 0), (0, 0), (1, 0), (2, 0), (3, 0),
    (-2, 1), (-1, 1), (0, 1), (1, 1), (2, 1),
    (-1, 2), (0, 2), (1, 2),
    (0, 3),
]
_HEART_SCALE = 2


class Audio:
    """Fire-and-forget sound effects. Any mixer or file problem just means silence."""

    def __init__(self, asset_dir: str = ASSET_DIR):
        self.sounds = {}
        try:
            pygame.mixer.init()
        except pygame.error as exc:
            print(f"Audio disabled: {exc}")
            return
        for key, filename in SOUND_FILES.items():
            path = os.path.join(asset_dir, filename)
            try:
                self.sounds[key] = pygame.mixer.Sound(path)
            except (pygame.error, FileNotFoundError):
                print(f"Sound not loaded: {path}")

    def play(self, key: str) -> None:
        sound = self.sounds.get(key)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error:
            pass

    def on_events(self, events: list) -> None:
        for e in events:
            if isinstance(e, HitEvent):
                self.play("hit")
            elif isinstance(e, RallyResetEvent):
                self.play("reset")
            elif isinstance(e, ClashEvent):
                self.play("explosion")


def _key_snapshot(keymaps: list) -> dict:
    """Read the keyboard once for this tick, keyed by pygame key name."""
    pressed = pygame.key.get_pressed()
    names = {name for keymap in keymaps for name in keymap.values()}
    return {name: bool(pressed[pygame.key.key_code(name)]) for name in names}


def _draw_heart(surface, x, y, rotation):
    cos_r, sin_r = math.cos(rotation), math.sin(rotation)
    for px, py in _HEART_PIXELS:
        rx = (px * cos_r - py * sin_r) * _HEART_SCALE
        ry = (px * sin_r + py * cos_r) * _HEART_SCALE
        pygame.draw.rect(surface, HEART_RED, (int(x + rx), int(y + ry), _HEART_SCALE, _HEART_SCALE))


def _draw_player(surface, player: Player, flash: int, run_frame: int):
    x, y = int(player.pos.x), int(player.pos.y)
    w, h = int(player.width), int(player.height)
    color = SIDE_COLORS[player.side]
    # Small bob while running stands in for the run-cycle sprites
    bob = 2 if run_frame % 2 else 0
    pygame.draw.rect(surface, color, (x, y + bob, w, h - bob))

    facing = player.side.direction
    arm_base = (x + w // 2, y + 14)
    if player.attack is AttackState.WINDUP:
        arm_tip = (arm_base[0] - facing * 10, y - 14)
    elif player.attack is AttackState.STRIKE:
        arm_tip = (arm_base[0] + facing * 22, y - 6)
    else:
        arm_tip = (arm_base[0] + facing * 12, y + 30)
    arm_color = STRIKE_GOLD if player.attack is AttackState.STRIKE else color
    pygame.draw.line(surface, arm_color, arm_base, arm_tip, 5)

    if flash:
        pygame.draw.rect(surface, FLASH_WHITE, (x - 2, y - 2, w + 4, h + 4), 2)


def _draw_hud(surface, state: MatchState, fonts):
    font_big, font_md, font_sm = fonts

    # Touch counters, faint, behind everything
    left_txt = font_big.render(f"{state.left.touches}/{state.left.max_touches}", True, LEFT_BLUE)
    right_txt = font_big.render(f"{state.right.touches}/{state.right.max_touches}", True, RIGHT_RED)
    left_txt.set_alpha(80)
    right_txt.set_alpha(80)
    surface.blit(left_txt, (20, WIN_H - 70))
    surface.blit(right_txt, (WIN_W - right_txt.get_width() - 20, WIN_H - 70))

    games = font_sm.render(f"{state.left.game_wins} GAMES {state.right.game_wins}", True, TEXT_DARK)
    surface.blit(games, (WIN_W // 2 - games.get_width() // 2, 16))

    for player, cx in ((state.left, WIN_W // 4), (state.right, WIN_W // 4 * 3)):
        txt = font_md.render(str(player.score), True, TEXT_DARK)
        surface.blit(txt, (cx - txt.get_width() // 2, 36))


def _draw_effects(surface, effects: Effects, font):
    for sprite in effects.sprites:
        radius = 8 + sprite.frame * 5
        ring = pygame.Surface((radius * 2 + 2, radius * 2 + 2), pygame.SRCALPHA)
        alpha = max(0, 220 - sprite.frame * 50)
        pygame.draw.circle(ring, (*STRIKE_GOLD, alpha), (radius + 1, radius + 1), radius, 3)
        surface.blit(ring, (int(sprite.x) - radius, int(sprite.y) - radius))

    if effects.explosion.active:
        radius = int(100 * effects.explosion.scale)
        blast = pygame.Surface((WIN_W, WIN_H), pygame.SRCALPHA)
        alpha = int(255 * effects.explosion.opacity)
        pygame.draw.circle(blast, (*HOT_PINK, alpha), (WIN_W // 2, WIN_H // 2), radius)
        txt = font.render("CLASH!", True, FLASH_WHITE)
        txt.set_alpha(alpha)
        blast.blit(txt, (WIN_W // 2 - txt.get_width() // 2, WIN_H // 2 - txt.get_height() // 2))
        surface.blit(blast, (0, 0))


def run_visualizer(mode: str = "pvp", human_side: Side = Side.LEFT, cpu_style: str = "classic"):
    """Launch the Pygame window.

    Args:
        mode: "pvp" (both sides on the keyboard) or "cpu" (one side is the CPU).
        human_side: Side the human plays in "cpu" mode.
        cpu_style: Key from PLAYSTYLES for the CPU side.
    """
    if pygame is None:
        print("ERROR: pygame is not installed. Run: pip install pygame")
        return
    if cpu_style not in PLAYSTYLES:
        raise ValueError(f"Unknown CPU playstyle: {cpu_style}")

    pygame.init()
    screen = pygame.display.set_mode((WIN_W, WIN_H))
    pygame.display.set_caption("Heart Volley")
    clock = pygame.time.Clock()
    canvas = pygame.Surface((WIN_W, WIN_H))

    fonts = (
        pygame.font.SysFont("monospace", 48, bold=True),
        pygame.font.SysFont("monospace", 24, bold=True),
        pygame.font.SysFont("monospace", 18),
    )
    font_title = pygame.font.SysFont("monospace", 48, bold=True)

    audio = Audio()
    effects = Effects()
    state = create_match()

    if mode == "cpu":
        cpu_side = human_side.opposite
        cpus = {cpu_side: CpuPlayer("CPU", cpu_style, cpu_side)}
        human_sides = [human_side]
    else:
        cpus = {}
        human_sides = [Side.LEFT, Side.RIGHT]

    paused = False
    banner = ""
    banner_ticks = 0
    running = True

    while running:
        clock.tick(court.TICK_RATE)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_ESCAPE, pygame.K_q):
                    running = False
                elif event.key == pygame.K_p:
                    paused = not paused
                elif event.key == pygame.K_n:
                    audio.on_events(reset_game(state))

        if not paused:
            snapshot = _key_snapshot([KEYMAPS[side] for side in human_sides])
            intents = {side: intent_from_keys(snapshot, KEYMAPS[side]) for side in human_sides}
            events = step(state, intents=intents, cpus=cpus)
            effects.update(state, events)
            audio.on_events(events)
            for e in events:
                if isinstance(e, GameWonEvent):
                    banner = f"{e.winner.value.upper()} WINS {e.final_score[0]}-{e.final_score[1]}"
                    banner_ticks = court.TICK_RATE * 2
            banner_ticks = max(0, banner_ticks - 1)

        # ---- DRAW ----
        canvas.fill(BG_COLOR)
        _draw_hud(canvas, state, fonts)

        net = state.net
        pygame.draw.rect(canvas, NET_WHITE, (int(net.left), int(net.top), int(net.width), int(net.height)))

        for side, player in state.players.items():
            _draw_player(canvas, player, effects.hit_flash[side], effects.run[side].frame)

        _draw_heart(canvas, state.ball.pos.x, state.ball.pos.y, state.ball.rotation)
        _draw_effects(canvas, effects, font_title)

        if banner_ticks:
            txt = fonts[1].render(banner, True, HOT_PINK)
            canvas.blit(txt, (WIN_W // 2 - txt.get_width() // 2, WIN_H // 3))
        if paused:
            txt = fonts[1].render("PAUSED", True, TEXT_DARK)
            canvas.blit(txt, (WIN_W // 2 - txt.get_width() // 2, WIN_H // 2))

        screen.fill(BG_COLOR)
        dx, dy = effects.shake.offset
        screen.blit(canvas, (int(dx), int(dy)))
        pygame.display.flip()

    pygame.quit()
