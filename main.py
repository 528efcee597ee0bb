#!/usr/bin/env python3
"""CLI entry point for Heart Volley.

Usage:
    python main.py play [pvp|cpu] [left|right] [style]   Launch the Pygame game
    python main.py game [left_style] [right_style]       Run a CPU match (text mode) and print stats
    python main.py analyze                               Generate analysis charts
    python main.py test                                  Run all tests
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


def cmd_play():
    """Launch the Pygame game."""
    from volley.ai_player import PLAYSTYLES
    from volley.types import Side

    mode = sys.argv[2] if len(sys.argv) > 2 and sys.argv[2] in ("pvp", "cpu") else "pvp"
    side = Side(sys.argv[3]) if len(sys.argv) > 3 and sys.argv[3] in ("left", "right") else Side.LEFT
    style = sys.argv[4] if len(sys.argv) > 4 and sys.argv[4] in PLAYSTYLES else "classic"

    print("Launching Heart Volley...")
    if mode == "cpu":
        print(f"You play {side.value}, CPU ({PLAYSTYLES[style]['label']}) plays {side.opposite.value}")
    print("Controls: left A/D/W  right arrows  P=pause  N=new game  Q=quit")
    print("-" * 60)
    from sim.visualizer import run_visualizer
    run_visualizer(mode=mode, human_side=side, cpu_style=style)


def cmd_game():
    """Run a CPU match in text mode and print stats."""
    from volley.ai_player import CpuPlayer, PLAYSTYLES
    from volley.types import Side
    from volley import court

    print("=" * 60)
    print("  CPU VOLLEY MATCH")
    print("=" * 60)

    styles = list(PLAYSTYLES.keys())
    left_style = sys.argv[2] if len(sys.argv) > 2 and sys.argv[2] in styles else "classic"
    right_style = sys.argv[3] if len(sys.argv) > 3 and sys.argv[3] in styles else "eager"

    left = CpuPlayer("Left", left_style, Side.LEFT)
    right = CpuPlayer("Right", right_style, Side.RIGHT)

    print(f"\n  Left:  {left.label} (lookahead:{left.lookahead} reach:{left.jump_reach})")
    print(f"  Right: {right.label} (lookahead:{right.lookahead} reach:{right.jump_reach})")
    print()

    from volley.game import simulate_game
    result = simulate_game(left, right)
    s = result.stats

    for i, point in enumerate(result.points):
        seconds = point.rally_ticks / court.TICK_RATE
        print(f"  Point {i+1:2d}: {seconds:5.1f}s, {point.hits:2d} hits, "
              f"{point.winner.value} wins ({point.reason})  [{point.score[0]}-{point.score[1]}]")

    print()
    if result.winner is None:
        print(f"  NO WINNER after {result.ticks} ticks")
    else:
        final = result.points[-1].score
        print(f"  FINAL SCORE: {final[0]} - {final[1]}")
        print(f"  WINNER: {result.winner.value} ({left.label if result.winner is Side.LEFT else right.label})")
    print()
    print(f"  Total points: {s['total_points']}  |  Duration: {s['ticks'] / court.TICK_RATE:.1f}s")
    print(f"  Avg rally: {s['avg_rally_ticks'] / court.TICK_RATE:.1f}s  |  Longest: {s['max_rally_ticks'] / court.TICK_RATE:.1f}s")
    print(f"  Hits: {s['total_hits']} ({s['airborne_hits']} airborne)  |  Clashes: {s['clashes']}")
    print(f"  Touch faults: left {s['left_touch_faults']}  |  right {s['right_touch_faults']}")
    print(f"  Max ball speed: {s['max_ball_speed']} px/tick")
    print(f"  Point reasons: {dict(sorted(s['reasons'].items(), key=lambda x: -x[1]))}")
    print()
    print("  Available styles: " + ", ".join(styles))
    print("  Usage: python main.py game [left_style] [right_style]")
    print("=" * 60)


def cmd_analyze():
    """Generate all analysis charts."""
    print("Generating analysis charts...")
    print("-" * 60)
    from sim.analysis import generate_all_charts
    output_dir = os.path.join(os.path.dirname(__file__), "output")
    paths = generate_all_charts(output_dir=output_dir)
    print(f"\nDone! {len(paths)} charts saved to {output_dir}/")


def cmd_test():
    """Run all tests."""
    import subprocess
    print("Running tests...")
    print("-" * 60)
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "tests/", "-v"],
        cwd=os.path.dirname(os.path.abspath(__file__)),
    )
    sys.exit(result.returncode)


COMMANDS = {
    "play": cmd_play,
    "game": cmd_game,
    "analyze": cmd_analyze,
    "test": cmd_test,
}


def main():
    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        print(__doc__)
        print("Available commands:")
        for name, func in COMMANDS.items():
            print(f"  {name:12s} {func.__doc__}")
        sys.exit(1)

    COMMANDS[sys.argv[1]]()


if __name__ == "__main__":
    main()
