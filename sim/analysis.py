"""Matplotlib analysis charts: CPU matchups, rally lengths, point reasons, ball speed."""

import os
import random

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

from volley.ai_player import CpuPlayer, PLAYSTYLES
from volley.game import simulate_game, step
from volley.referee import create_match
from volley.types import ClashEvent, HitEvent, PointEvent, Side
from volley import court

# Keeps chart generation bounded when two CPUs stall
_GAME_TICKS = court.TICK_RATE * 60 * 5


def _style_chart(ax, title):
    """Apply dark theme styling to chart."""
    ax.set_facecolor("#0f0f1a")
    ax.set_title(title, color="#e0e0e0", fontsize=13, fontweight="bold", pad=12)
    ax.tick_params(colors="#888888", labelsize=9)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.spines["bottom"].set_color("#333333")
    ax.spines["left"].set_color("#333333")
    ax.xaxis.label.set_color("#aaaaaa")
    ax.yaxis.label.set_color("#aaaaaa")


def _save(fig, save_path):
    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def chart_matchup_heatmap(n_games=3, max_ticks=_GAME_TICKS, save_path=None):
    """Chart 1: CPU Playstyle Matchup Heatmap.

    Grid of left-side win rates for every pair of playstyles.
    """
    style_keys = list(PLAYSTYLES.keys())
    n = len(style_keys)
    win_matrix = np.zeros((n, n))

    for i, s1 in enumerate(style_keys):
        for j, s2 in enumerate(style_keys):
            wins = 0
            for seed in range(n_games):
                random.seed(seed * 100 + i * 10 + j)
                result = simulate_game(
                    CpuPlayer("L", s1, Side.LEFT),
                    CpuPlayer("R", s2, Side.RIGHT),
                    max_ticks=max_ticks,
                )
                if result.winner is Side.LEFT:
                    wins += 1
            win_matrix[i][j] = wins / n_games * 100

    fig, ax = plt.subplots(figsize=(8, 6))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "CPU Matchup Win Rates (Left vs Right)")

    labels = [PLAYSTYLES[k]["label"] for k in style_keys]
    im = ax.imshow(win_matrix, cmap="RdYlGn", vmin=0, vmax=100, aspect="auto")

    ax.set_xticks(range(n))
    ax.set_yticks(range(n))
    ax.set_xticklabels(labels, rotation=45, ha="right", fontsize=9)
    ax.set_yticklabels(labels, fontsize=9)
    ax.set_xlabel("Right Style")
    ax.set_ylabel("Left Style")

    for i in range(n):
        for j in range(n):
            val = win_matrix[i][j]
            color = "white" if val < 30 or val > 70 else "black"
            ax.text(j, i, f"{val:.0f}%", ha="center", va="center",
                    fontsize=10, fontweight="bold", color=color)

    cbar = fig.colorbar(im, ax=ax, shrink=0.8)
    cbar.set_label("Left Win Rate %", color="#aaa")
    cbar.ax.tick_params(colors="#888")

    return _save(fig, save_path)


def chart_rally_length_distribution(n_games=3, max_ticks=_GAME_TICKS, save_path=None):
    """Chart 2: Rally length (seconds) across a few matchups."""
    matchups = [
        ("classic", "classic", "#e94560"),
        ("eager", "lazy", "#28a745"),
        ("blocker", "eager", "#ffc107"),
    ]

    fig, ax = plt.subplots(figsize=(8, 5))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Rally Length Distribution by Matchup")

    for s1, s2, color in matchups:
        lengths = []
        for seed in range(n_games):
            random.seed(seed * 50)
            result = simulate_game(
                CpuPlayer("L", s1, Side.LEFT),
                CpuPlayer("R", s2, Side.RIGHT),
                max_ticks=max_ticks,
            )
            lengths.extend(p.rally_ticks / court.TICK_RATE for p in result.points)

        label = f"{PLAYSTYLES[s1]['label']} vs {PLAYSTYLES[s2]['label']}"
        if lengths:
            ax.hist(np.array(lengths), bins=20, alpha=0.6, color=color, label=label, edgecolor=color)

    ax.set_xlabel("Rally Length (s)")
    ax.set_ylabel("Frequency")
    ax.legend(facecolor="#1a1a2e", edgecolor="#333", labelcolor="#e0e0e0", fontsize=9)
    ax.grid(True, alpha=0.15, axis="y")

    return _save(fig, save_path)


def chart_point_reasons(n_games=3, max_ticks=_GAME_TICKS, save_path=None):
    """Chart 3: How points are won: wall vs touch-limit faults."""
    all_reasons = {}
    for seed in range(n_games):
        random.seed(seed * 77)
        result = simulate_game(
            CpuPlayer("L", "classic", Side.LEFT),
            CpuPlayer("R", "classic", Side.RIGHT),
            max_ticks=max_ticks,
        )
        for reason, count in result.stats["reasons"].items():
            all_reasons[reason] = all_reasons.get(reason, 0) + count

    fig, ax = plt.subplots(figsize=(7, 5))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "How Points Are Won")

    reasons = sorted(all_reasons.items(), key=lambda x: -x[1])
    labels = [r[0] for r in reasons]
    counts = [r[1] for r in reasons]
    colors = ["#e94560", "#28a745", "#ffc107", "#4ecdc4"]

    bars = ax.barh(labels, counts, color=colors[:len(labels)], edgecolor="#333", alpha=0.85)
    for bar, count in zip(bars, counts):
        ax.text(bar.get_width() + 0.3, bar.get_y() + bar.get_height() / 2,
                str(count), va="center", fontsize=10, color="#e0e0e0")

    ax.set_xlabel("Count")
    ax.invert_yaxis()
    ax.grid(True, alpha=0.15, axis="x")

    return _save(fig, save_path)


def chart_ball_speed_trace(ticks=court.TICK_RATE * 30, seed=7, save_path=None):
    """Chart 4: Ball speed per tick for one CPU game, with hits, clashes and points marked."""
    random.seed(seed)
    state = create_match()
    cpus = {
        Side.LEFT: CpuPlayer("L", "classic", Side.LEFT),
        Side.RIGHT: CpuPlayer("R", "eager", Side.RIGHT),
    }

    speeds = np.zeros(ticks)
    hit_ticks, clash_ticks, point_ticks = [], [], []
    for i in range(ticks):
        events = step(state, cpus=cpus)
        speeds[i] = state.ball.speed()
        for e in events:
            if isinstance(e, HitEvent):
                hit_ticks.append(i)
            elif isinstance(e, ClashEvent):
                clash_ticks.append(i)
            elif isinstance(e, PointEvent):
                point_ticks.append(i)

    t = np.arange(ticks) / court.TICK_RATE

    fig, ax = plt.subplots(figsize=(10, 4))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Ball Speed Over Time (Classic vs Eager)")

    ax.plot(t, speeds, color="#4ecdc4", linewidth=1.2, label="|v|")
    if hit_ticks:
        ax.scatter(t[hit_ticks], speeds[hit_ticks], color="#ffc107", s=18, zorder=3, label="hit")
    if clash_ticks:
        ax.scatter(t[clash_ticks], speeds[clash_ticks], color="#e94560", s=40, marker="*", zorder=4, label="clash")
    for pt in point_ticks:
        ax.axvline(x=t[pt], color="#a855f7", linestyle="--", linewidth=1, alpha=0.6)

    ax.axhline(y=court.MIN_HIT_SPEED, color="#888", linestyle=":", linewidth=1)
    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Speed (px/tick)")
    ax.legend(facecolor="#1a1a2e", edgecolor="#333", labelcolor="#e0e0e0", fontsize=9)
    ax.grid(True, alpha=0.15)

    return _save(fig, save_path)


def generate_all_charts(output_dir="."):
    """Generate all analysis charts and save to output directory."""
    os.makedirs(output_dir, exist_ok=True)

    paths = []

    path = os.path.join(output_dir, "chart_matchup_heatmap.png")
    print("  Generating matchup heatmap (running CPU games)...")
    chart_matchup_heatmap(n_games=3, save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    path = os.path.join(output_dir, "chart_rally_distribution.png")
    print("  Generating rally distribution...")
    chart_rally_length_distribution(n_games=3, save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    path = os.path.join(output_dir, "chart_point_reasons.png")
    print("  Generating point reasons chart...")
    chart_point_reasons(n_games=3, save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    path = os.path.join(output_dir, "chart_ball_speed.png")
    chart_ball_speed_trace(save_path=path)
    paths.append(path)
    print(f"  Saved: {path}")

    plt.close("all")
    return paths
