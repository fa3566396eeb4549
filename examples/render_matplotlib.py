from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))
from labeled_histogram import (  # type: ignore
    DEFAULT_BUCKET_COUNT,
    DEFAULT_FILL_COLOR,
    HistogramParams,
    InvalidInputError,
    Renderer,
    Viewport,
    render_histogram,
)


SAMPLE_DATA = [
    ["Qatar", 86.9], ["Ethiopia", 79.4], ["Cayman Islands", 77.8], ["Iceland", 77],
    ["Viet Nam", 76], ["Tanzania", 75.7], ["Thailand", 71], ["Norway", 68.7],
    ["China", 68.6], ["Paraguay", 66.8], ["Sweden", 65.7], ["Switzerland", 65.3],
    ["Malaysia", 65], ["Russian Federation", 64.8], ["New Zealand", 64.1],
    ["Indonesia", 62.7], ["Canada", 61.8], ["Australia", 61.3], ["Brazil", 61.2],
    ["Netherlands", 60.8], ["Finland", 60.1], ["El Salvador", 59.9], ["Israel", 59.7],
    ["Colombia", 59.6], ["Ecuador", 59.5], ["Korea", 59.5], ["Uruguay", 59.5],
    ["Philippines", 59.4], ["Hong Kong", 59.1], ["Trinidad Tobago", 59.1],
    ["Barbados", 58.9], ["United States", 58.6], ["Austria", 58.5],
    ["United Kingdom", 58.4], ["Guatemala", 58.3], ["Denmark", 58], ["Mexico", 57.5],
    ["Kyrgyzstan", 57.3], ["Germany", 57.1], ["Japan", 56.9], ["Chile", 56],
    ["Estonia", 56], ["Luxembourg", 55.9], ["Czech Republic", 55.2],
    ["Costa Rica", 54.7], ["Dominican Republic", 54.6], ["Cyprus", 53.3],
    ["Ireland", 52.4], ["Latvia", 52.4], ["Hungary", 51.6], ["Slovenia", 51.5],
    ["Lithuania", 51.2], ["Romania", 51.1], ["Saudi Arabia", 51.1], ["France", 50.9],
    ["Slovakia", 50.9], ["Poland", 50.2], ["Namibia", 50], ["Malta", 49.8],
    ["Portugal", 49.7], ["Lesotho", 49.2], ["Belgium", 49], ["Bulgaria", 46.9],
    ["Turkey", 45.9], ["Albania", 44.5], ["Spain", 44.4], ["Italy", 43],
    ["Croatia", 42.1], ["Egypt", 42.1], ["South Africa", 40], ["Macedonia", 39.7],
    ["Greece", 38.4], ["Serbia", 37.7], ["Palestine", 33.4],
]


class MatplotlibRenderer(Renderer):
    """Draws plan primitives on a matplotlib axes with a top-left origin."""

    def __init__(self, width: float, height: float, font_size: float = 7):
        self.fig, self.ax = plt.subplots(figsize=(width / 100, height / 100), dpi=100)
        self.ax.set_xlim(0, width)
        self.ax.set_ylim(height, 0)
        self.ax.axis("off")
        self.font_size = font_size

    def draw_rect(self, x, y, width, height, fill):
        self.ax.add_patch(Rectangle((x, y), width, height, facecolor=fill, edgecolor="none", zorder=1))

    def draw_text(self, x, y, text, text_length, annotation=None):
        if text_length <= 0:
            return
        artist = self.ax.text(
            x, y, text.upper(),
            fontsize=self.font_size, family="sans-serif", va="baseline", zorder=2,
            clip_on=True,
        )
        # scale the font down so the label fits inside text_length
        renderer = self.fig.canvas.get_renderer()
        drawn = artist.get_window_extent(renderer=renderer).width
        x0, x1 = self.ax.transData.transform([(x, y), (x + text_length, y)])[:, 0]
        available = x1 - x0
        if drawn > available > 0:
            artist.set_fontsize(self.font_size * available / drawn)

    def draw_axis(self, y, ticks, positions, labels):
        self.ax.plot([positions[0], positions[-1]], [y, y], color="black", linewidth=1)
        for x, label in zip(positions, labels):
            self.ax.plot([x, x], [y, y + 6], color="black", linewidth=1)
            self.ax.text(x, y + 18, label, fontsize=self.font_size, ha="center")

    def save(self, path: str) -> None:
        self.fig.savefig(path, bbox_inches="tight")
        plt.close(self.fig)


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--buckets", type=int, default=DEFAULT_BUCKET_COUNT)
    p.add_argument("--width", type=float, default=1240)
    p.add_argument("--height", type=float, default=840)
    p.add_argument("--fill", type=str, default=DEFAULT_FILL_COLOR)
    p.add_argument("--randomize", action="store_true", help="Replace sample values with random scores in [0, 100)")
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--output", type=str, default="artifacts/labeled_histogram.png")
    p.add_argument("--verbose", type=int, default=1)
    return p.parse_args()


def main():
    args = parse_args()

    df = pd.DataFrame(SAMPLE_DATA, columns=["country", "score"])
    if args.randomize:
        df["score"] = np.random.default_rng(args.seed).random(len(df)) * 100

    params = HistogramParams(bucket_count=args.buckets, fill_color=args.fill, verbose=args.verbose)
    renderer = MatplotlibRenderer(args.width, args.height)

    try:
        plan = render_histogram(df, renderer, Viewport(args.width, args.height), params)
    except InvalidInputError as exc:
        print(f"[ERROR] Nothing drawn: {exc}")
        return 1

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    renderer.save(str(output))
    print(f"Saved {len(plan.columns)} columns to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
