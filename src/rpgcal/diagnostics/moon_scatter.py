#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

import rpgcal


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "rpgcal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "rpgcal[diagnostics]"') from e


def build_series(np, calendar: str, moon: str, start_day: int, days: int) -> Tuple["np.ndarray", "np.ndarray"]:
    """Day numbers and continuous phase position (index + progress) for one moon."""
    eng = rpgcal.get_engine(calendar)
    x = np.arange(start_day, start_day + days, dtype=int)
    y = np.full(x.shape, np.nan, dtype=float)

    for i, n in enumerate(x):
        date = eng.date_from_day_number(int(n))
        info = eng.moon_phase_info(date, moon)
        if info:
            y[i] = info[0].phase_index + info[0].phase_progress
    return x, y


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Phase position of every moon of a calendar over a span of days.")
    p.add_argument("--calendar", default="exandrian")
    p.add_argument("--start-day", type=int, default=None, help="First day number (default: start of current year)")
    p.add_argument("--days", type=int, default=700)
    p.add_argument("--outbase", default="moon_phases", help="Output base name (writes .png)")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    eng = rpgcal.get_engine(args.calendar)
    start = args.start_day
    if start is None:
        start = eng.days_before_year(eng.definition.year.current_year)

    fig, ax = plt.subplots(figsize=(9.2, 4.8), constrained_layout=True)
    ax.set_axisbelow(True)
    ax.grid(True, which="major", color="0.88", linewidth=0.7)
    ax.set_xlabel("Day number (days since epoch)")
    ax.set_ylabel("Phase index + progress")
    ax.set_title(f"Moon phases: {eng.definition.display_name}")

    for moon in eng.all_moons():
        x, y = build_series(np, args.calendar, moon.name, start, args.days)
        ax.scatter(x, y, s=6, c=moon.color or None, edgecolors="0.3", linewidths=0.2, alpha=0.7, label=moon.name)

    ax.legend(loc="center left", bbox_to_anchor=(1.02, 0.5), frameon=False)

    fig.savefig(args.outbase + ".png", dpi=200)
    print(f"Saved: {args.outbase}.png")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
