from __future__ import annotations

import argparse
from typing import List, Optional

import rpgcal


def moon_rows(calendar: str, start_world_time: int, days: int) -> List[str]:
    eng = rpgcal.get_engine(calendar)
    spd = eng.info()["seconds_per_day"]
    rows = []
    for i in range(days):
        date = eng.world_time_to_date(start_world_time + i * spd)
        label = date.intercalary or eng.month_name(date.month)
        parts = [f"{date.year:>6}-{label[:10]:<10}-{date.day:02d}"]
        for m in eng.moon_phase_info(date):
            parts.append(f"{m.moon.name}: {m.phase.name:<16} {m.phase_progress:5.2f}")
        rows.append("  ".join(parts))
    return rows


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="One line per day with every moon's phase.")
    p.add_argument("--calendar", default="gregorian")
    p.add_argument("--start", type=int, default=0, help="worldTime (seconds) of the first row")
    p.add_argument("--days", type=int, default=30)
    args = p.parse_args(argv)

    for row in moon_rows(args.calendar, args.start, args.days):
        print(row)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
