from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

import rpgcal
from rpgcal.core.types import ResolvedDate


def cell(top: str, bot: str, w: int = 6) -> Tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def dow_header(names: List[str], w: int = 6) -> str:
    return " ".join(n[:w].ljust(w) for n in names)


def print_grid(title: str, header: str, weeks: List[List[Tuple[str, str]]]) -> None:
    print(title)
    print(header)
    print("-" * len(header))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def month_calendar(calendar: str, year: int, month: int) -> None:
    eng = rpgcal.get_engine(calendar)
    n = len(eng.definition.weekdays)
    length = eng.month_length(year, month)

    days: List[Tuple[str, str]] = []
    first = ResolvedDate(year, month, 1, eng.weekday_for(year, month, 1))
    for d in range(1, length + 1):
        date = first.replace(day=d, weekday=eng.weekday_for(year, month, d))
        moons = eng.moon_phase_info(date)
        bot = moons[0].phase.name if moons and moons[0].day_in_phase == 0 else ""
        days.append(cell(f"{d:2d}", bot))

    weeks: List[List[Tuple[str, str]]] = []
    wk: List[Tuple[str, str]] = [cell("", "") for _ in range(first.weekday)]
    for c in days:
        wk.append(c)
        if len(wk) == n:
            weeks.append(wk)
            wk = []
    if wk:
        while len(wk) < n:
            wk.append(cell("", ""))
        weeks.append(wk)

    header = dow_header([w.abbreviation or w.name for w in eng.definition.weekdays])
    title = f"{eng.definition.display_name}  {eng.month_name(month)} {year}{eng.definition.year.suffix}"
    print_grid(title, header, weeks)

    for ic in eng.intercalary_after_month(year, month):
        print(f"  followed by {ic.name} ({ic.days} day{'s' if ic.days != 1 else ''})")


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Print a month grid laid out on the calendar's own weekdays.")
    p.add_argument("--calendar", default="gregorian")
    p.add_argument("year", type=int, nargs="?")
    p.add_argument("month", type=int, nargs="?")
    args = p.parse_args(argv)

    eng = rpgcal.get_engine(args.calendar)
    year = args.year if args.year is not None else eng.definition.year.current_year
    month = args.month if args.month is not None else 1
    month_calendar(args.calendar, year, month)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
