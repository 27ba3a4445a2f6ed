from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys

_INT_RE = re.compile(r"^-?\d+$")
_YMD_RE = re.compile(r"^(-?\d+)-(\d+)-(\d+)$")
_HMS_RE = re.compile(r"^(\d+):(\d+)(?::(\d+))?$")


def _parse_ymd(s: str) -> tuple[int, int, int]:
    m = _YMD_RE.match(s)
    if not m:
        raise SystemExit(f"Expected Y-M-D, got {s!r}")
    return int(m.group(1)), int(m.group(2)), int(m.group(3))


def _parse_hms(s: str) -> tuple[int, int, int]:
    m = _HMS_RE.match(s)
    if not m:
        raise SystemExit(f"Expected HH:MM[:SS], got {s!r}")
    return int(m.group(1)), int(m.group(2)), int(m.group(3) or 0)


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _format_date(eng, d) -> str:
    label = d.intercalary if d.intercalary else eng.month_name(d.month)
    t = d.time
    return (
        f"{eng.weekday_name(d.weekday)}, {d.day} {label} {d.year}{eng.definition.year.suffix}"
        f"  {t.hour:02d}:{t.minute:02d}:{t.second:02d}"
    )


def cmd_list(argv: list[str]) -> int:
    import rpgcal

    p = argparse.ArgumentParser(prog="rpgcal list", description="List built-in calendars")
    p.parse_args(argv)

    for name in rpgcal.list_calendars():
        info = rpgcal.calendar_info(name)
        print(f"{name:<16} {info['label']}  ({info['months']} months, "
              f"{info['year_days']['common']}/{info['year_days']['leap']} days, {info['world_time']})")
    return 0


def cmd_date(argv: list[str]) -> int:
    import rpgcal

    p = argparse.ArgumentParser(prog="rpgcal date", description="worldTime (seconds) -> calendar date")
    p.add_argument("seconds", type=int, help="worldTime in seconds (may be negative)")
    p.add_argument("--calendar", default="gregorian")
    p.add_argument("--creation-ts", type=int, default=None, help="world creation Unix timestamp")
    p.add_argument("--debug", action="store_true")
    args = p.parse_args(argv)

    eng = rpgcal.get_engine(args.calendar)
    d = eng.world_time_to_date(args.seconds, args.creation_ts)
    print(_format_date(eng, d))
    if args.debug:
        print(rpgcal.describe(d, calendar=args.calendar))
    return 0


def cmd_seconds(argv: list[str]) -> int:
    import rpgcal

    p = argparse.ArgumentParser(prog="rpgcal seconds", description="Calendar date -> worldTime (seconds)")
    p.add_argument("date", help="Y-M-D (year may be negative)")
    p.add_argument("time", nargs="?", default="00:00:00", help="HH:MM[:SS]")
    p.add_argument("--calendar", default="gregorian")
    p.add_argument("--intercalary", default=None, help="name of the intercalary block the day lies in")
    p.add_argument("--creation-ts", type=int, default=None, help="world creation Unix timestamp")
    args = p.parse_args(argv)

    y, m, d = _parse_ymd(args.date)
    hh, mm, ss = _parse_hms(args.time)
    date = rpgcal.make_date(y, m, d, hh, mm, ss, calendar=args.calendar, intercalary=args.intercalary)
    print(rpgcal.date_to_world_time(date, calendar=args.calendar, world_creation_timestamp=args.creation_ts))
    return 0


def cmd_moons(argv: list[str]) -> int:
    import rpgcal

    p = argparse.ArgumentParser(prog="rpgcal moons", description="Moon phases on a calendar date")
    p.add_argument("date", help="Y-M-D")
    p.add_argument("--calendar", default="gregorian")
    p.add_argument("--moon", default=None, help="only this moon")
    args = p.parse_args(argv)

    y, m, d = _parse_ymd(args.date)
    date = rpgcal.make_date(y, m, d, calendar=args.calendar)
    phases = rpgcal.moon_phases(date, calendar=args.calendar, moon=args.moon)
    if not phases:
        print("No moons.")
    for info in phases:
        print(f"{info.moon.name}: {info.phase.name} (phase {info.phase_index}, "
              f"day {info.day_in_phase_exact:.2f}, next in {info.days_until_next_exact:.2f} days, "
              f"{info.phase_progress:.0%})")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shortcut: `rpgcal SECONDS ...`
    if argv and _INT_RE.match(argv[0]):
        return cmd_date(argv)

    p = argparse.ArgumentParser(prog="rpgcal", description="Fantasy calendar toolkit CLI.")
    p.add_argument("-v", "--verbose", action="store_true", help="log debug output to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list", help="List built-in calendars")
    sub.add_parser("date", help="worldTime (seconds) -> calendar date")
    sub.add_parser("seconds", help="Calendar date -> worldTime (seconds)")
    sub.add_parser("moons", help="Moon phases on a calendar date")

    # diagnostics
    sub.add_parser("pretty-month", help="Print a month grid (diagnostics)")
    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["round-trip", "moon-table", "moon-scatter"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "list":
        return cmd_list(rest)

    if args.cmd == "date":
        return cmd_date(rest)

    if args.cmd == "seconds":
        return cmd_seconds(rest)

    if args.cmd == "moons":
        return cmd_moons(rest)

    if args.cmd == "pretty-month":
        return _run_module_main("rpgcal.diagnostics.pretty_month", rest)

    if args.cmd == "diag":
        tool_map = {
            "round-trip": "rpgcal.diagnostics.round_trip",
            "moon-table": "rpgcal.diagnostics.moon_table",
            "moon-scatter": "rpgcal.diagnostics.moon_scatter",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
