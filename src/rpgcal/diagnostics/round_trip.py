from __future__ import annotations

import argparse
import random
from typing import List, Optional

import rpgcal


def parse_calendars(s: str) -> List[str]:
    # "gregorian,harptos" -> ["gregorian", "harptos"]
    return [x.strip() for x in s.split(",") if x.strip()]


def roundtrip_test(
    calendar: str,
    N: int,
    lo: int,
    hi: int,
    seed: int,
    *,
    max_failures: int,
    creation_ts: Optional[int] = None,
) -> int:
    random.seed(seed)
    eng = rpgcal.get_engine(calendar)
    failures = 0

    for _ in range(N):
        t0 = random.randint(lo, hi)
        d = eng.world_time_to_date(t0, creation_ts)
        t1 = eng.date_to_world_time(d, creation_ts)

        if t1 != t0:
            failures += 1
            print("\nFAIL")
            print("calendar:", calendar)
            print("t0:", t0)
            print("date:", d)
            print("t1:", t1)
            if failures >= max_failures:
                return failures

    return failures


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests: worldTime -> date -> worldTime.")
    p.add_argument("--calendars", type=str, default=",".join(rpgcal.list_calendars()),
                   help="Comma-separated calendar list.")
    p.add_argument("--N", type=int, default=2000, help="Trials per calendar.")
    p.add_argument("--lo", type=int, default=-10**11, help="Lowest worldTime (seconds).")
    p.add_argument("--hi", type=int, default=10**11, help="Highest worldTime (seconds).")
    p.add_argument("--creation-ts", type=int, default=None, help="Optional world creation Unix timestamp.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures per calendar.")
    args = p.parse_args(argv)

    if args.hi < args.lo:
        raise SystemExit("--hi must be >= --lo")

    total_fail = 0
    for cal in parse_calendars(args.calendars):
        print(f"Testing {cal} ...")
        total_fail += roundtrip_test(cal, N=args.N, lo=args.lo, hi=args.hi, seed=args.seed,
                                     max_failures=args.max_failures, creation_ts=args.creation_ts)

    if total_fail == 0:
        print("All round-trip tests passed.")
        return 0

    print(f"Round-trip failures: {total_fail}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
