from __future__ import annotations

import argparse
import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from datemath.config import DateMathConfig
from datemath.date_math import DateMath
from datemath.utils.calendar.holidays import NonBusinessCalendar
from datemath.utils.io.paths import project_root
from datemath.utils.jsonlog import build_logger


@dataclass(frozen=True)
class RunConfig:
    log_relpath: str = "data/99_logs/non_business_days.jsonl"


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Count non-business days between two dates.")
    p.add_argument("to_date")
    p.add_argument("--from", dest="from_date", default=None, help="default: today 12:00")
    p.add_argument("--weekdays", default="6,0", help="non-business weekdays, 0=Sunday ... 6=Saturday")
    p.add_argument("--holiday", action="append", default=[], help="explicit holiday (repeatable)")
    p.add_argument("--holidays-csv", default=None, help="CSV with holidays in the first column")
    p.add_argument("--tz", default="UTC")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    root = project_root()
    logger = build_logger("non_business_days", root / RunConfig().log_relpath)

    cfg = DateMathConfig.from_params(
        {
            "timezone": args.tz,
            "non_business_weekdays": [int(w) for w in args.weekdays.split(",") if w.strip()],
            # caminho da linha de comando é relativo ao cwd
            "holidays_csv_path": str(Path(args.holidays_csv).resolve()) if args.holidays_csv else None,
            "non_business_dates": args.holiday,
        }
    )
    calendar = NonBusinessCalendar.from_config(cfg, start_path=root)
    dm = DateMath.from_config(cfg)

    logger.info(
        "counting non-business days",
        extra={"to_date": args.to_date, "from_date": args.from_date, "timezone": cfg.timezone},
    )

    result = {
        "from_date": args.from_date,
        "to_date": args.to_date,
        "range_days": dm.days_until_date(args.to_date, args.from_date),
        "non_business_days": dm.non_business_days(
            args.to_date,
            args.from_date,
            non_business_weekdays=calendar.weekdays,
            non_business_dates=calendar.non_business_dates(),
        ),
    }
    result["business_days"] = result["range_days"] - result["non_business_days"]

    logger.info("done", extra=result)
    print(json.dumps(result, ensure_ascii=False))


if __name__ == "__main__":
    main()
