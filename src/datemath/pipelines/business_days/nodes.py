from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import pandas as pd

from datemath.config import DateMathConfig
from datemath.date_math import DateMath, normalize_db_interval
from datemath.utils.calendar.holidays import NonBusinessCalendar
from datemath.pipelines.business_days.validate import validate_business_days_df

log = logging.getLogger(__name__)


def _clean_text(s: pd.Series) -> pd.Series:
    s = s.astype("string").str.strip()
    # normaliza "nan"/vazios
    return s.mask(s.str.lower().isin({"nan", "none", ""}).fillna(False))


def _optional(value: Any) -> Optional[str]:
    if value is None or pd.isna(value):
        return None
    return str(value)


def build_date_ranges_trusted(date_ranges_raw: pd.DataFrame, params: Mapping[str, Any]) -> pd.DataFrame:
    """
    Saída: 1 linha por intervalo com from_date/to_date limpos.
    Linhas sem to_date são descartadas; from_date vazio fica nulo (=> hoje).
    """
    from_col = params.get("from_col", "from_date")
    to_col = params.get("to_col", "to_date")

    df = date_ranges_raw.rename(columns={from_col: "from_date", to_col: "to_date"}).copy()
    if "from_date" not in df.columns:
        df["from_date"] = None

    df["from_date"] = _clean_text(df["from_date"])
    df["to_date"] = _clean_text(df["to_date"])

    before = len(df)
    df = df.dropna(subset=["to_date"]).reset_index(drop=True)
    if len(df) < before:
        log.warning("Dropped %s rows without to_date", before - len(df))

    return df


def compute_non_business_days(date_ranges: pd.DataFrame, params: Mapping[str, Any]) -> pd.DataFrame:
    """
    Acrescenta range_days, non_business_days e business_days a cada intervalo.
    Feriados vêm de holidays_csv_path + non_business_dates (params).
    """
    cfg = DateMathConfig.from_params(params)
    calendar = NonBusinessCalendar.from_config(cfg)
    dm = DateMath.from_config(cfg)
    holidays = calendar.non_business_dates()

    log.info(
        "Counting non-business days for %s ranges (tz=%s weekdays=%s holidays=%s)",
        len(date_ranges), cfg.timezone, sorted(calendar.weekdays), len(holidays),
    )

    out = date_ranges.copy()
    range_days = []
    nb_days = []
    for from_date, to_date in zip(out["from_date"], out["to_date"]):
        from_date = _optional(from_date)
        range_days.append(dm.days_until_date(to_date, from_date))
        nb_days.append(
            dm.non_business_days(
                to_date,
                from_date,
                non_business_weekdays=calendar.weekdays,
                non_business_dates=holidays,
            )
        )

    out["range_days"] = pd.Series(range_days, index=out.index, dtype="int64")
    out["non_business_days"] = pd.Series(nb_days, index=out.index, dtype="int64")
    out["business_days"] = out["range_days"] - out["non_business_days"]
    return out


def normalize_db_intervals(intervals_raw: pd.DataFrame, params: Mapping[str, Any]) -> pd.DataFrame:
    """
    Converte a coluna de intervalos do banco (ex.: '2 days 05:06:00') em
    interval_normalized, interval_seconds e interval_days.
    """
    col = params.get("interval_col", "interval")
    dm = DateMath.from_config(DateMathConfig.from_params(params))

    out = intervals_raw.copy()
    normalized = out[col].astype(str).map(normalize_db_interval)
    out["interval_normalized"] = normalized
    out["interval_seconds"] = normalized.map(dm.interval_to_seconds).astype("int64")
    out["interval_days"] = out["interval_seconds"].map(dm.seconds_to_days).astype("int64")
    return out


def validate_business_days(df: pd.DataFrame) -> pd.DataFrame:
    validate_business_days_df(df)
    return df
