from __future__ import annotations

import pandas as pd


class DataQualityError(RuntimeError):
    pass


def validate_business_days_df(df: pd.DataFrame) -> None:

    required = ["from_date", "to_date", "range_days", "non_business_days", "business_days"]
    missing = [c for c in required if c not in df.columns]

    if missing:
        raise DataQualityError(f"Missing columns: {missing}")

    for col in ("to_date", "range_days", "non_business_days", "business_days"):
        if df[col].isna().any():
            raise DataQualityError(f"{col} has nulls")

    # range negativo pode dar contagem negativa; range >= 0 nunca
    forward = df["range_days"] >= 0
    if (df.loc[forward, "non_business_days"] < 0).any():
        raise DataQualityError("non_business_days < 0 for a non-negative range")

    if (df.loc[forward, "non_business_days"] > df.loc[forward, "range_days"] + 1).any():
        raise DataQualityError("non_business_days exceeds the number of days in range")
