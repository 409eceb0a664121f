from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

# 0=domingo ... 6=sábado
SUNDAY = 0
SATURDAY = 6
DEFAULT_NON_BUSINESS_WEEKDAYS: Tuple[int, ...] = (SATURDAY, SUNDAY)


def normalize_weekdays(weekdays) -> frozenset[int]:
    """Deduplica e valida os dias da semana (0=domingo ... 6=sábado)."""
    out = set()
    for w in weekdays:
        w = int(w)
        if not 0 <= w <= 6:
            raise ValueError(f"weekday must be in [0, 6] (0=Sunday), got {w}")
        out.add(w)
    return frozenset(out)


@dataclass(frozen=True)
class DateMathConfig:
    timezone: str = "UTC"
    non_business_weekdays: Tuple[int, ...] = DEFAULT_NON_BUSINESS_WEEKDAYS
    # hora usada quando fromDate é omitido (evita borda de horário de verão)
    default_from_time: str = "12:00:00"
    holidays_csv_path: Optional[str] = None
    non_business_dates: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_params(cls, params: Mapping[str, Any] | None) -> "DateMathConfig":
        """
        Converte o bloco params['business_days'] do Kedro em DateMathConfig.

        Chaves ausentes ficam com o default da dataclass.
        """
        params = params or {}
        weekdays = params.get("non_business_weekdays", DEFAULT_NON_BUSINESS_WEEKDAYS)
        dates = params.get("non_business_dates") or ()

        return cls(
            timezone=str(params.get("timezone", "UTC")).strip() or "UTC",
            non_business_weekdays=tuple(sorted(normalize_weekdays(weekdays))),
            default_from_time=str(params.get("default_from_time", "12:00:00")).strip(),
            holidays_csv_path=params.get("holidays_csv_path") or None,
            non_business_dates=tuple(str(d).strip() for d in dates),
        )
