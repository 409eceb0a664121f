from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import FrozenSet, Iterable, List, Set

from datemath.config import DateMathConfig, normalize_weekdays
from datemath.utils.io.paths import resolve_in_project

_CSV_DATE_FORMATS = ("%d/%m/%Y", "%Y-%m-%d")


def parse_holidays_csv(path: str | Path, encoding: str = "utf-8", sep: str = ";") -> Set[date]:
    """
    Lê um CSV de feriados (ex.: ANBIMA 'Data;Dia da Semana;Feriado;...')
    e retorna um set de datas. A primeira coluna é a data (dd/mm/aaaa ou aaaa-mm-dd).
    """
    holidays: Set[date] = set()
    path = Path(path)

    with path.open("r", encoding=encoding, errors="replace") as f:
        f.readline()  # descarta cabeçalho
        for line in f:
            line = line.strip()
            if not line:
                continue
            dt_str = line.split(sep)[0].strip()
            dt = _parse_csv_date(dt_str)
            if dt is None:
                # rodapé/linhas estranhas: ignora
                continue
            holidays.add(dt)
    return holidays


def _parse_csv_date(s: str) -> date | None:
    for fmt in _CSV_DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    return None


@dataclass(frozen=True)
class NonBusinessCalendar:
    weekdays: FrozenSet[int]
    holidays: FrozenSet[date] = field(default_factory=frozenset)

    @classmethod
    def build(cls, weekdays: Iterable[int], holidays: Iterable[date] = ()) -> "NonBusinessCalendar":
        return cls(weekdays=normalize_weekdays(weekdays), holidays=frozenset(holidays))

    @classmethod
    def from_config(cls, config: DateMathConfig, start_path: Path | None = None) -> "NonBusinessCalendar":
        """
        Combina feriados do CSV (holidays_csv_path) com os de non_business_dates.
        Caminho relativo do CSV é resolvido a partir do root do projeto.
        """
        holidays: Set[date] = set()
        if config.holidays_csv_path:
            holidays |= parse_holidays_csv(resolve_in_project(config.holidays_csv_path, start_path))
        for s in config.non_business_dates:
            dt = _parse_csv_date(s)
            if dt is None:
                raise ValueError(f"non_business_dates entry is not a date: {s!r}")
            holidays.add(dt)
        return cls.build(config.non_business_weekdays, holidays)

    def non_business_dates(self) -> List[str]:
        """Feriados como strings aaaa-mm-dd, ordenados (entrada de DateMath.non_business_days)."""
        return [d.isoformat() for d in sorted(self.holidays)]
