from datetime import date

import pytest

from datemath.config import DateMathConfig
from datemath.utils.calendar.holidays import (
    NonBusinessCalendar,
    parse_holidays_csv,
)

CSV = (
    "Data;Dia da Semana;Feriado\n"
    "01/01/2024;segunda-feira;Confraternização Universal\n"
    "\n"
    "2024-02-13;terça-feira;Carnaval\n"
    "25/12/2024;quarta-feira;Natal\n"
    "25/12/2024;quarta-feira;Natal\n"
    "Fonte: ANBIMA\n"
)


@pytest.fixture
def holidays_csv(tmp_path):
    p = tmp_path / "feriados.csv"
    p.write_text(CSV, encoding="utf-8")
    return p


def test_parse_holidays_csv_skips_header_blank_and_footer(holidays_csv):
    assert parse_holidays_csv(holidays_csv) == {date(2024, 1, 1), date(2024, 2, 13), date(2024, 12, 25)}


def test_calendar_from_config_resolves_csv_from_project_root(holidays_csv):
    root = holidays_csv.parent
    (root / "pyproject.toml").write_text("", encoding="utf-8")
    nested = root / "notebooks"
    nested.mkdir()

    cfg = DateMathConfig(
        holidays_csv_path=holidays_csv.name,
        non_business_dates=("2024-11-20", "15/11/2024"),
    )
    cal = NonBusinessCalendar.from_config(cfg, start_path=nested)

    assert cal.weekdays == frozenset({0, 6})
    assert cal.non_business_dates() == [
        "2024-01-01", "2024-02-13", "2024-11-15", "2024-11-20", "2024-12-25",
    ]


def test_calendar_from_config_rejects_bad_date():
    with pytest.raises(ValueError):
        NonBusinessCalendar.from_config(DateMathConfig(non_business_dates=("next tuesday",)))


def test_calendar_from_config_absolute_csv_path(holidays_csv):
    cal = NonBusinessCalendar.from_config(DateMathConfig(holidays_csv_path=str(holidays_csv)))
    assert cal.non_business_dates() == ["2024-01-01", "2024-02-13", "2024-12-25"]
