from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Callable, Iterable, Optional

from datemath.config import DateMathConfig, normalize_weekdays
from datemath.time_source import DateutilTimeSource, TimeSource

log = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400

# Trava contra loop infinito na varredura do resto (< 7 dias). Só dispara se a
# aritmética de datas se comportar mal (ex.: horário de verão).
MAX_REMAINDER_ITERATIONS = 7

# Prefixo guloso: em "2 days 05:06:00" o "0" fica no prefixo e hours="5".
_DB_INTERVAL_RE = re.compile(r"^(.*)(\d+):(\d+):(\d+)(.*)$", re.DOTALL)


def seconds_to_days(sec: int) -> int:
    """Segundos -> dias inteiros, arredondando para baixo (floor, não truncamento)."""
    return int(sec // SECONDS_PER_DAY)


def normalize_db_interval(interval: str) -> str:
    """
    Intervalos do Postgres vêm como hh:mm:ss (ex.: "5:06:00") mesmo quando
    gravados como "5 hours 6 min", e o parser lê isso como horário do dia.
    Reescreve o trecho h:m:s como "5 hours 06 minutes 00 seconds", mantendo
    prefixo e sufixo. Sem h:m:s, devolve a string sem alteração.
    """
    m = _DB_INTERVAL_RE.match(interval)
    if not m:
        return interval
    prefix, hours, minutes, seconds, suffix = m.groups()
    return f"{prefix}{hours} hours {minutes} minutes {seconds} seconds{suffix}"


class DateMath:
    """
    Aritmética de intervalos e contagem de dias não úteis.

    Atenção: os argumentos vêm na ordem (to_date, from_date) para que o
    from_date possa ser opcional (default: hoje).
    """

    seconds_to_days = staticmethod(seconds_to_days)
    normalize_db_interval = staticmethod(normalize_db_interval)

    def __init__(self, time_source: TimeSource, config: Optional[DateMathConfig] = None):
        self.time_source = time_source
        self.config = config or DateMathConfig()

    @classmethod
    def from_config(
        cls,
        config: DateMathConfig,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "DateMath":
        return cls(DateutilTimeSource(tz=config.timezone, clock=clock), config)

    # ---------- Intervalos ----------

    def interval_to_seconds(self, interval: str) -> int:
        return self.time_source.parse(interval, relative_to=0)

    def interval_to_days(self, interval: str) -> int:
        return seconds_to_days(self.interval_to_seconds(interval))

    # ---------- Dias inteiros ----------

    def _midnight(self, instant: int) -> int:
        ts = self.time_source
        return ts.parse(ts.format_date(instant))

    def days_until_date(self, to_date: str, from_date: Optional[str] = None) -> int:
        """
        Dias inteiros de 00:00 de from_date (default: hoje) até 00:00 de to_date.
        Mesmo dia => 0; to_date antes de from_date => negativo.
        """
        ts = self.time_source
        from_instant = ts.parse(from_date) if from_date else ts.now()
        to_midnight = self._midnight(ts.parse(to_date))
        from_midnight = self._midnight(from_instant)
        return seconds_to_days(to_midnight) - seconds_to_days(from_midnight)

    # ---------- Dias não úteis ----------

    def non_business_days(
        self,
        to_date: str,
        from_date: Optional[str] = None,
        non_business_weekdays: Optional[Iterable[int]] = None,
        non_business_dates: Iterable[str] = (),
    ) -> int:
        """
        Número de dias não úteis (default: sáb e dom) no intervalo.

        Em vez de percorrer todos os dias, conta as semanas cheias
        (cada uma tem exatamente um de cada dia da semana), multiplica pelo
        número de dias não úteis da semana e só percorre o resto (< 7 dias).
        Depois soma os feriados de non_business_dates que caem dentro do
        intervalo e que ainda não foram contados como fim de semana.

        from_date default: hoje às 12:00 (config.default_from_time).
        """
        ts = self.time_source
        if non_business_weekdays is None:
            non_business_weekdays = self.config.non_business_weekdays
        weekdays = normalize_weekdays(non_business_weekdays)

        range_days = self.days_until_date(to_date, from_date)
        full_weeks = range_days // 7
        count = len(weekdays) * full_weeks

        from_text = from_date or f"{ts.format_date(ts.now())} {self.config.default_from_time}"
        from_instant = ts.parse(from_text)
        to_instant = ts.parse(f"{to_date} +1 day")

        days_mod = full_weeks * 7 + 1
        remainder_from = ts.parse(f"{days_mod:+d} days", relative_to=from_instant)

        iterations = 0
        while remainder_from < to_instant:
            if ts.weekday_of(remainder_from) in weekdays:
                count += 1
            # +86400s ignora horário de verão; o resto é < 7 dias
            remainder_from += SECONDS_PER_DAY
            iterations += 1
            if iterations >= MAX_REMAINDER_ITERATIONS:
                if remainder_from < to_instant:
                    log.warning(
                        "Remainder scan stopped after %s iterations (from=%s to=%s)",
                        MAX_REMAINDER_ITERATIONS, from_text, to_date,
                    )
                break

        for nb_date in non_business_dates:
            nb_instant = ts.parse(nb_date)
            # dentro do intervalo e ainda não contado como dia da semana não útil
            if from_instant < nb_instant < to_instant and ts.weekday_of(nb_instant) not in weekdays:
                count += 1

        log.debug(
            "non_business_days from=%s to=%s range_days=%s full_weeks=%s -> %s",
            from_text, to_date, range_days, full_weeks, count,
        )
        return count
