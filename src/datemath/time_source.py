from __future__ import annotations

import logging
import math
import re
from datetime import datetime, tzinfo
from typing import Callable, Dict, Optional, Protocol

from dateutil import parser as date_parser
from dateutil import tz as date_tz
from dateutil.relativedelta import relativedelta

log = logging.getLogger(__name__)


class ParseError(ValueError):
    """Texto não reconhecido como expressão de data/hora."""


class TimeSource(Protocol):
    def parse(self, text: str, relative_to: Optional[int] = None) -> int: ...

    def format_date(self, instant: int) -> str: ...

    def weekday_of(self, instant: int) -> int: ...

    def now(self) -> int: ...


# ---------- Expressões relativas ----------

_UNIT_ALIASES: Dict[str, str] = {
    "sec": "seconds", "secs": "seconds", "second": "seconds", "seconds": "seconds",
    "min": "minutes", "mins": "minutes", "minute": "minutes", "minutes": "minutes",
    "hour": "hours", "hours": "hours", "hr": "hours", "hrs": "hours",
    "day": "days", "days": "days",
    "week": "weeks", "weeks": "weeks", "wk": "weeks", "wks": "weeks",
    "fortnight": "fortnights", "fortnights": "fortnights",
    "month": "months", "months": "months",
    "year": "years", "years": "years", "yr": "years", "yrs": "years",
}

_RELATIVE_RE = re.compile(
    r"(?P<sign>[+-]?)\s*(?P<num>\d+)\s*(?P<unit>"
    + "|".join(sorted(_UNIT_ALIASES, key=len, reverse=True))
    + r")\b",
    re.IGNORECASE,
)

_KEYWORD_RE = re.compile(r"\b(now|today|midnight|noon|tomorrow|yesterday|ago)\b", re.IGNORECASE)


def _relative_offset(text: str) -> tuple[relativedelta, str]:
    """
    Extrai as frases relativas ("+1 day", "5 hours", "-2weeks") do texto.

    Retorna o relativedelta acumulado e o texto que sobrou (parte absoluta).
    """
    totals: Dict[str, int] = {}

    def _consume(m: re.Match) -> str:
        value = int(m.group("num"))
        if m.group("sign") == "-":
            value = -value
        unit = _UNIT_ALIASES[m.group("unit").lower()]
        if unit == "fortnights":
            unit, value = "weeks", value * 2
        totals[unit] = totals.get(unit, 0) + value
        return " "

    rest = _RELATIVE_RE.sub(_consume, text)
    return relativedelta(**totals), rest


class DateutilTimeSource:
    """
    TimeSource baseado no python-dateutil.

    Todas as instâncias são resolvidas num único fuso (``tz``). O relógio é
    injetável para que testes possam fixar o "agora".
    """

    def __init__(self, tz: str = "UTC", clock: Optional[Callable[[], datetime]] = None):
        zone = date_tz.gettz(tz)
        if zone is None:
            raise ValueError(f"Unknown timezone: {tz!r}")
        self.tz_name = tz
        self._tz: tzinfo = zone
        self._clock = clock or (lambda: datetime.now(tz=self._tz))

    def _to_datetime(self, instant: int) -> datetime:
        return datetime.fromtimestamp(instant, tz=self._tz)

    def _now_datetime(self) -> datetime:
        current = self._clock()
        if current.tzinfo is None:
            current = current.replace(tzinfo=self._tz)
        return current.astimezone(self._tz).replace(microsecond=0)

    def now(self) -> int:
        return int(self._now_datetime().timestamp())

    def format_date(self, instant: int) -> str:
        return self._to_datetime(instant).strftime("%Y-%m-%d")

    def weekday_of(self, instant: int) -> int:
        # 0=domingo ... 6=sábado
        return int(self._to_datetime(instant).strftime("%w"))

    def parse(self, text: str, relative_to: Optional[int] = None) -> int:
        if text is None or not str(text).strip():
            raise ParseError(f"Empty date/time expression: {text!r}")

        base = self._to_datetime(relative_to) if relative_to is not None else self._now_datetime()
        offset, rest = _relative_offset(str(text))

        negate = False
        for kw in _KEYWORD_RE.findall(rest):
            kw = kw.lower()
            if kw == "ago":
                negate = True
            elif kw in ("today", "midnight"):
                base = base.replace(hour=0, minute=0, second=0)
            elif kw == "noon":
                base = base.replace(hour=12, minute=0, second=0)
            elif kw == "tomorrow":
                base = base.replace(hour=0, minute=0, second=0) + relativedelta(days=1)
            elif kw == "yesterday":
                base = base.replace(hour=0, minute=0, second=0) - relativedelta(days=1)
        # 00:00 pode não existir (horário de verão): avança para a primeira hora válida
        base = date_tz.resolve_imaginary(base)
        rest = _KEYWORD_RE.sub(" ", rest).strip()

        if rest:
            # data explícita sem hora => 00:00 (a hora não vem do "agora")
            default = base.replace(hour=0, minute=0, second=0, microsecond=0, tzinfo=None)
            try:
                parsed = date_parser.parse(rest, default=default)
            except (ValueError, OverflowError) as exc:
                raise ParseError(f"Unrecognized date/time expression: {text!r}") from exc
            if parsed.tzinfo is None:
                parsed = date_tz.resolve_imaginary(parsed.replace(tzinfo=self._tz))
            base = parsed.astimezone(self._tz)

        result = date_tz.resolve_imaginary(base - offset if negate else base + offset)
        instant = math.floor(result.timestamp())
        log.debug("parsed %r -> %s", text, instant)
        return instant
