"""
Seletor de período
Projeto: Gestor de Notas Fiscais

Converte a escolha do utilizador (mês ou ano) em intervalos de datas
concretos, incluindo o mês anterior e os intervalos "desde o início"
usados no cálculo dos saldos acumulados.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Optional

# Início da contabilidade: todos os saldos acumulados partem daqui
INCEPTION_DATE = date(2024, 1, 1)

MONTH_NAMES = [
    "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
    "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro",
]

MONTH_ABBREVIATIONS = [
    "jan", "fev", "mar", "abr", "mai", "jun",
    "jul", "ago", "set", "out", "nov", "dez",
]


class PeriodMode(str, Enum):
    """Granularidade do período selecionado."""
    MONTH = "month"
    YEAR = "year"


class RangePreset(str, Enum):
    """Atalhos de intervalo do ecrã de relatórios."""
    WEEK = "week"
    MONTH = "month"


@dataclass(frozen=True)
class DateRange:
    """Intervalo de datas inclusivo [start, end]."""

    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


@dataclass(frozen=True)
class Period:
    """
    Período escolhido pelo utilizador.

    month é o índice 0-11 e só tem significado em modo mensal.
    """

    mode: PeriodMode
    year: int
    month: Optional[int] = None

    @property
    def key(self) -> str:
        """Chave do período: YYYY-MM (mensal) ou YYYY (anual)."""
        if self.mode is PeriodMode.MONTH:
            return f"{self.year}-{self.month + 1:02d}"
        return str(self.year)

    @property
    def label(self) -> str:
        if self.mode is PeriodMode.MONTH:
            return f"{MONTH_NAMES[self.month]} {self.year}"
        return str(self.year)

    @property
    def bounds(self) -> DateRange:
        if self.mode is PeriodMode.MONTH:
            return month_range(self.year, self.month + 1)
        return year_range(self.year)


@dataclass(frozen=True)
class PeriodWindows:
    """
    Todos os intervalos derivados de um período.

    Attributes:
        period: Período selecionado
        selected: Intervalo do próprio período
        previous_month: Mês civil imediatamente anterior ao início do período
        since_inception: INCEPTION_DATE até ao fim do período
        since_inception_to_previous_month: INCEPTION_DATE até ao fim do mês anterior
    """

    period: Period
    selected: DateRange
    previous_month: DateRange
    since_inception: DateRange
    since_inception_to_previous_month: DateRange

    @property
    def previous_month_label(self) -> str:
        start = self.previous_month.start
        return f"{MONTH_NAMES[start.month - 1]} {start.year}"


def month_range(year: int, month: int) -> DateRange:
    """Mês civil completo; month em 1-12."""
    last_day = calendar.monthrange(year, month)[1]
    return DateRange(date(year, month, 1), date(year, month, last_day))


def year_range(year: int) -> DateRange:
    return DateRange(date(year, 1, 1), date(year, 12, 31))


def reference_month_key(year: int, month: int) -> str:
    """Chave YYYY-MM para um mês em 1-12."""
    return f"{year}-{month:02d}"


def parse_reference_month(value: str) -> date:
    """
    Primeiro dia do mês de referência YYYY-MM.

    Raises:
        ValueError: Formato inválido ou mês fora de 1-12
    """
    year_part, sep, month_part = value.partition("-")
    if not sep or len(year_part) != 4 or len(month_part) != 2:
        raise ValueError(f"Mês de referência inválido: {value!r}")
    return date(int(year_part), int(month_part), 1)


def resolve_period(mode: PeriodMode, year: int, month: Optional[int] = None) -> PeriodWindows:
    """
    Resolve um período nos seus intervalos de datas.

    Não há casos de erro: qualquer ano é aceite. Em modo mensal o índice
    do mês (0-11) é obrigatório; em modo anual é ignorado e o mês anterior
    passa a ser dezembro do ano anterior.
    """
    mode = PeriodMode(mode)
    if mode is PeriodMode.MONTH:
        if month is None:
            raise ValueError("O índice do mês é obrigatório em modo mensal")
        period = Period(mode, year, month)
    else:
        period = Period(mode, year)
    selected = period.bounds

    previous_end = selected.start - timedelta(days=1)
    previous_month = month_range(previous_end.year, previous_end.month)

    return PeriodWindows(
        period=period,
        selected=selected,
        previous_month=previous_month,
        since_inception=DateRange(INCEPTION_DATE, selected.end),
        since_inception_to_previous_month=DateRange(INCEPTION_DATE, previous_month.end),
    )


def preset_range(preset: RangePreset, today: Optional[date] = None) -> DateRange:
    """
    Intervalo pré-definido que contém `today`.

    - week: segunda-feira a domingo
    - month: mês civil
    """
    today = today or date.today()
    preset = RangePreset(preset)
    if preset is RangePreset.WEEK:
        start = today - timedelta(days=today.weekday())
        return DateRange(start, start + timedelta(days=6))
    return month_range(today.year, today.month)
