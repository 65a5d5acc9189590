# climacare/reporting/filters.py
"""
Resolução dos filtros de relatório.

Cada dimensão é opcional: ``None`` significa "sem restrição". Os sentinelas
da interface (``'all'``, string vazia) são normalizados para ``None`` na
entrada, então o predicado nunca compara com texto mágico.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .records import MachineRecord, ServiceRecord

ANY_SENTINELS = frozenset({"", "all", "todos", "todas"})


class DatePreset(str, Enum):
    TODAY = "today"
    LAST_7_DAYS = "last7days"
    LAST_30_DAYS = "last30days"
    LAST_90_DAYS = "last90days"
    THIS_MONTH = "thismonth"
    LAST_MONTH = "lastmonth"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["DatePreset"]:
        if value is None:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


def _month_bounds(year: int, month: int) -> Tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def resolve_date_range(
    preset: Optional[DatePreset],
    start: Optional[date] = None,
    end: Optional[date] = None,
    today: Optional[date] = None,
) -> Tuple[Optional[date], Optional[date]]:
    """Converte um preset em limites concretos (datas inclusivas)."""
    today = today or date.today()
    if preset is None:
        return start, end
    if preset is DatePreset.TODAY:
        return today, today
    if preset is DatePreset.LAST_7_DAYS:
        return today - timedelta(days=7), today
    if preset is DatePreset.LAST_30_DAYS:
        return today - timedelta(days=30), today
    if preset is DatePreset.LAST_90_DAYS:
        return today - timedelta(days=90), today
    if preset is DatePreset.THIS_MONTH:
        return _month_bounds(today.year, today.month)
    if preset is DatePreset.LAST_MONTH:
        first = today.replace(day=1) - timedelta(days=1)
        return _month_bounds(first.year, first.month)
    # CUSTOM: limites explícitos; o que faltar segue os últimos 30 dias
    return (start or today - timedelta(days=30)), (end or today)


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    if s.lower() in ANY_SENTINELS:
        return None
    return s


def _clean_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value).strip()
    if not s:
        return None
    try:
        return date.fromisoformat(s[:10])
    except ValueError:
        return None


@dataclass(frozen=True)
class ReportFilters:
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    branch: Optional[str] = None
    status: Optional[str] = None
    technician_id: Optional[str] = None
    machine_id: Optional[str] = None
    service_type: Optional[str] = None
    search: Optional[str] = None

    @classmethod
    def from_params(
        cls,
        *,
        startDate: Any = None,
        endDate: Any = None,
        branchFilter: Any = None,
        statusFilter: Any = None,
        technicianId: Any = None,
        machineId: Any = None,
        serviceType: Any = None,
        search: Any = None,
        dateRange: Any = None,
        today: Optional[date] = None,
    ) -> "ReportFilters":
        """Monta os filtros a partir dos parâmetros da API (valores inválidos são ignorados)."""
        start, end = resolve_date_range(
            DatePreset.parse(_clean(dateRange)),
            _clean_date(startDate),
            _clean_date(endDate),
            today=today,
        )
        return cls(
            start_date=start,
            end_date=end,
            branch=_clean(branchFilter),
            status=_clean(statusFilter),
            technician_id=_clean(technicianId),
            machine_id=_clean(machineId),
            service_type=_clean(serviceType),
            search=_clean(search),
        )

    def without(self, *names: str) -> "ReportFilters":
        return replace(self, **{n: None for n in names})

    @property
    def has_date_range(self) -> bool:
        return self.start_date is not None or self.end_date is not None

    def to_dict(self) -> Dict[str, Any]:
        """Eco dos filtros efetivos, só com as dimensões informadas."""
        out = {
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "branchFilter": self.branch,
            "statusFilter": self.status,
            "technicianId": self.technician_id,
            "machineId": self.machine_id,
            "serviceType": self.service_type,
            "search": self.search,
        }
        return {k: v for k, v in out.items() if v is not None}


def index_machines(machines: Iterable[MachineRecord]) -> Dict[str, MachineRecord]:
    return {m.id: m for m in machines}


def _contains(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle in haystack.lower()


def build_predicate(
    filters: ReportFilters,
    machines_by_id: Mapping[str, MachineRecord],
) -> Callable[[ServiceRecord], bool]:
    """Predicado: E entre as dimensões, OU entre os campos da busca textual."""
    lower = datetime.combine(filters.start_date, time.min) if filters.start_date else None
    # fim do dia inclusivo: tudo antes da meia-noite seguinte; date.max não limita
    upper = None
    if filters.end_date is not None and filters.end_date < date.max:
        upper = datetime.combine(filters.end_date + timedelta(days=1), time.min)
    needle = filters.search.lower() if filters.search else None

    def predicate(s: ServiceRecord) -> bool:
        if filters.has_date_range:
            ts = s.scheduled_at
            if ts is None:
                return False
            if lower is not None and ts < lower:
                return False
            if upper is not None and ts >= upper:
                return False

        machine = machines_by_id.get(s.maquina_id) if s.maquina_id else None

        if filters.branch is not None:
            if machine is None or machine.filial != filters.branch:
                return False
        if filters.status is not None and s.status != filters.status:
            return False
        if filters.technician_id is not None and s.tecnico_id != filters.technician_id:
            return False
        if filters.machine_id is not None and s.maquina_id != filters.machine_id:
            return False
        if filters.service_type is not None and s.tipo_servico != filters.service_type:
            return False

        if needle is not None:
            return (
                _contains(s.descricao_servico, needle)
                or _contains(s.tecnico_nome, needle)
                or (machine is not None and _contains(machine.codigo, needle))
                or (machine is not None and _contains(machine.modelo, needle))
            )
        return True

    return predicate


def apply_filters(
    services: Sequence[ServiceRecord],
    machines: Sequence[MachineRecord],
    filters: ReportFilters,
) -> List[ServiceRecord]:
    predicate = build_predicate(filters, index_machines(machines))
    return [s for s in services if predicate(s)]
