# climacare/reporting/engine.py
"""
Motor de agregação dos relatórios de serviço.

Funções puras: recebem a lista de serviços já filtrada e a lista completa de
máquinas (para filial/código/modelo) e devolvem estruturas prontas para JSON.
Dados ruins nunca abortam o cálculo: custo inválido vale 0, data inválida
fica fora da série mensal, máquina ausente vira rótulo padrão.
"""
from __future__ import annotations

from collections import Counter
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..domain.constants import (
    DEFAULT_PRIORITY_LABEL,
    DEFAULT_STATUS_LABEL,
    DEFAULT_TYPE_LABEL,
    MONEY_PLACES,
    MONTH_ABBREVIATIONS,
    NOT_AVAILABLE_LABEL,
    OPEN_STATUSES,
    STATUS_CANCELED,
    STATUS_COMPLETED,
    TOP_MACHINES,
    TOP_TECHNICIANS,
    UNKNOWN_BRANCH_LABEL,
    UNKNOWN_MACHINE_LABEL,
    UNKNOWN_TECHNICIAN_LABEL,
    URGENT_PRIORITIES,
)
from .filters import index_machines
from .records import MachineRecord, ServiceRecord


def money(value: Decimal) -> float:
    with localcontext() as ctx:
        # precisão suficiente para os dígitos inteiros mais os centavos
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return float(value.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP))


def ratio(part: Decimal, whole: int) -> Decimal:
    if whole <= 0:
        return Decimal("0")
    return part / Decimal(whole)


# ---- Rótulos com valor padrão ----
def status_of(s: ServiceRecord) -> str:
    return s.status or DEFAULT_STATUS_LABEL

def type_of(s: ServiceRecord) -> str:
    return s.tipo_servico or DEFAULT_TYPE_LABEL

def technician_of(s: ServiceRecord) -> str:
    return s.tecnico_nome or UNKNOWN_TECHNICIAN_LABEL

def priority_of(s: ServiceRecord) -> str:
    return s.prioridade or DEFAULT_PRIORITY_LABEL

def branch_of(machine: Optional[MachineRecord]) -> str:
    if machine is None or not machine.filial:
        return UNKNOWN_BRANCH_LABEL
    return machine.filial

def machine_label(machine: Optional[MachineRecord]) -> str:
    if machine is None:
        return UNKNOWN_MACHINE_LABEL
    return machine.label


def count_pairs(keys: Iterable[str]) -> List[Dict[str, Any]]:
    """Pares {name, count} na ordem da primeira ocorrência."""
    return [{"name": k, "count": c} for k, c in Counter(keys).items()]


def top_pairs(keys: Iterable[str], limit: int) -> List[Dict[str, Any]]:
    # sorted é estável: empates mantêm a ordem da primeira ocorrência
    ranked = sorted(Counter(keys).items(), key=lambda kv: kv[1], reverse=True)
    return [{"name": k, "count": c} for k, c in ranked[:limit]]


def summarize(services: Sequence[ServiceRecord]) -> Dict[str, Any]:
    total = len(services)
    statuses = [status_of(s) for s in services]
    completed = sum(1 for st in statuses if st == STATUS_COMPLETED)
    pending = sum(1 for st in statuses if st in OPEN_STATUSES)
    canceled = sum(1 for st in statuses if st == STATUS_CANCELED)
    urgent = sum(1 for s in services if s.prioridade in URGENT_PRIORITIES)
    total_cost = sum((s.cost for s in services), Decimal("0"))

    return {
        "totalServices": total,
        "completedServices": completed,
        "pendingServices": pending,
        "canceledServices": canceled,
        "completionRate": money(ratio(Decimal(completed) * 100, total)),
        "totalCost": money(total_cost),
        "avgCostPerService": money(ratio(total_cost, total)),
        "urgentServices": urgent,
    }


def month_key(s: ServiceRecord) -> Optional[Tuple[int, int]]:
    ts = s.scheduled_at
    if ts is None:
        return None
    return ts.year, ts.month


def month_label(key: Tuple[int, int]) -> str:
    year, month = key
    return f"{MONTH_ABBREVIATIONS[month - 1]}/{year % 100:02d}"


def monthly_series(services: Sequence[ServiceRecord]) -> List[Dict[str, Any]]:
    """Um balde por mês presente, em ordem cronológica (pela chave ano-mês)."""
    buckets: Dict[Tuple[int, int], Dict[str, Any]] = {}
    for s in services:
        key = month_key(s)
        if key is None:
            continue
        b = buckets.setdefault(key, {"label": month_label(key), "completed": 0, "pending": 0, "total": 0})
        st = status_of(s)
        b["total"] += 1
        if st == STATUS_COMPLETED:
            b["completed"] += 1
        elif st in OPEN_STATUSES:
            b["pending"] += 1
    return [buckets[k] for k in sorted(buckets)]


def breakdown(
    services: Sequence[ServiceRecord],
    machines_by_id: Mapping[str, MachineRecord],
) -> Dict[str, List[Dict[str, Any]]]:
    machines_of = [machines_by_id.get(s.maquina_id) if s.maquina_id else None for s in services]
    return {
        "byType": count_pairs(type_of(s) for s in services),
        "byStatus": count_pairs(status_of(s) for s in services),
        "byBranch": count_pairs(branch_of(m) for m in machines_of),
        "byTechnician": count_pairs(technician_of(s) for s in services),
        "topTechnicians": top_pairs((technician_of(s) for s in services), TOP_TECHNICIANS),
        "topMachines": top_pairs((machine_label(m) for m in machines_of), TOP_MACHINES),
        "monthlyData": monthly_series(services),
    }


def service_row(s: ServiceRecord, machine: Optional[MachineRecord]) -> Dict[str, Any]:
    """Linha plana do serviço, com os dados da máquina resolvidos."""
    scheduled = s.scheduled_at
    completed = s.completed_at
    return {
        "id": s.id,
        "maquinaId": s.maquina_id,
        "tecnicoId": s.tecnico_id,
        "tipoServico": type_of(s),
        "descricaoServico": s.descricao_servico or "",
        "dataAgendamento": scheduled.isoformat() if scheduled else None,
        "dataConclusao": completed.isoformat() if completed else None,
        "tecnicoNome": technician_of(s),
        "status": status_of(s),
        "prioridade": priority_of(s),
        "custo": money(s.cost),
        "observacoes": s.observacoes or "",
        "machineCodigo": machine.codigo if machine and machine.codigo else NOT_AVAILABLE_LABEL,
        "machineModelo": machine.modelo if machine and machine.modelo else NOT_AVAILABLE_LABEL,
        "machineFilial": branch_of(machine),
        "machineLocalizacao": machine.localizacao if machine and machine.localizacao else NOT_AVAILABLE_LABEL,
    }


def service_rows(
    services: Sequence[ServiceRecord],
    machines_by_id: Mapping[str, MachineRecord],
) -> List[Dict[str, Any]]:
    return [service_row(s, machines_by_id.get(s.maquina_id) if s.maquina_id else None) for s in services]


def build_report(
    services: Sequence[ServiceRecord],
    machines: Sequence[MachineRecord],
) -> Dict[str, Any]:
    """Resumo + agrupamentos + linhas para um conjunto de serviços já filtrado."""
    by_id = index_machines(machines)
    return {
        "summary": summarize(services),
        "breakdown": breakdown(services, by_id),
        "services": service_rows(services, by_id),
    }


def cost_analysis(
    services: Sequence[ServiceRecord],
    machines: Sequence[MachineRecord],
) -> Dict[str, List[Dict[str, Any]]]:
    """Custos por tipo, técnico, filial e prioridade (só serviços com custo)."""
    by_id = index_machines(machines)
    costed = [s for s in services if s.custo not in (None, "")]

    def group(key_fn) -> List[Dict[str, Any]]:
        acc: Dict[str, List[Decimal]] = {}
        for s in costed:
            acc.setdefault(key_fn(s), []).append(s.cost)
        rows = [
            {
                "name": name,
                "count": len(costs),
                "totalCost": money(sum(costs, Decimal("0"))),
                "avgCost": money(ratio(sum(costs, Decimal("0")), len(costs))),
            }
            for name, costs in acc.items()
        ]
        rows.sort(key=lambda r: r["totalCost"], reverse=True)
        return rows

    return {
        "byType": group(type_of),
        "byTechnician": group(technician_of),
        "byBranch": group(lambda s: branch_of(by_id.get(s.maquina_id) if s.maquina_id else None)),
        "byPriority": group(priority_of),
    }
