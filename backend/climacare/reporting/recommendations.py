# climacare/reporting/recommendations.py
"""Recomendações heurísticas: máquinas de custo alto e preventivas vencidas."""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from ..domain.constants import (
    DAYS_PER_MONTH,
    HIGH_COST_THRESHOLD,
    PREVENTIVE_INTERVAL_MONTHS,
    PREVENTIVE_TYPE,
    STATUS_COMPLETED,
)
from .engine import machine_label, money, ratio
from .records import MachineRecord, ServiceRecord


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def high_cost_machines(
    services: Sequence[ServiceRecord],
    machines: Sequence[MachineRecord],
    threshold: Decimal = HIGH_COST_THRESHOLD,
) -> List[Dict[str, Any]]:
    by_id = {m.id: m for m in machines}
    totals: Dict[str, Decimal] = {}
    counts: Dict[str, int] = {}
    for s in services:
        if not s.maquina_id:
            continue
        totals[s.maquina_id] = totals.get(s.maquina_id, Decimal("0")) + s.cost
        counts[s.maquina_id] = counts.get(s.maquina_id, 0) + 1

    items = []
    for machine_id, total in totals.items():
        if total <= threshold:
            continue
        machine = by_id.get(machine_id)
        n = counts[machine_id]
        items.append({
            "machineId": machine_id,
            "codigo": machine.codigo if machine else None,
            "name": machine_label(machine),
            "totalCost": money(total),
            "serviceCount": n,
            "avgCost": money(ratio(total, n)),
            "message": (
                f"Máquina {machine_label(machine)} acumulou R$ {money(total):.2f} "
                f"em {n} serviço(s); avaliar substituição."
            ),
        })
    items.sort(key=lambda it: it["totalCost"], reverse=True)
    return items


def _preventive_date(s: ServiceRecord) -> Optional[datetime]:
    return s.completed_at or s.scheduled_at


def preventive_maintenance_due(
    services: Sequence[ServiceRecord],
    machines: Sequence[MachineRecord],
    now: Optional[datetime] = None,
    interval_months: int = PREVENTIVE_INTERVAL_MONTHS,
) -> List[Dict[str, Any]]:
    """
    Máquinas com histórico de serviço cuja última preventiva concluída tem
    mais de ``interval_months`` meses (mês de 30 dias). Máquinas sem nenhuma
    preventiva sempre entram.

    Só são avaliadas máquinas com pelo menos um serviço registrado (de
    qualquer tipo): máquina sem histórico algum não gera recomendação, e uma
    lista de serviços vazia resulta em lista vazia.
    """
    now = now or utcnow()
    last: Dict[str, datetime] = {}
    serviced = set()
    for s in services:
        if s.maquina_id:
            serviced.add(s.maquina_id)
        if s.tipo_servico != PREVENTIVE_TYPE or s.status != STATUS_COMPLETED or not s.maquina_id:
            continue
        when = _preventive_date(s)
        if when is None:
            continue
        if s.maquina_id not in last or when > last[s.maquina_id]:
            last[s.maquina_id] = when

    items = []
    for m in machines:
        if m.id not in serviced:
            continue
        when = last.get(m.id)
        if when is None:
            months = None
        else:
            months = (now - when).days / DAYS_PER_MONTH
            if months <= interval_months:
                continue
        items.append({
            "machineId": m.id,
            "codigo": m.codigo,
            "name": machine_label(m),
            "filial": m.filial,
            "lastPreventiveDate": when.isoformat() if when else None,
            "monthsSince": round(months, 1) if months is not None else None,
            "message": (
                f"Máquina {machine_label(m)} nunca recebeu manutenção preventiva."
                if months is None
                else f"Máquina {machine_label(m)} está há {months:.1f} meses sem preventiva."
            ),
        })
    # nunca atendidas primeiro, depois as mais atrasadas
    items.sort(key=lambda it: (it["monthsSince"] is not None, -(it["monthsSince"] or 0)))
    return items


def build_recommendations(
    services: Sequence[ServiceRecord],
    machines: Sequence[MachineRecord],
    now: Optional[datetime] = None,
) -> Dict[str, List[Dict[str, Any]]]:
    return {
        "highCostMachines": high_cost_machines(services, machines),
        "preventiveMaintenanceDue": preventive_maintenance_due(services, machines, now=now),
    }
