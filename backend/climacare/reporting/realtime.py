# climacare/reporting/realtime.py
"""Indicadores em tempo real do painel (hoje, últimos 7 dias, alertas)."""
from __future__ import annotations

from datetime import datetime, time, timedelta
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..domain.constants import (
    OPEN_STATUSES,
    PROBLEM_MACHINE_STATUSES,
    STATUS_COMPLETED,
    STATUS_SCHEDULED,
    TOP_ACTIVE_TECHNICIANS,
    URGENT_PRIORITIES,
)
from .engine import money, ratio, status_of, technician_of, top_pairs
from .records import MachineRecord, ServiceRecord, TechnicianRecord
from .recommendations import utcnow


def real_time_stats(
    services: Sequence[ServiceRecord],
    machines: Sequence[MachineRecord],
    technicians: Sequence[TechnicianRecord],
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    now = now or utcnow()
    day_start = datetime.combine(now.date(), time.min)
    day_end = day_start + timedelta(days=1)
    week_start = now - timedelta(days=7)

    today = [s for s in services if s.scheduled_at and day_start <= s.scheduled_at < day_end]
    week = [s for s in services if s.scheduled_at and week_start <= s.scheduled_at <= now]
    week_completed = sum(1 for s in week if status_of(s) == STATUS_COMPLETED)

    urgent_open = sum(
        1 for s in services
        if s.prioridade in URGENT_PRIORITIES and status_of(s) in OPEN_STATUSES
    )
    # agendado no passado e ainda AGENDADO
    overdue = sum(
        1 for s in services
        if status_of(s) == STATUS_SCHEDULED and s.scheduled_at is not None and s.scheduled_at < now
    )

    return {
        "today": {
            "total": len(today),
            "completed": sum(1 for s in today if status_of(s) == STATUS_COMPLETED),
            "pending": sum(1 for s in today if status_of(s) in OPEN_STATUSES),
        },
        "week": {
            "total": len(week),
            "completed": week_completed,
            "completionRate": money(ratio(Decimal(week_completed) * 100, len(week))),
        },
        "machines": {
            "total": len(machines),
            "active": sum(1 for m in machines if m.status == "ATIVO"),
            "problems": sum(1 for m in machines if m.status in PROBLEM_MACHINE_STATUSES),
        },
        "technicians": {
            "total": len(technicians),
            "active": sum(1 for t in technicians if t.status == "ATIVO"),
            "topActive": top_pairs((technician_of(s) for s in week), TOP_ACTIVE_TECHNICIANS),
        },
        "alerts": {
            "urgentServices": urgent_open,
            "overdueServices": overdue,
        },
    }
