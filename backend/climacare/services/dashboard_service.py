# climacare/services/dashboard_service.py
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy import func
from sqlalchemy.orm import Session

from climacare.domain.constants import OPEN_STATUSES, STATUS_COMPLETED
from climacare.models import Machine, Service
from climacare.reporting.engine import money


def _count(db: Session, column, *criteria) -> int:
    return int(db.query(func.count(column)).filter(*criteria).scalar() or 0)


def dashboard_stats(db: Session) -> Dict[str, Any]:
    """Contagens de máquinas/serviços e custos (média só sobre serviços com custo)."""
    total, avg = (
        db.query(func.sum(Service.custo), func.avg(Service.custo))
          .filter(Service.custo.isnot(None))
          .one()
    )
    return {
        "activeMachines": _count(db, Machine.id, Machine.status == "ATIVO"),
        "maintenanceMachines": _count(db, Machine.id, Machine.status == "MANUTENCAO"),
        "defectMachines": _count(db, Machine.id, Machine.status == "DEFEITO"),
        "pendingServices": _count(db, Service.id, Service.status.in_(sorted(OPEN_STATUSES))),
        "completedServices": _count(db, Service.id, Service.status == STATUS_COMPLETED),
        "totalCost": money(Decimal(str(total or 0))),
        "avgServiceCost": money(Decimal(str(avg or 0))),
    }
