# climacare/services/machine_service.py
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import DBAPIError, IntegrityError

from climacare.models import Machine, Service
from climacare.reporting.records import parse_cost
from climacare.schemas.machine import MachineCreate, MachineUpdate

logger = logging.getLogger(__name__)


def get_machine_or_404(db: Session, machine_id: str) -> Machine:
    m = db.get(Machine, machine_id)
    if not m:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Máquina não encontrada")
    return m


def get_machine_by_codigo(db: Session, codigo: str) -> Optional[Machine]:
    return db.query(Machine).filter(Machine.codigo == codigo.strip()).first()


def list_machines(db: Session, *, status_s: Optional[str] = None, filial: Optional[str] = None) -> List[Machine]:
    q = db.query(Machine)
    if status_s:
        q = q.filter(Machine.status == status_s)
    if filial:
        q = q.filter(Machine.filial == filial)
    return q.order_by(Machine.codigo).all()


def create_machine(db: Session, payload: MachineCreate) -> Machine:
    try:
        if get_machine_by_codigo(db, payload.codigo):
            raise HTTPException(status_code=400, detail="Já existe uma máquina com este código")

        m = Machine(**payload.model_dump())
        db.add(m)
        db.commit()
        db.refresh(m)
        logger.info("machine created id=%s codigo=%s", m.id, m.codigo)
        return m
    except HTTPException:
        db.rollback()
        raise
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"db_error: {getattr(e, 'orig', e)}")
    except Exception as e:
        db.rollback()
        logger.exception("create_machine failed (codigo=%s)", payload.codigo)
        raise HTTPException(status_code=500, detail=f"Erro ao criar máquina: {e!r}")


def update_machine(db: Session, machine_id: str, payload: MachineUpdate) -> Machine:
    try:
        m = get_machine_or_404(db, machine_id)
        changes = payload.model_dump(exclude_unset=True)

        new_code = changes.get("codigo")
        if new_code and new_code != m.codigo:
            other = get_machine_by_codigo(db, new_code)
            if other and other.id != m.id:
                raise HTTPException(status_code=400, detail="Já existe uma máquina com este código")

        for field, value in changes.items():
            setattr(m, field, value)
        m.updated_at = datetime.utcnow()
        db.commit()
        db.refresh(m)
        logger.info("machine updated id=%s fields=%s", m.id, sorted(changes))
        return m
    except HTTPException:
        db.rollback()
        raise
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"db_error: {getattr(e, 'orig', e)}")
    except Exception as e:
        db.rollback()
        logger.exception("update_machine failed (id=%s)", machine_id)
        raise HTTPException(status_code=500, detail=f"Erro ao atualizar máquina: {e!r}")


def delete_machine(db: Session, machine_id: str) -> None:
    try:
        m = get_machine_or_404(db, machine_id)
        # serviços e histórico saem junto (cascade do ORM)
        db.delete(m)
        db.commit()
        logger.info("machine deleted id=%s", machine_id)
    except HTTPException:
        db.rollback()
        raise
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"db_error: {getattr(e, 'orig', e)}")


def maintenance_history(db: Session, machine_id: str) -> List[Dict[str, Any]]:
    """Serviços da máquina do mais recente ao mais antigo, com intervalo e custo acumulado."""
    get_machine_or_404(db, machine_id)
    rows = (
        db.query(Service)
          .filter(Service.maquina_id == machine_id)
          .order_by(Service.data_agendamento.desc())
          .all()
    )
    result = []
    previous = None
    running = parse_cost(None)
    for s in rows:
        days_since = (previous - s.data_agendamento).days if previous is not None else 0
        running += parse_cost(s.custo)
        result.append({"service": s, "daysSinceLastService": days_since, "totalCost": running})
        previous = s.data_agendamento
    return result
