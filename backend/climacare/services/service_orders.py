# climacare/services/service_orders.py
import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import DBAPIError, IntegrityError

from climacare.domain.constants import HISTORY_CREATED, HISTORY_STATUS_UPDATED, UNKNOWN_TECHNICIAN_LABEL
from climacare.models import Machine, Service, ServiceHistory, Technician
from climacare.schemas.service import ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)


def _naive_utc(dt: Optional[datetime]) -> Optional[datetime]:
    if dt is None or dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def get_service_or_404(db: Session, service_id: str) -> Service:
    s = db.get(Service, service_id)
    if not s:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Serviço não encontrado")
    return s


def list_services(
    db: Session, *,
    machine_id: Optional[str] = None,
    technician_id: Optional[str] = None,
    status_s: Optional[str] = None,
) -> List[Service]:
    q = db.query(Service)
    if machine_id:
        q = q.filter(Service.maquina_id == machine_id)
    if technician_id:
        q = q.filter(Service.tecnico_id == technician_id)
    if status_s:
        q = q.filter(Service.status == status_s)
    return q.order_by(Service.data_agendamento.desc()).all()


def _snapshot_technician(db: Session, technician_id: str) -> str:
    tech = db.get(Technician, technician_id)
    if not tech:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Técnico não encontrado")
    return tech.nome or UNKNOWN_TECHNICIAN_LABEL


def _ensure_machine(db: Session, machine_id: str) -> None:
    if not db.get(Machine, machine_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Máquina não encontrada")


def create_service(db: Session, payload: ServiceCreate, *, user_id: Optional[str] = None) -> Service:
    try:
        _ensure_machine(db, payload.maquina_id)
        tecnico_nome = _snapshot_technician(db, payload.tecnico_id)

        data = payload.model_dump()
        data["data_agendamento"] = _naive_utc(data["data_agendamento"]) or datetime.utcnow()
        data["data_conclusao"] = _naive_utc(data["data_conclusao"])

        s = Service(**data, tecnico_nome=tecnico_nome)
        db.add(s)
        db.flush()
        db.add(ServiceHistory(
            service_id=s.id,
            status=s.status,
            observacao=HISTORY_CREATED,
            created_by=user_id,
        ))
        db.commit()
        db.refresh(s)
        logger.info("service created id=%s maquina=%s tecnico=%s", s.id, s.maquina_id, s.tecnico_id)
        return s
    except HTTPException:
        db.rollback()
        raise
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"db_error: {getattr(e, 'orig', e)}")
    except Exception as e:
        db.rollback()
        logger.exception("create_service failed")
        raise HTTPException(status_code=500, detail=f"Erro ao criar serviço: {e!r}")


def update_service(
    db: Session, service_id: str, payload: ServiceUpdate, *, user_id: Optional[str] = None,
) -> Service:
    """
    Atualização parcial. Qualquer status pode suceder qualquer outro.
    Gravar ``tecnicoId`` renova a cópia do nome; informar ``status`` gera
    uma entrada de histórico.
    """
    try:
        s = get_service_or_404(db, service_id)
        changes = payload.model_dump(exclude_unset=True)

        if changes.get("maquina_id"):
            _ensure_machine(db, changes["maquina_id"])
        if changes.get("tecnico_id"):
            s.tecnico_nome = _snapshot_technician(db, changes["tecnico_id"])

        # campos obrigatórios não aceitam null explícito
        for required in ("tipo_servico", "maquina_id", "tecnico_id", "descricao_servico",
                         "data_agendamento", "prioridade", "status"):
            if required in changes and changes[required] is None:
                changes.pop(required)

        for ts_field in ("data_agendamento", "data_conclusao"):
            if ts_field in changes:
                changes[ts_field] = _naive_utc(changes[ts_field])

        for field, value in changes.items():
            setattr(s, field, value)
        s.updated_at = datetime.utcnow()

        if changes.get("status"):
            db.add(ServiceHistory(
                service_id=s.id,
                status=changes["status"],
                observacao=HISTORY_STATUS_UPDATED,
                created_by=user_id,
            ))
        db.commit()
        db.refresh(s)
        logger.info("service updated id=%s fields=%s", s.id, sorted(changes))
        return s
    except HTTPException:
        db.rollback()
        raise
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"db_error: {getattr(e, 'orig', e)}")
    except Exception as e:
        db.rollback()
        logger.exception("update_service failed (id=%s)", service_id)
        raise HTTPException(status_code=500, detail=f"Erro ao atualizar serviço: {e!r}")


def delete_service(db: Session, service_id: str) -> None:
    try:
        s = get_service_or_404(db, service_id)
        db.delete(s)
        db.commit()
        logger.info("service deleted id=%s", service_id)
    except HTTPException:
        db.rollback()
        raise
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"db_error: {getattr(e, 'orig', e)}")


def service_history(db: Session, service_id: str) -> List[ServiceHistory]:
    get_service_or_404(db, service_id)
    return (
        db.query(ServiceHistory)
          .filter(ServiceHistory.service_id == service_id)
          .order_by(ServiceHistory.id.desc())
          .all()
    )
