# climacare/services/technician_service.py
import logging
from datetime import datetime
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import DBAPIError, IntegrityError

from climacare.models import Service, Technician
from climacare.schemas.technician import TechnicianCreate, TechnicianUpdate

logger = logging.getLogger(__name__)


def get_technician_or_404(db: Session, technician_id: str) -> Technician:
    t = db.get(Technician, technician_id)
    if not t:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Técnico não encontrado")
    return t


def list_technicians(db: Session) -> List[Technician]:
    return db.query(Technician).order_by(Technician.nome).all()


def create_technician(db: Session, payload: TechnicianCreate) -> Technician:
    try:
        t = Technician(**payload.model_dump())
        db.add(t)
        db.commit()
        db.refresh(t)
        logger.info("technician created id=%s", t.id)
        return t
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"db_error: {getattr(e, 'orig', e)}")


def update_technician(db: Session, technician_id: str, payload: TechnicianUpdate) -> Technician:
    """
    Atualização parcial. Renomear o técnico NÃO altera ``tecnico_nome`` dos
    serviços já gravados: a cópia só é renovada quando o serviço é regravado
    com ``tecnicoId``.
    """
    try:
        t = get_technician_or_404(db, technician_id)
        changes = payload.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(t, field, value)
        t.updated_at = datetime.utcnow()
        db.commit()
        db.refresh(t)
        logger.info("technician updated id=%s fields=%s", t.id, sorted(changes))
        return t
    except HTTPException:
        db.rollback()
        raise
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"db_error: {getattr(e, 'orig', e)}")


def delete_technician(db: Session, technician_id: str) -> None:
    try:
        t = get_technician_or_404(db, technician_id)
        in_use = db.query(Service.id).filter(Service.tecnico_id == technician_id).first()
        if in_use:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Técnico possui serviços vinculados e não pode ser excluído",
            )
        db.delete(t)
        db.commit()
        logger.info("technician deleted id=%s", technician_id)
    except HTTPException:
        db.rollback()
        raise
    except (IntegrityError, DBAPIError) as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"db_error: {getattr(e, 'orig', e)}")
