# climacare/routers/technicians.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..core.api import ok, list_meta
from ..core.db import get_db
from ..core.security import get_current_user
from ..schemas.common import to_out
from ..schemas.service import ServiceOut
from ..schemas.technician import TechnicianCreate, TechnicianUpdate, TechnicianOut
from ..services import technician_service
from ..services.service_orders import list_services

router = APIRouter(
    prefix="/api/technicians",
    tags=["technicians"],
    dependencies=[Depends(get_current_user)],
)


@router.get("")
def list_technicians_ep(db: Session = Depends(get_db)):
    items = [to_out(TechnicianOut, t) for t in technician_service.list_technicians(db)]
    return ok(items, meta=list_meta(items))


@router.get("/{technician_id}")
def get_technician_ep(technician_id: str, db: Session = Depends(get_db)):
    return ok(to_out(TechnicianOut, technician_service.get_technician_or_404(db, technician_id)))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_technician_ep(payload: TechnicianCreate, db: Session = Depends(get_db)):
    t = technician_service.create_technician(db, payload)
    return ok(to_out(TechnicianOut, t), status_code=status.HTTP_201_CREATED, message="Técnico cadastrado com sucesso")


@router.put("/{technician_id}")
def update_technician_ep(technician_id: str, payload: TechnicianUpdate, db: Session = Depends(get_db)):
    t = technician_service.update_technician(db, technician_id, payload)
    return ok(to_out(TechnicianOut, t), message="Técnico atualizado com sucesso")


@router.delete("/{technician_id}")
def delete_technician_ep(technician_id: str, db: Session = Depends(get_db)):
    technician_service.delete_technician(db, technician_id)
    return ok(message="Técnico deletado com sucesso")


@router.get("/{technician_id}/services")
def technician_services_ep(technician_id: str, db: Session = Depends(get_db)):
    technician_service.get_technician_or_404(db, technician_id)
    items = [to_out(ServiceOut, s) for s in list_services(db, technician_id=technician_id)]
    return ok(items, meta=list_meta(items))
