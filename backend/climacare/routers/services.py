# climacare/routers/services.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..core.api import ok, list_meta
from ..core.db import get_db
from ..core.security import get_current_user
from ..models.user import User
from ..schemas.common import to_out
from ..schemas.service import ServiceCreate, ServiceUpdate, ServiceOut, ServiceHistoryOut
from ..services import service_orders

router = APIRouter(prefix="/api/services", tags=["services"])


@router.get("")
def list_services_ep(
    maquina_id: Optional[str] = Query(None, alias="maquinaId"),
    tecnico_id: Optional[str] = Query(None, alias="tecnicoId"),
    status_s: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    rows = service_orders.list_services(db, machine_id=maquina_id, technician_id=tecnico_id, status_s=status_s)
    items = [to_out(ServiceOut, s) for s in rows]
    return ok(items, meta=list_meta(items))


@router.get("/{service_id}")
def get_service_ep(service_id: str, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return ok(to_out(ServiceOut, service_orders.get_service_or_404(db, service_id)))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_service_ep(
    payload: ServiceCreate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    s = service_orders.create_service(db, payload, user_id=current.id)
    return ok(to_out(ServiceOut, s), status_code=status.HTTP_201_CREATED, message="Serviço criado com sucesso")


@router.put("/{service_id}")
def update_service_ep(
    service_id: str,
    payload: ServiceUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    s = service_orders.update_service(db, service_id, payload, user_id=current.id)
    return ok(to_out(ServiceOut, s), message="Serviço atualizado com sucesso")


@router.delete("/{service_id}")
def delete_service_ep(service_id: str, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    service_orders.delete_service(db, service_id)
    return ok(message="Serviço deletado com sucesso")


@router.get("/{service_id}/history")
def service_history_ep(service_id: str, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    items = [to_out(ServiceHistoryOut, h) for h in service_orders.service_history(db, service_id)]
    return ok(items, meta=list_meta(items))
