# climacare/routers/machines.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..core.api import ok, list_meta
from ..core.db import get_db
from ..core.security import get_current_user
from ..reporting.engine import money
from ..schemas.common import to_out
from ..schemas.machine import MachineCreate, MachineUpdate, MachineOut
from ..schemas.service import ServiceOut
from ..services import machine_service
from ..services.service_orders import list_services

router = APIRouter(
    prefix="/api/machines",
    tags=["machines"],
    dependencies=[Depends(get_current_user)],
)


@router.get("")
def list_machines_ep(
    status_s: Optional[str] = Query(None, alias="status"),
    filial: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    items = [to_out(MachineOut, m) for m in machine_service.list_machines(db, status_s=status_s, filial=filial)]
    return ok(items, meta=list_meta(items))


# antes de /{machine_id} para não colidir
@router.get("/codigo/{codigo}")
def get_machine_by_codigo_ep(codigo: str, db: Session = Depends(get_db)):
    m = machine_service.get_machine_by_codigo(db, codigo)
    if not m:
        raise HTTPException(status_code=404, detail="Máquina não encontrada")
    return ok(to_out(MachineOut, m))


@router.get("/{machine_id}")
def get_machine_ep(machine_id: str, db: Session = Depends(get_db)):
    return ok(to_out(MachineOut, machine_service.get_machine_or_404(db, machine_id)))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_machine_ep(payload: MachineCreate, db: Session = Depends(get_db)):
    m = machine_service.create_machine(db, payload)
    return ok(to_out(MachineOut, m), status_code=status.HTTP_201_CREATED, message="Máquina cadastrada com sucesso")


@router.put("/{machine_id}")
def update_machine_ep(machine_id: str, payload: MachineUpdate, db: Session = Depends(get_db)):
    m = machine_service.update_machine(db, machine_id, payload)
    return ok(to_out(MachineOut, m), message="Máquina atualizada com sucesso")


@router.delete("/{machine_id}")
def delete_machine_ep(machine_id: str, db: Session = Depends(get_db)):
    machine_service.delete_machine(db, machine_id)
    return ok(message="Máquina deletada com sucesso")


@router.get("/{machine_id}/services")
def machine_services_ep(machine_id: str, db: Session = Depends(get_db)):
    machine_service.get_machine_or_404(db, machine_id)
    items = [to_out(ServiceOut, s) for s in list_services(db, machine_id=machine_id)]
    return ok(items, meta=list_meta(items))


@router.get("/{machine_id}/maintenance-history")
def machine_maintenance_history_ep(machine_id: str, db: Session = Depends(get_db)):
    items = [
        {
            "service": to_out(ServiceOut, row["service"]),
            "daysSinceLastService": row["daysSinceLastService"],
            "totalCost": money(row["totalCost"]),
        }
        for row in machine_service.maintenance_history(db, machine_id)
    ]
    return ok(items, meta=list_meta(items))
