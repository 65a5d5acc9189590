# climacare/services/store.py
"""Acesso de leitura usado pelos relatórios: listas já materializadas."""
from typing import List, Optional, Protocol

from sqlalchemy.orm import Session

from climacare.models import Machine, Service, Technician
from climacare.reporting.records import MachineRecord, ServiceRecord, TechnicianRecord


class EntityStore(Protocol):
    def get_all_services(self) -> List[ServiceRecord]: ...
    def get_all_machines(self) -> List[MachineRecord]: ...
    def get_all_technicians(self) -> List[TechnicianRecord]: ...
    def get_machine(self, machine_id: str) -> Optional[MachineRecord]: ...
    def get_technician(self, technician_id: str) -> Optional[TechnicianRecord]: ...


class SqlEntityStore:
    """Cada chamada lê um retrato próprio; não há transação entre leituras."""

    def __init__(self, db: Session):
        self.db = db

    def get_all_services(self) -> List[ServiceRecord]:
        rows = self.db.query(Service).order_by(Service.data_agendamento.desc()).all()
        return [ServiceRecord.from_orm(s) for s in rows]

    def get_all_machines(self) -> List[MachineRecord]:
        return [MachineRecord.from_orm(m) for m in self.db.query(Machine).order_by(Machine.codigo).all()]

    def get_all_technicians(self) -> List[TechnicianRecord]:
        return [TechnicianRecord.from_orm(t) for t in self.db.query(Technician).order_by(Technician.nome).all()]

    def get_machine(self, machine_id: str) -> Optional[MachineRecord]:
        m = self.db.get(Machine, machine_id)
        return MachineRecord.from_orm(m) if m else None

    def get_technician(self, technician_id: str) -> Optional[TechnicianRecord]:
        t = self.db.get(Technician, technician_id)
        return TechnicianRecord.from_orm(t) if t else None
