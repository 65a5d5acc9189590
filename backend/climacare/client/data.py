# climacare/client/data.py
from typing import Any, Dict, List, Optional
from uuid import uuid4

from climacare.reporting import (
    MachineRecord,
    ReportFilters,
    ServiceRecord,
    apply_filters,
    build_recommendations,
    build_report,
)

from .api import ApiClient
from .cache import QueryCache

MACHINES = "machines"
TECHNICIANS = "technicians"
SERVICES = "services"

_PATHS = {
    MACHINES: "/api/machines",
    TECHNICIANS: "/api/technicians",
    SERVICES: "/api/services",
}


def _with(items: List[Dict[str, Any]], item: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [*items, item]

def _patched(items: List[Dict[str, Any]], item_id: str, changes: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [{**it, **changes} if it.get("id") == item_id else it for it in items]

def _without(items: List[Dict[str, Any]], item_id: str) -> List[Dict[str, Any]]:
    return [it for it in items if it.get("id") != item_id]


class DataStore:
    """Acesso do front às entidades: listas cacheadas e mutações otimistas."""

    def __init__(self, api: ApiClient, cache: Optional[QueryCache] = None):
        self.api = api
        self.cache = cache or QueryCache()

    # ---- Leituras ----
    def _list(self, key: str) -> List[Dict[str, Any]]:
        return self.cache.get(key, lambda: self.api.get(_PATHS[key]) or [])

    def machines(self) -> List[Dict[str, Any]]:
        return self._list(MACHINES)

    def technicians(self) -> List[Dict[str, Any]]:
        return self._list(TECHNICIANS)

    def services(self) -> List[Dict[str, Any]]:
        return self._list(SERVICES)

    # ---- Mutações ----
    def _create(self, key: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        temp = {**payload, "id": f"tmp-{uuid4()}"}
        return self.cache.optimistic_update(
            key,
            lambda items: _with(items, temp),
            lambda: self.api.post(_PATHS[key], payload),
        )

    def _update(self, key: str, item_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self.cache.optimistic_update(
            key,
            lambda items: _patched(items, item_id, changes),
            lambda: self.api.put(f"{_PATHS[key]}/{item_id}", changes),
        )

    def _delete(self, key: str, item_id: str) -> Any:
        return self.cache.optimistic_update(
            key,
            lambda items: _without(items, item_id),
            lambda: self.api.delete(f"{_PATHS[key]}/{item_id}"),
        )

    def create_machine(self, payload):
        return self._create(MACHINES, payload)

    def update_machine(self, machine_id, changes):
        return self._update(MACHINES, machine_id, changes)

    def delete_machine(self, machine_id):
        result = self._delete(MACHINES, machine_id)
        # serviços da máquina somem em cascata no servidor
        self.cache.invalidate(SERVICES)
        return result

    def create_technician(self, payload):
        return self._create(TECHNICIANS, payload)

    def update_technician(self, technician_id, changes):
        return self._update(TECHNICIANS, technician_id, changes)

    def delete_technician(self, technician_id):
        return self._delete(TECHNICIANS, technician_id)

    def create_service(self, payload):
        return self._create(SERVICES, payload)

    def update_service(self, service_id, changes):
        return self._update(SERVICES, service_id, changes)

    def delete_service(self, service_id):
        return self._delete(SERVICES, service_id)

    # ---- Relatório local ----
    def report(self, filters: ReportFilters) -> Dict[str, Any]:
        """Mesmo cálculo do endpoint /api/reports/summary, sobre os dados em cache."""
        machines = [MachineRecord.from_dict(m) for m in self.machines()]
        services = [ServiceRecord.from_dict(s) for s in self.services()]
        report = build_report(apply_filters(services, machines, filters), machines)
        report["filters"] = filters.to_dict()
        report["recommendations"] = build_recommendations(services, machines)
        return report

    def real_time_stats(self) -> Dict[str, Any]:
        return self.api.get("/api/reports/real-time-stats")

    def export_csv(self, filters: ReportFilters) -> str:
        params = {
            "startDate": filters.start_date.isoformat() if filters.start_date else None,
            "endDate": filters.end_date.isoformat() if filters.end_date else None,
            "branchFilter": filters.branch,
            "statusFilter": filters.status,
        }
        return self.api.get_text("/api/reports/export/csv", params={k: v for k, v in params.items() if v})
