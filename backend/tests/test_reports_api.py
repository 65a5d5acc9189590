# backend/tests/test_reports_api.py
import csv
import io

import pytest

from climacare.main import app
from climacare.routers.reports import get_store


@pytest.fixture()
def seeded(client, auth_headers, make_machine, make_technician):
    m1 = make_machine("AC-001", modelo="Split", filial="Matriz")
    m2 = make_machine("AC-002", modelo="Janela", filial="Centro")
    ana, bruno = make_technician("Ana"), make_technician("Bruno")

    def svc(machine, tech, when, **over):
        payload = {"maquinaId": machine["id"], "tecnicoId": tech["id"], "tipoServico": "CORRETIVA",
                   "descricaoServico": "Troca do capacitor", "dataAgendamento": when, **over}
        r = client.post("/api/services", json=payload, headers=auth_headers)
        assert r.status_code == 201, r.text
        return r.json()["data"]

    svc(m1, ana, "2025-01-10T09:00:00", status="CONCLUIDO", custo="400")
    svc(m1, ana, "2025-01-31T23:59:59", status="CONCLUIDO", custo="500", prioridade="URGENTE")
    svc(m1, bruno, "2025-02-01T00:00:00", status="AGENDADO", custo="300",
        descricaoServico="Limpeza, filtros e dreno")
    svc(m2, bruno, "2025-01-15T14:00:00", status="CANCELADO", tipoServico="VISTORIA")
    return {"m1": m1, "m2": m2, "ana": ana, "bruno": bruno}


def test_summary_envelope_and_kpis(client, auth_headers, seeded):
    r = client.get("/api/reports/summary",
                   params={"startDate": "2025-01-01", "endDate": "2025-01-31", "branchFilter": "all"},
                   headers=auth_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    data = body["data"]
    assert set(data) == {"summary", "breakdown", "services", "filters", "recommendations"}
    assert data["filters"] == {"startDate": "2025-01-01", "endDate": "2025-01-31"}
    assert body["meta"]["count"] == 3

    s = data["summary"]
    assert (s["totalServices"], s["completedServices"], s["canceledServices"]) == (3, 2, 1)
    assert s["completionRate"] == 66.67
    assert s["totalCost"] == 900.0
    assert s["urgentServices"] == 1
    assert data["breakdown"]["monthlyData"] == [{"label": "jan/25", "completed": 2, "pending": 0, "total": 3}]


def test_recommendations_use_full_history(client, auth_headers, seeded):
    r = client.get("/api/reports/summary", params={"branchFilter": "Centro"}, headers=auth_headers)
    data = r.json()["data"]
    assert data["summary"]["totalServices"] == 1
    high = data["recommendations"]["highCostMachines"]
    assert [(h["codigo"], h["totalCost"], h["serviceCount"], h["avgCost"]) for h in high] == [
        ("AC-001", 1200.0, 3, 400.0)
    ]
    due = {d["codigo"] for d in data["recommendations"]["preventiveMaintenanceDue"]}
    assert due == {"AC-001", "AC-002"}


def test_summary_search_and_technician(client, auth_headers, seeded):
    r = client.get("/api/reports/summary", params={"search": "FILTROS"}, headers=auth_headers)
    assert [row["descricaoServico"] for row in r.json()["data"]["services"]] == ["Limpeza, filtros e dreno"]

    r = client.get("/api/reports/summary", params={"technicianId": seeded["ana"]["id"]}, headers=auth_headers)
    assert r.json()["data"]["summary"]["totalServices"] == 2


def test_export_csv(client, auth_headers, seeded):
    r = client.get("/api/reports/export/csv",
                   params={"branchFilter": "Matriz", "technicianId": seeded["ana"]["id"]},
                   headers=auth_headers)
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert r.headers["content-disposition"].startswith('attachment; filename="relatorio_')

    rows = list(csv.reader(io.StringIO(r.text)))
    assert rows[0][0] == "ID"
    # técnico não filtra a exportação
    assert len(rows) == 4
    assert "Limpeza, filtros e dreno" in [row[2] for row in rows[1:]]


def test_real_time_stats_shape(client, auth_headers, seeded):
    data = client.get("/api/reports/real-time-stats", headers=auth_headers).json()["data"]
    assert set(data) == {"today", "week", "machines", "technicians", "alerts"}
    assert data["machines"]["total"] == 2
    assert data["technicians"]["total"] == 2
    assert data["alerts"]["overdueServices"] == 1


def test_cost_analysis(client, auth_headers, seeded):
    data = client.get("/api/reports/cost-analysis", headers=auth_headers).json()["data"]
    assert data["byTechnician"] == [
        {"name": "Ana", "count": 2, "totalCost": 900.0, "avgCost": 450.0},
        {"name": "Bruno", "count": 1, "totalCost": 300.0, "avgCost": 300.0},
    ]


class BrokenStore:
    def get_all_services(self):
        raise RuntimeError("banco fora do ar")

    get_all_machines = get_all_technicians = get_all_services


def test_store_failure_becomes_generic_error(client, auth_headers):
    app.dependency_overrides[get_store] = BrokenStore
    try:
        r = client.get("/api/reports/summary", headers=auth_headers)
    finally:
        app.dependency_overrides.pop(get_store, None)
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Não foi possível gerar o relatório"}


def test_open_ended_range_reaching_last_representable_day(client, auth_headers, seeded):
    params = {"startDate": "2025-01-20", "endDate": "9999-12-31"}
    r = client.get("/api/reports/summary", params=params, headers=auth_headers)
    assert r.status_code == 200, r.text
    assert r.json()["data"]["summary"]["totalServices"] == 2

    r = client.get("/api/reports/export/csv", params=params, headers=auth_headers)
    assert r.status_code == 200
    assert len(r.text.strip().splitlines()) == 3
