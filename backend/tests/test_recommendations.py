# backend/tests/test_recommendations.py
from datetime import datetime, timedelta

import pytest

from climacare.reporting import build_recommendations
from climacare.reporting.recommendations import high_cost_machines, preventive_maintenance_due
from factories import machine, service

NOW = datetime(2025, 6, 30, 12, 0)


def test_high_cost_machine_scenario():
    machines = [machine("m1", codigo="AC-001", modelo="Split"), machine("m2", codigo="AC-002")]
    services = [
        service(maquina_id="m1", custo="400"),
        service(maquina_id="m1", custo="500.00"),
        service(maquina_id="m1", custo="300"),
        service(maquina_id="m2", custo="999.99"),
    ]
    items = high_cost_machines(services, machines)
    assert len(items) == 1
    item = items[0]
    assert item["machineId"] == "m1"
    assert item["codigo"] == "AC-001"
    assert item["name"] == "AC-001 - Split"
    assert item["totalCost"] == 1200.00
    assert item["serviceCount"] == 3
    assert item["avgCost"] == 400.00


def test_threshold_is_strict():
    assert high_cost_machines([service(custo="1000")], [machine()]) == []


def test_high_cost_sorted_by_total_desc():
    machines = [machine("m1"), machine("m2", codigo="AC-002")]
    services = [service(maquina_id="m1", custo="1500"), service(maquina_id="m2", custo="3000")]
    assert [i["machineId"] for i in high_cost_machines(services, machines)] == ["m2", "m1"]


@pytest.mark.parametrize("now", [datetime(2000, 1, 1), NOW, datetime(2100, 1, 1)])
def test_machine_without_preventive_is_always_due(now):
    services = [service(maquina_id="m1", tipo_servico="CORRETIVA", data_agendamento=NOW)]
    items = preventive_maintenance_due(services, [machine("m1")], now=now)
    assert [i["machineId"] for i in items] == ["m1"]
    assert items[0]["lastPreventiveDate"] is None
    assert items[0]["monthsSince"] is None


def _preventive(days_ago, **kw):
    when = NOW - timedelta(days=days_ago)
    kw.setdefault("status", "CONCLUIDO")
    return service(maquina_id="m1", tipo_servico="PREVENTIVA", data_agendamento=when, data_conclusao=when, **kw)


@pytest.mark.parametrize("days_ago,due", [(60, False), (180, False), (181, True), (400, True)])
def test_preventive_age_uses_thirty_day_months(days_ago, due):
    items = preventive_maintenance_due([_preventive(days_ago)], [machine("m1")], now=NOW)
    assert bool(items) is due


def test_most_recent_preventive_wins():
    services = [_preventive(400), _preventive(30)]
    assert preventive_maintenance_due(services, [machine("m1")], now=NOW) == []


def test_only_completed_preventives_count():
    services = [_preventive(400), _preventive(10, status="AGENDADO")]
    items = preventive_maintenance_due(services, [machine("m1")], now=NOW)
    assert len(items) == 1
    assert items[0]["monthsSince"] == pytest.approx(13.3, abs=0.1)


def test_never_serviced_first_then_most_overdue():
    machines = [machine("m1"), machine("m2", codigo="AC-002"), machine("m3", codigo="AC-003")]
    services = [
        _preventive(200),
        service(maquina_id="m2", tipo_servico="LIMPEZA"),
        service(maquina_id="m3", tipo_servico="PREVENTIVA", status="CONCLUIDO",
                data_conclusao=NOW - timedelta(days=500), data_agendamento=NOW - timedelta(days=500)),
    ]
    items = preventive_maintenance_due(services, machines, now=NOW)
    assert [i["machineId"] for i in items] == ["m2", "m3", "m1"]


def test_empty_history_yields_no_recommendations():
    assert build_recommendations([], [machine()], now=NOW) == {
        "highCostMachines": [],
        "preventiveMaintenanceDue": [],
    }


def test_machine_without_any_service_is_not_evaluated():
    services = [service(maquina_id="m1", tipo_servico="CORRETIVA", data_agendamento=NOW)]
    items = preventive_maintenance_due(services, [machine("m1"), machine("m2", codigo="AC-002")], now=NOW)
    assert [i["machineId"] for i in items] == ["m1"]
