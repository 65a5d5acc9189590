# backend/tests/test_realtime.py
from datetime import datetime, timedelta

from climacare.reporting import TechnicianRecord, real_time_stats
from factories import machine, service

NOW = datetime(2025, 3, 10, 15, 0)


def test_real_time_stats():
    machines = [
        machine("m1", status="ATIVO"),
        machine("m2", codigo="AC-002", status="DEFEITO"),
        machine("m3", codigo="AC-003", status="MANUTENCAO"),
    ]
    technicians = [
        TechnicianRecord(id="t1", nome="Ana", status="ATIVO"),
        TechnicianRecord(id="t2", nome="Bruno", status="INATIVO"),
    ]
    services = [
        # hoje
        service(tecnico_nome="Ana", status="CONCLUIDO", data_agendamento=NOW.replace(hour=8)),
        service(tecnico_nome="Ana", status="AGENDADO", data_agendamento=NOW.replace(hour=18)),
        # semana
        service(tecnico_nome="Bruno", status="EM_ANDAMENTO", prioridade="URGENTE",
                data_agendamento=NOW - timedelta(days=3)),
        service(tecnico_nome="Ana", status="AGENDADO", data_agendamento=NOW - timedelta(days=2)),
        # fora da semana
        service(tecnico_nome="Bruno", status="CONCLUIDO", prioridade="ALTA",
                data_agendamento=NOW - timedelta(days=20)),
    ]

    stats = real_time_stats(services, machines, technicians, now=NOW)

    assert stats["today"] == {"total": 2, "completed": 1, "pending": 1}
    # o agendamento das 18h ainda não chegou: fora da janela dos últimos 7 dias
    assert stats["week"] == {"total": 3, "completed": 1, "completionRate": 33.33}
    assert stats["machines"] == {"total": 3, "active": 1, "problems": 2}
    assert stats["technicians"]["total"] == 2
    assert stats["technicians"]["active"] == 1
    assert stats["technicians"]["topActive"] == [{"name": "Ana", "count": 2}, {"name": "Bruno", "count": 1}]
    # urgente/alta só conta em aberto; atrasado = AGENDADO no passado
    assert stats["alerts"] == {"urgentServices": 1, "overdueServices": 1}


def test_real_time_stats_empty():
    stats = real_time_stats([], [], [], now=NOW)
    assert stats["today"] == {"total": 0, "completed": 0, "pending": 0}
    assert stats["week"]["completionRate"] == 0.0
    assert stats["technicians"]["topActive"] == []
    assert stats["alerts"] == {"urgentServices": 0, "overdueServices": 0}
