# backend/tests/test_filters.py
from datetime import date, datetime

import pytest

from climacare.reporting import DatePreset, ReportFilters, apply_filters, resolve_date_range
from factories import machine, service

TODAY = date(2025, 3, 10)


def test_sentinels_mean_no_constraint():
    f = ReportFilters.from_params(branchFilter="all", statusFilter="", technicianId="  ", search=None)
    assert f == ReportFilters()
    assert f.to_dict() == {}


def test_unparseable_dates_are_ignored():
    f = ReportFilters.from_params(startDate="not-a-date", endDate="2025-13-45")
    assert f.start_date is None and f.end_date is None
    assert not f.has_date_range


def test_iso_timestamps_are_reduced_to_dates():
    f = ReportFilters.from_params(startDate="2025-01-01T00:00:00Z", endDate=date(2025, 1, 31))
    assert f.start_date == date(2025, 1, 1)
    assert f.end_date == date(2025, 1, 31)


def test_end_date_is_inclusive_until_end_of_day():
    machines = [machine()]
    last_ms = service(data_agendamento=datetime(2025, 1, 31, 23, 59, 59, 999000))
    next_day = service(data_agendamento=datetime(2025, 2, 1, 0, 0, 0))
    f = ReportFilters.from_params(startDate="2025-01-01", endDate="2025-01-31")

    assert apply_filters([last_ms, next_day], machines, f) == [last_ms]


def test_extreme_bounds_do_not_overflow():
    machines = [machine()]
    old = service(data_agendamento=datetime(1, 1, 1, 0, 0))
    far = service(data_agendamento=datetime(9999, 12, 31, 23, 59, 59, 999999))
    f = ReportFilters.from_params(startDate="0001-01-01", endDate="9999-12-31")

    assert f.end_date == date.max
    assert apply_filters([old, far], machines, f) == [old, far]
    only_end = ReportFilters.from_params(endDate="9999-12-31")
    assert apply_filters([far], machines, only_end) == [far]


def test_start_date_includes_midnight():
    machines = [machine()]
    before = service(data_agendamento=datetime(2024, 12, 31, 23, 59, 59))
    at_start = service(data_agendamento=datetime(2025, 1, 1, 0, 0))
    f = ReportFilters.from_params(startDate="2025-01-01")

    assert apply_filters([before, at_start], machines, f) == [at_start]


def test_aware_timestamps_compare_in_utc():
    s = service(data_agendamento="2025-01-31T23:30:00-03:00")  # 02:30 UTC do dia 1º
    f = ReportFilters.from_params(endDate="2025-01-31")
    assert apply_filters([s], [machine()], f) == []


def test_invalid_schedule_only_excluded_from_dated_views():
    bad = service(data_agendamento="ontem")
    missing = service(data_agendamento=None)
    good = service(data_agendamento="2025-01-10T08:00:00")

    no_range = apply_filters([bad, missing, good], [machine()], ReportFilters())
    assert no_range == [bad, missing, good]

    ranged = apply_filters([bad, missing, good], [machine()],
                           ReportFilters.from_params(startDate="2025-01-01", endDate="2025-01-31"))
    assert ranged == [good]


def test_dimensions_are_combined_with_and():
    machines = [machine("m1", filial="Matriz"), machine("m2", codigo="AC-002", filial="Centro")]
    a = service(maquina_id="m1", status="CONCLUIDO", tipo_servico="PREVENTIVA")
    b = service(maquina_id="m1", status="AGENDADO", tipo_servico="PREVENTIVA")
    c = service(maquina_id="m2", status="CONCLUIDO", tipo_servico="PREVENTIVA")
    d = service(maquina_id="m1", status="CONCLUIDO", tipo_servico="LIMPEZA")

    f = ReportFilters.from_params(branchFilter="Matriz", statusFilter="CONCLUIDO", serviceType="PREVENTIVA")
    assert apply_filters([a, b, c, d], machines, f) == [a]


def test_branch_filter_excludes_unresolved_machines():
    orphan = service(maquina_id="gone")
    f = ReportFilters.from_params(branchFilter="Matriz")
    assert apply_filters([orphan], [machine()], f) == []


def test_technician_and_machine_exact_match():
    a = service(maquina_id="m1", tecnico_id="t1")
    b = service(maquina_id="m2", tecnico_id="t1")
    c = service(maquina_id="m1", tecnico_id="t2")
    machines = [machine("m1"), machine("m2", codigo="AC-002")]

    f = ReportFilters.from_params(technicianId="t1", machineId="m1")
    assert apply_filters([a, b, c], machines, f) == [a]


@pytest.mark.parametrize("needle", ["filtro", "MARIA", "ac-009", "cassete"])
def test_search_matches_any_field_case_insensitive(needle):
    machines = [machine("m9", codigo="AC-009", modelo="Cassete 36k")]
    hit = service(maquina_id="m9", tecnico_nome="Maria Souza", descricao_servico="Troca de FILTRO")
    assert apply_filters([hit], machines, ReportFilters.from_params(search=needle)) == [hit]


def test_search_without_match_excludes():
    s = service(descricao_servico="Limpeza", tecnico_nome="João")
    assert apply_filters([s], [machine()], ReportFilters.from_params(search="compressor")) == []


@pytest.mark.parametrize("preset,expected", [
    ("today", (date(2025, 3, 10), date(2025, 3, 10))),
    ("last7days", (date(2025, 3, 3), date(2025, 3, 10))),
    ("last30days", (date(2025, 2, 8), date(2025, 3, 10))),
    ("last90days", (date(2024, 12, 10), date(2025, 3, 10))),
    ("thismonth", (date(2025, 3, 1), date(2025, 3, 31))),
    ("lastmonth", (date(2025, 2, 1), date(2025, 2, 28))),
])
def test_presets_resolve_to_concrete_bounds(preset, expected):
    f = ReportFilters.from_params(dateRange=preset, today=TODAY)
    assert (f.start_date, f.end_date) == expected


def test_last_month_crosses_year():
    assert resolve_date_range(DatePreset.LAST_MONTH, today=date(2025, 1, 15)) == (date(2024, 12, 1), date(2024, 12, 31))


def test_custom_preset_keeps_explicit_bounds():
    f = ReportFilters.from_params(dateRange="custom", startDate="2025-01-05", endDate="2025-01-20", today=TODAY)
    assert (f.start_date, f.end_date) == (date(2025, 1, 5), date(2025, 1, 20))


def test_custom_preset_fills_missing_bounds():
    f = ReportFilters.from_params(dateRange="custom", today=TODAY)
    assert (f.start_date, f.end_date) == (date(2025, 2, 8), TODAY)


def test_unknown_preset_falls_back_to_explicit_bounds():
    f = ReportFilters.from_params(dateRange="fortnight", startDate="2025-01-01", today=TODAY)
    assert (f.start_date, f.end_date) == (date(2025, 1, 1), None)


def test_without_drops_dimensions():
    f = ReportFilters.from_params(branchFilter="Matriz", search="x", technicianId="t1")
    assert f.without("search", "technician_id").to_dict() == {"branchFilter": "Matriz"}
