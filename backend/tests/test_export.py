# backend/tests/test_export.py
import csv
import io
from datetime import date, datetime

from climacare.reporting import CSV_COLUMNS, csv_filename, services_to_csv
from factories import machine, service


def _parse(text):
    return list(csv.reader(io.StringIO(text)))


def test_header_has_fixed_columns_in_order():
    rows = _parse(services_to_csv([], []))
    assert rows == [CSV_COLUMNS]
    assert CSV_COLUMNS[0] == "ID" and CSV_COLUMNS[-1] == "Observações"
    assert len(CSV_COLUMNS) == 14


def test_description_with_comma_round_trips():
    desc = 'Troca do capacitor, limpeza e teste "final"'
    text = services_to_csv([service(descricao_servico=desc)], [machine()])
    assert '"Troca do capacitor, limpeza e teste ""final"""' in text
    assert _parse(text)[1][2] == desc


def test_every_field_is_quoted():
    text = services_to_csv([service(custo="12.5")], [machine()])
    for line in text.strip().split("\n"):
        assert line.startswith('"') and line.endswith('"')


def test_row_values():
    m = machine("m1", codigo="AC-001", modelo="Split", filial="Matriz", localizacao="Sala 2")
    s = service(
        id="abc",
        maquina_id="m1",
        tipo_servico="LIMPEZA",
        tecnico_nome="Maria",
        status="CONCLUIDO",
        prioridade="ALTA",
        custo="150.5",
        data_agendamento=datetime(2025, 1, 10, 9, 30),
        data_conclusao=None,
        observacoes="ok",
    )
    row = _parse(services_to_csv([s], [m]))[1]
    assert row == [
        "abc", "LIMPEZA", "Serviço", "2025-01-10T09:30:00", "", "Maria", "CONCLUIDO", "ALTA",
        "150.50", "AC-001", "Split", "Matriz", "Sala 2", "ok",
    ]


def test_unmatched_machine_uses_placeholders():
    row = _parse(services_to_csv([service(maquina_id="gone", custo=None)], []))[1]
    assert row[8] == "0.00"
    assert row[9:13] == ["N/A", "N/A", "Não especificada", "N/A"]


def test_filename_uses_date():
    assert csv_filename(date(2025, 3, 1)) == "relatorio_2025-03-01.csv"
