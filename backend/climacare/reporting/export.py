# climacare/reporting/export.py
"""Exportação CSV dos serviços filtrados (colunas fixas, sempre entre aspas)."""
from __future__ import annotations

import csv
import io
from datetime import date
from typing import List, Optional, Sequence

from ..domain.constants import NOT_AVAILABLE_LABEL
from .engine import branch_of, priority_of, status_of, technician_of, type_of
from .filters import index_machines
from .records import MachineRecord, ServiceRecord

CSV_COLUMNS: List[str] = [
    "ID",
    "Tipo de Serviço",
    "Descrição",
    "Data Agendamento",
    "Data Conclusão",
    "Técnico",
    "Status",
    "Prioridade",
    "Custo",
    "Código da Máquina",
    "Modelo",
    "Filial",
    "Localização",
    "Observações",
]


def csv_filename(today: Optional[date] = None) -> str:
    return f"relatorio_{(today or date.today()).isoformat()}.csv"


def _row(s: ServiceRecord, machine: Optional[MachineRecord]) -> List[str]:
    scheduled = s.scheduled_at
    completed = s.completed_at
    return [
        s.id,
        type_of(s),
        s.descricao_servico or "",
        scheduled.isoformat() if scheduled else "",
        completed.isoformat() if completed else "",
        technician_of(s),
        status_of(s),
        priority_of(s),
        f"{s.cost:.2f}",
        (machine.codigo if machine else None) or NOT_AVAILABLE_LABEL,
        (machine.modelo if machine else None) or NOT_AVAILABLE_LABEL,
        branch_of(machine),
        (machine.localizacao if machine else None) or NOT_AVAILABLE_LABEL,
        s.observacoes or "",
    ]


def services_to_csv(
    services: Sequence[ServiceRecord],
    machines: Sequence[MachineRecord],
) -> str:
    by_id = index_machines(machines)
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for s in services:
        writer.writerow(_row(s, by_id.get(s.maquina_id) if s.maquina_id else None))
    return buf.getvalue()
