# backend/climacare/domain/constants.py

"""
Fonte única dos enums de domínio, rótulos padrão e limites usados pelos
relatórios.
"""

from decimal import Decimal
from typing import Final, Tuple

# ---- Enums (armazenados como texto + CheckConstraint) ----
MACHINE_TYPES: Final[Tuple[str, ...]] = ("SPLIT", "WINDOW", "CASSETE", "PISO_TETO", "PORTATIL", "INVERTER")
MACHINE_VOLTAGES: Final[Tuple[str, ...]] = ("V110", "V220", "BIVOLT")
LOCATION_TYPES: Final[Tuple[str, ...]] = ("SALA", "QUARTO", "ESCRITORIO", "SALA_REUNIAO", "OUTRO")
MACHINE_STATUSES: Final[Tuple[str, ...]] = ("ATIVO", "INATIVO", "MANUTENCAO", "DEFEITO")

SERVICE_TYPES: Final[Tuple[str, ...]] = ("PREVENTIVA", "CORRETIVA", "INSTALACAO", "LIMPEZA", "VISTORIA")
SERVICE_STATUSES: Final[Tuple[str, ...]] = ("AGENDADO", "EM_ANDAMENTO", "CONCLUIDO", "CANCELADO", "PENDENTE")
PRIORITIES: Final[Tuple[str, ...]] = ("URGENTE", "ALTA", "MEDIA", "BAIXA")
TECHNICIAN_STATUSES: Final[Tuple[str, ...]] = ("ATIVO", "INATIVO")

# ---- Agrupamentos de status/prioridade ----
STATUS_COMPLETED: Final[str] = "CONCLUIDO"
STATUS_CANCELED: Final[str] = "CANCELADO"
STATUS_SCHEDULED: Final[str] = "AGENDADO"
OPEN_STATUSES: Final[frozenset] = frozenset({"AGENDADO", "EM_ANDAMENTO", "PENDENTE"})
URGENT_PRIORITIES: Final[frozenset] = frozenset({"URGENTE", "ALTA"})
PROBLEM_MACHINE_STATUSES: Final[frozenset] = frozenset({"MANUTENCAO", "DEFEITO"})
PREVENTIVE_TYPE: Final[str] = "PREVENTIVA"

# ---- Rótulos padrão dos agrupamentos ----
DEFAULT_TYPE_LABEL: Final[str] = "OUTRO"
DEFAULT_STATUS_LABEL: Final[str] = "AGENDADO"
UNKNOWN_BRANCH_LABEL: Final[str] = "Não especificada"
UNKNOWN_TECHNICIAN_LABEL: Final[str] = "Desconhecido"
UNKNOWN_MACHINE_LABEL: Final[str] = "Desconhecida"
NOT_AVAILABLE_LABEL: Final[str] = "N/A"
DEFAULT_PRIORITY_LABEL: Final[str] = "MEDIA"

# ---- Relatórios ----
TOP_TECHNICIANS: Final[int] = 10
TOP_MACHINES: Final[int] = 5
TOP_ACTIVE_TECHNICIANS: Final[int] = 5
DISPLAY_ROW_LIMIT: Final[int] = 50

HIGH_COST_THRESHOLD: Final[Decimal] = Decimal("1000")
PREVENTIVE_INTERVAL_MONTHS: Final[int] = 6
DAYS_PER_MONTH: Final[int] = 30

MONEY_PLACES: Final[Decimal] = Decimal("0.01")
# custos com 15 dígitos inteiros ou mais são tratados como inválidos
MAX_COST: Final[Decimal] = Decimal("1e15")

# Abreviações usadas no rótulo dos meses ("jan/25")
MONTH_ABBREVIATIONS: Final[Tuple[str, ...]] = (
    "jan", "fev", "mar", "abr", "mai", "jun",
    "jul", "ago", "set", "out", "nov", "dez",
)

# ---- Histórico ----
HISTORY_CREATED: Final[str] = "Serviço criado"
HISTORY_STATUS_UPDATED: Final[str] = "Status atualizado"

# ---- Cliente ----
RECONCILE_DELAY_SECONDS: Final[float] = 0.5
CACHE_TTL_SECONDS: Final[float] = 30.0
