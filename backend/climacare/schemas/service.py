# climacare/schemas/service.py
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional, Literal
from pydantic import Field

from .common import CamelModel, BlankToNone, MoneyIn

ServiceTypeLiteral = Literal["PREVENTIVA", "CORRETIVA", "INSTALACAO", "LIMPEZA", "VISTORIA"]
ServiceStatusLiteral = Literal["AGENDADO", "EM_ANDAMENTO", "CONCLUIDO", "CANCELADO", "PENDENTE"]
PriorityLiteral = Literal["URGENTE", "ALTA", "MEDIA", "BAIXA"]

Money = Annotated[Optional[Decimal], MoneyIn, Field(ge=0, max_digits=10, decimal_places=2)]
OptionalTimestamp = Annotated[Optional[datetime], BlankToNone]

class ServiceCreate(CamelModel):
    tipo_servico: ServiceTypeLiteral
    maquina_id: str = Field(min_length=1)
    tecnico_id: str = Field(min_length=1)
    descricao_servico: str = Field(min_length=1)
    descricao_problema: Optional[str] = None
    data_agendamento: OptionalTimestamp = None
    data_conclusao: OptionalTimestamp = None
    prioridade: PriorityLiteral = "MEDIA"
    status: ServiceStatusLiteral = "AGENDADO"
    custo: Money = None
    observacoes: Optional[str] = None

class ServiceUpdate(CamelModel):
    tipo_servico: Optional[ServiceTypeLiteral] = None
    maquina_id: Optional[str] = Field(default=None, min_length=1)
    tecnico_id: Optional[str] = Field(default=None, min_length=1)
    descricao_servico: Optional[str] = Field(default=None, min_length=1)
    descricao_problema: Optional[str] = None
    data_agendamento: OptionalTimestamp = None
    data_conclusao: OptionalTimestamp = None
    prioridade: Optional[PriorityLiteral] = None
    status: Optional[ServiceStatusLiteral] = None
    custo: Money = None
    observacoes: Optional[str] = None

class ServiceOut(CamelModel):
    id: str
    tipo_servico: str
    maquina_id: str
    tecnico_id: str
    tecnico_nome: str
    descricao_servico: str
    descricao_problema: Optional[str] = None
    data_agendamento: datetime
    data_conclusao: Optional[datetime] = None
    prioridade: str
    status: str
    custo: Optional[float] = None
    observacoes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class ServiceHistoryOut(CamelModel):
    id: int
    service_id: str
    status: str
    observacao: Optional[str] = None
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None
