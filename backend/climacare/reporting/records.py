# climacare/reporting/records.py
"""
Registros simples consumidos pelo motor de relatórios.

O motor não conhece ORM nem cache: recebe listas destes registros, seja do
banco (``from_orm``) ou do JSON da API no cliente (``from_dict``). Datas e
custos ficam como vieram; a conversão tolerante acontece em ``parse_*``.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Union

from ..domain.constants import MAX_COST

RawTimestamp = Union[datetime, date, str, None]
RawCost = Union[Decimal, float, int, str, None]


def parse_timestamp(value: RawTimestamp) -> Optional[datetime]:
    """Converte para datetime ingênuo em UTC; valores inválidos viram None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, time.min)
    elif isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(s)
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def parse_cost(value: RawCost) -> Decimal:
    """Custo como Decimal; ausente, não numérico ou fora da faixa vale 0."""
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        d = value if isinstance(value, Decimal) else Decimal(str(value).strip().replace(",", "."))
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not d.is_finite() or abs(d) >= MAX_COST:
        return Decimal("0")
    return d


@dataclass(frozen=True)
class MachineRecord:
    id: str
    codigo: Optional[str] = None
    modelo: Optional[str] = None
    filial: Optional[str] = None
    localizacao: Optional[str] = None
    status: Optional[str] = None

    @property
    def label(self) -> str:
        return f"{self.codigo} - {self.modelo}"

    @classmethod
    def from_orm(cls, m: Any) -> "MachineRecord":
        return cls(
            id=m.id,
            codigo=m.codigo,
            modelo=m.modelo,
            filial=m.filial,
            localizacao=m.localizacao_descricao,
            status=m.status,
        )

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "MachineRecord":
        return cls(
            id=str(d.get("id")),
            codigo=d.get("codigo"),
            modelo=d.get("modelo"),
            filial=d.get("filial"),
            localizacao=d.get("localizacaoDescricao"),
            status=d.get("status"),
        )


@dataclass(frozen=True)
class TechnicianRecord:
    id: str
    nome: Optional[str] = None
    status: Optional[str] = None

    @classmethod
    def from_orm(cls, t: Any) -> "TechnicianRecord":
        return cls(id=t.id, nome=t.nome, status=t.status)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "TechnicianRecord":
        return cls(id=str(d.get("id")), nome=d.get("nome"), status=d.get("status"))


@dataclass(frozen=True)
class ServiceRecord:
    id: str
    maquina_id: Optional[str] = None
    tecnico_id: Optional[str] = None
    tecnico_nome: Optional[str] = None
    tipo_servico: Optional[str] = None
    descricao_servico: Optional[str] = None
    data_agendamento: RawTimestamp = None
    data_conclusao: RawTimestamp = None
    prioridade: Optional[str] = None
    status: Optional[str] = None
    custo: RawCost = None
    observacoes: Optional[str] = None

    @property
    def scheduled_at(self) -> Optional[datetime]:
        return parse_timestamp(self.data_agendamento)

    @property
    def completed_at(self) -> Optional[datetime]:
        return parse_timestamp(self.data_conclusao)

    @property
    def cost(self) -> Decimal:
        return parse_cost(self.custo)

    @classmethod
    def from_orm(cls, s: Any) -> "ServiceRecord":
        return cls(
            id=s.id,
            maquina_id=s.maquina_id,
            tecnico_id=s.tecnico_id,
            tecnico_nome=s.tecnico_nome,
            tipo_servico=s.tipo_servico,
            descricao_servico=s.descricao_servico,
            data_agendamento=s.data_agendamento,
            data_conclusao=s.data_conclusao,
            prioridade=s.prioridade,
            status=s.status,
            custo=s.custo,
            observacoes=s.observacoes,
        )

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "ServiceRecord":
        return cls(
            id=str(d.get("id")),
            maquina_id=d.get("maquinaId"),
            tecnico_id=d.get("tecnicoId"),
            tecnico_nome=d.get("tecnicoNome"),
            tipo_servico=d.get("tipoServico"),
            descricao_servico=d.get("descricaoServico"),
            data_agendamento=d.get("dataAgendamento"),
            data_conclusao=d.get("dataConclusao"),
            prioridade=d.get("prioridade"),
            status=d.get("status"),
            custo=d.get("custo"),
            observacoes=d.get("observacoes"),
        )
