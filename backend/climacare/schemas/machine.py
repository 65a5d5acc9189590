# climacare/schemas/machine.py
from datetime import date, datetime
from typing import Annotated, Optional, Literal
from pydantic import Field, field_validator

from .common import CamelModel, BlankToNone, DateOnly

MachineTypeLiteral = Literal["SPLIT", "WINDOW", "CASSETE", "PISO_TETO", "PORTATIL", "INVERTER"]
VoltageLiteral = Literal["V110", "V220", "BIVOLT"]
LocationTypeLiteral = Literal["SALA", "QUARTO", "ESCRITORIO", "SALA_REUNIAO", "OUTRO"]
MachineStatusLiteral = Literal["ATIVO", "INATIVO", "MANUTENCAO", "DEFEITO"]

class MachineCreate(CamelModel):
    codigo: str = Field(min_length=1, max_length=50)
    modelo: str = Field(min_length=1, max_length=200)
    marca: str = Field(min_length=1, max_length=200)
    tipo: MachineTypeLiteral = "SPLIT"
    capacidade_btu: int = Field(default=9000, gt=0, alias="capacidadeBTU")
    voltagem: VoltageLiteral = "V220"
    localizacao_tipo: LocationTypeLiteral = "SALA"
    localizacao_descricao: str = ""
    localizacao_andar: Optional[int] = None
    filial: str = Field(default="Matriz", min_length=1, max_length=200)
    data_instalacao: Annotated[date, DateOnly] = Field(default_factory=date.today)
    status: MachineStatusLiteral = "ATIVO"
    observacoes: Annotated[Optional[str], BlankToNone] = None

    @field_validator("codigo", "modelo", "marca", "filial")
    @classmethod
    def _strip(cls, v: str) -> str:
        return v.strip()

class MachineUpdate(CamelModel):
    codigo: Optional[str] = Field(default=None, min_length=1, max_length=50)
    modelo: Optional[str] = Field(default=None, min_length=1, max_length=200)
    marca: Optional[str] = Field(default=None, min_length=1, max_length=200)
    tipo: Optional[MachineTypeLiteral] = None
    capacidade_btu: Optional[int] = Field(default=None, gt=0, alias="capacidadeBTU")
    voltagem: Optional[VoltageLiteral] = None
    localizacao_tipo: Optional[LocationTypeLiteral] = None
    localizacao_descricao: Optional[str] = None
    localizacao_andar: Optional[int] = None
    filial: Optional[str] = Field(default=None, min_length=1, max_length=200)
    data_instalacao: Annotated[Optional[date], DateOnly] = None
    status: Optional[MachineStatusLiteral] = None
    observacoes: Annotated[Optional[str], BlankToNone] = None

class MachineOut(CamelModel):
    id: str
    codigo: str
    modelo: str
    marca: str
    tipo: str
    capacidade_btu: int = Field(alias="capacidadeBTU")
    voltagem: str
    localizacao_tipo: str
    localizacao_descricao: Optional[str] = None
    localizacao_andar: Optional[int] = None
    filial: str
    data_instalacao: date
    status: str
    observacoes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
