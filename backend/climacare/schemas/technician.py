# climacare/schemas/technician.py
from datetime import datetime
from typing import Annotated, Optional, Literal
from pydantic import EmailStr, Field

from .common import CamelModel, BlankToNone

TechnicianStatusLiteral = Literal["ATIVO", "INATIVO"]

class TechnicianCreate(CamelModel):
    nome: str = Field(min_length=1, max_length=200)
    especialidade: str = Field(min_length=1, max_length=200)
    telefone: str = Field(min_length=1, max_length=50)
    email: Annotated[Optional[EmailStr], BlankToNone] = None
    status: TechnicianStatusLiteral = "ATIVO"

class TechnicianUpdate(CamelModel):
    nome: Optional[str] = Field(default=None, min_length=1, max_length=200)
    especialidade: Optional[str] = Field(default=None, min_length=1, max_length=200)
    telefone: Optional[str] = Field(default=None, min_length=1, max_length=50)
    email: Annotated[Optional[EmailStr], BlankToNone] = None
    status: Optional[TechnicianStatusLiteral] = None

class TechnicianOut(CamelModel):
    id: str
    nome: str
    especialidade: str
    telefone: str
    email: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
