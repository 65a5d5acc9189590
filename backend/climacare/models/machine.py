from sqlalchemy import Column, Integer, String, Date, DateTime, Text, CheckConstraint, text
from sqlalchemy.orm import relationship
from ..core.db import Base
from ._ids import new_id

class Machine(Base):
    __tablename__ = "machines"

    id                    = Column(String(36),  primary_key=True, default=new_id)
    codigo                = Column(String(50),  nullable=False, unique=True)
    modelo                = Column(String(200), nullable=False)
    marca                 = Column(String(200), nullable=False)
    tipo                  = Column(String(20),  nullable=False)
    capacidade_btu        = Column(Integer,     nullable=False)
    voltagem              = Column(String(10),  nullable=False)
    localizacao_tipo      = Column(String(20),  nullable=False)
    localizacao_descricao = Column(String(500), nullable=False, server_default=text("''"))
    localizacao_andar     = Column(Integer)
    filial                = Column(String(200), nullable=False)
    data_instalacao       = Column(Date,        nullable=False)
    status                = Column(String(20),  nullable=False, server_default=text("'ATIVO'"))
    observacoes           = Column(Text)
    created_at            = Column(DateTime,    nullable=False, server_default=text("CURRENT_TIMESTAMP"))
    updated_at            = Column(DateTime,    nullable=False, server_default=text("CURRENT_TIMESTAMP"))

    __table_args__ = (
        CheckConstraint("tipo in ('SPLIT','WINDOW','CASSETE','PISO_TETO','PORTATIL','INVERTER')", name="CK_Machine_Tipo"),
        CheckConstraint("voltagem in ('V110','V220','BIVOLT')", name="CK_Machine_Voltagem"),
        CheckConstraint(
            "localizacao_tipo in ('SALA','QUARTO','ESCRITORIO','SALA_REUNIAO','OUTRO')",
            name="CK_Machine_LocalizacaoTipo",
        ),
        CheckConstraint("status in ('ATIVO','INATIVO','MANUTENCAO','DEFEITO')", name="CK_Machine_Status"),
        CheckConstraint("capacidade_btu > 0", name="CK_Machine_Capacidade_Positive"),
    )

    # 1 máquina -> N serviços (exclusão em cascata)
    services = relationship(
        "Service",
        back_populates="machine",
        cascade="all, delete-orphan",
    )
