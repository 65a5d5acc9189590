from sqlalchemy import Column, String, DateTime, CheckConstraint, text
from sqlalchemy.orm import relationship
from ..core.db import Base
from ._ids import new_id

class Technician(Base):
    __tablename__ = "technicians"

    id            = Column(String(36),  primary_key=True, default=new_id)
    nome          = Column(String(200), nullable=False)
    especialidade = Column(String(200), nullable=False)
    telefone      = Column(String(50),  nullable=False)
    email         = Column(String(200))
    status        = Column(String(10),  nullable=False, server_default=text("'ATIVO'"))
    created_at    = Column(DateTime,    nullable=False, server_default=text("CURRENT_TIMESTAMP"))
    updated_at    = Column(DateTime,    nullable=False, server_default=text("CURRENT_TIMESTAMP"))

    __table_args__ = (
        CheckConstraint("status in ('ATIVO','INATIVO')", name="CK_Technician_Status"),
    )

    # Exclusão bloqueada enquanto houver serviços (ver technician_service)
    services = relationship("Service", back_populates="technician")
