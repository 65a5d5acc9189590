from sqlalchemy import Column, String, DateTime, Text, DECIMAL, ForeignKey, CheckConstraint, text
from sqlalchemy.orm import relationship
from ..core.db import Base
from ._ids import new_id

class Service(Base):
    __tablename__ = "services"

    id                 = Column(String(36),  primary_key=True, default=new_id)
    tipo_servico       = Column(String(20),  nullable=False)
    maquina_id         = Column(String(36),  ForeignKey("machines.id", ondelete="CASCADE"), nullable=False, index=True)
    tecnico_id         = Column(String(36),  ForeignKey("technicians.id", ondelete="RESTRICT"), nullable=False, index=True)
    # Cópia do nome do técnico no momento da gravação do serviço;
    # só é renovada quando tecnico_id é gravado novamente.
    tecnico_nome       = Column(String(200), nullable=False)
    descricao_servico  = Column(Text,        nullable=False)
    descricao_problema = Column(Text)
    data_agendamento   = Column(DateTime,    nullable=False, index=True)
    data_conclusao     = Column(DateTime)
    prioridade         = Column(String(10),  nullable=False, server_default=text("'MEDIA'"))
    status             = Column(String(20),  nullable=False, server_default=text("'AGENDADO'"))
    custo              = Column(DECIMAL(10, 2))
    observacoes        = Column(Text)
    created_at         = Column(DateTime,    nullable=False, server_default=text("CURRENT_TIMESTAMP"))
    updated_at         = Column(DateTime,    nullable=False, server_default=text("CURRENT_TIMESTAMP"))

    __table_args__ = (
        CheckConstraint(
            "tipo_servico in ('PREVENTIVA','CORRETIVA','INSTALACAO','LIMPEZA','VISTORIA')",
            name="CK_Service_Tipo",
        ),
        CheckConstraint("prioridade in ('URGENTE','ALTA','MEDIA','BAIXA')", name="CK_Service_Prioridade"),
        CheckConstraint(
            "status in ('AGENDADO','EM_ANDAMENTO','CONCLUIDO','CANCELADO','PENDENTE')",
            name="CK_Service_Status",
        ),
    )

    machine    = relationship("Machine",    back_populates="services")
    technician = relationship("Technician", back_populates="services")
    history    = relationship(
        "ServiceHistory",
        back_populates="service",
        cascade="all, delete-orphan",
        order_by="ServiceHistory.id.desc()",
    )
