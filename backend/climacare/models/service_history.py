from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, text
from sqlalchemy.orm import relationship
from ..core.db import Base

class ServiceHistory(Base):
    """Trilha de auditoria: só recebe inserções."""
    __tablename__ = "service_history"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    service_id = Column(String(36), ForeignKey("services.id", ondelete="CASCADE"), nullable=False, index=True)
    status     = Column(String(20), nullable=False)
    observacao = Column(Text)
    created_at = Column(DateTime,   nullable=False, server_default=text("CURRENT_TIMESTAMP"))
    created_by = Column(String(36), ForeignKey("users.id"))

    service = relationship("Service", back_populates="history")
