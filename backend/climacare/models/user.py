from sqlalchemy import Column, String, DateTime, text
from ..core.db import Base
from ._ids import new_id

class User(Base):
    __tablename__ = "users"

    id            = Column(String(36), primary_key=True, default=new_id)
    username      = Column(String(50),  nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    # e-mail é opcional no cadastro; unicidade verificada na rota
    email         = Column(String(200))
    name          = Column(String(200))
    phone         = Column(String(50))
    role          = Column(String(20),  nullable=False, server_default=text("'technician'"))
    created_at    = Column(DateTime,    nullable=False, server_default=text("CURRENT_TIMESTAMP"))
    updated_at    = Column(DateTime,    nullable=False, server_default=text("CURRENT_TIMESTAMP"))
