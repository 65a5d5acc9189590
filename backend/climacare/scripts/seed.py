# climacare/scripts/seed.py
"""Dados de demonstração (idempotente): python -m climacare.scripts.seed"""
import logging
from contextlib import contextmanager
from datetime import date, datetime, timedelta
from decimal import Decimal

from sqlalchemy import select

from climacare.core.db import Base, SessionLocal, engine
from climacare.core.security import hash_password
from climacare.domain.constants import HISTORY_CREATED
from climacare.models import Machine, Service, ServiceHistory, Technician, User

logger = logging.getLogger(__name__)


# ---------- pequenos auxiliares ----------

@contextmanager
def session_scope():
    """Abre/fecha uma sessão (rollback em caso de erro)."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

def get_one(db, model, **by):
    return db.execute(select(model).filter_by(**by)).scalars().first()

def get_or_create(db, model, unique_by: dict, defaults: dict | None = None):
    """Busca por unique_by; cria se não existir (quem chama faz o commit)."""
    inst = get_one(db, model, **unique_by)
    if inst:
        return inst, False
    inst = model(**{**unique_by, **(defaults or {})})
    db.add(inst)
    return inst, True


# ---------- dados ----------

USERS = [
    {"username": "admin", "email": "admin@climacare.com.br", "name": "Administrador", "role": "admin"},
]

MACHINES = [
    {"codigo": "AC-001", "modelo": "Split Hi-Wall 12000", "marca": "Springer", "tipo": "SPLIT",
     "capacidade_btu": 12000, "voltagem": "V220", "localizacao_tipo": "SALA_REUNIAO",
     "localizacao_descricao": "Sala de reunião 1", "localizacao_andar": 1, "filial": "Matriz"},
    {"codigo": "AC-002", "modelo": "Inverter 9000", "marca": "LG", "tipo": "INVERTER",
     "capacidade_btu": 9000, "voltagem": "V220", "localizacao_tipo": "ESCRITORIO",
     "localizacao_descricao": "Financeiro", "localizacao_andar": 2, "filial": "Matriz"},
    {"codigo": "AC-003", "modelo": "Cassete 36000", "marca": "Daikin", "tipo": "CASSETE",
     "capacidade_btu": 36000, "voltagem": "V220", "localizacao_tipo": "SALA",
     "localizacao_descricao": "Recepção", "localizacao_andar": 0, "filial": "Filial Centro",
     "status": "MANUTENCAO"},
]

TECHNICIANS = [
    {"nome": "João Silva", "especialidade": "Refrigeração", "telefone": "(11) 98888-0001"},
    {"nome": "Maria Souza", "especialidade": "Elétrica", "telefone": "(11) 98888-0002"},
]

# (código da máquina, técnico, tipo, status, prioridade, dias atrás, custo, descrição)
SERVICES = [
    ("AC-001", "João Silva", "PREVENTIVA", "CONCLUIDO", "MEDIA", 240, "350.00", "Limpeza de filtros e serpentina"),
    ("AC-001", "Maria Souza", "CORRETIVA", "CONCLUIDO", "ALTA", 90, "850.00", "Troca do capacitor"),
    ("AC-002", "João Silva", "LIMPEZA", "CONCLUIDO", "BAIXA", 20, "120.00", "Higienização completa"),
    ("AC-003", "Maria Souza", "CORRETIVA", "EM_ANDAMENTO", "URGENTE", 2, None, "Compressor não parte"),
    ("AC-002", "Maria Souza", "VISTORIA", "AGENDADO", "MEDIA", -5, None, "Vistoria semestral"),
]


def run():
    Base.metadata.create_all(bind=engine)

    with session_scope() as db:
        logger.info("seeding users / machines / technicians")
        for u in USERS:
            get_or_create(db, User, {"username": u["username"]},
                          defaults={**u, "password_hash": hash_password("admin123")})
        for m in MACHINES:
            get_or_create(db, Machine, {"codigo": m["codigo"]},
                          defaults={"data_instalacao": date.today() - timedelta(days=365), **m})
        for t in TECHNICIANS:
            get_or_create(db, Technician, {"nome": t["nome"]}, defaults=t)

    with session_scope() as db:
        logger.info("seeding services")
        now = datetime.utcnow().replace(microsecond=0)
        for codigo, tecnico, tipo, status_s, prioridade, days_ago, custo, descricao in SERVICES:
            machine = get_one(db, Machine, codigo=codigo)
            tech = get_one(db, Technician, nome=tecnico)
            if not machine or not tech:
                continue
            if get_one(db, Service, maquina_id=machine.id, descricao_servico=descricao):
                continue
            scheduled = now - timedelta(days=days_ago)
            s = Service(
                tipo_servico=tipo,
                maquina_id=machine.id,
                tecnico_id=tech.id,
                tecnico_nome=tech.nome,
                descricao_servico=descricao,
                data_agendamento=scheduled,
                data_conclusao=scheduled + timedelta(hours=3) if status_s == "CONCLUIDO" else None,
                prioridade=prioridade,
                status=status_s,
                custo=Decimal(custo) if custo else None,
            )
            db.add(s)
            db.flush()
            db.add(ServiceHistory(service_id=s.id, status=s.status, observacao=HISTORY_CREATED))

    logger.info("seed done")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run()
