"""initial schema: users, technicians, machines, services, service_history

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-17 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

NOW = sa.text("CURRENT_TIMESTAMP")


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("username", sa.String(50), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("email", sa.String(200)),
        sa.Column("name", sa.String(200)),
        sa.Column("phone", sa.String(50)),
        sa.Column("role", sa.String(20), nullable=False, server_default=sa.text("'technician'")),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=NOW),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=NOW),
    )

    op.create_table(
        "technicians",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("nome", sa.String(200), nullable=False),
        sa.Column("especialidade", sa.String(200), nullable=False),
        sa.Column("telefone", sa.String(50), nullable=False),
        sa.Column("email", sa.String(200)),
        sa.Column("status", sa.String(10), nullable=False, server_default=sa.text("'ATIVO'")),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=NOW),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=NOW),
        sa.CheckConstraint("status in ('ATIVO','INATIVO')", name="CK_Technician_Status"),
    )

    op.create_table(
        "machines",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("codigo", sa.String(50), nullable=False, unique=True),
        sa.Column("modelo", sa.String(200), nullable=False),
        sa.Column("marca", sa.String(200), nullable=False),
        sa.Column("tipo", sa.String(20), nullable=False),
        sa.Column("capacidade_btu", sa.Integer, nullable=False),
        sa.Column("voltagem", sa.String(10), nullable=False),
        sa.Column("localizacao_tipo", sa.String(20), nullable=False),
        sa.Column("localizacao_descricao", sa.String(500), nullable=False, server_default=sa.text("''")),
        sa.Column("localizacao_andar", sa.Integer),
        sa.Column("filial", sa.String(200), nullable=False),
        sa.Column("data_instalacao", sa.Date, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'ATIVO'")),
        sa.Column("observacoes", sa.Text),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=NOW),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=NOW),
        sa.CheckConstraint("tipo in ('SPLIT','WINDOW','CASSETE','PISO_TETO','PORTATIL','INVERTER')", name="CK_Machine_Tipo"),
        sa.CheckConstraint("voltagem in ('V110','V220','BIVOLT')", name="CK_Machine_Voltagem"),
        sa.CheckConstraint(
            "localizacao_tipo in ('SALA','QUARTO','ESCRITORIO','SALA_REUNIAO','OUTRO')",
            name="CK_Machine_LocalizacaoTipo",
        ),
        sa.CheckConstraint("status in ('ATIVO','INATIVO','MANUTENCAO','DEFEITO')", name="CK_Machine_Status"),
        sa.CheckConstraint("capacidade_btu > 0", name="CK_Machine_Capacidade_Positive"),
    )

    op.create_table(
        "services",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("tipo_servico", sa.String(20), nullable=False),
        sa.Column("maquina_id", sa.String(36), sa.ForeignKey("machines.id", ondelete="CASCADE"), nullable=False),
        sa.Column("tecnico_id", sa.String(36), sa.ForeignKey("technicians.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("tecnico_nome", sa.String(200), nullable=False),
        sa.Column("descricao_servico", sa.Text, nullable=False),
        sa.Column("descricao_problema", sa.Text),
        sa.Column("data_agendamento", sa.DateTime, nullable=False),
        sa.Column("data_conclusao", sa.DateTime),
        sa.Column("prioridade", sa.String(10), nullable=False, server_default=sa.text("'MEDIA'")),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'AGENDADO'")),
        sa.Column("custo", sa.DECIMAL(10, 2)),
        sa.Column("observacoes", sa.Text),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=NOW),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=NOW),
        sa.CheckConstraint(
            "tipo_servico in ('PREVENTIVA','CORRETIVA','INSTALACAO','LIMPEZA','VISTORIA')",
            name="CK_Service_Tipo",
        ),
        sa.CheckConstraint("prioridade in ('URGENTE','ALTA','MEDIA','BAIXA')", name="CK_Service_Prioridade"),
        sa.CheckConstraint(
            "status in ('AGENDADO','EM_ANDAMENTO','CONCLUIDO','CANCELADO','PENDENTE')",
            name="CK_Service_Status",
        ),
    )
    op.create_index("ix_services_maquina_id", "services", ["maquina_id"], unique=False)
    op.create_index("ix_services_tecnico_id", "services", ["tecnico_id"], unique=False)
    op.create_index("ix_services_data_agendamento", "services", ["data_agendamento"], unique=False)

    op.create_table(
        "service_history",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("service_id", sa.String(36), sa.ForeignKey("services.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("observacao", sa.Text),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=NOW),
        sa.Column("created_by", sa.String(36), sa.ForeignKey("users.id")),
    )
    op.create_index("ix_service_history_service_id", "service_history", ["service_id"], unique=False)


def downgrade():
    op.drop_index("ix_service_history_service_id", table_name="service_history")
    op.drop_table("service_history")
    op.drop_index("ix_services_data_agendamento", table_name="services")
    op.drop_index("ix_services_tecnico_id", table_name="services")
    op.drop_index("ix_services_maquina_id", table_name="services")
    op.drop_table("services")
    op.drop_table("machines")
    op.drop_table("technicians")
    op.drop_table("users")
