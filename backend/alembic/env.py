# backend/alembic/env.py
from logging.config import fileConfig

from alembic import context

# engine/metadata da aplicação; importar os modelos preenche o metadata
from climacare.core.db import Base, engine
from climacare import models  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# SQLite não altera tabelas no lugar: recria em lote
_options = dict(
    target_metadata=target_metadata,
    compare_type=True,
    render_as_batch=engine.dialect.name == "sqlite",
)


def run_migrations_offline():
    """Gera o SQL sem conectar (alembic upgrade --sql)."""
    context.configure(url=engine.url.render_as_string(hide_password=False), literal_binds=True, **_options)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    with engine.connect() as connection:
        context.configure(connection=connection, **_options)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
