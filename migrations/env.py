import os
import sys
from logging.config import fileConfig

from sqlalchemy import create_engine, pool

from alembic import context

# lancé via `alembic upgrade head` depuis la racine : creditledger doit être importable
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from creditledger.db_base import Base  # noqa: E402
from creditledger.repositories.sql_credit_repository import CreditRow, PaymentRow  # noqa: E402,F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    url = os.getenv("CREDITLEDGER_DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("CREDITLEDGER_DATABASE_URL is required to migrate the credits store.")
    return url


def run_migrations_offline() -> None:
    """Génère le SQL des tables credits / credit_payments sans connexion."""
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    url = _database_url()
    connectable = create_engine(url, poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            # SQLite ne sait pas faire ALTER COLUMN
            render_as_batch=url.startswith("sqlite"),
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
