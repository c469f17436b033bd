from __future__ import annotations

import os
from functools import lru_cache

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from creditledger.settings import get_settings

_URL_ENV = "CREDITLEDGER_DATABASE_URL"


def _configured_url() -> str:
    return os.getenv(_URL_ENV, "").strip()


def get_database_url() -> str:
    """URL du store SQL ; sans variable d'env, un fichier SQLite dans data/."""
    url = _configured_url()
    if url:
        return url
    return f"sqlite:///{get_settings().sqlite_path.as_posix()}"


def sql_mode_enabled() -> bool:
    """Le ledger n'utilise le store SQL que si l'URL est fournie explicitement."""
    return bool(_configured_url())


@lru_cache
def get_engine() -> Engine:
    url = get_database_url()
    is_sqlite = url.startswith("sqlite")

    # les routes FastAPI sync tournent dans un threadpool
    connect_args = {"check_same_thread": False} if is_sqlite else {}
    engine = create_engine(url, future=True, connect_args=connect_args)

    if is_sqlite:
        # sinon ON DELETE CASCADE sur credit_payments est ignoré
        @event.listens_for(engine, "connect")
        def _sqlite_fk_on(dbapi_conn, _record) -> None:
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON")
            cur.close()

    return engine


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, future=True)


def new_session() -> Session:
    return get_session_factory()()


def init_db() -> None:
    """Crée les tables credits / credit_payments si absentes (hors alembic)."""
    from creditledger.db_base import Base
    from creditledger.repositories import sql_credit_repository  # noqa: F401  (enregistre les tables)

    Base.metadata.create_all(get_engine())


def reset_db_caches() -> None:
    """Oublie engine / sessionmaker (changement d'URL, tests)."""
    if get_engine.cache_info().currsize:
        get_engine().dispose()
    get_session_factory.cache_clear()
    get_engine.cache_clear()
