# db/database.py
import logging

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import sessionmaker, scoped_session
from sqlalchemy.pool import StaticPool
from config.config import Config

logger = logging.getLogger(__name__)

engine = None

# Session (bound in init_engine)
SessionLocal = scoped_session(
    sessionmaker(autocommit=False, autoflush=False)
)


def init_engine(database_url: str = Config.DATABASE_URL):
    """(Re)create the engine and bind the scoped session to it."""
    global engine

    engine_args = {}
    if database_url.startswith("sqlite"):
        engine_args["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url.rstrip("/") == "sqlite:":
            engine_args["poolclass"] = StaticPool

    if engine is not None:
        SessionLocal.remove()
        engine.dispose()

    engine = create_engine(database_url, echo=False, **engine_args)
    SessionLocal.configure(bind=engine)
    return engine


def get_engine():
    if engine is None:
        init_engine()
    return engine


def init_db():
    """Create all tables if not exist (basic version)."""
    from models import student, user, user_session  # noqa: F401  register models
    from models.base import Base
    Base.metadata.create_all(bind=get_engine())


# -------------------------------------------------------------
#           SAFE AUTO-MIGRATION (CREATE / PATCH)
# -------------------------------------------------------------
def auto_migrate():
    """
    Auto-creates missing tables AND auto-adds missing columns.
    Does NOT delete data. Safe for local & lightweight usage.
    """
    from models import student, user, user_session  # noqa: F401  register models
    from models.base import Base

    eng = get_engine()

    # 1) Ensure tables exist
    Base.metadata.create_all(bind=eng)

    inspector = inspect(eng)

    # 2) Add missing columns inside a transaction (engine.begin ensures commit)
    with eng.begin() as conn:
        for table in Base.metadata.sorted_tables:
            existing_cols = {col["name"] for col in inspector.get_columns(table.name)}
            for column in table.columns:
                if column.name in existing_cols:
                    continue
                col_type = column.type.compile(dialect=eng.dialect)
                logger.info("[AUTO-MIGRATE] Adding missing column: %s.%s", table.name, column.name)
                conn.execute(text(f"ALTER TABLE {table.name} ADD COLUMN {column.name} {col_type}"))

    logger.info("[AUTO-MIGRATE] Schema verified/updated.")
