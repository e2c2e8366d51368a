# app/db/session.py
import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.errors import PersistenceFailure

logger = logging.getLogger(__name__)

# execution options read by the SQLite "begin" listener
SQLITE_BEGIN_MODE = "sqlite_begin_mode"
SQLITE_BUSY_TIMEOUT_MS = "sqlite_busy_timeout_ms"


def build_engine(url: str, tx_timeout_seconds: int = settings.DB_TX_TIMEOUT_SECONDS) -> Engine:
    is_sqlite = url.startswith("sqlite")
    in_memory = is_sqlite and ":memory:" in url
    kwargs: dict = {"future": True, "pool_pre_ping": True}
    if is_sqlite:
        # busy timeout bounds how long a writer waits for the database lock
        kwargs["connect_args"] = {"check_same_thread": False, "timeout": tx_timeout_seconds}
    if in_memory:
        # one shared connection, otherwise every checkout sees an empty database
        kwargs["poolclass"] = StaticPool

    eng = create_engine(url, **kwargs)

    if is_sqlite:
        @event.listens_for(eng, "connect")
        def _set_sqlite_pragmas(dbapi_connection, connection_record):
            # pysqlite only emits BEGIN before DML; turn that off and issue
            # BEGIN ourselves so SELECTs run inside the transaction too
            dbapi_connection.isolation_level = None
            cur = dbapi_connection.cursor()
            try:
                if not in_memory:
                    cur.execute("PRAGMA journal_mode=WAL;")
                    cur.execute("PRAGMA synchronous=NORMAL;")
                cur.execute("PRAGMA foreign_keys=ON;")
            finally:
                cur.close()

        @event.listens_for(eng, "begin")
        def _sqlite_begin(conn):
            opts = conn.get_execution_options()
            busy_ms = opts.get(SQLITE_BUSY_TIMEOUT_MS)
            if busy_ms is not None:
                conn.exec_driver_sql(f"PRAGMA busy_timeout = {int(busy_ms)}")
            mode = opts.get(SQLITE_BEGIN_MODE)
            conn.exec_driver_sql(f"BEGIN {mode}" if mode else "BEGIN")

    return eng


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(
    bind=engine,
    future=True,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a request-scoped Session.
    The session is handed explicitly to the survey operations, which open
    their own transaction on it.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def serializable_transaction(
    db: Session,
    timeout_seconds: int | None = None,
    public_message: str | None = None,
) -> Generator[Session, None, None]:
    """Run the enclosed block as one SERIALIZABLE transaction on ``db``.

    On SQLite the transaction starts with BEGIN IMMEDIATE, so the write lock
    is held from the first read to the commit and concurrent writers queue
    (up to the timeout) instead of interleaving. Elsewhere the isolation
    level is SERIALIZABLE with a statement timeout.

    Commits when the block exits normally. Any SQLAlchemy error (conflict,
    lock/statement timeout, lost connection, constraint violation) rolls the
    whole transaction back and is re-raised as PersistenceFailure.
    """
    timeout = settings.DB_TX_TIMEOUT_SECONDS if timeout_seconds is None else timeout_seconds
    if db.get_bind().dialect.name == "sqlite":
        options = {SQLITE_BEGIN_MODE: "IMMEDIATE", SQLITE_BUSY_TIMEOUT_MS: int(timeout * 1000)}
    else:
        options = {"isolation_level": "SERIALIZABLE"}
    try:
        with db.begin():
            conn = db.connection(execution_options=options)
            if conn.dialect.name == "postgresql":
                conn.execute(text(f"SET LOCAL statement_timeout = {int(timeout * 1000)}"))
            yield db
    except SQLAlchemyError as exc:
        logger.error("transaction rolled back: %s", exc.__class__.__name__, exc_info=True)
        raise PersistenceFailure(str(exc), public_message=public_message) from exc
