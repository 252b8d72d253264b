import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session, sessionmaker

from config import settings
from models.errors import translate_db_error

"""
THE PURPOSE OF THIS FILE IS TO HOLD ONE PROCESS-WIDE ENGINE (CONNECTION POOL) FOR THE DATABASE.
IT IS CREATED LAZILY BY init_engine() (CALLED FROM THE APP LIFESPAN) AND TORN DOWN BY dispose_engine().
REPEATED init_engine() CALLS RETURN THE EXISTING ENGINE SO RELOADS NEVER OPEN A SECOND POOL.

ENDPOINTS GET A SESSION VIA 'def foo(db: Session = Depends(get_db))'. WRITES THAT MUST BE ATOMIC
SHOULD USE 'with transaction(db):' WHICH COMMITS / ROLLS BACK AND RAISES TYPED ERRORS FROM models.errors
"""

log = logging.getLogger(__name__)

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None
_lock = threading.Lock()


def _database_url() -> str:
    if settings.database_url:
        return settings.database_url

    USER = settings.db_user
    PASSWORD = settings.db_pass
    HOST = settings.db_host
    PORT = settings.db_port
    DBNAME = settings.db_name

    if not all([USER, PASSWORD, HOST, PORT, DBNAME]):
        raise RuntimeError("Missing DB configuration variables")

    # SSL required for Supabase
    return f"postgresql+psycopg2://{USER}:{PASSWORD}@{HOST}:{PORT}/{DBNAME}?sslmode=require"


def _configure_sqlite_connection(dbapi_connection, connection_record):
    # let SQLAlchemy emit BEGIN itself so SAVEPOINTs nest correctly
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _begin_sqlite_transaction(conn):
    conn.exec_driver_sql("BEGIN")


def init_engine(url: Optional[str] = None, **engine_kwargs) -> Engine:
    """Create the process-wide engine, or return it if it already exists."""
    global _engine, _session_factory

    with _lock:
        if _engine is not None:
            return _engine

        url = url or _database_url()
        if url.startswith("sqlite"):
            engine = create_engine(url, future=True, **engine_kwargs)
            event.listen(engine, "connect", _configure_sqlite_connection)
            event.listen(engine, "begin", _begin_sqlite_transaction)
        else:
            options = dict(
                pool_pre_ping=True,
                pool_size=3,
                max_overflow=3,
                pool_recycle=1800,
                pool_timeout=30,
                connect_args={
                    "connect_timeout": 10,
                    "keepalives": 1,
                    "keepalives_idle": 30,
                    "keepalives_interval": 10,
                    "keepalives_count": 5,
                },
            )
            options.update(engine_kwargs)
            engine = create_engine(url, future=True, **options)

        _engine = engine
        _session_factory = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
        log.info("Database engine initialised (%s)", engine.url.get_backend_name())
        return _engine


def get_engine() -> Engine:
    return _engine if _engine is not None else init_engine()


def get_sessionmaker() -> sessionmaker:
    if _session_factory is None:
        init_engine()
    return _session_factory


def dispose_engine() -> None:
    """Close every pooled connection and forget the engine."""
    global _engine, _session_factory

    with _lock:
        if _engine is None:
            return
        _engine.dispose()
        _engine = None
        _session_factory = None
        log.info("Database engine disposed")


# FastAPI dependency with safety rollback and close if it fails
def get_db() -> Iterator[Session]:
    db = get_sessionmaker()()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Run the block in one database transaction.

    Commits when the block exits cleanly, rolls back otherwise. If the session
    already has a transaction open (e.g. after a read), the block runs in a
    SAVEPOINT instead: it is rolled back alone on failure and committed with the
    outer transaction. Driver errors are re-raised as the matching
    ``PersistenceError`` subclass.
    """
    block = db.begin_nested() if db.in_transaction() else db.begin()
    try:
        with block:
            yield db
    except DBAPIError as e:
        raise translate_db_error(e) from e
